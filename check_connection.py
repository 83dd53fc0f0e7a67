"""
全链路联通自检：对一个已启动的后端依次走 注册 -> 登录 -> 发文 -> 读取 -> 按标签查询 -> 删除

用法:
    python check_connection.py [base_url]    # 默认 http://127.0.0.1:8080
"""
import asyncio
import os
import sys
import time

import httpx


async def check_full_link(base_url: str):
    print("=== 开始全链路联通自检 ===")
    api = f"{base_url}/api/v1"

    # 1. 检查后端健康
    print(f"\n1. 检查后端健康 ({base_url}/health)...")
    try:
        async with httpx.AsyncClient() as client:
            resp = await client.get(f"{base_url}/health")
            if resp.status_code == 200:
                print("   [OK] 后端存活")
            else:
                print(f"   [FAIL] 后端返回 {resp.status_code}: {resp.text}")
                return
    except httpx.HTTPError as e:
        print(f"   [FAIL] 无法连接后端: {e}")
        print("   建议：请确保已在 backend 目录下运行 'uvicorn blog.main:app --port 8080'，且设置了 JWT_SECRET")
        return

    # 2. 注册 + 登录
    print("\n2. 模拟用户注册与登录...")
    username = f"link_test_{int(time.time())}"
    password = "password123"
    async with httpx.AsyncClient() as client:
        resp = await client.post(f"{api}/user/signup", json={
            "username": username,
            "email": f"{username}@example.com",
            "password": password,
        })
        if resp.status_code != 201:
            print(f"   [FAIL] 注册失败 {resp.status_code}: {resp.text}")
            return

        resp = await client.post(f"{api}/user/login", json={"username": username, "password": password})
        if resp.status_code != 200:
            print(f"   [FAIL] 登录失败 {resp.status_code}: {resp.text}")
            return
        token = resp.json()["token"]
        print(f"   [OK] 登录成功, UserID: {resp.json()['user']['id']}")

    headers = {"Authorization": f"Bearer {token}"}

    # 3. 未带 token 发文应被拒绝
    print("\n3. 检查受保护路由...")
    async with httpx.AsyncClient() as client:
        resp = await client.post(f"{api}/posts", json={"title": "无 token", "author": username})
        if resp.status_code == 401:
            print("   [OK] 未认证请求被拒绝")
        else:
            print(f"   [WARN] 未认证请求返回 {resp.status_code}")

    # 4. 发文 + 读取
    print("\n4. 创建并读取测试文章...")
    tag = f"linktest-{int(time.time())}"
    async with httpx.AsyncClient() as client:
        resp = await client.post(f"{api}/posts", json={
            "title": "联通测试文章",
            "author": username,
            "contents": "这是一篇自检文章",
            "tags": [tag],
        }, headers=headers)
        if resp.status_code != 201:
            print(f"   [FAIL] 文章创建失败 {resp.status_code}: {resp.text}")
            return
        post_id = resp.json()["id"]
        print(f"   [OK] 文章创建成功, PostID: {post_id}")

        resp = await client.get(f"{api}/posts/{post_id}")
        if resp.status_code == 200 and resp.json()["author"] == username:
            print("   [OK] 读取成功，作者已解析为用户名")
        else:
            print(f"   [FAIL] 读取失败 {resp.status_code}: {resp.text}")

        # 5. 按标签查询
        print("\n5. 按标签查询...")
        resp = await client.get(f"{api}/posts", params={"tag": tag})
        ids = [p["id"] for p in resp.json()] if resp.status_code == 200 else []
        if post_id in ids:
            print("   [OK] 标签查询命中")
        else:
            print(f"   [FAIL] 标签查询未命中 {resp.status_code}: {resp.text}")

        # 6. 删除
        print("\n6. 删除测试文章...")
        resp = await client.delete(f"{api}/posts/{post_id}", headers=headers)
        if resp.status_code == 204:
            print("   [OK] 删除成功")
        else:
            print(f"   [FAIL] 删除失败 {resp.status_code}: {resp.text}")

    print("\n=== 自检完成 ===")


if __name__ == "__main__":
    base = sys.argv[1] if len(sys.argv) > 1 else os.getenv("BLOG_BASE_URL", "http://127.0.0.1:8080")
    try:
        asyncio.run(check_full_link(base.rstrip("/")))
    except KeyboardInterrupt:
        pass
