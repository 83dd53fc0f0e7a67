"""
文章路由

读接口公开；写接口需要 Bearer token。请求中的 author 是用户名，这里解析成用户 id 再交给服务层。
"""
import uuid
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status

from blog.dependencies import BearerAuthRoute, get_credential_service, get_current_user, get_post_service
from blog.errors import NotFoundError, ValidationError
from blog.schemas.post import PostCreate, PostUpdate, PostRead
from blog.schemas.user import CurrentUser
from blog.services.posts import PostService
from blog.services.users import CredentialService

router = APIRouter()
# 写接口：token 在解析请求体之前校验
protected_router = APIRouter(route_class=BearerAuthRoute)


def _check_post_id(post_id: str) -> str:
    try:
        uuid.UUID(post_id)
    except ValueError:
        raise ValidationError("Invalid post ID format", field="id")
    return post_id


async def _resolve_author(users: CredentialService, username: str) -> str:
    author_id = await users.find_user_id(username)
    if not author_id:
        raise ValidationError("Author does not exist", field="author")
    return author_id


@router.get("", response_model=List[PostRead])
async def list_posts(
    author: Optional[str] = None,
    tag: Optional[str] = None,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    posts: PostService = Depends(get_post_service),
    users: CredentialService = Depends(get_credential_service),
):
    """列出文章：author 与 tag 二选一"""
    if author and tag:
        raise ValidationError("Please specify either author or tag, not both.")

    if author:
        author_id = await users.find_user_id(author)
        if not author_id:
            return []
        return await posts.list_posts_by_author(author_id, sort_by, sort_order)
    if tag:
        return await posts.list_posts_by_tag(tag, sort_by, sort_order)
    return await posts.list_all_posts(sort_by, sort_order)


@router.get("/{post_id}", response_model=PostRead)
async def get_post(
    post_id: str,
    posts: PostService = Depends(get_post_service),
):
    """获取单篇文章"""
    post = await posts.get_post_by_id(_check_post_id(post_id))
    if not post:
        raise NotFoundError("Post not found")
    return post


@protected_router.post("", response_model=PostRead, status_code=status.HTTP_201_CREATED)
async def create_post(
    req: PostCreate,
    user: CurrentUser = Depends(get_current_user),
    posts: PostService = Depends(get_post_service),
    users: CredentialService = Depends(get_credential_service),
):
    """创建文章"""
    author_id = await _resolve_author(users, req.author)
    return await posts.create_post(req.title, author_id, req.contents, req.tags)


@protected_router.patch("/{post_id}", response_model=PostRead)
async def update_post(
    post_id: str,
    req: PostUpdate,
    user: CurrentUser = Depends(get_current_user),
    posts: PostService = Depends(get_post_service),
    users: CredentialService = Depends(get_credential_service),
):
    """更新文章（整体替换）"""
    post_id = _check_post_id(post_id)
    author_id = await _resolve_author(users, req.author)
    post = await posts.update_post(post_id, req.title, author_id, req.contents, req.tags)
    if not post:
        raise NotFoundError("Post not found")
    return post


@protected_router.delete("/{post_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_post(
    post_id: str,
    user: CurrentUser = Depends(get_current_user),
    posts: PostService = Depends(get_post_service),
):
    """删除文章"""
    deleted = await posts.delete_post(_check_post_id(post_id))
    if deleted == 0:
        raise NotFoundError("Post not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
