"""
API 路由
"""
from blog.routers import users, posts

__all__ = [
    "users",
    "posts",
]
