"""
数据模型
"""
from blog.models.user import User
from blog.models.post import Post, PostTag

__all__ = [
    "User",
    "Post",
    "PostTag",
]
