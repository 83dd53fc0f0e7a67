"""
请求/响应 Schema
"""
from blog.schemas.user import SignupRequest, LoginRequest, UserRead, LoginResponse, CurrentUser
from blog.schemas.post import PostCreate, PostUpdate, PostRead

__all__ = [
    "SignupRequest",
    "LoginRequest",
    "UserRead",
    "LoginResponse",
    "CurrentUser",
    "PostCreate",
    "PostUpdate",
    "PostRead",
]
