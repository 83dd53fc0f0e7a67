"""
服务层
"""
from blog.services.users import CredentialService, LoginResult
from blog.services.posts import PostService

__all__ = [
    "CredentialService",
    "LoginResult",
    "PostService",
]
