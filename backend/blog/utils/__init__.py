"""
工具函数
"""
from blog.utils.auth import (
    hash_password,
    verify_password,
    create_access_token,
    decode_access_token,
    create_user_token,
)

__all__ = [
    "hash_password",
    "verify_password",
    "create_access_token",
    "decode_access_token",
    "create_user_token",
]
