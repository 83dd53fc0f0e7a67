"""
认证工具函数：密码哈希 + JWT 签发/校验

所有函数都显式接收 Settings（即 create_app 校验过、挂在 app.state.settings 上的那份配置）。
"""
from functools import lru_cache
from passlib.context import CryptContext
from jose import jwt, JWTError
from datetime import datetime, timedelta
from typing import Optional, Dict, Any

from blog.config import Settings


@lru_cache(maxsize=None)
def _pwd_context(rounds: int) -> CryptContext:
    """按 cost factor 缓存的密码哈希上下文（bcrypt）"""
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def hash_password(password: str, config: Settings) -> str:
    """哈希密码（单向、加盐）"""
    return _pwd_context(config.bcrypt_rounds).hash(password)


def verify_password(plain_password: str, hashed_password: str, config: Settings) -> bool:
    """验证密码（常数时间比较）"""
    return _pwd_context(config.bcrypt_rounds).verify(plain_password, hashed_password)


def create_access_token(
    data: Dict[str, Any],
    config: Settings,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    创建 JWT Access Token

    Args:
        data: payload（至少包含 sub）
        config: 提供签名密钥、算法与默认有效期
        expires_delta: 自定义过期时间，默认 jwt_expire_hours
    """
    expire = datetime.utcnow() + (expires_delta or timedelta(hours=config.jwt_expire_hours))
    to_encode = {**data, "exp": expire, "iat": datetime.utcnow()}
    return jwt.encode(to_encode, config.jwt_secret, algorithm=config.jwt_algorithm)


def decode_access_token(token: str, config: Settings) -> Optional[Dict[str, Any]]:
    """解码 JWT Token，返回 payload（签名错误/过期/格式错误均返回 None）"""
    try:
        return jwt.decode(
            token,
            config.jwt_secret,
            algorithms=[config.jwt_algorithm]
        )
    except JWTError:
        return None


def create_user_token(user_id: str, username: str, config: Settings) -> str:
    """为用户签发 token：{sub: id, username}"""
    return create_access_token({"sub": user_id, "username": username}, config)
