"""
用户凭证服务：注册、查询、登录（签发 token）、删除
"""
import asyncio
import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from blog.config import Settings
from blog.errors import ConflictError, ValidationError
from blog.models.user import User
from blog.utils.auth import hash_password, verify_password, create_user_token

logger = logging.getLogger(__name__)

# 用户不存在与密码错误返回同一条消息，避免泄露用户名是否存在
INVALID_CREDENTIALS = "Invalid username or password"


@dataclass
class LoginResult:
    """登录结果"""
    ok: bool
    user: Optional[User] = None
    token: Optional[str] = None
    message: Optional[str] = None


class CredentialService:
    """用户凭证服务（绑定一个数据库会话与应用配置）"""

    def __init__(self, db: AsyncSession, config: Settings):
        self.db = db
        self.config = config

    async def create_user(self, username: str, email: str, password: str) -> User:
        """
        创建用户

        用户名唯一性由 users.username 唯一索引保证，插入冲突时抛 ConflictError。
        """
        for field, value in (("username", username), ("email", email), ("password", password)):
            if not value:
                raise ValidationError(f"{field} is required", field=field, kind="required")

        # bcrypt 是同步的 CPU 密集操作，在异步环境中使用 run_in_executor
        loop = asyncio.get_running_loop()
        password_hash = await loop.run_in_executor(
            None,
            lambda: hash_password(password, self.config)
        )
        user = User(
            username=username,
            email=email,
            password_hash=password_hash,
        )
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError(f"Username '{username}' already exists")
        await self.db.refresh(user)

        logger.info("Created user %s (%s)", user.username, user.id)
        return user

    async def find_by_username(self, username: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.username == username))
        return result.scalar_one_or_none()

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(select(User).where(User.email == email).limit(1))
        return result.scalar_one_or_none()

    async def find_user_id(self, username: str) -> Optional[str]:
        """用户名 -> 用户 id（文章作者解析用）"""
        result = await self.db.execute(select(User.id).where(User.username == username))
        return result.scalar_one_or_none()

    async def login(self, username: str, password: str) -> LoginResult:
        """校验凭证，成功时签发 token"""
        user = await self.find_by_username(username)
        valid = user is not None and await asyncio.get_running_loop().run_in_executor(
            None,
            lambda: verify_password(password, user.password_hash, self.config)
        )
        if not valid:
            logger.info("Failed login for username %s", username[:50])
            return LoginResult(ok=False, message=INVALID_CREDENTIALS)

        token = create_user_token(user.id, user.username, self.config)
        return LoginResult(ok=True, user=user, token=token)

    async def delete_user(self, username: str) -> int:
        """
        删除用户，返回删除条数（0 或 1）

        启用外键约束的数据库上，仍有文章引用该用户时抛 ConflictError；
        SQLite 默认不检查外键，此时文章保留，读取时 author 为 None。
        """
        user = await self.find_by_username(username)
        if not user:
            return 0
        await self.db.delete(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise ConflictError(f"User '{username}' still has posts")
        logger.info("Deleted user %s", username)
        return 1
