"""
数据库连接与会话管理

引擎与会话工厂由 create_app 按传入的配置创建，挂在 app.state 上。
"""
import logging
import os
from fastapi import Request
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base

from blog.config import Settings

logger = logging.getLogger(__name__)

# 声明基类
Base = declarative_base()


def create_engine(config: Settings) -> AsyncEngine:
    """创建异步引擎（SQLite 时确保数据目录存在）"""
    if config.database_url.startswith("sqlite+aiosqlite:///"):
        db_dir = os.path.dirname(config.database_url.replace("sqlite+aiosqlite:///", ""))
        if db_dir:
            os.makedirs(db_dir, exist_ok=True)

    return create_async_engine(
        config.database_url,
        echo=config.debug,
        future=True,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """创建异步会话工厂"""
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def get_db(request: Request) -> AsyncSession:
    """获取数据库会话（依赖注入用）"""
    async with request.app.state.session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


async def init_db(engine: AsyncEngine):
    """初始化数据库（创建所有表）"""
    # 必须先导入所有模型，确保它们都已注册到 Base.metadata
    from blog import models  # noqa: F401
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database initialized: %s", engine.url.render_as_string(hide_password=True))
