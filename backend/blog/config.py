"""
配置管理 - 从环境变量与 .env 文件加载所有配置

加载顺序：.env -> .env.<APP_ENV>（覆盖前者）-> 真实环境变量（最高优先级）
"""
import os
from pydantic_settings import BaseSettings
from typing import List, Optional

from blog.errors import ConfigurationError


APP_ENV = os.getenv("APP_ENV", "development")


class Settings(BaseSettings):
    """应用配置"""

    app_env: str = APP_ENV

    # ===== 数据库 =====
    database_url: str = "sqlite+aiosqlite:///./data/blog.db"

    # ===== JWT =====
    # 无默认值：缺失时 create_app 直接拒绝启动
    jwt_secret: Optional[str] = None
    jwt_algorithm: str = "HS256"
    jwt_expire_hours: int = 24

    # ===== 密码 =====
    bcrypt_rounds: int = 10

    # ===== 服务配置 =====
    backend_host: str = "0.0.0.0"
    port: int = 8080
    debug: bool = False
    cors_origins: List[str] = ["*"]

    # ===== 日志 =====
    log_level: str = "INFO"
    log_file: Optional[str] = None

    class Config:
        env_file = (".env", f".env.{APP_ENV}")
        env_file_encoding = "utf-8"
        extra = "ignore"

    def validate_for_startup(self) -> None:
        """启动前校验：签名密钥必须存在"""
        if not self.jwt_secret or not self.jwt_secret.strip():
            raise ConfigurationError("JWT_SECRET environment variable is required")


# 全局配置实例
settings = Settings()
