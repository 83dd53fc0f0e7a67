"""
博客后端 - FastAPI 入口

启动分两步：先校验配置（缺少 JWT_SECRET 直接失败），再按这份配置创建引擎、注册路由。
配置挂在 app.state.settings 上，token 签发/校验、密码哈希、数据库都只读这一份。
"""
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from blog import __version__
from blog.config import Settings, settings
from blog.database import create_engine, create_session_factory, init_db
from blog.errors import AuthError, BlogError
from blog.logging_config import setup_logging
from blog.routers import users, posts

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """应用生命周期管理"""
    await init_db(app.state.engine)
    yield
    await app.state.engine.dispose()


async def blog_error_handler(request: Request, exc: BlogError):
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, AuthError) else None
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message}, headers=headers)


async def request_validation_handler(request: Request, exc: RequestValidationError):
    """请求体/查询参数校验失败 -> 400"""
    messages = []
    for error in exc.errors():
        if error["type"] == "json_invalid":
            messages.append("Request body is not valid JSON")
            continue
        # loc 形如 ("body", "title")；只拼接字段名，跳过数字下标
        field = ".".join(loc for loc in error["loc"][1:] if isinstance(loc, str))
        messages.append(f"{field}: {error['msg']}" if field else error["msg"])
    return JSONResponse(status_code=400, content={"error": "; ".join(messages)})


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal Server Error"})


def create_app(config: Settings = settings) -> FastAPI:
    """
    创建应用

    Raises:
        ConfigurationError: 配置不完整（如缺少 JWT_SECRET），此时不会创建引擎或任何路由
    """
    setup_logging(config.log_level, config.log_file)
    config.validate_for_startup()
    logger.info("Loaded configuration for environment: %s", config.app_env)

    app = FastAPI(
        title="Blog API",
        description="用户认证 + 文章 CRUD",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = config
    app.state.engine = create_engine(config)
    app.state.session_factory = create_session_factory(app.state.engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(BlogError, blog_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    # 注册路由
    app.include_router(users.router, prefix="/api/v1/user", tags=["用户"])
    app.include_router(posts.router, prefix="/api/v1/posts", tags=["文章"])
    app.include_router(posts.protected_router, prefix="/api/v1/posts", tags=["文章"])

    @app.get("/health")
    async def health():
        """健康检查"""
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "blog.main:app",
        host=settings.backend_host,
        port=settings.port,
        reload=settings.debug,
    )
