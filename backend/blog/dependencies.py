"""
路由依赖：应用配置、数据库会话上的服务实例、Bearer token 校验
"""
import logging
from typing import Callable, Optional

from fastapi import Depends, Request, Response
from fastapi.routing import APIRoute
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from fastapi.security.utils import get_authorization_scheme_param
from sqlalchemy.ext.asyncio import AsyncSession

from blog.config import Settings
from blog.database import get_db
from blog.errors import AuthError
from blog.schemas.user import CurrentUser
from blog.services.posts import PostService
from blog.services.users import CredentialService
from blog.utils.auth import decode_access_token

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    """create_app 校验过的配置"""
    return request.app.state.settings


def get_credential_service(
    db: AsyncSession = Depends(get_db),
    config: Settings = Depends(get_settings),
) -> CredentialService:
    return CredentialService(db, config)


def get_post_service(db: AsyncSession = Depends(get_db)) -> PostService:
    return PostService(db)


def authenticate(request: Request, token: Optional[str]) -> CurrentUser:
    """
    校验 token 并把当前用户缓存到 request.state.user

    无 token、签名错误或已过期均抛 AuthError（401）。token 不做服务端吊销，过期是唯一失效方式。
    """
    cached = getattr(request.state, "user", None)
    if cached is not None:
        return cached

    if not token:
        raise AuthError("No authorization token was found")

    payload = decode_access_token(token, get_settings(request))
    if not payload or not payload.get("sub"):
        logger.debug("Rejected bearer token")
        raise AuthError("Invalid or expired token")

    request.state.user = CurrentUser(id=payload["sub"], username=payload.get("username", ""))
    return request.state.user


class BearerAuthRoute(APIRoute):
    """
    写接口用的路由类：在解析请求体之前校验 Bearer token

    这样没有 token 的请求无论 body 是什么都返回 401。
    """

    def get_route_handler(self) -> Callable:
        handler = super().get_route_handler()

        async def authenticated_handler(request: Request) -> Response:
            scheme, token = get_authorization_scheme_param(request.headers.get("Authorization"))
            authenticate(request, token if scheme.lower() == "bearer" else None)
            return await handler(request)

        return authenticated_handler


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> CurrentUser:
    """当前用户（BearerAuthRoute 已校验时直接取缓存）"""
    return authenticate(request, credentials.credentials if credentials else None)
