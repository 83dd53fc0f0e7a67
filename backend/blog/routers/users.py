"""
用户路由：注册、登录、按用户名查询
"""
from fastapi import APIRouter, Depends, status

from blog.dependencies import get_credential_service
from blog.errors import AuthError, NotFoundError
from blog.schemas.user import SignupRequest, LoginRequest, UserRead, LoginResponse
from blog.services.users import CredentialService

router = APIRouter()


@router.post("/signup", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def signup(
    req: SignupRequest,
    service: CredentialService = Depends(get_credential_service),
):
    """用户注册"""
    user = await service.create_user(req.username, req.email, req.password)
    return UserRead.model_validate(user)


@router.post("/login", response_model=LoginResponse)
async def login(
    req: LoginRequest,
    service: CredentialService = Depends(get_credential_service),
):
    """用户登录"""
    result = await service.login(req.username, req.password)
    if not result.ok:
        raise AuthError(result.message)

    return LoginResponse(user=UserRead.model_validate(result.user), token=result.token)


@router.get("/{username}", response_model=UserRead)
async def get_user(
    username: str,
    service: CredentialService = Depends(get_credential_service),
):
    """按用户名查询用户（不含密码哈希）"""
    user = await service.find_by_username(username)
    if not user:
        raise NotFoundError("User not found")
    return UserRead.model_validate(user)
