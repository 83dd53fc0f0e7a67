"""
用户与认证相关 Schema
"""
from pydantic import BaseModel, Field
from datetime import datetime
from typing import Optional


class SignupRequest(BaseModel):
    """注册请求"""
    username: str = Field(..., min_length=1, max_length=50)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1, max_length=72)


class LoginRequest(BaseModel):
    """登录请求（不限长度：超长用户名也应得到统一的 401）"""
    username: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserRead(BaseModel):
    """对外用户信息（不含密码哈希）"""
    id: str
    username: str
    email: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class LoginResponse(BaseModel):
    """登录响应"""
    user: UserRead
    token: str


class CurrentUser(BaseModel):
    """token 中解析出的当前用户"""
    id: str
    username: str
