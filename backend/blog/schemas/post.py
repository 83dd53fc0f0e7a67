"""
文章相关 Schema
"""
from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class PostCreate(BaseModel):
    """创建文章请求（author 为用户名）"""
    title: str = Field(..., min_length=1, max_length=200)
    author: str = Field(..., min_length=1)
    contents: Optional[str] = None
    tags: List[str] = []


class PostUpdate(BaseModel):
    """更新文章请求：整体替换，四个字段都必须提供"""
    title: str = Field(..., min_length=1, max_length=200)
    author: str = Field(..., min_length=1)
    contents: str
    tags: List[str]


class PostRead(BaseModel):
    """文章（author 已解析为用户名）"""
    id: str
    title: str
    author: Optional[str] = None
    contents: Optional[str] = None
    tags: List[str] = []
    created_at: datetime
    updated_at: datetime
