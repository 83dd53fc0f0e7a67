"""
业务异常

服务层抛出，统一在请求边界（main.py 的异常处理器）映射为 {"error": message}。
"""
from typing import Optional


class BlogError(Exception):
    """业务异常基类"""
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BlogError):
    """
    字段缺失或格式错误

    kind:
        required   - 必填字段缺失
        invalid    - 值格式不合法（如 id 格式、排序字段）
        constraint - 存储层约束冲突
    """
    status_code = 400

    def __init__(self, message: str, field: Optional[str] = None, kind: str = "invalid"):
        super().__init__(message)
        self.field = field
        self.kind = kind


class AuthError(BlogError):
    """凭证错误或 token 缺失/无效/过期"""
    status_code = 401


class NotFoundError(BlogError):
    status_code = 404


class ConflictError(BlogError):
    """用户名重复"""
    status_code = 400


class ConfigurationError(Exception):
    """启动期配置错误（不可恢复，不映射为 HTTP 响应）"""
