"""
博客后端：用户认证 + 文章 CRUD
"""
__version__ = "1.0.0"
