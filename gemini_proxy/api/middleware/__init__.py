"""
中间件模块

提供FastAPI应用的中间件实现。

主要功能:
- API密钥认证中间件
- 请求计时与请求ID追踪

使用示例:
    from gemini_proxy.api.middleware import setup_middlewares

    setup_middlewares(app)
"""

from .auth import APIKeyMiddleware
from .timing import RequestTimingMiddleware, setup_middlewares

__all__ = [
    "APIKeyMiddleware",
    "RequestTimingMiddleware",
    "setup_middlewares",
]
