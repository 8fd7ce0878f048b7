"""
API模块

提供FastAPI应用的路由、处理器和中间件。

子模块:
- handlers: 请求转换与模型列表处理器
- routes: 健康检查路由
- middleware: 中间件实现
"""

from .handlers import TranslationHandler, get_translation_handler
from .handlers import router as handlers_router
from .middleware import (
    APIKeyMiddleware,
    RequestTimingMiddleware,
    setup_middlewares,
)
from .routes import health_check
from .routes import router as routes_router

__all__ = [
    # 路由
    "routes_router",
    "handlers_router",
    "health_check",
    # 处理器
    "TranslationHandler",
    "get_translation_handler",
    # 中间件
    "APIKeyMiddleware",
    "RequestTimingMiddleware",
    "setup_middlewares",
]
