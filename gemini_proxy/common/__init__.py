"""
通用工具模块

提供项目中共享的日志配置与请求ID追踪功能。

使用示例:
    from gemini_proxy.common import configure_logging, get_logger_with_request_id

    configure_logging(config.logging)
    bound_logger = get_logger_with_request_id("req_123")
"""

from .logging import (
    REQUEST_ID_HEADER,
    configure_logging,
    generate_request_id,
    get_logger_with_request_id,
    get_request_id_from_request,
)

__all__ = [
    "REQUEST_ID_HEADER",
    "configure_logging",
    "generate_request_id",
    "get_logger_with_request_id",
    "get_request_id_from_request",
]
