"""API密钥认证中间件"""

import secrets
from collections.abc import Callable

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from gemini_proxy.common.logging import (
    get_logger_with_request_id,
    get_request_id_from_request,
)
from gemini_proxy.models.errors import get_error_response

# 无需认证的路径
PUBLIC_PATHS = frozenset({"/", "/health", "/docs", "/openapi.json"})


def extract_api_key(request: Request) -> str | None:
    """从 x-api-key 或 Authorization: Bearer 请求头中读取API密钥"""
    api_key = request.headers.get("x-api-key")
    if api_key:
        return api_key

    authorization = request.headers.get("authorization", "")
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() == "bearer" and token:
        return token.strip()
    return None


class APIKeyMiddleware(BaseHTTPMiddleware):
    """校验客户端API密钥，未配置密钥时放行所有请求"""

    def __init__(self, app: ASGIApp, api_key: str | None = None) -> None:
        super().__init__(app)
        self.api_key = api_key

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if not self.api_key or request.url.path in PUBLIC_PATHS:
            return await call_next(request)

        provided = extract_api_key(request)
        if provided and secrets.compare_digest(provided, self.api_key):
            return await call_next(request)

        bound_logger = get_logger_with_request_id(get_request_id_from_request(request))
        bound_logger.warning(f"API密钥校验失败: {request.url.path}")

        error_response = await get_error_response(401)
        return JSONResponse(status_code=401, content=error_response.model_dump())
