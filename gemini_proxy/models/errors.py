"""标准化错误响应模型"""

from typing import Any

from pydantic import BaseModel, Field


class ErrorDetail(BaseModel):
    """错误详细信息"""

    code: str = Field(description="错误代码")
    message: str = Field(description="错误消息")
    type: str | None = Field(None, description="错误类型")
    param: str | None = Field(None, description="相关参数名称")
    details: dict[str, Any] | None = Field(None, description="额外错误详情")
    request_id: str | None = Field(None, description="请求ID用于追踪")


class StandardErrorResponse(BaseModel):
    """标准化错误响应模型"""

    type: str = Field("error", description="响应类型")
    error: ErrorDetail = Field(description="错误详情")


class ErrorKind(BaseModel):
    """某一HTTP状态码对应的默认错误代码、消息和类型"""

    code: str
    message: str
    type: str


# 错误代码映射表
ERROR_CODE_MAPPING: dict[int, ErrorKind] = {
    400: ErrorKind(
        code="bad_request", message="请求格式错误或参数无效", type="invalid_request_error"
    ),
    401: ErrorKind(
        code="unauthorized",
        message="无效的API密钥或未经授权的访问",
        type="authentication_error",
    ),
    404: ErrorKind(code="not_found", message="请求的资源不存在", type="not_found_error"),
    422: ErrorKind(
        code="validation_error", message="请求参数验证失败", type="invalid_request_error"
    ),
    429: ErrorKind(
        code="rate_limit_exceeded",
        message="请求频率超出限制，请稍后重试",
        type="rate_limit_error",
    ),
    500: ErrorKind(
        code="internal_server_error",
        message="服务器内部错误，请稍后重试",
        type="server_error",
    ),
    502: ErrorKind(
        code="external_service_error",
        message="外部服务错误，请稍后重试",
        type="api_error",
    ),
    503: ErrorKind(
        code="service_unavailable",
        message="服务暂时不可用，请稍后重试",
        type="server_error",
    ),
    504: ErrorKind(code="timeout", message="请求超时，请稍后重试", type="timeout_error"),
}

# details 中可以直接提升为 ErrorDetail 字段的键
_PROMOTED_KEYS = ("param", "type", "request_id")


async def get_error_response(
    status_code: int,
    message: str | None = None,
    details: dict[str, Any] | None = None,
) -> StandardErrorResponse:
    """根据HTTP状态码获取对应的错误响应模型"""
    kind = ERROR_CODE_MAPPING.get(status_code, ERROR_CODE_MAPPING[500])

    error_detail_data: dict[str, Any] = {
        "code": kind.code,
        "message": message or kind.message,
        "type": kind.type,
    }

    if details:
        for key in _PROMOTED_KEYS:
            if key in details:
                error_detail_data[key] = details[key]
        other_details = {k: v for k, v in details.items() if k not in _PROMOTED_KEYS}
        if other_details:
            error_detail_data["details"] = other_details

    return StandardErrorResponse(error=ErrorDetail(**error_detail_data))
