"""请求处理器

负责 Claude -> Gemini 请求转换以及上游模型列表的接收与查询。
不直接访问上游网络，上游调用由外部组件负责。
"""

import json
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from gemini_proxy.common.logging import (
    get_logger_with_request_id,
    get_request_id_from_request,
)
from gemini_proxy.config.settings import Config
from gemini_proxy.core.converters import (
    ClaudeToGeminiConverter,
    validate_claude_request,
)
from gemini_proxy.core.model_cache import UpstreamModelCache
from gemini_proxy.core.quota import summarize_quota
from gemini_proxy.models.anthropic import AnthropicRequest
from gemini_proxy.models.errors import get_error_response

router = APIRouter(prefix="/v1", tags=["translation"])


class TranslationHandler:
    """持有配置与模型缓存的请求处理器"""

    def __init__(self, config: Config, model_cache: UpstreamModelCache):
        self.config = config
        self.model_cache = model_cache

    @classmethod
    async def create(
        cls, config: Config, model_cache: UpstreamModelCache | None = None
    ) -> "TranslationHandler":
        return cls(config, model_cache or UpstreamModelCache())

    def translate(
        self, anthropic_request: AnthropicRequest, request_id: str | None = None
    ) -> dict[str, Any]:
        """转换请求并返回可直接发送给上游的请求体

        Raises:
            ValueError: 请求内容不合法
        """
        validate_claude_request(anthropic_request, request_id)
        target_model, gemini_request = ClaudeToGeminiConverter.convert_claude_to_gemini(
            anthropic_request, self.model_cache, self.config, request_id
        )
        return {
            "model": target_model,
            "request": gemini_request.model_dump(by_alias=True, exclude_none=True),
        }

    def ingest_model_listing(self, models: Any, request_id: str | None = None) -> dict:
        """记录上游返回的模型列表"""
        self.model_cache.update_from_listing(models)
        get_logger_with_request_id(request_id).info(
            f"已接收上游模型列表，当前已知模型数: {self.model_cache.count()}"
        )
        return self.model_status()

    def model_status(self) -> dict[str, Any]:
        return {
            "count": self.model_cache.count(),
            "last_updated_at": self.model_cache.last_updated_at(),
        }


async def get_translation_handler(request: Request) -> TranslationHandler:
    """获取应用状态中的处理器，未初始化时按当前配置创建"""
    state = request.app.state
    handler = getattr(state, "translation_handler", None)
    if handler is None:
        model_cache = getattr(state, "model_cache", None)
        if model_cache is None:
            model_cache = state.model_cache = UpstreamModelCache()
        handler = await TranslationHandler.create(Config.from_file_sync(), model_cache)
        state.translation_handler = handler
    return handler


async def _read_json_body(request: Request) -> Any:
    body = await request.body()
    if not body:
        return None
    return json.loads(body)


async def _bad_request(message: str) -> JSONResponse:
    error_response = await get_error_response(400, message=message)
    return JSONResponse(status_code=400, content=error_response.model_dump())


@router.post("/messages/translate")
async def translate_endpoint(
    anthropic_request: AnthropicRequest,
    request: Request,
    handler: TranslationHandler = Depends(get_translation_handler),
):
    """将Claude messages请求转换为Gemini请求体"""
    request_id = get_request_id_from_request(request)
    try:
        return handler.translate(anthropic_request, request_id)
    except ValueError as e:
        get_logger_with_request_id(request_id).warning(f"请求验证失败: {e}")
        return await _bad_request(str(e))


@router.post("/models/listing")
async def model_listing_endpoint(
    request: Request,
    handler: TranslationHandler = Depends(get_translation_handler),
):
    """接收上游模型列表（列表或 {模型ID: 描述} 映射）"""
    try:
        models = await _read_json_body(request)
    except json.JSONDecodeError:
        return await _bad_request("请求体不是合法的JSON")
    return handler.ingest_model_listing(models, get_request_id_from_request(request))


@router.get("/models")
async def list_models_endpoint(
    handler: TranslationHandler = Depends(get_translation_handler),
):
    """列出已知的上游模型ID"""
    return {
        "models": handler.model_cache.known_models(),
        **handler.model_status(),
    }


@router.post("/models/quota")
async def model_quota_endpoint(request: Request):
    """汇总上游模型列表中的配额信息"""
    try:
        models = await _read_json_body(request)
    except json.JSONDecodeError:
        return await _bad_request("请求体不是合法的JSON")
    return {"quota": [row.model_dump() for row in summarize_quota(models)]}
