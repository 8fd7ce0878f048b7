"""健康检查路由"""

import time

from fastapi import APIRouter, Request

from gemini_proxy.core.model_cache import UpstreamModelCache

SERVICE_NAME = "claude-to-gemini"

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(request: Request):
    """健康检查

    上游模型列表从未更新过时状态为 degraded，服务本身仍可用于请求转换。
    """
    model_cache: UpstreamModelCache | None = getattr(
        request.app.state, "model_cache", None
    )
    known_models = model_cache.count() if model_cache else 0
    last_updated_at = model_cache.last_updated_at() if model_cache else 0.0

    return {
        "status": "healthy" if last_updated_at else "degraded",
        "service": SERVICE_NAME,
        "timestamp": time.time(),
        "checks": {
            "model_cache": {
                "known_models": known_models,
                "last_updated_at": last_updated_at,
            }
        },
    }
