"""测试数据构造工具"""

from typing import Any

__all__ = [
    "ONE_BYTE_PNG_B64",
    "make_claude_request",
    "make_image_block",
    "make_model_listing",
    "make_weather_tool",
]

# "A" 的base64编码，解码后1字节
ONE_BYTE_PNG_B64 = "QQ=="


def make_image_block(
    data: str = ONE_BYTE_PNG_B64, media_type: str | None = "image/png", **source: Any
) -> dict[str, Any]:
    """构造Claude image内容块"""
    block_source = {"type": "base64", "data": data, **source}
    if media_type is not None:
        block_source["media_type"] = media_type
    return {"type": "image", "source": block_source}


def make_weather_tool() -> dict[str, Any]:
    """带有多种需要清理的Schema关键字的工具定义"""
    return {
        "name": "get_weather",
        "description": "Get weather information",
        "input_schema": {
            "$schema": "http://json-schema.org/draft-07/schema#",
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "location": {"type": "string", "minLength": 1},
                "unit": {
                    "anyOf": [
                        {"type": "string", "enum": ["celsius"]},
                        {"type": "string", "enum": ["fahrenheit"]},
                    ]
                },
                "days": {"type": ["integer", "null"], "default": 1, "maximum": 7},
            },
            "required": ["location"],
        },
    }


def make_claude_request(**overrides: Any) -> dict[str, Any]:
    """构造最小可用的Claude messages请求"""
    request = {
        "model": "claude-sonnet-4-20250514",
        "max_tokens": 1024,
        "messages": [{"role": "user", "content": "What's the weather in Paris?"}],
    }
    request.update(overrides)
    return request


def make_model_listing() -> dict[str, Any]:
    """fetchAvailableModels 风格的模型映射"""
    return {
        "models/Gemini-2.5-Pro": {
            "quotaInfo": {
                "remainingFraction": 0.76,
                "resetTime": "2025-01-01T00:00:00Z",
            }
        },
        "gemini-2.5-flash": {"quotaInfo": {"remainingFraction": 1}},
        "claude-sonnet-4-5": {"model": "claude-sonnet-4-5-thinking"},
        "chat_20706": {},
    }
