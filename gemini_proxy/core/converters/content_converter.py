"""
工具结果内容转换器

Claude 的 tool_result 可以包含 base64 内联图片。Gemini 的 functionResponse
只接受 JSON，因此把图片拆成独立的 inlineData 片段，JSON 里只保留占位文本。
"""

import json
from typing import Any

from pydantic import BaseModel, Field

from gemini_proxy.models.anthropic import AnthropicContentTypes
from gemini_proxy.models.gemini import GeminiInlineData, GeminiPart

DEFAULT_IMAGE_MIME_TYPE = "image/png"

BLOCK_TEXT = "text"
BLOCK_IMAGE = "image"
BLOCK_OTHER = "other"


class ToolResultContent(BaseModel):
    """tool_result 内容的转换结果"""

    content_text: str = Field(description="纯文本形式的结果（图片以占位符表示）")
    sanitized_content: Any = Field(
        None, description="替换掉图片数据后的内容；未提取图片时为原始输入本身"
    )
    inline_parts: list[GeminiPart] = Field(
        default_factory=list, description="按出现顺序提取的内联图片片段"
    )


def estimate_base64_bytes(b64: Any) -> int:
    """根据base64字符串长度估算解码后的字节数（不实际解码）"""
    s = str(b64 or "").strip()
    if not s:
        return 0
    padding = 0
    if s.endswith("=="):
        padding = 2
    elif s.endswith("="):
        padding = 1
    return max(0, (len(s) * 3) // 4 - padding)


def _to_text(value: Any) -> str:
    if isinstance(value, str):
        return value
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)


def classify_block(block: Any) -> str:
    """判断内容块类型：text / image / other

    image 只有在 source 中带有非空的 base64 data 时才算数，
    其余任何形状都归为 other，以便原样透传。
    """
    if not isinstance(block, dict):
        return BLOCK_OTHER
    block_type = block.get("type")
    if block_type == AnthropicContentTypes.TEXT:
        return BLOCK_TEXT
    if block_type == AnthropicContentTypes.IMAGE:
        source = block.get("source")
        if isinstance(source, dict):
            data = source.get("data")
            if isinstance(data, str) and data:
                return BLOCK_IMAGE
    return BLOCK_OTHER


def _image_mime_type(source: dict[str, Any]) -> str:
    mime_type = (
        source.get("media_type") or source.get("mediaType") or DEFAULT_IMAGE_MIME_TYPE
    )
    # 客户端可能传入数字等非字符串值
    return mime_type if isinstance(mime_type, str) else str(mime_type)


def image_block_to_part(block: Any) -> GeminiPart | None:
    """将 Claude image 内容块转换为 Gemini inlineData 片段

    Returns:
        GeminiPart，或在内容块不含可用图片数据时返回 None
    """
    if classify_block(block) != BLOCK_IMAGE:
        return None
    source = block["source"]
    return GeminiPart(
        inline_data=GeminiInlineData(
            mime_type=_image_mime_type(source), data=source["data"]
        )
    )


def sanitize_tool_result_content(raw_content: Any) -> ToolResultContent:
    """拆分 tool_result 内容中的内联图片

    Args:
        raw_content: tool_result 的 content，字符串或内容块列表

    Returns:
        ToolResultContent
    """
    if not isinstance(raw_content, (list, tuple)):
        return ToolResultContent(
            content_text="" if raw_content is None else _to_text(raw_content),
            sanitized_content=raw_content,
        )

    inline_parts: list[GeminiPart] = []
    sanitized: list[Any] = []
    text_segments: list[str] = []

    for block in raw_content:
        kind = classify_block(block)

        if kind == BLOCK_TEXT:
            text = block.get("text")
            if isinstance(text, str) and text:
                text_segments.append(text)
            sanitized.append(block)
            continue

        if kind == BLOCK_IMAGE:
            part = image_block_to_part(block)
            inline_parts.append(part)
            mime_type = part.inline_data.mime_type
            bytes_len = estimate_base64_bytes(part.inline_data.data)
            placeholder = (
                f"[inline image omitted from JSON ({mime_type}, ~{bytes_len} bytes)]"
            )
            text_segments.append(placeholder)
            sanitized.append(
                {**block, "source": {**block["source"], "data": placeholder}}
            )
            continue

        # 未识别的内容块：保留结构，文本中给出简短提示
        text_segments.append(_to_text(block))
        sanitized.append(block)

    return ToolResultContent(
        content_text="\n".join(text_segments),
        sanitized_content=sanitized if inline_parts else raw_content,
        inline_parts=inline_parts,
    )
