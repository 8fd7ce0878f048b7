"""
转换器模块

提供Claude请求到Gemini请求的转换，包括工具参数Schema清理与tool_result内联图片拆分。
"""

from .content_converter import (
    ToolResultContent,
    estimate_base64_bytes,
    image_block_to_part,
    sanitize_tool_result_content,
)
from .request_converter import ClaudeToGeminiConverter, validate_claude_request
from .schema_converter import (
    clean_json_schema,
    merge_enum_any_of,
    uppercase_schema_types,
)

__all__ = [
    "ClaudeToGeminiConverter",
    "validate_claude_request",
    "clean_json_schema",
    "merge_enum_any_of",
    "uppercase_schema_types",
    "ToolResultContent",
    "estimate_base64_bytes",
    "image_block_to_part",
    "sanitize_tool_result_content",
]
