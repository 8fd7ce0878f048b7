"""Anthropic API 请求数据模型定义"""

from typing import Any, Literal, Optional

from pydantic import BaseModel, Field


class AnthropicContentTypes:
    """Anthropic内容类型常量"""

    TEXT = "text"
    IMAGE = "image"
    TOOL_USE = "tool_use"
    TOOL_RESULT = "tool_result"
    THINKING = "thinking"
    REDACTED_THINKING = "redacted_thinking"


class AnthropicRoles:
    """Anthropic角色常量"""

    USER = "user"
    ASSISTANT = "assistant"


class AnthropicMessageContent(BaseModel):
    """Anthropic消息内容项"""

    type: Literal[
        "text", "thinking", "redacted_thinking", "image", "tool_use", "tool_result"
    ] = Field(description="内容类型")
    text: str | None = Field(None, description="文本内容（当type为text时）")
    source: dict[str, Any] | None = Field(None, description="当type为image时的源信息")
    id: str | None = Field(None, description="工具调用ID（当type为tool_use时）")
    name: str | None = Field(None, description="工具名称（当type为tool_use时）")
    input: dict[str, Any] | None = Field(
        None, description="工具输入参数（当type为tool_use时）"
    )
    tool_use_id: str | None = Field(
        None, description="工具使用ID（当type为tool_result时）"
    )
    content: str | list[dict[str, Any]] | None = Field(
        None, description="工具结果内容（当type为tool_result时）"
    )
    is_error: bool | None = Field(
        None, description="工具调用是否为错误结果（当type为tool_result时）"
    )
    thinking: str | None = Field(None, description="思考内容（当type为thinking时）")
    signature: str | None = Field(None, description="思考内容签名")


class AnthropicMessage(BaseModel):
    """Anthropic消息格式"""

    role: Literal["user", "assistant"] = Field(description="消息角色")
    content: str | list[AnthropicMessageContent] = Field(description="消息内容")


class AnthropicSystemMessage(BaseModel):
    """Anthropic系统消息"""

    type: Literal["text"] = Field(
        default=AnthropicContentTypes.TEXT, description="系统消息类型，固定为text"
    )
    text: str = Field(description="系统消息文本内容")


class AnthropicToolDefinition(BaseModel):
    """Anthropic工具定义"""

    name: str = Field(description="工具名称")
    description: Optional[str] = Field(None, description="工具描述")
    input_schema: Optional[dict[str, Any]] = Field(
        None, description="JSON Schema格式的输入参数定义"
    )
    type: Optional[str] = Field(None, description="工具类型")


class AnthropicRequest(BaseModel):
    """Anthropic API请求模型"""

    model: str = Field(description="使用的模型ID，如claude-sonnet-4-20250514")
    messages: list[AnthropicMessage] = Field(description="对话消息列表")
    max_tokens: int = Field(description="最大输出token数量")
    system: str | list[AnthropicSystemMessage] | None = Field(
        None, description="系统提示信息"
    )
    tools: list[AnthropicToolDefinition] | None = Field(
        None, description="可用工具定义"
    )
    tool_choice: str | dict[str, Any] | None = Field(None, description="工具选择配置")
    metadata: dict[str, Any] | None = Field(None, description="可选元数据")
    stop_sequences: list[str] | None = Field(None, description="停止序列")
    stream: bool | None = Field(False, description="是否使用流式响应")
    temperature: float | None = Field(None, ge=0.0, le=1.0, description="采样温度")
    top_p: float | None = Field(None, ge=0.0, le=1.0, description="top-p采样参数")
    top_k: int | None = Field(None, ge=1, le=1000, description="top-k采样参数")
    thinking: bool | dict[str, Any] | None = Field(
        None, description="是否启用推理模式或配置对象"
    )
