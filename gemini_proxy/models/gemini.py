"""Gemini API 数据模型定义

字段使用 snake_case，序列化时通过 alias 输出上游要求的 camelCase：
    request.model_dump(by_alias=True, exclude_none=True)
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GeminiRoles:
    """Gemini角色常量"""

    USER = "user"
    MODEL = "model"


class GeminiFunctionCallingModes:
    """函数调用模式常量"""

    AUTO = "AUTO"
    ANY = "ANY"
    NONE = "NONE"


class GeminiModel(BaseModel):
    """Gemini模型基类，统一camelCase别名"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class GeminiInlineData(GeminiModel):
    """内联二进制数据（base64）"""

    mime_type: str = Field(description="媒体类型，如 image/png")
    data: str = Field(description="base64编码的数据")


class GeminiFunctionCall(GeminiModel):
    """模型发起的函数调用"""

    name: str = Field(description="函数名称")
    args: dict[str, Any] = Field(default_factory=dict, description="函数参数")
    id: str | None = Field(None, description="函数调用ID")


class GeminiFunctionResponse(GeminiModel):
    """函数执行结果"""

    name: str = Field(description="函数名称")
    response: dict[str, Any] = Field(description="函数返回内容")
    id: str | None = Field(None, description="对应的函数调用ID")


class GeminiPart(GeminiModel):
    """内容片段，每个片段只携带一种数据"""

    text: str | None = Field(None, description="文本内容")
    inline_data: GeminiInlineData | None = Field(None, description="内联二进制数据")
    function_call: GeminiFunctionCall | None = Field(None, description="函数调用")
    function_response: GeminiFunctionResponse | None = Field(
        None, description="函数执行结果"
    )


class GeminiContent(GeminiModel):
    """一轮对话内容"""

    role: Literal["user", "model"] = Field(description="内容角色")
    parts: list[GeminiPart] = Field(default_factory=list, description="内容片段")


class GeminiSystemInstruction(GeminiModel):
    """系统指令"""

    parts: list[GeminiPart] = Field(default_factory=list, description="指令片段")


class GeminiFunctionDeclaration(GeminiModel):
    """函数声明"""

    name: str = Field(description="函数名称")
    description: str | None = Field(None, description="函数描述")
    parameters: dict[str, Any] | None = Field(
        None, description="Gemini Schema方言的参数定义"
    )


class GeminiTool(GeminiModel):
    """工具集合"""

    function_declarations: list[GeminiFunctionDeclaration] = Field(
        default_factory=list, description="函数声明列表"
    )


class GeminiFunctionCallingConfig(GeminiModel):
    """函数调用配置"""

    mode: Literal["AUTO", "ANY", "NONE"] = Field(
        GeminiFunctionCallingModes.AUTO, description="调用模式"
    )
    allowed_function_names: list[str] | None = Field(
        None, description="ANY模式下允许调用的函数"
    )


class GeminiToolConfig(GeminiModel):
    """工具配置"""

    function_calling_config: GeminiFunctionCallingConfig = Field(
        description="函数调用配置"
    )


class GeminiThinkingConfig(GeminiModel):
    """思考配置"""

    include_thoughts: bool = Field(True, description="是否返回思考内容")
    thinking_budget: int | None = Field(None, description="思考token预算")


class GeminiGenerationConfig(GeminiModel):
    """生成参数"""

    max_output_tokens: int | None = Field(None, description="最大输出token数量")
    temperature: float | None = Field(None, description="采样温度")
    top_p: float | None = Field(None, description="top-p采样参数")
    top_k: int | None = Field(None, description="top-k采样参数")
    stop_sequences: list[str] | None = Field(None, description="停止序列")
    thinking_config: GeminiThinkingConfig | None = Field(None, description="思考配置")


class GeminiRequest(GeminiModel):
    """Gemini generateContent 请求体"""

    contents: list[GeminiContent] = Field(description="对话内容")
    system_instruction: GeminiSystemInstruction | None = Field(
        None, description="系统指令"
    )
    tools: list[GeminiTool] | None = Field(None, description="可用工具")
    tool_config: GeminiToolConfig | None = Field(None, description="工具配置")
    generation_config: GeminiGenerationConfig | None = Field(
        None, description="生成参数"
    )
