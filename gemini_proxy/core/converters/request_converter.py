"""
Claude-to-Gemini请求转换器

该模块将Anthropic格式的messages请求转换为Gemini generateContent请求体。
工具参数Schema经过Schema转换器清理，tool_result中的内联图片被拆分为独立的inlineData片段。
"""

from typing import Any

from loguru import logger

from gemini_proxy.common.logging import get_logger_with_request_id
from gemini_proxy.config.settings import Config, ModelConfig
from gemini_proxy.core.model_cache import UpstreamModelCache
from gemini_proxy.models.anthropic import (
    AnthropicContentTypes,
    AnthropicMessage,
    AnthropicMessageContent,
    AnthropicRequest,
    AnthropicRoles,
    AnthropicSystemMessage,
    AnthropicToolDefinition,
)
from gemini_proxy.models.gemini import (
    GeminiContent,
    GeminiFunctionCall,
    GeminiFunctionCallingConfig,
    GeminiFunctionCallingModes,
    GeminiFunctionDeclaration,
    GeminiFunctionResponse,
    GeminiGenerationConfig,
    GeminiPart,
    GeminiRequest,
    GeminiRoles,
    GeminiSystemInstruction,
    GeminiThinkingConfig,
    GeminiTool,
    GeminiToolConfig,
)

from .content_converter import image_block_to_part, sanitize_tool_result_content
from .schema_converter import clean_json_schema

UNSUPPORTED_IMAGE_HINT = "[image omitted: no inline base64 data]"

_ROLE_MAPPING = {
    AnthropicRoles.USER: GeminiRoles.USER,
    AnthropicRoles.ASSISTANT: GeminiRoles.MODEL,
}


def _thinking_enabled(thinking: bool | dict[str, Any] | None) -> bool:
    if isinstance(thinking, dict):
        return thinking.get("type") == "enabled"
    return thinking is True


class ClaudeToGeminiConverter:
    """将Anthropic请求转换为Gemini格式"""

    @staticmethod
    def get_target_model(
        anthropic_request: AnthropicRequest,
        model_cache: UpstreamModelCache,
        models: ModelConfig,
    ) -> str:
        """
        Args:
            anthropic_request: Anthropic请求对象
            model_cache: 上游模型ID缓存
            models: 模型映射配置

        Returns:
            选定的上游模型ID
        """
        original_model = anthropic_request.model

        # 客户端直接请求了上游已知的模型，使用上游的规范写法
        known_model = model_cache.resolve(original_model)
        if known_model:
            return known_model

        if not models.default:
            return original_model

        resolved_model = models.default
        if "haiku" in original_model.lower() and models.small:
            resolved_model = models.small

        if _thinking_enabled(anthropic_request.thinking) and models.think:
            resolved_model = models.think

        return resolved_model

    @staticmethod
    def convert_claude_to_gemini(
        anthropic_request: AnthropicRequest,
        model_cache: UpstreamModelCache,
        config: Config,
        request_id: str | None = None,
    ) -> tuple[str, GeminiRequest]:
        """
        将Anthropic请求转换为Gemini请求

        Args:
            anthropic_request: Anthropic格式的请求
            model_cache: 上游模型ID缓存
            config: 应用配置
            request_id: 请求ID用于日志追踪

        Returns:
            (目标模型ID, Gemini请求体)
        """
        bound_logger = get_logger_with_request_id(request_id)

        target_model = ClaudeToGeminiConverter.get_target_model(
            anthropic_request, model_cache, config.models
        )

        bound_logger.debug(
            f"将Anthropic请求转换为Gemini格式 - 消息数: {len(anthropic_request.messages)}, "
            f"工具数: {len(anthropic_request.tools or [])}"
        )

        tools = ClaudeToGeminiConverter._convert_tools(anthropic_request.tools)
        gemini_request = GeminiRequest(
            contents=ClaudeToGeminiConverter._convert_messages(
                anthropic_request.messages
            ),
            system_instruction=ClaudeToGeminiConverter._convert_system_message(
                anthropic_request.system
            ),
            tools=tools,
            tool_config=(
                ClaudeToGeminiConverter._convert_tool_choice(
                    anthropic_request.tool_choice
                )
                if tools
                else None
            ),
            generation_config=ClaudeToGeminiConverter._build_generation_config(
                anthropic_request, config
            ),
        )

        bound_logger.info(
            f"模型转换完成 - Anthropic: {anthropic_request.model} -> Gemini: {target_model}"
        )
        return target_model, gemini_request

    @staticmethod
    def _convert_system_message(
        system: str | list[AnthropicSystemMessage] | None,
    ) -> GeminiSystemInstruction | None:
        if not system:
            return None

        if isinstance(system, str):
            texts = [system]
        else:
            texts = [item.text for item in system if item.text]

        if not texts:
            return None
        return GeminiSystemInstruction(parts=[GeminiPart(text=t) for t in texts])

    @staticmethod
    def _convert_messages(messages: list[AnthropicMessage]) -> list[GeminiContent]:
        """
        转换消息列表

        tool_result 中只有 tool_use_id，Gemini 的 functionResponse 需要函数名，
        因此按顺序记录之前出现过的 tool_use。
        """
        contents = []
        tool_names: dict[str, str] = {}

        for message in messages:
            role = _ROLE_MAPPING[message.role]

            if isinstance(message.content, str):
                parts = [GeminiPart(text=message.content)] if message.content else []
            else:
                parts = []
                for block in message.content:
                    parts.extend(
                        ClaudeToGeminiConverter._convert_content_block(
                            block, tool_names
                        )
                    )

            if parts:
                contents.append(GeminiContent(role=role, parts=parts))

        return contents

    @staticmethod
    def _convert_content_block(
        block: AnthropicMessageContent, tool_names: dict[str, str]
    ) -> list[GeminiPart]:
        if block.type == AnthropicContentTypes.TEXT:
            return [GeminiPart(text=block.text)] if block.text else []

        if block.type == AnthropicContentTypes.IMAGE:
            part = image_block_to_part({"type": block.type, "source": block.source})
            return [part] if part else [GeminiPart(text=UNSUPPORTED_IMAGE_HINT)]

        if block.type == AnthropicContentTypes.TOOL_USE:
            name = block.name or ""
            if block.id:
                tool_names[block.id] = name
            return [
                GeminiPart(
                    function_call=GeminiFunctionCall(
                        id=block.id, name=name, args=block.input or {}
                    )
                )
            ]

        if block.type == AnthropicContentTypes.TOOL_RESULT:
            return ClaudeToGeminiConverter._convert_tool_result(block, tool_names)

        # thinking / redacted_thinking 由上游自行生成，不回传
        return []

    @staticmethod
    def _convert_tool_result(
        block: AnthropicMessageContent, tool_names: dict[str, str]
    ) -> list[GeminiPart]:
        tool_use_id = block.tool_use_id or ""
        name = tool_names.get(tool_use_id)
        if name is None:
            logger.debug(f"tool_result没有对应的tool_use，使用ID作为函数名: {tool_use_id}")
            name = tool_use_id

        result = sanitize_tool_result_content(block.content)
        if result.inline_parts:
            logger.debug(
                f"从tool_result中提取内联图片 - tool_use_id: {tool_use_id}, "
                f"数量: {len(result.inline_parts)}"
            )

        response_key = "error" if block.is_error else "result"
        function_response = GeminiPart(
            function_response=GeminiFunctionResponse(
                id=tool_use_id or None,
                name=name,
                response={response_key: result.content_text},
            )
        )
        return [function_response, *result.inline_parts]

    @staticmethod
    def _convert_tools(
        anthropic_tools: list[AnthropicToolDefinition] | None,
    ) -> list[GeminiTool] | None:
        if not anthropic_tools:
            return None

        declarations = [
            GeminiFunctionDeclaration(
                name=tool.name,
                description=tool.description,
                parameters=(
                    clean_json_schema(tool.input_schema) if tool.input_schema else None
                ),
            )
            for tool in anthropic_tools
        ]
        return [GeminiTool(function_declarations=declarations)]

    @staticmethod
    def _convert_tool_choice(
        tool_choice: str | dict[str, Any] | None,
    ) -> GeminiToolConfig | None:
        """
        转换Anthropic的tool_choice

        auto -> AUTO, any -> ANY, none -> NONE, {type: tool, name} -> ANY + allowedFunctionNames
        """
        if tool_choice is None:
            return None

        choice_type = tool_choice.get("type") if isinstance(tool_choice, dict) else tool_choice

        if choice_type == "tool" and isinstance(tool_choice, dict):
            name = tool_choice.get("name")
            if name:
                return GeminiToolConfig(
                    function_calling_config=GeminiFunctionCallingConfig(
                        mode=GeminiFunctionCallingModes.ANY,
                        allowed_function_names=[name],
                    )
                )
            return None

        mode = {
            "auto": GeminiFunctionCallingModes.AUTO,
            "any": GeminiFunctionCallingModes.ANY,
            "none": GeminiFunctionCallingModes.NONE,
        }.get(choice_type)
        if mode is None:
            return None
        return GeminiToolConfig(
            function_calling_config=GeminiFunctionCallingConfig(mode=mode)
        )

    @staticmethod
    def _build_generation_config(
        anthropic_request: AnthropicRequest, config: Config
    ) -> GeminiGenerationConfig:
        """构建生成参数，配置中的参数覆盖优先于客户端请求"""
        overrides = config.parameter_overrides

        def pick(override: Any, requested: Any) -> Any:
            return override if override is not None else requested

        thinking_config = None
        if _thinking_enabled(anthropic_request.thinking):
            budget = None
            if isinstance(anthropic_request.thinking, dict):
                budget = anthropic_request.thinking.get("budget_tokens")
            thinking_config = GeminiThinkingConfig(
                include_thoughts=True, thinking_budget=budget
            )

        return GeminiGenerationConfig(
            max_output_tokens=pick(overrides.max_tokens, anthropic_request.max_tokens),
            temperature=pick(overrides.temperature, anthropic_request.temperature),
            top_p=pick(overrides.top_p, anthropic_request.top_p),
            top_k=pick(overrides.top_k, anthropic_request.top_k),
            stop_sequences=anthropic_request.stop_sequences or None,
            thinking_config=thinking_config,
        )


def validate_claude_request(
    request: AnthropicRequest, request_id: str | None = None
) -> None:
    """
    验证Anthropic请求的完整性

    Raises:
        ValueError: 如果请求格式不正确
    """
    bound_logger = get_logger_with_request_id(request_id)

    if not request.model or not request.model.strip():
        raise ValueError("模型字段不能为空")

    if not request.messages:
        raise ValueError("消息列表不能为空")

    if request.max_tokens <= 0:
        raise ValueError("max_tokens必须是正整数")

    bound_logger.debug("Anthropic请求验证通过")
