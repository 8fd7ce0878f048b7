"""测试Claude到Gemini的请求转换"""

import pytest

from gemini_proxy.config.settings import Config, ModelConfig, ParameterOverridesConfig
from gemini_proxy.core.converters.request_converter import (
    UNSUPPORTED_IMAGE_HINT,
    ClaudeToGeminiConverter,
    validate_claude_request,
)
from gemini_proxy.core.model_cache import UpstreamModelCache
from gemini_proxy.models.anthropic import AnthropicRequest
from tests.fixtures import make_claude_request, make_image_block, make_weather_tool


@pytest.fixture
def config():
    return Config(
        models=ModelConfig(
            default="gemini-2.5-pro", small="gemini-2.5-flash", think="gemini-2.5-pro-thinking"
        )
    )


@pytest.fixture
def model_cache():
    return UpstreamModelCache()


def _convert(payload, model_cache, config):
    request = AnthropicRequest(**payload)
    model, gemini_request = ClaudeToGeminiConverter.convert_claude_to_gemini(
        request, model_cache, config, request_id="req_test"
    )
    return model, gemini_request.model_dump(by_alias=True, exclude_none=True)


class TestGetTargetModel:
    def test_known_upstream_model_wins(self, model_cache, config):
        model_cache.update_from_listing({"models/Gemini-Exp": {}})
        request = AnthropicRequest(**make_claude_request(model="gemini-exp"))
        assert (
            ClaudeToGeminiConverter.get_target_model(request, model_cache, config.models)
            == "Gemini-Exp"
        )

    @pytest.mark.parametrize(
        "model, thinking, expected",
        [
            ("claude-sonnet-4-20250514", None, "gemini-2.5-pro"),
            ("claude-3-5-Haiku-latest", None, "gemini-2.5-flash"),
            ("claude-opus-4", {"type": "enabled", "budget_tokens": 2048}, "gemini-2.5-pro-thinking"),
            ("claude-opus-4", {"type": "disabled"}, "gemini-2.5-pro"),
            ("claude-3-5-haiku", True, "gemini-2.5-pro-thinking"),
        ],
    )
    def test_model_mapping(self, model_cache, config, model, thinking, expected):
        request = AnthropicRequest(**make_claude_request(model=model, thinking=thinking))
        assert (
            ClaudeToGeminiConverter.get_target_model(request, model_cache, config.models)
            == expected
        )

    def test_no_mapping_configured(self, model_cache):
        request = AnthropicRequest(**make_claude_request(model="claude-3-5-haiku"))
        assert (
            ClaudeToGeminiConverter.get_target_model(request, model_cache, ModelConfig())
            == "claude-3-5-haiku"
        )


class TestConvertClaudeToGemini:
    def test_simple_text_request(self, model_cache, config):
        model, body = _convert(
            make_claude_request(system="You are helpful.", temperature=0.5),
            model_cache,
            config,
        )

        assert model == "gemini-2.5-pro"
        assert body["contents"] == [
            {"role": "user", "parts": [{"text": "What's the weather in Paris?"}]}
        ]
        assert body["systemInstruction"] == {"parts": [{"text": "You are helpful."}]}
        assert body["generationConfig"] == {"maxOutputTokens": 1024, "temperature": 0.5}
        assert "tools" not in body
        assert "toolConfig" not in body

    def test_system_blocks(self, model_cache, config):
        _, body = _convert(
            make_claude_request(
                system=[{"type": "text", "text": "one"}, {"type": "text", "text": "two"}]
            ),
            model_cache,
            config,
        )
        assert body["systemInstruction"]["parts"] == [{"text": "one"}, {"text": "two"}]

    def test_tools_are_normalized(self, model_cache, config):
        _, body = _convert(
            make_claude_request(tools=[make_weather_tool()], tool_choice={"type": "auto"}),
            model_cache,
            config,
        )

        declaration = body["tools"][0]["functionDeclarations"][0]
        assert declaration["name"] == "get_weather"
        assert declaration["parameters"]["type"] == "OBJECT"
        assert declaration["parameters"]["properties"]["unit"] == {
            "type": "STRING",
            "enum": ["celsius", "fahrenheit"],
        }
        assert "additionalProperties" not in declaration["parameters"]
        assert body["toolConfig"] == {"functionCallingConfig": {"mode": "AUTO"}}

    @pytest.mark.parametrize(
        "tool_choice, expected",
        [
            ("auto", {"mode": "AUTO"}),
            ({"type": "any"}, {"mode": "ANY"}),
            ({"type": "none"}, {"mode": "NONE"}),
            (
                {"type": "tool", "name": "get_weather"},
                {"mode": "ANY", "allowedFunctionNames": ["get_weather"]},
            ),
        ],
    )
    def test_tool_choice(self, model_cache, config, tool_choice, expected):
        _, body = _convert(
            make_claude_request(tools=[make_weather_tool()], tool_choice=tool_choice),
            model_cache,
            config,
        )
        assert body["toolConfig"]["functionCallingConfig"] == expected

    def test_tool_round_trip_with_image_result(self, model_cache, config):
        """tool_use / tool_result 转换，结果中的图片拆分为inlineData"""
        messages = [
            {"role": "user", "content": "Take a screenshot"},
            {
                "role": "assistant",
                "content": [
                    {"type": "thinking", "thinking": "...", "signature": "sig"},
                    {"type": "text", "text": "Sure."},
                    {
                        "type": "tool_use",
                        "id": "toolu_1",
                        "name": "screenshot",
                        "input": {"region": "full"},
                    },
                ],
            },
            {
                "role": "user",
                "content": [
                    {
                        "type": "tool_result",
                        "tool_use_id": "toolu_1",
                        "content": [
                            {"type": "text", "text": "captured"},
                            make_image_block(),
                        ],
                    }
                ],
            },
        ]
        _, body = _convert(make_claude_request(messages=messages), model_cache, config)

        assistant, tool_turn = body["contents"][1], body["contents"][2]
        assert assistant == {
            "role": "model",
            "parts": [
                {"text": "Sure."},
                {
                    "functionCall": {
                        "id": "toolu_1",
                        "name": "screenshot",
                        "args": {"region": "full"},
                    }
                },
            ],
        }
        assert tool_turn["role"] == "user"
        assert tool_turn["parts"] == [
            {
                "functionResponse": {
                    "id": "toolu_1",
                    "name": "screenshot",
                    "response": {
                        "result": "captured\n[inline image omitted from JSON (image/png, ~1 bytes)]"
                    },
                }
            },
            {"inlineData": {"mimeType": "image/png", "data": "QQ=="}},
        ]

    def test_error_tool_result_without_tool_use(self, model_cache, config):
        messages = [
            {
                "role": "user",
                "content": [
                    {
                        "type": "tool_result",
                        "tool_use_id": "toolu_missing",
                        "content": "boom",
                        "is_error": True,
                    }
                ],
            }
        ]
        _, body = _convert(make_claude_request(messages=messages), model_cache, config)
        assert body["contents"][0]["parts"] == [
            {
                "functionResponse": {
                    "id": "toolu_missing",
                    "name": "toolu_missing",
                    "response": {"error": "boom"},
                }
            }
        ]

    def test_message_images(self, model_cache, config):
        messages = [
            {
                "role": "user",
                "content": [
                    make_image_block(data="QUJD", media_type="image/jpeg"),
                    {"type": "image", "source": {"type": "url", "url": "http://x/a.png"}},
                    {"type": "text", "text": "Describe these"},
                ],
            }
        ]
        _, body = _convert(make_claude_request(messages=messages), model_cache, config)
        assert body["contents"][0]["parts"] == [
            {"inlineData": {"mimeType": "image/jpeg", "data": "QUJD"}},
            {"text": UNSUPPORTED_IMAGE_HINT},
            {"text": "Describe these"},
        ]

    def test_message_image_with_numeric_media_type(self, model_cache, config):
        messages = [{"role": "user", "content": [make_image_block(media_type=7)]}]
        _, body = _convert(make_claude_request(messages=messages), model_cache, config)
        assert body["contents"][0]["parts"] == [
            {"inlineData": {"mimeType": "7", "data": "QQ=="}}
        ]

    def test_empty_turns_dropped(self, model_cache, config):
        messages = [
            {"role": "user", "content": "hi"},
            {"role": "assistant", "content": [{"type": "thinking", "thinking": "..."}]},
        ]
        _, body = _convert(make_claude_request(messages=messages), model_cache, config)
        assert [c["role"] for c in body["contents"]] == ["user"]

    def test_parameter_overrides_and_thinking(self, model_cache):
        config = Config(
            parameter_overrides=ParameterOverridesConfig(max_tokens=256, top_k=40)
        )
        _, body = _convert(
            make_claude_request(
                top_k=5,
                top_p=0.9,
                stop_sequences=["END"],
                thinking={"type": "enabled", "budget_tokens": 1024},
            ),
            model_cache,
            config,
        )
        assert body["generationConfig"] == {
            "maxOutputTokens": 256,
            "topP": 0.9,
            "topK": 40,
            "stopSequences": ["END"],
            "thinkingConfig": {"includeThoughts": True, "thinkingBudget": 1024},
        }


class TestValidateClaudeRequest:
    def test_valid(self):
        validate_claude_request(AnthropicRequest(**make_claude_request()))

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"model": "  "}, "模型"),
            ({"messages": []}, "消息"),
            ({"max_tokens": 0}, "max_tokens"),
        ],
    )
    def test_invalid(self, overrides, message):
        request = AnthropicRequest(**make_claude_request(**overrides))
        with pytest.raises(ValueError, match=message):
            validate_claude_request(request)
