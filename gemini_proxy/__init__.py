"""
Claude-To-Gemini Proxy

让使用 Claude 工具调用格式的客户端访问 Gemini 风格上游的请求转换服务。

主要功能:
- 工具参数 JSON Schema 到 Gemini Schema 方言的转换
- tool_result 中内联图片的拆分（inlineData）
- 上游模型ID缓存与模型名解析
- 配置文件热重载与请求ID日志追踪

使用示例:
    from gemini_proxy.core.converters import clean_json_schema

    parameters = clean_json_schema(tool.input_schema)
"""

__version__ = "0.1.0"
__description__ = "Claude tool-calling to Gemini request translation service"

from .common import configure_logging, get_logger_with_request_id
from .config import get_config, reload_config

__all__ = [
    "get_config",
    "reload_config",
    "configure_logging",
    "get_logger_with_request_id",
    "__version__",
    "__description__",
]
