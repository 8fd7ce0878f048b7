"""
核心功能模块

提供代理服务的核心功能，包括：
- 上游模型ID缓存
- 请求格式转换器（Schema方言转换、多模态内容拆分）
- 模型配额汇总

子模块:
- converters: Claude -> Gemini 格式转换器
- model_cache: 上游模型ID缓存
- quota: 配额信息整理
"""

from .converters import ClaudeToGeminiConverter
from .model_cache import UpstreamModelCache
from .quota import QuotaRow, summarize_quota

__all__ = [
    "ClaudeToGeminiConverter",
    "UpstreamModelCache",
    "QuotaRow",
    "summarize_quota",
]
