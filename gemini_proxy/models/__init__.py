"""数据模型：Anthropic请求、Gemini请求与标准错误响应"""
