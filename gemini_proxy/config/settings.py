"""配置模型与加载

配置文件为JSON格式，路径优先级：
1. 调用方显式传入的路径
2. 环境变量 CONFIG_PATH
3. ./config/settings.json
4. ./config/example.json (模板)
都不存在时使用内置默认值。
"""

import json
import os
from pathlib import Path

import aiofiles
from loguru import logger
from pydantic import BaseModel, Field

DEFAULT_CONFIG_PATH = "config/settings.json"
EXAMPLE_CONFIG_PATH = "config/example.json"


class ServerConfig(BaseModel):
    """服务监听配置"""

    host: str = Field("0.0.0.0", description="监听地址")
    port: int = Field(8000, ge=1, le=65535, description="监听端口")


class LoggingConfig(BaseModel):
    """日志配置"""

    level: str = Field("INFO", description="日志级别")
    file: str = Field("logs/app.log", description="日志文件路径")


class ModelConfig(BaseModel):
    """Claude模型名到上游Gemini模型的映射"""

    default: str | None = Field(None, description="默认模型（sonnet/opus等）")
    small: str | None = Field(None, description="轻量模型（haiku）")
    think: str | None = Field(None, description="启用thinking时使用的模型")


class ParameterOverridesConfig(BaseModel):
    """参数覆盖配置，设置后优先于客户端请求中的值"""

    max_tokens: int | None = Field(None, ge=1, description="最大输出token数量")
    temperature: float | None = Field(None, ge=0.0, le=2.0, description="采样温度")
    top_p: float | None = Field(None, ge=0.0, le=1.0, description="top-p采样参数")
    top_k: int | None = Field(None, ge=1, description="top-k采样参数")


class Config(BaseModel):
    """应用配置"""

    server: ServerConfig = Field(default_factory=ServerConfig)
    api_key: str | None = Field(None, description="访问本服务所需的API密钥，为空时不校验")
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    models: ModelConfig = Field(default_factory=ModelConfig)
    parameter_overrides: ParameterOverridesConfig = Field(
        default_factory=ParameterOverridesConfig
    )

    @classmethod
    async def from_file(cls, config_path: str | None = None) -> "Config":
        """异步从JSON文件加载配置"""
        path = get_config_file_path(config_path)
        if not path.exists():
            logger.warning(f"配置文件不存在，使用默认配置: {path}")
            return cls()

        async with aiofiles.open(path, encoding="utf-8") as f:
            content = await f.read()
        return cls.model_validate(json.loads(content))

    @classmethod
    def from_file_sync(cls, config_path: str | None = None) -> "Config":
        """同步从JSON文件加载配置（用于模块导入阶段）"""
        path = get_config_file_path(config_path)
        if not path.exists():
            return cls()

        with open(path, encoding="utf-8") as f:
            return cls.model_validate(json.load(f))

    async def get_server_config(self) -> tuple[str, int]:
        return self.server.host, self.server.port


def get_config_file_path(config_path: str | None = None) -> Path:
    """确定配置文件路径"""
    if config_path:
        return Path(config_path)

    env_path = os.getenv("CONFIG_PATH")
    if env_path:
        return Path(env_path)

    default_path = Path(DEFAULT_CONFIG_PATH)
    if default_path.exists():
        return default_path
    return Path(EXAMPLE_CONFIG_PATH)


# 全局配置实例
_config: Config | None = None


async def get_config() -> Config:
    """获取全局配置，首次调用时从文件加载"""
    global _config
    if _config is None:
        _config = await Config.from_file()
    return _config


async def reload_config(config_path: str | None = None) -> Config:
    """重新加载配置文件并替换全局配置"""
    global _config
    _config = await Config.from_file(config_path)
    logger.info(f"配置已重新加载: {get_config_file_path(config_path)}")
    return _config
