#!/usr/bin/env python3
"""
Claude-To-Gemini Proxy 启动脚本

使用 JSON 配置文件中的 host 和 port 启动服务器。
配置优先级：
1. 命令行指定的 --config 参数
2. 环境变量 CONFIG_PATH 指定的路径
3. ./config/settings.json (默认)
4. ./config/example.json (模板)
"""

import argparse
import os
import sys
from pathlib import Path

import uvicorn

from gemini_proxy.config.settings import Config, get_config_file_path


def main():
    """主启动函数"""
    parser = argparse.ArgumentParser(description="启动 Claude-To-Gemini Proxy")
    parser.add_argument(
        "--config", type=str, help="JSON 配置文件路径 (默认为 config/settings.json)"
    )
    args = parser.parse_args()

    # 确保从项目根目录启动，相对路径的配置与日志文件才能找到
    os.chdir(Path(__file__).parent)

    config_path = get_config_file_path(args.config)
    # 应用模块在导入时读取 CONFIG_PATH
    os.environ["CONFIG_PATH"] = str(config_path)

    try:
        config = Config.from_file_sync(str(config_path))
    except Exception as e:
        print(f"❌ 配置加载失败: {e}")
        sys.exit(1)

    host, port = config.server.host, config.server.port
    print("🚀 启动 Claude To Gemini Server...")
    print(f"   配置文件: {config_path}")
    print(f"   监听地址: {host}:{port}")
    print()
    print("📋 重要端点:")
    print(f"   健康检查: http://{host}:{port}/health")
    print(f"   请求转换: http://{host}:{port}/v1/messages/translate")
    print(f"   API文档: http://{host}:{port}/docs")
    print()

    uvicorn.run(
        "gemini_proxy.main:app",
        host=host,
        port=port,
        timeout_keep_alive=60,
        log_level=config.logging.level.lower(),
    )


if __name__ == "__main__":
    main()
