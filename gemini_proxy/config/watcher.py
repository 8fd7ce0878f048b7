"""配置文件监听和热重载模块

使用 watchdog 监听配置文件所在目录，文件被修改时先校验内容，
校验通过后在应用的事件循环中执行重载回调。
"""

import asyncio
import json
import threading
from collections.abc import Callable
from pathlib import Path
from typing import Any

import aiofiles
from loguru import logger
from pydantic import ValidationError
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from .settings import Config, get_config_file_path

# 文件写入完成前可能触发多次修改事件，稍作延迟
RELOAD_DELAY_SECONDS = 0.1


class ConfigFileHandler(FileSystemEventHandler):
    """配置文件变化事件处理器"""

    def __init__(self, config_path: Path, callback: Callable[[], None]):
        self.config_path = config_path.resolve()
        self.callback = callback
        self._last_modified = 0.0

    def on_modified(self, event) -> None:
        if event.is_directory:
            return
        if Path(event.src_path).resolve() != self.config_path:
            return

        # 同一次写入只处理一次
        try:
            modified = self.config_path.stat().st_mtime
        except OSError:
            return
        if modified == self._last_modified:
            return
        self._last_modified = modified

        logger.info(f"配置文件已修改: {self.config_path}")
        threading.Timer(RELOAD_DELAY_SECONDS, self.callback).start()


class ConfigWatcher:
    """配置文件监听器

    必须在事件循环中调用 start_watching()，回调会被调度回该事件循环执行。
    """

    def __init__(self, config_path: str | Path | None = None):
        self.config_path = Path(config_path or get_config_file_path()).resolve()
        self.observer: Observer | None = None
        self.handler: ConfigFileHandler | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._reload_callbacks: list[Callable[[], Any]] = []

    def add_reload_callback(self, callback: Callable[[], Any]) -> None:
        """添加配置重载回调，支持同步函数和协程函数"""
        self._reload_callbacks.append(callback)

    async def start_watching(self) -> None:
        """开始监听配置文件变化"""
        if self.observer is not None:
            logger.warning("配置监听器已在运行")
            return

        if not self.config_path.exists():
            logger.warning(f"配置文件不存在，跳过监听: {self.config_path}")
            return

        self._loop = asyncio.get_running_loop()
        self.handler = ConfigFileHandler(self.config_path, self._on_config_changed)
        self.observer = Observer()
        self.observer.schedule(
            self.handler, str(self.config_path.parent), recursive=False
        )
        self.observer.start()
        logger.info(f"开始监听配置文件: {self.config_path}")

    def stop_watching(self) -> None:
        """停止监听配置文件变化"""
        if self.observer is None:
            return

        logger.info("停止配置文件监听")
        self.observer.stop()
        self.observer.join()
        self.observer = None
        self.handler = None
        self._loop = None

    def _on_config_changed(self) -> None:
        """watchdog 线程中触发，把处理逻辑交回事件循环"""
        loop = self._loop
        if loop is None or loop.is_closed():
            logger.error("事件循环不可用，跳过配置重载")
            return
        asyncio.run_coroutine_threadsafe(self.process_config_change(), loop)

    async def process_config_change(self) -> bool:
        """校验配置文件并执行所有重载回调

        Returns:
            bool: 配置文件有效且回调已执行时返回True
        """
        if not await self.validate_config_file():
            logger.error("配置文件格式无效，跳过重载")
            return False

        for callback in self._reload_callbacks:
            name = getattr(callback, "__name__", repr(callback))
            try:
                result = callback()
                if asyncio.iscoroutine(result):
                    await result
            except Exception as e:
                logger.error(f"配置重载回调执行失败 {name}: {e}")

        logger.info("配置重载完成")
        return True

    async def validate_config_file(self) -> bool:
        """验证配置文件是否为合法JSON且符合配置模型"""
        try:
            async with aiofiles.open(self.config_path, encoding="utf-8") as f:
                content = await f.read()
            Config.model_validate(json.loads(content))
            return True
        except (json.JSONDecodeError, OSError, ValidationError) as e:
            logger.error(f"配置文件验证失败: {e}")
            return False
