"""
上游模型ID缓存

记录上游当前可识别的模型ID：小写模型ID -> 原始大小写的规范ID。
每当收到上游的模型列表响应时更新，条目只增不减。
"""

import threading
import time
from collections.abc import Callable, Mapping
from typing import Any

from loguru import logger

MODEL_ID_PREFIX = "models/"


class UpstreamModelCache:
    """上游模型ID缓存

    由应用状态持有，测试中可以创建多个互相隔离的实例。
    写操作和时间戳更新由锁保护，读操作是单键字典查找。
    """

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock
        self._lock = threading.Lock()
        self._known_models_by_lower: dict[str, str] = {}
        self._last_updated_at = 0.0

    @staticmethod
    def normalize_model_id(value: Any) -> str | None:
        """规范化模型ID，去掉 "models/" 前缀

        Returns:
            规范化后的ID，无法得到有效ID时返回None
        """
        if isinstance(value, str):
            raw = value.strip()
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            raw = str(value)
        else:
            return None
        if raw.startswith(MODEL_ID_PREFIX):
            raw = raw[len(MODEL_ID_PREFIX) :]
        return raw or None

    def ingest(self, value: Any) -> None:
        """记录一个模型ID，同一小写键后写入者覆盖先写入者"""
        normalized = self.normalize_model_id(value)
        if not normalized:
            return
        with self._lock:
            self._known_models_by_lower[normalized.lower()] = normalized

    def _ingest_descriptor(self, descriptor: Any) -> None:
        if isinstance(descriptor, Mapping):
            for field in ("id", "name", "model"):
                self.ingest(descriptor.get(field))

    def update_from_listing(self, models: Any) -> None:
        """根据上游模型列表响应更新缓存

        Args:
            models: 模型描述列表，或 {模型ID: 模型描述} 映射（描述中可能带有quotaInfo）
        """
        if isinstance(models, (list, tuple)):
            for entry in models:
                self.ingest(entry)
                self._ingest_descriptor(entry)
        elif isinstance(models, Mapping):
            for model_id, info in models.items():
                self.ingest(model_id)
                self._ingest_descriptor(info)
        else:
            return

        # 只要收到列表或映射就刷新时间戳，即使没有提取到任何ID
        with self._lock:
            self._last_updated_at = self._clock()

        logger.debug(f"上游模型列表已更新，当前已知模型数: {self.count()}")

    def resolve(self, model_name: Any) -> str | None:
        """不区分大小写地查找模型，返回规范ID"""
        normalized = self.normalize_model_id(model_name)
        if not normalized:
            return None
        return self._known_models_by_lower.get(normalized.lower())

    def count(self) -> int:
        return len(self._known_models_by_lower)

    def last_updated_at(self) -> float:
        """最近一次更新的时间戳（秒），从未更新时为0"""
        return self._last_updated_at

    def known_models(self) -> list[str]:
        with self._lock:
            return sorted(self._known_models_by_lower.values())

    def reset(self) -> None:
        """清空缓存，用于测试或重新初始化"""
        with self._lock:
            self._known_models_by_lower.clear()
            self._last_updated_at = 0.0
