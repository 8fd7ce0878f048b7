"""
模型配额汇总

把上游模型列表中的 quotaInfo 整理成便于展示的行：
剩余比例显示为百分比，重置时间转换为服务器本地时间。
"""

import math
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

QUOTA_MODEL_KEYWORDS = ("gemini", "claude")
QUOTA_PLACEHOLDER = "-"


class QuotaRow(BaseModel):
    """单个模型的配额信息"""

    model: str = Field(description="模型ID")
    limit: str = Field(QUOTA_PLACEHOLDER, description="剩余配额百分比")
    reset: str = Field(QUOTA_PLACEHOLDER, description="配额重置时间（本地时间）")


def _format_remaining(fraction: Any) -> str:
    if isinstance(fraction, bool) or not isinstance(fraction, (int, float)):
        return QUOTA_PLACEHOLDER
    if not math.isfinite(fraction):
        return QUOTA_PLACEHOLDER
    return f"{math.floor(fraction * 100 + 0.5)}%"


def _format_reset_time(reset_time: Any) -> str:
    if not reset_time or not isinstance(reset_time, str):
        return QUOTA_PLACEHOLDER
    try:
        # Python 3.10 的 fromisoformat 不认识 "Z" 后缀
        parsed = datetime.fromisoformat(reset_time.replace("Z", "+00:00"))
    except ValueError:
        return QUOTA_PLACEHOLDER
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone()
    return parsed.strftime("%Y-%m-%d %H:%M:%S")


def summarize_quota(models: Any) -> list[QuotaRow]:
    """汇总模型配额

    Args:
        models: {模型ID: 模型描述} 映射

    Returns:
        按模型ID排序的配额行；输入不是映射时返回空列表
    """
    if not isinstance(models, Mapping):
        return []

    rows = []
    for model_id, info in models.items():
        if not isinstance(model_id, str):
            continue
        if not any(keyword in model_id for keyword in QUOTA_MODEL_KEYWORDS):
            continue

        quota = {}
        if isinstance(info, Mapping) and isinstance(info.get("quotaInfo"), Mapping):
            quota = info["quotaInfo"]

        rows.append(
            QuotaRow(
                model=model_id,
                limit=_format_remaining(quota.get("remainingFraction")),
                reset=_format_reset_time(quota.get("resetTime")),
            )
        )

    rows.sort(key=lambda row: row.model)
    return rows
