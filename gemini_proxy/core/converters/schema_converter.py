"""
工具参数 Schema 转换器

将 Claude 风格的 JSON Schema（宽松词汇）改写为 Gemini 可接受的 Schema 方言：
- type 只能是单个大写类型标记
- 不支持 const / default / anyOf 等组合关键字
- 数值与长度校验无法结构化表达，折叠进 description

所有函数都是纯函数，不会抛出异常，也不会修改传入的对象。
"""

import json
from typing import Any

# 校验字段 -> 描述中使用的标签（顺序固定）
VALIDATION_FIELDS: dict[str, str] = {
    "minLength": "minLength",
    "maxLength": "maxLength",
    "minimum": "minimum",
    "maximum": "maximum",
    "exclusiveMinimum": "exclusiveMinimum",
    "exclusiveMaximum": "exclusiveMaximum",
    "minItems": "minItems",
    "maxItems": "maxItems",
}

# Gemini Schema 不支持、也无法转述的关键字
UNSUPPORTED_KEYS = frozenset(
    {
        "$schema",
        "additionalProperties",
        "default",
        "uniqueItems",
        "propertyNames",
        "patternProperties",
        "unevaluatedProperties",
    }
)

# 允许合并的简单 enum 分支只能包含这些键
MERGEABLE_BRANCH_KEYS = frozenset({"type", "enum", "description", "title"})

_MISSING = object()


def _format_value(value: Any) -> str:
    """以 JSON 形式输出标量，字符串原样返回"""
    if isinstance(value, str):
        return value
    # 2.0 -> "2"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    try:
        return json.dumps(value, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)


def _collapse_type_union(types: list[Any]) -> Any:
    # ["string", "null"] -> "string"
    filtered = [t for t in types if t != "null"]
    if filtered and filtered[0]:
        return filtered[0]
    if types and types[0]:
        return types[0]
    return "string"


def _uppercase_type(value: Any) -> Any:
    if isinstance(value, str):
        return value.upper()
    if isinstance(value, list):
        return [item.upper() if isinstance(item, str) else item for item in value]
    return value


def uppercase_schema_types(schema: Any) -> Any:
    """将 Schema 树中所有 type 值转换为大写

    properties 下的属性名保持原样，只处理属性对应的 Schema。
    """
    if isinstance(schema, list):
        return [uppercase_schema_types(item) for item in schema]
    if not isinstance(schema, dict):
        return schema

    normalized = {}
    for key, value in schema.items():
        if key == "type":
            normalized[key] = _uppercase_type(value)
        elif key == "properties" and isinstance(value, dict):
            normalized[key] = {
                name: uppercase_schema_types(prop) for name, prop in value.items()
            }
        else:
            normalized[key] = uppercase_schema_types(value)
    return normalized


def merge_enum_any_of(any_of: Any) -> dict[str, Any] | None:
    """尝试把 anyOf 中的简单 enum 分支合并为一个 type + enum

    Args:
        any_of: anyOf 分支列表

    Returns:
        {"type": str | None, "enum": list} 或 None（无法安全合并时）
    """
    if not isinstance(any_of, list) or not any_of:
        return None

    merged_type = None
    merged_enum: list[Any] = []
    seen: set[tuple[str, str]] = set()

    for option in any_of:
        if not isinstance(option, dict):
            return None
        enum_values = option.get("enum")
        if not isinstance(enum_values, list) or not enum_values:
            return None

        if "type" in option:
            option_type = option["type"]
            if not isinstance(option_type, str) or not option_type:
                return None
            if merged_type is None:
                merged_type = option_type
            elif merged_type != option_type:
                return None

        # 只合并简单分支，避免错误地拍平复杂子 Schema
        if any(key not in MERGEABLE_BRANCH_KEYS for key in option):
            return None

        for value in enum_values:
            token = (type(value).__name__, str(value))
            if token in seen:
                continue
            seen.add(token)
            merged_enum.append(value)

    if not merged_enum:
        return None
    return {"type": merged_type, "enum": merged_enum}


def _clean_node(schema: Any) -> Any:
    if isinstance(schema, list):
        return [_clean_node(item) for item in schema]
    if not isinstance(schema, dict):
        return schema

    validations = [
        f"{label}: {_format_value(schema[field])}"
        for field, label in VALIDATION_FIELDS.items()
        if field in schema
    ]
    const_value = _MISSING

    cleaned: dict[str, Any] = {}
    for key, value in schema.items():
        # Gemini 不支持 const，稍后映射为单元素 enum
        if key == "const":
            const_value = value
            continue

        if key in UNSUPPORTED_KEYS or key in VALIDATION_FIELDS:
            continue

        # properties 是 属性名 -> Schema 的映射，属性名（例如 "format"）不能被当作关键字处理
        if key == "properties" and isinstance(value, dict):
            cleaned[key] = {
                name: _clean_node(prop) for name, prop in value.items()
            }
            continue

        if key == "type" and isinstance(value, list):
            cleaned[key] = _collapse_type_union(value)
            continue

        if key == "description" and validations:
            # 非字符串描述无法拼接，改用下方的 Validation: 形式
            if isinstance(value, str) and value:
                cleaned[key] = f"{value} ({', '.join(validations)})"
        elif isinstance(value, (dict, list)):
            cleaned[key] = _clean_node(value)
        else:
            cleaned[key] = value

    if const_value is not _MISSING:
        cleaned["enum"] = [const_value]

    if validations and not cleaned.get("description"):
        cleaned["description"] = f"Validation: {', '.join(validations)}"

    # 上游拒绝 anyOf 组合关键字，拍平常见的 enum 联合写法
    if isinstance(cleaned.get("anyOf"), list):
        merged = merge_enum_any_of(schema.get("anyOf"))
        if merged:
            del cleaned["anyOf"]
            if merged["type"] and not cleaned.get("type"):
                cleaned["type"] = merged["type"]
            if not cleaned.get("enum"):
                cleaned["enum"] = merged["enum"]

    return cleaned


def clean_json_schema(schema: Any) -> Any:
    """清理 JSON Schema 以符合 Gemini 格式

    Args:
        schema: 工具的 input_schema（或其中任意子树）

    Returns:
        新的 Schema 树，原对象不会被修改
    """
    # 大写转换放在最后，合并得到的 type 也会被处理
    return uppercase_schema_types(_clean_node(schema))
