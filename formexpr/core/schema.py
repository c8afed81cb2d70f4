# formexpr/core/schema.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Any, Tuple

# 目前只支持 hide 触发器
DEFAULT_TRIGGERS: Tuple[str, ...] = ("hide",)


class ComparisonOperator(Enum):
    EQUALS = "==="
    NOT_EQUALS = "!=="


@dataclass(frozen=True)
class ConditionTerm:
    path: Tuple[str, ...]
    operator: ComparisonOperator
    value: str


@dataclass(frozen=True)
class SchemaNode:
    """
    JSON Schema 节点的只读表示。
    只保留表达式引擎关心的部分: properties / items / 触发器条件。
    """
    properties: Dict[str, 'SchemaNode'] = field(default_factory=dict)
    items: Optional['SchemaNode'] = None
    triggers: Dict[str, str] = field(default_factory=dict)
    type: Optional[str] = None
    default: Any = None

    @property
    def is_array(self) -> bool:
        return self.items is not None or self.type == "array"

    @property
    def is_object(self) -> bool:
        return bool(self.properties) or self.type == "object"

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]], triggers: Tuple[str, ...] = DEFAULT_TRIGGERS) -> 'SchemaNode':
        """从已加载的字典递归构造 SchemaNode，未知键被忽略。"""
        if not isinstance(data, dict):
            return cls()

        properties = {
            name: cls.from_dict(sub, triggers)
            for name, sub in (data.get("properties") or {}).items()
        }
        items_data = data.get("items")
        items = cls.from_dict(items_data, triggers) if isinstance(items_data, dict) else None

        node_triggers = {
            key: data[key] for key in triggers
            if isinstance(data.get(key), str)
        }

        node_type = data.get("type")
        if not isinstance(node_type, str):
            # type 可以是列表，如 ["string", "null"]，此处只关心 array/object
            node_type = None

        return cls(
            properties=properties,
            items=items,
            triggers=node_triggers,
            type=node_type,
            default=data.get("default"),
        )
