# formexpr/core/fields.py
"""
字段配置树 (FieldTree)
渲染层使用的运行时字段树。节点统一存放在 FieldTree 中，
父子关系通过节点 id 引用，节点本身不持有父节点对象。
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Optional, Union

from .schema import SchemaNode

logger = logging.getLogger(__name__)

FieldKey = Union[str, int, None]
Predicate = Callable[[], bool]


class FieldType(Enum):
    OBJECT = "object"
    ARRAY = "array"
    LEAF = "leaf"


def get_member(container: Any, key: FieldKey) -> Any:
    """按键取成员: dict 用键，list 用下标，取不到返回 None"""
    if isinstance(container, dict):
        return container.get(key)
    if isinstance(container, list):
        if isinstance(key, str) and key.isdigit():
            key = int(key)
        if isinstance(key, int) and 0 <= key < len(container):
            return container[key]
    return None


@dataclass
class FieldNode:
    id: int
    key: FieldKey
    type: FieldType
    tree: 'FieldTree' = field(repr=False, compare=False)
    parent_id: Optional[int] = None
    children: List[int] = field(default_factory=list)
    # 触发器名 -> 无参谓词，由 insert_expressions 安装，渲染层调用
    expressions: Dict[str, Predicate] = field(default_factory=dict, repr=False)
    # array 节点: 元素的 schema，用于新增元素
    field_array: Optional[SchemaNode] = field(default=None, repr=False)
    default: Any = None

    @property
    def parent(self) -> Optional['FieldNode']:
        if self.parent_id is None:
            return None
        return self.tree.get(self.parent_id)

    @property
    def field_group(self) -> List['FieldNode']:
        return [self.tree.get(child_id) for child_id in self.children]

    @property
    def model(self) -> Any:
        """该节点在模型中对应的值；根节点返回整个模型，无 key 的分组沿用父节点的模型"""
        parent = self.parent
        if parent is None:
            return self.tree.model
        if self.key is None:
            return parent.model
        return get_member(parent.model, self.key)

    @property
    def key_path(self) -> str:
        keys = []
        node = self
        while node.parent is not None:
            keys.append(str(node.key))
            node = node.parent
        return ".".join(reversed(keys))


class FieldTree:
    def __init__(self, model: Any = None):
        self.model = model if model is not None else {}
        self._nodes: Dict[int, FieldNode] = {}
        self._next_id = 0
        self.root = self.add_node(None, FieldType.OBJECT)

    def add_node(self, key: FieldKey, type: FieldType, parent: Optional[FieldNode] = None, **kwargs) -> FieldNode:
        node = FieldNode(id=self._next_id, key=key, type=type, tree=self, **kwargs)
        self._next_id += 1
        self._nodes[node.id] = node
        if parent is not None:
            node.parent_id = parent.id
            parent.children.append(node.id)
        return node

    def get(self, node_id: int) -> FieldNode:
        try:
            return self._nodes[node_id]
        except KeyError:
            raise KeyError(f"Field node {node_id} does not exist (removed?)") from None

    def remove_subtree(self, node: FieldNode) -> None:
        """把 node 从父节点摘下，并释放其下所有节点"""
        if node is self.root:
            raise ValueError("Cannot remove the root field")
        parent = node.parent
        if parent is not None:
            parent.children.remove(node.id)
        removed = [n.id for n in self.walk(node)]
        for node_id in removed:
            del self._nodes[node_id]
        node.parent_id = None
        logger.debug("Removed %d field node(s) under key %r", len(removed), node.key)

    def walk(self, node: Optional[FieldNode] = None) -> Iterator[FieldNode]:
        """深度优先、先序遍历"""
        node = node or self.root
        yield node
        for child in node.field_group:
            yield from self.walk(child)

    def __len__(self) -> int:
        return len(self._nodes)

    def __contains__(self, node: FieldNode) -> bool:
        return self._nodes.get(node.id) is node
