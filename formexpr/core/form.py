# formexpr/core/form.py
"""
Form: 一份正在编辑的表单
持有 schema、表达式表、字段树和模型，并负责 array 条目的增删。
"""

import copy
import logging
from typing import Any, Dict, Iterator, List, Optional

from .schema import SchemaNode
from .fields import FieldNode, FieldTree, FieldType
from .compiler import build_field, default_model
from .expressions import ExpressionTable, find_and_insert_expressions_for_array

logger = logging.getLogger(__name__)

HIDE_TRIGGER = "hide"

# add_entry 未传值时使用 schema 默认值
_DEFAULT = object()


class FieldNotFoundError(KeyError):
    pass


class Form:
    def __init__(self, schema: SchemaNode, expressions: ExpressionTable, tree: FieldTree):
        self.schema = schema
        self.expressions = expressions
        self.tree = tree

    @property
    def model(self) -> Any:
        return self.tree.model

    @property
    def root(self) -> FieldNode:
        return self.tree.root

    def field(self, key_path: str) -> FieldNode:
        """按 key 路径查找字段，如 "auth_action.redirect" 或 "params.0.key" """
        node = self.tree.root
        if key_path == "":
            return node
        for segment in key_path.split("."):
            node = next((child for child in node.field_group if str(child.key) == segment), None)
            if node is None:
                raise FieldNotFoundError(key_path)
        return node

    def fields(self) -> Iterator[FieldNode]:
        for node in self.tree.walk():
            if node is not self.tree.root:
                yield node

    # ------------------------------
    # array 条目
    # ------------------------------

    def _array_field(self, array_path: str) -> FieldNode:
        node = self.field(array_path)
        if node.type is not FieldType.ARRAY:
            raise ValueError(f"Field '{array_path}' is not an array")
        return node

    def _array_entries(self, node: FieldNode) -> List[Any]:
        entries = node.model
        if isinstance(entries, list):
            return entries
        # 模型中还没有这个 array，创建一个挂到父模型上
        entries = []
        container = node.parent.model if node.parent is not None else None
        if isinstance(container, dict):
            container[node.key] = entries
        elif isinstance(container, list) and isinstance(node.key, int):
            container[node.key] = entries
        elif node.parent is None:
            self.tree.model = entries
        else:
            raise ValueError(f"Cannot create array '{node.key_path}': parent model is missing")
        return entries

    def _sync_entries(self, node: FieldNode, entries: List[Any]) -> None:
        """按模型中的条目数重建 array 子节点（模型可能被渲染层直接修改）"""
        for child in node.field_group[len(entries):]:
            self.tree.remove_subtree(child)
        for position, child in enumerate(node.field_group):
            child.key = position

        item_schema = node.field_array or SchemaNode()
        for index in range(len(node.children), len(entries)):
            build_field(self.tree, node, index, item_schema)

    def add_entry(self, array_path: str, value: Any = _DEFAULT) -> FieldNode:
        node = self._array_field(array_path)
        entries = self._array_entries(node)
        self._sync_entries(node, entries)
        item_schema = node.field_array or SchemaNode()

        if value is _DEFAULT:
            value = default_model(item_schema)
        entries.append(value)

        entry = build_field(self.tree, node, len(entries) - 1, item_schema)
        find_and_insert_expressions_for_array(node, self.expressions)
        logger.debug("Added entry %d to %s", entry.key, node.key_path)
        return entry

    def remove_entry(self, array_path: str, index: int) -> Any:
        node = self._array_field(array_path)
        entries = self._array_entries(node)
        if not 0 <= index < len(entries):
            raise IndexError(f"Entry {index} out of range for '{array_path}' ({len(entries)} entries)")
        self._sync_entries(node, entries)

        removed = entries.pop(index)
        self.tree.remove_subtree(node.field_group[index])
        # 后面的条目下标前移
        for position, child in enumerate(node.field_group):
            child.key = position

        find_and_insert_expressions_for_array(node, self.expressions)
        logger.debug("Removed entry %d from %s", index, node.key_path)
        return removed

    # ------------------------------
    # 可见性
    # ------------------------------

    def is_hidden(self, field: FieldNode) -> bool:
        predicate = field.expressions.get(HIDE_TRIGGER)
        return bool(predicate()) if predicate is not None else False

    def is_visible(self, field: FieldNode) -> bool:
        """字段本身及所有祖先都没有隐藏时才可见"""
        node: Optional[FieldNode] = field
        while node is not None:
            if self.is_hidden(node):
                return False
            node = node.parent
        return True

    def visibility(self) -> Dict[str, bool]:
        """{key 路径: 是否隐藏}，只包含装有 hide 谓词的字段"""
        return {
            node.key_path: self.is_hidden(node)
            for node in self.fields()
            if HIDE_TRIGGER in node.expressions
        }

    def visible_model(self) -> Any:
        """去掉隐藏字段后的模型副本"""
        return self._strip_hidden(self.tree.root, copy.deepcopy(self.tree.model))

    def _strip_hidden(self, node: FieldNode, value: Any) -> Any:
        if isinstance(value, dict):
            for child in node.field_group:
                if child.key is None:
                    # 无 key 的分组与父节点共用同一个模型
                    if self.is_hidden(child):
                        for key in self._group_keys(child):
                            value.pop(key, None)
                    else:
                        value = self._strip_hidden(child, value)
                    continue
                if child.key not in value:
                    continue
                if self.is_hidden(child):
                    del value[child.key]
                else:
                    value[child.key] = self._strip_hidden(child, value[child.key])
        elif isinstance(value, list):
            kept = []
            for child in node.field_group:
                if not isinstance(child.key, int) or child.key >= len(value):
                    continue
                if not self.is_hidden(child):
                    kept.append(self._strip_hidden(child, value[child.key]))
            value = kept
        return value

    def _group_keys(self, node: FieldNode) -> Iterator[Any]:
        for child in node.field_group:
            if child.key is None:
                yield from self._group_keys(child)
            else:
                yield child.key
