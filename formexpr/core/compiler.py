# formexpr/core/compiler.py
"""
Schema -> FieldTree 编译
根据 schema 生成初始字段树，array 字段按模型中已有的条目生成子节点。
"""

import copy
from typing import Any

from .schema import SchemaNode
from .fields import FieldKey, FieldNode, FieldTree, FieldType


def field_type_for(schema: SchemaNode) -> FieldType:
    if schema.is_array:
        return FieldType.ARRAY
    if schema.is_object:
        return FieldType.OBJECT
    return FieldType.LEAF


def compile_schema(schema: SchemaNode, model: Any = None) -> FieldTree:
    if model is None:
        model = [] if schema.is_array else {}
    tree = FieldTree(model)
    tree.root.type = field_type_for(schema)
    tree.root.default = schema.default
    populate(tree, tree.root, schema)
    return tree


def build_field(tree: FieldTree, parent: FieldNode, key: FieldKey, schema: SchemaNode) -> FieldNode:
    node = tree.add_node(key, field_type_for(schema), parent, default=schema.default)
    populate(tree, node, schema)
    return node


def populate(tree: FieldTree, node: FieldNode, schema: SchemaNode) -> None:
    if node.type is FieldType.ARRAY:
        node.field_array = schema.items or SchemaNode()
        entries = node.model
        if isinstance(entries, list):
            for index in range(len(entries)):
                build_field(tree, node, index, node.field_array)
    elif node.type is FieldType.OBJECT:
        for name, sub_schema in schema.properties.items():
            build_field(tree, node, name, sub_schema)


def default_model(schema: SchemaNode) -> Any:
    """新增 array 条目时使用的默认值"""
    if schema.is_array:
        return []
    if schema.is_object:
        return {name: default_model(sub) for name, sub in schema.properties.items()}
    return copy.deepcopy(schema.default)
