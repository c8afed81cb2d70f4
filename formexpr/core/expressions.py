# formexpr/core/expressions.py
"""
Schema 条件表达式的提取与安装

find_expressions 把 schema 中的 hide 等条件收集为 {路径: {触发器: 条件}}；
insert_expressions 按同样的路径规则把条件装到字段树的节点上。
array 的 items 不产生路径段，字段树里 array 元素的下标段同样不向下传递，
所以两边的路径可以对齐。
"""

import logging
from typing import Dict, Optional

from .schema import SchemaNode
from .fields import FieldNode, FieldType, Predicate
from ..utils.conditions import evaluate_expression

logger = logging.getLogger(__name__)

ExpressionTable = Dict[str, Dict[str, str]]


def find_and_insert_expressions(field: FieldNode, schema: Optional[SchemaNode]) -> ExpressionTable:
    expressions = find_expressions(schema)
    insert_expressions(expressions, field)
    return expressions


def find_and_insert_expressions_for_array(field: FieldNode, expressions: ExpressionTable) -> FieldNode:
    """
    array 字段增删元素后重新安装表达式。
    从最近的无 key 祖先（通常是根）重新安装，返回该祖先。
    """
    anchor = field.parent
    while anchor is not None and anchor.key is not None:
        anchor = anchor.parent
    if anchor is None:
        anchor = field

    logger.debug("Reinstalling expressions for array %r from node %d", field.key_path, anchor.id)
    insert_expressions(expressions, anchor)
    return anchor


def find_expressions(schema: Optional[SchemaNode], path: str = "") -> ExpressionTable:
    expressions: ExpressionTable = {}
    if schema is None:
        return expressions

    if schema.triggers:
        expressions[path] = dict(schema.triggers)

    for name, sub_schema in schema.properties.items():
        sub_path = name if path == "" else f"{path}.{name}"
        _merge(expressions, find_expressions(sub_schema, sub_path))

    if schema.items is not None:
        _merge(expressions, find_expressions(schema.items, path))

    return expressions


def _merge(target: ExpressionTable, source: ExpressionTable) -> None:
    for path, triggers in source.items():
        target.setdefault(path, {}).update(triggers)


def insert_expressions(expressions: ExpressionTable, field: FieldNode, path: str = "") -> None:
    parent_is_array = field.type is FieldType.ARRAY

    for child in field.field_group:
        field_path = str(child.key) if path == "" else f"{path}.{child.key}"
        # array 元素以下标为 key，匹配时带上下标，向下传递时去掉
        sub_path = path if parent_is_array else field_path

        triggers = expressions.get(field_path)
        if triggers is not None:
            child.expressions = {
                name: _make_predicate(condition, child)
                for name, condition in triggers.items()
                if condition is not None
            }
            logger.debug("Installed %s on %s", sorted(child.expressions), field_path)

        insert_expressions(expressions, child, sub_path)


def _make_predicate(condition: str, field: FieldNode) -> Predicate:
    def predicate() -> bool:
        return evaluate_expression(condition, field)
    return predicate
