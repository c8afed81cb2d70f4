"""
FormExpr 库 - 把 JSON Schema 中的 hide 条件装到表单字段树上，并安全地求值。
"""

from .core.schema import SchemaNode, ConditionTerm, ComparisonOperator, DEFAULT_TRIGGERS
from .core.fields import FieldNode, FieldTree, FieldType
from .core.expressions import (
    ExpressionTable,
    find_expressions,
    insert_expressions,
    find_and_insert_expressions,
    find_and_insert_expressions_for_array,
)
from .core.form import Form, FieldNotFoundError
from .core.engine import IFormEngine
from .core.form_engine import FormEngine
from .utils.conditions import MalformedExpressionError, evaluate_expression, parse_expression

engine = FormEngine()

__all__ = [
    'SchemaNode', 'ConditionTerm', 'ComparisonOperator', 'DEFAULT_TRIGGERS',
    'FieldNode', 'FieldTree', 'FieldType',
    'ExpressionTable', 'find_expressions', 'insert_expressions',
    'find_and_insert_expressions', 'find_and_insert_expressions_for_array',
    'Form', 'FieldNotFoundError', 'IFormEngine', 'FormEngine',
    'MalformedExpressionError', 'evaluate_expression', 'parse_expression',
    'engine',
]
