# formexpr/utils/conditions.py
"""
受限的条件表达式求值
只支持 `<path> === <literal>` 与 `<path> !== <literal>`，不使用 eval。
path 可以用若干个 `parent` 开头，每个 `parent` 向上走一层字段。
"""

from functools import lru_cache
from typing import Any, Sequence

from ..core.schema import ConditionTerm, ComparisonOperator
from ..core.fields import FieldNode, get_member

PARENT_SEGMENT = "parent"


class MalformedExpressionError(ValueError):
    def __init__(self, expression: str):
        self.expression = expression
        super().__init__(f"Invalid expression: {expression}")


@lru_cache(maxsize=256)
def parse_expression(expression: str) -> ConditionTerm:
    if ComparisonOperator.EQUALS.value in expression:
        operator = ComparisonOperator.EQUALS
    else:
        operator = ComparisonOperator.NOT_EQUALS

    operands = expression.split(operator.value)
    if len(operands) != 2:
        raise MalformedExpressionError(expression)

    path = tuple(segment.strip() for segment in operands[0].strip().split("."))
    return ConditionTerm(path=path, operator=operator, value=operands[1].strip())


def evaluate_expression(expression: str, field: FieldNode) -> bool:
    """以 field 为上下文求值条件字符串"""
    return evaluate_term(parse_expression(expression), field)


def evaluate_term(term: ConditionTerm, field: FieldNode) -> bool:
    index = 0
    while index < len(term.path) and term.path[index] == PARENT_SEGMENT:
        # 已经到根时不再上移
        if field.parent is not None:
            field = field.parent
        index += 1

    value = _resolve_value(term.path[index:], field)
    matched = isinstance(value, str) and value == term.value
    return matched == (term.operator is ComparisonOperator.EQUALS)


def _resolve_value(path: Sequence[str], field: FieldNode) -> Any:
    parent = field.parent
    value = parent.model if parent is not None else None
    for key in path:
        value = get_member(value, key)
    return value
