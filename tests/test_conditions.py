# tests/test_conditions.py
"""
条件表达式求值测试
"""
import pytest

from formexpr import FieldTree, FieldType, ComparisonOperator, ConditionTerm
from formexpr.utils.conditions import (
    MalformedExpressionError, evaluate_expression, parse_expression,
)


@pytest.fixture
def nested_tree():
    """root -> outer -> inner -> x，每层都有 mode"""
    tree = FieldTree({
        'mode': 'top',
        'outer': {
            'mode': 'on',
            'inner': {'mode': 'off', 'items': ['a', 'b']},
        },
    })
    tree.add_node('mode', FieldType.LEAF, tree.root)
    outer = tree.add_node('outer', FieldType.OBJECT, tree.root)
    tree.add_node('mode', FieldType.LEAF, outer)
    inner = tree.add_node('inner', FieldType.OBJECT, outer)
    tree.add_node('mode', FieldType.LEAF, inner)
    x = tree.add_node('x', FieldType.LEAF, inner)
    return tree, x


def test_parse_expression():
    term = parse_expression(' parent.action_type === redirect ')
    assert term == ConditionTerm(
        path=('parent', 'action_type'),
        operator=ComparisonOperator.EQUALS,
        value='redirect',
    )
    assert parse_expression('a !== b').operator is ComparisonOperator.NOT_EQUALS


@pytest.mark.parametrize("expression", [
    "a == b",
    "a === b === c",
    "a !== b !== c",
    "just_a_path",
    "",
])
def test_malformed_expressions(expression):
    with pytest.raises(MalformedExpressionError) as exc_info:
        parse_expression(expression)
    assert exc_info.value.expression == expression
    assert isinstance(exc_info.value, ValueError)


def test_equality_and_inequality(nested_tree):
    _, x = nested_tree
    assert evaluate_expression('mode === off', x) is True
    assert evaluate_expression('mode !== off', x) is False
    assert evaluate_expression('mode === on', x) is False
    assert evaluate_expression('mode !== on', x) is True


def test_parent_segments_go_one_model_level_up(nested_tree):
    _, x = nested_tree
    assert evaluate_expression('parent.mode === on', x) is True
    assert evaluate_expression('parent.parent.mode === top', x) is True


def test_parent_beyond_root_stops_ascending(nested_tree):
    tree, x = nested_tree
    top_mode = tree.root.field_group[0]
    # 已经到根，根没有父模型，值为 None
    assert evaluate_expression('parent.parent.mode === top', top_mode) is False
    assert evaluate_expression('parent.parent.parent.parent.mode !== top', x) is True


def test_dotted_path_descends_into_model(nested_tree):
    _, x = nested_tree
    outer_mode = x.parent.parent.field_group[0]
    assert evaluate_expression('inner.mode === off', outer_mode) is True
    assert evaluate_expression('inner.items.1 === b', outer_mode) is True


def test_missing_value_never_equals(nested_tree):
    _, x = nested_tree
    assert evaluate_expression('missing === x', x) is False
    assert evaluate_expression('missing.deeper !== x', x) is True


def test_comparison_is_strict_string_equality():
    tree = FieldTree({'count': 5, 'flag': True, 'name': 'five '})
    field = tree.add_node('other', FieldType.LEAF, tree.root)
    assert evaluate_expression('count === 5', field) is False
    assert evaluate_expression('flag === True', field) is False
    # 字面量两边的空白被去掉，值本身不处理
    assert evaluate_expression('name === five ', field) is False


def test_evaluation_of_malformed_expression_propagates(nested_tree):
    _, x = nested_tree
    with pytest.raises(MalformedExpressionError):
        evaluate_expression('mode = off', x)
