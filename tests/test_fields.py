# tests/test_fields.py
import pytest

from formexpr import FieldTree, FieldType, SchemaNode
from formexpr.core.compiler import compile_schema, default_model, field_type_for
from formexpr.core.fields import get_member


def test_field_tree_parent_and_children():
    tree = FieldTree({'a': {'b': 1}})
    a = tree.add_node('a', FieldType.OBJECT, tree.root)
    b = tree.add_node('b', FieldType.LEAF, a)

    assert tree.root.parent is None
    assert b.parent is a
    assert a.field_group == [b]
    assert b.key_path == 'a.b'
    assert tree.root.key_path == ''
    assert a.model == {'b': 1}
    assert b.model == 1
    assert len(tree) == 3


def test_remove_subtree_frees_all_nodes():
    tree = FieldTree()
    a = tree.add_node('a', FieldType.OBJECT, tree.root)
    b = tree.add_node('b', FieldType.OBJECT, a)
    c = tree.add_node('c', FieldType.LEAF, b)
    sibling = tree.add_node('d', FieldType.LEAF, tree.root)

    tree.remove_subtree(a)

    assert tree.root.field_group == [sibling]
    assert a not in tree
    assert c not in tree
    assert sibling.parent is tree.root
    assert len(tree) == 2
    with pytest.raises(KeyError):
        tree.get(b.id)


def test_remove_root_is_rejected():
    tree = FieldTree()
    with pytest.raises(ValueError):
        tree.remove_subtree(tree.root)


def test_get_member():
    assert get_member({'a': 1}, 'a') == 1
    assert get_member({'a': 1}, 'b') is None
    assert get_member(['x', 'y'], 1) == 'y'
    assert get_member(['x', 'y'], '0') == 'x'
    assert get_member(['x', 'y'], 5) is None
    assert get_member('text', 'a') is None
    assert get_member(None, 'a') is None


def test_field_type_for():
    assert field_type_for(SchemaNode.from_dict({'type': 'array'})) is FieldType.ARRAY
    assert field_type_for(SchemaNode.from_dict({'items': {}})) is FieldType.ARRAY
    assert field_type_for(SchemaNode.from_dict({'properties': {'a': {}}})) is FieldType.OBJECT
    assert field_type_for(SchemaNode.from_dict({'type': 'object'})) is FieldType.OBJECT
    assert field_type_for(SchemaNode.from_dict({'type': ['string', 'null']})) is FieldType.LEAF


def test_compile_schema_populates_arrays_from_model(schema, token_model):
    tree = compile_schema(schema, token_model)

    auth_action, token_action = tree.root.field_group
    assert [f.key for f in auth_action.field_group] == ['action_type', 'redirect', 'error']
    parameters = token_action.field_group[1]
    assert parameters.type is FieldType.ARRAY
    assert [f.key for f in parameters.field_group] == [0, 1]
    assert parameters.field_group[0].field_group[1].key_path == 'token_action.parameters.0.custom_key'
    assert parameters.field_group[1].model == {'action': 'set'}


def test_compile_schema_defaults_model(schema):
    assert compile_schema(schema).model == {}
    assert compile_schema(SchemaNode.from_dict({'items': {}})).model == []


def test_default_model(schema):
    item = schema.properties['token_action'].properties['parameters'].items
    assert default_model(item) == {'action': 'set', 'custom_key': None}
    assert default_model(schema.properties['token_action']) == {
        'action_type': None,
        'parameters': [],
        'error': None,
    }


def test_default_model_copies_defaults():
    schema = SchemaNode.from_dict({'default': {'a': []}})
    first = default_model(schema)
    first['a'].append(1)
    assert default_model(schema) == {'a': []}


def test_keyless_group_shares_parent_model():
    tree = FieldTree({'mode': 'basic', 'name': 'n'})
    group = tree.add_node(None, FieldType.OBJECT, tree.root)
    name = tree.add_node('name', FieldType.LEAF, group)

    assert group.model is tree.model
    assert name.model == 'n'
