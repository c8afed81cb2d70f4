# tests/conftest.py
"""
FormExpr 测试配置和共享 fixtures
"""

import copy
import pytest

from formexpr import FormEngine, SchemaNode

# 认证/令牌动作配置的测试 schema
CONFIG_SCHEMA = {
    '$schema': 'https://json-schema.org/draft/2020-12/schema',
    'properties': {
        'auth_action': {
            'type': 'object',
            'properties': {
                'action_type': {},
                'redirect': {'hide': 'action_type !== redirect'},
                'error': {'hide': 'action_type !== error'},
            },
        },
        'token_action': {
            'properties': {
                'action_type': {},
                # array 先 items 再 properties
                'parameters': {
                    'type': 'array',
                    'items': {
                        'properties': {
                            'action': {'default': 'set'},
                            'custom_key': {'hide': 'action !== custom'},
                        },
                    },
                },
                'error': {'hide': 'action_type !== error'},
            },
        },
    },
}


@pytest.fixture
def schema_dict():
    return copy.deepcopy(CONFIG_SCHEMA)


@pytest.fixture
def schema(schema_dict):
    return SchemaNode.from_dict(schema_dict)


@pytest.fixture
def engine():
    return FormEngine()


@pytest.fixture
def token_model():
    return {
        'token_action': {
            'action_type': 'respond',
            'parameters': [
                {'action': 'custom', 'custom_key': 'sub'},
                {'action': 'set'},
            ],
        },
    }
