# formexpr/core/form_engine.py

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from .engine import IFormEngine
from .schema import SchemaNode, DEFAULT_TRIGGERS
from .form import Form
from .compiler import compile_schema
from .expressions import ExpressionTable, find_expressions, insert_expressions

logger = logging.getLogger(__name__)


def load_document(path: Union[str, Path]) -> Any:
    """读取 YAML 或 JSON 文件（JSON 是 YAML 的子集）"""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File {path} not found")
    with open(path, "r", encoding="utf-8") as f:
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to parse {path}: {e}") from e


class FormEngine(IFormEngine):
    def __init__(self, triggers=DEFAULT_TRIGGERS):
        self.triggers = tuple(triggers)
        # 以文件的绝对路径为键；临时传入的 dict / SchemaNode 不缓存
        self._schema_cache: Dict[str, SchemaNode] = {}
        self._expression_cache: Dict[str, ExpressionTable] = {}

    def load_schema(self, schema_path: Union[str, Path]) -> SchemaNode:
        schema_key = str(Path(schema_path).resolve())
        if schema_key in self._schema_cache:
            return self._schema_cache[schema_key]

        data = load_document(schema_path)
        if data is not None and not isinstance(data, dict):
            raise ValueError(f"Schema {schema_path} must be a mapping, got {type(data).__name__}")

        schema = SchemaNode.from_dict(data, self.triggers)
        self._schema_cache[schema_key] = schema
        logger.debug("Loaded schema %s", schema_key)
        return schema

    def to_schema(self, schema: Union[SchemaNode, Dict[str, Any], None]) -> SchemaNode:
        if isinstance(schema, SchemaNode):
            return schema
        return SchemaNode.from_dict(schema, self.triggers)

    def _schema_key(self, schema: SchemaNode) -> Optional[str]:
        return next((key for key, cached in self._schema_cache.items() if cached is schema), None)

    def get_expressions(self, schema: SchemaNode) -> ExpressionTable:
        """由 load_schema 加载的 schema 只提取一次表达式表"""
        schema_key = self._schema_key(schema)
        if schema_key is not None and schema_key in self._expression_cache:
            return self._expression_cache[schema_key]

        expressions = find_expressions(schema)
        if schema_key is not None:
            self._expression_cache[schema_key] = expressions
        logger.debug("Found %d expression path(s)", len(expressions))
        return expressions

    def create_form(self, schema: Union[SchemaNode, Dict[str, Any]], model: Optional[Any] = None) -> Form:
        schema = self.to_schema(schema)
        expressions = self.get_expressions(schema)
        tree = compile_schema(schema, model)
        insert_expressions(expressions, tree.root)
        return Form(schema, expressions, tree)
