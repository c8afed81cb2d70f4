# formexpr/core/engine.py
"""
FormExpr 核心接口 - 表单引擎 (IFormEngine)
定义了表单引擎应提供的核心能力。
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Union

from .schema import SchemaNode
from .form import Form


class IFormEngine(ABC):
    """表单引擎接口"""

    @abstractmethod
    def load_schema(self, schema_path: str) -> SchemaNode:
        pass

    @abstractmethod
    def create_form(self, schema: Union[SchemaNode, Dict[str, Any]], model: Optional[Any] = None) -> Form:
        pass
