# formedit/config.py
"""
编辑器配置
从 .formedit/config.yaml 读取默认的 schema / model 路径与日志级别。
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import click
import yaml

from formedit.utils.console import error

CONFIG_FILE = Path(".formedit") / "config.yaml"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


@dataclass
class EditorConfig:
    schema: Optional[str] = None
    model: Optional[str] = None
    log_level: str = "INFO"


def load_config(path: Optional[Union[str, Path]] = None) -> EditorConfig:
    """
    读取配置文件。未指定路径且默认文件不存在时返回默认配置；
    显式指定的文件不存在或内容无效时报错并中止。
    """
    config_file = Path(path) if path else CONFIG_FILE
    if not config_file.exists():
        if path:
            error(f"Config file not found: {config_file}")
            raise click.Abort()
        return EditorConfig()

    try:
        with open(config_file, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        error(f"Failed to read {config_file}: {e}")
        raise click.Abort()

    if not isinstance(data, dict):
        error(f"{config_file} must contain a mapping")
        raise click.Abort()

    log_level = str(data.get("log_level", "INFO")).upper()
    if log_level not in LOG_LEVELS:
        error(f"Invalid log_level '{log_level}' in {config_file}, expected one of {', '.join(LOG_LEVELS)}")
        raise click.Abort()

    return EditorConfig(
        schema=data.get("schema"),
        model=data.get("model"),
        log_level=log_level,
    )
