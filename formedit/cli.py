# formedit/cli
"""
FormEdit CLI 主入口：查看 schema 中的条件表达式，并按模型计算字段可见性。
"""
import json
from typing import Any, Optional

import click
from rich.tree import Tree

from formexpr import FormEngine, Form, FieldNode, FieldType, FieldNotFoundError, MalformedExpressionError
from formexpr.core.form_engine import load_document
from formexpr.utils.conditions import evaluate_expression

from formedit.config import load_config, EditorConfig
from formedit.utils.console import (
    console, error, heading, print_table, setup_logging, styled
)

# ------------------------------
# CLI 主入口
# ------------------------------

@click.group(invoke_without_command=True)
@click.version_option("0.1.0", message="FormEdit CLI v%(version)s")
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="Config file (default: .formedit/config.yaml)")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--quiet", "-q", is_flag=True, help="Only log warnings and errors")
@click.pass_context
def cli(ctx, config_path: Optional[str], verbose: bool, quiet: bool):
    """📝 FormEdit - conditional fields for JSON Schema forms"""
    config = load_config(config_path)
    setup_logging(verbose=verbose, quiet=quiet, level=config.log_level)
    ctx.obj = {"config": config, "engine": FormEngine()}
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())

# ------------------------------
# 辅助函数
# ------------------------------

def _config(ctx) -> EditorConfig:
    return ctx.obj["config"]


def _resolve(value: Optional[str], fallback: Optional[str], what: str) -> str:
    path = value or fallback
    if not path:
        raise click.UsageError(f"Missing {what} file (pass it as an argument or set '{what}' in the config file).")
    return path


def _load_schema(ctx, schema_path: Optional[str]):
    path = _resolve(schema_path, _config(ctx).schema, "schema")
    try:
        return ctx.obj["engine"].load_schema(path)
    except (OSError, ValueError) as e:
        error(f"Failed to load schema: {e}")
        raise click.Abort()


def _load_model(ctx, model_path: Optional[str], required: bool = True) -> Any:
    path = model_path or _config(ctx).model
    if not path:
        if required:
            raise click.UsageError("Missing model file (pass it as an argument or set 'model' in the config file).")
        return None
    try:
        return load_document(path)
    except (OSError, ValueError) as e:
        error(f"Failed to load model: {e}")
        raise click.Abort()


def _load_form(ctx, schema_path: Optional[str], model_path: Optional[str], required: bool = True) -> Form:
    schema = _load_schema(ctx, schema_path)
    model = _load_model(ctx, model_path, required=required)
    return ctx.obj["engine"].create_form(schema, model)

# ------------------------------
# 命令 1: expressions
# ------------------------------

@cli.command()
@click.argument("schema", required=False)
@click.option("--json", "as_json", is_flag=True, help="Print the table as JSON")
@click.pass_context
def expressions(ctx, schema: Optional[str], as_json: bool):
    """🔍 List the conditions declared in a schema"""
    schema_node = _load_schema(ctx, schema)
    table = ctx.obj["engine"].get_expressions(schema_node)

    if as_json:
        click.echo(json.dumps(table, indent=2, sort_keys=True))
        return

    if not table:
        console.print("[yellow]No conditions found in schema.[/yellow]")
        return

    rows = [
        (path, trigger, condition)
        for path, triggers in sorted(table.items())
        for trigger, condition in triggers.items()
    ]
    print_table(rows, headers=["Path", "Trigger", "Condition"], title="📋 Expressions")

# ------------------------------
# 命令 2: show
# ------------------------------

def _label(form: Form, node: FieldNode) -> str:
    label = styled(str(node.key), "path")
    if node.type is not FieldType.LEAF:
        label += f" ({node.type.value})"
    if "hide" in node.expressions:
        if form.is_hidden(node):
            label = styled(str(node.key), "hidden") + " " + styled("hidden", "warning")
        else:
            label += " " + styled("visible", "success")
    return label


def _add_branch(form: Form, tree: Tree, node: FieldNode):
    for child in node.field_group:
        branch = tree.add(_label(form, child))
        _add_branch(form, branch, child)


@cli.command()
@click.argument("schema", required=False)
@click.argument("model", required=False)
@click.pass_context
def show(ctx, schema: Optional[str], model: Optional[str]):
    """🌳 Show the form tree with hidden fields marked"""
    form = _load_form(ctx, schema, model, required=False)
    try:
        heading("Form")
        tree = Tree("[bold]root[/bold]")
        _add_branch(form, tree, form.root)
        console.print(tree)
    except MalformedExpressionError as e:
        error(str(e))
        raise click.Abort()

# ------------------------------
# 命令 3: eval
# ------------------------------

@cli.command(name="eval")
@click.argument("field_path")
@click.argument("condition")
@click.argument("schema", required=False)
@click.argument("model", required=False)
@click.pass_context
def eval_condition(ctx, field_path: str, condition: str, schema: Optional[str], model: Optional[str]):
    """🧮 Evaluate CONDITION in the context of the field at FIELD_PATH"""
    form = _load_form(ctx, schema, model)
    try:
        field = form.field(field_path)
    except FieldNotFoundError:
        raise click.ClickException(f"No field at '{field_path}'.")

    try:
        result = evaluate_expression(condition, field)
    except MalformedExpressionError as e:
        error(str(e))
        raise click.Abort()

    click.echo("true" if result else "false")

# ------------------------------
# 命令 4: submit
# ------------------------------

@cli.command()
@click.argument("schema", required=False)
@click.argument("model", required=False)
@click.pass_context
def submit(ctx, schema: Optional[str], model: Optional[str]):
    """📤 Print the model with hidden fields removed"""
    form = _load_form(ctx, schema, model)
    try:
        visible = form.visible_model()
    except MalformedExpressionError as e:
        error(str(e))
        raise click.Abort()
    click.echo(json.dumps(visible, indent=2))
