"""
统一的控制台输出工具，基于 rich 实现 CLI 输出与日志。
"""
import logging
from typing import Optional

from rich.console import Console as RichConsole
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.theme import Theme

# 自定义主题
CUSTOM_THEME = Theme({
    "success": "green bold",
    "warning": "yellow bold",
    "error": "red bold",
    "heading": "bold underline",
    "path": "magenta",
    "hidden": "dim strike",
})

# 全局控制台实例（单例）
console = RichConsole(theme=CUSTOM_THEME, soft_wrap=True)


def setup_logging(verbose: bool = False, quiet: bool = False, level: Optional[str] = None):
    """用 RichHandler 配置根日志；verbose/quiet 优先于配置文件中的级别"""
    if verbose:
        log_level = logging.DEBUG
    elif quiet:
        log_level = logging.WARNING
    elif level:
        log_level = getattr(logging, level.upper(), logging.INFO)
    else:
        log_level = logging.INFO

    handler = RichHandler(
        console=RichConsole(stderr=True),
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(level=log_level, format="%(message)s", handlers=[handler], force=True)


# --- 便捷输出函数 ---

def error(message: str):
    """红色错误提示"""
    console.print(f"❌ [error]ERROR[/error]: {escape(message)}")


def heading(title: str):
    console.print(f"\n🎯 [heading]{title}[/heading]\n")


def print_table(data: list, headers: list, title: str = "📋 Results"):
    table = Table(title=title, show_header=True, header_style="bold magenta")
    for h in headers:
        table.add_column(h)
    for row in data:
        table.add_row(*[escape(str(cell)) for cell in row])
    console.print(table)


def styled(text: str, style: str) -> str:
    """返回带样式的字符串（用于拼接）"""
    return f"[{style}]{escape(text)}[/]"
