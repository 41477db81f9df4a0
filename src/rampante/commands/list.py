"""rampante 的 list 命令：列出 DEFINITIONS.md 中的所有栈。"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from rampante.core.catalog import get_available_stacks
from rampante.core.errors import RampanteError
from rampante.ui.display import show_error, show_stack_table
from rampante.utils.files import get_stacks_dir

console = Console()


def list_command(
    root: Optional[Path] = typer.Option(
        None, "--root", "-r", help="包含 recommended-stacks/ 的目录（默认：当前目录）"
    ),
) -> None:
    """列出可用的推荐技术栈。"""
    stacks_dir = get_stacks_dir(root or Path.cwd())

    try:
        stacks = get_available_stacks(stacks_dir)
    except RampanteError as e:
        show_error(console, str(e))
        raise typer.Exit(1)
    except (OSError, UnicodeDecodeError) as e:
        show_error(console, f"读取栈定义失败: {e}")
        raise typer.Exit(1)

    if not stacks:
        console.print("[dim]DEFINITIONS.md 中没有任何栈。[/dim]")
        return

    show_stack_table(console, stacks)
