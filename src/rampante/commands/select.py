"""rampante 的 select 命令：按 YOLO 策略为提示词选择技术栈。"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from rampante.core.catalog import load_catalog
from rampante.core.errors import RampanteError
from rampante.core.selector import select_stack
from rampante.ui.display import show_error, show_selection
from rampante.utils.files import get_stacks_dir

console = Console()


def select_command(
    prompt: str = typer.Argument(..., help="项目描述（自由文本）"),
    stack: Optional[str] = typer.Option(
        None, "--stack", "-s", help="手动指定栈名称（跳过自动匹配）"
    ),
    root: Optional[Path] = typer.Option(
        None, "--root", "-r", help="包含 recommended-stacks/ 的目录（默认：当前目录）"
    ),
    as_json: bool = typer.Option(False, "--json", help="以 JSON 输出结果"),
) -> None:
    """为项目描述选择推荐技术栈。

    示例：
        rampante select "build a web app"
        rampante select "build a React app" --json
        rampante select "anything" --stack PYTHON_API
    """
    stacks_dir = get_stacks_dir(root or Path.cwd())

    try:
        catalog = load_catalog(stacks_dir)
        result = select_stack(prompt, catalog, stacks_dir, stack_name=stack)
    except RampanteError as e:
        show_error(console, str(e))
        raise typer.Exit(1)
    except (OSError, UnicodeDecodeError) as e:
        show_error(console, f"读取栈定义失败: {e}")
        raise typer.Exit(1)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
        return

    show_selection(console, result)
