"""rampante 的 update 命令。

备份现有的 rampante/command/rampante.md，
并写入不再包含栈选择步骤的简化版编排命令。
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from rampante.core.backup import CommandBackupUpdater
from rampante.core.config import load_project_config
from rampante.core.errors import RampanteError
from rampante.core.installer import get_bundled_templates_dir
from rampante.ui.display import show_error
from rampante.utils.files import get_command_file, get_scripts_dir

console = Console()

SIMPLIFIED_TEMPLATE_NAME = "rampante-command-simplified.md"


def resolve_simplified_template(root: Path) -> Path:
    """优先使用 <root>/templates 下的模板，否则使用内置模板。"""
    in_root = root / "templates" / SIMPLIFIED_TEMPLATE_NAME
    if in_root.exists():
        return in_root
    return get_bundled_templates_dir() / SIMPLIFIED_TEMPLATE_NAME


def update_command(
    root: Optional[Path] = typer.Option(
        None,
        "--root",
        "-r",
        help="要操作的项目根目录（默认：当前目录）",
    ),
    template: Optional[Path] = typer.Option(
        None,
        "--template",
        "-t",
        help="自定义简化模板路径",
    ),
) -> None:
    """备份并更新 rampante 命令文件。"""
    root = root or Path.cwd()

    # 预检
    if not get_scripts_dir(root).is_dir():
        show_error(console, f"缺少必需目录：{get_scripts_dir(root)}")
        raise typer.Exit(3)

    template_file = template or resolve_simplified_template(root)
    if not template_file.is_file():
        show_error(console, f"未找到模板：{template_file}")
        raise typer.Exit(4)

    try:
        config = load_project_config(root)
    except Exception as e:
        show_error(console, f"读取配置失败: {e}")
        raise typer.Exit(1)

    command_file = get_command_file(root)
    updater = CommandBackupUpdater(forbidden_reference=config.forbidden_reference)
    try:
        content = template_file.read_text(encoding="utf-8")
        result = updater.update(command_file, content)
    except RampanteError as e:
        show_error(console, str(e))
        raise typer.Exit(1)
    except (OSError, UnicodeDecodeError) as e:
        show_error(console, f"更新命令文件失败: {e}")
        raise typer.Exit(1)

    backup_display = str(result.backup_path) if result.backup_path else "（无）"
    console.print(
        "[green]√[/green] rampante 命令已更新：\n"
        f"  - Root: {root}\n"
        f"  - Command: {command_file}\n"
        f"  - Backup: {backup_display}\n"
        f"  - Template: {template_file}"
    )
