"""rampante 的 install 命令实现。"""

import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from rampante.core.config import RampanteConfig, load_project_config
from rampante.core.errors import RampanteError
from rampante.core.installer import AssetInstaller
from rampante.core.registrar import get_supported_targets, get_target, register_command
from rampante.ui.display import show_error, show_install_report

console = Console()

TEMPLATES_DIR_ENV = "RAMPANTE_TEMPLATES_DIR"


def get_templates_override(working_root: Path, config: RampanteConfig) -> Optional[Path]:
    """模板来源：环境变量 > .rampante.yaml 中的 templates_dir > 内置模板（返回 None）。"""
    env_value = os.environ.get(TEMPLATES_DIR_ENV)
    if env_value:
        return Path(env_value)
    return config.get_templates_dir(working_root)


def install_command(
    cli: Optional[str] = typer.Argument(
        None, help="目标 CLI（默认读取 .rampante.yaml 中的 default_target）"
    ),
    force: bool = typer.Option(
        False, "--force", "-f", help="删除已安装的资源并全部重新生成"
    ),
) -> None:
    """
    在当前目录安装 rampante 资源并注册命令。

    此命令将：
    1. 安装 rampante/command/rampante.md
    2. 安装 recommended-stacks/（DEFINITIONS.md 与各栈文件）
    3. 安装 scripts/ 下的辅助脚本
    4. 将命令文件复制到目标 CLI 的命令目录

    示例：
        rampante install codex
        rampante install codex --force
    """
    working_root = Path.cwd()
    home_root = Path.home()

    try:
        config = load_project_config(working_root)
    except Exception as e:
        show_error(console, f"读取配置失败: {e}")
        raise typer.Exit(1)

    target_name = cli or config.default_target

    # 先校验目标，避免写入后才发现不支持
    try:
        get_target(target_name)
    except RampanteError as e:
        show_error(console, str(e))
        raise typer.Exit(1)

    console.print(f"[cyan]正在为 {target_name} 安装 rampante...[/cyan]")
    if force:
        console.print("[yellow]⚠[/yellow] 已启用 --force，已存在的文件将被覆盖")

    # 步骤1: 安装资源
    console.print("[cyan]正在安装资源文件...[/cyan]")
    installer = AssetInstaller(get_templates_override(working_root, config))
    try:
        report = installer.install(working_root, force=force)
    except RampanteError as e:
        show_error(console, f"安装资源失败: {e}")
        raise typer.Exit(1)
    except OSError as e:
        show_error(console, f"写入资源文件失败: {e}")
        raise typer.Exit(1)

    show_install_report(console, report)

    # 步骤2: 注册命令
    console.print("[cyan]正在注册 rampante 命令...[/cyan]")
    try:
        registered = register_command(target_name, working_root, home_root)
    except RampanteError as e:
        show_error(console, f"注册命令失败: {e}")
        raise typer.Exit(1)
    except OSError as e:
        show_error(console, f"写入注册文件失败: {e}")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] 已注册到 {registered}")
    console.print()

    console.print(
        Panel(
            f"[bold green]✅ rampante 已成功安装到 {target_name}[/bold green]\n\n"
            f"[cyan]支持的 CLI:[/cyan] {', '.join(get_supported_targets())}\n"
            "现在可以在 CLI 中使用 [cyan]/rampante[/cyan] 命令。",
            border_style="green",
        )
    )
