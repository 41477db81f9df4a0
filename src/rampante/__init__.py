"""rampante: 将提示词模板分发到 AI 编码助手的安装与栈选择 CLI 工具。"""

import typer
from rich.console import Console

from rampante.commands import install as install_cmd
from rampante.commands import list as list_cmd
from rampante.commands import select as select_cmd
from rampante.commands import update as update_cmd
from rampante.version import (
    CONFIG_VERSION,
    PACKAGE_VERSION,
    TEMPLATE_VERSION,
)

__version__ = PACKAGE_VERSION

app = typer.Typer(
    name="rampante",
    help="安装 rampante 命令资源，并为项目描述选择推荐技术栈",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()


@app.callback(invoke_without_command=True)
def main_callback(
    version: bool = typer.Option(False, "--version", "-v", help="显示版本信息"),
) -> None:
    """rampante: 面向 AI CLI 的规格驱动编排命令安装器。"""
    if version:
        console.print(f"[bold]rampante[/bold] 版本 {__version__}")
        console.print(f"template {TEMPLATE_VERSION} | config {CONFIG_VERSION}")
        raise typer.Exit()


# 注册命令
app.command(name="install", help="安装资源并将 /rampante 命令注册到目标 CLI")(
    install_cmd.install_command
)
app.command(name="update", help="备份并更新 rampante 命令文件")(update_cmd.update_command)
app.command(name="select", help="为项目描述选择推荐技术栈")(select_cmd.select_command)
app.command(name="list", help="列出可用的推荐技术栈")(list_cmd.list_command)


def main() -> None:
    """CLI 入口。"""
    app()


if __name__ == "__main__":
    main()
