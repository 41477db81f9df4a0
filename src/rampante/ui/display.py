"""基于 Rich 的终端 UI 展示组件。"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree

from rampante.core.catalog import StackRecord
from rampante.core.installer import InstallReport
from rampante.core.selector import SelectionResult


def _display_path(path: Path, root: Path) -> str:
    try:
        return str(path.relative_to(root))
    except ValueError:
        return str(path)


def show_error(console: Console, message: str) -> None:
    console.print(f"[red]错误：[/red] {message}")


def show_warnings(console: Console, warnings: Sequence[Warning]) -> None:
    """逐条显示非致命警告。"""
    for warning in warnings:
        console.print(f"[yellow]⚠[/yellow] 警告: {warning}")


def show_install_report(console: Console, report: InstallReport) -> None:
    """显示安装结果：写入/跳过的文件树与警告。"""
    root = report.working_root
    tree = Tree(f"📁 [bold]{root}[/bold]", guide_style="dim")
    for path in report.written:
        tree.add(f"[green]✓[/green] {_display_path(path, root)}")
    for path in report.skipped:
        tree.add(f"[dim]- {_display_path(path, root)}（已存在，跳过）[/dim]")
    console.print(tree)

    show_warnings(console, report.warnings)

    if not report.changed:
        console.print("[dim]所有文件均已存在，未做任何修改（使用 --force 重新生成）[/dim]")
        return

    console.print(
        f"[green]✓[/green] 资源安装完成：written={len(report.written)} "
        f"skipped={len(report.skipped)}"
    )


def show_selection(console: Console, result: SelectionResult) -> None:
    """显示栈选择结果面板。"""
    status = "[yellow]回退[/yellow]" if result.fallback else "[green]匹配[/green]"
    technologies = ", ".join(result.technologies) if result.technologies else "[dim]（无）[/dim]"
    console.print(
        Panel(
            f"[cyan]选中栈:[/cyan] [bold]{result.stack_name}[/bold]\n"
            f"[cyan]优先级:[/cyan] {result.priority}\n"
            f"[cyan]结果:[/cyan] {status}\n"
            f"[cyan]原因:[/cyan] {result.match_reason}\n"
            f"[cyan]技术:[/cyan] {technologies}",
            title="[bold green]栈选择[/bold green]",
            border_style="yellow" if result.fallback else "green",
        )
    )


def show_stack_table(console: Console, stacks: Sequence[StackRecord]) -> None:
    """以表格形式列出所有栈。"""
    table = Table(title="推荐技术栈", show_header=True, header_style="bold cyan")
    table.add_column("#", justify="right", style="dim")
    table.add_column("名称", style="bold")
    table.add_column("优先级", justify="right")
    table.add_column("标签")
    table.add_column("描述")

    for stack in stacks:
        table.add_row(
            str(stack.order),
            stack.name,
            str(stack.priority),
            ", ".join(stack.tags),
            stack.description,
        )

    console.print(table)
