"""基于 Rich 的终端 UI 组件。"""

from rampante.ui.display import (
    show_error,
    show_install_report,
    show_selection,
    show_stack_table,
    show_warnings,
)

__all__ = [
    "show_error",
    "show_install_report",
    "show_selection",
    "show_stack_table",
    "show_warnings",
]
