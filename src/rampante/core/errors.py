"""rampante 的错误类型。

核心模块只抛出这里定义的异常，由 CLI 层统一转换为退出码与提示信息。
每个异常都携带足够的上下文（路径、栈名称、字段），无需二次调试即可定位问题。
"""

from __future__ import annotations

from pathlib import Path


class RampanteError(Exception):
    """rampante 所有致命错误的基础异常。"""

    pass


class NotFoundError(RampanteError):
    """文件或目录不存在。"""

    def __init__(self, message: str, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


class CatalogNotFound(NotFoundError):
    """DEFINITIONS.md 不存在。"""

    def __init__(self, path: Path) -> None:
        super().__init__(f"未找到栈定义文件 DEFINITIONS.md：{path}", path)


class StackFileMissing(NotFoundError):
    """选中栈的详情文档不存在。"""

    def __init__(self, stack_name: str, path: Path) -> None:
        super().__init__(f"缺少栈文件：{path}（栈：{stack_name}）", path)
        self.stack_name = stack_name


class TemplateMissing(NotFoundError):
    """内置模板文件缺失。"""

    def __init__(self, path: Path) -> None:
        super().__init__(f"未找到模板：{path}", path)


class SourceMissing(NotFoundError):
    """注册所需的源命令文件尚未安装。"""

    def __init__(self, path: Path) -> None:
        super().__init__(
            f"未找到源命令文件：{path}，请先执行资源安装。", path
        )


class ParseError(RampanteError):
    """栈定义条目格式错误。"""

    def __init__(self, stack_name: str, field: str, value: str | None) -> None:
        if value is None:
            message = f"栈 '{stack_name}' 缺少字段 {field}"
        else:
            message = f"栈 '{stack_name}' 的字段 {field} 格式错误：{value!r}"
        super().__init__(message)
        self.stack_name = stack_name
        self.field = field
        self.value = value


class StackNotFound(RampanteError):
    """手动指定的栈不存在。"""

    def __init__(self, stack_name: str, available: list[str]) -> None:
        super().__init__(
            f"未找到指定的栈：{stack_name}（可用的栈：{', '.join(available)}）"
        )
        self.stack_name = stack_name
        self.available = available


class NoStacksAvailable(RampanteError):
    """栈目录为空。"""

    def __init__(self) -> None:
        super().__init__("DEFINITIONS.md 中没有任何可用的栈")


class ContractViolation(RampanteError):
    """写入后的约束校验失败（例如仍残留被禁止的旧引用）。"""

    def __init__(self, path: Path, forbidden: str) -> None:
        super().__init__(f"更新后的命令文件仍包含被禁止的引用 {forbidden!r}：{path}")
        self.path = path
        self.forbidden = forbidden


class UnsupportedTarget(RampanteError):
    """不支持的 CLI 注册目标。"""

    def __init__(self, target: str, supported: list[str]) -> None:
        super().__init__(
            f"不支持的 CLI 目标：{target}（支持：{', '.join(supported)}）"
        )
        self.target = target
        self.supported = supported


class PermissionWarning(UserWarning):
    """非致命的权限问题（如平台不支持 chmod），记录后继续执行。"""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"无法将 {path.name} 设为可执行：{reason}")
        self.path = path
        self.reason = reason
