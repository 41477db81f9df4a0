"""将 rampante 命令注册到各 AI CLI。

每个目标只需声明注册目录，新增目标即在 CLI_TARGETS 中添加一项。
注册始终覆盖：已注册的副本必须与源文件完全一致。
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path

from rampante.core.errors import SourceMissing, UnsupportedTarget
from rampante.utils.files import COMMAND_FILE_NAME, expand_home, get_command_file, safe_copy_file


class CLITarget(ABC):
    """CLI 注册目标的抽象基类。"""

    name: str = ""
    file_name: str = COMMAND_FILE_NAME

    @abstractmethod
    def registration_dir(self, home_root: Path) -> Path:
        """获取命令文件应复制到的目录。"""
        ...

    def registration_path(self, home_root: Path) -> Path:
        return self.registration_dir(home_root) / self.file_name

    def register(self, source_file: Path, home_root: Path) -> Path:
        """复制 source_file 到注册位置（必要时创建目录）。"""
        if not source_file.is_file():
            raise SourceMissing(source_file)
        target = self.registration_path(home_root)
        safe_copy_file(source_file, target, force=True)
        return target


class CodexTarget(CLITarget):
    """OpenAI Codex CLI：~/.codex/prompts/rampante.md"""

    name = "codex"

    def registration_dir(self, home_root: Path) -> Path:
        return expand_home("~/.codex/prompts", home_root)


class ClaudeTarget(CLITarget):
    """Claude Code：~/.claude/commands/rampante.md"""

    name = "claude"

    def registration_dir(self, home_root: Path) -> Path:
        return expand_home("~/.claude/commands", home_root)


CLI_TARGETS: dict[str, type[CLITarget]] = {
    "codex": CodexTarget,
    "claude": ClaudeTarget,
}


def get_supported_targets() -> list[str]:
    return list(CLI_TARGETS.keys())


def get_target(name: str) -> CLITarget:
    """按名称获取注册目标。

    异常：
        UnsupportedTarget：名称不在支持列表中
    """
    target_cls = CLI_TARGETS.get(name.lower())
    if target_cls is None:
        raise UnsupportedTarget(name, get_supported_targets())
    return target_cls()


def get_registration_path(name: str, home_root: Path) -> Path:
    return get_target(name).registration_path(home_root)


def register_command(name: str, working_root: Path, home_root: Path) -> Path:
    """把已安装的命令文件注册到指定 CLI。

    参数：
        name：目标 CLI 标识（如 "codex"）
        working_root：资源安装所在目录
        home_root：用户主目录

    返回：
        注册后的文件路径

    异常：
        UnsupportedTarget：不支持的目标
        SourceMissing：命令文件尚未安装
    """
    target = get_target(name)
    return target.register(get_command_file(working_root), home_root)


def verify_registration(name: str, home_root: Path) -> bool:
    """检查命令是否已注册到指定 CLI。"""
    try:
        return get_registration_path(name, home_root).is_file()
    except UnsupportedTarget:
        return False
