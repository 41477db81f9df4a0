"""资源安装器。

将内置模板按固定清单安装到工作目录：
- rampante/command/rampante.md
- recommended-stacks/DEFINITIONS.md 及各栈详情文档
- scripts/ 下的辅助脚本（POSIX 上设为 0755）

幂等：未指定 force 时已存在的文件一律不写；
指定 force 时先删除顶层安装目录（保留命令文件的历史备份），再重新写入全部文件。
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from rampante.core.backup import list_backups
from rampante.core.errors import PermissionWarning, TemplateMissing
from rampante.utils.files import (
    COMMAND_DIR_PARTS,
    COMMAND_FILE_NAME,
    SCRIPTS_DIR_NAME,
    STACKS_DIR_NAME,
    get_command_file,
    safe_copy_file,
    safe_remove,
)

# force 时整体删除的顶层目录（scripts/ 可能包含用户文件，不删除）
MANAGED_TOP_LEVEL_DIRS = ("rampante", STACKS_DIR_NAME)

STACK_FILES = [
    "CLI_TOOL.md",
    "FULL_STACK_NODE.md",
    "MOBILE_REACT_NATIVE.md",
    "PYTHON_API.md",
    "REACT_SPA.md",
    "SERVERLESS_FUNCTIONS.md",
    "SIMPLE_WEB_APP.md",
    "STATIC_SITE.md",
]

REQUIRED_SCRIPTS = [
    "select-stack.sh",
    "generate-project-overview.sh",
]

EXECUTABLE_MODE = 0o755


@dataclass(frozen=True)
class AssetEntry:
    """清单中的一项（路径均为相对路径，使用 / 分隔）。"""

    source: str
    destination: str
    required: bool = True
    executable: bool = False


@dataclass
class InstallationTarget:
    """一次具体的文件安装。"""

    source: Path
    destination: Path
    force: bool = False

    def should_write(self) -> bool:
        """目标不存在或强制覆盖时才写入。"""
        return self.force or not self.destination.exists()


@dataclass
class InstallReport:
    """安装结果汇总。"""

    working_root: Path
    force: bool = False
    written: list[Path] = field(default_factory=list)
    skipped: list[Path] = field(default_factory=list)
    missing_optional: list[str] = field(default_factory=list)
    removed: list[Path] = field(default_factory=list)
    warnings: list[Warning] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.written or self.removed)


def _build_manifest() -> list[AssetEntry]:
    command_path = "/".join((*COMMAND_DIR_PARTS, COMMAND_FILE_NAME))
    manifest = [
        AssetEntry(f"command/{COMMAND_FILE_NAME}", command_path),
        AssetEntry(f"{STACKS_DIR_NAME}/DEFINITIONS.md", f"{STACKS_DIR_NAME}/DEFINITIONS.md"),
    ]
    manifest.extend(
        AssetEntry(f"{STACKS_DIR_NAME}/{name}", f"{STACKS_DIR_NAME}/{name}", required=False)
        for name in STACK_FILES
    )
    manifest.extend(
        AssetEntry(
            f"{SCRIPTS_DIR_NAME}/{name}",
            f"{SCRIPTS_DIR_NAME}/{name}",
            executable=True,
        )
        for name in REQUIRED_SCRIPTS
    )
    return manifest


ASSET_MANIFEST: list[AssetEntry] = _build_manifest()


def get_bundled_templates_dir() -> Path:
    """获取随包分发的模板目录。"""
    return Path(__file__).parent.parent / "templates"


def resolve_templates_dir(override: Path | str | None = None) -> Path:
    """确定模板来源目录：显式参数优先，否则使用内置模板。"""
    if override:
        return Path(override)
    return get_bundled_templates_dir()


def get_managed_paths(working_root: Path, include_optional: bool = True) -> list[Path]:
    """返回安装器管理的所有目标文件路径。"""
    return [
        working_root / entry.destination
        for entry in ASSET_MANIFEST
        if include_optional or entry.required
    ]


class AssetInstaller:
    """按清单安装资源文件。"""

    def __init__(
        self,
        templates_root: Path | None = None,
        manifest: list[AssetEntry] | None = None,
    ) -> None:
        self.templates_root = resolve_templates_dir(templates_root)
        self.manifest = list(manifest) if manifest is not None else list(ASSET_MANIFEST)

    def install(self, working_root: Path, force: bool = False) -> InstallReport:
        """安装全部资源到 working_root。

        参数：
            working_root：安装目标目录
            force：是否先删除已安装目录并重新写入全部文件

        返回：
            InstallReport

        异常：
            TemplateMissing：必需的内置模板缺失（此时不做任何删除或写入）
        """
        report = InstallReport(working_root=working_root, force=force)

        # 先校验必需模板，避免 force 删除后才发现无法重建
        for entry in self.manifest:
            source = self.templates_root / entry.source
            if entry.required and not source.is_file():
                raise TemplateMissing(source)

        if force:
            # 命令文件的历史备份永久保留
            keep = set(list_backups(get_command_file(working_root)))
            for dir_name in MANAGED_TOP_LEVEL_DIRS:
                path = working_root / dir_name
                if path.exists():
                    _remove_except(path, keep)
                    report.removed.append(path)

        for entry in self.manifest:
            self._install_entry(entry, working_root, force, report)

        return report

    def _install_entry(
        self,
        entry: AssetEntry,
        working_root: Path,
        force: bool,
        report: InstallReport,
    ) -> None:
        target = InstallationTarget(
            source=self.templates_root / entry.source,
            destination=working_root / entry.destination,
            force=force,
        )

        if not target.source.is_file():
            # 可选的栈文件并非每个构建都附带
            report.missing_optional.append(entry.source)
            report.warnings.append(
                UserWarning(f"未找到栈文件 {Path(entry.source).name}，已跳过")
            )
            return

        if not target.should_write():
            report.skipped.append(target.destination)
            return

        safe_copy_file(target.source, target.destination, force=True)
        report.written.append(target.destination)

        if entry.executable:
            warning = make_executable(target.destination)
            if warning is not None:
                report.warnings.append(warning)


def _remove_except(path: Path, keep: set[Path]) -> None:
    """删除 path 及其内容，但保留 keep 中的文件（及其所在目录）。"""
    if not any(kept.is_relative_to(path) for kept in keep):
        safe_remove(path)
        return
    for child in path.iterdir():
        if child in keep:
            continue
        if child.is_dir() and not child.is_symlink():
            _remove_except(child, keep)
        else:
            safe_remove(child)


def make_executable(path: Path) -> PermissionWarning | None:
    """在 POSIX 平台上将文件设为 0755；失败时返回警告而不是抛出异常。"""
    if os.name != "posix":
        return None
    try:
        path.chmod(EXECUTABLE_MODE)
    except OSError as e:
        return PermissionWarning(path, str(e))
    return None


def install_assets(
    working_root: Path,
    force: bool = False,
    templates_root: Path | None = None,
) -> InstallReport:
    """使用默认清单安装资源。"""
    return AssetInstaller(templates_root).install(working_root, force=force)


def verify_installation(working_root: Path) -> bool:
    """检查所有必需文件是否已安装且非空。"""
    for path in get_managed_paths(working_root, include_optional=False):
        if not path.is_file():
            return False
        if path.stat().st_size == 0:
            return False
    return True
