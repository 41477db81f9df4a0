"""命令文件的备份与更新。

覆盖命令文件前先把旧内容复制到 `<basename>.<epoch>.<ext>`；
同一秒内重复执行时依次尝试 `-1`、`-2`……直到找到未被占用的名称。
备份永久保留，本模块不做任何清理。
"""

from __future__ import annotations

import re
import shutil
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable

from rampante.core.errors import ContractViolation
from rampante.utils.files import safe_write_file

DEFAULT_FORBIDDEN_REFERENCE = "select-stack.sh"


@dataclass
class BackupRecord:
    """一次备份。"""

    original_path: Path
    backup_path: Path
    created_at: datetime


@dataclass
class UpdateResult:
    """一次命令文件更新的结果。"""

    command_file: Path
    backup: BackupRecord | None = None

    @property
    def backup_path(self) -> Path | None:
        return self.backup.backup_path if self.backup else None


def _split_name(path: Path) -> tuple[str, str]:
    suffix = path.suffix
    stem = path.name[: -len(suffix)] if suffix else path.name
    return stem, suffix


def backup_candidate(original: Path, epoch: int, counter: int = 0) -> Path:
    """生成第 counter 个候选备份路径（counter 为 0 时不带后缀）。"""
    stem, suffix = _split_name(original)
    tag = f"{epoch}-{counter}" if counter else str(epoch)
    return original.with_name(f"{stem}.{tag}{suffix}")


def next_backup_path(original: Path, epoch: int) -> Path:
    """找到第一个尚未存在的备份路径。"""
    counter = 0
    candidate = backup_candidate(original, epoch)
    while candidate.exists():
        counter += 1
        candidate = backup_candidate(original, epoch, counter)
    return candidate


def create_backup(
    original: Path, clock: Callable[[], float] = time.time
) -> BackupRecord | None:
    """备份 original；文件不存在时返回 None。"""
    if not original.exists():
        return None
    now = clock()
    backup_path = next_backup_path(original, int(now))
    shutil.copyfile(original, backup_path)
    return BackupRecord(
        original_path=original,
        backup_path=backup_path,
        created_at=datetime.fromtimestamp(now),
    )


def list_backups(command_file: Path) -> list[Path]:
    """列出 command_file 旁边的所有备份文件（按名称排序）。"""
    if not command_file.parent.is_dir():
        return []
    stem, suffix = _split_name(command_file)
    pattern = re.compile(
        rf"^{re.escape(stem)}\.\d+(?:-\d+)?{re.escape(suffix)}$"
    )
    return sorted(
        path
        for path in command_file.parent.iterdir()
        if path.is_file() and pattern.match(path.name)
    )


class CommandBackupUpdater:
    """先备份、再覆盖、最后校验的命令文件更新器。"""

    def __init__(
        self,
        forbidden_reference: str | None = DEFAULT_FORBIDDEN_REFERENCE,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.forbidden_reference = forbidden_reference
        self.clock = clock

    def update(self, command_file: Path, new_content: str) -> UpdateResult:
        """用 new_content 覆盖 command_file，覆盖前保留旧版本。

        参数：
            command_file：要更新的命令文件
            new_content：新生成的内容

        返回：
            UpdateResult（文件原本不存在时 backup 为 None）

        异常：
            ContractViolation：写入后的内容仍包含被禁止的引用
        """
        backup = create_backup(command_file, self.clock)

        safe_write_file(command_file, new_content, force=True)

        written = command_file.read_text(encoding="utf-8")
        if self.forbidden_reference and self.forbidden_reference in written:
            raise ContractViolation(command_file, self.forbidden_reference)

        return UpdateResult(command_file=command_file, backup=backup)
