"""rampante 核心：栈选择引擎与文件安装/更新引擎。"""

from .backup import BackupRecord, CommandBackupUpdater, UpdateResult, list_backups
from .catalog import StackRecord, load_catalog, parse_catalog
from .errors import (
    CatalogNotFound,
    ContractViolation,
    NoStacksAvailable,
    NotFoundError,
    ParseError,
    PermissionWarning,
    RampanteError,
    SourceMissing,
    StackFileMissing,
    StackNotFound,
    TemplateMissing,
    UnsupportedTarget,
)
from .installer import AssetInstaller, InstallationTarget, InstallReport, install_assets
from .registrar import CLI_TARGETS, get_supported_targets, register_command
from .selector import SelectionResult, select_stack
from .technologies import extract_technologies

__all__ = [
    "BackupRecord",
    "CommandBackupUpdater",
    "UpdateResult",
    "list_backups",
    "StackRecord",
    "load_catalog",
    "parse_catalog",
    "CatalogNotFound",
    "ContractViolation",
    "NoStacksAvailable",
    "NotFoundError",
    "ParseError",
    "PermissionWarning",
    "RampanteError",
    "SourceMissing",
    "StackFileMissing",
    "StackNotFound",
    "TemplateMissing",
    "UnsupportedTarget",
    "AssetInstaller",
    "InstallationTarget",
    "InstallReport",
    "install_assets",
    "CLI_TARGETS",
    "get_supported_targets",
    "register_command",
    "SelectionResult",
    "select_stack",
    "extract_technologies",
]
