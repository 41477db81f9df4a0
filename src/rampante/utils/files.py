"""rampante 的文件系统工具。

本模块提供文件与目录操作的辅助函数，以及安装布局中各路径的统一定义。
所有函数都显式接收工作目录/主目录，不读取进程级的当前目录。
"""

import shutil
from pathlib import Path

COMMAND_DIR_PARTS = ("rampante", "command")
COMMAND_FILE_NAME = "rampante.md"
STACKS_DIR_NAME = "recommended-stacks"
SCRIPTS_DIR_NAME = "scripts"


def ensure_dir(path: Path) -> None:
    """确保目录存在（必要时创建）。

    参数：
        path: 需要确保存在的目录路径
    """
    path.mkdir(parents=True, exist_ok=True)


def expand_home(path: str, home_root: Path) -> Path:
    """将以 ~/ 开头的路径展开到给定的主目录下。

    参数：
        path: 原始路径字符串
        home_root: 主目录

    返回：
        展开后的路径
    """
    if path == "~":
        return home_root
    if path.startswith("~/"):
        return home_root / path[2:]
    return Path(path)


def safe_write_file(path: Path, content: str, force: bool = False) -> bool:
    """写入文件；目标已存在且未强制时保持不动。

    返回：
        实际写入返回 True，跳过返回 False
    """
    if not force and path.exists():
        return False
    ensure_dir(path.parent)
    path.write_text(content, encoding="utf-8")
    return True


def safe_copy_file(src: Path, dest: Path, force: bool = False) -> bool:
    """复制文件内容（不复制元数据，确保修改时间为本次写入时间）。

    参数：
        src: 源文件
        dest: 目标文件
        force: 目标已存在时是否覆盖

    返回：
        实际复制返回 True，跳过返回 False

    异常：
        FileNotFoundError: 源文件不存在
    """
    if not force and dest.exists():
        return False
    if not src.exists():
        raise FileNotFoundError(f"源文件不存在：{src}")
    ensure_dir(dest.parent)
    shutil.copyfile(src, dest)
    return True


def safe_remove(path: Path) -> None:
    """删除文件或目录（不存在时忽略）。"""
    if path.is_dir() and not path.is_symlink():
        shutil.rmtree(path)
    elif path.exists() or path.is_symlink():
        path.unlink()


def get_command_dir(working_root: Path) -> Path:
    """获取 rampante/command 目录路径。"""
    return working_root.joinpath(*COMMAND_DIR_PARTS)


def get_command_file(working_root: Path) -> Path:
    """获取已安装的 rampante.md 命令文件路径。"""
    return get_command_dir(working_root) / COMMAND_FILE_NAME


def get_stacks_dir(working_root: Path) -> Path:
    """获取 recommended-stacks 目录路径。"""
    return working_root / STACKS_DIR_NAME


def get_scripts_dir(working_root: Path) -> Path:
    """获取 scripts 目录路径。"""
    return working_root / SCRIPTS_DIR_NAME
