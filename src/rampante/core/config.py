"""rampante 的配置管理。

该模块负责加载与保存项目根目录下可选的 .rampante.yaml，
并为所有设置提供默认值。配置文件不存在时使用默认配置。
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from rampante.core.backup import DEFAULT_FORBIDDEN_REFERENCE

CONFIG_FILE_NAME = ".rampante.yaml"


@dataclass
class RampanteConfig:
    """rampante 的主配置。

    属性：
        version：配置文件格式版本
        default_target：install 未指定 CLI 时使用的注册目标
        forbidden_reference：更新命令文件后不得残留的旧引用
        templates_dir：自定义模板目录（None 表示使用内置模板）
    """

    version: str = "1.0"
    default_target: str = "codex"
    forbidden_reference: str = DEFAULT_FORBIDDEN_REFERENCE
    templates_dir: str | None = None

    def get_templates_dir(self, project_root: Path) -> Path | None:
        """解析模板目录（相对路径以项目根目录为基准）。"""
        if not self.templates_dir:
            return None
        path = Path(self.templates_dir)
        if not path.is_absolute():
            path = project_root / path
        return path

    def to_dict(self) -> dict[str, Any]:
        """转换为字典以便 YAML 序列化。"""
        result: dict[str, Any] = {
            "version": self.version,
            "default_target": self.default_target,
            "forbidden_reference": self.forbidden_reference,
        }
        if self.templates_dir:
            result["templates_dir"] = self.templates_dir
        return result

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RampanteConfig":
        """从字典创建实例。"""
        return cls(
            version=str(data.get("version", "1.0")),
            default_target=data.get("default_target", "codex"),
            forbidden_reference=data.get("forbidden_reference", DEFAULT_FORBIDDEN_REFERENCE),
            templates_dir=data.get("templates_dir"),
        )


def get_config_path(project_root: Path) -> Path:
    return project_root / CONFIG_FILE_NAME


def load_config(config_path: Path) -> RampanteConfig:
    """从 YAML 文件加载配置。

    参数：
        config_path：配置文件路径

    返回：
        RampanteConfig

    异常：
        FileNotFoundError：配置文件不存在
        yaml.YAMLError：配置文件内容不合法
    """
    if not config_path.exists():
        raise FileNotFoundError(f"未找到配置文件：{config_path}")

    with open(config_path, encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        data = {}

    return RampanteConfig.from_dict(data)


def load_project_config(project_root: Path) -> RampanteConfig:
    """加载项目配置；未配置时返回默认值。"""
    config_path = get_config_path(project_root)
    if not config_path.exists():
        return RampanteConfig()
    return load_config(config_path)


def save_config(config: RampanteConfig, config_path: Path) -> None:
    """将配置保存为 YAML 文件。"""
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        yaml.safe_dump(
            config.to_dict(),
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )
