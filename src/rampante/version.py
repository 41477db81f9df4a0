"""rampante 版本常量（集中管理）。"""

__version__ = "0.2.0"
PACKAGE_VERSION = __version__
CONFIG_VERSION = "1.0"
TEMPLATE_VERSION = "0.2.0"
