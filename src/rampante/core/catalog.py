"""栈定义（DEFINITIONS.md）解析器。

文档格式：

    ### SIMPLE_WEB_APP

    - **Description**: A straightforward web application
    - **Tags**: web, frontend, simple
    - **Priority**: 1
    - **Use Cases**:
      - Basic CRUD applications

解析使用显式状态机（OUTSIDE / IN_STACK / IN_USE_CASES），
状态只在标题或标签行处切换。
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from rampante.core.errors import CatalogNotFound, ParseError

CATALOG_FILE_NAME = "DEFINITIONS.md"

_HEADING_RE = re.compile(r"^(#{1,6})\s+(.*?)\s*$")
_LABEL_RE = re.compile(r"^-\s+\*\*(?P<label>[^*]+)\*\*:\s*(?P<value>.*?)\s*$")
_NESTED_ITEM_RE = re.compile(r"^\s+[-*]\s+(?P<item>.*?)\s*$")


class CatalogState(Enum):
    """解析状态。"""

    OUTSIDE = "outside"
    IN_STACK = "in_stack"
    IN_USE_CASES = "in_use_cases"


@dataclass
class StackRecord:
    """一个推荐技术栈条目。

    属性：
        name：栈的唯一标识（即 ### 标题文本）
        description：描述
        tags：标签（去重，保持首次出现顺序）
        priority：优先级，数值越小越优先
        use_cases：适用场景列表
        order：在文档中首次出现的位置（从 0 开始）
    """

    name: str
    description: str = ""
    tags: list[str] = field(default_factory=list)
    priority: int = 0
    use_cases: list[str] = field(default_factory=list)
    order: int = 0

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "description": self.description,
            "tags": list(self.tags),
            "priority": self.priority,
            "use_cases": list(self.use_cases),
            "order": self.order,
        }


@dataclass
class _PendingStack:
    name: str
    order: int
    description: str = ""
    tags: list[str] = field(default_factory=list)
    priority_text: str | None = None
    use_cases: list[str] = field(default_factory=list)

    def build(self) -> StackRecord:
        if self.priority_text is None:
            raise ParseError(self.name, "Priority", None)
        try:
            priority = int(self.priority_text)
        except ValueError:
            raise ParseError(self.name, "Priority", self.priority_text) from None
        return StackRecord(
            name=self.name,
            description=self.description,
            tags=self.tags,
            priority=priority,
            use_cases=self.use_cases,
            order=self.order,
        )


def _split_tags(value: str) -> list[str]:
    tags: list[str] = []
    seen: set[str] = set()
    for raw in value.split(","):
        tag = raw.strip()
        # 匹配忽略大小写，去重也按小写比较
        if tag and tag.lower() not in seen:
            seen.add(tag.lower())
            tags.append(tag)
    return tags


def parse_catalog(content: str) -> list[StackRecord]:
    """将 DEFINITIONS.md 的内容解析为有序的栈列表。

    参数：
        content：文档内容

    返回：
        按文档出现顺序排列的 StackRecord 列表

    异常：
        ParseError：某个栈的 Priority 缺失或不是整数
    """
    stacks: list[StackRecord] = []
    state = CatalogState.OUTSIDE
    current: _PendingStack | None = None
    order = 0

    def close() -> None:
        nonlocal current
        if current is not None:
            stacks.append(current.build())
            current = None

    for line in content.splitlines():
        heading = _HEADING_RE.match(line.strip())
        if heading and not line[:1].isspace():
            level = len(heading.group(1))
            if level > 3:
                if state is CatalogState.IN_USE_CASES:
                    state = CatalogState.IN_STACK
                continue
            close()
            if level == 3 and heading.group(2):
                current = _PendingStack(name=heading.group(2), order=order)
                order += 1
                state = CatalogState.IN_STACK
            else:
                state = CatalogState.OUTSIDE
            continue

        if state is CatalogState.OUTSIDE or current is None:
            continue

        if state is CatalogState.IN_USE_CASES:
            nested = _NESTED_ITEM_RE.match(line)
            if nested:
                if nested.group("item"):
                    current.use_cases.append(nested.group("item"))
                continue
            if not line.strip():
                continue
            # 顶层标签行结束 Use Cases 列表
            state = CatalogState.IN_STACK

        label = _LABEL_RE.match(line)
        if not label:
            continue

        name = label.group("label").strip()
        value = label.group("value")
        if name == "Description":
            current.description = value
        elif name == "Tags":
            current.tags = _split_tags(value)
        elif name == "Priority":
            current.priority_text = value
        elif name == "Use Cases":
            state = CatalogState.IN_USE_CASES

    close()
    return stacks


def get_catalog_path(stacks_dir: Path) -> Path:
    return stacks_dir / CATALOG_FILE_NAME


def load_catalog(stacks_dir: Path) -> list[StackRecord]:
    """读取并解析 <stacks_dir>/DEFINITIONS.md。

    异常：
        CatalogNotFound：文档不存在
        ParseError：条目格式错误
    """
    catalog_path = get_catalog_path(stacks_dir)
    if not catalog_path.is_file():
        raise CatalogNotFound(catalog_path)
    return parse_catalog(catalog_path.read_text(encoding="utf-8"))


def get_available_stacks(stacks_dir: Path) -> list[StackRecord]:
    """获取所有可用栈。"""
    return load_catalog(stacks_dir)


def get_stack_file(stacks_dir: Path, stack_name: str) -> Path:
    return stacks_dir / f"{stack_name}.md"


def validate_stack_file(stack_name: str, stacks_dir: Path) -> bool:
    """检查某个栈的详情文档是否存在。"""
    return get_stack_file(stacks_dir, stack_name).is_file()
