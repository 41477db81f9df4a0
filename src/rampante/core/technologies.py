"""从栈详情文档中提取技术列表。

优先读取 `## Context7 Documentation` 段落中的 **粗体** 条目；
该段落不存在或为空时，回退到 `## Core Technologies` 段落。
段落在下一个二级标题处结束。
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path

CONTEXT7_HEADING = "Context7 Documentation"
CORE_TECH_HEADING = "Core Technologies"

_LEVEL2_RE = re.compile(r"^##\s+(?P<title>.*?)\s*$")
_BOLD_RE = re.compile(r"\*\*([^*]+)\*\*")


class TechSection(Enum):
    """扫描状态。"""

    OUTSIDE = "outside"
    IN_CONTEXT7 = "in_context7"
    IN_CORE_TECH = "in_core_tech"


def _next_state(title: str) -> TechSection:
    if title.startswith(CONTEXT7_HEADING):
        return TechSection.IN_CONTEXT7
    if title.startswith(CORE_TECH_HEADING):
        return TechSection.IN_CORE_TECH
    return TechSection.OUTSIDE


def _append_unique(items: list[str], value: str) -> None:
    if value not in items:
        items.append(value)


def extract_technologies(content: str) -> list[str]:
    """提取技术名称列表（按首次出现去重）。

    参数：
        content：栈详情文档内容

    返回：
        技术名称列表；两个段落都没有条目时返回空列表
    """
    collected: dict[TechSection, list[str]] = {
        TechSection.IN_CONTEXT7: [],
        TechSection.IN_CORE_TECH: [],
    }
    state = TechSection.OUTSIDE

    for line in content.splitlines():
        heading = _LEVEL2_RE.match(line.strip())
        if heading:
            state = _next_state(heading.group("title"))
            continue

        if state is TechSection.OUTSIDE:
            continue

        for match in _BOLD_RE.finditer(line):
            tech = match.group(1).strip()
            if tech:
                _append_unique(collected[state], tech)

    if collected[TechSection.IN_CONTEXT7]:
        return collected[TechSection.IN_CONTEXT7]
    return collected[TechSection.IN_CORE_TECH]


def read_technologies(stack_file: Path) -> list[str]:
    """读取栈详情文档并提取技术列表。"""
    return extract_technologies(stack_file.read_text(encoding="utf-8"))
