"""栈选择（YOLO 策略）。

- 将提示词中的单词与各栈的标签匹配，匹配标签数最多者胜出
- 平局时优先级数值更小者胜出，再平局时文档中更靠前者胜出
- 没有任何匹配时回退到全局优先级最小的栈
- 从选中栈的详情文档中提取技术列表

单次遍历、无回溯、无交互确认。
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Sequence

from rampante.core.catalog import StackRecord, get_stack_file, validate_stack_file
from rampante.core.errors import NoStacksAvailable, StackFileMissing, StackNotFound
from rampante.core.technologies import read_technologies

FALLBACK_REASON = "no tag match; fallback to lowest priority"

MIN_COMPONENT_LENGTH = 3
MIN_SUBSTRING_TAG_LENGTH = 4
MIN_SUBSTRING_TOKEN_LENGTH = 3


@dataclass
class SelectionResult:
    """一次栈选择的结果。"""

    selected_stack: StackRecord
    matched_tags: list[str] = field(default_factory=list)
    priority: int = 0
    fallback: bool = False
    match_reason: str = ""
    technologies: list[str] = field(default_factory=list)
    stack_file: Path | None = None

    @property
    def stack_name(self) -> str:
        return self.selected_stack.name

    def to_dict(self) -> dict[str, Any]:
        """转换为字典以便 JSON 输出。"""
        return {
            "selectedStack": self.selected_stack.name,
            "stackFile": str(self.stack_file) if self.stack_file else None,
            "priority": self.priority,
            "technologies": list(self.technologies),
            "fallback": self.fallback,
            "matchReason": self.match_reason,
            "matchedTags": list(self.matched_tags),
            "tags": list(self.selected_stack.tags),
        }


def tokenize_prompt(prompt: str) -> list[str]:
    """将提示词规范化为小写、按空白切分的单词列表。"""
    return prompt.lower().split()


def tag_matches(tag: str, tokens: Sequence[str]) -> bool:
    """判断某个标签是否被任意单词命中。

    命中规则（任一满足即可）：
    1. 单词与标签完全相同（忽略大小写）
    2. 带连字符的标签：单词等于某个长度 >= 3 的组成部分
    3. 不带连字符且长度 >= 4 的标签：与长度 >= 3 的单词互为子串
    """
    tag_lower = tag.lower()
    for token in tokens:
        if token == tag_lower:
            return True
        if "-" in tag_lower:
            if any(
                len(part) >= MIN_COMPONENT_LENGTH and token == part
                for part in tag_lower.split("-")
            ):
                return True
        elif (
            len(tag_lower) >= MIN_SUBSTRING_TAG_LENGTH
            and len(token) >= MIN_SUBSTRING_TOKEN_LENGTH
            and (tag_lower in token or token in tag_lower)
        ):
            return True
    return False


def match_tags(tags: Sequence[str], tokens: Sequence[str]) -> list[str]:
    """返回被命中的标签（保持栈中的标签顺序，每个标签忽略大小写最多计一次）。"""
    matched: list[str] = []
    seen: set[str] = set()
    for tag in tags:
        key = tag.lower()
        if key in seen:
            continue
        seen.add(key)
        if tag_matches(tag, tokens):
            matched.append(tag)
    return matched


def _rank_key(stack: StackRecord) -> tuple[int, int]:
    return (stack.priority, stack.order)


def find_stack(catalog: Sequence[StackRecord], name: str) -> StackRecord | None:
    """按名称查找栈：先精确匹配，再忽略大小写匹配。"""
    for stack in catalog:
        if stack.name == name:
            return stack
    name_lower = name.lower()
    for stack in catalog:
        if stack.name.lower() == name_lower:
            return stack
    return None


def find_lowest_priority_stack(catalog: Sequence[StackRecord]) -> StackRecord | None:
    """返回优先级数值最小的栈（平局时取文档中更靠前者）。"""
    if not catalog:
        return None
    return min(catalog, key=_rank_key)


def choose_stack(
    prompt: str, catalog: Sequence[StackRecord]
) -> tuple[StackRecord, list[str]]:
    """自动选择：返回 (最佳栈, 命中标签)；无任何命中时命中标签为空。

    异常：
        NoStacksAvailable：catalog 为空
    """
    if not catalog:
        raise NoStacksAvailable()

    tokens = tokenize_prompt(prompt)
    best: StackRecord | None = None
    best_tags: list[str] = []

    for stack in catalog:
        matched = match_tags(stack.tags, tokens)
        if not matched:
            continue
        if best is None or len(matched) > len(best_tags):
            best, best_tags = stack, matched
        elif len(matched) == len(best_tags) and _rank_key(stack) < _rank_key(best):
            best, best_tags = stack, matched

    if best is None:
        return find_lowest_priority_stack(catalog), []
    return best, best_tags


def select_stack(
    prompt: str,
    catalog: Sequence[StackRecord],
    stacks_dir: Path,
    stack_name: str | None = None,
) -> SelectionResult:
    """为提示词选择一个栈，并提取其技术列表。

    参数：
        prompt：自由文本的项目描述
        catalog：解析后的栈列表
        stacks_dir：栈详情文档所在目录
        stack_name：手动指定的栈名称（可选）

    返回：
        SelectionResult

    异常：
        NoStacksAvailable：catalog 为空
        StackNotFound：手动指定的栈不存在
        StackFileMissing：选中栈的详情文档不存在
    """
    if not catalog:
        raise NoStacksAvailable()

    if stack_name:
        selected = find_stack(catalog, stack_name)
        if selected is None:
            raise StackNotFound(stack_name, [stack.name for stack in catalog])
        matched = list(selected.tags)
        fallback = False
        reason = f"manually specified stack: {selected.name}"
    else:
        selected, matched = choose_stack(prompt, catalog)
        fallback = not matched
        reason = FALLBACK_REASON if fallback else f"matched tags: {', '.join(matched)}"

    stack_file = get_stack_file(stacks_dir, selected.name)
    if not validate_stack_file(selected.name, stacks_dir):
        raise StackFileMissing(selected.name, stack_file)

    return SelectionResult(
        selected_stack=selected,
        matched_tags=matched,
        priority=selected.priority,
        fallback=fallback,
        match_reason=reason,
        technologies=read_technologies(stack_file),
        stack_file=stack_file,
    )
