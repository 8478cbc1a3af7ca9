"""标签解析模块"""
from typing import Iterable, List, Optional


TAG_SEPARATOR = ","


def parse_tags(raw: Optional[str]) -> List[str]:
    """
    将逗号分隔的标签输入解析为标签列表

    - 每一项去除首尾空白
    - 丢弃空项（"a,,b" 与 "a,b" 等价）
    - 按首次出现顺序去重，区分大小写

    Args:
        raw: 表单中的原始标签字符串

    Returns:
        去重后的标签列表，空输入返回 []
    """
    if not raw:
        return []

    tags: List[str] = []
    seen = set()
    for piece in raw.split(TAG_SEPARATOR):
        tag = piece.strip()
        if not tag or tag in seen:
            continue
        seen.add(tag)
        tags.append(tag)
    return tags


def format_tags(tags: Optional[Iterable[str]]) -> str:
    """将标签列表还原为编辑表单的输入文本（排序后以 ", " 连接）"""
    if not tags:
        return ""
    return ", ".join(sorted(tags))
