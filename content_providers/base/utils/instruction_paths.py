"""Dot-notation addressing of instruction items.

``"0.2.1"`` addresses ``items[0].children[2].children[1]``.
"""
from __future__ import annotations

from typing import Iterable, Optional

from ..models import InstructionItem, Instructions


def navigate_to_path(instructions: Optional[Instructions], path: str) -> Optional[InstructionItem]:
    if not path or instructions is None:
        return None
    try:
        indices = [int(part) for part in path.split(".")]
    except ValueError:
        return None

    level = instructions.items
    current: Optional[InstructionItem] = None
    for index in indices:
        if level is None or not 0 <= index < len(level):
            return None
        current = level[index]
        level = current.children
    return current


def generate_path(indices: Iterable[int]) -> str:
    return ".".join(str(i) for i in indices)


__all__ = ["navigate_to_path", "generate_path"]
