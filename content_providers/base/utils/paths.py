"""Path parsing helpers for hierarchical browsing.

Paths look like ``/segment1/segment2/...``, e.g.
``/lessons/programId/studyId/lessonId/venueId``.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class ParsedPath:
    segments: List[str] = field(default_factory=list)
    depth: int = 0


def parse_path(path: Optional[str]) -> ParsedPath:
    if not path or path == "/":
        return ParsedPath()
    segments = [s for s in path.lstrip("/").split("/") if s]
    return ParsedPath(segments=segments, depth=len(segments))


def get_segment(path: Optional[str], index: int) -> Optional[str]:
    segments = parse_path(path).segments
    if 0 <= index < len(segments):
        return segments[index]
    return None


def build_path(segments: List[str]) -> str:
    if not segments:
        return ""
    return "/" + "/".join(segments)


def append_to_path(base_path: Optional[str], segment: str) -> str:
    if not base_path or base_path == "/":
        return "/" + segment
    return base_path.rstrip("/") + "/" + segment


__all__ = ["ParsedPath", "parse_path", "get_segment", "build_path", "append_to_path"]
