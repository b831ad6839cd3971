"""Conversions between the three content views.

Every function is pure: inputs are never mutated, outputs are built fresh and
share only the immutable ``ContentFile`` objects with their inputs.

``plan_to_*`` serve a provider that only has presentations. The resolver
collapses expanded instructions with ``collapse_instructions`` when a provider's
plain instructions come back empty, and flattens an instructions tree straight
into a playlist with ``instructions_to_playlist``. ``instructions_to_plan`` and
``playlist_to_plan`` cover the remaining directions; a playlist becomes
instructions only by way of a ``Plan``.
"""
from __future__ import annotations

import uuid
from dataclasses import replace
from typing import Iterable, Iterator, List, Optional

from ..base.constants import (
    ACTION_OTHER,
    ACTION_PLAY,
    ACTION_TYPES,
    ITEM_ACTION,
    ITEM_FILE,
    ITEM_SECTION,
)
from ..base.models import (
    ContentFile,
    InstructionItem,
    Instructions,
    Plan,
    PlanPresentation,
    PlanSection,
)
from ..base.utils.media import detect_media_type

# Instruction item types that stand for playable content
PLAYABLE_ITEM_TYPES = frozenset(
    (
        "action",
        "lessonAction",
        "providerPresentation",
        "play",
        "addon",
        "add-on",
        "lessonAddOn",
        "providerFile",
    )
)


def generate_id() -> str:
    return "gen-" + uuid.uuid4().hex[:9]


# ---- Plan -> Playlist ----

def plan_to_playlist(plan: Plan) -> List[ContentFile]:
    """Flat file list of a plan, in section/presentation/file order.

    Keeps every file but drops the section and presentation grouping.
    """
    if plan.all_files:
        return list(plan.all_files)
    return plan.collect_files()


# ---- Plan -> Instructions ----

def _file_item(file: ContentFile) -> InstructionItem:
    return InstructionItem(
        id=file.id,
        item_type=ITEM_FILE,
        label=file.title,
        seconds=file.seconds,
        embed_url=file.embed_url or file.url,
    )


def _total_seconds(files: Iterable[ContentFile]) -> Optional[float]:
    total = sum(f.seconds or 0 for f in files)
    return total or None


def _action_item(presentation: PlanPresentation, expanded: bool) -> InstructionItem:
    children = [_file_item(f) for f in presentation.files]
    item = InstructionItem(
        id=presentation.id,
        item_type=ITEM_ACTION,
        label=presentation.name,
        description=presentation.action_type,
        seconds=_total_seconds(presentation.files),
        children=children,
    )
    if expanded and len(children) == 1:
        item.download_url = children[0].embed_url
    return item


def _section_items(plan: Plan, expanded: bool) -> List[InstructionItem]:
    return [
        InstructionItem(
            id=section.id,
            item_type=ITEM_SECTION,
            label=section.name,
            children=[_action_item(p, expanded) for p in section.presentations],
        )
        for section in plan.sections
    ]


def plan_to_instructions(plan: Plan) -> Instructions:
    """Section -> action -> file outline of a plan.

    Every section and every presentation produces an item, including those
    with nothing below them; an action without children is informational.
    """
    return Instructions(name=plan.name, items=_section_items(plan, expanded=False))


def plan_to_expanded_instructions(plan: Plan) -> Instructions:
    """Like :func:`plan_to_instructions`, with single-file actions carrying the
    file's URL as ``download_url`` so they can be played without descending."""
    return Instructions(name=plan.name, items=_section_items(plan, expanded=True))


# ---- Expanded -> collapsed ----

def _is_file_leaf(item: InstructionItem) -> bool:
    return item.item_type == ITEM_FILE and not item.children


def _collapse_item(item: InstructionItem) -> InstructionItem:
    children = item.children
    if children is None:
        return replace(item)
    if item.item_type == ITEM_ACTION and len(children) == 1 and _is_file_leaf(children[0]):
        leaf = children[0]
        return replace(
            item,
            download_url=item.download_url or leaf.download_url or leaf.embed_url,
            children=[],
        )
    return replace(item, children=[_collapse_item(c) for c in children])


def collapse_instructions(expanded: Instructions) -> Instructions:
    """Drop the lone ``file`` leaf under single-file actions.

    The action keeps (or takes over) the leaf's URL as ``download_url``. Ids and
    order are preserved, and collapsing a collapsed tree changes nothing.
    """
    return Instructions(name=expanded.name, items=[_collapse_item(i) for i in expanded.items])


# ---- Instructions -> Plan ----

def _item_url(item: InstructionItem) -> Optional[str]:
    return item.embed_url or item.download_url


def _item_to_file(item: InstructionItem, url: str) -> ContentFile:
    return ContentFile(
        id=item.id or item.related_id or generate_id(),
        title=item.label or "Untitled",
        media_type=detect_media_type(url),
        url=url,
        embed_url=url,
        seconds=item.seconds,
    )


def map_item_type_to_action_type(item_type: Optional[str]) -> str:
    return ACTION_PLAY if item_type in PLAYABLE_ITEM_TYPES else ACTION_OTHER


def _presentation_from_item(item: InstructionItem) -> PlanPresentation:
    files: List[ContentFile] = []
    for child in item.children or []:
        url = _item_url(child)
        if url:
            files.append(_item_to_file(child, url))

    own_url = _item_url(item)
    if not files and own_url:
        files.append(_item_to_file(item, own_url))

    if item.description in ACTION_TYPES:
        action_type = item.description
    else:
        action_type = map_item_type_to_action_type(item.item_type)

    return PlanPresentation(
        id=item.id or item.related_id or generate_id(),
        name=item.label or "Presentation",
        action_type=action_type,
        files=files,
    )


def instructions_to_plan(instructions: Instructions, plan_id: Optional[str] = None) -> Plan:
    """Rebuild a plan from an outline: top-level items with children become
    sections, their children become presentations."""
    sections = [
        PlanSection(
            id=item.id or item.related_id or generate_id(),
            name=item.label or "Section",
            presentations=[_presentation_from_item(child) for child in item.children or []],
        )
        for item in instructions.items
        if item.children
    ]
    return Plan.build(id=plan_id or generate_id(), name=instructions.name or "Plan", sections=sections)


# ---- Instructions -> Playlist ----

def _iter_media_leaves(items: Iterable[InstructionItem]) -> Iterator[InstructionItem]:
    for item in items:
        if item.embed_url and (item.item_type == ITEM_FILE or not item.children):
            yield item
        if item.children:
            yield from _iter_media_leaves(item.children)


def instructions_to_playlist(instructions: Instructions) -> List[ContentFile]:
    """Every item with an ``embed_url`` that is a file or has no children,
    depth-first at any nesting level."""
    return [_item_to_file(item, item.embed_url) for item in _iter_media_leaves(instructions.items)]


# ---- Playlist -> Plan ----

def playlist_to_plan(
    files: List[ContentFile],
    plan_name: str = "Playlist",
    section_name: str = "Content",
) -> Plan:
    """Wrap a flat playlist into a one-section plan with one presentation per file."""
    presentations = [
        PlanPresentation(id=f"pres-{index}-{file.id}", name=file.title, action_type=ACTION_PLAY, files=[file])
        for index, file in enumerate(files)
    ]
    return Plan(
        id="playlist-plan-" + uuid.uuid4().hex[:9],
        name=plan_name,
        sections=[PlanSection(id="main-section", name=section_name, presentations=presentations)],
        all_files=list(files),
    )


__all__ = [
    "PLAYABLE_ITEM_TYPES",
    "collapse_instructions",
    "generate_id",
    "instructions_to_plan",
    "instructions_to_playlist",
    "map_item_type_to_action_type",
    "plan_to_expanded_instructions",
    "plan_to_instructions",
    "plan_to_playlist",
    "playlist_to_plan",
]
