"""Mapping of Lessons.church API payloads onto the shared content models."""
from __future__ import annotations

from typing import Any, Dict, List, Optional

from ..base.constants import ACTION_ADD_ON, ACTION_PLAY, ITEM_ACTION, ITEM_FILE
from ..base.models import ContentFile, InstructionItem, Instructions, Plan, PlanPresentation, PlanSection
from ..base.utils.durations import estimate_image_duration
from ..base.utils.media import detect_media_type

EMBED_BASE = "https://lessons.church"

_ITEM_TYPE_ALIASES = {
    "lessonSection": "section",
    "lessonAction": "action",
    "lessonAddOn": "addon",
}


def normalize_item_type(item_type: Optional[str]) -> Optional[str]:
    return _ITEM_TYPE_ALIASES.get(item_type, item_type) if item_type else item_type


def get_embed_url(item_type: Optional[str], related_id: Optional[str], embed_base: str = EMBED_BASE) -> Optional[str]:
    if not related_id or item_type not in ("action", "addon", "section"):
        return None
    return f"{embed_base}/embed/{item_type}/{related_id}"


def venue_to_plan(venue: Dict[str, Any], embed_base: str = EMBED_BASE) -> Plan:
    """Venue feed -> plan. Only ``play`` and ``add-on`` actions with files are kept."""
    sections: List[PlanSection] = []
    lesson_image = venue.get("lessonImage")

    for section in venue.get("sections") or []:
        presentations: List[PlanPresentation] = []
        for action in section.get("actions") or []:
            action_type = (action.get("actionType") or "other").lower()
            if action_type not in (ACTION_PLAY, ACTION_ADD_ON):
                continue
            action_id = action.get("id")
            embed_url = f"{embed_base}/embed/action/{action_id}" if action_id else None
            files = [
                ContentFile(
                    id=f.get("id") or "",
                    title=f.get("name") or "",
                    media_type=detect_media_type(f["url"], f.get("fileType")),
                    image=lesson_image,
                    url=f["url"],
                    embed_url=embed_url,
                    seconds=f.get("seconds"),
                    provider_data={"streamUrl": f["streamUrl"]} if f.get("streamUrl") else None,
                )
                for f in action.get("files") or []
                if f.get("url")
            ]
            if files:
                presentations.append(
                    PlanPresentation(
                        id=action_id or "",
                        name=action.get("content") or section.get("name") or "Untitled",
                        action_type=action_type,
                        files=files,
                    )
                )
        if presentations:
            sections.append(PlanSection(id=section.get("id") or "", name=section.get("name") or "Untitled Section", presentations=presentations))

    return Plan.build(
        id=venue.get("id") or "",
        name=venue.get("lessonName") or venue.get("name") or "Plan",
        description=venue.get("lessonDescription"),
        image=lesson_image,
        sections=sections,
    )


def playlist_response_to_files(response: Dict[str, Any]) -> List[ContentFile]:
    files: List[ContentFile] = []
    generated = 0
    for message in response.get("messages") or []:
        for f in message.get("files") or []:
            url = f.get("url")
            if not url:
                continue
            file_id = f.get("id")
            if not file_id:
                file_id = f"playlist-{generated}"
                generated += 1
            files.append(
                ContentFile(
                    id=file_id,
                    title=f.get("name") or message.get("name") or "",
                    media_type=detect_media_type(url, f.get("fileType")),
                    image=response.get("lessonImage"),
                    url=url,
                    seconds=f.get("seconds"),
                    provider_data={"loop": f.get("loop"), "loopVideo": f.get("loopVideo")},
                )
            )
    return files


def plan_item_to_instruction(
    item: Dict[str, Any],
    section_actions: Optional[Dict[str, List[InstructionItem]]] = None,
    embed_base: str = EMBED_BASE,
) -> InstructionItem:
    """Plan item -> instruction item.

    With ``section_actions`` (expanded mode), children whose ``relatedId`` names
    a venue section get that section's actions as their children.
    """
    item_type = normalize_item_type(item.get("itemType"))
    related_id = item.get("relatedId")
    children = item.get("children")
    converted: Optional[List[InstructionItem]] = None
    if children is not None:
        converted = []
        for child in children:
            child_related = child.get("relatedId")
            if section_actions and child_related in section_actions:
                child_type = normalize_item_type(child.get("itemType"))
                converted.append(
                    InstructionItem(
                        id=child.get("id"),
                        item_type=child_type,
                        related_id=child_related,
                        label=child.get("label"),
                        description=child.get("description"),
                        seconds=child.get("seconds"),
                        embed_url=get_embed_url(child_type, child_related, embed_base),
                        children=section_actions[child_related],
                    )
                )
            else:
                converted.append(plan_item_to_instruction(child, section_actions, embed_base))
    return InstructionItem(
        id=item.get("id"),
        item_type=item_type,
        related_id=related_id,
        label=item.get("label"),
        description=item.get("description"),
        seconds=item.get("seconds"),
        embed_url=get_embed_url(item_type, related_id, embed_base),
        children=converted,
    )


def build_section_actions(actions_response: Optional[Dict[str, Any]], embed_base: str = EMBED_BASE) -> Dict[str, List[InstructionItem]]:
    """Venue actions response -> {section id: [action item with one file leaf]}."""
    section_actions: Dict[str, List[InstructionItem]] = {}
    for section in (actions_response or {}).get("sections") or []:
        section_id = section.get("id")
        actions = section.get("actions")
        if not section_id or not actions:
            continue
        items = []
        for action in actions:
            action_id = action.get("id")
            embed_url = get_embed_url("action", action_id, embed_base)
            seconds = action.get("seconds")
            if seconds is None:
                seconds = estimate_image_duration()
            items.append(
                InstructionItem(
                    id=action_id,
                    item_type=ITEM_ACTION,
                    related_id=action_id,
                    label=action.get("name"),
                    description=action.get("actionType"),
                    seconds=seconds,
                    download_url=embed_url,
                    children=[InstructionItem(id=f"{action_id}-file", item_type=ITEM_FILE, label=action.get("name"), seconds=seconds, embed_url=embed_url)],
                )
            )
        section_actions[section_id] = items
    return section_actions


def plan_items_to_instructions(
    response: Dict[str, Any],
    section_actions: Optional[Dict[str, List[InstructionItem]]] = None,
    embed_base: str = EMBED_BASE,
) -> Instructions:
    return Instructions(
        name=response.get("venueName"),
        items=[plan_item_to_instruction(i, section_actions, embed_base) for i in response.get("items") or []],
    )


__all__ = [
    "build_section_actions",
    "get_embed_url",
    "normalize_item_type",
    "plan_item_to_instruction",
    "plan_items_to_instructions",
    "playlist_response_to_files",
    "venue_to_plan",
]
