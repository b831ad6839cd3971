"""Lessons.church provider (public API, no authentication).

Path structure:
    /lessons                                            -> programs
    /lessons/{programId}                                -> studies
    /lessons/{programId}/{studyId}                      -> lessons
    /lessons/{programId}/{studyId}/{lessonId}           -> venues
    /lessons/{programId}/{studyId}/{lessonId}/{venueId} -> playlist files

    /addons                                             -> categories
    /addons/{category}                                  -> add-on files
"""
from __future__ import annotations

import asyncio
from typing import Any, Dict, List, Optional
from urllib.parse import quote, unquote

import httpx

from ..base.capabilities import ProviderCapabilities
from ..base.constants import DEFAULT_HTTP_TIMEOUT, MEDIA_IMAGE, MEDIA_VIDEO
from ..base.http import HttpContentProvider
from ..base.models import AuthData, ContentFile, ContentItem, Instructions, Plan, ProviderLogos
from ..base.utils.media import create_folder
from ..base.utils.paths import get_segment, parse_path
from .converters import (
    EMBED_BASE,
    build_section_actions,
    plan_items_to_instructions,
    playlist_response_to_files,
    venue_to_plan,
)

VENUE_SEGMENT = 4  # /lessons/{0}/{1}/{2}/{3}/{4=venueId}


def _with_ids(records: List[Any]) -> List[Dict[str, Any]]:
    """Listing entries that can be addressed; anything without an id is dropped."""
    return [r for r in records if isinstance(r, dict) and r.get("id")]


class LessonsChurchProvider(HttpContentProvider):
    id = "lessonschurch"
    name = "Lessons.church"
    api_base = "https://api.lessons.church"
    logos = ProviderLogos(light="https://lessons.church/images/logo.png", dark="https://lessons.church/images/logo-dark.png")
    capabilities = ProviderCapabilities(presentations=True, playlist=True, instructions=True)

    def __init__(
        self,
        api_base: Optional[str] = None,
        timeout: float = DEFAULT_HTTP_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        embed_base: str = EMBED_BASE,
    ) -> None:
        super().__init__(api_base=api_base, timeout=timeout, transport=transport)
        self.embed_base = embed_base.rstrip("/")

    # ---- Browse ----

    async def browse(self, path: Optional[str] = None, auth: Optional[AuthData] = None) -> List[ContentItem]:
        parsed = parse_path(path)
        if parsed.depth == 0:
            return [
                create_folder("lessons-root", "Lessons", "/lessons"),
                create_folder("addons-root", "Add-Ons", "/addons"),
            ]
        root, segments = parsed.segments[0], parsed.segments
        if root == "lessons":
            return await self._browse_lessons(path or "", segments)
        if root == "addons":
            return await self._browse_add_ons(segments)
        return []

    async def _browse_lessons(self, current_path: str, segments: List[str]) -> List[ContentItem]:
        depth = len(segments)
        if depth == 1:
            return await self._folders("/programs/public", "/lessons")
        if depth == 2:
            return await self._folders(f"/studies/public/program/{segments[1]}", current_path)
        if depth == 3:
            return await self._folders(f"/lessons/public/study/{segments[2]}", current_path)
        if depth == 4:
            return await self._venues(segments[3], current_path)
        if depth == 5:
            return list(await self.get_playlist(current_path) or [])
        return []

    async def _folders(self, api_path: str, current_path: str) -> List[ContentItem]:
        response = await self.api_request(api_path)
        if not isinstance(response, list):
            return []
        return [
            create_folder(str(r["id"]), r.get("name") or r.get("title") or "", f"{current_path}/{r['id']}", image=r.get("image"))
            for r in _with_ids(response)
        ]

    async def _venues(self, lesson_id: str, current_path: str) -> List[ContentItem]:
        response = await self.api_request(f"/venues/public/lesson/{lesson_id}")
        if not isinstance(response, list):
            return []
        lesson = await self.api_request(f"/lessons/public/{lesson_id}")
        lesson_image = lesson.get("image") if isinstance(lesson, dict) else None
        return [
            create_folder(str(v["id"]), v.get("name") or "", f"{current_path}/{v['id']}", image=lesson_image, is_leaf=True)
            for v in _with_ids(response)
        ]

    async def _browse_add_ons(self, segments: List[str]) -> List[ContentItem]:
        response = await self.api_request("/addOns/public")
        if not isinstance(response, list):
            return []
        if len(segments) == 1:
            categories = sorted({a["category"] for a in _with_ids(response) if a.get("category")})
            return [create_folder(f"category-{c}", c, f"/addons/{quote(c)}") for c in categories]
        if len(segments) == 2:
            category = unquote(segments[1])
            files: List[ContentItem] = []
            for add_on in _with_ids(response):
                if add_on.get("category") != category:
                    continue
                file = await self._add_on_to_file(add_on)
                if file is not None:
                    files.append(file)
            return files
        return []

    async def _add_on_to_file(self, add_on: Dict[str, Any]) -> Optional[ContentFile]:
        detail = await self.api_request(f"/addOns/public/{add_on['id']}")
        if not isinstance(detail, dict):
            return None
        seconds = add_on.get("seconds") or 10
        video, file = detail.get("video"), detail.get("file")
        if isinstance(video, dict) and video.get("id"):
            url = f"{self.api_base}/externalVideos/download/{video['id']}"
            media_type = MEDIA_VIDEO
            seconds = video.get("seconds") or seconds
        elif isinstance(file, dict) and file.get("contentPath"):
            url = file["contentPath"]
            media_type = MEDIA_VIDEO if (file.get("fileType") or "").startswith("video/") else MEDIA_IMAGE
        else:
            return None
        return ContentFile(
            id=str(add_on["id"]),
            title=add_on.get("name") or "",
            media_type=media_type,
            image=add_on.get("image"),
            url=url,
            embed_url=f"{self.embed_base}/embed/addon/{add_on['id']}",
            seconds=seconds,
            provider_data={"loopVideo": bool(isinstance(video, dict) and video.get("loopVideo"))},
        )

    # ---- Native views ----

    async def get_presentations(self, path: str, auth: Optional[AuthData] = None) -> Optional[Plan]:
        venue_id = get_segment(path, VENUE_SEGMENT)
        if not venue_id:
            return None
        venue = await self.api_request(f"/venues/public/feed/{venue_id}")
        if not isinstance(venue, dict):
            return None
        return venue_to_plan(venue, self.embed_base)

    async def get_playlist(
        self,
        path: str,
        auth: Optional[AuthData] = None,
        resolution: Optional[int] = None,
    ) -> Optional[List[ContentFile]]:
        venue_id = get_segment(path, VENUE_SEGMENT)
        if not venue_id:
            return None
        api_path = f"/venues/playlist/{venue_id}"
        if resolution:
            api_path += f"?resolution={resolution}"
        response = await self.api_request(api_path)
        if not isinstance(response, dict):
            return None
        return playlist_response_to_files(response)

    async def get_instructions(self, path: str, auth: Optional[AuthData] = None) -> Optional[Instructions]:
        venue_id = get_segment(path, VENUE_SEGMENT)
        if not venue_id:
            return None
        response = await self.api_request(f"/venues/public/planItems/{venue_id}")
        if not isinstance(response, dict):
            return None
        return plan_items_to_instructions(response, embed_base=self.embed_base)

    async def get_expanded_instructions(self, path: str, auth: Optional[AuthData] = None) -> Optional[Instructions]:
        venue_id = get_segment(path, VENUE_SEGMENT)
        if not venue_id:
            return None
        plan_items, actions = await asyncio.gather(
            self.api_request(f"/venues/public/planItems/{venue_id}"),
            self.api_request(f"/venues/public/actions/{venue_id}"),
        )
        if not isinstance(plan_items, dict):
            return None
        section_actions = build_section_actions(actions if isinstance(actions, dict) else None, self.embed_base)
        return plan_items_to_instructions(plan_items, section_actions, self.embed_base)


__all__ = ["LessonsChurchProvider"]
