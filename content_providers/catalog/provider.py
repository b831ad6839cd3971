"""Static media catalog provider.

Serves a catalog of video collections held in memory or loaded from a JSON or
YAML file. Which views it declares natively is configurable, which makes it
the reference provider for exercising the format resolver.

Path structure:
    /                            -> list collections
    /{collectionSlug}            -> list videos in collection
    /{collectionSlug}/{videoId}  -> single video
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml

from ..base.capabilities import ProviderCapabilities
from ..base.constants import ACTION_PLAY, ITEM_ACTION, ITEM_FILE, ITEM_SECTION, MEDIA_VIDEO
from ..base.interfaces import ContentProvider
from ..base.models import (
    AuthData,
    ContentFile,
    ContentItem,
    InstructionItem,
    Instructions,
    Plan,
    PlanPresentation,
    PlanSection,
)
from ..base.utils.media import create_folder
from ..base.utils.paths import append_to_path, parse_path

DEFAULT_CAPABILITIES = ProviderCapabilities(presentations=True, playlist=True, instructions=True)


def slugify(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


@dataclass
class CatalogVideo:
    id: str
    title: str
    video_url: str
    thumbnail_url: Optional[str] = None
    mux_playback_id: Optional[str] = None
    seconds: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatalogVideo":
        return cls(
            id=str(data["id"]),
            title=data.get("title") or str(data["id"]),
            video_url=data.get("videoUrl") or data.get("url") or "",
            thumbnail_url=data.get("thumbnailUrl"),
            mux_playback_id=data.get("muxPlaybackId"),
            seconds=data.get("seconds"),
        )

    def to_file(self) -> ContentFile:
        return ContentFile(
            id=self.id,
            title=self.title,
            media_type=MEDIA_VIDEO,
            url=self.video_url,
            image=self.thumbnail_url,
            mux_playback_id=self.mux_playback_id,
            seconds=self.seconds,
        )


@dataclass
class CatalogCollection:
    name: str
    image: Optional[str] = None
    videos: List[CatalogVideo] = field(default_factory=list)

    @property
    def slug(self) -> str:
        return slugify(self.name)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CatalogCollection":
        return cls(
            name=data["name"],
            image=data.get("image") or None,
            videos=[CatalogVideo.from_dict(v) for v in data.get("videos") or []],
        )


def load_catalog(source: Union[str, Path]) -> List[CatalogCollection]:
    """Read a catalog file. YAML is a superset of JSON, so one loader covers both."""
    data = yaml.safe_load(Path(source).read_text(encoding="utf-8")) or {}
    return [CatalogCollection.from_dict(c) for c in data.get("collections") or []]


class CatalogProvider(ContentProvider):
    id = "catalog"
    name = "Media Catalog"

    def __init__(
        self,
        catalog: Optional[Dict[str, Any]] = None,
        catalog_file: Optional[Union[str, Path]] = None,
        capabilities: Optional[ProviderCapabilities] = None,
        provider_id: Optional[str] = None,
        name: Optional[str] = None,
    ) -> None:
        if catalog_file:
            self._collections = load_catalog(catalog_file)
        else:
            self._collections = [CatalogCollection.from_dict(c) for c in (catalog or {}).get("collections") or []]
        self.capabilities = capabilities or DEFAULT_CAPABILITIES
        if provider_id:
            self.id = provider_id
        if name:
            self.name = name

    # ---- Lookup ----

    def _find_collection(self, slug: str) -> Optional[CatalogCollection]:
        return next((c for c in self._collections if c.slug == slug), None)

    def _find_video(self, collection: CatalogCollection, video_id: str) -> Optional[CatalogVideo]:
        return next((v for v in collection.videos if v.id == video_id), None)

    def _locate(self, path: Optional[str]):
        """Return (collection, video) for a path; video is None at collection level."""
        parsed = parse_path(path)
        if parsed.depth not in (1, 2):
            return None, None
        collection = self._find_collection(parsed.segments[0])
        if collection is None or parsed.depth == 1:
            return collection, None
        return collection, self._find_video(collection, parsed.segments[1])

    # ---- Browse ----

    async def browse(self, path: Optional[str] = None, auth: Optional[AuthData] = None) -> List[ContentItem]:
        parsed = parse_path(path)
        if parsed.depth == 0:
            return [
                create_folder(c.slug, c.name, "/" + c.slug, image=c.image)
                for c in self._collections
                if c.videos
            ]
        collection, video = self._locate(path)
        if collection is None:
            return []
        if parsed.depth == 1:
            return [
                create_folder(v.id, v.title, append_to_path(path, v.id), image=v.thumbnail_url, is_leaf=True)
                for v in collection.videos
            ]
        return [video.to_file()] if video else []

    # ---- Native views ----

    async def get_presentations(self, path: str, auth: Optional[AuthData] = None) -> Optional[Plan]:
        collection, video = self._locate(path)
        if collection is None:
            return None
        if parse_path(path).depth == 1:
            presentations = [
                PlanPresentation(id=v.id, name=v.title, action_type=ACTION_PLAY, files=[v.to_file()])
                for v in collection.videos
            ]
            return Plan.build(
                id=collection.slug,
                name=collection.name,
                image=collection.image,
                sections=[PlanSection(id="videos", name="Videos", presentations=presentations)],
            )
        if video is None:
            return None
        presentation = PlanPresentation(id=video.id, name=video.title, action_type=ACTION_PLAY, files=[video.to_file()])
        return Plan.build(
            id=video.id,
            name=video.title,
            image=video.thumbnail_url,
            sections=[PlanSection(id="main", name="Content", presentations=[presentation])],
        )

    async def get_playlist(
        self,
        path: str,
        auth: Optional[AuthData] = None,
        resolution: Optional[int] = None,
    ) -> Optional[List[ContentFile]]:
        collection, video = self._locate(path)
        if collection is None:
            return None
        if parse_path(path).depth == 1:
            return [v.to_file() for v in collection.videos]
        return [video.to_file()] if video else None

    async def get_instructions(self, path: str, auth: Optional[AuthData] = None) -> Optional[Instructions]:
        return self._instructions(path, expanded=False)

    async def get_expanded_instructions(self, path: str, auth: Optional[AuthData] = None) -> Optional[Instructions]:
        return self._instructions(path, expanded=True)

    def _instructions(self, path: str, expanded: bool) -> Optional[Instructions]:
        collection, video = self._locate(path)
        if collection is None:
            return None
        if parse_path(path).depth == 1:
            videos, name, section_id, label = collection.videos, collection.name, collection.slug, "Videos"
        elif video is not None:
            videos, name, section_id, label = [video], video.title, "main", "Content"
        else:
            return None

        if expanded:
            children = [
                InstructionItem(
                    id=v.id,
                    item_type=ITEM_ACTION,
                    label=v.title,
                    description=ACTION_PLAY,
                    seconds=v.seconds,
                    download_url=v.video_url,
                    children=[
                        InstructionItem(id=f"{v.id}-file", item_type=ITEM_FILE, label=v.title, seconds=v.seconds, embed_url=v.video_url)
                    ],
                )
                for v in videos
            ]
        else:
            children = [
                InstructionItem(id=v.id, item_type=ITEM_FILE, label=v.title, seconds=v.seconds, embed_url=v.video_url)
                for v in videos
            ]
        return Instructions(
            name=name,
            items=[InstructionItem(id=section_id, item_type=ITEM_SECTION, label=label, children=children)],
        )


__all__ = ["CatalogProvider", "CatalogCollection", "CatalogVideo", "load_catalog", "slugify"]
