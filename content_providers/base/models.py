"""Domain models shared by providers, converters and the format resolver.

The ``to_dict`` output is the public JSON shape consumed by UIs: camelCase keys,
unset optional fields omitted. A derived ``Plan`` serializes exactly like a
native one.
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Union

from .constants import (
    ACTION_OTHER,
    ACTION_TYPES,
    MEDIA_IMAGE,
    MEDIA_VIDEO,
    TOKEN_EXPIRY_MARGIN_SECONDS,
)


def _compact(data: Dict[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if v is not None}


@dataclass
class ContentFolder:
    """A navigable node in a provider's content tree."""

    id: str
    title: str
    path: str = ""
    image: Optional[str] = None
    is_leaf: Optional[bool] = None
    provider_data: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact(
            {
                "type": "folder",
                "id": self.id,
                "title": self.title,
                "path": self.path,
                "image": self.image,
                "isLeaf": self.is_leaf,
                "providerData": self.provider_data,
            }
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContentFolder":
        return cls(
            id=str(data.get("id", "")),
            title=data.get("title") or "",
            path=data.get("path") or "",
            image=data.get("image"),
            is_leaf=data.get("isLeaf"),
            provider_data=data.get("providerData"),
        )


@dataclass(frozen=True)
class ContentFile:
    """A playable media reference. Never mutated after creation."""

    id: str
    title: str
    url: str
    media_type: str = MEDIA_VIDEO
    image: Optional[str] = None
    embed_url: Optional[str] = None
    seconds: Optional[float] = None
    mux_playback_id: Optional[str] = None
    decryption_key: Optional[str] = None
    media_id: Optional[str] = None
    pingback_url: Optional[str] = None
    provider_data: Optional[Dict[str, Any]] = None

    def __post_init__(self) -> None:
        if self.media_type not in (MEDIA_VIDEO, MEDIA_IMAGE):
            raise ValueError(f"media_type must be 'video' or 'image', got {self.media_type!r}")

    def to_dict(self) -> Dict[str, Any]:
        return _compact(
            {
                "type": "file",
                "id": self.id,
                "title": self.title,
                "mediaType": self.media_type,
                "image": self.image,
                "url": self.url,
                "embedUrl": self.embed_url,
                "seconds": self.seconds,
                "muxPlaybackId": self.mux_playback_id,
                "decryptionKey": self.decryption_key,
                "mediaId": self.media_id,
                "pingbackUrl": self.pingback_url,
                "providerData": self.provider_data,
            }
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContentFile":
        return cls(
            id=str(data.get("id", "")),
            title=data.get("title") or "",
            url=data.get("url") or "",
            media_type=data.get("mediaType") or MEDIA_VIDEO,
            image=data.get("image"),
            embed_url=data.get("embedUrl"),
            seconds=data.get("seconds"),
            mux_playback_id=data.get("muxPlaybackId"),
            decryption_key=data.get("decryptionKey"),
            media_id=data.get("mediaId"),
            pingback_url=data.get("pingbackUrl"),
            provider_data=data.get("providerData"),
        )


ContentItem = Union[ContentFolder, ContentFile]


def is_content_folder(item: ContentItem) -> bool:
    return isinstance(item, ContentFolder)


def is_content_file(item: ContentItem) -> bool:
    return isinstance(item, ContentFile)


def content_item_from_dict(data: Dict[str, Any]) -> ContentItem:
    if data.get("type") == "folder":
        return ContentFolder.from_dict(data)
    return ContentFile.from_dict(data)


@dataclass
class PlanPresentation:
    """One playable unit inside a plan section (a song, a video, an activity)."""

    id: str
    name: str
    action_type: str = ACTION_OTHER
    files: List[ContentFile] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.action_type not in ACTION_TYPES:
            raise ValueError(f"action_type must be one of {ACTION_TYPES}, got {self.action_type!r}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "actionType": self.action_type,
            "files": [f.to_dict() for f in self.files],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlanPresentation":
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name") or "",
            action_type=data.get("actionType") or ACTION_OTHER,
            files=[ContentFile.from_dict(f) for f in data.get("files") or []],
        )


@dataclass
class PlanSection:
    id: str
    name: str
    presentations: List[PlanPresentation] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "presentations": [p.to_dict() for p in self.presentations],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlanSection":
        return cls(
            id=str(data.get("id", "")),
            name=data.get("name") or "",
            presentations=[PlanPresentation.from_dict(p) for p in data.get("presentations") or []],
        )


@dataclass
class Plan:
    """A service plan.

    ``all_files`` is denormalized: it must equal the files of every
    presentation concatenated in section/presentation order. Use
    :meth:`build` to construct a plan with the list filled in.
    """

    id: str
    name: str
    sections: List[PlanSection] = field(default_factory=list)
    all_files: List[ContentFile] = field(default_factory=list)
    description: Optional[str] = None
    image: Optional[str] = None

    @classmethod
    def build(
        cls,
        id: str,
        name: str,
        sections: List[PlanSection],
        description: Optional[str] = None,
        image: Optional[str] = None,
    ) -> "Plan":
        plan = cls(id=id, name=name, sections=sections, description=description, image=image)
        plan.all_files = list(plan.iter_files())
        return plan

    def iter_files(self) -> Iterator[ContentFile]:
        for section in self.sections:
            for presentation in section.presentations:
                yield from presentation.files

    def collect_files(self) -> List[ContentFile]:
        return list(self.iter_files())

    def to_dict(self) -> Dict[str, Any]:
        return _compact(
            {
                "id": self.id,
                "name": self.name,
                "description": self.description,
                "image": self.image,
                "sections": [s.to_dict() for s in self.sections],
                "allFiles": [f.to_dict() for f in self.all_files],
            }
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Plan":
        sections = [PlanSection.from_dict(s) for s in data.get("sections") or []]
        plan = cls(
            id=str(data.get("id", "")),
            name=data.get("name") or "",
            sections=sections,
            description=data.get("description"),
            image=data.get("image"),
        )
        if "allFiles" in data:
            plan.all_files = [ContentFile.from_dict(f) for f in data["allFiles"] or []]
        else:
            plan.all_files = plan.collect_files()
        return plan


@dataclass
class InstructionItem:
    """A node of an instructions outline.

    ``children`` is ``None`` for a leaf and a (possibly empty) list for a
    container; converters always emit a list for sections and actions.
    """

    id: Optional[str] = None
    item_type: Optional[str] = None
    label: Optional[str] = None
    description: Optional[str] = None
    seconds: Optional[float] = None
    embed_url: Optional[str] = None
    download_url: Optional[str] = None
    related_id: Optional[str] = None
    children: Optional[List["InstructionItem"]] = None

    def to_dict(self) -> Dict[str, Any]:
        data = _compact(
            {
                "id": self.id,
                "itemType": self.item_type,
                "relatedId": self.related_id,
                "label": self.label,
                "description": self.description,
                "seconds": self.seconds,
                "embedUrl": self.embed_url,
                "downloadUrl": self.download_url,
            }
        )
        if self.children is not None:
            data["children"] = [c.to_dict() for c in self.children]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InstructionItem":
        children = data.get("children")
        return cls(
            id=data.get("id"),
            item_type=data.get("itemType"),
            label=data.get("label"),
            description=data.get("description"),
            seconds=data.get("seconds"),
            embed_url=data.get("embedUrl"),
            download_url=data.get("downloadUrl"),
            related_id=data.get("relatedId"),
            children=[cls.from_dict(c) for c in children] if children is not None else None,
        )


@dataclass
class Instructions:
    """A forest of instruction items with an optional display name."""

    items: List[InstructionItem] = field(default_factory=list)
    name: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact({"name": self.name, "items": [i.to_dict() for i in self.items]})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Instructions":
        return cls(
            name=data.get("name") or data.get("venueName"),
            items=[InstructionItem.from_dict(i) for i in data.get("items") or []],
        )


@dataclass
class AuthData:
    """OAuth token data returned after a successful authentication."""

    access_token: str
    refresh_token: Optional[str] = None
    token_type: str = "Bearer"
    created_at: Optional[int] = None
    expires_in: Optional[int] = None
    scope: str = ""

    def is_expired(self, now: Optional[float] = None) -> bool:
        if not self.created_at or not self.expires_in:
            return True
        now = time.time() if now is None else now
        return now > self.created_at + self.expires_in - TOKEN_EXPIRY_MARGIN_SECONDS

    def to_dict(self) -> Dict[str, Any]:
        return _compact(
            {
                "access_token": self.access_token,
                "refresh_token": self.refresh_token,
                "token_type": self.token_type,
                "created_at": self.created_at,
                "expires_in": self.expires_in,
                "scope": self.scope,
            }
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AuthData":
        return cls(
            access_token=data.get("access_token") or "",
            refresh_token=data.get("refresh_token"),
            token_type=data.get("token_type") or "Bearer",
            created_at=data.get("created_at"),
            expires_in=data.get("expires_in"),
            scope=data.get("scope") or "",
        )


def is_auth_valid(auth: Optional[AuthData], now: Optional[float] = None) -> bool:
    return auth is not None and not auth.is_expired(now)


@dataclass(frozen=True)
class ProviderLogos:
    light: str = ""
    dark: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {"light": self.light, "dark": self.dark}


@dataclass(frozen=True)
class MediaLicenseResult:
    media_id: str
    status: str = "unknown"  # valid | expired | not_licensed | unknown
    message: Optional[str] = None
    expires_at: Optional[Union[str, int]] = None

    def to_dict(self) -> Dict[str, Any]:
        return _compact(
            {
                "mediaId": self.media_id,
                "status": self.status,
                "message": self.message,
                "expiresAt": self.expires_at,
            }
        )


__all__ = [
    "AuthData",
    "ContentFile",
    "ContentFolder",
    "ContentItem",
    "InstructionItem",
    "Instructions",
    "MediaLicenseResult",
    "Plan",
    "PlanPresentation",
    "PlanSection",
    "ProviderLogos",
    "content_item_from_dict",
    "is_auth_valid",
    "is_content_file",
    "is_content_folder",
]
