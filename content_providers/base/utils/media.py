"""Media helpers: media type detection and item constructors."""
from __future__ import annotations

from typing import Any, Dict, Optional

from ..constants import MEDIA_IMAGE, MEDIA_VIDEO, VIDEO_URL_PATTERNS
from ..models import ContentFile, ContentFolder


def detect_media_type(url: str, explicit_type: Optional[str] = None) -> str:
    """Return ``video`` or ``image`` for a media URL.

    ``explicit_type`` wins when it names a kind (``video``, ``image``) or a MIME
    type (``video/mp4``); otherwise the URL is matched against known video
    extensions and hosts.
    """
    if explicit_type:
        lowered = explicit_type.lower()
        if lowered == MEDIA_VIDEO or lowered.startswith("video/"):
            return MEDIA_VIDEO
        if lowered == MEDIA_IMAGE or lowered.startswith("image/"):
            return MEDIA_IMAGE
    lowered_url = (url or "").lower()
    return MEDIA_VIDEO if any(p in lowered_url for p in VIDEO_URL_PATTERNS) else MEDIA_IMAGE


def create_folder(
    id: str,
    title: str,
    path: str,
    image: Optional[str] = None,
    is_leaf: Optional[bool] = None,
    provider_data: Optional[Dict[str, Any]] = None,
) -> ContentFolder:
    return ContentFolder(id=id, title=title, path=path, image=image, is_leaf=is_leaf, provider_data=provider_data)


def create_file(
    id: str,
    title: str,
    url: str,
    media_type: Optional[str] = None,
    **options: Any,
) -> ContentFile:
    return ContentFile(id=id, title=title, url=url, media_type=media_type or detect_media_type(url), **options)


__all__ = ["detect_media_type", "create_folder", "create_file"]
