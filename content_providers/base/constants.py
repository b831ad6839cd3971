"""Base shared constants for content providers.

Central location to avoid scattering magic strings and default numbers.
"""
from __future__ import annotations

# Content view names (also the wire values of ``sourceFormat``)
FORMAT_PLAYLIST = "playlist"
FORMAT_PRESENTATIONS = "presentations"
FORMAT_INSTRUCTIONS = "instructions"
FORMAT_EXPANDED_INSTRUCTIONS = "expandedInstructions"

# Instruction item types produced by the converters
ITEM_SECTION = "section"
ITEM_ACTION = "action"
ITEM_FILE = "file"

# Presentation action classifications
ACTION_PLAY = "play"
ACTION_ADD_ON = "add-on"
ACTION_OTHER = "other"
ACTION_TYPES = (ACTION_PLAY, ACTION_ADD_ON, ACTION_OTHER)

# Media kinds
MEDIA_VIDEO = "video"
MEDIA_IMAGE = "image"

# URL fragments that mark a media URL as video
VIDEO_URL_PATTERNS = (".mp4", ".webm", ".m3u8", ".mov", "stream.mux.com")

# Default HTTP timeout (seconds)
DEFAULT_HTTP_TIMEOUT = 30.0

# Tokens are treated as expired this many seconds before their real expiry
TOKEN_EXPIRY_MARGIN_SECONDS = 5 * 60

__all__ = [
    "FORMAT_PLAYLIST",
    "FORMAT_PRESENTATIONS",
    "FORMAT_INSTRUCTIONS",
    "FORMAT_EXPANDED_INSTRUCTIONS",
    "ITEM_SECTION",
    "ITEM_ACTION",
    "ITEM_FILE",
    "ACTION_PLAY",
    "ACTION_ADD_ON",
    "ACTION_OTHER",
    "ACTION_TYPES",
    "MEDIA_VIDEO",
    "MEDIA_IMAGE",
    "VIDEO_URL_PATTERNS",
    "DEFAULT_HTTP_TIMEOUT",
    "TOKEN_EXPIRY_MARGIN_SECONDS",
]
