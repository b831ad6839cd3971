"""Content view conversions and the format resolver."""

from .converters import (
    collapse_instructions,
    instructions_to_plan,
    instructions_to_playlist,
    plan_to_expanded_instructions,
    plan_to_instructions,
    plan_to_playlist,
    playlist_to_plan,
)
from .resolver import (
    FormatResolver,
    ResolvedFormat,
    ResolvedFormatMeta,
    ResolverOptions,
    get_expanded_instructions_with_meta,
    get_instructions_with_meta,
    get_playlist_with_meta,
    get_presentations_with_meta,
)

__all__ = [
    "FormatResolver",
    "ResolvedFormat",
    "ResolvedFormatMeta",
    "ResolverOptions",
    "collapse_instructions",
    "get_expanded_instructions_with_meta",
    "get_instructions_with_meta",
    "get_playlist_with_meta",
    "get_presentations_with_meta",
    "instructions_to_plan",
    "instructions_to_playlist",
    "plan_to_expanded_instructions",
    "plan_to_instructions",
    "plan_to_playlist",
    "playlist_to_plan",
]
