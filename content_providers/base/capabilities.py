"""Capability descriptor for content providers.

A provider declares which content views it serves natively. A view that can
only be reached by converting another view is reported as ``False``; deriving
it is the format resolver's job, not the provider's.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from .constants import FORMAT_INSTRUCTIONS, FORMAT_PLAYLIST, FORMAT_PRESENTATIONS
from .models import ProviderLogos

NATIVE_FORMATS: Tuple[str, ...] = (FORMAT_PRESENTATIONS, FORMAT_PLAYLIST, FORMAT_INSTRUCTIONS)


@dataclass(frozen=True)
class ProviderCapabilities:
    browse: bool = True
    presentations: bool = False
    playlist: bool = False
    instructions: bool = False
    media_licensing: bool = False

    def supports(self, fmt: str) -> bool:
        if fmt not in NATIVE_FORMATS:
            raise ValueError(f"Unknown content format '{fmt}'")
        return bool(getattr(self, fmt))

    def native_formats(self) -> List[str]:
        return [fmt for fmt in NATIVE_FORMATS if getattr(self, fmt)]

    def to_dict(self) -> Dict[str, bool]:
        return {
            "browse": self.browse,
            "presentations": self.presentations,
            "playlist": self.playlist,
            "instructions": self.instructions,
            "mediaLicensing": self.media_licensing,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProviderCapabilities":
        return cls(
            browse=bool(data.get("browse", True)),
            presentations=bool(data.get("presentations", False)),
            playlist=bool(data.get("playlist", False)),
            instructions=bool(data.get("instructions", False)),
            media_licensing=bool(data.get("mediaLicensing", data.get("media_licensing", False))),
        )


BROWSE_ONLY = ProviderCapabilities()


@dataclass(frozen=True)
class ProviderInfo:
    """Listing entry describing a provider for pickers and the CLI."""

    id: str
    name: str
    capabilities: ProviderCapabilities
    logos: ProviderLogos = field(default_factory=ProviderLogos)
    implemented: bool = True
    requires_auth: bool = False
    auth_types: Tuple[str, ...] = ("none",)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "logos": self.logos.to_dict(),
            "implemented": self.implemented,
            "requiresAuth": self.requires_auth,
            "authTypes": list(self.auth_types),
            "capabilities": self.capabilities.to_dict(),
        }


__all__ = [
    "BROWSE_ONLY",
    "NATIVE_FORMATS",
    "ProviderCapabilities",
    "ProviderInfo",
]
