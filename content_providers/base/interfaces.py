"""Provider boundary consumed by the format resolver.

Every accessor exists on the base class. Accessors for views a provider does
not serve keep the default implementation, which returns ``None``, so callers
never need ``hasattr`` checks. Implementations must normalize network and
parsing failures to ``None`` as well.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from .capabilities import BROWSE_ONLY, ProviderCapabilities, ProviderInfo
from .models import (
    AuthData,
    ContentFile,
    ContentItem,
    Instructions,
    MediaLicenseResult,
    Plan,
    ProviderLogos,
)


class ContentProvider(ABC):
    id: str = ""
    name: str = ""
    logos: ProviderLogos = ProviderLogos()
    capabilities: ProviderCapabilities = BROWSE_ONLY
    requires_auth: bool = False
    auth_types: Tuple[str, ...] = ("none",)

    def get_capabilities(self) -> ProviderCapabilities:
        return self.capabilities

    def info(self) -> ProviderInfo:
        return ProviderInfo(
            id=self.id,
            name=self.name,
            capabilities=self.get_capabilities(),
            logos=self.logos,
            requires_auth=self.requires_auth,
            auth_types=tuple(self.auth_types),
        )

    @abstractmethod
    async def browse(self, path: Optional[str] = None, auth: Optional[AuthData] = None) -> List[ContentItem]:
        """List the folders and files below ``path`` (root when empty)."""

    async def get_presentations(self, path: str, auth: Optional[AuthData] = None) -> Optional[Plan]:
        """Sectioned plan for ``path``. Required when ``capabilities.presentations``."""
        return None

    async def get_playlist(
        self,
        path: str,
        auth: Optional[AuthData] = None,
        resolution: Optional[int] = None,
    ) -> Optional[List[ContentFile]]:
        """Flat file list for ``path``. Required when ``capabilities.playlist``."""
        return None

    async def get_instructions(self, path: str, auth: Optional[AuthData] = None) -> Optional[Instructions]:
        """Instructions outline for ``path``. Required when ``capabilities.instructions``."""
        return None

    async def get_expanded_instructions(self, path: str, auth: Optional[AuthData] = None) -> Optional[Instructions]:
        """Instructions with per-file leaves. Required when ``capabilities.instructions``."""
        return None

    async def check_media_license(self, media_id: str, auth: Optional[AuthData] = None) -> Optional[MediaLicenseResult]:
        return None

    def __repr__(self) -> str:  # pragma: no cover - trivial
        return f"{type(self).__name__}(id={self.id!r})"


__all__ = ["ContentProvider"]
