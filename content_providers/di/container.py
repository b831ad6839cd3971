from __future__ import annotations

"""Explicit provider registry.

Owns the provider instances and the shared format resolver for one
composition root (an app, the CLI, a test). Nothing here is process-global:
build one container at startup and pass it where it is needed.
"""

from typing import Any, Dict, Iterable, List, Optional

from ..base.capabilities import ProviderCapabilities, ProviderInfo
from ..base.errors import UnknownProviderError
from ..base.factory import ProviderFactory
from ..base.interfaces import ContentProvider
from ..base.models import ProviderLogos
from ..config import get_resolver_options
from ..formats.resolver import FormatResolver

# Announced but not yet implemented providers, listed as "coming soon"
COMING_SOON: Dict[str, str] = {
    "awana": "Awana",
    "freeshow": "FreeShow",
    "gocurriculum": "Go Curriculum",
    "iteachchurch": "iTeachChurch",
    "lifechurch": "LifeChurch",
    "ministrystuff": "MinistryStuff",
}


class ProvidersContainer:
    def __init__(self, config: Dict[str, Any] | None = None) -> None:
        self._config = config or {}
        self._providers: Dict[str, ContentProvider] = {}
        self._resolver: Optional[FormatResolver] = None

    # ---- Resolver ----
    def resolver(self) -> FormatResolver:
        if self._resolver is None:
            self._resolver = FormatResolver(options=get_resolver_options(self._config.get("resolver")))
        return self._resolver

    # ---- Providers ----
    def register(self, provider: ContentProvider) -> ContentProvider:
        self._providers[provider.id] = provider
        return provider

    def provider(self, name: str) -> ContentProvider:
        key = (name or "").lower()
        if key not in self._providers:
            if key not in ProviderFactory.names():
                raise UnknownProviderError(f"Unknown provider '{name}'")
            self._providers[key] = ProviderFactory.create(key, **self._config.get(key, {}))
        return self._providers[key]

    def get(self, name: str) -> Optional[ContentProvider]:
        try:
            return self.provider(name)
        except UnknownProviderError:
            return None

    def all_providers(self) -> List[ContentProvider]:
        for name in ProviderFactory.names():
            self.provider(name)
        return list(self._providers.values())

    def available_providers(self, ids: Optional[Iterable[str]] = None) -> List[ProviderInfo]:
        infos = [p.info() for p in self.all_providers()]
        infos += [
            ProviderInfo(
                id=pid,
                name=name,
                capabilities=ProviderCapabilities(browse=False),
                logos=ProviderLogos(),
                implemented=False,
                auth_types=(),
            )
            for pid, name in COMING_SOON.items()
        ]
        if ids:
            wanted = set(ids)
            infos = [i for i in infos if i.id in wanted]
        return infos

    def clear(self):  # testing convenience
        self._providers.clear()
        self._resolver = None


def build_container(config: Dict[str, Any] | None = None) -> ProvidersContainer:
    return ProvidersContainer(config=config)

__all__ = ["ProvidersContainer", "build_container", "COMING_SOON"]
