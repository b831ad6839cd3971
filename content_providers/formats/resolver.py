"""Format resolver.

Serves any of the content views for any provider. A view the provider declares
natively is fetched directly; otherwise (or when the native call yields
nothing) the first natively supported alternative in a fixed priority order is
fetched once and converted. Every call returns a ``ResolvedFormat`` whose
``meta`` tells native, derived and unobtainable results apart.

Resolution is strictly sequential: one native attempt, then at most one
fallback attempt. Nothing is cached between calls. For instructions the native
attempt also covers the expanded accessor: when the plain outline comes back
empty its expanded form is collapsed and served as a derived result.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar

from ..base.constants import (
    FORMAT_EXPANDED_INSTRUCTIONS,
    FORMAT_INSTRUCTIONS,
    FORMAT_PLAYLIST,
    FORMAT_PRESENTATIONS,
)
from ..base.interfaces import ContentProvider
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import AuthData, ContentFile, Instructions, Plan
from ..base.utils.paths import get_segment, parse_path
from . import converters

T = TypeVar("T")

# Alternative sources per target, best (least lossy) first
FALLBACK_ORDER: Dict[str, Tuple[str, ...]] = {
    FORMAT_PLAYLIST: (FORMAT_PRESENTATIONS, FORMAT_INSTRUCTIONS),
    FORMAT_PRESENTATIONS: (FORMAT_INSTRUCTIONS, FORMAT_PLAYLIST),
    FORMAT_INSTRUCTIONS: (FORMAT_PRESENTATIONS, FORMAT_PLAYLIST),
    FORMAT_EXPANDED_INSTRUCTIONS: (FORMAT_INSTRUCTIONS, FORMAT_PRESENTATIONS, FORMAT_PLAYLIST),
}

# Capability flag that declares native support for a target
CAPABILITY_FOR: Dict[str, str] = {
    FORMAT_PLAYLIST: FORMAT_PLAYLIST,
    FORMAT_PRESENTATIONS: FORMAT_PRESENTATIONS,
    FORMAT_INSTRUCTIONS: FORMAT_INSTRUCTIONS,
    FORMAT_EXPANDED_INSTRUCTIONS: FORMAT_INSTRUCTIONS,
}


@dataclass(frozen=True)
class ResolvedFormatMeta:
    is_native: bool
    source_format: Optional[str] = None
    is_lossy: bool = False

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"isNative": self.is_native, "isLossy": self.is_lossy}
        if self.source_format is not None:
            data["sourceFormat"] = self.source_format
        return data


NATIVE_META = ResolvedFormatMeta(is_native=True)
UNSUPPORTED_META = ResolvedFormatMeta(is_native=False)


@dataclass(frozen=True)
class ResolvedFormat(Generic[T]):
    data: Optional[T]
    meta: ResolvedFormatMeta

    @property
    def is_supported(self) -> bool:
        return self.data is not None

    def to_dict(self) -> Dict[str, Any]:
        data: Any = self.data
        if isinstance(data, list):
            data = [item.to_dict() for item in data]
        elif data is not None:
            data = data.to_dict()
        return {"data": data, "meta": self.meta.to_dict()}


@dataclass(frozen=True)
class ResolverOptions:
    # When False only native data is served; derivation is reported as unsupported.
    allow_lossy: bool = True


class FormatResolver:
    def __init__(self, options: Optional[ResolverOptions] = None, logger: Optional[logging.Logger] = None) -> None:
        self.options = options or ResolverOptions()
        self._logger = logger or get_logger("content_providers.resolver")

    # ---- Public entry points ----

    async def get_playlist_with_meta(
        self,
        provider: ContentProvider,
        path: str,
        auth: Optional[AuthData] = None,
        resolution: Optional[int] = None,
    ) -> ResolvedFormat[List[ContentFile]]:
        return await self.resolve(provider, FORMAT_PLAYLIST, path, auth, resolution=resolution)

    async def get_presentations_with_meta(
        self,
        provider: ContentProvider,
        path: str,
        auth: Optional[AuthData] = None,
    ) -> ResolvedFormat[Plan]:
        return await self.resolve(provider, FORMAT_PRESENTATIONS, path, auth)

    async def get_instructions_with_meta(
        self,
        provider: ContentProvider,
        path: str,
        auth: Optional[AuthData] = None,
    ) -> ResolvedFormat[Instructions]:
        return await self.resolve(provider, FORMAT_INSTRUCTIONS, path, auth)

    async def get_expanded_instructions_with_meta(
        self,
        provider: ContentProvider,
        path: str,
        auth: Optional[AuthData] = None,
    ) -> ResolvedFormat[Instructions]:
        return await self.resolve(provider, FORMAT_EXPANDED_INSTRUCTIONS, path, auth)

    async def get_playlist(self, provider, path, auth=None, resolution=None) -> Optional[List[ContentFile]]:
        return (await self.get_playlist_with_meta(provider, path, auth, resolution)).data

    async def get_presentations(self, provider, path, auth=None) -> Optional[Plan]:
        return (await self.get_presentations_with_meta(provider, path, auth)).data

    async def get_instructions(self, provider, path, auth=None) -> Optional[Instructions]:
        return (await self.get_instructions_with_meta(provider, path, auth)).data

    async def get_expanded_instructions(self, provider, path, auth=None) -> Optional[Instructions]:
        return (await self.get_expanded_instructions_with_meta(provider, path, auth)).data

    # ---- Resolution ----

    async def resolve(
        self,
        provider: ContentProvider,
        target: str,
        path: str,
        auth: Optional[AuthData] = None,
        resolution: Optional[int] = None,
    ) -> ResolvedFormat[Any]:
        if target not in FALLBACK_ORDER:
            raise ValueError(f"Unknown content format '{target}'")
        caps = provider.get_capabilities()
        ctx = LogContext(provider=provider.id, path=path, target=target)

        if caps.supports(CAPABILITY_FOR[target]):
            data = await self._fetch(provider, target, path, auth, resolution, ctx)
            if data is not None:
                log_event(self._logger, "resolve.native", ctx, level=logging.DEBUG)
                return ResolvedFormat(data, NATIVE_META)
            if target == FORMAT_INSTRUCTIONS and self.options.allow_lossy:
                expanded = await self._fetch(provider, FORMAT_EXPANDED_INSTRUCTIONS, path, auth, resolution, ctx)
                if expanded is not None:
                    log_event(self._logger, "resolve.derived", ctx, level=logging.DEBUG, source=FORMAT_EXPANDED_INSTRUCTIONS)
                    return ResolvedFormat(
                        converters.collapse_instructions(expanded),
                        ResolvedFormatMeta(is_native=False, source_format=FORMAT_EXPANDED_INSTRUCTIONS, is_lossy=True),
                    )

        source = self._pick_source(caps, target) if self.options.allow_lossy else None
        if source is None:
            log_event(self._logger, "resolve.unsupported", ctx, level=logging.DEBUG)
            return ResolvedFormat(None, UNSUPPORTED_META)

        source_data = await self._fetch(provider, source, path, auth, resolution, ctx)
        if source_data is None:
            log_event(self._logger, "resolve.unsupported", ctx, level=logging.DEBUG, source=source)
            return ResolvedFormat(None, UNSUPPORTED_META)

        converted = self._convert(target, source, source_data, path)
        log_event(self._logger, "resolve.derived", ctx, level=logging.DEBUG, source=source)
        return ResolvedFormat(converted, ResolvedFormatMeta(is_native=False, source_format=source, is_lossy=True))

    @staticmethod
    def _pick_source(caps, target: str) -> Optional[str]:
        for source in FALLBACK_ORDER[target]:
            if caps.supports(CAPABILITY_FOR[source]):
                return source
        return None

    async def _fetch(
        self,
        provider: ContentProvider,
        fmt: str,
        path: str,
        auth: Optional[AuthData],
        resolution: Optional[int],
        ctx: LogContext,
    ) -> Any:
        try:
            if fmt == FORMAT_PLAYLIST:
                return await provider.get_playlist(path, auth, resolution)
            if fmt == FORMAT_PRESENTATIONS:
                return await provider.get_presentations(path, auth)
            if fmt == FORMAT_INSTRUCTIONS:
                return await provider.get_instructions(path, auth)
            return await provider.get_expanded_instructions(path, auth)
        except Exception as e:
            # A provider that breaks its contract counts as having returned nothing.
            log_event(
                self._logger,
                "resolve.native_error",
                ctx,
                level=logging.WARNING,
                source=fmt,
                error=f"{type(e).__name__}: {e}",
            )
            return None

    @staticmethod
    def _convert(target: str, source: str, data: Any, path: str) -> Any:
        if source == FORMAT_PLAYLIST:
            # A flat list has no structure of its own; lift it into a plan first.
            data = converters.playlist_to_plan(data)
            source = FORMAT_PRESENTATIONS
            if target == FORMAT_PRESENTATIONS:
                return data
        elif source == FORMAT_INSTRUCTIONS:
            if target == FORMAT_EXPANDED_INSTRUCTIONS:
                return data
            if target == FORMAT_PLAYLIST:
                return converters.instructions_to_playlist(data)
            data = converters.instructions_to_plan(data, plan_id=get_segment(path, parse_path(path).depth - 1))
            if target == FORMAT_PRESENTATIONS:
                return data

        if target == FORMAT_PLAYLIST:
            return converters.plan_to_playlist(data)
        if target == FORMAT_INSTRUCTIONS:
            return converters.plan_to_instructions(data)
        return converters.plan_to_expanded_instructions(data)


_default_resolver: Optional[FormatResolver] = None


def default_resolver() -> FormatResolver:
    global _default_resolver
    if _default_resolver is None:
        _default_resolver = FormatResolver()
    return _default_resolver


async def get_playlist_with_meta(provider, path, auth=None, resolution=None) -> ResolvedFormat[List[ContentFile]]:
    return await default_resolver().get_playlist_with_meta(provider, path, auth, resolution)


async def get_presentations_with_meta(provider, path, auth=None) -> ResolvedFormat[Plan]:
    return await default_resolver().get_presentations_with_meta(provider, path, auth)


async def get_instructions_with_meta(provider, path, auth=None) -> ResolvedFormat[Instructions]:
    return await default_resolver().get_instructions_with_meta(provider, path, auth)


async def get_expanded_instructions_with_meta(provider, path, auth=None) -> ResolvedFormat[Instructions]:
    return await default_resolver().get_expanded_instructions_with_meta(provider, path, auth)


__all__ = [
    "CAPABILITY_FOR",
    "FALLBACK_ORDER",
    "FormatResolver",
    "ResolvedFormat",
    "ResolvedFormatMeta",
    "ResolverOptions",
    "default_resolver",
    "get_expanded_instructions_with_meta",
    "get_instructions_with_meta",
    "get_playlist_with_meta",
    "get_presentations_with_meta",
]
