"""
Provider Factory

- Builds ContentProvider instances from a provider id ('catalog', 'lessonschurch').
- Provider modules are imported on first use only.
- Constructor options come from ``config.get_provider_config``; explicit kwargs win.
"""

from __future__ import annotations

import importlib
from typing import Any, Dict, List, Tuple

from ..config import get_provider_config
from .errors import UnknownProviderError


class ProviderFactory:
    """Registry of built-in providers: id -> (module, class, accepted config keys)."""

    _PROVIDERS: Dict[str, Tuple[str, str, Tuple[str, ...]]] = {
        "catalog": ("content_providers.catalog.provider", "CatalogProvider", ("catalog_file",)),
        "lessonschurch": (
            "content_providers.lessonschurch.provider",
            "LessonsChurchProvider",
            ("api_base", "timeout", "embed_base"),
        ),
    }

    @classmethod
    def names(cls) -> List[str]:
        return sorted(cls._PROVIDERS)

    @classmethod
    def options_for(cls, name: str, **kwargs: Any) -> Dict[str, Any]:
        _, _, keys = cls._PROVIDERS[name]
        configured = get_provider_config(name)
        options = {key: configured[key] for key in keys if configured.get(key) is not None}
        options.update(kwargs)
        return options

    @classmethod
    def create(cls, provider: str, **kwargs: Any):
        """
        Instantiate a provider.

        Raises:
            UnknownProviderError: unknown id, or the provider module/constructor failed.
        """
        name = (provider or "").strip().lower()
        if name not in cls._PROVIDERS:
            raise UnknownProviderError(f"Unknown provider '{provider}'")

        module_path, class_name, _ = cls._PROVIDERS[name]
        options = cls.options_for(name, **kwargs)
        try:
            provider_cls = getattr(importlib.import_module(module_path), class_name)
            return provider_cls(**options)
        except Exception as e:
            raise UnknownProviderError(f"Failed to initialize provider '{provider}': {e}") from e


def create_provider(provider: str, **kwargs: Any):
    """Shorthand for ``ProviderFactory.create``."""
    return ProviderFactory.create(provider, **kwargs)


__all__ = ["ProviderFactory", "create_provider"]
