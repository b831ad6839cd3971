"""Configuration for content providers and the format resolver.

Sources, later ones win:

1. ``DEFAULTS`` / ``RESOLVER_DEFAULTS`` below
2. A JSON or YAML file named by ``CONTENT_PROVIDERS_CONFIG_FILE``
3. Environment variables, optionally seeded from a ``.env`` file
4. Overrides passed by the caller

Environment variables follow ``<PROVIDER>_<FIELD>``: ``LESSONSCHURCH_API_BASE``,
``LESSONSCHURCH_TIMEOUT``, ``LESSONSCHURCH_EMBED_BASE``, ``CATALOG_CATALOG_FILE``.
``CONTENT_PROVIDERS_ALLOW_LOSSY=0`` turns off derived views.

Config file layout::

    lessonschurch:
      api_base: https://api.lessons.church
      timeout: 15
    catalog:
      catalog_file: ./catalog.yaml
    resolver:
      allow_lossy: true
"""
from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from ..base.constants import DEFAULT_HTTP_TIMEOUT
from ..formats.resolver import ResolverOptions

CONFIG_FILE_ENV = "CONTENT_PROVIDERS_CONFIG_FILE"
ALLOW_LOSSY_ENV = "CONTENT_PROVIDERS_ALLOW_LOSSY"
DOTENV_ENV = "DOTENV_FILE"

DEFAULTS: Dict[str, Dict[str, Any]] = {
    "lessonschurch": {
        "api_base": "https://api.lessons.church",
        "embed_base": "https://lessons.church",
        "timeout": DEFAULT_HTTP_TIMEOUT,
    },
    "catalog": {
        "catalog_file": None,
    },
}

RESOLVER_DEFAULTS: Dict[str, Any] = {"allow_lossy": True}

# config key -> environment suffix, with the converter applied to the raw string
ENV_FIELDS = {
    "api_base": ("API_BASE", str),
    "embed_base": ("EMBED_BASE", str),
    "timeout": ("TIMEOUT", float),
    "catalog_file": ("CATALOG_FILE", str),
}

_TRUTHY = frozenset(("1", "true", "yes", "on"))

_file_cache: Optional[Dict[str, Any]] = None
_dotenv_applied = False


def _parse_dotenv(text: str) -> Dict[str, str]:
    pairs: Dict[str, str] = {}
    for raw in text.splitlines():
        line = raw.strip()
        if line.startswith("#"):
            continue
        key, sep, value = line.partition("=")
        key = key.strip()
        if sep and key:
            pairs[key] = value.strip().strip("\"'")
    return pairs


def _apply_dotenv() -> None:
    """Seed ``os.environ`` from ``.env`` (or ``$DOTENV_FILE``) once; real env vars win."""
    global _dotenv_applied
    if _dotenv_applied:
        return
    _dotenv_applied = True
    path = Path(os.getenv(DOTENV_ENV, ".env"))
    if path.is_file():
        for key, value in _parse_dotenv(path.read_text(encoding="utf-8")).items():
            os.environ.setdefault(key, value)


def _read_config_file() -> Dict[str, Any]:
    global _file_cache
    if _file_cache is None:
        _file_cache = {}
        location = os.getenv(CONFIG_FILE_ENV)
        if location and Path(location).is_file():
            text = Path(location).read_text(encoding="utf-8")
            try:
                data = json.loads(text)
            except json.JSONDecodeError:
                data = yaml.safe_load(text)
            if isinstance(data, dict):
                _file_cache = data
    return _file_cache


def reset_config_cache() -> None:
    """Forget the parsed config file and re-read ``.env`` on next access."""
    global _file_cache, _dotenv_applied
    _file_cache = None
    _dotenv_applied = False


def _section(name: str) -> Dict[str, Any]:
    section = _read_config_file().get(name)
    return dict(section) if isinstance(section, dict) else {}


def _from_env(provider: str) -> Dict[str, Any]:
    found: Dict[str, Any] = {}
    for key, (suffix, convert) in ENV_FIELDS.items():
        raw = os.getenv(f"{provider.upper()}_{suffix}")
        if raw is not None:
            found[key] = convert(raw)
    return found


def _without_none(values: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    return {k: v for k, v in (values or {}).items() if v is not None}


def get_provider_config(provider: str, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Merged settings for one provider id (case-insensitive)."""
    _apply_dotenv()
    name = (provider or "").strip().lower()
    merged: Dict[str, Any] = dict(DEFAULTS.get(name, {}))
    merged.update(_section(name))
    merged.update(_from_env(name))
    merged.update(_without_none(overrides))
    return merged


def get_resolver_options(overrides: Optional[Dict[str, Any]] = None) -> ResolverOptions:
    _apply_dotenv()
    merged: Dict[str, Any] = dict(RESOLVER_DEFAULTS)
    merged.update(_section("resolver"))
    flag = os.getenv(ALLOW_LOSSY_ENV)
    if flag is not None:
        merged["allow_lossy"] = flag.strip().lower() in _TRUTHY
    merged.update(_without_none(overrides))
    return ResolverOptions(allow_lossy=bool(merged["allow_lossy"]))


__all__ = [
    "DEFAULTS",
    "RESOLVER_DEFAULTS",
    "get_provider_config",
    "get_resolver_options",
    "reset_config_cache",
]
