"""Composition root helpers."""

from .container import ProvidersContainer, build_container

__all__ = ["ProvidersContainer", "build_container"]
