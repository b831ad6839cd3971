"""Static media catalog provider."""

from .provider import CatalogProvider, load_catalog

__all__ = ["CatalogProvider", "load_catalog"]
