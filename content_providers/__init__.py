"""content_providers package

Unified abstraction over third-party content providers (service planning
tools, lesson libraries, media libraries). Each provider exposes a browsable
folder/file tree and up to three views of a service plan: a flat playlist, a
sectioned plan, and an instructions outline. The format resolver serves any
view for any provider, deriving it from another view when needed.

Public API (re-exported):
    - Models: ContentFile, ContentFolder, Plan, PlanSection, PlanPresentation,
      InstructionItem, Instructions, AuthData
    - ProviderCapabilities, ContentProvider, HttpContentProvider
    - Conversions: plan_to_playlist, plan_to_instructions,
      plan_to_expanded_instructions, collapse_instructions
    - Resolver: FormatResolver, get_playlist_with_meta,
      get_presentations_with_meta, get_instructions_with_meta
    - create(): provider factory wrapper
    - load_plugin(): third-party providers from the ``content_providers.plugins`` entry point group
"""

__version__ = "0.1.0"

from .base.capabilities import ProviderCapabilities, ProviderInfo
from .base.errors import ErrorCode, ProviderError, UnknownProviderError
from .base.factory import ProviderFactory
from .base.http import HttpContentProvider
from .base.interfaces import ContentProvider
from .base.models import (
    AuthData,
    ContentFile,
    ContentFolder,
    InstructionItem,
    Instructions,
    Plan,
    PlanPresentation,
    PlanSection,
)
from .formats.converters import (
    collapse_instructions,
    plan_to_expanded_instructions,
    plan_to_instructions,
    plan_to_playlist,
)
from .formats.resolver import (
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
    "__version__",
    # Models
    "AuthData",
    "ContentFile",
    "ContentFolder",
    "InstructionItem",
    "Instructions",
    "Plan",
    "PlanPresentation",
    "PlanSection",
    # Providers
    "ContentProvider",
    "HttpContentProvider",
    "ProviderCapabilities",
    "ProviderFactory",
    "ProviderInfo",
    # Errors
    "ErrorCode",
    "ProviderError",
    "UnknownProviderError",
    # Conversions
    "collapse_instructions",
    "plan_to_expanded_instructions",
    "plan_to_instructions",
    "plan_to_playlist",
    # Resolver
    "FormatResolver",
    "ResolvedFormat",
    "ResolvedFormatMeta",
    "ResolverOptions",
    "get_expanded_instructions_with_meta",
    "get_instructions_with_meta",
    "get_playlist_with_meta",
    "get_presentations_with_meta",
    # Helpers
    "create",
    "load_plugin",
]


def create(provider_name: str, **kwargs) -> ContentProvider:
    """Instantiate a built-in provider via ``ProviderFactory``."""
    return ProviderFactory.create(provider_name, **kwargs)


def load_plugin(entry_point_name: str):
    """Load a provider class registered under the ``content_providers.plugins`` entry point group.

    Example (pyproject.toml):
        [project.entry-points."content_providers.plugins"]
        my_custom = "my_pkg.custom_provider:CustomProvider"
    """
    from importlib import metadata

    for ep in metadata.entry_points(group="content_providers.plugins"):
        if ep.name == entry_point_name:
            return ep.load()
    raise LookupError(f"No provider plugin named '{entry_point_name}'")
