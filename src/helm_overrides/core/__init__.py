"""Resource documents and the collection the engine transforms."""

from helm_overrides.core.resmap import ResMap
from helm_overrides.core.resource import (
    Gvk,
    Resource,
    ResourceError,
    ResourceFactory,
    ResourceLoadError,
    ResourceLookupError,
    ResourcePatchError,
    ResId,
)

__all__ = [
    "Gvk",
    "ResId",
    "ResMap",
    "Resource",
    "ResourceError",
    "ResourceFactory",
    "ResourceLoadError",
    "ResourceLookupError",
    "ResourcePatchError",
]
