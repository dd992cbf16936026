"""Kubernetes-style resource documents and their identities."""

from __future__ import annotations

import copy
import logging
from typing import Any

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class ResourceError(Exception):
    """Base exception for resource collection errors."""


class ResourceLookupError(ResourceError):
    """Raised when an identity does not select a single resource."""


class ResourcePatchError(ResourceError):
    """Raised when a patch cannot be applied to a resource."""


class ResourceLoadError(ResourceError):
    """Raised when a resource stream cannot be parsed."""


class Gvk(BaseModel):
    """Group / version / kind selector."""

    model_config = ConfigDict(frozen=True)

    group: str = ""
    version: str
    kind: str

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}" if self.group else self.version

    @classmethod
    def from_api_version(cls, api_version: str, kind: str) -> Gvk:
        group, _, version = api_version.rpartition("/")
        return cls(group=group, version=version, kind=kind)

    def __str__(self) -> str:
        return f"{self.api_version}, Kind={self.kind}"


class ResId(BaseModel):
    """Resource identity: a :class:`Gvk` plus a name (namespace is informational)."""

    model_config = ConfigDict(frozen=True)

    gvk: Gvk
    name: str
    namespace: str = ""

    def matches(self, other: ResId) -> bool:
        """Match on gvk and name; namespaces only compared when both are set."""
        if self.gvk != other.gvk or self.name != other.name:
            return False
        return not (self.namespace and other.namespace and self.namespace != other.namespace)

    def __str__(self) -> str:
        ns = f"{self.namespace}/" if self.namespace else ""
        return f"{self.gvk.kind}.{self.gvk.api_version} {ns}{self.name}"


def merge_patch(target: dict[str, Any], patch: dict[str, Any]) -> dict[str, Any]:
    """Apply a JSON merge patch (RFC 7386) to *target* in place.

    Mappings merge recursively, ``None`` deletes the key, anything else
    (lists included) replaces the target value. Patch values are deep-copied.
    """
    for key, value in patch.items():
        if value is None:
            target.pop(key, None)
        elif isinstance(value, dict):
            current = target.get(key)
            if not isinstance(current, dict):
                current = {}
                target[key] = current
            merge_patch(current, value)
        else:
            target[key] = copy.deepcopy(value)
    return target


_IDENTITY_PATHS = (("apiVersion",), ("kind",), ("metadata", "name"))


def _get_path(tree: dict[str, Any], path: tuple[str, ...]) -> Any:
    node: Any = tree
    for key in path:
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


class Resource:
    """A mutable structured document (one YAML document of a resource stream)."""

    def __init__(self, data: dict[str, Any]) -> None:
        self._data = data

    def as_map(self) -> dict[str, Any]:
        """Return the underlying document by reference; mutations are visible."""
        return self._data

    def copy(self) -> Resource:
        return Resource(copy.deepcopy(self._data))

    @property
    def name(self) -> str:
        return _get_path(self._data, ("metadata", "name")) or ""

    @property
    def namespace(self) -> str:
        return _get_path(self._data, ("metadata", "namespace")) or ""

    @property
    def gvk(self) -> Gvk:
        return Gvk.from_api_version(self._data.get("apiVersion", ""), self._data.get("kind", ""))

    @property
    def res_id(self) -> ResId:
        return ResId(gvk=self.gvk, name=self.name, namespace=self.namespace)

    def patch(self, other: Resource) -> None:
        """Merge *other*'s document into this one (JSON merge patch semantics).

        Raises:
            ResourcePatchError: The patch is not a mapping or would change
                this resource's identity.
        """
        patch = other.as_map()
        if not isinstance(patch, dict):
            raise ResourcePatchError(f"Patch for {self.res_id} is not a mapping")

        merged = merge_patch(copy.deepcopy(self._data), patch)
        for path in _IDENTITY_PATHS:
            if _get_path(merged, path) != _get_path(self._data, path):
                raise ResourcePatchError(
                    f"Patch for {self.res_id} would change {'.'.join(path)}"
                )
        self._data.clear()
        self._data.update(merged)
        logger.debug("Patched %s", self.res_id)

    def __repr__(self) -> str:
        return f"Resource({self.res_id})"


class ResourceFactory:
    """Build standalone resources from nested mappings."""

    def from_map(self, tree: dict[str, Any]) -> Resource:
        return Resource(copy.deepcopy(tree))
