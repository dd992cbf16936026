"""Ordered collection of resources addressed by identity."""

from __future__ import annotations

import logging
from io import StringIO
from typing import TYPE_CHECKING, Any

from ruamel.yaml import YAML

from helm_overrides.core.resource import (
    Resource,
    ResourceFactory,
    ResourceLoadError,
    ResourceLookupError,
    ResId,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from pathlib import Path

logger = logging.getLogger(__name__)


def _yaml() -> YAML:
    yaml = YAML(typ="safe")
    yaml.default_flow_style = False
    return yaml


class ResMap:
    """Resources in stream order, looked up by :class:`ResId`."""

    def __init__(self, resources: Iterable[Resource] = ()) -> None:
        self._resources: list[Resource] = list(resources)

    def __len__(self) -> int:
        return len(self._resources)

    def __iter__(self) -> Iterator[Resource]:
        return iter(self._resources)

    def append(self, resource: Resource) -> None:
        self._resources.append(resource)

    def get_by_id(self, res_id: ResId) -> Resource | None:
        """Return the resource matching *res_id*, or ``None`` if there is none.

        Raises:
            ResourceLookupError: More than one resource matches.
        """
        matches = [r for r in self._resources if res_id.matches(r.res_id)]
        if len(matches) > 1:
            raise ResourceLookupError(f"Multiple resources match {res_id}: {matches}")
        return matches[0] if matches else None

    def deep_copy(self) -> ResMap:
        return ResMap(r.copy() for r in self._resources)

    def to_list(self) -> list[dict[str, Any]]:
        return [r.as_map() for r in self._resources]

    @classmethod
    def from_yaml(cls, source: str | bytes | Path) -> ResMap:
        """Load a multi-document YAML stream; empty documents are dropped.

        Raises:
            ResourceLoadError: The stream cannot be parsed or a document is
                not a mapping.
        """
        try:
            docs = list(_yaml().load_all(source))
        except Exception as exc:
            raise ResourceLoadError(f"Failed to parse resources: {exc}") from exc

        factory = ResourceFactory()
        resmap = cls()
        for i, doc in enumerate(docs):
            if doc is None:
                continue
            if not isinstance(doc, dict):
                raise ResourceLoadError(f"Document {i} is not a mapping")
            resmap.append(factory.from_map(doc))
        logger.debug("Loaded %d resource(s)", len(resmap))
        return resmap

    def to_yaml(self) -> str:
        buf = StringIO()
        _yaml().dump_all(self.to_list(), buf)
        return buf.getvalue()
