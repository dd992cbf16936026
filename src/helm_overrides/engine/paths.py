"""Build nested patches from flat dotted-path overrides.

``{"conf.ceph.admin_keyring": "x"}`` becomes ``{"conf": {"ceph": {"admin_keyring": "x"}}}``.
The tree is kept as tagged nodes (:class:`NestedPatch` for mappings, :class:`Leaf`
for values) so that descending through a non-mapping value is a detectable collision.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from helm_overrides.engine.errors import PathCollisionError

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

PATH_SEPARATOR = "."


@dataclass
class Leaf:
    value: Any


@dataclass
class NestedPatch:
    """A mapping node of the patch tree."""

    children: dict[str, NestedPatch | Leaf] = field(default_factory=dict)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> NestedPatch:
        """Expand a mapping value one level into a node; nested mappings stay leaves."""
        return cls(children={k: Leaf(v) for k, v in copy.deepcopy(dict(mapping)).items()})

    def insert(self, path: Sequence[str], value: Any) -> NestedPatch:
        """Set *value* at *path*, creating intermediate mappings as needed.

        A single-segment path overwrites whatever the key held. An
        intermediate key holding ``None`` counts as unset and becomes a
        mapping, one holding a mapping value is merged into, and any other
        leaf there raises :class:`PathCollisionError`.
        """
        return insert(self, path, value)

    def to_dict(self) -> dict[str, Any]:
        return {
            key: child.to_dict() if isinstance(child, NestedPatch) else child.value
            for key, child in self.children.items()
        }


def insert(root: NestedPatch, path: Sequence[str], value: Any) -> NestedPatch:
    """Insert *value* into *root* at *path* and return *root*."""
    if not path:
        raise ValueError("Override path must have at least one segment")

    node = root
    for segment in path[:-1]:
        child = node.children.get(segment)
        if child is None or (isinstance(child, Leaf) and child.value is None):
            child = NestedPatch()
            node.children[segment] = child
        elif isinstance(child, Leaf) and isinstance(child.value, dict):
            child = NestedPatch.from_mapping(child.value)
            node.children[segment] = child
        elif isinstance(child, Leaf):
            raise PathCollisionError(PATH_SEPARATOR.join(path))
        node = child
    node.children[path[-1]] = Leaf(value)
    return root


def split_path(inline_path: str) -> list[str]:
    """Split a dotted path such as ``conf.ceph.admin_keyring`` into segments."""
    return inline_path.split(PATH_SEPARATOR)


def build_patch(items: Iterable[tuple[str, Any]]) -> NestedPatch:
    """Build a patch tree from ``(dotted_path, value)`` pairs, in order."""
    root = NestedPatch()
    for inline_path, value in items:
        insert(root, split_path(inline_path), value)
    return root

