"""Global variable substitution.

Override values and chart refs may reference entries of the ``global`` table
with ``$(name)`` syntax (e.g. ``repo/$(env)-chart``). Names cannot contain
parentheses, so ``$(a(b))`` and nested references are never recognized.
"""

from __future__ import annotations

import json
import math
import re
from typing import TYPE_CHECKING, Any

from helm_overrides.engine.errors import CircularVariableError, UndefinedVariableError

if TYPE_CHECKING:
    from collections.abc import Mapping

_TOKEN_RE = re.compile(r"\$\(([^()]+)\)")


def _float_text(value: float) -> str:
    """Shortest form, integral floats without a fraction (``3.0`` renders as ``3``)."""
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    if value.is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(value)


def to_text(value: Any) -> str:
    """Render a config value the way it appears when embedded in a string."""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, float):
        return _float_text(value)
    if isinstance(value, (dict, list)):
        return json.dumps(value, separators=(",", ":"), default=str)
    return str(value)


class VariableResolver:
    """Resolve ``$(name)`` references against a read-only global table."""

    def __init__(self, variables: Mapping[str, Any]) -> None:
        self._variables = variables
        self._acyclic: set[str] = set()

    def _lookup(self, name: str) -> Any:
        value = self._variables.get(name)
        if value is None:
            raise UndefinedVariableError(name)
        return value

    def _check_acyclic(self, name: str, trail: tuple[str, ...] = ()) -> None:
        """Raise if expanding *name* can reach *name* again through table values."""
        if name in trail:
            raise CircularVariableError(name)
        if name in self._acyclic or name not in self._variables:
            return
        value = self._variables[name]
        if value is not None:
            for ref in _TOKEN_RE.findall(to_text(value)):
                self._check_acyclic(ref, (*trail, name))
        self._acyclic.add(name)

    def resolve(self, value: Any) -> Any:
        """Return *value* with every global reference substituted.

        - No reference: *value* is returned as-is (type preserved).
        - A reference spanning the whole text: the table entry itself is
          returned, so structured values survive substitution.
        - Embedded references: every occurrence is replaced by the entry's
          text and the result is re-scanned until no reference remains.

        Raises:
            UndefinedVariableError: A referenced name is not in the table.
            CircularVariableError: An embedded entry expands back into itself.
        """
        text = to_text(value)
        match = _TOKEN_RE.search(text)
        if match is None:
            return value

        while match is not None:
            token, name = match.group(0), match.group(1)
            resolved = self._lookup(name)
            if token == text:
                return resolved
            self._check_acyclic(name)
            text = text.replace(token, to_text(resolved))
            match = _TOKEN_RE.search(text)
        return text

