"""Read-only view over a decoded Slack payload."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

_MISSING = object()

PathKey = str | int


class Payload(Mapping[str, Any]):
    """Mapping of a decoded payload with path lookups that never guess.

    ``lookup`` walks a path of keys (for mappings) and indexes (for lists)
    and returns ``default`` as soon as a segment is absent or the value at
    that point has the wrong shape.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Any]):
        self._data = dict(data)

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Payload({self._data!r})"

    def lookup(self, *path: PathKey, default: Any = None) -> Any:
        node: Any = self._data
        for key in path:
            if isinstance(key, int):
                if not isinstance(node, list) or not -len(node) <= key < len(node):
                    return default
                node = node[key]
            else:
                if not isinstance(node, Mapping) or key not in node:
                    return default
                node = node[key]
        return node

    def lookup_str(self, *path: PathKey) -> str | None:
        """Return the non-empty string at ``path`` or None."""
        value = self.lookup(*path)
        if isinstance(value, str) and value:
            return value
        return None

    def to_dict(self) -> dict[str, Any]:
        return dict(self._data)


def format_path(path: tuple[PathKey, ...]) -> str:
    parts: list[str] = []
    for key in path:
        if isinstance(key, int):
            parts.append(f"[{key}]")
        else:
            parts.append(f".{key}" if parts else key)
    return "".join(parts)
