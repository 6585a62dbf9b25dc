from __future__ import annotations
from typing import Any, Dict, Iterator, Optional


class HeaderManager:
    """
    Case-insensitive header map.

    Entries are keyed by the lower-cased name; a write under any casing replaces
    the previous value (last write wins) and keeps the original insertion slot.
    Emission always uses lower-cased names.
    """

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._items: Dict[str, str] = {}
        for k, v in (initial or {}).items():
            self.set(k, v)

    @staticmethod
    def _key(name: str) -> str:
        return (name or "").strip().lower()

    def set(self, name: str, value: Any) -> None:
        self._items[self._key(name)] = "" if value is None else str(value)

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        return self._items.get(self._key(name), default)

    def has(self, name: str) -> bool:
        return self._key(name) in self._items

    def remove(self, name: str) -> None:
        self._items.pop(self._key(name), None)

    def apply_default(self, name: str, value: Any) -> None:
        if not self.has(name):
            self.set(name, value)

    def to_dict(self) -> Dict[str, str]:
        return dict(self._items)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.has(name)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"HeaderManager({self.to_dict()!r})"
