"""
Case-insensitive shortcut name -> path mapping.

Lookups ignore case, but the casing a name was stored with is what iteration,
serialization and equality see.
"""
import re
from typing import Dict, Iterator, Mapping, MutableMapping, Optional, Tuple

SHORTCUT_NAME_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


def is_valid_name(name: str) -> bool:
    return isinstance(name, str) and bool(SHORTCUT_NAME_PATTERN.match(name))


class ShortcutMap(MutableMapping[str, str]):
    """Mapping of shortcut names to absolute paths, keyed case-insensitively"""

    def __init__(self, data: Optional[Mapping[str, str]] = None):
        self._data: Dict[str, Tuple[str, str]] = {}  # lowered name -> (name, path)
        if data:
            self.update(data)

    def canonical_name(self, name: str) -> Optional[str]:
        """Return the stored casing of `name`, or None if absent."""
        entry = self._data.get(name.lower())
        return entry[0] if entry else None

    def __getitem__(self, name: str) -> str:
        return self._data[name.lower()][1]

    def __setitem__(self, name: str, path: str) -> None:
        # A later assignment under another casing replaces the stored casing
        self._data[name.lower()] = (name, path)

    def __delitem__(self, name: str) -> None:
        del self._data[name.lower()]

    def __iter__(self) -> Iterator[str]:
        return (name for name, _path in self._data.values())

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Mapping):
            return NotImplemented
        return self.to_dict() == dict(other.items())

    def to_dict(self) -> Dict[str, str]:
        return {name: path for name, path in self._data.values()}

    def copy(self) -> "ShortcutMap":
        return ShortcutMap(self.to_dict())

    def __repr__(self) -> str:
        return f"ShortcutMap({self.to_dict()!r})"
