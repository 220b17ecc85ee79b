"""
Unique key set

Collects distinct string keys (template ids) so each is looked up once.
Not safe for concurrent writers.
"""

from typing import Iterable, Iterator, List


class UniqueKeySet:
    """Set of string keys with a deterministic display form"""

    def __init__(self, keys: Iterable[str] = ()):
        self._keys = {}
        self.add(*keys)

    def add(self, *keys: str) -> None:
        """Add keys, skipping ones already present"""
        for key in keys:
            self._keys.setdefault(key, True)

    def is_empty(self) -> bool:
        return not self._keys

    def values(self) -> List[str]:
        """Keys in no particular order"""
        return list(self._keys)

    def display(self) -> str:
        """Sorted, comma-joined keys for logs and error messages"""
        return ",".join(sorted(self._keys))

    def __contains__(self, key: object) -> bool:
        return key in self._keys

    def __iter__(self) -> Iterator[str]:
        return iter(self._keys)

    def __len__(self) -> int:
        return len(self._keys)

    def __str__(self) -> str:
        return self.display()

    def __repr__(self) -> str:
        return f"UniqueKeySet({self.display()!r})"
