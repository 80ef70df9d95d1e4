"""A string-keyed set of entries, each carrying a mutable value."""

from dataclasses import dataclass
from typing import Any


@dataclass(eq=False)
class HashmapEntry:
    """A unique key together with a value the caller may change freely."""

    key: str
    value: Any = 0


class Hashmap:
    """Interns keys into unique, stable :class:`HashmapEntry` objects."""

    def __init__(self) -> None:
        self._entries: dict[str, HashmapEntry] = {}

    def lookup_or_insert(self, key: str, allow_insert: bool = True) -> HashmapEntry | None:
        """Return the entry for ``key``, creating it with value 0 if allowed.

        Empty keys are never stored and give ``None``, as does a missing key
        when ``allow_insert`` is false.
        """
        if not key:
            return None
        entry = self._entries.get(key)
        if entry is None and allow_insert:
            entry = HashmapEntry(key)
            self._entries[key] = entry
        return entry

    def clear_all_values(self, reset_value: Any = 0) -> None:
        """Set the value of every entry to ``reset_value``."""
        for entry in self._entries.values():
            entry.value = reset_value

    def __len__(self) -> int:
        return len(self._entries)