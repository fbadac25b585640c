"""In-memory accumulator for externalized strings."""

from __future__ import annotations

from typing import Dict, Iterator, List, Mapping, Optional

from ..models import ResourceEntry


class ResourceTable:
    """Maps generated keys to resource entries for one extraction run."""

    def __init__(self) -> None:
        self._entries: Dict[str, ResourceEntry] = {}

    def record(
        self,
        key: str,
        value: str,
        description: str,
        placeholders: Optional[Mapping[str, Mapping[str, str]]] = None,
    ) -> ResourceEntry:
        """Store an entry, keeping the first value unless placeholders upgrade it."""
        normalised = _copy_placeholders(placeholders)
        existing = self._entries.get(key)
        if existing is None:
            entry = ResourceEntry(
                key=key, value=value, description=description, placeholders=normalised
            )
            self._entries[key] = entry
            return entry
        if existing.placeholders is None and normalised:
            existing.value = value
            existing.description = description
            existing.placeholders = normalised
        return existing

    def get(self, key: str) -> Optional[ResourceEntry]:
        return self._entries.get(key)

    def keys(self) -> List[str]:
        """Return keys in lexicographic order."""
        return sorted(self._entries)

    def entries(self) -> List[ResourceEntry]:
        return [self._entries[key] for key in self.keys()]

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __iter__(self) -> Iterator[ResourceEntry]:
        return iter(self.entries())

    def __len__(self) -> int:
        return len(self._entries)


def _copy_placeholders(
    placeholders: Optional[Mapping[str, Mapping[str, str]]],
) -> Optional[Dict[str, Dict[str, str]]]:
    if not placeholders:
        return None
    return {name: dict(meta) for name, meta in placeholders.items()}


__all__ = ["ResourceTable"]
