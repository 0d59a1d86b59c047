from __future__ import annotations

"""
Record Type Accumulator.

Collects one record type name per qualifying file across a directory walk.
The set is created per run and passed explicitly through each processing
step; the registry emitter consumes it once at the end.
"""

from typing import Dict, Iterator, List

from fbsprocessor.domain.errors import DuplicateRecordTypeError


class RecordTypeSet:
    """
    Append-only set of record type names keyed to their source file.

    Insertion order is irrelevant; consumers read `sorted_names()`.
    """

    def __init__(self) -> None:
        self._sources: Dict[str, str] = {}

    def add(self, name: str, source_path: str) -> None:
        """
        Register a record type contributed by a file.

        Args:
            name: Record type name declared in the file.
            source_path: File that declares it.

        Raises:
            DuplicateRecordTypeError: If another file already contributed the name.
        """
        existing = self._sources.get(name)
        if existing is not None and existing != source_path:
            raise DuplicateRecordTypeError(name, existing, source_path)
        self._sources[name] = source_path

    def sorted_names(self) -> List[str]:
        return sorted(self._sources)

    def source_of(self, name: str) -> str:
        return self._sources[name]

    def __contains__(self, name: object) -> bool:
        return name in self._sources

    def __iter__(self) -> Iterator[str]:
        return iter(self.sorted_names())

    def __len__(self) -> int:
        return len(self._sources)

    def __repr__(self) -> str:
        return f"RecordTypeSet({self.sorted_names()!r})"
