"""
Violation Store
===============
Violations grouped by source file.

A file that is not a key has zero violations.  Lookups never create keys:
get() returns an empty tuple for unknown paths, so reading the store cannot
change which files it reports on.

The same type doubles as the FilteredViolationSet produced by the changed
line filter.  There, a key with an empty sequence means "examined, clean",
which the summary counts as a file while an absent key is not counted.
"""
from typing import Iterable, Iterator, Mapping, Optional, Sequence

from xclint.models.violation import ViolationRecord


class ViolationStore:

    def __init__(
        self,
        groups: Optional[Mapping[str, Sequence[ViolationRecord]]] = None,
    ) -> None:
        self._groups: dict[str, tuple[ViolationRecord, ...]] = {
            path: tuple(records) for path, records in (groups or {}).items()
        }

    @classmethod
    def group(cls, records: Iterable[ViolationRecord]) -> "ViolationStore":
        """
        Group a flat sequence of records by path.
        Relative input order is preserved within each path.
        """
        groups: dict[str, list[ViolationRecord]] = {}
        for record in records:
            groups.setdefault(record.path, []).append(record)
        return cls(groups)

    def get(self, path: str) -> tuple[ViolationRecord, ...]:
        return self._groups.get(path, ())

    def paths(self) -> list[str]:
        return list(self._groups)

    def items(self) -> Iterator[tuple[str, tuple[ViolationRecord, ...]]]:
        return iter(self._groups.items())

    def records(self) -> list[ViolationRecord]:
        """All records, flattened in path order."""
        return [r for group in self._groups.values() for r in group]

    @property
    def total_violations(self) -> int:
        return sum(len(group) for group in self._groups.values())

    def to_wire(self) -> dict[str, list[dict]]:
        return {
            path: [r.to_wire() for r in group]
            for path, group in self._groups.items()
        }

    def __contains__(self, path: object) -> bool:
        return path in self._groups

    def __iter__(self) -> Iterator[str]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ViolationStore):
            return NotImplemented
        return self._groups == other._groups

    def __repr__(self) -> str:
        return f"ViolationStore({self._groups!r})"


# Result of narrowing a store to changed lines; same shape, different contract.
FilteredViolationSet = ViolationStore
