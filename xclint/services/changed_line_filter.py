"""
Changed Line Filter
===================
Narrows a ViolationStore to the lines a change actually touched.

RULES:
  - Only paths present in ChangedLines survive, even if other paths have
    violations.
  - A surviving path keeps only records whose start line changed.
  - A surviving path with nothing left maps to an empty sequence (it was
    examined and is clean); it is never dropped.
  - Without ChangedLines the store passes through untouched.
"""
import logging
from typing import AbstractSet, Mapping, Optional

from xclint.models.violation_store import FilteredViolationSet, ViolationStore

logger = logging.getLogger(__name__)

# path -> line numbers changed since the reference commit
ChangedLines = Mapping[str, AbstractSet[int]]


def filter_by_changed_lines(
    store: ViolationStore,
    changed_lines: ChangedLines,
) -> FilteredViolationSet:
    filtered = {
        path: [v for v in store.get(path) if v.start_line in lines]
        for path, lines in changed_lines.items()
    }
    result = FilteredViolationSet(filtered)
    logger.debug(
        "Changed-line filter kept %d of %d violations across %d files",
        result.total_violations, store.total_violations, len(result),
    )
    return result


def filter_violations(
    store: ViolationStore,
    changed_lines: Optional[ChangedLines] = None,
) -> FilteredViolationSet:
    """Apply the changed-line filter when ChangedLines is given, else pass through."""
    if changed_lines is None:
        return store
    return filter_by_changed_lines(store, changed_lines)
