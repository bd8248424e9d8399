"""
Summary
=======
One-line aggregate of a violation set:

    Summary: <bad>/<total> files with violations (P1: n, P2: n, P3: n)

total counts every examined path, clean ones included.
"""
from collections import Counter

from xclint.core.constants import PRIORITIES
from xclint.models.violation_store import FilteredViolationSet


def count_by_priority(violations: FilteredViolationSet) -> dict[int, int]:
    counts = Counter(v.priority for v in violations.records())
    return {p: counts.get(p, 0) for p in PRIORITIES}


def summarize(violations: FilteredViolationSet) -> str:
    bad_files = sum(1 for _, group in violations.items() if group)
    total_files = len(violations)
    counts = count_by_priority(violations)
    per_priority = ", ".join(f"P{p}: {n}" for p, n in counts.items())
    return f"Summary: {bad_files}/{total_files} files with violations ({per_priority})"
