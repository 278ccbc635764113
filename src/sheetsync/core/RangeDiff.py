# sheetsync/core/RangeDiff.py
"""RangeDiff Module
================
Computes the single contiguous line range in which two line lists differ.

This is a prefix/suffix trim, not a general diff: the common leading lines and
the common trailing lines are skipped and whatever remains in between is the
range to replace. For the localized edits the property panel produces (one
property changed, inserted or removed at a time) the range is minimal.

Functions:
----------
- get_differing_range: Returns the `DifferingRange` or None when both lists are equal.
"""

from dataclasses import dataclass
from typing import Optional, Sequence


@dataclass(frozen=True)
class DifferingRange:
    """Replace ``current[first:last]`` with `diff` to obtain the proposed lines."""

    first: int
    last: int
    diff: list[str]


def get_differing_range(current: Sequence[str], proposed: Sequence[str]) -> Optional[DifferingRange]:
    n = min(len(current), len(proposed))
    first_diff = n
    for i in range(n):
        if current[i] != proposed[i]:
            first_diff = i
            break

    if first_diff == len(current) and first_diff == len(proposed):
        return None

    i = len(proposed) - 1
    j = len(current) - 1
    while i >= first_diff and j >= first_diff and proposed[i] == current[j]:
        i -= 1
        j -= 1

    return DifferingRange(first=first_diff, last=j + 1, diff=list(proposed[first_diff:i + 1]))
