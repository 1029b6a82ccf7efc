"""Rank comparator keeping selections in taxonomy declaration order."""

from collections.abc import Sequence
from functools import cmp_to_key


def compare_ranks(a: Sequence[int], b: Sequence[int]) -> int:
    """
    Compare two rank paths element by element.

    A missing element counts as -1, so a prefix sorts before its extensions.
    On a full tie the shorter path sorts first.

    Examples:
        >>> compare_ranks((0, 1), (0, 2))
        -1
        >>> compare_ranks((0,), (0, 0))
        -1
        >>> compare_ranks((1, 0), (0, 5, 5))
        1
    """
    for i in range(max(len(a), len(b))):
        left = a[i] if i < len(a) else -1
        right = b[i] if i < len(b) else -1
        if left != right:
            return -1 if left < right else 1
    return (len(a) > len(b)) - (len(a) < len(b))


rank_key = cmp_to_key(compare_ranks)
