"""Longest common subsequence over arbitrary items with a custom matcher."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from typing import Any

Matcher = Callable[[Sequence[Any], Sequence[Any], int, int], bool]


def longest_common_subsequence(
    seq1: Sequence[Any],
    seq2: Sequence[Any],
    match: Matcher,
) -> list[tuple[int, int]]:
    """Return matched ``(index1, index2)`` pairs in ascending order.

    ``match`` receives both sequences and one index into each.  On ties the
    trace-back prefers dropping items from the end of *seq1*, which keeps the
    earliest possible pairing for items of *seq1*.
    """
    m = len(seq1)
    n = len(seq2)

    # lengths[i][j] = LCS length of seq1[:i] and seq2[:j]
    lengths = [[0] * (n + 1) for _ in range(m + 1)]
    matched = [[False] * n for _ in range(m)]
    for i in range(1, m + 1):
        for j in range(1, n + 1):
            if match(seq1, seq2, i - 1, j - 1):
                matched[i - 1][j - 1] = True
                lengths[i][j] = lengths[i - 1][j - 1] + 1
            else:
                lengths[i][j] = max(lengths[i - 1][j], lengths[i][j - 1])

    # Trace back
    pairs: list[tuple[int, int]] = []
    i, j = m, n
    while i > 0 and j > 0:
        if matched[i - 1][j - 1]:
            pairs.append((i - 1, j - 1))
            i -= 1
            j -= 1
        elif lengths[i][j - 1] > lengths[i - 1][j]:
            j -= 1
        else:
            i -= 1

    pairs.reverse()
    return pairs
