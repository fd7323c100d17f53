"""
True Damerau-Levenshtein distance between two character sequences.

Unlike the "optimal string alignment" variant, substrings may be edited
more than once, so ``distance("CA", "ABC") == 2``. Adjacent transpositions
count as a single edit.
"""

from __future__ import annotations

from typing import Dict, List, Optional


def distance(source: Optional[str], target: Optional[str]) -> int:
    """Return the Damerau-Levenshtein distance between ``source`` and ``target``.

    ``None`` is treated as an empty string. The computation follows the
    Lowrance-Wagner recurrence over an ``(m + 2) x (n + 2)`` table whose
    first row and column hold an "infinite" sentinel, so the transposition
    term never wraps around the table edge.

    Parameters
    ----------
    source, target: str or None
        Sequences to compare.

    Returns
    -------
    int
        Minimum number of insertions, deletions, substitutions and adjacent
        transpositions turning ``source`` into ``target``.
    """
    if not source:
        return len(target) if target else 0
    if not target:
        return len(source)

    m = len(source)
    n = len(target)
    infinity = m + n

    table: List[List[int]] = [[0] * (n + 2) for _ in range(m + 2)]
    table[0][0] = infinity
    for i in range(m + 1):
        table[i + 1][0] = infinity
        table[i + 1][1] = i
    for j in range(n + 1):
        table[0][j + 1] = infinity
        table[1][j + 1] = j

    # Last row in which each symbol of ``source`` was seen (0 = never)
    last_row: Dict[str, int] = {}

    for i in range(1, m + 1):
        # Last column in this row where source[i - 1] matched
        last_match_col = 0
        for j in range(1, n + 1):
            i1 = last_row.get(target[j - 1], 0)
            j1 = last_match_col

            if source[i - 1] == target[j - 1]:
                cost = table[i][j]
                last_match_col = j
            else:
                cost = min(table[i][j], table[i + 1][j], table[i][j + 1]) + 1

            transposition = table[i1][j1] + (i - i1 - 1) + 1 + (j - j1 - 1)
            table[i + 1][j + 1] = min(cost, transposition)

        last_row[source[i - 1]] = i

    return table[m + 1][n + 1]


def similarity(source: Optional[str], target: Optional[str]) -> float:
    """Return ``distance`` normalized by the longer input length.

    0.0 means identical; 1.0 means every character had to change. Two
    empty inputs give 0.0.
    """
    longest = max(len(source or ""), len(target or ""))
    if longest == 0:
        return 0.0
    return distance(source, target) / longest
