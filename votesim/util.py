'''Various utility functions for other modules of votesim.

There should normally be no need to use these functions directly.
'''

import math
import functools
from typing import Callable, Sequence, List, Optional
from numbers import Number

from votesim.candidate import CandidateID, generate_candidates


TieBreaker = Callable[[int, int], int]
'''A comparison function over two candidate indices.

Follows the ``cmp`` convention: negative if the first candidate ranks ahead of
the second, positive if the second ranks ahead, zero if undecided.'''


def sort_candidates_by_key(key: Sequence[Number],
                           tie_breaker: Optional[TieBreaker] = None,
                           ) -> List[CandidateID]:
    '''Rank all candidates in descending order of a per-candidate key.

    Candidates with equal keys are ordered by the tie breaker. If the tie
    breaker cannot decide (or is not given), the candidates stay in index
    order.

    :param key: The key value for each candidate, indexed by candidate
        (e.g. vote tallies).
    :param tie_breaker: Secondary comparison function over candidate indices.
    :returns: A permutation of all candidates, the one with the highest key
        first.
    '''
    def compare(a: CandidateID, b: CandidateID) -> int:
        if key[a] != key[b]:
            return -1 if key[a] > key[b] else 1
        elif tie_breaker is None:
            return 0
        return tie_breaker(a, b)

    return sorted(
        generate_candidates(len(key)),
        key=functools.cmp_to_key(compare)
    )


def scale_utilities_linearly(utilities: Sequence[float]) -> List[float]:
    '''Scale utilities linearly so that the minimum is 0 and the maximum is 1.

    If all utilities are equal, they all map to that common value (clamped
    to the unit interval) to avoid division by zero.
    '''
    max_util = max(utilities)
    min_util = min(utilities)
    if max_util == min_util:
        return [clamp(max_util) for _ in utilities]
    return [
        clamp((util - min_util) / (max_util - min_util))
        for util in utilities
    ]


def approved_candidates(utilities: Sequence[float],
                        threshold: float,
                        ) -> frozenset:
    '''Select candidates with utility at or above a threshold.

    Never returns an empty set: if no candidate reaches the threshold,
    only the one with the highest utility is approved.
    '''
    approved = frozenset(
        CandidateID(i) for i, util in enumerate(utilities) if util >= threshold
    )
    if not approved:
        best = max(range(len(utilities)), key=utilities.__getitem__)
        approved = frozenset([CandidateID(best)])
    return approved


def mean(values: Sequence[Number]) -> float:
    return sum(values) / len(values)


def round_half_up(value: float) -> int:
    '''Round a non-negative number to the nearest integer, halves upwards.'''
    return int(math.floor(value + .5))


def clamp(value: float, low: float = 0., high: float = 1.) -> float:
    return min(max(value, low), high)
