'''Tie breakers - total orders over candidates to resolve equal tallies.

A tie breaker is any callable taking two candidate indices and returning
a negative number if the first one should rank ahead, a positive number if the
second one should, in the ``cmp`` convention (see
:data:`votesim.util.TieBreaker`). Evaluators consult it whenever two candidates
are otherwise equal; at final decision points (a runoff or a STAR finalist
comparison ending in a tie), it must decide, i.e. never return zero for two
distinct candidates.

You can make the random tie breakers stable if you give them a seed for the
random generator.
'''

import random
from typing import List, Optional

from votesim.persist import simple_serialization


def index_order(first: int, second: int) -> int:
    '''Rank the candidate with the lower index ahead.'''
    return (first > second) - (first < second)


def reverse_index_order(first: int, second: int) -> int:
    '''Rank the candidate with the higher index ahead.'''
    return (first < second) - (first > second)


@simple_serialization
class PriorityOrder:
    '''Break ties by an externally determined order of candidates.

    This is useful for tiebreaking with e.g. ballot numbers or pre-generated
    random numbers.

    :param order: Candidate indices, the candidate to prevail in any tie
        first. Candidates not listed lose every tie against listed ones and
        are compared by index among themselves.
    '''
    def __init__(self, order: List[int]):
        self.order = list(order)
        self._positions = {cand: i for i, cand in enumerate(self.order)}
        if len(self._positions) < len(self.order):
            raise ValueError(f'duplicate candidates in priority order: {order}')

    def __call__(self, first: int, second: int) -> int:
        first_pos = self._positions.get(first, len(self.order) + first)
        second_pos = self._positions.get(second, len(self.order) + second)
        return index_order(first_pos, second_pos)


@simple_serialization
class RandomPermutation(PriorityOrder):
    '''Break ties by a fixed random permutation of candidates.

    The permutation is drawn once, at construction; the tie breaker is
    therefore a genuine total order that stays the same for the whole
    election.

    :param n_candidates: Number of candidates to permute.
    :param seed: Seed for the random generator that draws the permutation.
    '''
    def __init__(self,
                 n_candidates: int,
                 seed: Optional[int] = None,
                 ):
        self.n_candidates = n_candidates
        self.seed = seed
        self.stable = (self.seed is not None)
        order = list(range(n_candidates))
        random.Random(seed).shuffle(order)
        super().__init__(order)


TIE_BREAKERS = {
    'index': index_order,
    'reverse': reverse_index_order,
}
