"""Cardinal voting systems - systems that use score votes.

These systems have the most complicated input - each voter assigns a rating
from zero to a fixed maximum (the range) to every candidate - but are claimed
to circumvent the Arrow's impossibility theorem and Gibbard-Satterthwaite
theorem (but not the more general Gibbard's theorem) that only hold generally
for ordinal (ranked) voting systems.
"""

from __future__ import annotations

import logging
from typing import List, Sequence

import votesim.voter
import votesim.evaluate.core
from votesim.candidate import CandidateID
from votesim.evaluate.auxiliary import index_order
from votesim.persist import simple_serialization
from votesim.util import TieBreaker

logger = logging.getLogger(__name__)


def score_tally(voters: Sequence[votesim.voter.Voter],
                n_candidates: int,
                range: int,
                ) -> List[int]:
    '''Sum the ratings of each candidate over all voters.

    :param range: The maximum rating; every voter is asked for a cardinal
        ballot of this range.
    :returns: The total rating of each candidate, indexed by candidate.
    '''
    tally = [0] * n_candidates
    for voter in voters:
        for cand, rating in enumerate(voter.cast_cardinal_ballot(range)):
            tally[cand] += rating
    return tally


def _check_range(range: int) -> None:
    if range < 1:
        raise ValueError(f'rating range must be positive, got {range}')


@simple_serialization
class ScoreVoting(votesim.evaluate.core.Evaluator):
    """Evaluate ordinary score voting (range voting) systems.

    Candidates are ranked by the sum of ratings they received.

    :param range: The maximum rating a voter can give to a candidate.
    """
    def __init__(self, range: int = 5):
        _check_range(range)
        self.range = range

    def evaluate(self,
                 voters: Sequence[votesim.voter.Voter],
                 n_candidates: int,
                 tie_breaker: TieBreaker = index_order,
                 ) -> List[CandidateID]:
        return votesim.evaluate.core.rank_by_tally(
            score_tally(voters, n_candidates, self.range), tie_breaker
        )


@simple_serialization
class STAR(votesim.evaluate.core.Evaluator):
    """Score Then Automatic Run-Off (STAR) cardinal voting system.

    A score-based voting system that aims to reduce suceptibility to tactical
    voting by forcing a run-off between the highest-ranked candidates.

    The two candidates with the highest total score proceed to the automatic
    runoff, where each voter supports the one of them it rated higher (voters
    rating both finalists equally do not count). The finalist supported by
    more voters wins; the rest of the ranking follows the total scores.

    :param range: The maximum rating a voter can give to a candidate.
    :param tie_break_on: What the tie breaker compares if the runoff is tied:

        -   ``'candidate'`` passes the two finalists' indices,
        -   ``'rating'`` passes the finalists' total scores instead; use this
            only with tie breakers that are meaningful on arbitrary integers.
            With :func:`votesim.evaluate.auxiliary.index_order`, the finalist
            with the lower total score wins, and equal totals cannot be
            decided at all.
    """
    TIE_BREAK_MODES = ('candidate', 'rating')

    def __init__(self, range: int = 5, tie_break_on: str = 'candidate'):
        _check_range(range)
        if tie_break_on not in self.TIE_BREAK_MODES:
            raise ValueError(
                f'invalid STAR tie break mode: {tie_break_on!r}, available: '
                + ', '.join(self.TIE_BREAK_MODES)
            )
        self.range = range
        self.tie_break_on = tie_break_on

    def evaluate(self,
                 voters: Sequence[votesim.voter.Voter],
                 n_candidates: int,
                 tie_breaker: TieBreaker = index_order,
                 ) -> List[CandidateID]:
        """Rank candidates by STAR voting.

        :raises votesim.evaluate.core.NonDecisiveTieBreakerError: If the
            runoff is tied and the tie breaker does not decide it.
        """
        scores = score_tally(voters, n_candidates, self.range)
        ranking = votesim.evaluate.core.rank_by_tally(scores, tie_breaker)
        if len(ranking) < 2:
            return ranking
        first, second = ranking[0], ranking[1]
        logger.info('STAR finalists: %d (%d points), %d (%d points)',
                    first, scores[first], second, scores[second])
        first_support, second_support = 0, 0
        for voter in voters:
            ballot = voter.cast_cardinal_ballot(self.range)
            if ballot[first] > ballot[second]:
                first_support += 1
            elif ballot[second] > ballot[first]:
                second_support += 1
        logger.debug('STAR runoff: %d to %d', first_support, second_support)
        if first_support > second_support:
            winner = first
        elif second_support > first_support:
            winner = second
        else:
            if self.tie_break_on == 'rating':
                compared = (scores[first], scores[second])
            else:
                compared = None
            winner = votesim.evaluate.core.break_tie(
                tie_breaker, first, second,
                compared=compared, stage='STAR runoff'
            )
        return votesim.evaluate.core.promote_winner(ranking, winner)
