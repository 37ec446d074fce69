'''Evaluators that operate sequentially on ranked votes.

This hosts the instant-runoff vote evaluator (:class:`InstantRunoff`), which
eliminates candidates one by one and transfers their votes to the next
preferences, and its abbreviated relative, :class:`ContingentVote`, which
eliminates everyone but the top two at once.
'''

from __future__ import annotations

import logging
from typing import List, Sequence, Tuple, Iterator

import votesim.voter
import votesim.evaluate.core
from votesim.candidate import CandidateID
from votesim.evaluate.auxiliary import index_order
from votesim.persist import simple_serialization
from votesim.util import TieBreaker

logger = logging.getLogger(__name__)


@simple_serialization
class InstantRunoff(votesim.evaluate.core.Evaluator):
    '''Instant-runoff voting (IRV), also called alternative vote.

    In each round, every voter votes for the highest ranked candidate on its
    ballot that has not been eliminated yet. The candidate with the fewest
    votes is eliminated; ties for the last place are resolved by the tie
    breaker. The count continues until a single candidate remains, so the
    whole ranking is determined by the order of elimination.

    Exhausted ballots (truncated ballots whose ranked candidates were all
    eliminated) do not count in the further rounds, but do not stop the count
    either.
    '''
    def rounds(self,
               voters: Sequence[votesim.voter.Voter],
               n_candidates: int,
               tie_breaker: TieBreaker = index_order,
               ) -> Iterator[Tuple[List[int], CandidateID]]:
        '''Perform the count round by round.

        Useful to inspect intermediate states of the count.

        :returns: An iterator of ``(tally, eliminated)`` tuples, one for each
            round, where the tally is the number of votes for each candidate
            in that round (zero for candidates eliminated earlier) and
            eliminated is the candidate eliminated at its end.
        '''
        ballots = [voter.cast_ordinal_ballot() for voter in voters]
        cursors = [0] * len(ballots)
        eliminated = set()
        for round_i in range(n_candidates - 1):
            tally = [0] * n_candidates
            for i, ballot in enumerate(ballots):
                pos = cursors[i]
                while pos < len(ballot) and ballot[pos] in eliminated:
                    pos += 1
                cursors[i] = pos
                if pos < len(ballot):
                    tally[ballot[pos]] += 1
            logger.debug('IRV round %d: %s', round_i + 1, tally)
            ranking = votesim.evaluate.core.rank_by_tally(tally, tie_breaker)
            loser = next(
                cand for cand in reversed(ranking) if cand not in eliminated
            )
            logger.info('IRV round %d: eliminating %d with %d votes',
                        round_i + 1, loser, tally[loser])
            eliminated.add(loser)
            yield tally, loser

    def evaluate(self,
                 voters: Sequence[votesim.voter.Voter],
                 n_candidates: int,
                 tie_breaker: TieBreaker = index_order,
                 ) -> List[CandidateID]:
        '''Rank candidates by instant-runoff voting.

        :returns: The last remaining candidate first, then the others in
            reverse order of elimination.
        '''
        eliminations = [
            loser for tally, loser
            in self.rounds(voters, n_candidates, tie_breaker)
        ]
        remaining = set(range(n_candidates)).difference(eliminations)
        return [CandidateID(cand) for cand in remaining] + eliminations[::-1]


@simple_serialization
class ContingentVote(votesim.evaluate.core.Evaluator):
    '''Contingent vote, a single-round instant runoff between the top two.

    The two candidates with the most first preferences advance; every ballot
    then counts for whichever of them it ranks higher. Ballots ranking neither
    finalist do not count.

    Unlike :class:`votesim.evaluate.core.HonestRunoff` around plurality, this
    only uses the cast ordinal ballots, so it works with real ranked ballots
    too.
    '''
    def evaluate(self,
                 voters: Sequence[votesim.voter.Voter],
                 n_candidates: int,
                 tie_breaker: TieBreaker = index_order,
                 ) -> List[CandidateID]:
        '''Rank candidates by the contingent vote.

        :raises votesim.evaluate.core.NonDecisiveTieBreakerError: If the
            second count is tied and the tie breaker does not decide it.
        '''
        ranking = votesim.evaluate.core.rank_by_tally(
            votesim.evaluate.core.plurality_tally(voters, n_candidates),
            tie_breaker
        )
        if len(ranking) < 2:
            return ranking
        first, second = ranking[0], ranking[1]
        first_count, second_count = 0, 0
        for voter in voters:
            for cand in voter.cast_ordinal_ballot():
                if cand == first:
                    first_count += 1
                    break
                elif cand == second:
                    second_count += 1
                    break
        logger.debug('contingent vote second count %d vs %d: %d to %d',
                     first, second, first_count, second_count)
        if first_count > second_count:
            winner = first
        elif second_count > first_count:
            winner = second
        else:
            winner = votesim.evaluate.core.break_tie(
                tie_breaker, first, second, stage='contingent vote'
            )
        return votesim.evaluate.core.promote_winner(ranking, winner)
