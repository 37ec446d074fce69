'''General voting method machinery and the drivers shared by the methods.

Every evaluator takes the voter population, the number of candidates and a tie
breaker, requests ballots of the shape it needs from each voter, and returns
the full ranking of candidates, winner first. The counting drivers defined
here (plurality tally, head-to-head comparison, ranking by tally) are reused
by the methods in the other modules of this subpackage.
'''

from __future__ import annotations

import abc
import logging
from typing import List, Sequence, Tuple, Optional

import votesim.util
import votesim.voter
from votesim.candidate import CandidateID
from votesim.evaluate.auxiliary import index_order
from votesim.persist import simple_serialization
from votesim.util import TieBreaker

logger = logging.getLogger(__name__)


class VotingSystemError(Exception):
    '''A voting method with a valid setup ended up in an unresolvable state.'''
    pass


class NonDecisiveTieBreakerError(VotingSystemError):
    '''The tie breaker failed to decide a tie at a final decision point.

    :param first: The first of the candidates tied.
    :param second: The second of the candidates tied.
    :param stage: Description of the decision that was being made.
    '''
    def __init__(self, first: int, second: int, stage: str = 'runoff'):
        self.first = first
        self.second = second
        self.stage = stage
        super().__init__(
            f'tie breaker could not decide {stage} tie'
            f' between candidates {first} and {second}'
        )


class Evaluator(metaclass=abc.ABCMeta):
    '''Evaluate ballots of voters and rank the candidates.

    A root abstract base class for all evaluators.
    '''
    @abc.abstractmethod
    def evaluate(self,
                 voters: Sequence[votesim.voter.Voter],
                 n_candidates: int,
                 tie_breaker: TieBreaker = index_order,
                 ) -> List[CandidateID]:
        '''Rank all candidates by the votes of the voters.

        :param voters: The voter population.
        :param n_candidates: Number of candidates standing.
        :param tie_breaker: Comparison function over candidate indices to
            resolve ties.
        :returns: A list of all candidates ordered by their finish, the winner
            first.
        '''
        raise NotImplementedError


def rank_by_tally(tally: Sequence[float],
                  tie_breaker: TieBreaker = index_order,
                  ) -> List[CandidateID]:
    '''Rank candidates by tally, most votes first, ties by tie breaker.'''
    return votesim.util.sort_candidates_by_key(tally, tie_breaker)


def plurality_tally(voters: Sequence[votesim.voter.Voter],
                    n_candidates: int,
                    ) -> List[int]:
    '''Count first preferences of voters' ordinal ballots.

    Empty ballots cast no vote.

    :returns: The number of first preferences, indexed by candidate.
    '''
    tally = [0] * n_candidates
    for voter in voters:
        ballot = voter.cast_ordinal_ballot()
        if ballot:
            tally[ballot[0]] += 1
    return tally


def break_tie(tie_breaker: TieBreaker,
              first: CandidateID,
              second: CandidateID,
              compared: Optional[Tuple[float, float]] = None,
              stage: str = 'runoff',
              ) -> CandidateID:
    '''Decide a final tie between two candidates by the tie breaker.

    :param tie_breaker: The tie breaker to consult.
    :param first: The first tied candidate; wins if the tie breaker returns
        a negative number.
    :param second: The second tied candidate; wins if the tie breaker
        returns a positive number.
    :param compared: The values to pass to the tie breaker instead of the
        candidate indices, if any.
    :param stage: Description of the decision for the error message.
    :raises NonDecisiveTieBreakerError: If the tie breaker returns zero.
    '''
    if compared is None:
        compared = (first, second)
    decision = tie_breaker(*compared)
    if decision < 0:
        return first
    elif decision > 0:
        return second
    else:
        raise NonDecisiveTieBreakerError(first, second, stage)


def head_to_head(voters: Sequence[votesim.voter.Voter],
                 first: CandidateID,
                 second: CandidateID,
                 tie_breaker: TieBreaker = index_order,
                 ) -> CandidateID:
    '''Determine the winner of a runoff between two candidates.

    Every voter is asked for its honest preference between the two; voters
    indifferent between them do not count.

    :returns: The candidate preferred by more voters.
    :raises NonDecisiveTieBreakerError: If the runoff is tied and the tie
        breaker cannot decide it.
    '''
    first_count, second_count = 0, 0
    for voter in voters:
        preference = voter.honest_preference(first, second)
        if preference > 0:
            first_count += 1
        elif preference < 0:
            second_count += 1
    logger.debug('runoff %d vs %d: %d to %d',
                 first, second, first_count, second_count)
    if first_count > second_count:
        return first
    elif second_count > first_count:
        return second
    else:
        return break_tie(tie_breaker, first, second)


def promote_winner(ranking: List[CandidateID],
                   winner: CandidateID,
                   ) -> List[CandidateID]:
    '''Put the runoff winner on top of the ranking, swapping the top two.

    Only the relationship between the first two places changes; the rest of
    the ranking is kept.
    '''
    if ranking[0] != winner:
        logger.info('runoff overturns first round: %d beats %d',
                    winner, ranking[0])
        ranking = ranking.copy()
        ranking[0], ranking[1] = ranking[1], ranking[0]
    return ranking


@simple_serialization
class Plurality(Evaluator):
    '''Plurality voting, also called first-past-the-post (FPTP).

    Every voter votes for the top candidate of its ordinal ballot; candidates
    are ranked by the number of votes received.
    '''
    def evaluate(self,
                 voters: Sequence[votesim.voter.Voter],
                 n_candidates: int,
                 tie_breaker: TieBreaker = index_order,
                 ) -> List[CandidateID]:
        '''Rank candidates by the number of first preferences.'''
        return rank_by_tally(
            plurality_tally(voters, n_candidates), tie_breaker
        )


@simple_serialization
class HonestRunoff(Evaluator):
    '''Add a two-candidate runoff to the ranking of another evaluator.

    The two best candidates of the main evaluator meet in a runoff decided by
    honest head-to-head preferences of all voters. If the second one wins,
    the two swap places; the rest of the ranking is left as the main evaluator
    produced it.

    This creates the two-round variants of other methods: FPTP runoff
    (with :class:`Plurality`), approval runoff and score runoff.

    :param main: The evaluator producing the first round ranking.
    '''
    def __init__(self, main: Evaluator):
        self.main = main

    def evaluate(self,
                 voters: Sequence[votesim.voter.Voter],
                 n_candidates: int,
                 tie_breaker: TieBreaker = index_order,
                 ) -> List[CandidateID]:
        '''Rank candidates by the main evaluator and run off the top two.'''
        ranking = self.main.evaluate(voters, n_candidates, tie_breaker)
        if len(ranking) < 2:
            return ranking
        winner = head_to_head(voters, ranking[0], ranking[1], tie_breaker)
        return promote_winner(ranking, winner)
