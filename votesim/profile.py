'''A single election: the voters, the candidates and the tie breaker.

The :class:`ElectionProfile` binds together everything a voting method needs
to produce a ranking, so that the same electorate can be evaluated under
many methods with a consistent tie breaking discipline.
'''

import logging
from typing import List, Dict, Sequence, Union, Optional, Iterable

import votesim.system
import votesim.voter
import votesim.evaluate.core
from votesim.candidate import CandidateID, CandidateError, \
    generate_candidates, check_in_range
from votesim.evaluate.auxiliary import index_order
from votesim.util import TieBreaker

logger = logging.getLogger(__name__)


class ElectionProfile:
    '''An electorate of voters choosing among a fixed set of candidates.

    The profile is not modified by the evaluations; it can be evaluated under
    any number of voting methods.

    :param voters: The voter population; may mix different kinds of voters.
    :param n_candidates: Number of candidates standing. If not given, it is
        inferred from the voters: from the number of candidates they know
        about, or, for voters that cannot tell (real ranked ballots), from the
        highest candidate index they rank.
    :param tie_breaker: Comparison function over candidate indices used by
        all evaluations of this profile to resolve ties.
    :raises CandidateError: If a voter knows about a different number of
        candidates than the profile has, or ranks a candidate outside of it.
    '''
    def __init__(self,
                 voters: Iterable[votesim.voter.Voter],
                 n_candidates: Optional[int] = None,
                 tie_breaker: TieBreaker = index_order,
                 ):
        self.voters = tuple(voters)
        if n_candidates is None:
            n_candidates = self._infer_n_candidates(self.voters)
        self.candidates = generate_candidates(n_candidates)
        self.tie_breaker = tie_breaker
        self._check_voters()

    @property
    def n_candidates(self) -> int:
        return len(self.candidates)

    @property
    def n_voters(self) -> int:
        return len(self.voters)

    @staticmethod
    def _infer_n_candidates(voters: Sequence[votesim.voter.Voter]) -> int:
        known = {voter.n_candidates for voter in voters} - {None}
        if len(known) > 1:
            raise CandidateError(
                sorted(known), 'a single candidate count shared by all voters'
            )
        elif known:
            return known.pop()
        else:
            return max((
                max(voter.cast_ordinal_ballot(), default=-1)
                for voter in voters
            ), default=-1) + 1

    def _check_voters(self) -> None:
        for voter in self.voters:
            voter_n = voter.n_candidates
            if voter_n is None:
                for cand in voter.cast_ordinal_ballot():
                    check_in_range(cand, self.n_candidates)
            elif voter_n != self.n_candidates:
                raise CandidateError(
                    voter_n,
                    f'{self.n_candidates} candidates known to {voter!r}'
                )

    def evaluate(self,
                 method: Union[str, votesim.evaluate.core.Evaluator],
                 ) -> List[CandidateID]:
        '''Rank the candidates under a voting method.

        :param method: An evaluator, or a key of a registered method (see
            :data:`votesim.system.METHODS`).
        :returns: All candidates ordered by their finish, the winner first.
        '''
        if isinstance(method, str):
            method = votesim.system.get_system(method)
        return method.evaluate(self.voters, self.n_candidates, self.tie_breaker)

    def evaluate_all(self,
                     methods: Optional[Iterable[str]] = None,
                     ) -> Dict[str, List[CandidateID]]:
        '''Rank the candidates under several registered voting methods.

        :param methods: Keys of registered methods to evaluate; all registered
            methods by default.
        :returns: A mapping of method key to the ranking it produced.
        '''
        if methods is None:
            methods = votesim.system.METHODS.keys()
        results = {}
        for key in methods:
            results[key] = self.evaluate(key)
            logger.debug('%s: %s', key, results[key])
        return results

    def __repr__(self) -> str:
        return (
            f'<ElectionProfile: {self.n_voters} voters,'
            f' {self.n_candidates} candidates>'
        )
