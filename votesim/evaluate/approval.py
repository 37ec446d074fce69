'''Approval voting.

Every voter approves of one or more candidates it finds acceptable; the
candidate approved by the most voters wins. Use
:class:`votesim.evaluate.core.HonestRunoff` around :class:`ApprovalVoting`
to evaluate approval voting with a runoff between the two most approved
candidates.
'''

from __future__ import annotations

from typing import List, Sequence

import votesim.voter
import votesim.evaluate.core
from votesim.candidate import CandidateID
from votesim.evaluate.auxiliary import index_order
from votesim.persist import simple_serialization
from votesim.util import TieBreaker


def approval_tally(voters: Sequence[votesim.voter.Voter],
                   n_candidates: int,
                   ) -> List[int]:
    '''Count the approvals of each candidate.

    :returns: The number of voters approving each candidate, indexed by
        candidate.
    '''
    tally = [0] * n_candidates
    for voter in voters:
        for cand in voter.cast_approval_ballot():
            tally[cand] += 1
    return tally


@simple_serialization
class ApprovalVoting(votesim.evaluate.core.Evaluator):
    '''Approval voting (AV) evaluator.

    Ranks the candidates by the number of approval ballots they appear on.
    '''
    def evaluate(self,
                 voters: Sequence[votesim.voter.Voter],
                 n_candidates: int,
                 tie_breaker: TieBreaker = index_order,
                 ) -> List[CandidateID]:
        return votesim.evaluate.core.rank_by_tally(
            approval_tally(voters, n_candidates), tie_breaker
        )
