'''Named voting systems and the registry of the implemented methods.

Every implemented voting method is registered in :data:`METHODS` under a short
key, which is how the methods are selected from the command line and by
:meth:`votesim.profile.ElectionProfile.evaluate`. The registry is grouped by
the ballot shape the methods need from the voters.
'''

from typing import Dict, List, Sequence

import votesim.evaluate
import votesim.evaluate.approval
import votesim.evaluate.cardinal
import votesim.evaluate.sequential
from votesim.persist import simple_serialization


@simple_serialization
class VotingSystem:
    """A named voting system. Wraps an election evaluator.

    :param name: Human readable name of the system.
    :param evaluator: Evaluator representing the system.
    """
    def __init__(self, name: str, evaluator: votesim.evaluate.Evaluator):
        self.name = name
        self.evaluator = evaluator

    def evaluate(self, *args, **kwargs):
        """Return the evaluator's ranking of candidates for the voters given."""
        return self.evaluator.evaluate(*args, **kwargs)

    def __repr__(self) -> str:
        return f'<VotingSystem({self.name!r})>'


SCORE_RANGES = (5, 10, 100)

ORDINAL_SYSTEMS = {
    "plurality": VotingSystem('Plurality', votesim.evaluate.Plurality()),
    "fptp_runoff": VotingSystem(
        'FPTP Runoff',
        votesim.evaluate.HonestRunoff(votesim.evaluate.Plurality())
    ),
    "contingent": VotingSystem(
        'Contingent Vote', votesim.evaluate.sequential.ContingentVote()
    ),
    "irv": VotingSystem(
        'Instant Runoff', votesim.evaluate.sequential.InstantRunoff()
    ),
}
APPROVAL_SYSTEMS = {
    "approval": VotingSystem(
        'Approval', votesim.evaluate.approval.ApprovalVoting()
    ),
    "approval_runoff": VotingSystem(
        'Approval Runoff',
        votesim.evaluate.HonestRunoff(
            votesim.evaluate.approval.ApprovalVoting()
        )
    ),
}


def score_systems(ranges: Sequence[int]) -> Dict[str, VotingSystem]:
    '''Create score, score runoff and STAR systems for every rating range.'''
    systems = {}
    for range in ranges:
        systems[f"score_{range}"] = VotingSystem(
            f'Score {range}', votesim.evaluate.cardinal.ScoreVoting(range)
        )
        systems[f"score_{range}_runoff"] = VotingSystem(
            f'Score {range} Runoff',
            votesim.evaluate.HonestRunoff(
                votesim.evaluate.cardinal.ScoreVoting(range)
            )
        )
    for range in ranges:
        systems[f"star_{range}"] = VotingSystem(
            f'STAR {range}', votesim.evaluate.cardinal.STAR(range)
        )
    return systems


SCORE_SYSTEMS = score_systems(SCORE_RANGES)

METHODS: Dict[str, VotingSystem] = {
    **ORDINAL_SYSTEMS,
    **APPROVAL_SYSTEMS,
    **SCORE_SYSTEMS,
}
'''All implemented voting methods by their keys.'''


def method_names() -> List[str]:
    '''Return the human readable names of all registered methods.'''
    return [system.name for system in METHODS.values()]


def method_count() -> int:
    return len(METHODS)


def get_system(key: str) -> VotingSystem:
    '''Return the registered voting system with the given key.

    :raises ValueError: If no such method is registered.
    '''
    try:
        return METHODS[key]
    except KeyError as e:
        raise ValueError(
            f'unknown voting method: {key!r}, available: '
            + ', '.join(METHODS.keys())
        ) from e
