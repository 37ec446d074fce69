
import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import votesim.voter
import votesim.generate


def block(n, utilities, **kwargs):
    return [votesim.voter.HonestVoter(utilities, **kwargs) for i in range(n)]


def ranked_utilities(ranking, n_candidates):
    '''Utilities for an honest voter ranking all candidates in the order.'''
    utilities = [0.] * n_candidates
    for pos, cand in enumerate(ranking):
        utilities[cand] = 1. - .2 * pos
    return utilities


@pytest.fixture
def plurality_voters():
    return [
        votesim.voter.HonestVoter([0.1, 0.4, 0.6], scales=True),
        votesim.voter.HonestVoter([0.5, 0.4, 0.8], scales=True),
        votesim.voter.HonestVoter([0.3, 0.7, 0.2], scales=False),
    ]


@pytest.fixture
def runoff_differs_voters():
    # plurality elects 2, the runoff between 2 and 1 elects 1
    return (
        block(4, [0.5, 0.0, 1.0])
        + block(3, [0.5, 1.0, 0.0])
        + block(2, [1.0, 0.5, 0.0])
    )


IRV_BLOCKS = [
    (24, (0, 1, 2, 3, 4)),
    (24, (1, 0, 2, 3, 4)),
    (20, (2, 3, 4, 0, 1)),
    (20, (3, 2, 4, 1, 0)),
    (12, (4, 2, 3, 0, 1)),
]


@pytest.fixture
def irv_differs_voters():
    # the centrist candidate 2 wins IRV but is squeezed out of the runoff
    voters = []
    for n, ranking in IRV_BLOCKS:
        voters.extend(block(n, ranked_utilities(ranking, 5)))
    return voters


@pytest.fixture
def random_voters():
    return votesim.generate.UtilityGenerator(
        5, scales=True, random_state=1711
    ).generate(101)
