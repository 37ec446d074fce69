
import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import votesim.evaluate
import votesim.system


EXPECTED_KEYS = [
    'plurality', 'fptp_runoff', 'contingent', 'irv',
    'approval', 'approval_runoff',
    'score_5', 'score_5_runoff', 'score_10', 'score_10_runoff',
    'score_100', 'score_100_runoff',
    'star_5', 'star_10', 'star_100',
]


def test_registry_keys():
    assert list(votesim.system.METHODS.keys()) == EXPECTED_KEYS


def test_method_count():
    assert votesim.system.method_count() == len(EXPECTED_KEYS)


def test_method_names():
    names = votesim.system.method_names()
    assert len(names) == len(EXPECTED_KEYS)
    assert len(set(names)) == len(names)
    assert 'Plurality' in names
    assert 'Instant Runoff' in names
    assert 'STAR 5' in names


def test_get_system():
    system = votesim.system.get_system('star_10')
    assert isinstance(system, votesim.system.VotingSystem)
    assert system.evaluator.range == 10


def test_get_system_unknown():
    with pytest.raises(ValueError) as excinfo:
        votesim.system.get_system('borda')
    assert 'plurality' in str(excinfo.value)


@pytest.mark.parametrize('key', EXPECTED_KEYS)
def test_all_systems_evaluate(key, random_voters):
    ranking = votesim.system.get_system(key).evaluate(random_voters, 5)
    assert sorted(ranking) == [0, 1, 2, 3, 4]


def test_systems_agree_on_unanimous_electorate():
    from votesim.voter import HonestVoter
    voters = [HonestVoter([0.1, 0.9, 0.5])] * 5
    for key, system in votesim.system.METHODS.items():
        assert system.evaluate(voters, 3)[0] == 1, key


def test_voting_system_delegates(plurality_voters):
    system = votesim.system.VotingSystem('FPTP', votesim.evaluate.Plurality())
    assert system.evaluate(plurality_voters, 3) == [2, 1, 0]
    assert repr(system) == "<VotingSystem('FPTP')>"
