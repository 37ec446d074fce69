
import sys
import os
import json

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import votesim.evaluate
import votesim.evaluate.auxiliary
import votesim.evaluate.cardinal
import votesim.persist
import votesim.system
import votesim.vote


def test_plurality_to_dict():
    assert votesim.evaluate.Plurality().to_dict() == {
        'class': 'votesim.evaluate.core.Plurality',
    }


def test_runoff_to_dict():
    runoff = votesim.evaluate.HonestRunoff(
        votesim.evaluate.cardinal.ScoreVoting(10)
    )
    assert votesim.persist.to_dict(runoff) == {
        'class': 'votesim.evaluate.core.HonestRunoff',
        'main': {
            'class': 'votesim.evaluate.cardinal.ScoreVoting',
            'range': 10,
        },
    }


def test_star_to_dict():
    assert votesim.evaluate.cardinal.STAR(100, 'rating').to_dict() == {
        'class': 'votesim.evaluate.cardinal.STAR',
        'range': 100,
        'tie_break_on': 'rating',
    }


def test_validator_to_dict():
    assert votesim.vote.CardinalBallotValidator(5).to_dict() == {
        'class': 'votesim.vote.CardinalBallotValidator',
        'range': 5,
        'n_candidates': None,
    }


@pytest.mark.parametrize('key', list(votesim.system.METHODS.keys()))
def test_system_roundtrip(key, random_voters):
    system = votesim.system.METHODS[key]
    system_dict = json.loads(json.dumps(system.to_dict()))
    assert system_dict['name'] == system.name
    rebuilt = votesim.persist.from_dict(system_dict)
    assert isinstance(rebuilt, votesim.system.VotingSystem)
    assert rebuilt.evaluate(random_voters, 5) \
        == system.evaluate(random_voters, 5)


def test_random_permutation_roundtrip():
    tb = votesim.evaluate.auxiliary.RandomPermutation(8, seed=4)
    rebuilt = votesim.persist.from_dict(tb.to_dict())
    assert rebuilt.order == tb.order


def test_callable_serialization():
    serialized = votesim.persist.serialize_value(
        votesim.evaluate.auxiliary.index_order
    )
    assert serialized == {
        'callable': 'votesim.evaluate.auxiliary.index_order'
    }
    assert votesim.persist.deserialize_value(serialized) \
        is votesim.evaluate.auxiliary.index_order


@pytest.mark.parametrize('invalid', [
    'votesim.evaluate.core.Plurality',
    {'range': 5},
    {'class': '.Plurality'},
])
def test_from_dict_invalid(invalid):
    with pytest.raises(ValueError):
        votesim.persist.from_dict(invalid)


def test_serialized_params():
    assert votesim.evaluate.cardinal.STAR.serialized_params \
        == ('range', 'tie_break_on')
    assert votesim.evaluate.Plurality.serialized_params == ()


@pytest.mark.parametrize('invalid', [{1, 2}, object()])
def test_serialize_invalid(invalid):
    with pytest.raises(ValueError):
        votesim.persist.serialize_value(invalid)


def test_deserialize_plain_dict_invalid():
    with pytest.raises(ValueError):
        votesim.persist.deserialize_value({'range': 5})
