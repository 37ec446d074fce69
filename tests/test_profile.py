
import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import votesim.evaluate
import votesim.system
from votesim.candidate import CandidateError
from votesim.evaluate.auxiliary import reverse_index_order
from votesim.profile import ElectionProfile
from votesim.voter import HonestVoter, RealOrdinalVoter, RealCardinalVoter


def test_infer_n_candidates_honest(plurality_voters):
    profile = ElectionProfile(plurality_voters)
    assert profile.n_candidates == 3
    assert profile.candidates == [0, 1, 2]
    assert profile.n_voters == 3


def test_infer_n_candidates_real_ordinal():
    profile = ElectionProfile([RealOrdinalVoter([0, 3]), RealOrdinalVoter([1])])
    assert profile.n_candidates == 4


def test_infer_n_candidates_mixed():
    profile = ElectionProfile([
        RealOrdinalVoter([1]),
        HonestVoter([0.2, 0.3, 0.4]),
        RealCardinalVoter(5, (1, 2, 3)),
    ])
    assert profile.n_candidates == 3
    assert profile.evaluate('plurality') == [2, 1, 0]


def test_conflicting_voters():
    with pytest.raises(CandidateError):
        ElectionProfile([HonestVoter([0.2, 0.3]), HonestVoter([0.2, 0.3, 0.4])])


def test_explicit_n_candidates_conflict():
    with pytest.raises(CandidateError):
        ElectionProfile([HonestVoter([0.2, 0.3])], n_candidates=3)


def test_ballot_out_of_range():
    with pytest.raises(CandidateError):
        ElectionProfile([RealOrdinalVoter([0, 3])], n_candidates=3)
    with pytest.raises(CandidateError):
        ElectionProfile([HonestVoter([0.2, 0.3]), RealOrdinalVoter([2])])


def test_empty_profile():
    profile = ElectionProfile([])
    assert profile.n_candidates == 0
    assert profile.evaluate('irv') == []


def test_evaluate_by_key_and_evaluator(runoff_differs_voters):
    profile = ElectionProfile(runoff_differs_voters)
    assert profile.evaluate('plurality') == [2, 1, 0]
    assert profile.evaluate('fptp_runoff') == [1, 2, 0]
    assert profile.evaluate(votesim.evaluate.Plurality()) == [2, 1, 0]
    assert profile.evaluate(votesim.system.METHODS['fptp_runoff']) \
        == [1, 2, 0]


def test_evaluate_unknown_key(plurality_voters):
    with pytest.raises(ValueError):
        ElectionProfile(plurality_voters).evaluate('borda')


def test_profile_tie_breaker():
    voters = [HonestVoter([1., 0., 0.]), HonestVoter([0., 0., 1.])]
    assert ElectionProfile(voters).evaluate('plurality') == [0, 2, 1]
    assert ElectionProfile(
        voters, tie_breaker=reverse_index_order
    ).evaluate('plurality') == [2, 0, 1]


def test_evaluate_all_is_permutation(random_voters):
    profile = ElectionProfile(random_voters)
    results = profile.evaluate_all()
    assert set(results.keys()) == set(votesim.system.METHODS.keys())
    for key, ranking in results.items():
        assert sorted(ranking) == [0, 1, 2, 3, 4], key


def test_evaluate_all_selected(irv_differs_voters):
    results = ElectionProfile(irv_differs_voters).evaluate_all(
        ['irv', 'fptp_runoff']
    )
    assert list(results.keys()) == ['irv', 'fptp_runoff']
    assert results['irv'][0] != results['fptp_runoff'][0]


def test_profile_does_not_change(random_voters):
    utilities = [tuple(voter.utilities()) for voter in random_voters]
    profile = ElectionProfile(random_voters)
    profile.evaluate_all()
    assert [tuple(voter.utilities()) for voter in profile.voters] == utilities
