
import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import votesim.evaluate
from votesim.evaluate.auxiliary import index_order, reverse_index_order
from votesim.evaluate.cardinal import ScoreVoting, STAR, score_tally
from votesim.evaluate.core import NonDecisiveTieBreakerError
from votesim.voter import HonestVoter, RealOrdinalVoter, RealCardinalVoter, \
    UnsupportedBallotError, BallotRangeError


def real_voters(range, ballots):
    voters = []
    for n, ballot in ballots:
        voters.extend([RealCardinalVoter(range, ballot)] * n)
    return voters


STAR_DIFFERS = [(3, (4, 5, 0)), (2, (5, 0, 0))]


def test_score_tally():
    voters = real_voters(5, STAR_DIFFERS)
    assert score_tally(voters, 3, 5) == [22, 15, 0]


def test_score():
    voters = real_voters(5, STAR_DIFFERS)
    assert ScoreVoting(5).evaluate(voters, 3) == [0, 1, 2]


def test_score_honest():
    voters = [
        HonestVoter([0.3, 0.5, 0.1], scales=True),
        HonestVoter([0.9, 0.8, 0.0]),
    ]
    # ratings (5, 10, 0) and (9, 8, 0)
    assert ScoreVoting(10).evaluate(voters, 3) == [1, 0, 2]


def test_score_negative_utilities_rate_zero():
    voters = (
        [HonestVoter([-0.4, 0, 0.2]) for i in range(3)]
        + [HonestVoter([1, 0, .2])]
    )
    assert score_tally(voters, 3, 5) == [5, 0, 4]
    assert ScoreVoting(5).evaluate(voters, 3) == [0, 2, 1]


def test_score_runoff():
    voters = real_voters(5, STAR_DIFFERS)
    with pytest.raises(UnsupportedBallotError):
        votesim.evaluate.HonestRunoff(ScoreVoting(5)).evaluate(voters, 3)


def test_score_runoff_honest():
    voters = (
        [HonestVoter([0.8, 1.0, 0.0])] * 3
        + [HonestVoter([1.0, 0.0, 0.0])] * 2
    )
    assert ScoreVoting(5).evaluate(voters, 3) == [0, 1, 2]
    assert votesim.evaluate.HonestRunoff(ScoreVoting(5)).evaluate(voters, 3) \
        == [1, 0, 2]


def test_score_range_mismatch():
    voters = real_voters(5, STAR_DIFFERS)
    with pytest.raises(BallotRangeError):
        ScoreVoting(10).evaluate(voters, 3)


def test_score_real_ordinal_unsupported():
    with pytest.raises(UnsupportedBallotError):
        ScoreVoting(5).evaluate([RealOrdinalVoter((0, 1))], 2)


@pytest.mark.parametrize('evaluator_class', [ScoreVoting, STAR])
def test_invalid_range(evaluator_class):
    with pytest.raises(ValueError):
        evaluator_class(0)


def test_star():
    voters = real_voters(5, STAR_DIFFERS)
    assert STAR(5).evaluate(voters, 3) == [1, 0, 2]


def test_star_score_winner_holds():
    voters = real_voters(5, [(3, (5, 4, 0)), (2, (4, 5, 0))])
    assert STAR(5).evaluate(voters, 3) == [0, 1, 2]


def test_star_equal_ratings_do_not_count():
    voters = real_voters(5, [(4, (3, 3, 0)), (1, (2, 4, 5)), (1, (5, 0, 1))])
    # totals 19, 16, 6; runoff 1 to 1 with four voters indifferent
    assert STAR(5).evaluate(voters, 3, index_order) == [0, 1, 2]
    assert STAR(5).evaluate(voters, 3, reverse_index_order) == [1, 0, 2]


def test_star_tie_candidate_mode():
    voters = real_voters(5, [(1, (5, 3, 0)), (1, (3, 5, 0))])
    assert STAR(5).evaluate(voters, 3, index_order) == [0, 1, 2]
    assert STAR(5).evaluate(voters, 3, reverse_index_order) == [1, 0, 2]
    with pytest.raises(NonDecisiveTieBreakerError):
        STAR(5).evaluate(voters, 3, lambda a, b: 0)


def test_star_tie_rating_mode():
    voters = real_voters(5, [(1, (5, 1, 0)), (1, (2, 5, 0))])
    # totals 7 and 6, runoff tied
    assert STAR(5, tie_break_on='candidate').evaluate(voters, 3) == [0, 1, 2]
    assert STAR(5, tie_break_on='rating').evaluate(voters, 3) == [1, 0, 2]


def test_star_tie_rating_mode_equal_totals():
    voters = real_voters(5, [(1, (5, 3, 0)), (1, (3, 5, 0))])
    with pytest.raises(NonDecisiveTieBreakerError):
        STAR(5, tie_break_on='rating').evaluate(voters, 3, index_order)


def test_star_invalid_tie_break_mode():
    with pytest.raises(ValueError):
        STAR(5, tie_break_on='coin')


def test_star_single_candidate():
    voters = real_voters(5, [(2, (3, ))])
    assert STAR(5).evaluate(voters, 1) == [0]
