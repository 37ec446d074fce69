
import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import votesim.vote
import votesim.candidate

VOTE_ERRORS = (
    votesim.vote.VoteError,
    votesim.candidate.CandidateError,
)


def check_validation(validator, ballot, is_ok, error=VOTE_ERRORS):
    if is_ok:
        validator.validate(ballot)
    else:
        with pytest.raises(error):
            validator.validate(ballot)


@pytest.mark.parametrize(('ballot', 'is_ok'), [
    ((0, 1, 2), True),
    ((2, 0), True),
    ((), True),
    ([1, 0], True),
    ((0, 0), False),
    ((0, -1), False),
    ((0, 'a'), False),
    ((0, 1.), False),
    ((True, 0), False),
    ('012', False),
    ({0, 1}, False),
])
def test_ordinal_validator(ballot, is_ok):
    check_validation(votesim.vote.OrdinalBallotValidator(), ballot, is_ok)


def test_ordinal_validator_range():
    validator = votesim.vote.OrdinalBallotValidator(n_candidates=3)
    check_validation(validator, (2, 1), True)
    check_validation(
        validator, (3, 1), False, error=votesim.candidate.CandidateError
    )


@pytest.mark.parametrize(('ballot', 'is_ok', 'error'), [
    ((0, 5, 3), True, None),
    ([0, 0, 0], True, None),
    ((0, 6, 3), False, votesim.vote.VoteValueError),
    ((0, -1, 3), False, votesim.vote.VoteValueError),
    ((0, 2.5, 3), False, votesim.vote.VoteTypeError),
    ((0, False, 3), False, votesim.vote.VoteTypeError),
    ({0: 1}, False, votesim.vote.VoteTypeError),
    ((), False, votesim.vote.VoteError),
])
def test_cardinal_validator(ballot, is_ok, error):
    check_validation(
        votesim.vote.CardinalBallotValidator(5), ballot, is_ok, error=error
    )


def test_cardinal_validator_length():
    validator = votesim.vote.CardinalBallotValidator(5, n_candidates=3)
    check_validation(validator, (1, 2, 3), True)
    check_validation(validator, (1, 2), False)


def test_cardinal_validator_range():
    with pytest.raises(ValueError):
        votesim.vote.CardinalBallotValidator(0)


def test_vote_value_error_message():
    err = votesim.vote.VoteValueError(7, 1, '[0, 5]')
    assert err.value == 7
    assert err.candidate == 1
    assert 'candidate 1' in str(err)
