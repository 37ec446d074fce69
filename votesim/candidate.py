'''Candidate identifiers.

Candidates in a simulated election carry no properties of their own; they are
identified by a dense, zero-based index into the candidate list of a single
election (:class:`CandidateID`). Voters assign their utilities and ratings by
this index, and all evaluators return rankings of these identifiers.

Because :class:`CandidateID` subclasses ``int``, rankings can be compared to
plain lists of integers and candidate identifiers can be used directly to index
utility vectors and tallies.
'''

from typing import Any, List


class CandidateError(Exception):
    '''A candidate is invalid in the given context.

    E.g. a negative candidate index, or a candidate that lies outside the
    candidate list of the election.

    :param candidate: Candidate that was found to be invalid.
    :param expected: Definition of a candidate that was expected.
    '''
    def __init__(self, candidate: Any, expected: Any = None):
        self.candidate = candidate
        self.expected = expected
        message = f'invalid candidate: {candidate!r}'
        if expected:
            message += f', must be {expected}'
        super().__init__(message)


class CandidateID(int):
    '''An index identifying a candidate within a single election.

    Candidate identifiers of an election with ``n`` candidates are exactly
    the integers from 0 to ``n - 1``. Equality, ordering and hashing are those
    of the wrapped integer.

    :raises CandidateError: If the index is negative.
    '''
    __slots__ = ()

    def __new__(cls, index: int):
        value = super().__new__(cls, index)
        if value < 0:
            raise CandidateError(index, 'a non-negative integer')
        return value

    def __repr__(self) -> str:
        return f'CandidateID({int(self)})'


def generate_candidates(n: int) -> List[CandidateID]:
    '''Return the identifiers of all candidates in an election of n.'''
    if n < 0:
        raise CandidateError(n, 'a non-negative candidate count')
    return [CandidateID(i) for i in range(n)]


def check_in_range(candidate: int, n_candidates: int) -> None:
    '''Check that the candidate belongs to an election of n_candidates.

    :raises CandidateError: If the candidate index is out of range.
    '''
    if not 0 <= candidate < n_candidates:
        raise CandidateError(candidate, f'in range [0, {n_candidates})')
