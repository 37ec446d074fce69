'''Ballot shapes and ballot validators.

Voters in votesim can produce ballots of four shapes. None of them is a single
common type; an evaluator requests the shape it needs and a voter either
produces it or refuses (see :mod:`votesim.voter`):

-   **Ordinal** ballots - a strict ranking of candidates, most preferred first.
    Represented by a tuple of :class:`votesim.candidate.CandidateID`.
    Real-world ordinal ballots may be truncated (not rank every candidate).
-   **Ordinal-equal** ballots - a ranking of groups of candidates, the
    candidates within a group being equally preferred. Represented by a tuple
    of frozen sets of candidate identifiers.
-   **Cardinal** ballots - an integer rating from 0 to a given range for each
    candidate. Represented by a tuple indexed by candidate.
-   **Approval** ballots - the set of candidates the voter approves of.
    Represented by a frozen set of candidate identifiers; never empty.

Ballots that come from outside the simulation (real-world data) are checked
by the validators in this module before a voter is built around them. If a
ballot is invalid, they raise a subclass of :class:`VoteError` (or
:class:`votesim.candidate.CandidateError`, if a candidate contained in the
ballot is invalid).
'''

import abc
from typing import Any, Tuple, FrozenSet, Optional

import votesim.candidate
from votesim.candidate import CandidateID
from votesim.persist import simple_serialization


class VoteError(Exception, metaclass=abc.ABCMeta):
    '''A ballot is invalid.'''
    pass


class VoteTypeError(VoteError):
    '''A ballot or its item is of an invalid type.

    :param vtype: Value whose type was detected as invalid.
    :param expected: Type that was expected.
    '''
    def __init__(self, vtype: Any, expected: type = None):
        self.vtype = vtype
        self.expected = expected
        message = f'invalid vote type: {vtype!r}'
        if expected:
            message += f', must be {expected.__name__}'
        super().__init__(message)


class VoteValueError(VoteError):
    '''An explicitly given rating is invalid.

    :param value: The invalid rating.
    :param candidate: A candidate that the rating was given to. If None, a
        specific candidate could not be pinpointed.
    :param allowed: A spectrum of values that is allowed at the given point.
    '''
    def __init__(self,
                 value: Any,
                 candidate: Optional[int] = None,
                 allowed: Any = None,
                 ):
        self.value = value
        self.candidate = candidate
        self.allowed = allowed
        message = f'invalid vote: {value!r}'
        if candidate is not None:
            message += f' for candidate {candidate}'
        if allowed is not None:
            message += f', allowed: {allowed}'
        super().__init__(message)


OrdinalBallot = Tuple[CandidateID, ...]
OrdinalEqualBallot = Tuple[FrozenSet[CandidateID], ...]
CardinalBallot = Tuple[int, ...]
ApprovalBallot = FrozenSet[CandidateID]


class BallotValidator(metaclass=abc.ABCMeta):
    '''Validate that a single ballot is well-formed.

    Base class, not intended for direct use.
    '''
    @abc.abstractmethod
    def validate(self, ballot: Any) -> None:
        '''Check if the ballot is well-formed.

        :raises NotImplementedError:
        '''
        raise NotImplementedError


@simple_serialization
class OrdinalBallotValidator(BallotValidator):
    '''Validate a strict ordinal ballot (ranking of a number of candidates).

    The ballot must be a sequence of non-negative integer candidate indices,
    each appearing at most once. Truncated rankings are allowed.

    :param n_candidates: Number of candidates in the election, if known.
        If given, the ranked candidates must all be lower than this.
    '''
    def __init__(self, n_candidates: Optional[int] = None):
        self.n_candidates = n_candidates

    def validate(self, ballot: Tuple[int, ...]) -> None:
        '''Check if the ordinal ballot is valid.

        :param ballot: Ordinal ballot to be checked.
        :raises VoteTypeError: If the ballot is not a tuple or list, or any
            of its items is not an integer.
        :raises VoteError: If any candidate is ranked more than once.
        :raises CandidateError: If any of the contained candidates
            is invalid.
        '''
        if not isinstance(ballot, (tuple, list)):
            raise VoteTypeError(ballot, tuple)
        for item in ballot:
            if not isinstance(item, int) or isinstance(item, bool):
                raise VoteTypeError(item, int)
            if item < 0:
                raise votesim.candidate.CandidateError(
                    item, 'a non-negative integer'
                )
            if self.n_candidates is not None:
                votesim.candidate.check_in_range(item, self.n_candidates)
        if len(set(ballot)) < len(ballot):
            raise VoteError(f'duplicated candidates: {ballot!r}')


@simple_serialization
class CardinalBallotValidator(BallotValidator):
    '''Validate a cardinal ballot (a rating for every candidate).

    The ballot must be a sequence of integers in ``[0, range]``, one for each
    candidate.

    :param range: The highest permissible rating.
    :param n_candidates: Number of candidates in the election, if known.
        If given, the ballot must rate exactly this many candidates.
    '''
    def __init__(self, range: int, n_candidates: Optional[int] = None):
        if range < 1:
            raise ValueError(f'rating range must be positive, got {range}')
        self.range = range
        self.n_candidates = n_candidates

    def validate(self, ballot: Tuple[int, ...]) -> None:
        '''Check if the cardinal ballot is valid.

        :param ballot: Cardinal ballot to be checked.
        :raises VoteTypeError: If the ballot is not a tuple or list, or any
            of the ratings is not an integer.
        :raises VoteValueError: If any rating is out of range.
        :raises VoteError: If the ballot is empty or the number of ratings
            does not match the number of candidates.
        '''
        if not isinstance(ballot, (tuple, list)):
            raise VoteTypeError(ballot, tuple)
        if not ballot:
            raise VoteError('cardinal ballot rates no candidates')
        if self.n_candidates is not None and len(ballot) != self.n_candidates:
            raise VoteError(
                f'ballot rates {len(ballot)} candidates,'
                f' expected {self.n_candidates}'
            )
        for cand, rating in enumerate(ballot):
            if not isinstance(rating, int) or isinstance(rating, bool):
                raise VoteTypeError(rating, int)
            if not 0 <= rating <= self.range:
                raise VoteValueError(rating, cand, f'[0, {self.range}]')
