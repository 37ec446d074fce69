'''Voters and the ballots they can cast.

Every voter implements the :class:`Voter` interface, a set of capabilities to
produce ballots of the shapes described in :mod:`votesim.vote` and to answer
questions about its underlying preferences. Not every kind of voter supports
every capability; a voter asked for something it cannot produce raises
:class:`UnsupportedBallotError`. This indicates a voter population that does
not fit the voting method, not a recoverable condition of the election.

Three kinds of voters are provided:

-   :class:`HonestVoter` - a simulated voter with a utility for each candidate
    who derives all of its ballots sincerely from these utilities.
-   :class:`RealOrdinalVoter` - a voter that only carries an already cast
    ranking, e.g. from imported ranked-choice election data.
-   :class:`RealCardinalVoter` - a voter that only carries an already cast
    score ballot of a fixed range.

Voter populations may freely mix these kinds.
'''

import abc
import math
from numbers import Number
from typing import Any, List, Dict, Sequence, Union, Callable, Optional

import votesim.util
from votesim.candidate import CandidateID, generate_candidates
from votesim.util import TieBreaker
from votesim.vote import OrdinalBallot, OrdinalEqualBallot, CardinalBallot, \
    ApprovalBallot, OrdinalBallotValidator, CardinalBallotValidator


ApprovalThreshold = Union[Number, str, Callable[[List[float]], float]]


class VoterError(Exception):
    '''A voter cannot provide what was requested from it.'''
    pass


class UnsupportedBallotError(VoterError):
    '''A voter was asked for a ballot shape or value it cannot produce.

    :param voter: The voter that was asked.
    :param capability: Name of the requested capability.
    :param reason: Why the voter cannot provide it.
    '''
    def __init__(self,
                 voter: 'Voter',
                 capability: str,
                 reason: Optional[str] = None,
                 ):
        self.voter = voter
        self.capability = capability
        message = f'{type(voter).__name__} cannot provide {capability}'
        if reason:
            message += f': {reason}'
        super().__init__(message)


class BallotRangeError(VoterError):
    '''A cardinal ballot was requested at a range the voter does not have.

    :param requested: The rating range requested.
    :param available: The rating range of the ballot the voter holds.
    '''
    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(
            f'invalid range of ballot ratings requested: {requested},'
            f' ballot was cast with range {available}'
        )


class Voter(metaclass=abc.ABCMeta):
    '''A voter able to cast ballots of some shapes.

    Ballots are immutable; repeated calls return the same ballot.
    '''

    @property
    def n_candidates(self) -> Optional[int]:
        '''Number of candidates the voter knows about, if it can tell.'''
        return None

    @abc.abstractmethod
    def cast_ordinal_ballot(self) -> OrdinalBallot:
        '''Return a strict ranking of candidates, most preferred first.'''
        raise NotImplementedError

    @abc.abstractmethod
    def cast_ordinal_equal_ballot(self) -> OrdinalEqualBallot:
        '''Return a ranking of groups of equally preferred candidates.'''
        raise NotImplementedError

    @abc.abstractmethod
    def cast_cardinal_ballot(self, range: int) -> CardinalBallot:
        '''Return a rating from 0 to range for each candidate.'''
        raise NotImplementedError

    @abc.abstractmethod
    def cast_approval_ballot(self) -> ApprovalBallot:
        '''Return the non-empty set of approved candidates.'''
        raise NotImplementedError

    @abc.abstractmethod
    def honest_preference(self, first: int, second: int) -> int:
        '''Compare two candidates by sincere preference.

        :returns: 1 if the first candidate is preferred, -1 if the second one
            is preferred, 0 if the voter is indifferent.
        '''
        raise NotImplementedError

    @abc.abstractmethod
    def utilities(self) -> Sequence[float]:
        '''Return the utility of every candidate to the voter.'''
        raise NotImplementedError

    @abc.abstractmethod
    def candidate_utility(self, candidate: int) -> float:
        '''Return the utility of a single candidate to the voter.'''
        raise NotImplementedError


class HonestVoter(Voter):
    '''A voter casting sincere ballots derived from candidate utilities.

    Since an honest voter votes the same way regardless of the voting method,
    all of its ballots are computed once and cached; cardinal ballots are
    cached per rating range as they are requested.

    :param utilities: Utility of each candidate to the voter, conceptually
        in the range [0, 1]; ``utilities[i]`` belongs to candidate ``i``.
    :param scales: Whether the voter stretches its utilities to the full
        rating range before casting a cardinal ballot. With utilities
        ``(.01, 0, .2)`` and range 10, a scaling voter casts ``(5, 0, 10)``
        whereas a non-scaling one casts ``(0, 0, 2)``. This is not considered
        strategic voting.
    :param approval_threshold: Where the voter places its approval cutoff;
        candidates with utility at or above it are approved:

        -   a number sets the threshold directly,
        -   ``'mean'`` uses the mean of the voter's utilities,
        -   a callable receives the list of utilities and returns the
            threshold.

        Regardless of the threshold, the voter always approves at least its
        favourite candidate.
    '''
    THRESHOLDS: Dict[str, Callable[[List[float]], float]] = {
        'mean': votesim.util.mean,
    }

    def __init__(self,
                 utilities: Sequence[float],
                 scales: bool = False,
                 approval_threshold: ApprovalThreshold = 'mean',
                 ):
        if not utilities:
            raise ValueError('voter needs utilities for at least one candidate')
        self._utilities = tuple(utilities)
        self.scales = scales
        self.approval_threshold = approval_threshold
        self._ordinal_ballot = tuple(sorted(
            generate_candidates(len(self._utilities)),
            key=self._utilities.__getitem__,
            reverse=True,
        ))
        self._ordinal_equal_ballot = group_equal(
            self._ordinal_ballot, self._utilities
        )
        self._approval_ballot = votesim.util.approved_candidates(
            self._utilities,
            self._resolve_threshold(approval_threshold)
        )
        if scales:
            self._rated_utilities = tuple(
                votesim.util.scale_utilities_linearly(self._utilities)
            )
        else:
            self._rated_utilities = self._utilities
        self._cardinal_ballots: Dict[int, CardinalBallot] = {}

    def _resolve_threshold(self, threshold: ApprovalThreshold) -> float:
        if isinstance(threshold, str):
            try:
                return self.THRESHOLDS[threshold](list(self._utilities))
            except KeyError as e:
                raise ValueError(
                    f'unknown approval threshold: {threshold!r}, available: '
                    + ', '.join(self.THRESHOLDS.keys())
                ) from e
        elif callable(threshold):
            return threshold(list(self._utilities))
        else:
            return threshold

    @property
    def n_candidates(self) -> int:
        return len(self._utilities)

    def cast_ordinal_ballot(self) -> OrdinalBallot:
        return self._ordinal_ballot

    def cast_ordinal_equal_ballot(self) -> OrdinalEqualBallot:
        return self._ordinal_equal_ballot

    def cast_cardinal_ballot(self, range: int) -> CardinalBallot:
        '''Rate each candidate from 0 to range by (possibly scaled) utility.

        Utilities outside of the unit interval get the extreme ratings.
        '''
        if range not in self._cardinal_ballots:
            if range < 1:
                raise ValueError(f'rating range must be positive, got {range}')
            self._cardinal_ballots[range] = tuple(
                votesim.util.round_half_up(range * votesim.util.clamp(util))
                for util in self._rated_utilities
            )
        return self._cardinal_ballots[range]

    def cast_approval_ballot(self) -> ApprovalBallot:
        return self._approval_ballot

    def honest_preference(self, first: int, second: int) -> int:
        first_util = self._utilities[first]
        second_util = self._utilities[second]
        return (first_util > second_util) - (first_util < second_util)

    def utilities(self) -> Sequence[float]:
        return self._utilities

    def candidate_utility(self, candidate: int) -> float:
        return self._utilities[candidate]

    def __repr__(self) -> str:
        return f'<HonestVoter({self._utilities!r})>'


class RealOrdinalVoter(Voter):
    '''A voter that only holds an actually cast ranking.

    Such a voter carries no ratings, approvals or utilities; asking it for
    anything else than its ordinal ballot raises
    :class:`UnsupportedBallotError`.

    :param ballot: Candidates in the order of preference. May rank only some
        of the candidates; equal rankings are not permitted.
    :raises votesim.vote.VoteError: If the ballot is malformed.
    '''
    NO_INFO = 'a real ordinal ballot contains no cardinal or utility information'

    def __init__(self, ballot: Sequence[int]):
        OrdinalBallotValidator().validate(ballot)
        self._ordinal_ballot = tuple(CandidateID(cand) for cand in ballot)

    def cast_ordinal_ballot(self) -> OrdinalBallot:
        return self._ordinal_ballot

    def cast_ordinal_equal_ballot(self) -> OrdinalEqualBallot:
        raise UnsupportedBallotError(
            self, 'ordinal-equal ballot',
            'a real ordinal ballot does not permit equal rankings'
        )

    def cast_cardinal_ballot(self, range: int) -> CardinalBallot:
        raise UnsupportedBallotError(self, 'cardinal ballot', self.NO_INFO)

    def cast_approval_ballot(self) -> ApprovalBallot:
        raise UnsupportedBallotError(self, 'approval ballot', self.NO_INFO)

    def honest_preference(self, first: int, second: int) -> int:
        raise UnsupportedBallotError(self, 'honest preference', self.NO_INFO)

    def utilities(self) -> Sequence[float]:
        raise UnsupportedBallotError(self, 'utilities', self.NO_INFO)

    def candidate_utility(self, candidate: int) -> float:
        raise UnsupportedBallotError(self, 'utilities', self.NO_INFO)

    def __repr__(self) -> str:
        return f'<RealOrdinalVoter({list(self._ordinal_ballot)!r})>'


class RealCardinalVoter(Voter):
    '''A voter that only holds an actually cast score ballot of fixed range.

    The ordinal and ordinal-equal ballots are derived from the ratings.
    An approval ballot can only be derived from a ballot of range 1, where
    a rating of 1 means approval.

    :param range: The highest rating the ballot could contain.
    :param ballot: Rating of each candidate, indexed by candidate.
    :param tie_breaker: Orders equally rated candidates in the derived
        strict ordinal ballot. If not given, they remain in index order.
    :raises votesim.vote.VoteError: If the ballot is malformed.
    '''
    NO_UTILITY = 'a real cardinal ballot contains no raw utility information'
    NO_HONESTY = 'a real cardinal ballot cannot reveal honest preferences'

    def __init__(self,
                 range: int,
                 ballot: Sequence[int],
                 tie_breaker: Optional[TieBreaker] = None,
                 ):
        CardinalBallotValidator(range).validate(ballot)
        self.range = range
        self._cardinal_ballot = tuple(ballot)
        self._ordinal_ballot = tuple(votesim.util.sort_candidates_by_key(
            self._cardinal_ballot, tie_breaker
        ))
        self._ordinal_equal_ballot = group_equal(
            self._ordinal_ballot, self._cardinal_ballot
        )
        if range == 1:
            approved = frozenset(
                CandidateID(cand)
                for cand, rating in enumerate(self._cardinal_ballot)
                if rating == 1
            )
            if not approved and self._ordinal_ballot:
                approved = frozenset(self._ordinal_ballot[:1])
            self._approval_ballot = approved
        else:
            self._approval_ballot = None

    @property
    def n_candidates(self) -> int:
        return len(self._cardinal_ballot)

    def cast_ordinal_ballot(self) -> OrdinalBallot:
        return self._ordinal_ballot

    def cast_ordinal_equal_ballot(self) -> OrdinalEqualBallot:
        return self._ordinal_equal_ballot

    def cast_cardinal_ballot(self, range: int) -> CardinalBallot:
        if range != self.range:
            raise BallotRangeError(range, self.range)
        return self._cardinal_ballot

    def cast_approval_ballot(self) -> ApprovalBallot:
        if self._approval_ballot is None:
            raise BallotRangeError(1, self.range)
        return self._approval_ballot

    def honest_preference(self, first: int, second: int) -> int:
        raise UnsupportedBallotError(self, 'honest preference', self.NO_HONESTY)

    def utilities(self) -> Sequence[float]:
        raise UnsupportedBallotError(self, 'utilities', self.NO_UTILITY)

    def candidate_utility(self, candidate: int) -> float:
        raise UnsupportedBallotError(self, 'utilities', self.NO_UTILITY)

    def __repr__(self) -> str:
        return (
            f'<RealCardinalVoter({list(self._cardinal_ballot)!r},'
            f' range={self.range})>'
        )


def group_equal(ordinal_ballot: OrdinalBallot,
                values: Sequence[Any],
                ) -> OrdinalEqualBallot:
    '''Group consecutive candidates of a strict ranking with equal values.

    :param ordinal_ballot: Candidates sorted in descending order of value.
    :param values: The value of each candidate, indexed by candidate.
    '''
    groups: List[List[CandidateID]] = []
    previous = math.nan    # never equal, so the first candidate opens a group
    for cand in ordinal_ballot:
        if values[cand] != previous:
            groups.append([cand])
            previous = values[cand]
        else:
            groups[-1].append(cand)
    return tuple(frozenset(group) for group in groups)
