"""Load ranked ballots from BLT files.

The BLT format is the de facto standard for ranked election data, used e.g.
by OpenSTV. A file consists of:

-   a header line with the number of candidates and the number of seats,
-   optionally, lines with negative numbers marking withdrawn candidates,
-   ballot lines, each with a weight, then the 1-based numbers of the ranked
    candidates in order of preference, terminated by a zero,
-   a line with a single zero ending the ballot list,
-   the candidate names in double quotes, one per line, optionally followed
    by the election title.

Everything after a hash sign (outside of a quoted string) is a comment.

Only ballots that a :class:`votesim.voter.RealOrdinalVoter` can represent are
supported: weights must be integers, and equal rankings and withdrawn
candidates are rejected with :class:`NotSupportedInBLT`.
"""

import dataclasses
import logging
from decimal import Decimal, InvalidOperation
from numbers import Number
from typing import List, Dict, Tuple, Iterable, Iterator, Optional

import votesim.io.core
import votesim.profile
from votesim.evaluate.auxiliary import index_order
from votesim.util import TieBreaker
from votesim.voter import RealOrdinalVoter

logger = logging.getLogger(__name__)


class NotSupportedInBLT(votesim.io.core.NotSupportedInFormat):
    FORMAT = 'BLT loader'


class BLTParseError(votesim.io.core.ParseError):
    pass


@dataclasses.dataclass
class BallotData:
    """Ranked ballots loaded from a BLT file.

    :param ballots: Numbers of identical ballots; the ballots are tuples of
        0-based candidate indices in order of preference.
    :param n_seats: Number of seats to be filled as stated in the file.
    :param candidates: Candidate names, by index.
    :param title: Title of the election, if given.
    """
    ballots: Dict[Tuple[int, ...], int]
    n_seats: int
    candidates: List[str]
    title: Optional[str] = None

    @property
    def n_candidates(self) -> int:
        return len(self.candidates)

    def voters(self) -> List[RealOrdinalVoter]:
        """Create a voter for every ballot cast, repeating it per its weight."""
        voters = []
        for ballot, weight in self.ballots.items():
            voter = RealOrdinalVoter(ballot)
            voters.extend([voter] * weight)
        return voters

    def profile(self,
                tie_breaker: TieBreaker = index_order,
                ) -> votesim.profile.ElectionProfile:
        """Create an election of the loaded candidates and ballots."""
        return votesim.profile.ElectionProfile(
            self.voters(),
            n_candidates=self.n_candidates,
            tie_breaker=tie_breaker,
        )


def load_lines(blt_lines: Iterator[str]) -> BallotData:
    try:
        n_cands, n_seats = _parse_header(next(blt_lines))
    except StopIteration as e:
        raise BLTParseError('empty BLT file') from e
    ballots = _parse_body(blt_lines, n_cands)
    candidates, title = _parse_strings(blt_lines, n_cands)
    if candidates is None:
        candidates = _numeric_candidates(n_cands)
    logger.info('loaded %d ballots for %d candidates from BLT',
                sum(ballots.values()), n_cands)
    return BallotData(
        ballots=ballots,
        n_seats=n_seats,
        candidates=candidates,
        title=title,
    )


load, loads = votesim.io.core.loaders(load_lines)


def _numeric_candidates(n_cands: int) -> List[str]:
    return [str(i+1) for i in range(n_cands)]


def _parse_header(blt_line: str) -> Tuple[int, int]:
    nums = _parse_numline(blt_line)
    if len(nums) != 2 or not all(
        isinstance(num, int) and num >= 0 for num in nums
    ):
        raise BLTParseError(f'need two integers (candidate and seat count)'
                            f' in BLT file header line, got {blt_line!r}')
    return nums[0], nums[1]


def _parse_body(blt_lines: Iterable[str],
                n_cands: int,
                ) -> Dict[Tuple[int, ...], int]:
    ballots: Dict[Tuple[int, ...], int] = {}
    ballots_encountered = False
    for line in blt_lines:
        nums = _parse_numline(line)
        if not nums:
            continue    # ignore empty lines
        elif nums == [0]:
            return ballots
        elif nums[0] < 0:
            if ballots_encountered:
                raise BLTParseError('withdrawn candidate line after ballot'
                                    f' line: {line!r}')
            raise NotSupportedInBLT(
                f'withdrawn candidates ({", ".join(str(-n) for n in nums)})'
            )
        else:
            weight, ballot = _parse_ballot(nums, n_cands, line)
            if weight:
                ballots[ballot] = ballots.get(ballot, 0) + weight
            ballots_encountered = True
    raise BLTParseError('incomplete BLT file:'
                        ' EOF before ballot list terminator')


def _parse_ballot(nums: List[Number],
                  n_cands: int,
                  line: str,
                  ) -> Tuple[int, Tuple[int, ...]]:
    if nums[-1] != 0:
        raise BLTParseError(f'ballot line must be zero-terminated: {line!r}')
    weight, ranks = nums[0], nums[1:-1]
    if weight != int(weight):
        raise NotSupportedInBLT(f'fractional ballot weight {weight}')
    if any(not 1 <= rank <= n_cands for rank in ranks):
        raise BLTParseError(f'candidate number out of range 1-{n_cands}'
                            f' in ballot: {line!r}')
    if len(set(ranks)) < len(ranks):
        raise BLTParseError(f'candidate ranked twice in ballot: {line!r}')
    return int(weight), tuple(rank - 1 for rank in ranks)


def _parse_strings(blt_lines: Iterable[str],
                   n_cands: int,
                   ) -> Tuple[Optional[List[str]], Optional[str]]:
    parsed_lines = []
    empty_encountered = False
    for blt_line in blt_lines:
        blt_line = _clean_line(blt_line)
        if blt_line.startswith('"') and blt_line.endswith('"'):
            if empty_encountered:
                raise BLTParseError(f'nonempty line after empty: {blt_line!r}')
            parsed_lines.append(blt_line[1:-1])
        elif not blt_line:
            empty_encountered = True
        else:
            raise BLTParseError(f'invalid BLT string line: {blt_line!r}')
    if not parsed_lines:
        return None, None
    elif len(parsed_lines) == n_cands:
        return parsed_lines, None
    elif len(parsed_lines) == n_cands + 1:
        return parsed_lines[:-1], parsed_lines[-1]
    elif len(parsed_lines) == 1:
        return None, parsed_lines[0]
    elif len(parsed_lines) < n_cands:
        raise BLTParseError(f'not enough candidate names: {len(parsed_lines)}'
                            f' given, {n_cands} set in header')
    else:
        raise BLTParseError(f'too many strings: {len(parsed_lines)} found'
                            f' but expecting {n_cands} candidate names + title')


def _clean_line(blt_line: str) -> str:
    blt_line = blt_line.strip()
    # Ignore everything after the first hash sign after the last double quote.
    hash_search_start = blt_line.rfind('"') if '"' in blt_line else 0
    leftmost_hash = blt_line[hash_search_start:].find('#')
    if leftmost_hash == -1:
        return blt_line
    else:
        return blt_line[:(hash_search_start + leftmost_hash)].rstrip()


def _parse_numline(blt_line: str) -> List[Number]:
    blt_line = _clean_line(blt_line)
    nums: List[Number] = []
    for i, numstr in enumerate(blt_line.split()):
        if '=' in numstr:
            raise NotSupportedInBLT(f'equal rankings ({numstr})')
        try:
            nums.append(int(numstr))
        except ValueError:
            if i != 0:
                raise BLTParseError(
                    f'invalid BLT number line item {i}: {numstr!r}'
                ) from None
            try:
                nums.append(Decimal(numstr))
            except InvalidOperation as e:
                raise BLTParseError(
                    f'invalid BLT ballot weight: {numstr!r}'
                ) from e
    return nums
