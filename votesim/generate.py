"""Generate voters for voting system simulations.

Two paradigms of voter generation are implemented here:

-   :class:`UtilityGenerator` samples the utility of every candidate to every
    voter independently from a statistical distribution. Under default
    settings (uniform utilities), this produces the *Impartial Culture* (IC).
-   :class:`SpatialGenerator` spreads candidates and voters as points into
    a multidimensional issue space; the utility of a candidate to a voter
    decreases with the distance between them.

Both produce :class:`votesim.voter.HonestVoter` populations. The sampling is
delegated to a contained instance of :class:`Sampler` and driven by a random
generator owned by the generator object, so that a seeded generator always
produces the same sequence of electorates.
"""

import abc
import math
import random
from numbers import Number
from typing import Optional, List, Tuple, Dict, Union, Iterable, Sequence, \
    Callable

import votesim.util
from votesim.voter import HonestVoter, ApprovalThreshold

Position = Tuple[float, ...]


class Sampler(metaclass=abc.ABCMeta):
    """A generic sampler interface."""
    n_dims: Optional[int]

    @abc.abstractmethod
    def sample(self,
               n: int,
               rng: Optional[random.Random] = None,
               n_dims: Optional[int] = None,
               ) -> Iterable[Position]:
        raise NotImplementedError


class DistributionSampler(Sampler):
    """Sample points from the issue or utility space by specifying a distribution.

    Uses a statistical probability distribution to produce randomly located
    points within the space of given dimensionality. The distributions are
    taken from Python's *random* module by referencing the names of the
    generating functions (``uniform``, ``gauss``, ``betavariate``...).

    Any superfluous keyword arguments are passed to the generating function.
    A parameter may be given as a tuple with one value for each dimension.
    If no keyword arguments are given, defaults are used for the most common
    distributions.

    :param distribution: The name of the distribution to use. Must refer to a
        name of a method of :class:`random.Random` that produces random floats.
    :param n_dims: Dimensionality of the space to sample from. If not given,
        it is taken from the tuple parameters, or must be given when sampling.
    :raises ValueError: If the distribution is unknown or the dimensions of
        the parameters do not agree.
    """
    DEFAULT_PARAMS: Dict[str, Dict[str, Number]] = {
        'gauss': {'mu': 0, 'sigma': 1},
        'normalvariate': {'mu': 0, 'sigma': 1},
        'uniform': {'a': 0, 'b': 1},
        'triangular': {'low': 0, 'high': 1, 'mode': .5},
        'betavariate': {'alpha': 2, 'beta': 2},
    }

    def __init__(self,
                 distribution: str = 'gauss',
                 n_dims: Optional[int] = None,
                 **kwargs):
        if distribution.startswith('_') or not callable(
            getattr(random.Random, distribution, None)
        ):
            raise ValueError(f'unknown distribution: {distribution!r}')
        self.distribution = distribution
        if not kwargs:
            kwargs = self.DEFAULT_PARAMS.get(distribution, {}).copy()
        for argname, argval in kwargs.items():
            if isinstance(argval, (tuple, list)):
                if n_dims is None:
                    n_dims = len(argval)
                elif len(argval) != n_dims:
                    raise ValueError(
                        f'sampling {argname} parameter has'
                        f' {len(argval)} dimensions, expected {n_dims}'
                    )
        self.n_dims = n_dims
        self.params = kwargs

    def _dimension_params(self, n_dims: int) -> List[Dict[str, Number]]:
        return [
            {
                argname: (
                    argval[i] if isinstance(argval, (tuple, list)) else argval
                )
                for argname, argval in self.params.items()
            }
            for i in range(n_dims)
        ]

    def sample(self,
               n: int,
               rng: Optional[random.Random] = None,
               n_dims: Optional[int] = None,
               ) -> Iterable[Position]:
        """Sample n points from the distribution.

        :param n: Number of points to sample.
        :param rng: Random generator to draw from; the global one of the
            random module if not given.
        :param n_dims: Dimensionality of the points, if not set on the
            instance.
        """
        if self.n_dims is None:
            if n_dims is None:
                raise ValueError('need n_dims arg when not set on instance')
        elif n_dims is not None and n_dims != self.n_dims:
            raise ValueError(f'conflicting n_dims: got {n_dims}'
                             f' but {self.n_dims} set on instance')
        else:
            n_dims = self.n_dims
        distro_fx = getattr(random if rng is None else rng, self.distribution)
        dim_params = self._dimension_params(n_dims)
        for i in range(n):
            yield tuple(distro_fx(**params) for params in dim_params)


def uniform_utilities(n: int,
                      rng: Optional[random.Random] = None,
                      ) -> List[float]:
    """Draw n utilities from the uniform distribution over [0, 1)."""
    rng = random if rng is None else rng
    return [rng.random() for _ in range(n)]


def beta_utilities(n: int,
                   alpha: float,
                   beta: float,
                   rng: Optional[random.Random] = None,
                   ) -> List[float]:
    """Draw n utilities from the Beta distribution over [0, 1]."""
    rng = random if rng is None else rng
    return [rng.betavariate(alpha, beta) for _ in range(n)]


class UtilitySampler(Sampler):
    """Sample utility vectors by drawing all utilities of a voter at once.

    :param draw: A function taking the number of utilities to draw, the
        random generator as the ``rng`` keyword argument and the parameters
        given here, such as :func:`uniform_utilities` or
        :func:`beta_utilities`.
    """
    def __init__(self, draw: Callable[..., List[float]], **params):
        self.draw = draw
        self.params = params

    def sample(self,
               n: int,
               rng: Optional[random.Random] = None,
               n_dims: Optional[int] = None,
               ) -> Iterable[Position]:
        if n_dims is None:
            raise ValueError('need n_dims arg to sample utilities')
        for i in range(n):
            yield tuple(self.draw(n_dims, rng=rng, **self.params))


class UtilityGenerator:
    """Randomly sample independent candidate utilities for every voter.

    The underlying sampler produces the utility vectors directly, one
    dimension per candidate; utilities outside of the unit interval are
    clamped into it. By providing different settings for different
    dimensions of the passed sampler, utility distributions for individual
    candidates can be set. An example for two candidates, in which the first
    one will, on average, have higher utility (mean 0.7) than the second
    (mean 0.3)::

        UtilityGenerator(
            2,
            sampler=DistributionSampler('betavariate', alpha=(7, 3), beta=(3, 7))
        )

    :param n_candidates: Number of candidates.
    :param sampler: How to sample the utilities. Either an object with a
        ``sample()`` method (such as instances of :class:`Sampler`
        subclasses), or a name of a distribution for
        :class:`DistributionSampler` with its default settings.
    :param scales: Whether the generated voters scale their utilities before
        casting cardinal ballots.
    :param approval_threshold: Approval threshold of the generated voters.
    :param random_state: Seed for the random generator.
    """
    def __init__(self,
                 n_candidates: int,
                 sampler: Union[str, Sampler] = 'uniform',
                 scales: bool = False,
                 approval_threshold: ApprovalThreshold = 'mean',
                 random_state: Optional[int] = None,
                 ):
        if n_candidates < 1:
            raise ValueError(f'need at least one candidate, got {n_candidates}')
        self.n_candidates = n_candidates
        self.sampler = _create_sampler(sampler, n_dims=None)
        self.scales = scales
        self.approval_threshold = approval_threshold
        self.random_state = random_state
        self.rng = random.Random(random_state)

    def generate(self, n: int) -> List[HonestVoter]:
        """Generate n voters."""
        return [
            HonestVoter(
                [votesim.util.clamp(util) for util in utilities],
                scales=self.scales,
                approval_threshold=self.approval_threshold,
            )
            for utilities in self.sampler.sample(
                n, self.rng, n_dims=self.n_candidates
            )
        ]


def lp_metric(first: Sequence[float],
              second: Sequence[float],
              p: float = 2,
              ) -> float:
    """Compute the distance of two points in the Lp metric.

    ``p = 1`` gives the taxicab distance, ``p = 2`` the Euclidean distance
    and ``p = math.inf`` the maximum (Chebyshev) distance.
    """
    if p < 1:
        raise ValueError(f'Lp metric requires p of at least 1, got {p}')
    diffs = [abs(a - b) for a, b in zip(first, second)]
    if math.isinf(p):
        return max(diffs, default=0.)
    return sum(diff ** p for diff in diffs) ** (1 / p)


def distance_utility(distance: float) -> float:
    """Transform a voter-to-candidate distance to a utility in [0, 1]."""
    return votesim.util.clamp(1 / (1 + distance))


def generate_positions(groups: Iterable[Tuple[Sampler, int]],
                       rng: Optional[random.Random] = None,
                       n_dims: Optional[int] = None,
                       ) -> List[Position]:
    """Sample positions of several groups of points in the issue space.

    Allows to model e.g. a polarized electorate composed of two clusters.

    :param groups: Pairs of a sampler and the number of points to sample
        from it.
    :param rng: Random generator to draw from.
    :param n_dims: Dimensionality of the issue space, if the samplers do not
        define it.
    """
    positions = []
    for sampler, count in groups:
        positions.extend(sampler.sample(count, rng, n_dims=n_dims))
    return positions


class SpatialGenerator:
    """Generate random voters by sampling from a multidimensional issue space.

    The candidates are spread as points into a multidimensional space
    (representing their opinions or characteristics); voter points are then
    sampled and the utility of each candidate to the voter is derived from
    their distance by :func:`distance_utility`.

    :param candidates: Positions of candidates in the issue space.
        It is also possible to specify just an integer; in that case, the
        candidate positions will be sampled anew for every electorate,
        by the candidate sampler.
    :param sampler: How to sample the voter points. Either an object with a
        ``sample()`` method that yields numerical tuples with the correct
        number of dimensions (such as instances of :class:`Sampler`
        subclasses), or a string referencing a name of a statistical
        distribution for :class:`DistributionSampler`.
    :param p: The exponent of the Lp metric to measure the distances.
    :param n_dims: Dimensionality of the issue space when the candidate
        positions are not given.
    :param candidate_sampler: How to sample the candidate points; same as
        the voter sampler if not given.
    :param scales: Whether the generated voters scale their utilities before
        casting cardinal ballots.
    :param approval_threshold: Approval threshold of the generated voters.
    :param random_state: Seed for the random generator.
    """
    def __init__(self,
                 candidates: Union[int, Sequence[Position]],
                 sampler: Union[str, Sampler] = 'gauss',
                 p: float = 2,
                 n_dims: int = 2,
                 candidate_sampler: Union[str, Sampler, None] = None,
                 scales: bool = False,
                 approval_threshold: ApprovalThreshold = 'mean',
                 random_state: Optional[int] = None,
                 ):
        if isinstance(candidates, int):
            self.candidate_positions = None
            self.n_candidates = candidates
        else:
            self.candidate_positions = [tuple(pos) for pos in candidates]
            self.n_candidates = len(self.candidate_positions)
            n_dims = len(self.candidate_positions[0])
            if any(len(pos) != n_dims for pos in self.candidate_positions):
                raise ValueError('candidate positions differ in dimensions')
        if self.n_candidates < 1:
            raise ValueError('need at least one candidate')
        self.n_dims = n_dims
        self.sampler = _create_sampler(sampler, n_dims=n_dims)
        if candidate_sampler is None:
            self.candidate_sampler = self.sampler
        else:
            self.candidate_sampler = _create_sampler(
                candidate_sampler, n_dims=n_dims
            )
        self.p = p
        self.scales = scales
        self.approval_threshold = approval_threshold
        self.random_state = random_state
        self.rng = random.Random(random_state)

    def generate_candidates(self) -> List[Position]:
        """Return the candidate positions for the next electorate."""
        if self.candidate_positions is not None:
            return self.candidate_positions
        return list(self.candidate_sampler.sample(
            self.n_candidates, self.rng, n_dims=self.n_dims
        ))

    def generate(self, n: int) -> List[HonestVoter]:
        """Generate n voters for the candidate setup."""
        candidates = self.generate_candidates()
        return self.positions_to_voters(
            self.sampler.sample(n, self.rng, n_dims=self.n_dims),
            candidates
        )

    def positions_to_voters(self,
                            positions: Iterable[Position],
                            candidates: Sequence[Position],
                            ) -> List[HonestVoter]:
        """Convert voter positions to voters with distance-based utilities."""
        return [
            HonestVoter(
                [
                    distance_utility(lp_metric(voter_pos, cand_pos, self.p))
                    for cand_pos in candidates
                ],
                scales=self.scales,
                approval_threshold=self.approval_threshold,
            )
            for voter_pos in positions
        ]


def _create_sampler(sampler: Union[str, Sampler], n_dims: Optional[int]):
    if hasattr(sampler, 'sample'):
        return sampler
    else:
        return DistributionSampler(distribution=sampler, n_dims=n_dims)
