'''Evaluate many independent elections at once.

A single election is always evaluated synchronously; simulation studies
however usually need thousands of them. The functions in this module fan the
elections out over a :mod:`concurrent.futures` executor. Each election owns its
profile and voters, so no state is shared between the workers.

Evaluating with a process pool requires the profiles to be picklable; in
particular, voters must not use lambdas as approval thresholds.
'''

import logging
import concurrent.futures
from typing import List, Dict, Optional, Iterable, Sequence

import votesim.profile
from votesim.candidate import CandidateID
from votesim.evaluate.auxiliary import index_order
from votesim.util import TieBreaker

logger = logging.getLogger(__name__)

Results = Dict[str, List[CandidateID]]

EXECUTORS = {
    'thread': concurrent.futures.ThreadPoolExecutor,
    'process': concurrent.futures.ProcessPoolExecutor,
}


def evaluate_profile(profile: votesim.profile.ElectionProfile,
                     methods: Optional[Sequence[str]] = None,
                     ) -> Results:
    '''Evaluate a single election under the given registered methods.'''
    return profile.evaluate_all(methods)


def evaluate_batch(profiles: Iterable[votesim.profile.ElectionProfile],
                   methods: Optional[Sequence[str]] = None,
                   max_workers: Optional[int] = None,
                   timeout: Optional[float] = None,
                   executor: str = 'thread',
                   ) -> List[Results]:
    '''Evaluate independent elections concurrently.

    :param profiles: The elections to evaluate.
    :param methods: Keys of registered methods to evaluate each election
        under; all registered methods by default.
    :param max_workers: Maximum number of workers of the executor.
    :param timeout: Number of seconds to wait for the result of each
        election; None waits indefinitely. The results are collected in input
        order and the wait for an election only starts once the previous
        result has arrived, so the limit applies to each wait, not to the
        time elapsed since the election was submitted.
    :param executor: ``'thread'`` to evaluate in a thread pool,
        ``'process'`` to use a process pool.
    :returns: The rankings by method key for each election, in the order
        the elections were given.
    :raises concurrent.futures.TimeoutError: If an election is not evaluated
        within the timeout.
    '''
    try:
        executor_class = EXECUTORS[executor]
    except KeyError as e:
        raise ValueError(
            f'unknown executor: {executor!r}, available: '
            + ', '.join(EXECUTORS.keys())
        ) from e
    if methods is not None:
        methods = list(methods)
    pool = executor_class(max_workers=max_workers)
    try:
        futures = [
            pool.submit(evaluate_profile, profile, methods)
            for profile in profiles
        ]
        logger.info('evaluating %d elections', len(futures))
        results = []
        for i, future in enumerate(futures):
            results.append(future.result(timeout=timeout))
            logger.debug('election %d evaluated', i)
    finally:
        pool.shutdown(wait=False, cancel_futures=True)
    return results


def simulate(generator,
             n_voters: int,
             n_elections: int,
             methods: Optional[Sequence[str]] = None,
             tie_breaker: TieBreaker = index_order,
             **kwargs
             ) -> List[Results]:
    '''Generate and evaluate a number of elections.

    :param generator: A voter generator, such as
        :class:`votesim.generate.UtilityGenerator`; must provide the
        ``n_candidates`` attribute and a ``generate(n_voters)`` method.
    :param n_voters: Number of voters in each election.
    :param n_elections: Number of elections to generate.
    :param methods: Keys of registered methods to evaluate.
    :param tie_breaker: Tie breaker for all the elections.
    :param kwargs: Passed to :func:`evaluate_batch`.
    '''
    profiles = [
        votesim.profile.ElectionProfile(
            generator.generate(n_voters),
            n_candidates=generator.n_candidates,
            tie_breaker=tie_breaker,
        )
        for _ in range(n_elections)
    ]
    return evaluate_batch(profiles, methods, **kwargs)
