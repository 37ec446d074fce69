"""A commandline tool for quick simulation of single-winner elections.

Generates random electorates (or loads real ranked ballots from a BLT file)
and evaluates them under the selected voting methods, so that the methods
can be compared on the same voters.
"""

import argparse
import collections
import io
import logging
from typing import Optional, List, Dict

import votesim.batch
import votesim.generate
import votesim.io.blt
import votesim.system
from votesim.candidate import CandidateID
from votesim.evaluate.auxiliary import TIE_BREAKERS, RandomPermutation
from votesim.util import TieBreaker
from votesim.voter import VoterError

logger = logging.getLogger(__name__)

argparser = argparse.ArgumentParser(
    prog='votesim',
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
argparser.add_argument(
    '--list',
    dest='list_methods',
    action='store_true',
    help='list the implemented voting methods and exit',
)
argparser.add_argument(
    '-s', '--system',
    nargs='*',
    help='keys of voting methods to use; all of them by default',
)
argparser.add_argument(
    '-c', '--n-candidates',
    type=int,
    default=5,
    help='number of candidates in simulated elections',
)
argparser.add_argument(
    '-n', '--n-voters',
    type=int,
    default=100,
    help='number of voters in simulated elections',
)
argparser.add_argument(
    '-e', '--n-elections',
    type=int,
    default=1,
    help='number of elections to simulate',
)
argparser.add_argument(
    '-m', '--model',
    choices=('uniform', 'beta', 'spatial'),
    default='uniform',
    help=(
        'how to generate voter utilities: independently from a uniform or'
        ' Beta distribution, or by distances in a 2D issue space'
    ),
)
argparser.add_argument(
    '--alpha',
    type=float,
    default=2.,
    help='alpha parameter of the Beta utility distribution',
)
argparser.add_argument(
    '--beta',
    type=float,
    default=2.,
    help='beta parameter of the Beta utility distribution',
)
argparser.add_argument(
    '--scales',
    action='store_true',
    help='make voters stretch their utilities to the full rating range',
)
argparser.add_argument(
    '-t', '--tie-breaker',
    choices=('index', 'reverse', 'random'),
    default='index',
    help='how to break ties between candidates',
)
argparser.add_argument(
    '--seed',
    type=int,
    help='seed for the random generators to make the simulation repeatable',
)
argparser.add_argument(
    '-j', '--workers',
    type=int,
    help='number of parallel workers to evaluate the elections',
)
argparser.add_argument(
    '-i', '--input-file',
    type=argparse.FileType('r', encoding='utf8'),
    help='BLT file to load ranked ballots from instead of simulating',
)
argparser.add_argument(
    '-v', '--verbose',
    action='store_true',
    help='show all evaluator log messages and other info',
)
argparser.add_argument(
    '-q', '--quiet',
    action='store_true',
    help='do not show any evaluator log messages or other info',
)


def main(list_methods: bool = False,
         system: Optional[List[str]] = None,
         n_candidates: int = 5,
         n_voters: int = 100,
         n_elections: int = 1,
         model: str = 'uniform',
         alpha: float = 2.,
         beta: float = 2.,
         scales: bool = False,
         tie_breaker: str = 'index',
         seed: Optional[int] = None,
         workers: Optional[int] = None,
         input_file: Optional[io.TextIOBase] = None,
         verbose: bool = False,
         quiet: bool = False,
         ) -> None:
    logging.basicConfig(
        level=(
            logging.DEBUG if verbose
            else (logging.WARNING if quiet else logging.INFO)
        ),
        format='%(levelname)-10s %(message)s'
    )
    if list_methods:
        show_methods()
        return
    keys = gather_systems(system)
    if input_file is not None:
        run_loaded(input_file, keys, tie_breaker, seed)
    else:
        generator = create_generator(
            model, n_candidates,
            alpha=alpha, beta=beta, scales=scales, seed=seed,
        )
        results = votesim.batch.simulate(
            generator, n_voters, n_elections,
            methods=keys,
            tie_breaker=create_tie_breaker(tie_breaker, n_candidates, seed),
            max_workers=workers,
        )
        print(f'Simulated {n_elections} elections of {n_voters} voters'
              f' and {n_candidates} candidates ({model} model)')
        if n_elections == 1:
            show_rankings(results[0])
        else:
            show_winner_counts(results, keys)


def show_methods() -> None:
    print(f'{votesim.system.method_count()} voting methods implemented:')
    n_just_chars = max(len(key) for key in votesim.system.METHODS)
    for key, system in votesim.system.METHODS.items():
        print(key.ljust(n_just_chars), ' ', system.name)


def gather_systems(selected_keys: Optional[List[str]] = None) -> List[str]:
    """Select desired voting methods from the registered ones."""
    if not selected_keys:
        return list(votesim.system.METHODS.keys())
    for key in selected_keys:
        votesim.system.get_system(key)    # raises for unknown keys
    return selected_keys


def create_generator(model: str,
                     n_candidates: int,
                     alpha: float = 2.,
                     beta: float = 2.,
                     scales: bool = False,
                     seed: Optional[int] = None,
                     ):
    """Create a voter generator for the given utility model."""
    if model == 'uniform':
        return votesim.generate.UtilityGenerator(
            n_candidates,
            votesim.generate.UtilitySampler(
                votesim.generate.uniform_utilities
            ),
            scales=scales,
            random_state=seed,
        )
    elif model == 'beta':
        return votesim.generate.UtilityGenerator(
            n_candidates,
            votesim.generate.UtilitySampler(
                votesim.generate.beta_utilities, alpha=alpha, beta=beta
            ),
            scales=scales,
            random_state=seed,
        )
    elif model == 'spatial':
        return votesim.generate.SpatialGenerator(
            n_candidates, 'gauss', scales=scales, random_state=seed
        )
    else:
        raise ValueError(f'unknown utility model: {model!r}')


def create_tie_breaker(name: str,
                       n_candidates: int,
                       seed: Optional[int] = None,
                       ) -> TieBreaker:
    if name == 'random':
        return RandomPermutation(n_candidates, seed)
    try:
        return TIE_BREAKERS[name]
    except KeyError as e:
        raise ValueError(f'unknown tie breaker: {name!r}') from e


def run_loaded(input_file: io.TextIOBase,
               keys: List[str],
               tie_breaker: str = 'index',
               seed: Optional[int] = None,
               ) -> None:
    """Evaluate ballots loaded from a BLT file under the given methods."""
    data = votesim.io.blt.load(input_file)
    profile = data.profile(
        create_tie_breaker(tie_breaker, data.n_candidates, seed)
    )
    print(f'Loaded {profile.n_voters} ballots for'
          f' {profile.n_candidates} candidates'
          + (f' ({data.title})' if data.title else ''))
    results = {}
    for key in keys:
        try:
            results[key] = profile.evaluate(key)
        except VoterError as e:
            logger.warning('cannot evaluate %s on loaded ballots: %s', key, e)
    show_rankings(results, names=data.candidates)


def show_rankings(results: Dict[str, List[CandidateID]],
                  names: Optional[List[str]] = None,
                  ) -> None:
    """Show the full ranking of candidates under each method."""
    if not results:
        print('No results')
        return
    n_just_chars = max(len(key) for key in results)
    for key, ranking in results.items():
        if names is not None:
            shown = [names[cand] for cand in ranking]
        else:
            shown = [str(cand) for cand in ranking]
        print(key.ljust(n_just_chars), ' ', ' > '.join(shown))


def show_winner_counts(results: List[Dict[str, List[CandidateID]]],
                       keys: List[str],
                       ) -> None:
    """Show how many times each candidate won under each method."""
    n_just_chars = max(len(key) for key in keys)
    for key in keys:
        wins = collections.Counter(
            election[key][0] for election in results if election[key]
        )
        print(key.ljust(n_just_chars), ' ', ', '.join(
            f'{cand}: {count}' for cand, count in sorted(wins.items())
        ))


if __name__ == '__main__':
    args = argparser.parse_args()
    main(**vars(args))
