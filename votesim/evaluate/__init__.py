'''Evaluate the results of the elections.

Every evaluator produces a full ranking of the candidates, from the winner to
the last place, as a list of :class:`votesim.candidate.CandidateID`. The
evaluators share a common signature: they receive the voter population, the
number of candidates, and a tie breaker (see :mod:`auxiliary`) that totally
orders candidates that are otherwise equal.

The evaluators request ballots of the shape they need from the voters; a voter
population that cannot provide them (e.g. real ranked ballots for score voting)
makes the evaluation fail with :class:`votesim.voter.UnsupportedBallotError`.

None of the evaluators validate ballot correctness; use the tools in the
:mod:`votesim.vote` module for that (real voters do so at construction).
'''

from votesim.evaluate.core import *    # noqa
