"""Votesim - a library for simulating single-winner elections.

Votesim objects provide the means to compare voting methods on the same
electorates, be they synthetic or real.

A simulated election consists of the following:

-   Who votes and how. The ``voter`` module provides voters that cast
    ballots of any shape sincerely from their utilities for candidates, and
    voters that only hold real cast ballots. The ``generate`` module creates
    random electorates and the ``io`` subpackage loads real ones.
-   Who stands. Candidates are just identified by their index
    (see the ``candidate`` module).
-   How to determine the ranking of candidates. This is the task of the
    ``evaluate`` subpackage, which contains plurality, runoff, instant-runoff,
    approval, score and STAR evaluators, together with the tie breakers that
    make their results deterministic.

The :class:`profile.ElectionProfile` binds the voters, candidates and tie
breaker together; the :class:`VotingSystem` objects from the :mod:`system`
module name the evaluators and the ``batch`` module evaluates many elections
at once.
"""
