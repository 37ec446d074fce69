"""Input of real election data from ballot files such as BLT files.

This subpackage is structured into modules by file format. The loaded ballots
are turned into real voters (see :mod:`votesim.voter`) that can be evaluated
alongside or instead of simulated ones.
"""
