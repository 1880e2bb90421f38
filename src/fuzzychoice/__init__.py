
"""
Fuzzy Choice Library
--------------------

A library for scoring and ranking candidate choices with
Mamdani fuzzy inference (fuzzification, rule evaluation,
max aggregation and centroid defuzzification)

"""

__version__ = '0.1.0'
__all__ = ['TriangularFunc', 'FuzzySet', 'FuzzyRule', 'FuzzySystem', 'OutputCurve', 'Score', 'trimf',
           'fuzzy_and', 'fuzzy_or', 'aggregate', 'defuzz_centroid', 'create_set', 'N_SAMPLES',
           'Candidate', 'Ranking', 'rank', 'sweep', 'score_band', 'WEAPONS', 'build_weapons']

from .fuzzyLib import TriangularFunc, FuzzySet, FuzzyRule, FuzzySystem, OutputCurve, Score, trimf, \
    fuzzy_and, fuzzy_or, aggregate, defuzz_centroid, create_set, N_SAMPLES
from .choiceLib import Candidate, Ranking, rank, sweep, score_band
from .weaponLib import WEAPONS, build_weapons
