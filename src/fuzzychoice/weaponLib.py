from typing import List

from .fuzzyLib import FuzzyRule, FuzzySystem, create_set, fuzzy_and, fuzzy_or, N_SAMPLES
from .choiceLib import Candidate

"""Weapon choice knowledge base: shared variables, rule tables and the candidate registry"""

# Inputs
DISTANCE_SHAPES = {
    'Near': (0, 0, 25),
    'Medium': (15, 50, 85),
    'Far': (75, 100, 100),
}

AMMO_SHAPES = {
    'Low': (0, 0, 30),
    'Medium': (20, 50, 80),
    'High': (70, 100, 100),
}

# Output, low to high desirability
DESIRABILITY_SHAPES = {
    'Undesirable': (0, 0, 33),
    'Desirable': (15, 50, 85),
    'Essential': (67, 100, 100),
}

distance = create_set(DISTANCE_SHAPES, 'distance')
ammo = create_set(AMMO_SHAPES, 'ammo')
desirability = create_set(DESIRABILITY_SHAPES, 'desirability')

# d = fuzzified distance, m = fuzzified ammo

PISTOL_RULES = [
    FuzzyRule(lambda d, m: fuzzy_and(d['Near'], fuzzy_or(m['Medium'], m['High'])), 'Essential', label='P1'),
    FuzzyRule(lambda d, m: fuzzy_and(d['Near'], m['Low']), 'Desirable', label='P2'),
    FuzzyRule(lambda d, m: fuzzy_and(d['Medium'], fuzzy_or(m['Medium'], m['High'])), 'Desirable', label='P3'),
    FuzzyRule(lambda d, m: fuzzy_or(d['Far'], fuzzy_and(d['Medium'], m['Low'])), 'Undesirable', label='P4'),
]

RIFLE_RULES = [
    FuzzyRule(lambda d, m: fuzzy_and(d['Far'], m['High']), 'Essential', label='R1'),
    FuzzyRule(lambda d, m: fuzzy_and(d['Far'], m['Medium']), 'Desirable', label='R2'),
    FuzzyRule(lambda d, m: fuzzy_and(d['Far'], m['Low']), 'Desirable', label='R3'),
    FuzzyRule(lambda d, m: fuzzy_and(d['Medium'], fuzzy_or(m['High'], m['Medium'])), 'Desirable', label='R4'),
    FuzzyRule(lambda d, m: fuzzy_and(fuzzy_or(d['Near'], d['Medium']), m['Low']), 'Undesirable', label='R5'),
    FuzzyRule(lambda d, m: fuzzy_and(d['Near'], fuzzy_or(m['Low'], m['Medium'])), 'Undesirable', label='R6'),
]

ROCKET_LAUNCHER_RULES = [
    FuzzyRule(lambda d, m: fuzzy_and(d['Medium'], fuzzy_or(m['Low'], m['Medium'])), 'Essential', label='L1'),
    FuzzyRule(lambda d, m: fuzzy_and(d['Medium'], m['High']), 'Desirable', label='L2'),
    FuzzyRule(lambda d, m: fuzzy_or(d['Near'], d['Far']), 'Undesirable', label='L3'),
]

PISTOL_STATS = {'Effective range': 'Short/Medium', 'Ammo dependency': 'Medium'}
RIFLE_STATS = {'Effective range': 'Long', 'Ammo dependency': 'High'}
ROCKET_LAUNCHER_STATS = {'Effective range': 'Medium', 'Ammo dependency': 'Low'}


def build_weapons(n_samples: int = N_SAMPLES) -> List[Candidate]:
    """
    Build the weapon registry in registration order

    Parameters
    ----------
    n_samples : int, optional
        number of points used for the centroid of every weapon, by default N_SAMPLES

    Returns
    -------
    List[Candidate]
        Pistol, Rifle and Rocket Launcher
    """

    inputs = [distance, ammo]

    return [
        Candidate(FuzzySystem(inputs, desirability, PISTOL_RULES, 'Pistol', n_samples), PISTOL_STATS),
        Candidate(FuzzySystem(inputs, desirability, RIFLE_RULES, 'Rifle', n_samples), RIFLE_STATS),
        Candidate(FuzzySystem(inputs, desirability, ROCKET_LAUNCHER_RULES, 'Rocket Launcher', n_samples),
                  ROCKET_LAUNCHER_STATS),
    ]


WEAPONS = build_weapons()
