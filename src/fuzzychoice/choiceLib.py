import logging
from typing import Dict, Iterable, List, Optional

import numpy as np

from .fuzzyLib import FuzzySystem, Score
from .utilities import parallel_sampling

"""Choice library for scoring and ranking candidates with fuzzy systems"""

log = logging.getLogger(__name__)

BAND_HIGH = 67.0
BAND_MEDIUM = 33.0
SWEEP_VALUES = range(1, 101)


def score_band(value: float) -> str:
    """
    Classify a crisp score

    Parameters
    ----------
    value : float
        crisp score in [0, 100]

    Returns
    -------
    str
        'high' from BAND_HIGH, 'medium' from BAND_MEDIUM, 'low' otherwise
    """
    if value >= BAND_HIGH:
        return 'high'
    if value >= BAND_MEDIUM:
        return 'medium'
    return 'low'


class Candidate:
    def __init__(self, system: FuzzySystem, stats: Dict[str, str] = None):
        """
        One scored option, binding a fuzzy system to descriptive metadata

        Parameters
        ----------
        system : FuzzySystem
            rule set of the candidate, its label names the candidate
        stats : Dict[str, str], optional
            descriptive statistics shown alongside the score, by default None
        """

        self.system = system
        self.stats = {} if stats is None else dict(stats)

    @property
    def name(self) -> str:
        return self.system.label

    def evaluate(self, *inputs: float) -> Score:
        """
        Score the candidate for one set of crisp inputs

        Parameters
        ----------
        *inputs : float
            one value per input variable of the system

        Returns
        -------
        Score
            crisp score with its explanation
        """
        return self.system.compute(*inputs)

    def __repr__(self):
        return 'Candidate(%r)' % self.name


class Ranking:
    def __init__(self, scores: List[Score]):
        """
        Scores of all candidates for one input, best first

        Parameters
        ----------
        scores : List[Score]
            scores already sorted in descending order
        """

        self.scores = scores

    @property
    def recommended(self) -> Optional[str]:
        """
        Name of the top candidate

        Returns
        -------
        Optional[str]
            None if no candidate was ranked
        """
        if len(self.scores) == 0:
            return None
        return self.scores[0].label

    @property
    def names(self) -> List[str]:
        return [score.label for score in self.scores]

    def __len__(self):
        return len(self.scores)

    def __iter__(self):
        return iter(self.scores)

    def __getitem__(self, i):
        return self.scores[i]


def _ranking_key(score: Score):
    # NaN scores sort after every number
    return (bool(np.isnan(score.value)), -score.value)


def rank(candidates: Iterable[Candidate], *inputs: float) -> Ranking:
    """
    Evaluate every candidate against the same input and sort by score

    Parameters
    ----------
    candidates : Iterable[Candidate]
        candidates in registration order
    *inputs : float
        crisp inputs passed to every candidate

    Returns
    -------
    Ranking
        descending scores, equal scores keep registration order
    """

    scores = [candidate.evaluate(*inputs) for candidate in candidates]
    scores = sorted(scores, key=_ranking_key)  # sorted is stable

    ranking = Ranking(scores)
    log.debug('ranked %s for inputs %s: %s', ranking.names, inputs, ranking.recommended)

    return ranking


def _sweep_point(value: float, candidate: Candidate, position: int, fixed: float) -> float:
    inputs = [fixed] * len(candidate.system.antecedents)
    inputs[position] = value
    return candidate.evaluate(*inputs).value


def sweep(candidate: Candidate, vary: str, fixed: float, values: Iterable[float] = SWEEP_VALUES,
          num_threads: int = 1) -> np.ndarray:
    """
    Performance curve of a candidate along one input

    Parameters
    ----------
    candidate : Candidate
        candidate to evaluate
    vary : str
        label of the input variable to vary
    fixed : float
        value held by the other input(s)
    values : Iterable[float], optional
        values taken by the varied input, by default 1 to 100
    num_threads : int, optional
        number of parallel processes, by default 1

    Returns
    -------
    np.ndarray
        array of shape [len(values), 2] holding (input, score) rows

    Raises
    ------
    ValueError
        if vary does not name an input variable of the candidate
    """

    labels = [antecedent.label for antecedent in candidate.system.antecedents]
    if vary not in labels:
        raise ValueError('%s has no input %s, expected one of %s' % (candidate.name, vary, labels))

    values = [float(v) for v in values]
    position = labels.index(vary)

    scores = parallel_sampling(_sweep_point, [[v, ] for v in values],
                               fargs=[candidate, position, fixed], num_threads=num_threads)

    log.debug('swept %s along %s over %i points (other inputs at %g)', candidate.name, vary, len(values), fixed)

    return np.column_stack((np.asarray(values, dtype=float), np.asarray(scores, dtype=float)))
