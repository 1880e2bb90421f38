from functools import reduce
from typing import Callable, Dict, Iterable, List, Tuple, Union

import matplotlib.pyplot as plt
import numpy as np
import skfuzzy as fuzz

from .utilities import check_folder

"""
Fuzzy Library for Mamdani inference: fuzzification, rule evaluation,
max aggregation and centroid defuzzification
"""

N_SAMPLES = 101  # points used to discretize the output universe for the centroid
UNIVERSE_BOUNDS = (0.0, 100.0)


def trimf(x: Union[float, np.ndarray], a: float, b: float, c: float) -> Union[float, np.ndarray]:
    """
    Triangular membership function evaluated exactly at x

    Parameters
    ----------
    x : Union[float,np.ndarray]
        value(s) at which membership is evaluated, not restricted to the universe
    a : float
        left foot of triangle
    b : float
        peak of triangle
    c : float
        right foot of triangle

    Returns
    -------
    Union[float,np.ndarray]
        membership level(s) in [0, 1], NaN where x is NaN
    """

    scalar = np.ndim(x) == 0
    x = np.atleast_1d(np.asarray(x, dtype=float))
    y = np.zeros_like(x)

    # a == b or b == c leave the corresponding ramp empty
    if a != b:
        idx = np.logical_and(a < x, x < b)
        y[idx] = (x[idx] - a) / float(b - a)
    if b != c:
        idx = np.logical_and(b < x, x < c)
        y[idx] = (c - x[idx]) / float(c - b)

    y[x == b] = 1.0
    y[np.isnan(x)] = np.nan

    if scalar:
        return float(y[0])
    return y


def fuzzy_and(*degrees: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """
    Product conjunction of membership degrees

    Returns
    -------
    Union[float,np.ndarray]
        product of all operands
    """
    return reduce(np.multiply, degrees)


def fuzzy_or(*degrees: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
    """
    Maximum disjunction of membership degrees, NaN operands propagate

    Returns
    -------
    Union[float,np.ndarray]
        largest operand
    """
    return reduce(np.maximum, degrees)


class FuzzyFunction:
    def __init__(self, universe: np.ndarray, label: str = ''):
        """
        Contains description and implementation of
        different fuzzy membership functions

        Parameters
        ----------
        universe : np.ndarray
            1d array of length n
            n=number of samples
        label : str, optional
            string to tag instance with, by default ''
        """

        self.universe = universe
        self.label = label

    def set_label(self, label: str):
        """
        Changes label property of function

        Parameters
        ----------
        label : str
            new label name
        """

        self.label = label


class TriangularFunc(FuzzyFunction):
    def __init__(self, universe: np.ndarray, label: str = ''):
        super().__init__(universe, label)
        self.low = None
        self.medium = None
        self.high = None

    def set_func(self, low: float, medium: float, high: float):
        """
        Create an instance of the triangular membership function

        Parameters
        ----------
        low : float
            left foot of triangle
        medium : float
            peak of triangle
        high : float
            right foot of triangle

        Raises
        ------
        ValueError
            if the breakpoints are not ordered low <= medium <= high
        """

        if not low <= medium <= high:
            raise ValueError('triangle %s must satisfy low <= medium <= high, got (%g, %g, %g)'
                             % (self.label, low, medium, high))

        self.low = low
        self.medium = medium
        self.high = high

    def get_array(self, universe: np.ndarray = None) -> np.ndarray:
        """
        Sample an array of values from membership function

        Parameters
        ----------
        universe : np.ndarray, optional
            points to sample at, by default the function's own universe

        Returns
        -------
        array : np.ndarray
            1d array of length universe
        """

        if universe is None:
            universe = self.universe

        return fuzz.trimf(np.asarray(universe, dtype=float), [self.low, self.medium, self.high])

    def interp(self, input_x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """
        Interpret membership of input for fuzzy function

        Parameters
        ----------
        input_x : Union[float,np.ndarray]
            value(s) at which membership is to be interpreted

        Returns
        -------
        level : Union[float,np.ndarray]
            interpreted membership level(s) of the input(s)
        """

        return trimf(input_x, self.low, self.medium, self.high)


class FuzzySet:

    def __init__(self, functions: Dict[str, TriangularFunc], label: str = ''):
        """
        Contains the named membership functions of one linguistic variable,
        ordered from the lowest to the highest term

        Parameters
        ----------
        functions : Dict[str, TriangularFunc]
            term label -> membership function
        label : str, optional
            name of the variable

        Raises
        ------
        ValueError
            if no function is given or the functions do not share one universe
        """

        if len(functions) == 0:
            raise ValueError('fuzzy set %s needs at least one membership function' % label)

        self.functions = dict(functions)
        self.universe = next(iter(self.functions.values())).universe
        self.label = label

        for name, function in self.functions.items():
            if not np.array_equal(function.universe, self.universe):
                raise ValueError('membership function %s of %s is defined on a different universe'
                                 % (name, label))
            function.set_label(name)

    @property
    def labels(self) -> List[str]:
        return list(self.functions.keys())

    def __getitem__(self, label: str) -> TriangularFunc:
        return self.functions[label]

    def interp(self, inputs: Union[float, np.ndarray]) -> Dict[str, Union[float, np.ndarray]]:
        """
        Fuzzify the input against every term of the set

        Parameters
        ----------
        inputs : float OR np.ndarray
            The input(s) at which membership is to be interpreted

        Returns
        -------
        Dict[str, Union[float,np.ndarray]]
            term label -> membership level(s) of the input(s)
        """

        return {name: function.interp(inputs) for name, function in self.functions.items()}

    def view(self, savefile: str = None):
        """
        Used to view the distribution of all associated membership functions

        Parameters
        ----------
        savefile : str, optional
            if provided saves an image of the figure in directory
            /images/self.label/, by default None
        """

        fig, ax = plt.subplots(nrows=1, figsize=(8, 3))

        for name, function in self.functions.items():
            ax.plot(self.universe, function.get_array(), linewidth=1.5, label=name)
        ax.set_title(self.label)
        ax.legend()

        ax.spines['top'].set_visible(False)
        ax.spines['right'].set_visible(False)
        ax.get_xaxis().tick_bottom()
        ax.get_yaxis().tick_left()

        plt.tight_layout()

        if savefile is not None:
            check_folder('images/%s' % self.label)
            fig.savefig('images/%s/%s.pdf' % (self.label, savefile),
                        format='pdf', dpi=200, bbox_inches='tight')

        plt.show()


def create_set(shapes: Dict[str, Tuple[float, float, float]], label: str = '',
               n_samples: int = N_SAMPLES, bounds: Tuple[float, float] = UNIVERSE_BOUNDS) -> FuzzySet:
    """
    Create a fuzzy set of triangular functions over an evenly sampled universe

    Parameters
    ----------
    shapes : Dict[str, Tuple[float, float, float]]
        term label -> (low, medium, high) breakpoints
    label : str, optional
        name of the variable
    n_samples : int, optional
        number of points in the universe, by default N_SAMPLES
    bounds : Tuple[float, float], optional
        lower and upper bound of the universe, by default UNIVERSE_BOUNDS

    Returns
    -------
    FuzzySet
        set holding one TriangularFunc per shape
    """

    universe = np.linspace(bounds[0], bounds[1], n_samples)

    functions = {}
    for name, (low, medium, high) in shapes.items():
        function = TriangularFunc(universe, name)
        function.set_func(low, medium, high)
        functions[name] = function

    return FuzzySet(functions, label)


class FuzzyRule:
    def __init__(self, antecedent: Callable[..., float], consequent: str, label: str = ''):
        """
        Defines a fuzzy rule connecting fuzzified inputs to an output term

        Parameters
        ----------
        antecedent : Callable[..., float]
            called with one fuzzified input dict per input variable,
            in the order of the system's antecedents, returns the firing strength
        consequent : str
            label of the output term concluded by the rule
        label : str, optional
            string to tag instance with
        """

        self.antecedent = antecedent
        self.consequent = consequent
        self.label = label

    def apply(self, *fuzzified: Dict[str, float]) -> Tuple[str, float]:
        """
        Fire the rule on fuzzified inputs

        Returns
        -------
        Tuple[str, float]
            concluded output label and firing strength
        """

        return self.consequent, self.antecedent(*fuzzified)


def aggregate(activations: Iterable[Tuple[str, float]], labels: Iterable[str]) -> Dict[str, float]:
    """
    Max aggregation of rule activations per output label

    Parameters
    ----------
    activations : Iterable[Tuple[str, float]]
        (label, strength) pairs returned by FuzzyRule.apply
    labels : Iterable[str]
        all labels of the output set, labels no rule concludes stay at 0

    Returns
    -------
    Dict[str, float]
        output label -> aggregated degree
    """

    strengths = {label: 0.0 for label in labels}
    for label, strength in activations:
        strengths[label] = float(np.maximum(strengths[label], strength))

    return strengths


def defuzz_centroid(universe: np.ndarray, membership: np.ndarray) -> float:
    """
    Discrete centroid of a sampled membership function

    Parameters
    ----------
    universe : np.ndarray
        sample points
    membership : np.ndarray
        membership level at each sample point

    Returns
    -------
    float
        sum(x * mu) / sum(mu), 0 when the membership is zero everywhere
    """

    area = np.sum(membership)
    if area == 0:
        return 0.0

    centroid = np.sum(universe * membership) / area
    return float(np.clip(centroid, universe[0], universe[-1]))  # rounding can overshoot the bounds


class OutputCurve:

    def __init__(self, consequent: FuzzySet, strengths: Dict[str, float], universe: np.ndarray = None):
        """
        Composite output membership m(x) = max_L min(strengths[L], mu_L(x))

        Parameters
        ----------
        consequent : FuzzySet
            output fuzzy set
        strengths : Dict[str, float]
            aggregated degree of each output label
        universe : np.ndarray, optional
            points used by get_array, by default the consequent universe
        """

        self.consequent = consequent
        self.strengths = dict(strengths)
        self.universe = consequent.universe if universe is None else universe

    def sample(self, x: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """
        Composite membership at arbitrary point(s)

        Parameters
        ----------
        x : Union[float,np.ndarray]
            point(s) on the output universe

        Returns
        -------
        Union[float,np.ndarray]
            membership level(s) of the composite function
        """

        mu = np.zeros_like(np.asarray(x, dtype=float))
        for name, function in self.consequent.functions.items():
            mu = np.maximum(mu, np.minimum(self.strengths.get(name, 0.0), function.interp(x)))

        if mu.ndim == 0:
            return float(mu)
        return mu

    def get_array(self) -> np.ndarray:
        """
        Sample the composite function on its universe

        Returns
        -------
        aggregate : np.ndarray
            1d array of length universe
        """

        aggregate = np.zeros_like(self.universe, dtype=float)
        for name, function in self.consequent.functions.items():
            # clip the output term at its strength, np.minimum/np.maximum keep NaN
            activation = np.minimum(self.strengths.get(name, 0.0), function.get_array(self.universe))
            aggregate = np.maximum(activation, aggregate)

        return aggregate

    def view(self, value: float = None, savefile: str = None):
        """
        View the aggregate membership function on the universe

        Parameters
        ----------
        value : float, optional
            defuzzified value drawn as a vertical line, by default None
        savefile : str, optional
            if provided saves an image of the figure in directory
            /images/self.consequent.label/, by default None
        """

        fig, ax = plt.subplots(figsize=(8, 3))

        aggregate = self.get_array()
        n_0 = np.zeros_like(self.universe)

        ax.fill_between(self.universe, n_0, aggregate, facecolor='Orange', alpha=0.7)
        if value is not None:
            ax.plot([value, value], [0, self.sample(value)], 'k', linewidth=1.5, alpha=0.9)
        ax.set_title('Aggregated membership and result (line)')

        ax.set_xlabel(self.consequent.label)
        ax.set_ylabel('membership')

        if savefile is not None:
            check_folder('images/%s' % self.consequent.label)
            fig.savefig('images/%s/%s.pdf' % (self.consequent.label, savefile),
                        format='pdf', dpi=200, bbox_inches='tight')

        plt.show()


class Score:

    def __init__(self, label: str, value: float, inputs: Dict[str, Dict[str, float]],
                 strengths: Dict[str, float], curve: OutputCurve):
        """
        Result of one evaluation of a fuzzy system

        Parameters
        ----------
        label : str
            label of the evaluated system
        value : float
            crisp defuzzified value
        inputs : Dict[str, Dict[str, float]]
            fuzzified inputs, keyed by antecedent label
        strengths : Dict[str, float]
            aggregated degree of each output label
        curve : OutputCurve
            composite output membership, reusable without re-running the rules
        """

        self.label = label
        self.value = value
        self.inputs = inputs
        self.strengths = strengths
        self.curve = curve

    def view(self, savefile: str = None):
        self.curve.view(value=self.value, savefile=savefile)

    def __repr__(self):
        return 'Score(%r, %.4f)' % (self.label, self.value)


class FuzzySystem:

    def __init__(self, antecedents: List[FuzzySet], consequent: FuzzySet, rules: List[FuzzyRule],
                 label: str = '', n_samples: int = N_SAMPLES):
        """
        Contains all fuzzy inputs, outputs, rules,
        and fuzzy logic interpreter

        Parameters
        ----------
        antecedents : List[FuzzySet]
            list of fuzzySet objects defining the inputs
        consequent : FuzzySet
            fuzzySet objects defining the output
        rules : List[FuzzyRule]
            fuzzyRule objects
        label: str, optional
            string to tag instance with
        n_samples : int, optional
            number of points used for the centroid, a larger number lowers the
            quantization error of the crisp value at a linear cost, by default N_SAMPLES

        Raises
        ------
        ValueError
            if a rule concludes a label missing from the consequent
            or fewer than two samples are requested
        """

        if n_samples < 2:
            raise ValueError('n_samples must be at least 2, got %i' % n_samples)

        for rule in rules:
            if rule.consequent not in consequent.labels:
                raise ValueError('rule %s concludes unknown label %s, expected one of %s'
                                 % (rule.label, rule.consequent, consequent.labels))

        self.antecedents = antecedents
        self.consequent = consequent
        self.rules = list(rules)
        self.label = label

        self.universe = np.linspace(consequent.universe[0], consequent.universe[-1], n_samples)

    def compute(self, *inputs: float) -> Score:
        """
        Compute fuzzy output of system

        Parameters
        ----------
        *inputs : float
            one crisp value per antecedent, in order

        Returns
        -------
        Score
            defuzzified value with the fuzzified inputs,
            the aggregated strengths and the output curve

        Raises
        ------
        ValueError
            if the number of inputs differs from the number of antecedents
        """

        if len(inputs) != len(self.antecedents):
            raise ValueError('%s expects %i inputs, got %i' % (self.label, len(self.antecedents), len(inputs)))

        fuzzified = [antecedent.interp(x) for antecedent, x in zip(self.antecedents, inputs)]

        activations = [rule.apply(*fuzzified) for rule in self.rules]
        strengths = aggregate(activations, self.consequent.labels)

        curve = OutputCurve(self.consequent, strengths, self.universe)
        value = defuzz_centroid(self.universe, curve.get_array())

        snapshot = {antecedent.label: degrees for antecedent, degrees in zip(self.antecedents, fuzzified)}
        return Score(self.label, value, snapshot, strengths, curve)
