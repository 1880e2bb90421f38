import pytest
import numpy as np

from fuzzychoice import WEAPONS, build_weapons, rank, sweep
from fuzzychoice.weaponLib import distance, ammo, desirability

@pytest.fixture
def weapons():
    return {candidate.name: candidate for candidate in WEAPONS}

def test_registry():
    """ registration order and shared variables """

    assert [candidate.name for candidate in WEAPONS] == ['Pistol', 'Rifle', 'Rocket Launcher']

    for candidate in WEAPONS:
        assert candidate.system.antecedents == [distance, ammo]
        assert candidate.system.consequent is desirability
        assert 'Effective range' in candidate.stats

    assert distance.labels == ['Near', 'Medium', 'Far']
    assert ammo.labels == ['Low', 'Medium', 'High']
    assert desirability.labels == ['Undesirable', 'Desirable', 'Essential']

def test_fuzzification():
    """ shared input sets at characteristic points """

    assert distance.interp(0.0) == {'Near': 1.0, 'Medium': 0.0, 'Far': 0.0}
    assert distance.interp(50.0) == {'Near': 0.0, 'Medium': 1.0, 'Far': 0.0}
    assert distance.interp(100.0) == {'Near': 0.0, 'Medium': 0.0, 'Far': 1.0}

    levels = distance.interp(20.0)
    assert levels['Near'] == pytest.approx(0.2)
    assert levels['Medium'] == pytest.approx(5 / 35)

    levels = ammo.interp(25.0)
    assert levels['Low'] == pytest.approx(5 / 30)
    assert levels['Medium'] == pytest.approx(5 / 30)
    assert levels['High'] == 0.0

    # no clamping: past the edges the triangles fall to zero
    assert distance.interp(-5.0)['Near'] == 0.0
    assert ammo.interp(120.0)['High'] == 0.0

    for x in np.linspace(0, 100, 101):
        for variable in (distance, ammo):
            for degree in variable.interp(x).values():
                assert 0.0 <= degree <= 1.0

def test_close_range_full_ammo(weapons):
    """ target adjacent with full ammo """

    pistol = weapons['Pistol'].evaluate(0, 100)
    rifle = weapons['Rifle'].evaluate(0, 100)
    rocket = weapons['Rocket Launcher'].evaluate(0, 100)

    assert pistol.value == pytest.approx(89.0, abs=0.5)
    assert pistol.strengths == {'Undesirable': 0.0, 'Desirable': 0.0, 'Essential': 1.0}

    # every rifle rule fires at zero
    assert rifle.strengths == {'Undesirable': 0.0, 'Desirable': 0.0, 'Essential': 0.0}
    assert rifle.value == 0.0

    assert rocket.value == pytest.approx(11.0, abs=0.5)
    assert rocket.strengths == {'Undesirable': 1.0, 'Desirable': 0.0, 'Essential': 0.0}

    ranking = rank(WEAPONS, 0, 100)
    assert ranking.names == ['Pistol', 'Rocket Launcher', 'Rifle']
    assert ranking.recommended == 'Pistol'

def test_medium_range_medium_ammo(weapons):
    """ both inputs at their medium peak """

    for candidate in WEAPONS:
        score = candidate.evaluate(50, 50)
        assert score.inputs['distance']['Medium'] == 1.0
        assert score.inputs['ammo']['Medium'] == 1.0

    assert weapons['Pistol'].evaluate(50, 50).value == pytest.approx(50.0)
    assert weapons['Rifle'].evaluate(50, 50).value == pytest.approx(50.0)
    assert weapons['Rocket Launcher'].evaluate(50, 50).value == pytest.approx(89.0, abs=0.5)

    # pistol and rifle tie and keep registration order
    first = rank(WEAPONS, 50, 50)
    assert first.names == ['Rocket Launcher', 'Pistol', 'Rifle']

    for _ in range(3):
        assert rank(WEAPONS, 50, 50).names == first.names

def test_long_range(weapons):
    """ far target with full ammo favours the rifle """

    ranking = rank(WEAPONS, 100, 100)

    assert ranking.recommended == 'Rifle'
    assert ranking[0].value == pytest.approx(89.0, abs=0.5)
    assert weapons['Pistol'].evaluate(100, 100).strengths['Undesirable'] == 1.0

@pytest.mark.parametrize('vary', ['distance', 'ammo'])
def test_sweep(vary):
    """ performance curves stay in range without jumps """

    for candidate in WEAPONS:
        curve = sweep(candidate, vary, 50)

        assert curve.shape == (100, 2)
        assert (curve[:, 0] == np.arange(1, 101)).all()
        assert ((curve[:, 1] >= 0.0) & (curve[:, 1] <= 100.0)).all()
        assert (np.abs(np.diff(curve[:, 1])) < 20.0).all()

def test_scores_in_range():
    """ crisp scores stay in [0, 100] over the input grid """

    for d in np.linspace(0, 100, 21):
        for m in np.linspace(0, 100, 21):
            for candidate in WEAPONS:
                assert 0.0 <= candidate.evaluate(d, m).value <= 100.0

def test_sampling_resolution():
    """ a finer output universe approaches the continuous centroid """

    coarse = build_weapons()[0].evaluate(0, 100).value
    fine = build_weapons(1001)[0].evaluate(0, 100).value

    assert abs(fine - 89.0) < abs(coarse - 89.0)
