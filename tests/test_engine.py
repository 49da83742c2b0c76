import dataclasses
import math

import numpy as np
import pytest

from fanfuzzy.engine import (
    EngineConfig,
    FuzzyEngine,
    aggregate_output,
    centroid,
    compute,
    round_half_up,
)


# (temperature, humidity, expected alpha, expected output)
SCENARIOS = [
    (27, 50, {"slow": 0.0, "medium": 1.0, "fast": 0.0}, 50),
    (10, 10, {"slow": 0.75, "medium": 0.0, "fast": 0.0}, 16),
    (40, 100, {"slow": 0.0, "medium": 0.0, "fast": 1.0}, 87),
    (15, 0, {"slow": 1.0, "medium": 0.0, "fast": 0.0}, 15),
]


@pytest.mark.parametrize("t, h, alpha, output", SCENARIOS)
def test_scenarios(engine, t, h, alpha, output):
    result = engine.compute(t, h)
    assert dict(result.alpha) == pytest.approx(alpha)
    assert result.output == output


def test_comfortable_reading_centres_on_medium(engine):
    result = engine.compute(27, 50)
    assert result.fuzzified["temperature"] == {"cold": 0.0, "normal": 1.0, "hot": 0.0}
    assert result.fuzzified["humidity"] == {"dry": 0.0, "normal": 1.0, "wet": 0.0}
    assert result.crisp == pytest.approx(50.0)


def test_cold_dry_crisp_value(engine):
    # Slow clipped at .75: sum(z*mu) = 201, sum(mu) = 12.55
    assert engine.compute(10, 10).crisp == pytest.approx(201 / 12.55)


def test_hot_wet_crisp_value(engine):
    # Fast alone: sum(z*mu) = 8330/15 + 570, sum(mu) = 13
    assert engine.compute(40, 100).crisp == pytest.approx((8330 / 15 + 570) / 13)


def test_out_of_range_inputs_saturate(engine):
    assert engine.compute(math.inf, math.inf).output == engine.compute(40, 100).output
    assert engine.compute(-math.inf, -math.inf).output == engine.compute(15, 0).output
    assert engine.compute(-30, -50).as_dict()["alpha"] == engine.compute(15, 0).as_dict()["alpha"]


def test_nan_rejected(engine):
    with pytest.raises(ValueError):
        engine.compute(float("nan"), 50)
    with pytest.raises(ValueError):
        engine.compute(27, float("nan"))


def test_compute_is_pure(engine):
    first = engine.compute(31.3, 67.1)
    second = engine.compute(31.3, 67.1)
    assert first == second
    assert first.as_dict() == second.as_dict()
    assert FuzzyEngine().compute(31.3, 67.1) == first


def test_output_is_integer_percentage_and_some_rule_fires(engine):
    for t in np.arange(0, 50.5, 2.5):
        for h in np.arange(-10, 111, 5):
            result = engine.compute(t, h)
            assert isinstance(result.output, int)
            assert 0 <= result.output <= 100
            assert result.active
            for degrees in result.fuzzified.values():
                assert all(0.0 <= mu <= 1.0 for mu in degrees.values())
            assert all(0.0 <= a <= 1.0 for a in result.alpha.values())


def test_centroid_empty_set_is_zero():
    z = EngineConfig().samples()
    assert centroid(z, np.zeros_like(z)) == 0.0


def test_zero_alpha_gives_empty_aggregate():
    z = EngineConfig().samples()
    agg = aggregate_output(z, {"slow": 0.0, "medium": 0.0, "fast": 0.0})
    assert not agg.any()
    assert centroid(z, agg) == 0.0


def test_aggregate_is_max_of_clipped_sets():
    z = np.array([0.0, 35.0, 50.0, 65.0, 100.0])
    agg = aggregate_output(z, {"slow": 0.2, "medium": 0.6, "fast": 1.0})
    # z=35: slow(35)=.25 -> .2, medium(35)=.25 -> .25
    assert agg == pytest.approx([0.2, 0.25, 0.6, 0.25, 1.0])


def test_result_is_immutable(engine):
    result = engine.compute(27, 50)
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.output = 0
    with pytest.raises(TypeError):
        result.alpha["slow"] = 1.0
    with pytest.raises(TypeError):
        result.fuzzified["temperature"]["cold"] = 1.0


def test_default_sampling_grid():
    z = FuzzyEngine().samples
    assert len(z) == 51
    assert z[0] == 0.0
    assert z[-1] == 100.0
    assert np.all(np.diff(z) == 2.0)


def test_sampling_step_is_configurable():
    fine = FuzzyEngine(EngineConfig(sample_step=0.5))
    assert len(fine.samples) == 201
    # Symmetric Medium set: any step keeps the centre
    assert fine.compute(27, 50).output == 50
    assert 0 <= fine.compute(10, 10).output <= 100


@pytest.mark.parametrize("kwargs", [
    {"sample_step": 0},
    {"sample_step": -2},
    {"sample_step": 3},
    {"output_min": 100, "output_max": 0},
])
def test_invalid_config(kwargs):
    with pytest.raises(ValueError):
        EngineConfig(**kwargs)


def test_round_half_up():
    assert round_half_up(49.5) == 50
    assert round_half_up(50.5) == 51
    assert round_half_up(16.016) == 16
    assert round_half_up(86.56) == 87


def test_module_level_compute():
    assert compute(27, 50).output == 50


def test_inactive_result_flag(engine):
    result = dataclasses.replace(
        engine.compute(27, 50),
        alpha={"slow": 0.0, "medium": 0.0, "fast": 0.0},
    )
    assert not result.active
