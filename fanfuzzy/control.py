"""
Export of the fan rule base as a scikit-fuzzy control system.

Useful for inspecting the sets with scikit-fuzzy's own `.view()` tooling.
scikit-fuzzy defuzzifies by continuous integration, so its simulated output
is close to, but not the same number as, FuzzyEngine.compute.
"""

from __future__ import annotations

from typing import Optional

import numpy as np
from skfuzzy import control as ctrl

from .engine import EngineConfig
from .membership import FAN_SPEED, HUMIDITY, TEMPERATURE, LinguisticVariable
from .rules import RULE_BASE, Rule

TEMPERATURE_UNIVERSE = np.arange(0, 50.5, 0.5)   # 0..50 C
HUMIDITY_UNIVERSE = np.arange(0, 101, 1)         # 0..100 %


def _add_terms(var, variable: LinguisticVariable) -> None:
    for mf in variable.sets:
        var[mf.name] = mf.degree(var.universe)


def build_control_system(
    config: Optional[EngineConfig] = None,
    rules: tuple[Rule, ...] = RULE_BASE,
) -> ctrl.ControlSystem:
    config = config or EngineConfig()

    temperature = ctrl.Antecedent(TEMPERATURE_UNIVERSE, TEMPERATURE.name)
    humidity = ctrl.Antecedent(HUMIDITY_UNIVERSE, HUMIDITY.name)
    fan_speed = ctrl.Consequent(config.samples(), FAN_SPEED.name)

    _add_terms(temperature, TEMPERATURE)
    _add_terms(humidity, HUMIDITY)
    _add_terms(fan_speed, FAN_SPEED)

    return ctrl.ControlSystem([
        ctrl.Rule(temperature[r.temperature] & humidity[r.humidity], fan_speed[r.consequent])
        for r in rules
    ])


def simulate(temperature: float, humidity: float, system: Optional[ctrl.ControlSystem] = None) -> float:
    """Run scikit-fuzzy's own simulation and return its (continuous) centroid."""
    sim = ctrl.ControlSystemSimulation(system or build_control_system())
    sim.input[TEMPERATURE.name] = float(temperature)
    sim.input[HUMIDITY.name] = float(humidity)
    sim.compute()
    return float(sim.output[FAN_SPEED.name])
