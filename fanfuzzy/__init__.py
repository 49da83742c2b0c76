"""Mamdani fuzzy controller: (temperature, humidity) -> fan speed %."""

from .controller import FanController, FanState, Mode, speed_category
from .engine import EngineConfig, FuzzyEngine, FuzzyResult, centroid, compute
from .membership import (
    FAN_SPEED,
    HUMIDITY,
    TEMPERATURE,
    LinguisticVariable,
    MembershipFunction,
)
from .rules import RULE_BASE, Rule, aggregate

__version__ = "0.1.0"
