"""
Mamdani fuzzy inference for fan speed.

Each call to FuzzyEngine.compute runs three phases on its own locals:
fuzzification of temperature and humidity, rule evaluation into one strength
per output category, and centroid defuzzification over a discretely sampled
output universe. The engine holds only immutable tables and config, so one
instance can be shared between callers.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional

import numpy as np

from .membership import FAN_SPEED, HUMIDITY, TEMPERATURE, LinguisticVariable
from .rules import RULE_BASE, Rule, aggregate

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class EngineConfig:
    """
    - sample_step: distance between output samples used by the centroid.
      Part of the numeric contract: a different step gives different outputs.
    - output_min / output_max: closed output universe, both ends sampled.
    """
    sample_step: float = 2.0
    output_min: float = 0.0
    output_max: float = 100.0

    def __post_init__(self) -> None:
        if not self.sample_step > 0:
            raise ValueError(f"sample_step must be positive, got {self.sample_step}")
        if not self.output_max > self.output_min:
            raise ValueError(
                f"output_max ({self.output_max}) must exceed output_min ({self.output_min})"
            )
        span = self.output_max - self.output_min
        n = round(span / self.sample_step)
        if n < 1 or not math.isclose(n * self.sample_step, span, rel_tol=1e-9, abs_tol=1e-9):
            raise ValueError(
                f"sample_step {self.sample_step} does not divide the output range "
                f"[{self.output_min}, {self.output_max}]"
            )

    @property
    def n_samples(self) -> int:
        return round((self.output_max - self.output_min) / self.sample_step) + 1

    def samples(self) -> np.ndarray:
        return self.output_min + self.sample_step * np.arange(self.n_samples, dtype=float)


def _frozen(d: Mapping) -> Mapping:
    return MappingProxyType(dict(d))


@dataclass(frozen=True)
class FuzzyResult:
    """Snapshot of one evaluation: input degrees, category strengths, crisp output."""
    temperature: float
    humidity: float
    fuzzified: Mapping[str, Mapping[str, float]]
    alpha: Mapping[str, float]
    output: int
    crisp: float = field(repr=False, default=0.0)

    @property
    def active(self) -> bool:
        """False when no rule fired at all (distinct from a low but nonzero output)."""
        return any(a > 0.0 for a in self.alpha.values())

    def as_dict(self) -> dict:
        return {
            "temperature": self.temperature,
            "humidity": self.humidity,
            "fuzzified": {var: dict(degrees) for var, degrees in self.fuzzified.items()},
            "alpha": dict(self.alpha),
            "output": self.output,
        }


# ---------- Defuzzification ----------
def aggregate_output(
    samples: np.ndarray,
    alpha: Mapping[str, float],
    output: LinguisticVariable = FAN_SPEED,
) -> np.ndarray:
    """Clip each output set by its alpha, then take the pointwise max."""
    clipped = [np.minimum(alpha.get(mf.name, 0.0), mf.degree(samples)) for mf in output.sets]
    return np.maximum.reduce(clipped)


def centroid(samples: np.ndarray, degrees: np.ndarray) -> float:
    """Discrete centre of area. An empty aggregated set defuzzifies to 0."""
    denominator = float(np.sum(degrees))
    if denominator == 0:
        return 0.0
    return float(np.sum(samples * degrees)) / denominator


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


class FuzzyEngine:
    def __init__(
        self,
        config: Optional[EngineConfig] = None,
        rules: tuple[Rule, ...] = RULE_BASE,
        temperature: LinguisticVariable = TEMPERATURE,
        humidity: LinguisticVariable = HUMIDITY,
        output: LinguisticVariable = FAN_SPEED,
    ):
        self.config = config or EngineConfig()
        self.rules = tuple(rules)
        self.temperature = temperature
        self.humidity = humidity
        self.output = output
        self._samples = self.config.samples()
        self._samples.setflags(write=False)

    @property
    def samples(self) -> np.ndarray:
        return self._samples

    def fuzzify(self, temperature: float, humidity: float) -> dict[str, dict[str, float]]:
        return {
            self.temperature.name: self.temperature.fuzzify(temperature),
            self.humidity.name: self.humidity.fuzzify(humidity),
        }

    def infer(self, fuzzified: Mapping[str, Mapping[str, float]]) -> dict[str, float]:
        return aggregate(
            fuzzified[self.temperature.name],
            fuzzified[self.humidity.name],
            self.rules,
            self.output.labels,
        )

    def aggregated(self, alpha: Mapping[str, float]) -> np.ndarray:
        return aggregate_output(self._samples, alpha, self.output)

    def compute(self, temperature: float, humidity: float) -> FuzzyResult:
        temperature = float(temperature)
        humidity = float(humidity)
        if math.isnan(temperature) or math.isnan(humidity):
            raise ValueError(f"inputs must be real numbers, got ({temperature}, {humidity})")

        # 1. fuzzification
        fuzzified = self.fuzzify(temperature, humidity)
        # 2. inference
        alpha = self.infer(fuzzified)
        # 3. defuzzification
        crisp = centroid(self._samples, self.aggregated(alpha))
        output = round_half_up(crisp)

        log.debug("compute t=%s h=%s alpha=%s crisp=%.4f output=%d",
                  temperature, humidity, alpha, crisp, output)

        return FuzzyResult(
            temperature=temperature,
            humidity=humidity,
            fuzzified=_frozen({var: _frozen(d) for var, d in fuzzified.items()}),
            alpha=_frozen(alpha),
            output=output,
            crisp=crisp,
        )


_default_engine: Optional[FuzzyEngine] = None


def compute(temperature: float, humidity: float) -> FuzzyResult:
    """Evaluate with the default rule base and sampling step."""
    global _default_engine
    if _default_engine is None:
        _default_engine = FuzzyEngine()
    return _default_engine.compute(temperature, humidity)
