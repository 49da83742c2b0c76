from __future__ import annotations

from dataclasses import dataclass

import numpy as np


# ---------- 1) Membership functions ----------
@dataclass(frozen=True)
class MembershipFunction:
    """
    Piecewise-linear membership function given by a breakpoint table.

    Between breakpoints the degree is interpolated linearly, outside the table
    it saturates to the first/last degree, so every real input has a value.
    """
    name: str
    points: tuple[tuple[float, float], ...]

    def __post_init__(self) -> None:
        if len(self.points) < 2:
            raise ValueError(f"{self.name}: need at least two breakpoints")
        xs = [x for x, _ in self.points]
        if any(b <= a for a, b in zip(xs, xs[1:])):
            raise ValueError(f"{self.name}: breakpoints must be strictly increasing, got {xs}")
        if any(not 0.0 <= y <= 1.0 for _, y in self.points):
            raise ValueError(f"{self.name}: degrees must lie in [0, 1]")

    @property
    def xs(self) -> np.ndarray:
        return np.array([x for x, _ in self.points], dtype=float)

    @property
    def ys(self) -> np.ndarray:
        return np.array([y for _, y in self.points], dtype=float)

    def degree(self, x: np.ndarray | float) -> np.ndarray | float:
        # np.interp clamps to ys[0] / ys[-1] outside [xs[0], xs[-1]]
        y = np.interp(x, self.xs, self.ys)
        if np.ndim(y) == 0:
            return float(y)
        return y

    __call__ = degree


def shoulder_left(name: str, full: float, zero: float) -> MembershipFunction:
    """1 up to `full`, falls linearly to 0 at `zero`."""
    return MembershipFunction(name, ((full, 1.0), (zero, 0.0)))


def shoulder_right(name: str, zero: float, full: float) -> MembershipFunction:
    """0 up to `zero`, rises linearly to 1 at `full`."""
    return MembershipFunction(name, ((zero, 0.0), (full, 1.0)))


def tri(name: str, a: float, b: float, c: float) -> MembershipFunction:
    """
    Triangular membership function.
    a < b < c
    """
    return MembershipFunction(name, ((a, 0.0), (b, 1.0), (c, 0.0)))


def trap(name: str, a: float, b: float, c: float, d: float) -> MembershipFunction:
    """
    Trapezoidal membership function.
    a < b < c < d
    """
    return MembershipFunction(name, ((a, 0.0), (b, 1.0), (c, 1.0), (d, 0.0)))


# ---------- 2) Linguistic variables ----------
@dataclass(frozen=True)
class LinguisticVariable:
    name: str
    sets: tuple[MembershipFunction, ...]

    @property
    def labels(self) -> tuple[str, ...]:
        return tuple(mf.name for mf in self.sets)

    def __getitem__(self, label: str) -> MembershipFunction:
        for mf in self.sets:
            if mf.name == label:
                return mf
        raise KeyError(f"{self.name} has no fuzzy set {label!r}")

    def fuzzify(self, x: float) -> dict[str, float]:
        return {mf.name: float(mf.degree(x)) for mf in self.sets}


# Temperature in degrees Celsius, nominal sensor range 15..40
TEMPERATURE = LinguisticVariable("temperature", (
    shoulder_left("cold", 15, 25),
    trap("normal", 15, 25, 30, 35),
    shoulder_right("hot", 30, 35),
))

# Relative humidity in percent. "normal" peaks at a single point (50), unlike
# the plateau of temperature's "normal".
HUMIDITY = LinguisticVariable("humidity", (
    shoulder_left("dry", 0, 40),
    tri("normal", 20, 50, 80),
    shoulder_right("wet", 60, 100),
))

# Fan speed in percent, 0..100
FAN_SPEED = LinguisticVariable("fan_speed", (
    shoulder_left("slow", 20, 40),
    tri("medium", 30, 50, 70),
    shoulder_right("fast", 60, 90),
))
