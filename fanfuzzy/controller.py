from __future__ import annotations

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from .engine import FuzzyEngine, FuzzyResult

log = logging.getLogger(__name__)

SPEED_MIN = 0.0
SPEED_MAX = 100.0


class Mode(enum.Enum):
    AUTO = "auto"
    MANUAL = "manual"


def speed_category(percent: float) -> str:
    """Label shown next to the fan: off / slow / medium / fast."""
    if percent <= 0:
        return "off"
    if percent <= 30:
        return "slow"
    if percent <= 70:
        return "medium"
    return "fast"


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


@dataclass(frozen=True)
class FanState:
    mode: Mode
    speed: float
    category: str
    result: FuzzyResult


class FanController:
    """
    Holds the current readings and the operating mode.

    In AUTO mode the fan runs at the engine output. In MANUAL mode the manual
    speed replaces it, but the engine is still evaluated so its degrees and
    strengths show what AUTO would do with the same readings.
    """

    def __init__(
        self,
        engine: Optional[FuzzyEngine] = None,
        mode: Mode = Mode.AUTO,
        temperature: float = 27.0,
        humidity: float = 50.0,
        manual_speed: float = 0.0,
    ):
        self.engine = engine or FuzzyEngine()
        self.mode = Mode(mode)
        self.temperature = float(temperature)
        self.humidity = float(humidity)
        self.manual_speed = _clamp(float(manual_speed), SPEED_MIN, SPEED_MAX)

    def set_mode(self, mode: Mode | str) -> None:
        self.mode = Mode(mode)
        log.info("fan mode -> %s", self.mode.value)

    def set_temperature(self, value: float) -> None:
        self.temperature = float(value)

    def set_humidity(self, value: float) -> None:
        self.humidity = float(value)

    def set_manual_speed(self, value: float) -> None:
        self.manual_speed = _clamp(float(value), SPEED_MIN, SPEED_MAX)

    def update(self) -> FanState:
        result = self.engine.compute(self.temperature, self.humidity)
        if self.mode is Mode.AUTO:
            speed = float(result.output)
        else:
            speed = self.manual_speed
        state = FanState(mode=self.mode, speed=speed, category=speed_category(speed), result=result)
        log.debug("fan update mode=%s speed=%.1f category=%s", self.mode.value, speed, state.category)
        return state
