"""
Rule base of the fan controller (Mamdani: min for AND, max for OR).

Every rule reads one temperature set AND one humidity set and concludes one
fan speed category. Rules sharing a consequent are OR-ed into a single
strength ("alpha") for that category.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Mapping

from .membership import FAN_SPEED


@dataclass(frozen=True)
class Rule:
    temperature: str
    humidity: str
    consequent: str

    def strength(self, temperature: Mapping[str, float], humidity: Mapping[str, float]) -> float:
        """Firing strength: min of both antecedent degrees."""
        return min(temperature[self.temperature], humidity[self.humidity])

    def __str__(self) -> str:
        return (f"IF temperature is {self.temperature} AND humidity is {self.humidity} "
                f"THEN fan_speed is {self.consequent}")


RULE_BASE: tuple[Rule, ...] = (
    Rule("cold", "dry", "slow"),
    Rule("cold", "normal", "slow"),
    Rule("cold", "wet", "slow"),
    Rule("normal", "dry", "slow"),

    Rule("normal", "normal", "medium"),
    Rule("normal", "wet", "medium"),
    Rule("hot", "dry", "medium"),

    Rule("hot", "normal", "fast"),
    Rule("hot", "wet", "fast"),
)


def firing_strengths(
    temperature: Mapping[str, float],
    humidity: Mapping[str, float],
    rules: Iterable[Rule] = RULE_BASE,
) -> list[tuple[Rule, float]]:
    return [(rule, rule.strength(temperature, humidity)) for rule in rules]


def aggregate(
    temperature: Mapping[str, float],
    humidity: Mapping[str, float],
    rules: Iterable[Rule] = RULE_BASE,
    categories: Iterable[str] = FAN_SPEED.labels,
) -> dict[str, float]:
    """
    Alpha per output category: max over the category's rules of their
    firing strength. A category without rules gets 0.
    """
    alpha = {category: 0.0 for category in categories}
    for rule, fs in firing_strengths(temperature, humidity, rules):
        if rule.consequent not in alpha:
            raise KeyError(f"rule concludes unknown category {rule.consequent!r}")
        alpha[rule.consequent] = max(alpha[rule.consequent], fs)
    return alpha
