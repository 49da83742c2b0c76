from __future__ import annotations

from typing import Optional

import matplotlib.pyplot as plt
import numpy as np

from .engine import FuzzyEngine
from .membership import FAN_SPEED, HUMIDITY, TEMPERATURE

# Plot ranges, a little wider than the nominal sensor ranges
_RANGES = {
    TEMPERATURE.name: np.linspace(10, 45, 351),
    HUMIDITY.name: np.linspace(0, 100, 501),
    FAN_SPEED.name: np.linspace(0, 100, 501),
}


def plot_memberships():
    fig, axes = plt.subplots(nrows=1, ncols=3, figsize=(14, 4))
    for ax, var in zip(axes, (TEMPERATURE, HUMIDITY, FAN_SPEED)):
        x = _RANGES[var.name]
        for mf in var.sets:
            ax.plot(x, mf.degree(x), label=mf.name)
        ax.set_title(var.name)
        ax.set_ylim(-0.05, 1.05)
        ax.grid(True, alpha=0.3)
        ax.legend()
    fig.tight_layout()
    return fig


def plot_result(temperature: float, humidity: float, engine: Optional[FuzzyEngine] = None):
    """Aggregated (clipped) output set for one evaluation, crisp output marked."""
    engine = engine or FuzzyEngine()
    result = engine.compute(temperature, humidity)
    z = engine.samples
    aggregated = engine.aggregated(result.alpha)

    fig, ax = plt.subplots(figsize=(8, 4.5))
    for mf in engine.output.sets:
        ax.plot(z, mf.degree(z), linestyle="--", linewidth=0.8, alpha=0.6, label=mf.name)
    ax.fill_between(z, 0, aggregated, alpha=0.4, label="aggregated")
    ax.axvline(result.output, color="black", linewidth=1.2, label=f"output = {result.output}%")
    ax.set_title(f"Temperature={temperature}°C  Humidity={humidity}%")
    ax.set_xlabel("fan speed [%]")
    ax.set_ylabel(r"$\mu$")
    ax.set_ylim(-0.05, 1.05)
    ax.grid(True, alpha=0.3)
    ax.legend()
    fig.tight_layout()
    return fig
