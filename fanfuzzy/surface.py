from __future__ import annotations

from typing import Iterable, Optional

import numpy as np
import pandas as pd

from .engine import FuzzyEngine


def sweep(
    engine: Optional[FuzzyEngine] = None,
    temperatures: Iterable[float] = np.arange(15, 41, 1),
    humidities: Iterable[float] = np.arange(0, 101, 5),
) -> pd.DataFrame:
    """
    Evaluate the engine on every (temperature, humidity) pair.

    One row per pair: inputs, the six input degrees, the three category
    strengths and the crisp output.
    """
    engine = engine or FuzzyEngine()
    humidities = list(humidities)
    rows = []
    for t in temperatures:
        for h in humidities:
            result = engine.compute(t, h)
            row = {"temperature": float(t), "humidity": float(h)}
            for var, degrees in result.fuzzified.items():
                for label, mu in degrees.items():
                    row[f"{var}_{label}"] = mu
            for category, a in result.alpha.items():
                row[f"alpha_{category}"] = a
            row["output"] = result.output
            rows.append(row)
    return pd.DataFrame(rows)


def surface(
    engine: Optional[FuzzyEngine] = None,
    temperatures: Iterable[float] = np.arange(15, 41, 1),
    humidities: Iterable[float] = np.arange(0, 101, 5),
) -> pd.DataFrame:
    """Crisp outputs as a grid: rows are temperatures, columns humidities."""
    df = sweep(engine, temperatures, humidities)
    return df.pivot(index="temperature", columns="humidity", values="output")
