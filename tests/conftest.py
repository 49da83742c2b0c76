import matplotlib
import pytest

from fanfuzzy.engine import FuzzyEngine

matplotlib.use("Agg")


@pytest.fixture
def engine():
    return FuzzyEngine()
