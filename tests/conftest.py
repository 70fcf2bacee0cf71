"""Pytest configuration for renderer tests.

Provides seeded random streams and a scripted stand-in for them, plus a few
materials shared across test modules.
"""

import itertools
import random

import pytest

from pathtracer.core.vector import Color
from pathtracer.materials.lambertian import Lambertian


class ScriptedRng:
    """Random stream that replays fixed values, for deterministic scatter tests."""

    def __init__(self, uniforms=(0.0,), randoms=(0.5,)):
        self._uniforms = itertools.cycle(uniforms)
        self._randoms = itertools.cycle(randoms)

    def uniform(self, a, b):
        return next(self._uniforms)

    def random(self):
        return next(self._randoms)


@pytest.fixture
def rng():
    """A seeded random stream so statistical tests are reproducible."""
    return random.Random(1234)


@pytest.fixture
def scripted_rng():
    return ScriptedRng


@pytest.fixture
def grey():
    return Lambertian(Color(0.5, 0.5, 0.5))
