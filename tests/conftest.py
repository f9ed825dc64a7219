import random

import pytest

from tsp_evo.cities import CoordinateSpace
from tsp_evo.data import DEFAULT_CITIES, UNIT_SQUARE


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def square():
    return CoordinateSpace(UNIT_SQUARE)


@pytest.fixture
def nine_cities():
    return CoordinateSpace(DEFAULT_CITIES)
