from __future__ import annotations

import pytest

from ExactTSP.cities import cities_from_coordinates, generate_cities


@pytest.fixture
def unit_square():
    return cities_from_coordinates([(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0)])


@pytest.fixture
def square_with_center():
    return cities_from_coordinates([(0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0), (0.5, 0.5)])


@pytest.fixture
def two_cities():
    return cities_from_coordinates([(0.0, 0.0), (1.0, 0.0)])


@pytest.fixture
def random_cities():
    return generate_cities(8, seed=7)
