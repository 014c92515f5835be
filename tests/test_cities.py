from __future__ import annotations

import math

import pytest

from ExactTSP.cities import City, SimpleRng, cities_from_coordinates, generate_cities


def test_rng_first_values_follow_the_recurrence():
    rng = SimpleRng(1)
    first = rng.next()
    assert first == 1 * 1664525 + 1013904223
    assert rng.next() == (first * 1664525 + 1013904223) % 2**64


def test_rng_wraps_at_64_bits():
    rng = SimpleRng(2**64 - 1)
    value = rng.next()
    assert 0 <= value < 2**64
    assert value == ((2**64 - 1) * 1664525 + 1013904223) % 2**64


def test_zero_seed_is_remapped():
    assert SimpleRng(0).state == 12345
    assert SimpleRng(0).next() == SimpleRng(12345).next()


def test_same_seed_same_stream():
    a = SimpleRng(99)
    b = SimpleRng(99)
    assert [a.next_float() for _ in range(20)] == [b.next_float() for _ in range(20)]


def test_next_float_in_unit_interval():
    rng = SimpleRng(123)
    for _ in range(1000):
        value = rng.next_float()
        assert 0.0 <= value <= 1.0


def test_generate_cities_is_deterministic():
    assert generate_cities(10, 42) == generate_cities(10, 42)
    assert generate_cities(10, 42) != generate_cities(10, 43)


def test_generate_cities_ids_and_bounds():
    cities = generate_cities(50, 5)
    assert [city.id for city in cities] == list(range(50))
    for city in cities:
        assert 0.0 <= city.x < 100.0 or math.isclose(city.x, 100.0)
        assert 0.0 <= city.y < 100.0 or math.isclose(city.y, 100.0)


def test_generate_cities_draws_x_then_y():
    rng = SimpleRng(8)
    expected = [(rng.next_float() * 100.0, rng.next_float() * 100.0) for _ in range(3)]
    assert [(city.x, city.y) for city in generate_cities(3, 8)] == expected


def test_generate_zero_cities():
    assert generate_cities(0, 1) == []


def test_negative_count_rejected():
    with pytest.raises(ValueError):
        generate_cities(-1, 1)


def test_cities_are_immutable():
    city = City(id=0, x=1.0, y=2.0)
    with pytest.raises(AttributeError):
        city.x = 3.0  # type: ignore[misc]


def test_cities_from_coordinates_rejects_non_finite():
    with pytest.raises(ValueError):
        cities_from_coordinates([(0.0, 0.0), (math.nan, 1.0)])
    with pytest.raises(ValueError):
        cities_from_coordinates([(math.inf, 0.0)])
