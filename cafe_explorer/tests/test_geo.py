from __future__ import annotations

import math

import pytest

from cafe_explorer.cafes.geo import EARTH_RADIUS_MILES, calculate_distance

SF = (37.7749, -122.4194)
OAKLAND = (37.8044, -122.2712)
NYC = (40.7128, -74.0060)


def test_same_point_is_zero():
    assert calculate_distance(*SF, *SF) == 0.0


@pytest.mark.parametrize("a,b", [(SF, OAKLAND), (SF, NYC), ((0.0, 0.0), (-33.9, 151.2))])
def test_symmetric(a, b):
    assert calculate_distance(*a, *b) == calculate_distance(*b, *a)


def test_known_city_distances():
    assert calculate_distance(*SF, *OAKLAND) == pytest.approx(8.4, abs=0.3)
    assert calculate_distance(*SF, *NYC) == pytest.approx(2565, rel=0.01)


def test_one_degree_of_latitude():
    expected = EARTH_RADIUS_MILES * math.pi / 180
    assert calculate_distance(10.0, 20.0, 11.0, 20.0) == pytest.approx(expected)


def test_out_of_range_input_does_not_raise():
    assert calculate_distance(200.0, 400.0, -300.0, 0.0) >= 0.0
