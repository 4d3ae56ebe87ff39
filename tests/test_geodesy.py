"""
Tests for geodesy.py distance and bearing helpers
"""
import math

import numpy as np
import pytest

from igc_track.geodesy import (
    bearing,
    distance_between_coordinates,
    fix_distance,
    leg_distances,
    next_point_in_distance,
    path_length,
)

# One degree of arc on a 6371 km sphere
ONE_DEGREE_KM = 6371.0 * math.pi / 180


class TestDistance:
    """Tests for haversine distances"""

    def test_same_point(self):
        assert distance_between_coordinates((51.1, -1.2), (51.1, -1.2)) == 0.0

    def test_one_degree_along_equator(self):
        assert distance_between_coordinates((0.0, 0.0), (0.0, 1.0)) == pytest.approx(
            ONE_DEGREE_KM, rel=1e-9
        )

    def test_one_degree_along_meridian(self):
        assert distance_between_coordinates((51.0, -1.0), (52.0, -1.0)) == pytest.approx(
            ONE_DEGREE_KM, rel=1e-9
        )

    def test_symmetric(self):
        a, b = (51.117, -1.206), (45.5, 8.1)
        assert distance_between_coordinates(a, b) == pytest.approx(
            distance_between_coordinates(b, a)
        )

    def test_fix_distance(self, sample_track):
        expected = distance_between_coordinates(
            sample_track.lat_longs[0], sample_track.lat_longs[2]
        )
        assert fix_distance(sample_track, 0, 2) == pytest.approx(expected)
        assert fix_distance(sample_track, 1, 1) == 0.0

    def test_fix_distance_out_of_range(self, sample_track):
        with pytest.raises(IndexError):
            fix_distance(sample_track, 0, 3)
        with pytest.raises(IndexError):
            fix_distance(sample_track, -1, 0)


class TestLegDistances:
    """Tests for vectorized consecutive distances"""

    def test_matches_scalar(self, track_factory):
        track = track_factory(10)
        legs = leg_distances(track.lat_longs)
        assert legs.shape == (9,)
        for i, leg in enumerate(legs):
            assert leg == pytest.approx(
                distance_between_coordinates(track.lat_longs[i], track.lat_longs[i + 1])
            )

    def test_too_few_points(self):
        assert len(leg_distances([])) == 0
        assert len(leg_distances([(51.0, -1.0)])) == 0

    def test_repeated_point(self):
        legs = leg_distances([(51.0, -1.0), (51.0, -1.0)])
        assert np.all(legs == 0.0)


class TestPathLength:
    """Tests for path_length and next_point_in_distance"""

    def test_inclusive_range(self):
        assert path_length([1.0, 2.0, 3.0, 4.0], 1, 2) == 5.0
        assert path_length([1.0, 2.0, 3.0, 4.0], 0, 3) == 10.0

    def test_single_leg(self):
        assert path_length([1.0, 2.0, 3.0], 2, 2) == 3.0

    def test_next_point(self):
        distances = [1.0] * 6
        # 1 + 1 + 1 > 2.5 after consuming legs 0, 1 and 2
        assert next_point_in_distance(2.5, 0, distances) == 3
        assert next_point_in_distance(2.5, 1, distances) == 4

    def test_next_point_exact_distance_not_enough(self):
        assert next_point_in_distance(2.0, 0, [1.0] * 6) == 3

    def test_next_point_not_reached(self):
        assert next_point_in_distance(10.0, 0, [1.0] * 6) == -1

    def test_next_point_long_track(self):
        # Deep enough that a recursive scan would hit the recursion limit
        distances = [0.001] * 50_000
        assert 10_000 <= next_point_in_distance(10.0, 0, distances) <= 10_002


class TestBearing:
    """Tests for initial bearing"""

    @pytest.mark.parametrize(
        "p1, expected",
        [((1.0, 0.0), 0.0), ((0.0, 1.0), 90.0), ((-1.0, 0.0), 180.0), ((0.0, -1.0), 270.0)],
    )
    def test_cardinal_directions(self, p1, expected):
        assert bearing((0.0, 0.0), p1) == pytest.approx(expected)

    def test_range(self):
        value = bearing((51.0, -1.0), (50.0, -2.0))
        assert 180.0 < value < 270.0
