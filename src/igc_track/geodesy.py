"""Great-circle helpers over WGS 84 decimal-degree coordinates.

Coordinates are ``(latitude, longitude)`` pairs as exposed by
:attr:`FlightTrack.lat_longs` and :attr:`FlightTrack.task_lat_longs`.
Distances use the haversine formula on a sphere of diameter
``config.EARTH_DIAMETER_KM`` and are returned in kilometres.
"""

from __future__ import annotations

import math
from typing import Sequence

import numpy as np
import numpy.typing as npt

from igc_track.config import config
from igc_track.track_data import FlightTrack

LatLong = tuple[float, float]


def distance_between_coordinates(p0: LatLong, p1: LatLong) -> float:
    """Haversine distance between two coordinates, in kilometres."""
    lat1, lon1 = map(math.radians, p0)
    lat2, lon2 = map(math.radians, p1)

    a = (
        0.5
        - math.cos(lat2 - lat1) / 2
        + math.cos(lat1) * math.cos(lat2) * (1 - math.cos(lon2 - lon1)) / 2
    )
    return config.EARTH_DIAMETER_KM * math.asin(math.sqrt(a))


def fix_distance(track: FlightTrack, p0: int, p1: int) -> float:
    """Distance in kilometres between fixes *p0* and *p1* of *track*."""
    n = len(track.fixes)
    for idx in (p0, p1):
        if not 0 <= idx < n:
            raise IndexError(f"Fix index {idx} out of range for {n} fixes")

    a, b = track.fixes[p0], track.fixes[p1]
    return distance_between_coordinates((a.latitude, a.longitude), (b.latitude, b.longitude))


def leg_distances(lat_longs: Sequence[LatLong]) -> npt.NDArray[np.float64]:
    """Distances (km) between consecutive coordinates; ``n - 1`` values."""
    if len(lat_longs) < 2:
        return np.zeros(0, dtype=np.float64)

    rad = np.radians(np.asarray(lat_longs, dtype=np.float64))
    lat, lon = rad[:, 0], rad[:, 1]

    a = (
        0.5
        - np.cos(np.diff(lat)) / 2
        + np.cos(lat[:-1]) * np.cos(lat[1:]) * (1 - np.cos(np.diff(lon))) / 2
    )
    # Rounding can push a a hair outside [0, 1] for coincident points
    return config.EARTH_DIAMETER_KM * np.arcsin(np.sqrt(np.clip(a, 0.0, 1.0)))


def path_length(distances: Sequence[float], p0: int, p1: int) -> float:
    """Sum of the leg distances from index *p0* through *p1* inclusive."""
    return float(sum(distances[p0 : p1 + 1]))


def next_point_in_distance(dist: float, idx: int, distances: Sequence[float]) -> int:
    """Return the first index past *idx* whose accumulated distance exceeds *dist*.

    Accumulates ``distances[idx], distances[idx + 1], ...`` and returns the
    index following the leg that pushed the sum over *dist*.  Returns ``-1``
    when the end of the track is reached first.
    """
    total = 0.0
    j = idx
    while total <= dist:
        if j >= len(distances) - 1:
            return -1
        total += distances[j]
        j += 1
    return j


def bearing(p0: LatLong, p1: LatLong) -> float:
    """Initial great-circle bearing from *p0* to *p1*, degrees in ``[0, 360)``.

    0° is north, 90° east, 180° south and 270° west.
    """
    lat1, lon1 = map(math.radians, p0)
    lat2, lon2 = map(math.radians, p1)

    y = math.sin(lon2 - lon1) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(
        lon2 - lon1
    )
    return (math.degrees(math.atan2(y, x)) + 360.0) % 360.0
