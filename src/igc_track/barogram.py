"""Barogram data preparation for the charting front end.

Long tracks are pruned to roughly ``config.PRUNING_TARGET_POINTS`` samples
by taking every *n*-th fix, where *n* is the pruning factor.  A chart point
maps back to the fix index ``point_index * pruning_factor``.
"""

from __future__ import annotations

import logging
import math

import pandas as pd
import pandera.pandas as pa
import pydantic

from igc_track.config import config
from igc_track.track_data import FlightTrack

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Fixes dataframe schema
# ---------------------------------------------------------------------------

fixes_schema = pa.DataFrameSchema(
    columns={
        "time": pa.Column(
            checks=pa.Check(
                lambda s: s.is_monotonic_increasing,
                name="is_monotonic",
                error="time must be non-decreasing. Did the midnight rollover fail?",
            ),
            nullable=False,
        ),
        "latitude": pa.Column(float, pa.Check.in_range(-90.0, 90.0), nullable=False),
        "longitude": pa.Column(float, pa.Check.in_range(-180.0, 180.0), nullable=False),
        "pressure_altitude": pa.Column(int, nullable=False),
        "gps_altitude": pa.Column(int, nullable=False),
    },
    strict=True,
    coerce=True,
)


def fixes_dataframe(track: FlightTrack) -> pd.DataFrame:
    """One row per fix, validated against :data:`fixes_schema`."""
    df = pd.DataFrame(
        {
            "time": pd.to_datetime(track.times, utc=True),
            "latitude": [fix.latitude for fix in track.fixes],
            "longitude": [fix.longitude for fix in track.fixes],
            "pressure_altitude": track.pressure_altitudes,
            "gps_altitude": track.gps_altitudes,
        }
    )
    return fixes_schema.validate(df)


# ---------------------------------------------------------------------------
# Barogram series
# ---------------------------------------------------------------------------


class BarogramSeries(pydantic.BaseModel):
    """Pruned, unit-converted altitude series ready for a line chart."""

    model_config = pydantic.ConfigDict(frozen=True)

    labels: list[str]
    pressure_altitudes: list[float]
    gps_altitudes: list[float]
    pruning_factor: int


def get_pruning_factor(record_count: int) -> int:
    if record_count > config.PRUNING_THRESHOLD:
        # Half-up rounding
        return max(1, math.floor(record_count / config.PRUNING_TARGET_POINTS + 0.5))
    return 1


def fix_index_for_point(point_index: int, pruning_factor: int) -> int:
    return point_index * pruning_factor


def barogram_series(
    track: FlightTrack, conversion_factor: float | None = None
) -> BarogramSeries:
    """Sample every ``pruning_factor``-th fix into HH:MM labels and altitudes.

    *conversion_factor* multiplies the altitudes (metres); defaults to
    ``config.ALTITUDE_CONVERSION_FACTOR``.
    """
    if conversion_factor is None:
        conversion_factor = config.ALTITUDE_CONVERSION_FACTOR

    pruning_factor = get_pruning_factor(len(track.fixes))
    sampled = track.fixes[::pruning_factor]
    logger.debug(
        "Barogram: %d of %d fixes (pruning factor %d)",
        len(sampled),
        len(track.fixes),
        pruning_factor,
    )

    return BarogramSeries(
        labels=[fix.time.strftime("%H:%M") for fix in sampled],
        pressure_altitudes=[fix.pressure_altitude * conversion_factor for fix in sampled],
        gps_altitudes=[fix.gps_altitude * conversion_factor for fix in sampled],
        pruning_factor=pruning_factor,
    )
