"""Utility helpers for the igc_track package."""

from __future__ import annotations

import math

from igc_track.track_data import FlightTrack


def _format_duration(seconds: float) -> str:
    """Convert *seconds* to a human-readable duration string.

    Examples: ``"6m 23s"``, ``"1h 15m"``, ``"0m 0s"``.
    """
    total = int(math.floor(seconds))
    h, remainder = divmod(total, 3600)
    m, s = divmod(remainder, 60)

    if h > 0:
        # Seconds are noise on flights over an hour
        return f"{h}h {m:02d}m"
    return f"{m}m {s:02d}s" if m else f"0m {s}s"


def flight_summary_text(track: FlightTrack) -> str | None:
    """Build a short one-line description of the flight.

    Returns a string such as
    ``"Jan Kowalski · SZD 51-1 Junior (SP-3303) · 2025-05-08 · Flight Time: 6m 23s"``
    or *None* when neither headers nor fixes say anything about the flight.
    """
    parts: list[str] = []

    # 1. Pilot name
    pilot = track.header_value("Pilot")
    if pilot and pilot.strip():
        parts.append(pilot.strip())

    # 2. Glider type (with optional registration)
    glider_type = (track.header_value("Glider type") or "").strip()
    glider_id = (track.header_value("Glider ID") or "").strip()
    if glider_type and glider_id:
        parts.append(f"{glider_type} ({glider_id})")
    elif glider_type or glider_id:
        parts.append(glider_type or glider_id)

    # 3. Date and flight duration, from the fixes
    if track.fixes:
        first, last = track.fixes[0].time, track.fixes[-1].time
        parts.append(first.date().isoformat())
        parts.append(f"Flight Time: {_format_duration((last - first).total_seconds())}")

    if not parts:
        return None

    return " · ".join(parts)
