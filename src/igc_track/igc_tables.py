"""Lookup tables and fixed-width record layouts for IGC files.

Record layouts map a field name to ``(offset, width)`` in the raw line.
Offsets count the leading record-type letter as position 0.

A record (manufacturer)::

    A  XXX  SSS
    0  1-3  4-6

B record (position fix)::

    B  HHMMSS  DDMMmmmN  DDDMMmmmE  V  PPPPP  GGGGG
    0  1-6     7-14      15-23      24 25-29  30-34

C record (task declaration)::

    C  DDMMmmmN  DDDMMmmmE  name...
    0  1-8       9-17       18-

H record (header)::

    H  F  XXX  ...:value
    0  1  2-4
"""

from __future__ import annotations

# ── Manufacturer code → name ────────────────────────────────────────────────
MANUFACTURERS: dict[str, str] = {
    "GCS": "Garrecht",
    "CAM": "Cambridge Aero Instruments",
    "DSX": "Data Swan",
    "EWA": "EW Avionics",
    "FIL": "Filser",
    "FLA": "FLARM",
    "SCH": "Scheffel",
    "ACT": "Aircotec",
    "NKL": "Nielsen Kellerman",
    "LXN": "LX Navigation",
    "IMI": "IMI Gliding Equipment",
    "NTE": "New Technologies s.r.l.",
    "PES": "Peschges",
    "PRT": "Print Technik",
    "SDI": "Streamline Data Instruments",
    "TRI": "Triadis Engineering GmbH",
    "LXV": "LXNAV d.o.o.",
    "WES": "Westerboer",
    "XCS": "XCSoar",
    "ZAN": "Zander",
}

UNKNOWN_MANUFACTURER = "Unknown"

# ── Header subtype → human-readable name ────────────────────────────────────
HEADER_SUBTYPES: dict[str, str] = {
    "PLT": "Pilot",
    "CM2": "Crew member 2",
    "GTY": "Glider type",
    "GID": "Glider ID",
    "DTM": "GPS Datum",
    "RFW": "Firmware version",
    "RHW": "Hardware version",
    "FTY": "Flight recorder type",
    "GPS": "GPS",
    "PRS": "Pressure sensor",
    "FRS": "Security suspect, use validation program",
    "CID": "Competition ID",
    "CCL": "Competition class",
}

# Synthesized from the A record, always the first two headers
MANUFACTURER_HEADER = "Logger manufacturer"
SERIAL_NUMBER_HEADER = "Logger serial number"

# ── Field layouts: name → (offset, width) ───────────────────────────────────
A_RECORD_LAYOUT: dict[str, tuple[int, int]] = {
    "manufacturer": (1, 3),
    "serial": (4, 3),
}

H_RECORD_LAYOUT: dict[str, tuple[int, int]] = {
    "source": (1, 1),
    "subtype": (2, 3),
}

B_RECORD_LAYOUT: dict[str, tuple[int, int]] = {
    "hours": (1, 2),
    "minutes": (3, 2),
    "seconds": (5, 2),
    "lat_long": (7, 17),
    "validity": (24, 1),
    "pressure_altitude": (25, 5),
    "gps_altitude": (30, 5),
}

C_RECORD_LAYOUT: dict[str, tuple[int, int]] = {
    "lat_long": (1, 17),
    # Open-ended: the name runs to the end of the line
    "name": (18, -1),
}

# Inside the 17-character DDMMmmmHDDDMMmmmH block shared by B and C records
LAT_LONG_LAYOUT: dict[str, tuple[int, int]] = {
    "lat_degrees": (0, 2),
    "lat_minutes": (2, 2),
    "lat_thousandths": (4, 3),
    "lat_hemisphere": (7, 1),
    "lon_degrees": (8, 3),
    "lon_minutes": (11, 2),
    "lon_thousandths": (13, 3),
    "lon_hemisphere": (16, 1),
}


def field(line: str, layout: dict[str, tuple[int, int]], name: str) -> str:
    """Slice field *name* out of *line* according to *layout*.

    A negative width means "to the end of the line".  Short lines yield a
    short (possibly empty) string rather than an error.
    """
    offset, width = layout[name]
    if width < 0:
        return line[offset:]
    return line[offset : offset + width]
