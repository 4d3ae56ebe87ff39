"""IGC flight recorder file parser.

Turns the text of an IGC file into a :class:`~igc_track.track_data.FlightTrack`:

* the A record yields the logger manufacturer and serial number headers,
* H records yield the whitelisted headers (pilot, glider, recorder, ...),
* the flight date comes from the ``HFDTE`` header, wherever it is in the file,
* B records yield position fixes, with a midnight (UTC) rollover correction,
* C records yield the declared task; the first and last declared points are
  the takeoff and landing and are removed from the turnpoint list.

Every record is handled in two steps: a regular expression checks the shape
of the whole line, then fields are sliced out by the fixed offsets of
:mod:`igc_track.igc_tables`.  Malformed B/C/H records are skipped; only three
file-level problems (see :class:`~igc_track.track_data.FormatErrorKind`) fail
a parse.
"""

from __future__ import annotations

import datetime
import logging
import pathlib
import re

from igc_track.igc_tables import (
    A_RECORD_LAYOUT,
    B_RECORD_LAYOUT,
    C_RECORD_LAYOUT,
    H_RECORD_LAYOUT,
    HEADER_SUBTYPES,
    LAT_LONG_LAYOUT,
    MANUFACTURER_HEADER,
    MANUFACTURERS,
    SERIAL_NUMBER_HEADER,
    UNKNOWN_MANUFACTURER,
    field,
)
from igc_track.track_data import (
    FlightTrack,
    FormatErrorKind,
    Header,
    ParseResult,
    PositionFix,
    Task,
    Turnpoint,
)

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Record shapes
# ---------------------------------------------------------------------------

_LAT_LONG_SHAPE = r"\d{7}[NS]\d{8}[EW]"

_A_RECORD_SHAPE = re.compile(r"A\w{6}", re.ASCII)
_A_RECORD_NO_SERIAL_SHAPE = re.compile(r"A\w{3}", re.ASCII)
_B_RECORD_SHAPE = re.compile(rf"B\d{{6}}{_LAT_LONG_SHAPE}[AV]\d{{5}}\d{{5}}", re.ASCII)
_C_RECORD_SHAPE = re.compile(rf"C{_LAT_LONG_SHAPE}", re.ASCII)

# Checked in this order: a plain HFDTEddmmyy anywhere beats HFDTEDATE:ddmmyy
_DATE_HEADER_SHAPES = (
    re.compile(r"H[FO]DTE(\d{6})", re.ASCII),
    re.compile(r"H[FO]DTEDATE:(\d{6})", re.ASCII),
)

# IGC years have two digits; anything below the pivot is 20xx
CENTURY_PIVOT = 80

DEGREE_SIGN = "°"

# ---------------------------------------------------------------------------
# A record
# ---------------------------------------------------------------------------


def resolve_manufacturer(a_record: str) -> tuple[str, str]:
    """Return ``(manufacturer name, serial number)`` for the A record line.

    Unknown codes resolve to ``"Unknown"``; the serial number is taken from
    its fixed position whether or not the code is known.
    """
    code = field(a_record, A_RECORD_LAYOUT, "manufacturer")
    serial = field(a_record, A_RECORD_LAYOUT, "serial")
    return MANUFACTURERS.get(code, UNKNOWN_MANUFACTURER), serial


# ---------------------------------------------------------------------------
# Flight date
# ---------------------------------------------------------------------------


def full_year(two_digit_year: int) -> int:
    if two_digit_year < CENTURY_PIVOT:
        return 2000 + two_digit_year
    return 1900 + two_digit_year


def extract_flight_date(igc_text: str) -> datetime.datetime | None:
    """Find the flight date in the whole file text.

    Returns UTC midnight of the flight date, or *None* if there is no date
    header.  A ``ddmmyy`` off the calendar rolls over into the following
    days and months, so ``290223`` is 1 March 2023 and day ``00`` is the
    last day of the previous month.
    """
    for shape in _DATE_HEADER_SHAPES:
        date_match = shape.search(igc_text)
        if date_match:
            break
    else:
        return None

    ddmmyy = date_match.group(1)
    day, month = int(ddmmyy[0:2]), int(ddmmyy[2:4])
    year = full_year(int(ddmmyy[4:6]))

    month_start = datetime.datetime(
        year + (month - 1) // 12,
        (month - 1) % 12 + 1,
        1,
        tzinfo=datetime.timezone.utc,
    )
    flight_date = month_start + datetime.timedelta(days=day - 1)
    if (flight_date.day, flight_date.month) != (day, month):
        logger.warning(
            "Date header %r is not a calendar date, using %s",
            date_match.group(0),
            flight_date.date().isoformat(),
        )
    return flight_date


# ---------------------------------------------------------------------------
# H records
# ---------------------------------------------------------------------------


def parse_header(h_record: str) -> Header | None:
    """Return the header for a whitelisted H record with a non-blank value."""
    name = HEADER_SUBTYPES.get(field(h_record, H_RECORD_LAYOUT, "subtype"))
    if name is None:
        return None

    _, colon, value = h_record.partition(":")
    if not colon or not value.strip():
        return None

    return Header(name=name, value=value)


# ---------------------------------------------------------------------------
# Latitude / longitude
# ---------------------------------------------------------------------------


def _decimal_degrees(degrees: str, minutes: str, thousandths: str) -> float:
    return int(degrees) + (int(minutes) + int(thousandths) / 1000) / 60


def decode_lat_long(lat_long: str) -> tuple[float, float]:
    """Decode a ``DDMMmmmNDDDMMmmmE`` block into signed decimal degrees.

    The caller must have checked the block against the record shape.
    """

    def part(name: str) -> str:
        return field(lat_long, LAT_LONG_LAYOUT, name)

    latitude = _decimal_degrees(
        part("lat_degrees"), part("lat_minutes"), part("lat_thousandths")
    )
    if part("lat_hemisphere") == "S":
        latitude = -latitude

    longitude = _decimal_degrees(
        part("lon_degrees"), part("lon_minutes"), part("lon_thousandths")
    )
    if part("lon_hemisphere") == "W":
        longitude = -longitude

    return latitude, longitude


def format_lat_long(lat_long: str) -> str:
    """Render a raw block as ``DD°MM.mmm' N, DDD°MM.mmm' E``."""

    def part(name: str) -> str:
        return field(lat_long, LAT_LONG_LAYOUT, name)

    return (
        f"{part('lat_degrees')}{DEGREE_SIGN}{part('lat_minutes')}."
        f"{part('lat_thousandths')}' {part('lat_hemisphere')}, "
        f"{part('lon_degrees')}{DEGREE_SIGN}{part('lon_minutes')}."
        f"{part('lon_thousandths')}' {part('lon_hemisphere')}"
    )


# ---------------------------------------------------------------------------
# B records
# ---------------------------------------------------------------------------


def decode_position(
    b_record: str,
    flight_date: datetime.datetime,
    first_fix_time: datetime.datetime | None = None,
) -> PositionFix | None:
    """Decode a B record, or return *None* if the line is not a valid fix.

    A fix timed before *first_fix_time* is taken to be past midnight UTC
    and moved to the following day.  Only the first fix is used as the
    reference, not the previous one.
    """
    if not _B_RECORD_SHAPE.match(b_record):
        return None

    time = flight_date + datetime.timedelta(
        hours=int(field(b_record, B_RECORD_LAYOUT, "hours")),
        minutes=int(field(b_record, B_RECORD_LAYOUT, "minutes")),
        seconds=int(field(b_record, B_RECORD_LAYOUT, "seconds")),
    )
    if first_fix_time is not None and time < first_fix_time:
        time += datetime.timedelta(days=1)

    latitude, longitude = decode_lat_long(field(b_record, B_RECORD_LAYOUT, "lat_long"))

    return PositionFix(
        time=time,
        latitude=latitude,
        longitude=longitude,
        pressure_altitude=int(field(b_record, B_RECORD_LAYOUT, "pressure_altitude")),
        gps_altitude=int(field(b_record, B_RECORD_LAYOUT, "gps_altitude")),
    )


# ---------------------------------------------------------------------------
# C records
# ---------------------------------------------------------------------------


def decode_turnpoint(c_record: str) -> Turnpoint | None:
    """Decode a C record; a blank name is replaced by the formatted position."""
    if not _C_RECORD_SHAPE.match(c_record):
        return None

    lat_long = field(c_record, C_RECORD_LAYOUT, "lat_long")
    name = field(c_record, C_RECORD_LAYOUT, "name")
    if not name.strip():
        name = format_lat_long(lat_long)

    latitude, longitude = decode_lat_long(lat_long)
    return Turnpoint(latitude=latitude, longitude=longitude, name=name)


def trim_task(declared: list[Turnpoint]) -> Task:
    """Split the declared points into takeoff, turnpoints and landing.

    A takeoff or landing declared with a latitude of exactly zero carries no
    real position, so its name is dropped.
    """
    if not declared:
        return Task()

    takeoff = declared[0]
    landing = declared[-1] if len(declared) > 1 else None

    return Task(
        turnpoints=tuple(declared[1:-1]),
        takeoff_name=takeoff.name if takeoff.latitude != 0 else "",
        landing_name=landing.name if landing and landing.latitude != 0 else "",
    )


# ---------------------------------------------------------------------------
# Record dispatch
# ---------------------------------------------------------------------------


def parse_igc_result(igc_text: str) -> ParseResult:
    """Parse IGC file text into a :class:`ParseResult`.

    Never raises for a malformed file: the result carries either the track
    or the :class:`FormatErrorKind` that stopped the parse.
    """
    lines = [line.removesuffix("\r") for line in igc_text.split("\n")]
    if len(lines) < 2:
        return ParseResult.failure(FormatErrorKind.FILE_TOO_SHORT)

    diagnostics: list[str] = []
    a_record = lines[0]
    if _A_RECORD_SHAPE.match(a_record):
        pass
    elif _A_RECORD_NO_SERIAL_SHAPE.match(a_record):
        logger.warning("The logger serial number is missing: %r", a_record)
        diagnostics.append("serial number missing")
    else:
        return ParseResult.failure(FormatErrorKind.INVALID_MANUFACTURER_RECORD)

    flight_date = extract_flight_date(igc_text)
    if flight_date is None:
        return ParseResult.failure(FormatErrorKind.MISSING_DATE_HEADER)

    manufacturer, serial = resolve_manufacturer(a_record)
    headers = [
        Header(name=MANUFACTURER_HEADER, value=manufacturer),
        Header(name=SERIAL_NUMBER_HEADER, value=serial),
    ]
    fixes: list[PositionFix] = []
    declared: list[Turnpoint] = []

    for line_number, line in enumerate(lines, start=1):
        record_type = line[:1]

        if record_type == "B":
            fix = decode_position(line, flight_date, fixes[0].time if fixes else None)
            if fix is None:
                logger.debug("Skipping malformed B record on line %d", line_number)
                continue
            fixes.append(fix)

        elif record_type == "C":
            turnpoint = decode_turnpoint(line)
            if turnpoint is None:
                logger.debug("Skipping malformed C record on line %d", line_number)
                continue
            declared.append(turnpoint)

        elif record_type == "H":
            header = parse_header(line)
            if header is not None:
                headers.append(header)

    track = FlightTrack(headers=headers, fixes=fixes, task=trim_task(declared))
    logger.debug(
        "Parsed %d fixes, %d headers, %d declared task points (flight date %s)",
        len(fixes),
        len(headers),
        len(declared),
        flight_date.date().isoformat(),
    )
    return ParseResult(track=track, diagnostics=diagnostics)


def parse_igc(igc_text: str) -> FlightTrack:
    """Parse IGC file text, raising :class:`IGCFormatError` on a malformed file."""
    return parse_igc_result(igc_text).unwrap()


def parse_igc_file(igc_path: pathlib.Path | str) -> FlightTrack:
    """Read and parse an IGC file from disk."""
    igc_path = pathlib.Path(igc_path)
    logger.debug("Reading IGC file %s", igc_path)
    return parse_igc(igc_path.read_text(encoding="latin-1"))
