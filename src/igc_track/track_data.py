"""Flight track data models produced by the IGC parser.

A :class:`FlightTrack` is built fresh by every parse call and frozen on
construction.  Downstream consumers (barogram charting, geodesic utilities)
only read it, addressing fixes and turnpoints by integer index.
"""

from __future__ import annotations

import datetime
from enum import StrEnum

import pydantic

# ---------------------------------------------------------------------------
# Track models
# ---------------------------------------------------------------------------


class Header(pydantic.BaseModel):
    """A recognized H-record, or one of the two synthesized logger headers."""

    model_config = pydantic.ConfigDict(frozen=True)

    name: str
    value: str


class PositionFix(pydantic.BaseModel):
    """One B-record: UTC time, WGS 84 position (degrees) and altitudes (metres)."""

    model_config = pydantic.ConfigDict(frozen=True)

    time: datetime.datetime
    latitude: float
    longitude: float
    pressure_altitude: int
    gps_altitude: int


class Turnpoint(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(frozen=True)

    latitude: float
    longitude: float
    name: str


class Task(pydantic.BaseModel):
    """Declared task.

    ``turnpoints`` excludes the declared takeoff and landing points; their
    names survive in ``takeoff_name`` / ``landing_name`` (empty when the
    declaration carried a zero latitude for them).
    """

    model_config = pydantic.ConfigDict(frozen=True)

    turnpoints: tuple[Turnpoint, ...] = ()
    takeoff_name: str = ""
    landing_name: str = ""


class FlightTrack(pydantic.BaseModel):
    model_config = pydantic.ConfigDict(frozen=True)

    headers: tuple[Header, ...] = ()
    fixes: tuple[PositionFix, ...] = ()
    task: Task = pydantic.Field(default_factory=Task)

    # --- parallel views for the barogram ---

    @property
    def times(self) -> list[datetime.datetime]:
        return [fix.time for fix in self.fixes]

    @property
    def pressure_altitudes(self) -> list[int]:
        return [fix.pressure_altitude for fix in self.fixes]

    @property
    def gps_altitudes(self) -> list[int]:
        return [fix.gps_altitude for fix in self.fixes]

    # --- coordinate sequences for geodesy ---

    @property
    def lat_longs(self) -> list[tuple[float, float]]:
        return [(fix.latitude, fix.longitude) for fix in self.fixes]

    @property
    def task_lat_longs(self) -> list[tuple[float, float]]:
        return [(tp.latitude, tp.longitude) for tp in self.task.turnpoints]

    def header_value(self, name: str) -> str | None:
        """Return the value of the first header called *name*, if any."""
        for header in self.headers:
            if header.name == name:
                return header.value
        return None


# ---------------------------------------------------------------------------
# Format errors
# ---------------------------------------------------------------------------


class FormatErrorKind(StrEnum):
    FILE_TOO_SHORT = "file-too-short"
    INVALID_MANUFACTURER_RECORD = "invalid-manufacturer-record"
    MISSING_DATE_HEADER = "missing-date-header"


_DEFAULT_MESSAGES: dict[FormatErrorKind, str] = {
    FormatErrorKind.FILE_TOO_SHORT: "The file is too short to be an IGC file.",
    FormatErrorKind.INVALID_MANUFACTURER_RECORD: (
        "This does not appear to be an IGC file: "
        "the first line is not a manufacturer (A) record."
    ),
    FormatErrorKind.MISSING_DATE_HEADER: "The file does not contain a date header.",
}


class IGCFormatError(ValueError):
    """Raised when a file cannot be parsed as IGC at all."""

    def __init__(self, kind: FormatErrorKind, message: str | None = None):
        self.kind = FormatErrorKind(kind)
        self.message = message or _DEFAULT_MESSAGES[self.kind]
        super().__init__(self.message)


class ParseResult(pydantic.BaseModel):
    """Outcome of a parse: either a complete track or a single format error.

    ``diagnostics`` holds non-fatal observations (e.g. a missing logger
    serial number); individual malformed records are skipped silently.
    """

    model_config = pydantic.ConfigDict(frozen=True)

    track: FlightTrack | None = None
    error: FormatErrorKind | None = None
    message: str = ""
    diagnostics: tuple[str, ...] = ()

    @pydantic.model_validator(mode="after")
    def _exactly_one_outcome(self) -> ParseResult:
        if (self.track is None) == (self.error is None):
            raise ValueError("ParseResult needs exactly one of track or error")
        return self

    @classmethod
    def failure(cls, kind: FormatErrorKind, message: str | None = None) -> ParseResult:
        return cls(error=kind, message=message or _DEFAULT_MESSAGES[kind])

    @property
    def ok(self) -> bool:
        return self.track is not None

    def unwrap(self) -> FlightTrack:
        """Return the track, or raise :class:`IGCFormatError` for a failed parse."""
        if self.track is None:
            raise IGCFormatError(self.error, self.message)
        return self.track
