"""
Tests for track_data.py models and the format error taxonomy
"""
import datetime

import pydantic
import pytest

from igc_track.track_data import (
    FlightTrack,
    FormatErrorKind,
    Header,
    IGCFormatError,
    ParseResult,
    PositionFix,
    Task,
    Turnpoint,
)


class TestFlightTrack:
    """Tests for FlightTrack views"""

    def test_empty_track(self):
        track = FlightTrack()
        assert track.headers == ()
        assert track.fixes == ()
        assert track.task == Task(turnpoints=[], takeoff_name="", landing_name="")

    def test_coordinate_views(self, sample_track):
        assert len(sample_track.lat_longs) == 3
        lat, lon = sample_track.lat_longs[0]
        assert lat == pytest.approx(51.117133, abs=1e-6)
        assert lon == pytest.approx(-1.205750, abs=1e-6)
        assert [round(lat, 3) for lat, _ in sample_track.task_lat_longs] == [51.117, 52.0]

    def test_header_value(self, sample_track):
        assert sample_track.header_value("Glider ID") == "SP-3303"
        assert sample_track.header_value("Crew member 2") is None

    def test_frozen(self, sample_track):
        with pytest.raises(pydantic.ValidationError):
            sample_track.task = Task()

    def test_collections_are_read_only(self, sample_track):
        assert isinstance(sample_track.fixes, tuple)
        assert isinstance(sample_track.headers, tuple)
        assert isinstance(sample_track.task.turnpoints, tuple)
        with pytest.raises(AttributeError):
            sample_track.fixes.append(sample_track.fixes[0])
        with pytest.raises(TypeError):
            sample_track.headers[0] = Header(name="Pilot", value="Someone else")

    def test_fix_frozen(self):
        fix = PositionFix(
            time=datetime.datetime(2023, 5, 15, tzinfo=datetime.timezone.utc),
            latitude=51.0,
            longitude=-1.0,
            pressure_altitude=100,
            gps_altitude=150,
        )
        with pytest.raises(pydantic.ValidationError):
            fix.gps_altitude = 0

    def test_value_equality(self):
        a = FlightTrack(headers=[Header(name="Pilot", value="X")])
        b = FlightTrack(headers=[Header(name="Pilot", value="X")])
        assert a == b
        assert a != FlightTrack(headers=[Header(name="Pilot", value="Y")])

    def test_turnpoint_fields(self):
        tp = Turnpoint(latitude=1.5, longitude=2.5, name="TP")
        assert (tp.latitude, tp.longitude, tp.name) == (1.5, 2.5, "TP")


class TestFormatErrors:
    """Tests for IGCFormatError and ParseResult"""

    def test_kind_values(self):
        assert {kind.value for kind in FormatErrorKind} == {
            "file-too-short",
            "invalid-manufacturer-record",
            "missing-date-header",
        }

    def test_error_default_message(self):
        error = IGCFormatError(FormatErrorKind.MISSING_DATE_HEADER)
        assert isinstance(error, ValueError)
        assert error.kind is FormatErrorKind.MISSING_DATE_HEADER
        assert str(error) == "The file does not contain a date header."

    def test_error_from_string_kind(self):
        error = IGCFormatError("file-too-short", "custom")
        assert error.kind is FormatErrorKind.FILE_TOO_SHORT
        assert str(error) == "custom"

    def test_failure_result(self):
        result = ParseResult.failure(FormatErrorKind.FILE_TOO_SHORT)
        assert not result.ok
        assert result.message
        with pytest.raises(IGCFormatError) as exc_info:
            result.unwrap()
        assert exc_info.value.kind is FormatErrorKind.FILE_TOO_SHORT

    def test_success_result(self, sample_track):
        result = ParseResult(track=sample_track)
        assert result.ok
        assert result.unwrap() is sample_track

    def test_result_needs_exactly_one_outcome(self, sample_track):
        with pytest.raises(pydantic.ValidationError):
            ParseResult()
        with pytest.raises(pydantic.ValidationError):
            ParseResult(track=sample_track, error=FormatErrorKind.FILE_TOO_SHORT)
