"""
Pytest configuration and shared fixtures for igc_track tests
"""
import datetime

import pytest

from igc_track.igc_parser import parse_igc
from igc_track.track_data import FlightTrack, PositionFix


@pytest.fixture
def sample_igc_content():
    """Sample IGC file content: 3 fixes, 4 declared task points"""
    return """ALXNABCFLIGHT:1
HFDTE150523
HFPLTPILOTINCHARGE:Jan Kowalski
HFGTYGLIDERTYPE:SZD 51-1 Junior
HFGIDGLIDERID:SP-3303
HFXYZUNKNOWN:ignored
HFCIDCOMPETITIONID:
I023638FXA3940SIU
C150523101500000000000003
C0000000N00000000ETAKEOFF
C5107028N00112345WLASHAM
C5200000N00100000WTURN ONE
C5110000N00105000WLANDING FIELD
B1000005107028N00112345WA0010000150
B1000055107100N00112400WA0010500155
B1000105107200N00112500WV0011000160
LXCSSOMETHING
G1234ABCD
"""


@pytest.fixture
def sample_igc_file(tmp_path, sample_igc_content):
    """Create a temporary IGC file for testing"""
    igc_file = tmp_path / "07_test_flight.igc"
    igc_file.write_text(sample_igc_content)
    return igc_file


@pytest.fixture
def sample_track(sample_igc_content):
    return parse_igc(sample_igc_content)


@pytest.fixture
def flight_date():
    return datetime.datetime(2023, 5, 15, tzinfo=datetime.timezone.utc)


def make_track(count, start=None, step_s=1):
    """Synthetic track of *count* fixes heading north, one per *step_s* seconds"""
    start = start or datetime.datetime(2023, 5, 15, 10, tzinfo=datetime.timezone.utc)
    fixes = [
        PositionFix(
            time=start + datetime.timedelta(seconds=i * step_s),
            latitude=51.0 + i * 0.001,
            longitude=-1.0,
            pressure_altitude=100 + i,
            gps_altitude=150 + i,
        )
        for i in range(count)
    ]
    return FlightTrack(fixes=fixes)


@pytest.fixture
def track_factory():
    return make_track
