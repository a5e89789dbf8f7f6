from io import StringIO

import numpy

from bppcell.filtering import FilterPolicy
from bppcell.records import parse_record
from bppcell.tracks import FlightPath
from tests import INPUT_DIRECTORY

LOG_FILENAME = INPUT_DIRECTORY / 'test_tracks' / 'DATALOG.txt'


def test_from_file_carry_forward():
    flight_path = FlightPath.from_file(LOG_FILENAME, name='NS-100')

    assert flight_path.name == 'NS-100'
    assert len(flight_path) == 11
    assert flight_path.missing_fixes == 4
    assert flight_path[0].line_number == 2
    assert numpy.allclose(flight_path[2].coordinates, flight_path[1].coordinates)
    assert numpy.allclose(flight_path[-1].coordinates, (-77.454081, 39.673517, 287.1))
    assert not any(
        numpy.allclose(coordinates, (0, 0, 0)) for coordinates in flight_path.coordinates
    )


def test_from_file_drop():
    flight_path = FlightPath.from_file(LOG_FILENAME, name='NS-100', policy=FilterPolicy.drop)

    assert len(flight_path) == 8
    assert [record.line_number for record in flight_path] == [2, 3, 5, 6, 8, 9, 10, 11]


def test_landing_site():
    for policy in FilterPolicy:
        flight_path = FlightPath.from_file(LOG_FILENAME, policy=policy)

        # the log ends without a fix, so the landing site is the last line that had one
        assert numpy.allclose(flight_path.landing_site, (-77.454081, 39.673517, 287.1))


def test_landing_site_without_missing_fixes():
    records = [
        parse_record('12:00:01,39.0,-76.0,100.0,20'),
        parse_record('12:00:03,39.1,-76.1,150.0,22'),
    ]
    flight_path = FlightPath(records)

    assert flight_path.name == 'flight'
    assert numpy.allclose(flight_path.landing_site, records[-1].coordinates)


def test_statistics():
    flight_path = FlightPath.from_file(LOG_FILENAME)

    assert flight_path.coordinates.shape == (11, 3)
    assert flight_path.max_altitude == 1762.3
    assert flight_path.altitudes[0] == 185.4


def test_empty_log():
    flight_path = FlightPath.from_file(StringIO(''), name='NS-101')

    assert len(flight_path) == 0
    assert flight_path.coordinates.shape == (0, 3)
    assert flight_path.max_altitude == 0.0
    assert numpy.allclose(flight_path.landing_site, (0, 0, 0))


def test_log_without_fix():
    flight_path = FlightPath.from_file(StringIO('12:00:01,0,0,0,3\n12:00:02,0,0,0,4\n'))

    assert len(flight_path) == 0
    assert flight_path.missing_fixes == 2
    assert numpy.allclose(flight_path.landing_site, (0, 0, 0))
