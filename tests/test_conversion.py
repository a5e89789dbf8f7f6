from pathlib import Path
import shutil

import pytest

from bppcell.conversion import (
    InvalidFlightNameError,
    InvalidOutputPathError,
    OverwriteDeclined,
    convert_log,
    flight_name_for,
    output_filename_for,
)
from bppcell.filtering import FilterPolicy
from bppcell.reader import InputAccessError
from bppcell.records import MalformedRecordError
from tests import INPUT_DIRECTORY


@pytest.fixture
def log_filename(tmp_path) -> Path:
    filename = tmp_path / 'DATALOG.txt'
    shutil.copyfile(INPUT_DIRECTORY / 'test_tracks' / 'DATALOG.txt', filename)
    return filename


@pytest.mark.parametrize(
    'output_filename, expected',
    [
        (None, 'logs/DATALOG.kml'),
        ('NS-100', 'NS-100.kml'),
        ('NS-100.kml', 'NS-100.kml'),
        ('NS-100.txt', 'NS-100.kml'),
        ('NS-100.KML', 'NS-100.kml'),
        ('flights/NS-100.geojson', 'flights/NS-100.kml'),
        ('NS-100.flight.log', 'NS-100.flight.kml'),
    ],
)
def test_output_filename(output_filename, expected):
    assert output_filename_for(Path('logs') / 'DATALOG.txt', output_filename) == Path(expected)


@pytest.mark.parametrize('output_filename', ['NS<100>.kml', 'NS|100', 'NS"100"', 'NS\t100', '  '])
def test_invalid_output_filename(output_filename):
    with pytest.raises(InvalidOutputPathError):
        output_filename_for('DATALOG.txt', output_filename)


def test_output_filename_is_directory(tmp_path):
    with pytest.raises(InvalidOutputPathError):
        output_filename_for('DATALOG.txt', tmp_path)


def test_convert_log(log_filename):
    flight_path = convert_log(log_filename, 'NS-100')

    output_filename = log_filename.with_suffix('.kml')
    assert output_filename.exists()
    assert len(flight_path) == 11
    assert b'<name>NS-100</name>' in output_filename.read_bytes()


def test_default_flight_name(log_filename):
    flight_path = convert_log(log_filename, policy=FilterPolicy.drop)

    assert flight_path.name == 'DATALOG'
    assert len(flight_path) == 8


def test_rerun_is_identical(log_filename):
    output_filename = log_filename.parent / 'NS-100.kml'

    convert_log(log_filename, 'NS-100', output_filename)
    first = output_filename.read_bytes()
    convert_log(log_filename, 'NS-100', output_filename, overwrite=True)

    assert output_filename.read_bytes() == first


def test_overwrite_declined(log_filename):
    output_filename = log_filename.with_suffix('.kml')
    output_filename.write_text('previous flight')

    with pytest.raises(OverwriteDeclined):
        convert_log(log_filename, 'NS-100')

    assert output_filename.read_text() == 'previous flight'

    convert_log(log_filename, 'NS-100', overwrite=True)

    assert output_filename.read_text() != 'previous flight'


def test_malformed_log_leaves_no_output(tmp_path):
    log_filename = tmp_path / 'DATALOG.txt'
    log_filename.write_text('12:00:01,39.0,-76.0,100.0,20\n12:00:02,39.0,-76.0\n')

    with pytest.raises(MalformedRecordError) as error:
        convert_log(log_filename, 'NS-100')

    assert error.value.line_number == 2
    assert list(tmp_path.iterdir()) == [log_filename]


def test_malformed_log_keeps_existing_output(tmp_path):
    log_filename = tmp_path / 'DATALOG.txt'
    log_filename.write_text('12:00:01,39.0,-76.0,100.0,20\n12:00:02,north,-76.0,100.0,21\n')
    output_filename = tmp_path / 'DATALOG.kml'
    output_filename.write_text('previous flight')

    with pytest.raises(MalformedRecordError):
        convert_log(log_filename, 'NS-100', overwrite=True)

    assert output_filename.read_text() == 'previous flight'


def test_missing_input(tmp_path):
    with pytest.raises(InputAccessError):
        convert_log(tmp_path / 'DATALOG.txt', 'NS-100')

    assert list(tmp_path.iterdir()) == []


def test_header_lines(tmp_path):
    log_filename = tmp_path / 'DATALOG.txt'
    log_filename.write_text('NS-100 cell module log\n12:00:01,39.0,-76.0,100.0,20\n')

    with pytest.raises(MalformedRecordError):
        convert_log(log_filename, 'NS-100')

    flight_path = convert_log(log_filename, 'NS-100', header_lines=1)

    assert len(flight_path) == 1


def test_flight_name():
    assert flight_name_for(Path('logs') / 'DATALOG.txt') == 'DATALOG'
    assert flight_name_for('DATALOG.txt', 'NS-100 <R&D>') == 'NS-100 <R&D>'

    with pytest.raises(InvalidFlightNameError):
        flight_name_for('DATALOG.txt', 'NS\x01100')


def test_invalid_flight_name_leaves_no_output(log_filename):
    with pytest.raises(InvalidFlightNameError):
        convert_log(log_filename, 'NS\x0b100')

    assert list(log_filename.parent.iterdir()) == [log_filename]


def test_non_finite_coordinates_leave_no_output(tmp_path):
    log_filename = tmp_path / 'DATALOG.txt'
    log_filename.write_text('12:00:01,39.0,-76.0,100.0,20\n12:00:02,nan,-76.0,inf,21\n')

    with pytest.raises(MalformedRecordError) as error:
        convert_log(log_filename, 'NS-100')

    assert error.value.line_number == 2
    assert list(tmp_path.iterdir()) == [log_filename]
