from bppcell.conversion import convert_log, output_filename_for
from bppcell.filtering import FilterPolicy
from bppcell.reader import TelemetryLogFile
from bppcell.records import MalformedRecordError, TelemetryRecord
from bppcell.tracks import FlightPath
from bppcell.writer import write_flight_path

__all__ = [
    'convert_log',
    'output_filename_for',
    'FilterPolicy',
    'FlightPath',
    'MalformedRecordError',
    'TelemetryLogFile',
    'TelemetryRecord',
    'write_flight_path',
]
