"""
constants describing the BPPCELL GPS log layout and the KML output
"""

import re
from types import MappingProxyType

# each line is time, latitude, longitude, altitude, cell signal quality (CSQ); indices are 0-based
TIME_INDEX = 0
LATITUDE_INDEX = 1
LONGITUDE_INDEX = 2
ALTITUDE_INDEX = 3
SIGNAL_QUALITY_INDEX = 4
MINIMUM_FIELDS = ALTITUDE_INDEX + 1
FIELD_SEPARATOR = ','

KML_NAMESPACE = 'http://www.opengis.net/kml/2.2'
KML_STANDARD = f'{{{KML_NAMESPACE}}}'
KML_EXTENSION = '.kml'
DOCUMENT_ID = 'aprs'

DEFAULT_STYLE = MappingProxyType(
    {
        'id': 'aprsformat',
        'line_color': '7fff7200',
        'line_width': 0.25,
        'polygon_color': '40ff7200',
    }
)

# integer digits and decimal places of each formatted coordinate (`00.000000` / `00000.0`)
LONLAT_FORMAT = (2, 6)
ALTITUDE_FORMAT = (5, 1)

HELP_FLAGS = frozenset(('-?', '-h', '-H', '--help'))

# characters rejected in an output filename
INVALID_PATH_CHARACTERS = frozenset('"<>|\0' + ''.join(chr(code) for code in range(1, 32)))

# characters that cannot appear in an XML 1.0 document
XML_INCOMPATIBLE_CHARACTERS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\ud800-\udfff\ufffe\uffff]')

HELP_TEXT = (
    '\nUniversity of Maryland Balloon Payload Program Cell Module KML Converter.\n'
    'Processes output from command module cell modem (BPPCELL) GPS logs into KML files for Google Earth.\n'
    'Takes one to three arguments.\n'
    'First argument is the input filename. '
    'This file must be a valid cell module GPS log file (default name DATALOG.txt).\n'
    'Second (optional) argument is the flight name/number. This defaults to the input filename.\n'
    'Third (optional) argument is the output filename. This defaults to <inputfilename>.kml\n'
    '\n'
    'Options:\n'
    '  -f, --force             overwrite an existing output file without asking\n'
    '  --policy [carry_forward|drop]\n'
    '                          handling of lines without a GPS fix (default: carry_forward)\n'
    '  --header-lines N        number of lines to skip at the start of the log\n'
    '  --config FILE           YAML configuration file\n'
    '  --log FILE              path to log file to save log messages\n'
    '  -?, -h, -H, --help      show this message and exit'
)
