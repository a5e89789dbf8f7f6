from os import PathLike
from pathlib import Path
from typing import Mapping, Union

import humanize

from bppcell.constants import (
    INVALID_PATH_CHARACTERS,
    KML_EXTENSION,
    XML_INCOMPATIBLE_CHARACTERS,
)
from bppcell.filtering import FilterPolicy
from bppcell.tracks import FlightPath
from bppcell.utilities import get_logger
from bppcell.writer import format_coordinates, write_flight_path

LOGGER = get_logger('bppcell')


class UsageError(ValueError):
    pass


class InvalidOutputPathError(UsageError):
    pass


class InvalidFlightNameError(UsageError):
    pass


class OverwriteDeclined(Exception):
    pass


def output_filename_for(
    input_filename: Union[PathLike, str], output_filename: Union[PathLike, str] = None
) -> Path:
    """
    Determine the KML filename to write; the extension is always replaced with `.kml`.

    :param input_filename: path to input log
    :param output_filename: requested output path, defaults to the input path
    :return: path to output KML file
    """

    if output_filename is None:
        output_filename = Path(input_filename)
    else:
        invalid_characters = sorted(set(str(output_filename)) & INVALID_PATH_CHARACTERS)
        if len(invalid_characters) > 0 or len(str(output_filename).strip()) == 0:
            raise InvalidOutputPathError(
                f'invalid output filename "{output_filename}"'
                + (f' - contains {invalid_characters}' if len(invalid_characters) > 0 else '')
            )
        output_filename = Path(output_filename).expanduser()

    if output_filename.name in ('', '.', '..') or output_filename.is_dir():
        raise InvalidOutputPathError(f'output filename "{output_filename}" is a directory')

    return output_filename.with_suffix(KML_EXTENSION)


def flight_name_for(input_filename: Union[PathLike, str], flight_name: str = None) -> str:
    """ flight name written to the KML document, defaulting to the input filename without extension """

    if flight_name is None:
        flight_name = Path(input_filename).stem
    invalid_characters = XML_INCOMPATIBLE_CHARACTERS.findall(flight_name)
    if len(invalid_characters) > 0:
        raise InvalidFlightNameError(
            f'invalid flight name {repr(flight_name)} - contains {sorted(set(invalid_characters))}'
        )
    return flight_name


def convert_log(
    input_filename: PathLike,
    flight_name: str = None,
    output_filename: PathLike = None,
    overwrite: bool = False,
    policy: FilterPolicy = None,
    header_lines: int = 0,
    style: Mapping = None,
) -> FlightPath:
    """
    convert a BPPCELL GPS log into a KML file of the flight path and landing site

    :param input_filename: path to GPS log
    :param flight_name: name of flight, defaults to the name of the input file
    :param output_filename: path to output KML file, defaults to `<input>.kml`
    :param overwrite: whether to replace an existing output file
    :param policy: handling of lines without a GPS fix
    :param header_lines: number of lines to skip at the start of the log
    :param style: KML style overrides
    :return: flight path that was written
    """

    if not isinstance(input_filename, Path):
        input_filename = Path(input_filename)
    output_filename = output_filename_for(input_filename, output_filename)
    flight_name = flight_name_for(input_filename, flight_name)

    if output_filename.exists() and not overwrite:
        raise OverwriteDeclined(f'output file "{output_filename}" already exists')

    LOGGER.info(f'reading GPS log {input_filename}')
    flight_path = FlightPath.from_file(
        input_filename, name=flight_name, policy=policy, header_lines=header_lines
    )

    if len(flight_path) == 0:
        LOGGER.warning(f'no GPS fixes found in {input_filename}')
    else:
        LOGGER.info(
            f'{flight_name} - {len(flight_path)} coordinates'
            f'; {flight_path.missing_fixes} lines without GPS fix'
            f'; max altitude: {flight_path.max_altitude:.1f} m'
            f'; landing site: {format_coordinates(flight_path.landing_site)}'
        )

    write_flight_path(flight_path, output_filename, style=style)
    LOGGER.info(
        f'wrote {humanize.naturalsize(output_filename.stat().st_size)} to {output_filename}'
    )

    return flight_path
