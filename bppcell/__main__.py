from enum import IntEnum
from pathlib import Path
import sys
from typing import List

import typer

from bppcell.configuration import ConversionConfiguration
from bppcell.constants import HELP_FLAGS, HELP_TEXT
from bppcell.conversion import (
    InvalidOutputPathError,
    LOGGER,
    OverwriteDeclined,
    UsageError,
    convert_log,
    flight_name_for,
    output_filename_for,
)
from bppcell.filtering import FilterPolicy
from bppcell.reader import InputAccessError
from bppcell.records import MalformedRecordError
from bppcell.utilities import get_logger
from bppcell.writer import OutputAccessError

OVERWRITE_PROMPT = 'Output file already exists. Overwrite? y/n'

# options that consume the following argument
VALUE_OPTIONS = ('--policy', '--header-lines', '--config', '--log')


class ExitCode(IntEnum):
    SUCCESS = 0
    USAGE = 2
    INPUT_ACCESS = 3
    INVALID_OUTPUT_PATH = 4
    OUTPUT_ACCESS = 5
    OVERWRITE_DECLINED = 6
    MALFORMED_RECORD = 7


def bppcell_command(
    input_filename: Path = typer.Argument(
        ..., help='cell module GPS log file (default name DATALOG.txt)'
    ),
    flight_name: str = typer.Argument(None, help='flight name / number (default: input filename)'),
    output_filename: str = typer.Argument(None, help='output KML filename (default: <input>.kml)'),
    force: bool = typer.Option(
        False, '--force', '-f', help='overwrite an existing output file without asking'
    ),
    policy: FilterPolicy = typer.Option(None, help='handling of lines without a GPS fix'),
    header_lines: int = typer.Option(
        None, help='number of lines to skip at the start of the log'
    ),
    configuration_filename: Path = typer.Option(None, '--config', help='YAML configuration file'),
    log_filename: Path = typer.Option(
        None, '--log', help='path to log file to save log messages'
    ),
):
    """
    convert a BPPCELL GPS log into a KML file for Google Earth
    """

    overrides = {}
    if flight_name is not None:
        overrides['flight'] = {'name': flight_name}
    if header_lines is not None:
        overrides['input'] = {'header_lines': header_lines}
    if force:
        overrides['output'] = {'overwrite': True}
    if policy is not None:
        overrides['filter'] = {'policy': policy}
    if log_filename is not None:
        overrides['log'] = {'filename': log_filename}

    try:
        if configuration_filename is not None:
            configuration = ConversionConfiguration.from_file(configuration_filename)
        else:
            configuration = ConversionConfiguration()
        configuration.update(overrides)
    except (OSError, ValueError) as error:
        LOGGER.error(f'{error.__class__.__name__} - {error}')
        raise typer.Exit(code=ExitCode.USAGE)

    if configuration['log']['filename'] is not None:
        get_logger(LOGGER.name, log_filename=configuration['log']['filename'])

    if not input_filename.is_file():
        typer.echo('You appear to have provided an invalid input file name. Please try again.')
        typer.echo(HELP_TEXT)
        raise typer.Exit(code=ExitCode.INPUT_ACCESS)

    if output_filename is None and configuration['output']['filename'] is not None:
        output_filename = str(configuration['output']['filename'])

    try:
        output_filename = output_filename_for(input_filename, output_filename)
    except InvalidOutputPathError as error:
        LOGGER.debug(f'{error.__class__.__name__} - {error}')
        typer.echo('You appear to have provided an invalid output file name. Please try again.')
        typer.echo(HELP_TEXT)
        raise typer.Exit(code=ExitCode.INVALID_OUTPUT_PATH)

    try:
        flight_name = flight_name_for(input_filename, configuration['flight']['name'])
    except UsageError as error:
        LOGGER.error(f'{error.__class__.__name__} - {error}')
        raise typer.Exit(code=ExitCode.USAGE)

    overwrite = configuration['output']['overwrite']
    if output_filename.exists() and not overwrite:
        overwrite = confirm_overwrite()
        if not overwrite:
            raise typer.Exit(code=ExitCode.OVERWRITE_DECLINED)

    try:
        convert_log(
            input_filename,
            flight_name=flight_name,
            output_filename=output_filename,
            overwrite=overwrite,
            policy=configuration['filter']['policy'],
            header_lines=configuration['input']['header_lines'],
            style=configuration['style'],
        )
    except InputAccessError as error:
        LOGGER.error(f'{error.__class__.__name__} - {error}')
        typer.echo(HELP_TEXT)
        raise typer.Exit(code=ExitCode.INPUT_ACCESS)
    except MalformedRecordError as error:
        LOGGER.error(f'{error.__class__.__name__} - {error}')
        raise typer.Exit(code=ExitCode.MALFORMED_RECORD)
    except OutputAccessError as error:
        LOGGER.error(f'{error.__class__.__name__} - {error}')
        raise typer.Exit(code=ExitCode.OUTPUT_ACCESS)
    except OverwriteDeclined:
        raise typer.Exit(code=ExitCode.OVERWRITE_DECLINED)


def confirm_overwrite() -> bool:
    try:
        response = typer.prompt(OVERWRITE_PROMPT, default='', show_default=False)
    except typer.Abort:
        return False
    return response.strip()[:1].lower() == 'y'


def requests_help(arguments: List[str]) -> bool:
    return any(argument in HELP_FLAGS for argument in arguments)


def positional_arguments(arguments: List[str]) -> List[str]:
    positional = []
    skip_next = False
    for argument in arguments:
        if skip_next:
            skip_next = False
        elif argument in VALUE_OPTIONS:
            skip_next = True
        elif not argument.startswith('-') or argument == '-':
            positional.append(argument)
    return positional


app = typer.Typer(add_completion=False)
app.command()(bppcell_command)


def main(arguments: List[str] = None):
    if arguments is None:
        arguments = sys.argv[1:]

    if requests_help(arguments):
        typer.echo(HELP_TEXT)
        sys.exit(ExitCode.SUCCESS)

    if not 1 <= len(positional_arguments(arguments)) <= 3:
        typer.echo(HELP_TEXT)
        sys.exit(ExitCode.USAGE)

    app(args=arguments, prog_name='bppcell')


if __name__ == '__main__':
    main()
