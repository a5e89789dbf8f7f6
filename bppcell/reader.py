from io import StringIO, TextIOBase
from os import PathLike
from pathlib import Path
from typing import Generator, Tuple, Union

from bppcell.records import TelemetryRecord, parse_record


class InputAccessError(OSError):
    pass


class TelemetryLogFile:
    def __init__(self, file: Union[PathLike, str, StringIO, TextIOBase], header_lines: int = 0):
        """
        read telemetry records from a BPPCELL GPS log, where each line is `time,latitude,longitude,altitude,CSQ`

        :param file: path to log file, or an open text stream
        :param header_lines: number of lines preceding the telemetry to skip
        """

        if header_lines is None:
            header_lines = 0
        elif header_lines < 0:
            raise ValueError(f'number of header lines must be non-negative, not {header_lines}')

        if not isinstance(file, (StringIO, TextIOBase)):
            if isinstance(file, str):
                file = file.strip('"')
            if not isinstance(file, Path):
                file = Path(file)
            file = file.expanduser()

        self.file = file
        self.header_lines = header_lines

    @property
    def location(self) -> str:
        if isinstance(self.file, Path):
            return str(self.file)
        return getattr(self.file, 'name', self.file.__class__.__name__)

    def lines(self) -> Generator[Tuple[int, str], None, None]:
        """
        iterate over data lines from the start of the log, after the header lines

        :return: 1-based line number and line text; blank lines are only skipped at the end of the log
        """

        if isinstance(self.file, Path):
            if not self.file.is_file():
                raise InputAccessError(f'input file does not exist: "{self.file}"')
            try:
                with open(self.file, newline=None) as input_file:
                    yield from self.__data_lines(input_file)
            except (OSError, UnicodeDecodeError) as error:
                raise InputAccessError(f'could not read "{self.file}" - {error}')
        else:
            self.file.seek(0)
            yield from self.__data_lines(self.file)

    def records(self) -> Generator[TelemetryRecord, None, None]:
        for line_number, line in self.lines():
            yield parse_record(line, line_number)

    def __data_lines(self, stream) -> Generator[Tuple[int, str], None, None]:
        blank_lines = []
        for line_number, line in enumerate(stream, start=1):
            if line_number <= self.header_lines:
                continue
            line = line.rstrip('\r\n')
            if len(line.strip()) == 0:
                blank_lines.append((line_number, line))
                continue
            # a blank line followed by data is passed on to be rejected as malformed
            if len(blank_lines) > 0:
                yield blank_lines[0]
                blank_lines.clear()
            yield line_number, line

    def __iter__(self):
        yield from self.records()

    def __repr__(self):
        return f'{self.__class__.__name__}({repr(self.location)}, header_lines={self.header_lines})'
