from typing import Any

import numpy

from bppcell.constants import (
    ALTITUDE_INDEX,
    FIELD_SEPARATOR,
    LATITUDE_INDEX,
    LONGITUDE_INDEX,
    MINIMUM_FIELDS,
    SIGNAL_QUALITY_INDEX,
    TIME_INDEX,
)


class MalformedRecordError(ValueError):
    def __init__(self, message: str, line_number: int = None, line: str = None):
        if line_number is not None:
            message = f'line {line_number}: {message}'
        super().__init__(message)
        self.line_number = line_number
        self.line = line


class TelemetryRecord:
    """ single line of a BPPCELL GPS log, encoding (x, y, z) as (longitude, latitude, altitude) """

    def __init__(
        self,
        time: str,
        latitude: float,
        longitude: float,
        altitude: float,
        signal_quality: str = None,
        line_number: int = None,
    ):
        self.time = time
        self.coordinates = numpy.array((longitude, latitude, altitude), dtype=float)
        self.signal_quality = signal_quality
        self.line_number = line_number

    @classmethod
    def from_line(cls, line: str, line_number: int = None) -> 'TelemetryRecord':
        """
        Parse a record from a comma-separated log line.

        :param line: line of text `time,latitude,longitude,altitude[,signal quality,...]`
        :param line_number: 1-based line number, used in error messages
        :return: telemetry record
        """

        fields = [field.strip() for field in line.strip().split(FIELD_SEPARATOR)]
        if len(fields) < MINIMUM_FIELDS:
            raise MalformedRecordError(
                f'expected at least {MINIMUM_FIELDS} comma-separated fields, found {len(fields)}',
                line_number,
                line,
            )

        values = {}
        for name, index in (
            ('latitude', LATITUDE_INDEX),
            ('longitude', LONGITUDE_INDEX),
            ('altitude', ALTITUDE_INDEX),
        ):
            try:
                # `float` also accepts digit separators such as `1_0`
                if '_' in fields[index]:
                    raise ValueError(fields[index])
                values[name] = float(fields[index])
            except ValueError:
                raise MalformedRecordError(
                    f'{name} "{fields[index]}" is not a number', line_number, line
                )
            if not numpy.isfinite(values[name]):
                raise MalformedRecordError(
                    f'{name} "{fields[index]}" is not a finite number', line_number, line
                )

        return cls(
            time=fields[TIME_INDEX],
            signal_quality=fields[SIGNAL_QUALITY_INDEX]
            if len(fields) > SIGNAL_QUALITY_INDEX
            else None,
            line_number=line_number,
            **values,
        )

    @property
    def longitude(self) -> float:
        return float(self.coordinates[0])

    @property
    def latitude(self) -> float:
        return float(self.coordinates[1])

    @property
    def altitude(self) -> float:
        return float(self.coordinates[2])

    @property
    def has_fix(self) -> bool:
        """ the log reports a lack of GPS lock by zeroing latitude, longitude, and altitude """
        return bool(numpy.any(self.coordinates != 0))

    def with_coordinates(self, coordinates: numpy.ndarray) -> 'TelemetryRecord':
        longitude, latitude, altitude = coordinates
        return self.__class__(
            time=self.time,
            latitude=latitude,
            longitude=longitude,
            altitude=altitude,
            signal_quality=self.signal_quality,
            line_number=self.line_number,
        )

    def __getitem__(self, field: str) -> Any:
        if field not in self:
            raise KeyError(f'"{field}" not in record')
        return getattr(self, field)

    def __contains__(self, field: str) -> bool:
        return field in (
            'time',
            'latitude',
            'longitude',
            'altitude',
            'signal_quality',
            'line_number',
            'coordinates',
        )

    def __eq__(self, other: 'TelemetryRecord') -> bool:
        if not isinstance(other, TelemetryRecord):
            return NotImplemented
        return numpy.allclose(self.coordinates, other.coordinates)

    def __str__(self) -> str:
        return f'{self.time} {self.coordinates}'

    def __repr__(self) -> str:
        return (
            f'{self.__class__.__name__}(time={repr(self.time)}, latitude={self.latitude}, '
            f'longitude={self.longitude}, altitude={self.altitude}, '
            f'signal_quality={repr(self.signal_quality)}, line_number={self.line_number})'
        )


def parse_record(line: str, line_number: int = None) -> TelemetryRecord:
    """
    Parse telemetry fields from a raw log line.

    :param line: raw log line
    :param line_number: 1-based line number of the line in its file
    :return: telemetry record
    """

    return TelemetryRecord.from_line(line, line_number)
