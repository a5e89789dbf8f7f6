from os import PathLike
from typing import Iterable, List, Union

import numpy

from bppcell.filtering import FilterPolicy, PathAccumulator, filter_records
from bppcell.reader import TelemetryLogFile
from bppcell.records import TelemetryRecord

# coordinates given to the landing site of a flight without a single GPS fix
NO_FIX_COORDINATES = (0.0, 0.0, 0.0)


class FlightPath:
    """
    accepted telemetry records of a single flight, in file order
    """

    def __init__(
        self,
        records: Iterable[TelemetryRecord] = None,
        name: str = None,
        landing_site: TelemetryRecord = None,
        missing_fixes: int = 0,
    ):
        """
        :param records: records along the path
        :param name: name of flight
        :param landing_site: last record with a GPS fix, if different from the last record
        :param missing_fixes: number of log lines that reported no GPS fix
        """

        if name is None:
            name = 'flight'
        elif not isinstance(name, str):
            name = str(name)

        self.name = name
        self.records = list(records) if records is not None else []
        self.missing_fixes = missing_fixes
        self.__landing_site = landing_site

    @classmethod
    def from_accumulator(cls, accumulator: PathAccumulator, name: str = None) -> 'FlightPath':
        return cls(
            accumulator.emitted,
            name=name,
            landing_site=accumulator.last_valid,
            missing_fixes=accumulator.missing_fixes,
        )

    @classmethod
    def from_records(
        cls, records: Iterable[TelemetryRecord], name: str = None, policy: FilterPolicy = None,
    ) -> 'FlightPath':
        return cls.from_accumulator(filter_records(records, policy), name=name)

    @classmethod
    def from_file(
        cls,
        filename: PathLike,
        name: str = None,
        policy: FilterPolicy = None,
        header_lines: int = 0,
    ) -> 'FlightPath':
        """
        read a flight path from a BPPCELL GPS log

        :param filename: path to log file (or open text stream)
        :param name: name of flight
        :param policy: handling of lines without a GPS fix
        :param header_lines: number of lines to skip at the start of the log
        :return: flight path
        """

        log = TelemetryLogFile(filename, header_lines=header_lines)
        return cls.from_records(log.records(), name=name, policy=policy)

    @property
    def landing_site(self) -> numpy.ndarray:
        """ (x, y, z) coordinates of the last record with a GPS fix """

        if self.__landing_site is not None:
            return self.__landing_site.coordinates
        for record in reversed(self.records):
            if record.has_fix:
                return record.coordinates
        return numpy.array(NO_FIX_COORDINATES)

    @property
    def coordinates(self) -> numpy.ndarray:
        if len(self.records) == 0:
            return numpy.empty((0, 3))
        return numpy.stack([record.coordinates for record in self.records], axis=0)

    @property
    def altitudes(self) -> numpy.ndarray:
        return self.coordinates[:, 2]

    @property
    def max_altitude(self) -> float:
        if len(self.records) == 0:
            return 0.0
        return float(numpy.max(self.altitudes))

    def __getitem__(self, index: Union[int, slice]) -> Union[TelemetryRecord, List[TelemetryRecord]]:
        return self.records[index]

    def __iter__(self):
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)

    def __repr__(self) -> str:
        return f'{self.__class__.__name__}({repr(self.records)}, name={repr(self.name)})'

    def __str__(self) -> str:
        return f'{self.name}: {len(self)} records, landing site {self.landing_site}'
