"""
handling of log lines reporting no GPS fix (latitude, longitude, and altitude all zero)
"""

from enum import Enum
from functools import partial, reduce
from typing import Iterable, NamedTuple, Optional, Tuple

from bppcell.records import TelemetryRecord


class FilterPolicy(Enum):
    # repeat the last valid coordinate in place of the missing fix
    carry_forward = 'carry_forward'
    # leave the missing fix out of the path
    drop = 'drop'

    def __str__(self) -> str:
        return self.value


DEFAULT_FILTER_POLICY = FilterPolicy.carry_forward


class PathAccumulator(NamedTuple):
    last_valid: Optional[TelemetryRecord] = None
    emitted: Tuple[TelemetryRecord, ...] = ()
    missing_fixes: int = 0


def accumulate(
    accumulator: PathAccumulator,
    record: TelemetryRecord,
    policy: FilterPolicy = DEFAULT_FILTER_POLICY,
) -> PathAccumulator:
    """
    add a single record to the path

    :param accumulator: path so far, with the last record that had a fix
    :param record: next record in file order
    :param policy: handling of records without a fix
    :return: updated path
    """

    if record.has_fix:
        return PathAccumulator(record, accumulator.emitted + (record,), accumulator.missing_fixes)

    missing_fixes = accumulator.missing_fixes + 1
    if policy == FilterPolicy.carry_forward and accumulator.last_valid is not None:
        substitute = record.with_coordinates(accumulator.last_valid.coordinates)
        return PathAccumulator(
            accumulator.last_valid, accumulator.emitted + (substitute,), missing_fixes
        )
    return PathAccumulator(accumulator.last_valid, accumulator.emitted, missing_fixes)


def filter_records(
    records: Iterable[TelemetryRecord], policy: FilterPolicy = None
) -> PathAccumulator:
    if policy is None:
        policy = DEFAULT_FILTER_POLICY
    elif not isinstance(policy, FilterPolicy):
        policy = FilterPolicy(policy)
    return reduce(partial(accumulate, policy=policy), records, PathAccumulator())
