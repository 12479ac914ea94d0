"""Mapping of JUnit test cases onto InfluxDB measurement points."""

import datetime as dt
import math
from dataclasses import dataclass, field
from typing import Any

from influxdb.line_protocol import make_lines

from .errors import PointConstructionError
from .models import TestCase, TestSuite

MEASUREMENT = "junit_test_results"

_EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)


@dataclass
class MeasurementPoint:
    """One line of line protocol: measurement, tags, fields and a timestamp."""
    measurement: str
    time: dt.datetime
    tags: dict[str, str] = field(default_factory=dict)
    fields: dict[str, float] = field(default_factory=dict)

    @property
    def time_ns(self) -> int:
        return to_nanoseconds(self.time)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON point shape accepted by ``InfluxDBClient.write_points``."""
        return {
            "measurement": self.measurement,
            "tags": dict(self.tags),
            "fields": dict(self.fields),
            "time": self.time_ns,
        }

    def to_line(self) -> str:
        """Render the point as a single line of line protocol, without newline."""
        return make_lines({"points": [self.to_dict()]}).rstrip("\n")


def to_nanoseconds(timestamp: dt.datetime) -> int:
    """Nanoseconds since the Unix epoch; naive datetimes are taken as UTC."""
    if timestamp.tzinfo is None:
        timestamp = timestamp.replace(tzinfo=dt.timezone.utc)
    return (timestamp - _EPOCH) // dt.timedelta(microseconds=1) * 1000


def make_point(suite: TestSuite, case: TestCase, timestamp: dt.datetime) -> MeasurementPoint:
    """Build the point for one test case.

    The timestamp is the run's collection time, shared by every point.

    Raises:
        PointConstructionError: if the duration is NaN or infinite, which the
            line protocol cannot carry.
    """
    duration = float(case.duration)
    if not math.isfinite(duration):
        raise PointConstructionError(
            f"Could not create point for {suite.name}/{case.name}: "
            f"{duration} is an unsupported value for field duration"
        )
    return MeasurementPoint(
        measurement=MEASUREMENT,
        time=timestamp,
        tags={
            "suite_name": suite.name,
            "test_name": case.name,
        },
        fields={"duration": duration},
    )
