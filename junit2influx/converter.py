"""
Conversion of JUnit report files into measurement points.

Shared by the CLI; contains the per-file read, map, write and flush sequence.
"""

import datetime as dt
import logging
from pathlib import Path
from typing import Iterable, Optional, Protocol, Union

from .errors import ConfigurationError
from .junit_parser import JUnitParser
from .models import TestSuites
from .points import MeasurementPoint, make_point

logger = logging.getLogger(__name__)


class PointsWriter(Protocol):
    def write(self, point: MeasurementPoint) -> None: ...

    def flush(self) -> None: ...


def map_points(report: TestSuites, timestamp: dt.datetime) -> list[MeasurementPoint]:
    """One point per test case, in document order."""
    return [
        make_point(suite, case, timestamp)
        for suite in report.suites
        for case in suite.test_cases
    ]


def convert_file(path: Union[str, Path], writer: PointsWriter,
                 timestamp: dt.datetime, parser: JUnitParser) -> int:
    """Parse one report, write its points and flush the writer.

    Every point is built before the first write, so a file that fails to map
    writes nothing.

    Returns:
        Number of points written.
    """
    report = parser.parse_file(path)
    points = map_points(report, timestamp)
    logger.info(f"Mapped {report.case_count} test cases from {len(report.suites)} suites in {path}")

    for point in points:
        writer.write(point)
    writer.flush()
    return len(points)


def convert_files(paths: Iterable[Union[str, Path]], writer: PointsWriter,
                  timestamp: dt.datetime, parser: Optional[JUnitParser] = None) -> int:
    """Convert each report in order; the first error aborts the run.

    Files flushed before the failing one stay written.

    Raises:
        ConfigurationError: if ``paths`` is empty.
    """
    paths = list(paths)
    if not paths:
        raise ConfigurationError("Must specify at least one argument.")

    parser = parser or JUnitParser()
    total = 0
    for path in paths:
        total += convert_file(path, writer, timestamp, parser)
    return total
