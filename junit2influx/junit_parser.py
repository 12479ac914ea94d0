"""JUnit XML report parser.

Decodes a whole ``<testsuites>`` document into :class:`TestSuites`. Only the
recognised shape is read::

    <testsuites>
      <testsuite name=".." tests=".." failures=".." time="..">
        <properties><property name=".." value=".."/></properties>
        <testcase classname=".." name=".." time=".."/>
      </testsuite>
    </testsuites>

Anything else (failure bodies, system-out, extra attributes) is ignored.
"""

import logging
import xml.etree.ElementTree as ET
from pathlib import Path
from typing import BinaryIO, Union

from .errors import DecodeError, FileOpenError
from .models import Property, TestCase, TestSuite, TestSuites

logger = logging.getLogger(__name__)

ROOT_TAG = "testsuites"


class JUnitParser:
    """Parser for JUnit XML test reports."""

    def parse_file(self, path: Union[str, Path]) -> TestSuites:
        """Open and decode one report file.

        Raises:
            FileOpenError: if the file cannot be opened.
            DecodeError: if the contents are not a valid report.
        """
        logger.debug(f"Parsing {path}")
        try:
            handle = open(path, "rb")
        except OSError as e:
            raise FileOpenError(f"Unable to open file: {e}") from e
        with handle:
            return self.parse(handle, str(path))

    def parse(self, stream: BinaryIO, source: str = "<stream>") -> TestSuites:
        """Decode a report from a binary stream; ``source`` names it in errors."""
        try:
            root = ET.parse(stream).getroot()
        except ET.ParseError as e:
            raise DecodeError(f"Unable to decode file {source}: {e}") from e
        except OSError as e:
            raise FileOpenError(f"Unable to read file {source}: {e}") from e

        if root.tag != ROOT_TAG:
            raise DecodeError(
                f"Unable to decode file {source}: expected element type "
                f"<{ROOT_TAG}> but have <{root.tag}>"
            )

        try:
            return TestSuites(suites=[self._parse_suite(el) for el in root.findall("testsuite")])
        except ValueError as e:
            raise DecodeError(f"Unable to decode file {source}: {e}") from e

    def _parse_suite(self, element: ET.Element) -> TestSuite:
        properties = [
            Property(name=prop.get("name", ""), value=prop.get("value", ""))
            for prop in element.findall("properties/property")
        ]
        return TestSuite(
            name=element.get("name", ""),
            tests=_int_attr(element, "tests"),
            failures=_int_attr(element, "failures"),
            duration=_float_attr(element, "time"),
            properties=properties,
            test_cases=[self._parse_case(tc) for tc in element.findall("testcase")],
        )

    def _parse_case(self, element: ET.Element) -> TestCase:
        return TestCase(
            name=element.get("name", ""),
            classname=element.get("classname", ""),
            duration=_float_attr(element, "time"),
        )


def _int_attr(element: ET.Element, name: str) -> int:
    raw = element.get(name, "").strip()
    if not raw:
        return 0
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"invalid integer {raw!r} in {element.tag}@{name}") from None


def _float_attr(element: ET.Element, name: str) -> float:
    raw = element.get(name, "").strip()
    if not raw:
        return 0.0
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"invalid number {raw!r} in {element.tag}@{name}") from None
