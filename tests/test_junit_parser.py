import io
from pathlib import Path

import pytest

from junit2influx.errors import DecodeError, FileOpenError
from junit2influx.junit_parser import JUnitParser
from junit2influx.models import Property, TestCase as Case


REPORT = """<?xml version="1.0" encoding="UTF-8"?>
<testsuites>
  <testsuite name="api" tests="3" failures="1" time="2.5">
    <properties>
      <property name="python" value="3.12"/>
      <property name="os" value="linux"/>
    </properties>
    <testcase classname="api.Health" name="test_ok" time="0.25"/>
    <testcase classname="api.Health" name="test_fail" time="1.0">
      <failure message="boom">trace</failure>
    </testcase>
  </testsuite>
  <testsuite name="cli">
    <testcase name="test_help"/>
  </testsuite>
</testsuites>
"""


def _write(tmp_path, text: str) -> Path:
    path = tmp_path / "report.xml"
    path.write_text(text, encoding="utf-8")
    return path


def test_parse_file_reads_suites_properties_and_cases(tmp_path):
    report = JUnitParser().parse_file(_write(tmp_path, REPORT))

    assert [s.name for s in report.suites] == ["api", "cli"]
    api = report.suites[0]
    assert api.tests == 3
    assert api.failures == 1
    assert api.duration == 2.5
    assert api.properties == [
        Property(name="python", value="3.12"),
        Property(name="os", value="linux"),
    ]
    assert api.test_cases == [
        Case(name="test_ok", classname="api.Health", duration=0.25),
        Case(name="test_fail", classname="api.Health", duration=1.0),
    ]
    assert report.case_count == 3


def test_missing_attributes_default_to_zero_values(tmp_path):
    report = JUnitParser().parse_file(_write(tmp_path, REPORT))

    cli = report.suites[1]
    assert cli.tests == 0
    assert cli.failures == 0
    assert cli.duration == 0.0
    assert cli.properties == []
    assert cli.test_cases == [Case(name="test_help", classname="", duration=0.0)]


def test_tests_count_is_not_checked_against_cases():
    xml = b'<testsuites><testsuite name="s" tests="10"><testcase name="a"/></testsuite></testsuites>'

    report = JUnitParser().parse(io.BytesIO(xml))

    assert report.suites[0].tests == 10
    assert report.case_count == 1


def test_empty_and_padded_numbers_are_accepted():
    xml = b'<testsuites><testsuite tests="" time=" 1.5 "><testcase time=" 2 "/></testsuite></testsuites>'

    suite = JUnitParser().parse(io.BytesIO(xml)).suites[0]

    assert suite.tests == 0
    assert suite.duration == 1.5
    assert suite.test_cases[0].duration == 2.0


def test_unknown_elements_are_ignored():
    xml = b"""<testsuites extra="x">
      <metadata><testcase name="not-in-a-suite"/></metadata>
      <testsuite name="s" hostname="box">
        <system-out>noise</system-out>
        <testcase name="a" time="0.1" file="a.py"><skipped/></testcase>
      </testsuite>
    </testsuites>"""

    report = JUnitParser().parse(io.BytesIO(xml))

    assert len(report.suites) == 1
    assert [tc.name for tc in report.suites[0].test_cases] == ["a"]


def test_empty_root_has_no_suites():
    report = JUnitParser().parse(io.BytesIO(b"<testsuites/>"))

    assert report.suites == []
    assert report.case_count == 0


def test_malformed_xml_names_the_file(tmp_path):
    path = _write(tmp_path, "<testsuites><testsuite name='a'>")

    with pytest.raises(DecodeError) as excinfo:
        JUnitParser().parse_file(path)

    assert str(path) in str(excinfo.value)


def test_wrong_root_element_is_rejected():
    with pytest.raises(DecodeError, match="expected element type <testsuites> but have <testsuite>"):
        JUnitParser().parse(io.BytesIO(b'<testsuite name="a"/>'), "single.xml")


def test_non_numeric_time_is_rejected():
    xml = b'<testsuites><testsuite><testcase name="a" time="fast"/></testsuite></testsuites>'

    with pytest.raises(DecodeError, match="bad.xml"):
        JUnitParser().parse(io.BytesIO(xml), "bad.xml")


def test_missing_file_raises_file_open_error(tmp_path):
    with pytest.raises(FileOpenError, match="Unable to open file"):
        JUnitParser().parse_file(tmp_path / "missing.xml")
