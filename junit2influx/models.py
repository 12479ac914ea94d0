"""
Data models for decoded JUnit reports.
"""

from dataclasses import dataclass, field


@dataclass
class Property:
    """A name/value pair from a suite's <properties> block."""
    name: str = ""
    value: str = ""


@dataclass
class TestCase:
    """Represents a single test case result."""
    name: str = ""
    classname: str = ""
    duration: float = 0.0


@dataclass
class TestSuite:
    """Represents a test suite (collection of test cases)."""
    name: str = ""
    tests: int = 0
    failures: int = 0
    duration: float = 0.0
    properties: list[Property] = field(default_factory=list)
    test_cases: list[TestCase] = field(default_factory=list)


@dataclass
class TestSuites:
    """Root of one report file."""
    suites: list[TestSuite] = field(default_factory=list)

    @property
    def case_count(self) -> int:
        return sum(len(suite.test_cases) for suite in self.suites)
