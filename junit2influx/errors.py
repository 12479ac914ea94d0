"""Exceptions raised while converting JUnit reports into InfluxDB points."""


class Junit2InfluxError(Exception):
    """Base class for every failure that aborts a conversion run."""


class ConfigurationError(Junit2InfluxError):
    """Bad command line arguments or settings."""


class FileOpenError(Junit2InfluxError):
    """A report file could not be opened or read."""


class DecodeError(Junit2InfluxError):
    """A report file is not a well-formed JUnit document."""


class PointConstructionError(Junit2InfluxError):
    """A test case cannot be represented as a measurement point."""


class TransmissionError(Junit2InfluxError):
    """The InfluxDB server rejected a batch or could not be reached."""
