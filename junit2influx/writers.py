"""Destinations for measurement points: stdout or an InfluxDB server."""

import logging
from typing import Optional, TextIO
from urllib.parse import urlparse

import requests
from influxdb import InfluxDBClient
from influxdb.exceptions import InfluxDBClientError, InfluxDBServerError

from .errors import ConfigurationError, TransmissionError
from .points import MeasurementPoint

logger = logging.getLogger(__name__)

USER_AGENT = "junit2influx/0.1.0"


class PrintPointsWriter:
    """Writes each point as a line of line protocol as soon as it arrives."""

    def __init__(self, stream: TextIO):
        self.stream = stream

    def write(self, point: MeasurementPoint) -> None:
        print(point.to_line(), file=self.stream)

    def flush(self) -> None:
        pass


class InfluxDBPointsWriter:
    """Buffers points and sends them to InfluxDB in one request per flush."""

    def __init__(self, client: InfluxDBClient, database: str = "", retention_policy: str = ""):
        self.client = client
        self.database = database
        self.retention_policy = retention_policy
        self.batch: list[MeasurementPoint] = []

    def write(self, point: MeasurementPoint) -> None:
        self.batch.append(point)

    def flush(self) -> None:
        """Send the accumulated batch and clear it once the server accepts it.

        Raises:
            TransmissionError: if the write is rejected or the server is
                unreachable. The batch is left untouched.
        """
        if not self.batch:
            logger.debug("No points to write, skipping flush")
            return

        try:
            self.client.write_points(
                [point.to_dict() for point in self.batch],
                database=self.database or None,
                retention_policy=self.retention_policy or None,
            )
        except (InfluxDBClientError, InfluxDBServerError, requests.RequestException) as e:
            raise TransmissionError(f"Could not write points: {e}") from e

        logger.info(
            f"Wrote {len(self.batch)} points to database {self.database!r}"
            + (f" (retention policy {self.retention_policy!r})" if self.retention_policy else "")
        )
        self.batch.clear()


def create_influxdb_client(host: str, database: str = "",
                           username: Optional[str] = None,
                           password: Optional[str] = None) -> InfluxDBClient:
    """Build an InfluxDB client from a server URL such as ``http://localhost:8086``.

    The client makes a single attempt per write; failures are not retried.

    Raises:
        ConfigurationError: if the URL is not http(s) or has no host.
    """
    parsed = urlparse(host)
    if parsed.scheme not in ("http", "https"):
        raise ConfigurationError(
            f"Could not create HTTP client: unsupported protocol scheme {parsed.scheme!r} in {host!r}"
        )
    if not parsed.hostname:
        raise ConfigurationError(f"Could not create HTTP client: no host in {host!r}")
    ssl = parsed.scheme == "https"
    try:
        port = parsed.port or (443 if ssl else 80)
    except ValueError as e:
        raise ConfigurationError(f"Could not create HTTP client: {e}") from e

    # InfluxDBClient joins host and port as text; IPv6 literals need their brackets back.
    hostname = f"[{parsed.hostname}]" if ":" in parsed.hostname else parsed.hostname

    session = requests.Session()
    session.headers.update({"User-Agent": USER_AGENT})

    kwargs = {}
    if username is not None:
        kwargs["username"] = username
    if password is not None:
        kwargs["password"] = password

    logger.debug(f"Connecting to InfluxDB at {parsed.scheme}://{hostname}:{port}{parsed.path}")
    return InfluxDBClient(
        host=hostname,
        port=port,
        database=database or None,
        ssl=ssl,
        verify_ssl=ssl,
        retries=1,
        path=parsed.path.rstrip("/"),
        session=session,
        **kwargs,
    )
