#!/usr/bin/env python3
"""CLI for converting JUnit XML reports into InfluxDB points."""

import argparse
import datetime as dt
import logging
import sys

from junit2influx.config import (
    DEFAULT_HOST,
    get_credentials,
    get_default_database,
    get_default_host,
    get_default_retention_policy,
    load_config,
)
from junit2influx.converter import convert_files
from junit2influx.errors import ConfigurationError, Junit2InfluxError
from junit2influx.writers import InfluxDBPointsWriter, PrintPointsWriter, create_influxdb_client

logger = logging.getLogger(__name__)


class _ArgumentParser(argparse.ArgumentParser):
    """Reports usage errors with exit status 1 like every other failure."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"Error: {message}\n")


def setup_logging(verbose: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(levelname)s: %(message)s'
    )


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        description='Write JUnit XML test results to InfluxDB',
    )
    parser.add_argument('files', nargs='*', metavar='FILE', help='JUnit XML report(s)')
    parser.add_argument('--host', '-H',
                        help=f'influxdb server to write to (default: $INFLUXDB_HOST or {DEFAULT_HOST})')
    parser.add_argument('--database', '-d',
                        help='influxdb database (default: $INFLUXDB_DATABASE)')
    parser.add_argument('--retention-policy', '-r',
                        help='influxdb retention policy (default: $INFLUXDB_RETENTION_POLICY)')
    parser.add_argument('--print', action='store_true',
                        help='print the line protocol instead of writing to the server')
    parser.add_argument('-v', '--verbose', action='store_true')
    return parser


def apply_config_defaults(args, config: dict):
    """Fill options not given on the command line from the environment and .env."""
    if args.host is None:
        args.host = get_default_host(config)
    if args.database is None:
        args.database = get_default_database(config)
    if args.retention_policy is None:
        args.retention_policy = get_default_retention_policy(config)
    return args


def make_writer(args, config: dict):
    """Pick the stdout writer or the InfluxDB writer from the parsed arguments."""
    if args.print:
        return PrintPointsWriter(sys.stdout)
    username, password = get_credentials(config)
    client = create_influxdb_client(args.host, database=args.database,
                                    username=username, password=password)
    return InfluxDBPointsWriter(client, database=args.database,
                                retention_policy=args.retention_policy)


def main(argv=None):
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose)

    now = dt.datetime.now(dt.timezone.utc)
    try:
        if not args.files:
            raise ConfigurationError("Must specify at least one argument.")
        config = load_config()
        apply_config_defaults(args, config)
        writer = make_writer(args, config)
        total = convert_files(args.files, writer, now)
    except Junit2InfluxError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logger.debug(f"Converted {total} test cases from {len(args.files)} file(s)")
    return 0


if __name__ == '__main__':
    sys.exit(main())
