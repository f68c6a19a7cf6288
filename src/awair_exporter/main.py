"""
awair-exporter entry point.

Usage:
    awair-exporter 10.0.0.5                  Serve /metrics on :2112
    awair-exporter -l 127.0.0.1:9101 awair   Custom listen address
    awair-exporter --once 10.0.0.5           Print one reading and exit
"""

from __future__ import annotations

import logging

import click

from awair_exporter import __version__
from awair_exporter.config import DEFAULT_LISTEN_ADDRESS, DEFAULT_TIMEOUT_SECONDS, ExporterConfig
from awair_exporter.errors import AwairExporterError
from awair_exporter.metrics import DEFAULT_NAMESPACE
from awair_exporter.server import build_collector, serve


log = logging.getLogger("awair_exporter")


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="awair-exporter")
@click.argument("hostname", metavar="HOSTNAME_TO_QUERY")
@click.option("-l", "--listen", "listen_address", default=DEFAULT_LISTEN_ADDRESS,
              envvar="AWAIR_LISTEN_ADDRESS", show_default=True, help="Listen Address")
@click.option("--timeout", default=DEFAULT_TIMEOUT_SECONDS, type=float, envvar="AWAIR_TIMEOUT",
              show_default=True, help="Per-scrape device request timeout in seconds")
@click.option("--ignore-status", is_flag=True, default=False,
              help="Decode the device response even on HTTP 4xx/5xx")
@click.option("--once", is_flag=True, default=False,
              help="Fetch a single reading, print it as a table and exit")
@click.option("--namespace", default=DEFAULT_NAMESPACE, envvar="AWAIR_NAMESPACE", show_default=True,
              help="Prefix for every exported metric name")
@click.option("--verbose", is_flag=True, default=False, help="Enable debug logging")
def cli(hostname: str, listen_address: str, timeout: float, ignore_status: bool,
        once: bool, namespace: str, verbose: bool):
    """Prometheus exporter for the Awair Element local API."""
    config = ExporterConfig(
        host=hostname,
        listen_address=listen_address,
        timeout_seconds=timeout,
        check_status=not ignore_status,
        namespace=namespace,
        verbose=verbose,
    )
    _setup_logging(config)

    try:
        config.validate()
    except ValueError as e:
        raise click.UsageError(str(e))

    if once:
        _print_once(config)
        return

    serve(config)


def _setup_logging(config: ExporterConfig):
    logging.basicConfig(
        level=logging.DEBUG if config.verbose else logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if config.verbose else logging.WARNING)


def _print_once(config: ExporterConfig):
    from awair_exporter.dashboard.terminal import print_sample

    collector = build_collector(config)
    try:
        sample = collector.read_sample()
    except AwairExporterError as e:
        log.error("Could not read %s: %s", config.host, e.message)
        raise SystemExit(1)
    finally:
        collector.close()

    print_sample(sample, collector.describe())


if __name__ == "__main__":
    cli()
