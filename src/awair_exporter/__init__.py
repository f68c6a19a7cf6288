"""Prometheus exporter for the Awair Element local air-data API."""

__version__ = "0.2.0"
