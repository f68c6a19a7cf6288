"""
Exceptions raised while talking to the device.

Both classes are scoped to a single collection cycle: the exposition
layer catches them, marks the scrape as down and keeps serving.
"""

from __future__ import annotations

from typing import Optional


class AwairExporterError(Exception):
    """Base class for every failure of one collection cycle."""

    def __init__(self, host: str, message: str):
        self.host = host
        self.message = message
        super().__init__(f"{host}: {message}")


class TransportError(AwairExporterError):
    """Request could not be built, sent, or its body read."""


class DeviceStatusError(TransportError):
    """Device answered, but with a 4xx/5xx status."""

    def __init__(self, host: str, status_code: int, reason: Optional[str] = None):
        self.status_code = status_code
        detail = f"device returned HTTP {status_code}"
        if reason:
            detail += f" {reason}"
        super().__init__(host, detail)


class DecodeError(AwairExporterError):
    """Response body is not a usable air-data JSON object."""
