"""
Core metric definitions for the Awair exporter.

The device's /air-data/latest payload is decoded into an AirSample, and
every measured field is paired with a static MetricDescriptor. The
descriptor catalog is built once at startup and handed to the collector.
"""

from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Dict, List, Tuple

from awair_exporter.errors import DecodeError


DEFAULT_NAMESPACE = "awair"
INSTANCE_LABEL = "instance"


@dataclass(frozen=True)
class MetricDescriptor:
    """Name, help text and label names of one exported gauge."""

    name: str
    help_text: str
    field: str
    label_names: Tuple[str, ...] = (INSTANCE_LABEL,)


@dataclass(frozen=True)
class MetricValue:
    descriptor: MetricDescriptor
    value: float
    label_values: Tuple[str, ...]


@dataclass(frozen=True)
class AirSample:
    """One reading from the device, decoded fresh for every scrape."""

    hostname: str

    score: float = 0.0
    dew_point: float = 0.0
    temperature: float = 0.0
    relative_humidity: float = 0.0
    absolute_humidity: float = 0.0

    # Carbon dioxide (ppm)
    carbon_dioxide: float = 0.0
    carbon_dioxide_estimate: float = 0.0
    carbon_dioxide_estimate_baseline: float = 0.0

    # Volatile organic compounds (ppb, raw sensor readings)
    volatile_organic_compounds: float = 0.0
    volatile_organic_compounds_baseline: float = 0.0
    volatile_organic_compounds_hydrogen: float = 0.0
    volatile_organic_compounds_ethanol: float = 0.0

    # Particulate matter (ug/m3)
    particulate_matter_2_5: float = 0.0
    particulate_matter_10_estimate: float = 0.0

    @classmethod
    def from_json(cls, raw: bytes, hostname: str) -> "AirSample":
        """Decode a response body. Unknown keys are ignored, absent keys read as zero."""
        try:
            payload = json.loads(raw)
        except (ValueError, UnicodeDecodeError) as e:
            raise DecodeError(hostname, f"malformed JSON: {e}") from e

        if not isinstance(payload, dict):
            raise DecodeError(hostname, f"expected a JSON object, got {type(payload).__name__}")

        values = {}
        for field_name, wire_key in WIRE_KEYS.items():
            raw_value = payload.get(wire_key)
            if raw_value is None:
                values[field_name] = 0.0
                continue
            # bool is an int subclass, but "true" is not a reading
            if isinstance(raw_value, bool) or not isinstance(raw_value, (int, float)):
                raise DecodeError(hostname, f"field {wire_key!r} is not a number: {raw_value!r}")
            try:
                value = float(raw_value)
            except OverflowError as e:
                raise DecodeError(hostname, f"field {wire_key!r} out of range: {raw_value!r}") from e
            # json accepts NaN and Infinity; the device never sends them
            if not math.isfinite(value):
                raise DecodeError(hostname, f"field {wire_key!r} is not finite: {raw_value!r}")
            values[field_name] = value

        return cls(hostname=hostname, **values)

    def as_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in WIRE_KEYS}


# Field name -> key used by the device's JSON payload
WIRE_KEYS: Dict[str, str] = {
    "score": "score",
    "dew_point": "dew_point",
    "temperature": "temp",
    "relative_humidity": "humid",
    "absolute_humidity": "abs_humid",
    "carbon_dioxide": "co2",
    "carbon_dioxide_estimate": "co2_est",
    "carbon_dioxide_estimate_baseline": "co2_est_baseline",
    "volatile_organic_compounds": "voc",
    "volatile_organic_compounds_baseline": "voc_baseline",
    "volatile_organic_compounds_hydrogen": "voc_h2_raw",
    "volatile_organic_compounds_ethanol": "voc_ethanol_raw",
    "particulate_matter_2_5": "pm25",
    "particulate_matter_10_estimate": "pm10_est",
}

# (field, metric suffix, help text), in exposition order
_GAUGES: List[Tuple[str, str, str]] = [
    ("score", "awair_score", "Awair Score."),
    ("dew_point", "dew_point",
     "Dew Point. The temperature the air needs to be cooled to (at constant pressure) "
     "in order to achieve a relative humidity of 100%."),
    ("temperature", "temperature", "Temperature."),
    ("relative_humidity", "relative_humidity", "Relative Humidity."),
    ("absolute_humidity", "absolute_humidity", "Absolute Humidity."),
    ("carbon_dioxide", "co2", "Carbon Dioxide (CO2) levels"),
    ("carbon_dioxide_estimate", "co2_estimate", "Carbon Dioxide (CO2) estimated levels"),
    ("carbon_dioxide_estimate_baseline", "co2_estimate_baseline",
     "Carbon Dioxide (CO2) estimated baseline levels"),
    ("volatile_organic_compounds", "voc", "Volatile Organic Compounds (VOC) levels"),
    ("volatile_organic_compounds_baseline", "voc_baseline",
     "Volatile Organic Compounds (VOC) baseline levels"),
    ("volatile_organic_compounds_hydrogen", "voc_h2_raw",
     "Volatile Organic Compounds (VOC) Molecular Hydrogen raw"),
    ("volatile_organic_compounds_ethanol", "voc_ethanol_raw",
     "Volatile Organic Compounds (VOC) Ethanol raw"),
    ("particulate_matter_2_5", "pm25", "Particulate Matter 2.5 micrometers or smaller"),
    ("particulate_matter_10_estimate", "pm10_estimate",
     "Particulate Matter 10 micrometers or smaller"),
]


def fq_name(*parts: str) -> str:
    """Join name parts with underscores, skipping empty ones."""
    return "_".join(p for p in parts if p)


def build_catalog(namespace: str = DEFAULT_NAMESPACE) -> Tuple[MetricDescriptor, ...]:
    """The fourteen device gauges, in a fixed order."""
    return tuple(
        MetricDescriptor(name=fq_name(namespace, suffix), help_text=help_text, field=field_name)
        for field_name, suffix, help_text in _GAUGES
    )


def build_up_descriptor(namespace: str = DEFAULT_NAMESPACE) -> MetricDescriptor:
    return MetricDescriptor(
        name=fq_name(namespace, "up"),
        help_text="Whether the last scrape of the device succeeded (1) or failed (0).",
        field="",
    )
