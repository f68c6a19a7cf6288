"""Sanity checks for the fake device's generated readings."""

from awair_exporter.metrics import WIRE_KEYS
from awair_exporter.mock.fake_awair_device import _generate_air_data


def test_reading_has_every_wire_key():
    reading = _generate_air_data()
    for key in WIRE_KEYS.values():
        assert key in reading, f"Missing key: {key}"


def test_reading_values_are_plausible():
    for _ in range(50):
        r = _generate_air_data()
        assert 0 <= r["score"] <= 100
        assert r["co2"] >= 400
        assert 0 < r["humid"] < 100
        assert r["dew_point"] < r["temp"]
        assert r["pm10_est"] >= r["pm25"]
