"""Tests for the one-shot Rich table."""

from rich.console import Console

from awair_exporter.dashboard.terminal import _color_for_score, print_sample, render_sample
from awair_exporter.metrics import AirSample, build_catalog


def test_table_has_row_per_gauge():
    sample = AirSample(hostname="10.0.0.5", score=88, carbon_dioxide=612)
    table = render_sample(sample, build_catalog())
    assert table.row_count == 14


def test_print_sample_shows_names_and_values():
    console = Console(record=True, width=120)
    sample = AirSample(hostname="10.0.0.5", score=88, temperature=21.5)

    print_sample(sample, build_catalog(), console=console)
    text = console.export_text()

    assert "10.0.0.5" in text
    assert "awair_temperature" in text
    assert "temp" in text
    assert "21.5" in text


def test_score_colors():
    assert _color_for_score(92) == "green"
    assert _color_for_score(65) == "yellow"
    assert _color_for_score(40) == "red"
