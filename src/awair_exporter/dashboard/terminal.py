"""One-shot terminal view of a single reading, using Rich."""

from __future__ import annotations

from typing import Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from awair_exporter.metrics import WIRE_KEYS, AirSample, MetricDescriptor


def _color_for_score(score: float) -> str:
    # Awair's own app: 80+ good, 60-79 fair, below that poor
    if score >= 80:
        return "green"
    elif score >= 60:
        return "yellow"
    return "red"


def render_sample(sample: AirSample, catalog: Sequence[MetricDescriptor]) -> Table:
    table = Table(
        title=f"Awair @ {escape(sample.hostname)}",
        show_header=True,
        header_style="bold",
    )
    table.add_column("Metric")
    table.add_column("Wire key", style="dim")
    table.add_column("Value", justify="right")

    values = sample.as_dict()
    for desc in catalog:
        value = values[desc.field]
        text = f"{value:g}"
        if desc.field == "score":
            color = _color_for_score(value)
            text = f"[{color}]{text}[/{color}]"
        table.add_row(f"[cyan]{desc.name}[/cyan]", WIRE_KEYS[desc.field], text)

    return table


def print_sample(
    sample: AirSample,
    catalog: Sequence[MetricDescriptor],
    console: Optional[Console] = None,
):
    console = console or Console()
    console.print(render_sample(sample, catalog))
