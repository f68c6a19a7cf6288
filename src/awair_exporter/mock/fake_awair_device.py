"""
Fake Awair Element local API for testing without the hardware.

    python -m awair_exporter.mock.fake_awair_device
    awair-exporter 127.0.0.1:9180
"""

from __future__ import annotations

import json
import math
import random
from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Callable, Union


_tick = 0
_rng = random.Random(42)

Body = Union[dict, bytes, str]


def _generate_air_data() -> dict:
    """One reading shaped like the Element's /air-data/latest payload.

    Values drift slowly on a sine wave with a little noise, roughly what an
    office looks like over a working day.
    """
    global _tick
    _tick += 1
    t = _tick

    temp = 21.5 + 1.5 * math.sin(t * 0.05) + _rng.gauss(0, 0.1)
    humid = max(10.0, 42 + 6 * math.sin(t * 0.03) + _rng.gauss(0, 0.5))

    # CO2 climbs as the room fills up
    co2 = max(400, int(650 + 350 * max(0.0, math.sin(t * 0.02)) + _rng.gauss(0, 15)))
    voc = max(20, int(180 + 120 * max(0.0, math.sin(t * 0.04)) + _rng.gauss(0, 10)))
    pm25 = max(0, int(4 + _rng.random() * 6))

    # Magnus approximation
    gamma = math.log(humid / 100.0) + (17.62 * temp) / (243.12 + temp)
    dew_point = (243.12 * gamma) / (17.62 - gamma)
    abs_humid = 216.7 * (humid / 100.0 * 6.112 * math.exp(17.62 * temp / (243.12 + temp))) / (273.15 + temp)

    score = max(0, min(100, int(100 - (co2 - 400) / 20 - (voc - 20) / 25 - pm25 / 2)))

    return {
        "timestamp": "1970-01-01T00:00:00.000Z",
        "score": score,
        "dew_point": round(dew_point, 2),
        "temp": round(temp, 2),
        "humid": round(humid, 2),
        "abs_humid": round(abs_humid, 2),
        "co2": co2,
        "co2_est": co2 + _rng.randint(-20, 20),
        "co2_est_baseline": 35000 + _rng.randint(-200, 200),
        "voc": voc,
        "voc_baseline": 37000 + _rng.randint(-200, 200),
        "voc_h2_raw": 26 + _rng.randint(-1, 1),
        "voc_ethanol_raw": 38 + _rng.randint(-1, 1),
        "pm25": pm25,
        "pm10_est": pm25 + 2,
    }


class AirDataHandler(BaseHTTPRequestHandler):
    """Serves GET /air-data/latest. Subclass (or use make_handler) to fix the reply."""

    status_code = 200
    body_factory: Callable[[], Body] = staticmethod(_generate_air_data)

    def do_GET(self):
        if self.path != "/air-data/latest":
            self.send_response(404)
            self.end_headers()
            return

        body = self.body_factory()
        if isinstance(body, dict):
            body = json.dumps(body)
        if isinstance(body, str):
            body = body.encode()

        self.send_response(self.status_code)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format, *args):
        pass  # Suppress request logging noise


def make_handler(body: Body, status_code: int = 200) -> type:
    """Handler class that always answers with the same body and status."""
    return type(
        "FixedAirDataHandler",
        (AirDataHandler,),
        {"status_code": status_code, "body_factory": staticmethod(lambda: body)},
    )


def run_fake_device(host: str = "127.0.0.1", port: int = 9180):
    server = HTTPServer((host, port), AirDataHandler)
    print(f"Fake Awair device running at http://{host}:{port}/air-data/latest")
    print("Press Ctrl+C to stop.\n")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        pass
    server.server_close()
    print("\nDevice stopped.")


if __name__ == "__main__":
    run_fake_device()
