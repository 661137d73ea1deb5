"""Console presentation sink."""

import sys
from collections.abc import Sequence
from typing import TextIO

from weatherboard.models.weather import LocationRecord
from weatherboard.reporting.formatters import format_dashboard


class ConsoleSink:
    """Prints the dashboard each time the registry changes."""

    def __init__(self, stream: TextIO | None = None, horizon_days: int = 3):
        self.stream = stream or sys.stdout
        self.horizon_days = horizon_days
        self.render_count = 0

    def render(self, records: Sequence[LocationRecord]) -> None:
        print(format_dashboard(records, horizon_days=self.horizon_days), file=self.stream)
        self.render_count += 1
