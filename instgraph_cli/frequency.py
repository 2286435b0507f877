"""Flat frequency table of enter-message locations."""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from .dialects import Dialect
from .models import EventKind, FrequencyReport, FrequencyRow


class FrequencyCounter:
    """Tally enter events by their verbatim location text."""

    def __init__(self) -> None:
        self._counts: Counter = Counter()
        self.total_matches = 0

    def add(self, location_text: str) -> None:
        self._counts[location_text] += 1
        self.total_matches += 1

    def report(self) -> FrequencyReport:
        # Sort by text first so equal counts come out in a stable, readable order.
        ordered = sorted(self._counts.items())
        ordered.sort(key=lambda item: item[1], reverse=True)

        rows = []
        cumulative = 0
        for text, count in ordered:
            cumulative += count
            rows.append(FrequencyRow(location=text, count=count, cumulative=cumulative))

        return FrequencyReport(
            rows=rows,
            total_matches=self.total_matches,
            max_location_width=max((len(text) for text in self._counts), default=0),
        )


def frequency_report(lines: Iterable[str], dialect: Dialect) -> FrequencyReport:
    """Build the flat report in its own pass over *lines*."""
    counter = FrequencyCounter()
    for line in lines:
        event = dialect.classify(line)
        if event.kind is EventKind.ENTER:
            counter.add(event.fragment)
    return counter.report()
