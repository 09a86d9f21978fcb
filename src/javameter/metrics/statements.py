"""Statement counter."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class StatementMetrics:
    statements: int = 0

    def add(self, count: int = 1) -> None:
        if count < 0:
            raise ValueError("statement count cannot decrease")
        self.statements += count

    def merge(self, other: StatementMetrics) -> None:
        self.statements += other.statements
