"""Base formatter interface for javameter reports."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..metrics import JavaMetrics


@dataclass(frozen=True)
class ReportMetadata:
    """Creation time and tool version shown in a report header; both optional."""

    timestamp: Optional[datetime] = None
    version: Optional[str] = None

    @classmethod
    def now(cls, version: Optional[str] = None) -> ReportMetadata:
        return cls(datetime.now().replace(microsecond=0), version)

    @property
    def date_text(self) -> Optional[str]:
        return self.timestamp.date().isoformat() if self.timestamp else None

    @property
    def time_text(self) -> Optional[str]:
        return self.timestamp.time().isoformat() if self.timestamp else None


class BaseFormatter(ABC):
    """Abstract base class for report formatters."""

    @abstractmethod
    def render(self, metrics: JavaMetrics, metadata: ReportMetadata) -> None:
        """Write the report to stdout."""

    @abstractmethod
    def format(self, metrics: JavaMetrics, metadata: ReportMetadata) -> str:
        """Return the report as a string."""
