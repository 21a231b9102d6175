from __future__ import annotations

from abc import ABC, abstractmethod

from ..model import ReportData


class ReportExporter(ABC):
    """Exporter interface (Strategy Pattern for output formats)."""

    media_type: str = "application/octet-stream"
    extension: str = "bin"

    @abstractmethod
    def render(self, data: ReportData) -> bytes:
        raise NotImplementedError
