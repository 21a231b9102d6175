from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.constants import STATUS_LABELS_TH
from ..participants.service import ParticipantRegistry
from ..stats.service import compute_stats
from .exporters.base import ReportExporter
from .exporters.csv_exporter import CsvReportExporter
from .exporters.pdf_exporter import PdfReportExporter
from .model import ReportData, ReportRow


class ReportService:
    def __init__(
        self,
        registry: ParticipantRegistry,
        *,
        event_name: str = "",
        event_location: Optional[str] = None,
        pdf_font_path: Optional[str] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._registry = registry
        self._event_name = event_name
        self._event_location = event_location
        self._clock = clock
        self._exporters: dict[str, ReportExporter] = {
            "csv": CsvReportExporter(),
            "pdf": PdfReportExporter(font_path=pdf_font_path),
        }

    def build_report(self) -> ReportData:
        snapshot = self._registry.snapshot()
        rows = [
            ReportRow(
                order=i,
                display_name=p.display_name,
                identifier=p.identifier,
                status_label=STATUS_LABELS_TH[p.status.value],
                check_in_at=p.check_in_at or "-",
                check_out_at=p.check_out_at or "-",
            )
            for i, p in enumerate(snapshot, start=1)
        ]
        return ReportData(
            title=f"รายงานสรุปผลการลงทะเบียน {self._event_name}".strip(),
            generated_at=self._clock().strftime("%Y-%m-%d %H:%M"),
            rows=rows,
            stats=compute_stats(snapshot),
            event_location=self._event_location,
        )

    def exporter(self, fmt: str) -> ReportExporter:
        return self._exporters[fmt]

    def export(self, fmt: str) -> tuple[bytes, ReportExporter]:
        exporter = self.exporter(fmt)
        return exporter.render(self.build_report()), exporter

    def filename(self, fmt: str) -> str:
        ts = self._clock().strftime("%Y%m%d_%H%M")
        return f"attendance_{ts}.{self.exporter(fmt).extension}"
