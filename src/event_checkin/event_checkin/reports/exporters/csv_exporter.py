from __future__ import annotations

import csv
import io

from ...core.constants import CSV_EXPORT_HEADER
from ..model import ReportData
from .base import ReportExporter


class CsvReportExporter(ReportExporter):
    """UTF-8 with BOM so Excel opens Thai text correctly."""

    media_type = "text/csv"
    extension = "csv"

    def render(self, data: ReportData) -> bytes:
        out = io.StringIO()
        writer = csv.writer(out, lineterminator="\n")
        writer.writerow(CSV_EXPORT_HEADER)
        for row in data.rows:
            writer.writerow(row.as_cells())
        return out.getvalue().encode("utf-8-sig")
