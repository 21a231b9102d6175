from __future__ import annotations

import io
import logging
from typing import Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import getSampleStyleSheet
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ...core.constants import CSV_EXPORT_HEADER
from ..model import ReportData
from .base import ReportExporter

logger = logging.getLogger(__name__)

_THAI_FONT_NAME = "ReportThai"


def summary_line(data: ReportData) -> str:
    s = data.stats
    return (
        f"ผู้ลงทะเบียนทั้งหมด {s.total} คน | เข้าร่วม {s.checked_in} คน ({s.percentage:.1f}%) | "
        f"อยู่ในงาน {s.present} | กลับแล้ว {s.returned} | ยังไม่มา {s.pending}"
    )


class PdfReportExporter(ReportExporter):
    """Tabular attendance report.

    Thai glyphs need a TrueType font (e.g. Sarabun); without `font_path`
    reportlab falls back to Helvetica.
    """

    media_type = "application/pdf"
    extension = "pdf"

    def __init__(self, *, font_path: Optional[str] = None):
        self._font_name = "Helvetica"
        if font_path:
            self._font_name = self._register_font(font_path)

    @staticmethod
    def _register_font(font_path: str) -> str:
        if _THAI_FONT_NAME not in pdfmetrics.getRegisteredFontNames():
            try:
                pdfmetrics.registerFont(TTFont(_THAI_FONT_NAME, font_path))
            except Exception:
                logger.exception("could not load PDF font %s, using Helvetica", font_path)
                return "Helvetica"
        return _THAI_FONT_NAME

    def render(self, data: ReportData) -> bytes:
        buf = io.BytesIO()
        doc = SimpleDocTemplate(buf, pagesize=A4, title=data.title, leftMargin=36, rightMargin=36)

        styles = getSampleStyleSheet()
        for name in ("Title", "Normal"):
            styles[name].fontName = self._font_name

        story = [
            Paragraph(escape(data.title), styles["Title"]),
            Paragraph(f"พิมพ์เมื่อ: {escape(data.generated_at)}", styles["Normal"]),
        ]
        if data.event_location:
            story.append(Paragraph(escape(data.event_location), styles["Normal"]))
        story += [Paragraph(escape(summary_line(data)), styles["Normal"]), Spacer(1, 12)]

        table = Table(
            [CSV_EXPORT_HEADER] + [row.as_cells() for row in data.rows],
            repeatRows=1,
            colWidths=[36, 170, 100, 70, 70, 70],
        )
        table.setStyle(
            TableStyle(
                [
                    ("FONTNAME", (0, 0), (-1, -1), self._font_name),
                    ("FONTSIZE", (0, 0), (-1, -1), 9),
                    ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor("#7c3aed")),
                    ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
                    ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
                    ("ROWBACKGROUNDS", (0, 1), (-1, -1), [colors.white, colors.HexColor("#f8fafc")]),
                    ("ALIGN", (0, 0), (0, -1), "CENTER"),
                ]
            )
        )
        story.append(table)

        doc.build(story)
        return buf.getvalue()
