from __future__ import annotations

import csv
import io
import logging
import zipfile
from dataclasses import dataclass, field
from typing import List

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from ..core.constants import IMPORT_HEADER_TOKENS
from ..core.exceptions import ValidationError
from .model import ParticipantEntry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ImportParseResult:
    entries: List[ParticipantEntry]
    skipped_rows: int = 0
    header_detected: bool = False
    errors: List[str] = field(default_factory=list)


def clean_cell(value: str) -> str:
    """Strip one pair of surrounding quotes and leading apostrophes.

    Spreadsheets export phone numbers as '0812345678 to keep the leading zero.
    """
    v = (value or "").strip()
    if len(v) >= 2 and v[0] == v[-1] and v[0] in ('"', "'"):
        v = v[1:-1].strip()
    return v.lstrip("'").strip()


def looks_like_header(row: List[str]) -> bool:
    cells = [clean_cell(c).lower() for c in row]
    return any(token in cell for cell in cells for token in IMPORT_HEADER_TOKENS)


def parse_import_text(text: str) -> ImportParseResult:
    """Parse comma-separated `name,phone[,...]` rows.

    Malformed rows never raise: a row with fewer than two non-empty columns
    is skipped and reported by line number.
    """
    if text.startswith("\ufeff"):
        text = text[1:]

    rows = list(csv.reader(io.StringIO(text)))
    header = bool(rows) and looks_like_header(rows[0])
    start_line = 2 if header else 1

    entries: List[ParticipantEntry] = []
    errors: List[str] = []
    for line_no, row in enumerate(rows[1:] if header else rows, start=start_line):
        cells = [clean_cell(c) for c in row]
        if not any(cells):
            continue
        if len(cells) < 2 or not cells[0] or not cells[1]:
            errors.append(f"บรรทัด {line_no}: ข้อมูลไม่ครบ")
            continue
        entries.append(ParticipantEntry(display_name=cells[0], identifier=cells[1]))

    if errors:
        logger.info("import skipped %d malformed rows", len(errors))
    return ImportParseResult(
        entries=entries,
        skipped_rows=len(errors),
        header_detected=header,
        errors=errors,
    )


def decode_upload(raw: bytes) -> str:
    # utf-8-sig drops the BOM that Excel adds to CSV exports
    return raw.decode("utf-8-sig")


def _sheet_cell(value) -> str:
    # Excel stores student ids typed as numbers as floats (64123456.0)
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return clean_cell("" if value is None else str(value))


def parse_workbook(raw: bytes) -> ImportParseResult:
    """Parse the first sheet of an .xlsx registration list.

    Columns are `student_id, name, phone, faculty, major`; the first row is
    always the header. A row needs a name plus a student id or a phone.
    """
    try:
        workbook = load_workbook(io.BytesIO(raw), read_only=True, data_only=True)
    except (InvalidFileException, zipfile.BadZipFile, KeyError, OSError) as e:
        raise ValidationError("ไม่สามารถอ่านไฟล์ Excel ได้") from e

    try:
        rows = list(workbook.worksheets[0].iter_rows(values_only=True)) if workbook.worksheets else []
    finally:
        workbook.close()

    entries: List[ParticipantEntry] = []
    errors: List[str] = []
    for line_no, row in enumerate(rows[1:], start=2):
        cells = [_sheet_cell(v) for v in row] + [""] * 5
        student_id, name, phone, faculty, major = cells[:5]
        if not any(cells):
            continue
        if not name or not (student_id or phone):
            errors.append(f"บรรทัด {line_no}: ข้อมูลไม่ครบ")
            continue
        entries.append(
            ParticipantEntry(
                display_name=name,
                identifier=phone,
                secondary_identifier=student_id or None,
                faculty=faculty or None,
                major=major or None,
            )
        )

    if errors:
        logger.info("workbook import skipped %d malformed rows", len(errors))
    return ImportParseResult(
        entries=entries,
        skipped_rows=len(errors),
        header_detected=bool(rows),
        errors=errors,
    )
