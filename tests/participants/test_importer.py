import io

import pytest
from openpyxl import Workbook

from src.event_checkin.event_checkin.core.exceptions import ValidationError
from src.event_checkin.event_checkin.participants.importer import (
    clean_cell,
    decode_upload,
    looks_like_header,
    parse_import_text,
    parse_workbook,
)


def test_clean_cell_strips_quotes_and_apostrophes():
    assert clean_cell(' "Alice" ') == "Alice"
    assert clean_cell("'0812345678") == "0812345678"
    assert clean_cell("") == ""


def test_header_row_is_detected_and_skipped():
    result = parse_import_text("ชื่อ,เบอร์โทร\nAlice,0811111111\nBob,0822222222\n")

    assert result.header_detected is True
    assert [(e.display_name, e.identifier) for e in result.entries] == [
        ("Alice", "0811111111"),
        ("Bob", "0822222222"),
    ]
    assert result.skipped_rows == 0


def test_no_header_first_row_is_data():
    result = parse_import_text("Alice,0811111111")

    assert result.header_detected is False
    assert len(result.entries) == 1


def test_malformed_rows_are_reported_not_raised():
    text = "name,phone\nAlice,0811111111\nOnlyName\n,0899999999\n\nBob,0822222222,extra\n"
    result = parse_import_text(text)

    assert [e.display_name for e in result.entries] == ["Alice", "Bob"]
    assert result.skipped_rows == 2
    assert result.errors == ["บรรทัด 3: ข้อมูลไม่ครบ", "บรรทัด 4: ข้อมูลไม่ครบ"]


def test_quoted_commas_and_bom():
    result = parse_import_text('\ufeff"Doe, Jane",\'0811111111\n')

    assert result.entries[0].display_name == "Doe, Jane"
    assert result.entries[0].identifier == "0811111111"


def test_looks_like_header():
    assert looks_like_header(["Name", "Tel"])
    assert not looks_like_header(["Alice", "0811111111"])


def test_decode_upload_drops_bom():
    assert decode_upload("\ufeffA,1".encode("utf-8")) == "A,1"


def _xlsx(rows) -> bytes:
    wb = Workbook()
    ws = wb.active
    for row in rows:
        ws.append(row)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def test_parse_workbook_reads_student_columns():
    raw = _xlsx(
        [
            ["รหัสนักศึกษา", "ชื่อ-สกุล", "เบอร์โทร", "คณะ", "สาขา"],
            [64123456, "สมชาย ใจดี", "0812345678", "วิทยาการจัดการ", "การจัดการธุรกิจ"],
            ["64000002", "Only Id", None, None, None],
            [None, "No Keys", None, "x", "y"],
            [64000003, None, "0899999999"],
        ]
    )

    result = parse_workbook(raw)

    first = result.entries[0]
    assert (first.secondary_identifier, first.display_name, first.identifier) == ("64123456", "สมชาย ใจดี", "0812345678")
    assert (first.faculty, first.major) == ("วิทยาการจัดการ", "การจัดการธุรกิจ")
    assert result.entries[1].secondary_identifier == "64000002"
    assert result.entries[1].identifier == ""
    assert len(result.entries) == 2
    assert result.errors == ["บรรทัด 4: ข้อมูลไม่ครบ", "บรรทัด 5: ข้อมูลไม่ครบ"]


def test_parse_workbook_rejects_non_excel_bytes():
    with pytest.raises(ValidationError):
        parse_workbook(b"name,phone\nAlice,0811111111\n")
