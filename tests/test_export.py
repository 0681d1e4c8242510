import io
import re

import pytest
from conftest import make_record
from openpyxl import load_workbook

from webless_explorer.core.errors import ExportError
from webless_explorer.etl import export
from webless_explorer.models import ExportFormat, FullBusinessData


def _joes():
    return FullBusinessData(
        name="Joe's Café",
        address='1 "Main" St',
        rating=4.5,
        place_id="joe",
        phone_number="555-1234",
        website=None,
    )


def test_csv_quotes_name_and_address_only():
    content = export.to_csv([_joes()])
    header, row = content.split("\n")

    assert header == "Name,Address,Rating,Phone Number,Website,Has Website"
    assert row == '"Joe\'s Café","1 ""Main"" St",4.5,555-1234,,No'


def test_csv_rating_and_website_columns():
    records = [
        make_record(1, website="https://one.example", rating=4),
        make_record(2, phone=None, rating=0),
    ]
    lines = export.to_csv(records).split("\n")

    assert lines[1] == '"Biz 1","1 Main St",4.0,555-0000,https://one.example,Yes'
    assert lines[2] == '"Biz 2","2 Main St",N/A,,,No'


@pytest.mark.parametrize("fmt", ["csv", "excel", ExportFormat.CSV, ExportFormat.EXCEL])
def test_export_rejects_empty_records(fmt):
    result = export.export_data([], fmt)
    assert result.success is False
    assert result.error == "No data to export."
    assert result.file_content is None


def test_serializers_raise_on_empty():
    with pytest.raises(ExportError):
        export.to_csv([])
    with pytest.raises(ExportError):
        export.to_xlsx([])


def test_export_unsupported_format():
    result = export.export_data([make_record(1)], "pdf")
    assert result.success is False
    assert result.error == "Unsupported export format."


def test_export_csv_result_metadata():
    result = export.export_data([_joes()], "csv")

    assert result.success is True
    assert result.mime_type == "text/csv"
    assert re.fullmatch(r"webless_explorer_export_\d+\.csv", result.file_name)
    assert isinstance(result.file_content, str)


def test_export_reports_serialization_failure(monkeypatch):
    def broken(records):
        raise RuntimeError("disk full")

    monkeypatch.setattr(export, "to_xlsx", broken)
    result = export.export_data([make_record(1)], "excel")

    assert result.success is False
    assert result.error == "Failed to export data: disk full"


def test_build_file_name():
    assert export.build_file_name(ExportFormat.EXCEL, 1700000000000) == "webless_explorer_export_1700000000000.xlsx"


def test_xlsx_styling_and_widths():
    long_address = "A" * 80
    records = [
        FullBusinessData("Short", long_address, 4.0, "p1", "555-1234", "https://a-very-long-website.example/path"),
        FullBusinessData("Nowhere Diner", "2 Side St", 0, "p2", None, ""),
    ]
    result = export.export_data(records, ExportFormat.EXCEL)

    assert result.success is True
    assert result.mime_type == "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    assert result.file_name.endswith(".xlsx")

    ws = load_workbook(io.BytesIO(result.file_content)).active
    assert ws.title == "Businesses"
    assert [cell.value for cell in ws[1]] == export.HEADERS

    for cell in ws[1]:
        assert cell.font.bold
        assert cell.fill.fgColor.rgb == "FFDDDDDD"
        assert cell.border.bottom.style == "thin"

    assert [cell.value for cell in ws[2]][:3] == ["Short", long_address, "4.0"]
    assert ws["F2"].value == "Yes"
    assert ws["A2"].fill.fill_type is None

    assert [cell.value for cell in ws[3]][2] == "N/A"
    assert ws["F3"].value == "No"
    for cell in ws[3]:
        assert cell.fill.fgColor.rgb == "FFFFE0E0"

    widths = {letter: ws.column_dimensions[letter].width for letter in "ABCDEF"}
    assert widths["A"] == len("Nowhere Diner") + 2
    assert widths["B"] == 50
    assert widths["C"] == 10
    assert widths["D"] == len("Phone Number") + 2
    assert widths["E"] == len("https://a-very-long-website.example/path") + 2
    assert widths["F"] == 15
