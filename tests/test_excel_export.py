"""
Tests for the Excel timesheet export.
"""

import datetime

import pytest
from openpyxl import load_workbook

from conftest import make_entries
from worklog.i18n import set_language
from worklog.services.excel_export_service import ExcelExportService
from worklog.services.summary_service import month_summary


@pytest.fixture
def summary():
    entries = make_entries(
        ("2024-03-15", "13:00", "17:30"),
        ("2024-03-01", "08:00", "12:00"),
        ("2024-04-01", "08:00", "12:00"),
    )
    return month_summary(entries, 2024, 3, 40)


def test_export_layout(tmp_path, summary):
    path = ExcelExportService().export_month(summary, tmp_path / "out" / "march.xlsx")
    assert path.exists()

    ws = load_workbook(path).active
    assert ws.title == "March 2024"
    assert ws["A1"].value == "Zimmerei"
    assert "A1:D1" in ws.merged_cells
    assert [c.value for c in ws[2]] == ["Date", "From", "To", "Hours", "Total", "Net pay"]

    assert ws["A3"].value == datetime.datetime(2024, 3, 1)
    assert ws["A3"].number_format == "dd.mm.yyyy"
    assert ws["B3"].number_format == "hh:mm"
    assert [ws["D3"].value, ws["E3"].value, ws["F3"].value] == [4.0, 4.0, 160.0]
    assert [ws["D4"].value, ws["E4"].value, ws["F4"].value] == [4.5, 8.5, 180.0]
    assert ws["F3"].number_format == '#,##0.00 "CHF"'

    assert ws["D5"].value == "Total"
    assert ws["E5"].value == 8.5
    assert ws["F5"].value == 340.0
    assert all(ws.cell(row=5, column=col).border.top.style == "thick" for col in range(1, 7))
    assert ws.max_row == 5


def test_german_headers(tmp_path, summary):
    set_language("de")
    path = ExcelExportService().export_month(summary, tmp_path / "march.xlsx")
    ws = load_workbook(path).active
    assert [c.value for c in ws[2]] == ["Datum", "Von", "Bis", "Stunden", "Total", "Lohn netto"]
    assert ws.title == "März 2024"


def test_company_and_currency_are_configurable(tmp_path, summary):
    path = ExcelExportService(company_name="Acme", currency="EUR").export_month(summary, tmp_path / "m.xlsx")
    ws = load_workbook(path).active
    assert ws["A1"].value == "Acme"
    assert ws["F3"].number_format == '#,##0.00 "EUR"'


def test_empty_month_is_refused(tmp_path):
    with pytest.raises(ValueError):
        ExcelExportService().export_month(month_summary([], 2024, 3, 40), tmp_path / "empty.xlsx")
    assert not (tmp_path / "empty.xlsx").exists()


def test_default_filename(summary):
    assert ExcelExportService.default_filename(summary) == "Hours - March 2024.xlsx"
    set_language("de")
    assert ExcelExportService.default_filename(summary) == "Stunden - März 2024.xlsx"
