"""
Excel Export Service using XlsxWriter.
Writes one month of entries as a styled timesheet.
"""

from pathlib import Path
from typing import Union

import xlsxwriter

from worklog.i18n import tr
from worklog.services.summary_service import MonthSummary, export_rows


class ExcelExportService:
    """
    Generates .xlsx timesheets with:
    - Title row (company name)
    - Header row: Date / From / To / Hours / Total / Net pay
    - One row per entry in chronological order, with a running hour total
    - A total row separated by a thick line
    """

    COLUMN_WIDTHS = [12, 10, 10, 10, 10, 15]
    HEADER_KEYS = [
        "export.header.date", "export.header.from", "export.header.to",
        "export.header.hours", "export.header.total", "export.header.pay",
    ]

    def __init__(self, company_name: str = "Zimmerei", currency: str = "CHF"):
        self.company_name = company_name
        self.currency = currency

    @staticmethod
    def default_filename(summary: MonthSummary) -> str:
        return tr("export.filename", label=summary.label)

    def export_month(self, summary: MonthSummary, output_path: Union[str, Path]) -> Path:
        """
        Write the workbook and return its path.

        Raises ValueError when the month has no entries.
        """
        rows = export_rows(summary)
        if not rows:
            raise ValueError(tr("export.no_entries"))

        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)

        workbook = xlsxwriter.Workbook(str(output_path))
        currency_format = f'#,##0.00 "{self.currency}"'

        fmt_title = workbook.add_format({'bold': True, 'font_size': 16})
        fmt_header = workbook.add_format({'bold': True, 'border': 1, 'align': 'center'})
        fmt_date = workbook.add_format({'num_format': 'dd.mm.yyyy', 'align': 'left'})
        fmt_text = workbook.add_format({'align': 'left'})
        fmt_time = workbook.add_format({'num_format': 'hh:mm', 'align': 'center'})
        fmt_hours = workbook.add_format({'num_format': '0.00', 'align': 'right'})
        fmt_money = workbook.add_format({'num_format': currency_format, 'align': 'right'})
        fmt_total_empty = workbook.add_format({'top': 5})
        fmt_total_label = workbook.add_format({'bold': True, 'top': 5, 'align': 'right'})
        fmt_total_hours = workbook.add_format({'bold': True, 'top': 5, 'align': 'right', 'num_format': '0.00'})
        fmt_total_money = workbook.add_format({
            'bold': True, 'top': 5, 'align': 'right', 'num_format': currency_format
        })

        worksheet = workbook.add_worksheet(summary.label[:31])
        for col, width in enumerate(self.COLUMN_WIDTHS):
            worksheet.set_column(col, col, width)

        # Title (A1:D1) and header
        worksheet.merge_range(0, 0, 0, 3, self.company_name, fmt_title)
        for col, key in enumerate(self.HEADER_KEYS):
            worksheet.write_string(1, col, tr(key), fmt_header)

        # Data rows start on the third line
        row = 2
        for item in rows:
            if item.date is not None:
                worksheet.write_datetime(row, 0, item.date, fmt_date)
            else:
                worksheet.write_string(row, 0, item.date_text, fmt_text)
            worksheet.write_number(row, 1, item.time_from, fmt_time)
            worksheet.write_number(row, 2, item.time_to, fmt_time)
            worksheet.write_number(row, 3, item.hours, fmt_hours)
            worksheet.write_number(row, 4, item.running_total, fmt_hours)
            worksheet.write_number(row, 5, item.pay, fmt_money)
            row += 1

        # Total row
        for col in range(3):
            worksheet.write_blank(row, col, None, fmt_total_empty)
        worksheet.write_string(row, 3, tr("export.total"), fmt_total_label)
        worksheet.write_number(row, 4, round(summary.total_hours, 2), fmt_total_hours)
        worksheet.write_number(row, 5, round(summary.total_pay, 2), fmt_total_money)

        workbook.close()
        return output_path
