"""
Script to export one month to Excel from the command line.

Pulls from the remote mirror first (if a sync URL is configured), then writes
the workbook.

Usage:
    python scripts/export_month.py <YYYY-MM> [output.xlsx]
"""

import asyncio
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from worklog.i18n import set_language
from worklog.infra.config import get_settings
from worklog.infra.db import init_db
from worklog.infra.remote import RemoteMirrorClient
from worklog.infra.repository import EntryRepository, RecordRepository, UserRepository
from worklog.services import EntryStore, ExcelExportService, SyncService
from worklog.services.summary_service import month_summary


async def main():
    if len(sys.argv) < 2:
        print("Usage: python export_month.py <YYYY-MM> [output.xlsx]")
        sys.exit(1)

    try:
        year_str, month_str = sys.argv[1].split('-')
        year, month = int(year_str), int(month_str)
    except ValueError:
        print(f"Error: '{sys.argv[1]}' is not in YYYY-MM format.")
        sys.exit(1)

    settings = get_settings()
    logging.basicConfig(level=settings.log_level.upper())
    set_language(settings.language)
    init_db(settings.get_db_url())

    records = RecordRepository()
    user_repo = UserRepository(records, defaults=settings.preferences)
    store = EntryStore(EntryRepository(records))
    store.load()

    sync = SyncService(store, RemoteMirrorClient(timeout=settings.request_timeout), user_repo,
                       company_name=settings.company_name, auto_push=False)
    result = await sync.pull()
    print(f"Remote sync: {result.status.value}")
    sync.shutdown(wait=True)

    prefs = user_repo.get_preferences()
    summary = month_summary(store.entries, year, month, prefs.hourly_wage)
    if not summary.entries:
        print(f"No entries for {summary.label}.")
        sys.exit(1)

    exporter = ExcelExportService(company_name=settings.company_name, currency=settings.currency)
    output_file = Path(sys.argv[2]) if len(sys.argv) > 2 else Path(exporter.default_filename(summary))
    exporter.export_month(summary, output_file)

    print(f"{len(summary.entries)} entries, {summary.total_hours:.2f} h, "
          f"{settings.currency} {summary.total_pay:,.2f}")
    print(f"Export successfully saved to: {output_file.absolute()}")


if __name__ == "__main__":
    asyncio.run(main())
