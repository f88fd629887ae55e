"""Services layer - Business logic"""

from .entry_store import EntryStore
from .sync_service import SyncService
from .gateway import EntryGateway, EntryValidationError
from .excel_export_service import ExcelExportService

__all__ = ["EntryStore", "SyncService", "EntryGateway", "EntryValidationError", "ExcelExportService"]
