"""UI layer - PySide6 presentation"""

from .app import WorklogApp

__all__ = ["WorklogApp"]
