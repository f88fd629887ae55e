"""Domain layer - Pure business entities and time arithmetic"""

from .models import Entry, UserPreferences
from .timecalc import calc_duration

__all__ = ["Entry", "UserPreferences", "calc_duration"]
