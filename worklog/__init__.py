"""Worklog - local-first work time log with a remote mirror"""

__version__ = "1.0.0"
