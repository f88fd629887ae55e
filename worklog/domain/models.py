"""
Domain Models using Pydantic for validation.

Architecture Decision: Why Pydantic?
Entries arrive from two untrusted places, the local records and the remote
mirror. Pydantic validates and normalizes both on the way in, and gives us the
JSON shape (with the camelCase/"from" field names) on the way out.
"""

from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from worklog.domain.timecalc import calc_duration, new_entry_id, normalize_date, normalize_time


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


class Entry(BaseModel):
    """
    One logged work session.

    `hours` is derived: it is recalculated from `from`/`to` every time an Entry
    is built, so a stored entry can never carry a stale value.
    """
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(default_factory=new_entry_id)
    date: str = ""
    from_: str = Field(default="", alias="from")
    to: str = ""
    hours: float = 0.0

    @field_validator('id', mode='before')
    @classmethod
    def _coerce_id(cls, value: Any) -> str:
        return _as_text(value) or new_entry_id()

    @field_validator('date', mode='before')
    @classmethod
    def _normalize_date(cls, value: Any) -> str:
        return normalize_date(_as_text(value))

    @field_validator('from_', 'to', mode='before')
    @classmethod
    def _normalize_time(cls, value: Any) -> str:
        return normalize_time(_as_text(value))

    @model_validator(mode='after')
    def _derive_hours(self) -> 'Entry':
        self.hours = calc_duration(self.from_, self.to)
        return self

    def to_record(self) -> Dict[str, Any]:
        """JSON-ready dict using the wire field names (`from`, not `from_`)"""
        return self.model_dump(by_alias=True)

    def with_times(self, date: str, time_from: str, time_to: str) -> 'Entry':
        """Copy with new date/times and recomputed hours; the id is kept"""
        return Entry(id=self.id, date=date, from_=time_from, to=time_to)


class UserPreferences(BaseModel):
    """
    The user-editable settings record.

    Serialized as {"scriptUrl": ..., "hourlyWage": ...}. An empty script URL
    disables the remote mirror.
    """
    model_config = ConfigDict(populate_by_name=True, from_attributes=True)

    script_url: str = Field(default="", alias="scriptUrl", description="Remote mirror endpoint")
    hourly_wage: float = Field(default=38.0, ge=0, alias="hourlyWage", description="Wage per hour")

    @field_validator('script_url', mode='before')
    @classmethod
    def _strip_url(cls, value: Any) -> str:
        return _as_text(value)

    @property
    def sync_enabled(self) -> bool:
        return bool(self.script_url)

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)
