"""
Tests for the Entry and UserPreferences models.
"""

import pytest
from pydantic import ValidationError

from worklog.domain.models import Entry, UserPreferences


def test_hours_are_derived_from_times():
    entry = Entry(date="2024-03-01", from_="08:00", to="12:30", hours=99)
    assert entry.hours == 4.5


def test_entry_from_wire_format_is_normalized():
    entry = Entry.model_validate({
        "id": "abc",
        "date": "2024-03-01T00:00:00Z",
        "from": "1899-12-30T07:00:00.000Z",
        "to": "1899-12-30T11:00:00.000Z",
        "hours": 0,
    })
    assert entry.date == "2024-03-01"
    assert entry.from_ == "07:00"
    assert entry.to == "11:00"
    assert entry.hours == 4.0


def test_record_uses_wire_field_names():
    record = Entry(id="x1", date="2024-03-01", from_="08:00", to="12:00").to_record()
    assert record == {"id": "x1", "date": "2024-03-01", "from": "08:00", "to": "12:00", "hours": 4.0}


def test_missing_fields_give_zero_hours():
    entry = Entry.model_validate({"id": "x", "date": "2024-03-01", "from": None})
    assert entry.from_ == ""
    assert entry.hours == 0.0


def test_with_times_keeps_id_and_recomputes():
    entry = Entry(id="keep", date="2024-03-01", from_="08:00", to="12:00")
    changed = entry.with_times("2024-03-02", "22:00", "02:00")
    assert changed.id == "keep"
    assert changed.date == "2024-03-02"
    assert changed.hours == 4.0


def test_entry_gets_an_id_by_default():
    assert Entry(date="2024-03-01", from_="08:00", to="09:00").id


class TestUserPreferences:

    def test_defaults(self):
        prefs = UserPreferences()
        assert prefs.script_url == ""
        assert prefs.hourly_wage == 38
        assert not prefs.sync_enabled

    def test_record_shape(self):
        prefs = UserPreferences.model_validate({"scriptUrl": " https://x/exec ", "hourlyWage": 42.5})
        assert prefs.sync_enabled
        assert prefs.to_record() == {"scriptUrl": "https://x/exec", "hourlyWage": 42.5}

    def test_negative_wage_rejected(self):
        with pytest.raises(ValidationError):
            UserPreferences(hourly_wage=-1)
