# -*- coding: utf-8 -*-
"""
Translation dictionaries for German and English.

This module contains all translatable strings for the Worklog application.
"""

TRANSLATIONS = {
    "en": {
        # Application
        "app.name": "Worklog",
        "app.init_error": "Failed to initialize application:\n{error}",

        # Months
        "month.1": "January",
        "month.2": "February",
        "month.3": "March",
        "month.4": "April",
        "month.5": "May",
        "month.6": "June",
        "month.7": "July",
        "month.8": "August",
        "month.9": "September",
        "month.10": "October",
        "month.11": "November",
        "month.12": "December",

        # Weekdays (Monday first, as datetime.weekday())
        "weekday.0": "MO",
        "weekday.1": "TU",
        "weekday.2": "WE",
        "weekday.3": "TH",
        "weekday.4": "FR",
        "weekday.5": "SA",
        "weekday.6": "SU",

        # Entry form
        "entry.date": "Date",
        "entry.from": "From",
        "entry.to": "To",
        "entry.save": "Save",
        "entry.hours": "{hours:.2f} h",
        "entry.missing_fields": "Please fill in all fields",
        "entry.invalid_values": "Please enter a valid date and times as HH:MM",
        "entry.saved": "Saved",
        "entry.updated": "Updated",
        "entry.deleted": "Deleted",
        "entry.confirm_delete": "Delete entry?",
        "entry.empty": "No entries yet",
        "entry.storage_error": "Could not save locally:\n{error}",

        # Entry list / multi select
        "list.select": "Select",
        "list.selected_count": "{count} selected",
        "list.delete_selected": "Delete selected",
        "list.confirm_delete_many": "Really delete {count} entries?",
        "list.deleted_many": "Entries deleted",

        # Dashboard
        "dashboard.hours": "{hours:.2f} h",
        "dashboard.pay": "{currency} {amount:,.2f}",

        # Settings
        "settings.title": "Settings",
        "settings.script_url": "Sync URL",
        "settings.hourly_wage": "Hourly wage",
        "settings.saved": "Settings saved",
        "settings.invalid_wage": "The hourly wage must be a non-negative number",

        # Sync status
        "sync.success": "Synced",
        "sync.disabled": "Offline (no sync URL)",
        "sync.failed": "Offline ({status})",

        # Export
        "export.button": "Export Excel",
        "export.title": "Export month",
        "export.no_entries": "No entries for this month",
        "export.done": "Excel exported",
        "export.header.date": "Date",
        "export.header.from": "From",
        "export.header.to": "To",
        "export.header.hours": "Hours",
        "export.header.total": "Total",
        "export.header.pay": "Net pay",
        "export.total": "Total",
        "export.filename": "Hours - {label}.xlsx",

        # Dialog buttons
        "dialog.ok": "OK",
        "dialog.cancel": "Cancel",
        "dialog.delete": "Delete",
        "dialog.error": "Error",
    },
    "de": {
        # Application
        "app.name": "Zeiterfassung",
        "app.init_error": "Anwendung konnte nicht gestartet werden:\n{error}",

        # Months
        "month.1": "Januar",
        "month.2": "Februar",
        "month.3": "März",
        "month.4": "April",
        "month.5": "Mai",
        "month.6": "Juni",
        "month.7": "Juli",
        "month.8": "August",
        "month.9": "September",
        "month.10": "Oktober",
        "month.11": "November",
        "month.12": "Dezember",

        # Weekdays
        "weekday.0": "MO",
        "weekday.1": "DI",
        "weekday.2": "MI",
        "weekday.3": "DO",
        "weekday.4": "FR",
        "weekday.5": "SA",
        "weekday.6": "SO",

        # Entry form
        "entry.date": "Datum",
        "entry.from": "Von",
        "entry.to": "Bis",
        "entry.save": "Speichern",
        "entry.hours": "{hours:.2f} h",
        "entry.missing_fields": "Bitte alles ausfüllen",
        "entry.invalid_values": "Bitte gültiges Datum und Zeiten als HH:MM eingeben",
        "entry.saved": "Gespeichert",
        "entry.updated": "Aktualisiert",
        "entry.deleted": "Gelöscht",
        "entry.confirm_delete": "Eintrag löschen?",
        "entry.empty": "Keine Einträge vorhanden",
        "entry.storage_error": "Lokales Speichern fehlgeschlagen:\n{error}",

        # Entry list / multi select
        "list.select": "Auswählen",
        "list.selected_count": "{count} ausgewählt",
        "list.delete_selected": "Auswahl löschen",
        "list.confirm_delete_many": "{count} Einträge wirklich löschen?",
        "list.deleted_many": "Einträge gelöscht",

        # Dashboard
        "dashboard.hours": "{hours:.2f} h",
        "dashboard.pay": "{currency} {amount:,.2f}",

        # Settings
        "settings.title": "Einstellungen",
        "settings.script_url": "Sync-URL",
        "settings.hourly_wage": "Stundenlohn",
        "settings.saved": "Einstellungen gespeichert",
        "settings.invalid_wage": "Der Stundenlohn muss eine Zahl größer oder gleich 0 sein",

        # Sync status
        "sync.success": "Synchronisiert",
        "sync.disabled": "Offline (keine Sync-URL)",
        "sync.failed": "Offline ({status})",

        # Export
        "export.button": "Excel exportieren",
        "export.title": "Monat exportieren",
        "export.no_entries": "Keine Einträge für diesen Monat",
        "export.done": "Excel exportiert",
        "export.header.date": "Datum",
        "export.header.from": "Von",
        "export.header.to": "Bis",
        "export.header.hours": "Stunden",
        "export.header.total": "Total",
        "export.header.pay": "Lohn netto",
        "export.total": "Total",
        "export.filename": "Stunden - {label}.xlsx",

        # Dialog buttons
        "dialog.ok": "OK",
        "dialog.cancel": "Abbrechen",
        "dialog.delete": "Löschen",
        "dialog.error": "Fehler",
    },
}
