# -*- coding: utf-8 -*-
"""
Translation dictionaries for German and English.

This module contains all translatable strings for the Tim Evaluator application.
"""

TRANSLATIONS = {
    "en": {
        # Application
        "app.name": "Tim Evaluator",

        # Main window
        "main.title": "Tim Evaluator",
        "main.open_file": "Open Tim Export...",
        "main.no_file": "No file loaded",
        "main.loaded": "{records} records, {gaps} gaps",
        "main.file_filter": "Tim export (*.json);;All files (*)",
        "main.show_evaluation": "Evaluation",
        "main.show_records": "Records",

        # Records table
        "records.start": "Start",
        "records.end": "End",
        "records.duration": "Duration",
        "records.task": "Task",
        "records.enabled": "Enabled",

        # Chart
        "chart.empty": "No enabled task records",

        # Export section
        "export.title": "Export",
        "export.gap_destination": "Assign enabled gaps to:",
        "export.button": "Export Tim File",
        "export.csv_source": "CSV timesheet for:",
        "export.csv_button": "Export CSV",
        "export.json_filter": "JSON (*.json)",
        "export.csv_filter": "CSV (*.csv)",
        "export.saved": "Saved to {path}",

        # Errors
        "error.title": "Error",
        "error.parse": "The file could not be imported:\n{error}",
        "error.selection": "Please select a task first.\n{error}",
        "error.io": "The file could not be read or written:\n{error}",
    },
    "de": {
        # Application
        "app.name": "Tim Auswertung",

        # Main window
        "main.title": "Tim Auswertung",
        "main.open_file": "Tim-Export öffnen...",
        "main.no_file": "Keine Datei geladen",
        "main.loaded": "{records} Einträge, {gaps} Lücken",
        "main.file_filter": "Tim-Export (*.json);;Alle Dateien (*)",
        "main.show_evaluation": "Auswertung",
        "main.show_records": "Einträge",

        # Records table
        "records.start": "Beginn",
        "records.end": "Ende",
        "records.duration": "Dauer",
        "records.task": "Aufgabe",
        "records.enabled": "Aktiv",

        # Chart
        "chart.empty": "Keine aktiven Einträge",

        # Export section
        "export.title": "Export",
        "export.gap_destination": "Aktive Lücken zuordnen zu:",
        "export.button": "Tim-Datei exportieren",
        "export.csv_source": "CSV-Stundenzettel für:",
        "export.csv_button": "CSV exportieren",
        "export.json_filter": "JSON (*.json)",
        "export.csv_filter": "CSV (*.csv)",
        "export.saved": "Gespeichert unter {path}",

        # Errors
        "error.title": "Fehler",
        "error.parse": "Die Datei konnte nicht importiert werden:\n{error}",
        "error.selection": "Bitte zuerst eine Aufgabe auswählen.\n{error}",
        "error.io": "Die Datei konnte nicht gelesen oder geschrieben werden:\n{error}",
    },
}
