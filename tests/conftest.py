"""
Pytest configuration and fixtures.
"""

import sys
import json
from datetime import datetime
from pathlib import Path
import pytest

# Add project root
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.services.import_service import ImportService


def ms(*args) -> int:
    """Epoch milliseconds of a local wall-clock time, e.g. ms(2026, 3, 2, 10, 0)"""
    return int(datetime(*args).timestamp() * 1000)


@pytest.fixture
def sample_document():
    """
    A small export: two groups, three tasks (one without group).

    Records (2026-03-02, a Monday):
        dev       10:00-10:30, 11:00-11:15
        meetings  11:15-12:00
        admin     12:03-12:30   (3 minutes after meetings: no gap)
        dev       14:00-15:00   (next gap: 12:30-14:00)
    """
    return {
        "groups": {
            "g-work": {"title": "Work", "createdAt": ms(2026, 1, 1, 8, 0)},
            "g-empty": {"title": "Empty", "createdAt": ms(2026, 1, 1, 8, 0)},
        },
        "tasks": {
            "t-dev": {
                "title": "Development",
                "createdAt": ms(2026, 1, 2, 9, 0),
                "records": [
                    {"start": ms(2026, 3, 2, 14, 0), "end": ms(2026, 3, 2, 15, 0)},
                    {"start": ms(2026, 3, 2, 10, 0), "end": ms(2026, 3, 2, 10, 30)},
                    {"start": ms(2026, 3, 2, 11, 0), "end": ms(2026, 3, 2, 11, 15)},
                ],
            },
            "t-meet": {
                "title": "Meetings",
                "createdAt": ms(2026, 1, 2, 9, 0),
                "records": [
                    {"start": ms(2026, 3, 2, 11, 15), "end": ms(2026, 3, 2, 12, 0)},
                ],
            },
            "t-admin": {
                "title": "Admin",
                "createdAt": ms(2026, 1, 3, 9, 0),
                "records": [
                    {"start": ms(2026, 3, 2, 12, 3), "end": ms(2026, 3, 2, 12, 30)},
                ],
            },
        },
        "nodes": [
            {"id": "g-work"},
            {"id": "g-empty"},
            {"id": "t-dev", "parent": "g-work"},
            {"id": "t-meet", "parent": "g-work"},
            {"id": "t-admin"},
        ],
    }


@pytest.fixture
def sample_json(sample_document) -> str:
    return json.dumps(sample_document)


@pytest.fixture
def importer() -> ImportService:
    return ImportService()


@pytest.fixture
def graph(importer, sample_json):
    return importer.parse(sample_json)
