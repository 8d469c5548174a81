"""Shared fixtures for schedule calendar tests."""

from datetime import datetime

import pytest

# Wednesday
NOW = datetime(2026, 10, 21, 10, 30)


@pytest.fixture
def now():
    """Fixed local wall-clock time (Wednesday 2026-10-21 10:30)."""
    return NOW


@pytest.fixture
def cs101():
    return {
        "title": "CS 101",
        "dayOfWeek": "Monday",
        "startTime": "09:00",
        "endTime": "09:50",
        "location": "Hall A",
        "instructor": "Dr. Rivera",
        "courseCode": "CS101",
        "isOneTime": False,
    }


@pytest.fixture
def final_exam():
    return {
        "title": "Final Exam",
        "dayOfWeek": "Friday",
        "startTime": "14:00",
        "endTime": "16:00",
        "isOneTime": True,
        "date": "2025-12-12",
    }


@pytest.fixture
def lab():
    return {
        "title": "Physics Lab",
        "dayOfWeek": "Thursday",
        "startTime": "13:00",
        "endTime": "15:30",
    }
