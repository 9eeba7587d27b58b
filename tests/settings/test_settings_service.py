from __future__ import annotations

import pytest

from school_attendance.core.exceptions import ValidationError
from school_attendance.settings.model import Thresholds
from school_attendance.settings.service import SettingsService


class InMemorySettings:
    def __init__(self, thresholds=None):
        self.thresholds = thresholds

    def get(self):
        return self.thresholds

    def save(self, thresholds):
        self.thresholds = thresholds


def test_defaults_when_row_missing():
    svc = SettingsService(InMemorySettings())

    assert svc.get_settings().to_dict() == {"min_attendance_percent": 75, "max_absences": 10}


def test_update_overwrites_singleton_without_bounds_check():
    repo = InMemorySettings(Thresholds())
    svc = SettingsService(repo)

    svc.update_settings(min_attendance_percent=150, max_absences="0")

    assert repo.thresholds == Thresholds(min_attendance_percent=150, max_absences=0)
    assert svc.get_settings().min_attendance_percent == 150


def test_update_requires_integers():
    svc = SettingsService(InMemorySettings(Thresholds()))

    with pytest.raises(ValidationError):
        svc.update_settings(min_attendance_percent="lots", max_absences=3)
