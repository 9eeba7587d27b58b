from __future__ import annotations

import logging
from typing import Any

from ..common.validators import require_int
from .model import Thresholds
from .repository import SettingsRepository

logger = logging.getLogger(__name__)


class SettingsService:
    def __init__(self, settings: SettingsRepository):
        self._settings = settings

    def get_settings(self) -> Thresholds:
        return self._settings.get() or Thresholds()

    def update_settings(self, *, min_attendance_percent: Any, max_absences: Any) -> Thresholds:
        # Values are stored as given; bounds are left to the clients.
        thresholds = Thresholds(
            min_attendance_percent=require_int(min_attendance_percent, "min_attendance_percent"),
            max_absences=require_int(max_absences, "max_absences"),
        )
        self._settings.save(thresholds)
        logger.info("Settings updated: %s", thresholds.to_dict())
        return thresholds
