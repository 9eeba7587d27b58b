from __future__ import annotations

from dataclasses import dataclass

from ..core.constants import DEFAULT_MAX_ABSENCES, DEFAULT_MIN_ATTENDANCE_PERCENT


@dataclass(frozen=True)
class Thresholds:
    """Global attendance thresholds (singleton settings row).

    Clients use them for highlighting; the server never enforces them.
    """

    min_attendance_percent: int = DEFAULT_MIN_ATTENDANCE_PERCENT
    max_absences: int = DEFAULT_MAX_ABSENCES

    def to_dict(self) -> dict:
        return {
            "min_attendance_percent": self.min_attendance_percent,
            "max_absences": self.max_absences,
        }
