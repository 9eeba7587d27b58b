from __future__ import annotations

from dataclasses import asdict, dataclass


@dataclass(frozen=True)
class DashboardStats:
    total_students: int
    total_teachers: int
    total_classes: int
    today_present: int

    def to_dict(self) -> dict:
        return asdict(self)
