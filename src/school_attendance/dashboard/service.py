from __future__ import annotations

from datetime import date
from typing import Optional

from ..common.datetime_utils import today_local
from .model import DashboardStats
from .repository import DashboardRepository


class DashboardService:
    """Admin overview counters; ``today`` is resolved at query time."""

    def __init__(self, dashboard: DashboardRepository):
        self._dashboard = dashboard

    def get_stats(self, *, today: Optional[date] = None) -> DashboardStats:
        return self._dashboard.counts(today=today or today_local())
