from __future__ import annotations

from datetime import date
from typing import Protocol

from .model import DashboardStats


class DashboardRepository(Protocol):
    def counts(self, *, today: date) -> DashboardStats:
        raise NotImplementedError
