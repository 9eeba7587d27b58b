from __future__ import annotations

from typing import Optional, Protocol

from .model import Thresholds


class SettingsRepository(Protocol):
    def get(self) -> Optional[Thresholds]:
        raise NotImplementedError

    def save(self, thresholds: Thresholds) -> None:
        raise NotImplementedError
