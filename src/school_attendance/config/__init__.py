import importlib
import os
from types import ModuleType


def get_settings_module() -> str:
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "school_attendance.config.production"

    if env in {"test", "testing"}:
        return "school_attendance.config.testing"

    return "school_attendance.config.development"


def load_settings(module_path: str | None = None) -> ModuleType:
    return importlib.import_module(module_path or get_settings_module())
