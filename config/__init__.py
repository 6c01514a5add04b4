import json
import os
from datetime import datetime, time


def get_settings_module() -> str:
    # APP_ENV selects the settings module; development by default
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def env_flag(name: str, default: str) -> bool:
    return bool(int(os.getenv(name, default)))


def env_time(name: str, default: str) -> time:
    return datetime.strptime(os.getenv(name, default), "%H:%M:%S").time()


def env_json(name: str, default: dict) -> dict:
    raw = os.getenv(name)
    return json.loads(raw) if raw else default
