import os
from pathlib import Path
from dotenv import dotenv_values

ROOT = Path(__file__).resolve().parents[2]
ENV = dotenv_values(ROOT / ".env") if (ROOT / ".env").exists() else {}

WORKERS = 10
TIMEOUT = 10.0
USER_AGENT = "sitecheck/0.1"
LOG_LEVEL = "WARNING"

def get(key: str, default=None):
    value = os.environ.get(key)
    if value is None or value == "":
        value = ENV.get(key)
    return default if value is None or value == "" else value

def get_int(key: str, default: int) -> int:
    raw = get(key)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{key} must be an integer, got {raw!r}") from None

def get_float(key: str, default: float) -> float:
    raw = get(key)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{key} must be a number, got {raw!r}") from None

def workers() -> int:
    return get_int("SITECHECK_WORKERS", WORKERS)

def timeout() -> float:
    return get_float("SITECHECK_TIMEOUT", TIMEOUT)

def user_agent() -> str:
    return get("SITECHECK_USER_AGENT", USER_AGENT)

def log_level() -> str:
    return get("SITECHECK_LOG_LEVEL", LOG_LEVEL)
