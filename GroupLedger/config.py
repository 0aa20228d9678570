"""
Config Module

Environment settings for the group ledger, read once at import after
loading a .env file.

Settings:
    LEDGER_STRICT_SPLITS: Validate records and the zero-sum invariant (default false).
    LEDGER_LOG_LEVEL: Logging level for the HTTP service (default INFO).
    LEDGER_API_TITLE: Title reported by the HTTP service.
"""

import os
from dotenv import load_dotenv

load_dotenv()


def _env_flag(name: str, default: bool) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    # Validate splits and check the zero-sum invariant before returning balances
    STRICT_SPLITS = _env_flag("LEDGER_STRICT_SPLITS", False)

    LOG_LEVEL = os.environ.get("LEDGER_LOG_LEVEL", "INFO").upper()

    API_TITLE = os.environ.get("LEDGER_API_TITLE", "Group Ledger")

config = Config()
