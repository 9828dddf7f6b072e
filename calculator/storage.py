"""
KidCalc: Local JSON storage for settings and calculation history.

Data is persisted in ``<project>/data/kidcalc.json``.
"""

import json
import logging
import os
from datetime import datetime

from narrator.formatting import format_expression, format_result

logger = logging.getLogger(__name__)

_DATA_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..", "data")
_DATA_FILE = os.path.join(_DATA_DIR, "kidcalc.json")

HISTORY_LIMIT = 50

# ── Default settings ─────────────────────────────────────────────────────
DEFAULT_SETTINGS = {
    "language": "zh-TW",
    "show_tips": True,
}


def _empty_db() -> dict:
    return {"settings": dict(DEFAULT_SETTINGS), "history": []}


def _ensure_dir() -> None:
    os.makedirs(_DATA_DIR, exist_ok=True)


def _load_db() -> dict:
    _ensure_dir()
    if os.path.exists(_DATA_FILE):
        try:
            with open(_DATA_FILE, "r", encoding="utf-8") as f:
                db = json.load(f)
        except (json.JSONDecodeError, OSError) as exc:
            logger.warning("Ignoring unreadable data file %s: %s", _DATA_FILE, exc)
            return _empty_db()
        if isinstance(db, dict):
            db.setdefault("settings", dict(DEFAULT_SETTINGS))
            db.setdefault("history", [])
            return db
        logger.warning("Ignoring malformed data file %s", _DATA_FILE)
    return _empty_db()


def _save_db(db: dict) -> None:
    _ensure_dir()
    with open(_DATA_FILE, "w", encoding="utf-8") as f:
        json.dump(db, f, indent=2, ensure_ascii=False)


# ── Settings ─────────────────────────────────────────────────────────────

def get_settings() -> dict:
    """Return the stored settings merged over the defaults."""
    merged = dict(DEFAULT_SETTINGS)
    merged.update(_load_db().get("settings", {}))
    return merged


def save_settings(settings: dict) -> None:
    db = _load_db()
    db["settings"] = settings
    _save_db(db)


# ── History ──────────────────────────────────────────────────────────────

def add_history(expression: str, result: float) -> dict:
    """Record a successful calculation, newest first, and return the entry."""
    db = _load_db()
    entry = {
        "expression": expression,
        "result": result,
        "display_expression": format_expression(expression),
        "display_result": format_result(result),
        "timestamp": datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
    }
    db["history"].insert(0, entry)
    # Oldest entries fall off the end
    db["history"] = db["history"][:HISTORY_LIMIT]
    _save_db(db)
    return entry


def get_history() -> list:
    """Return the history list (newest first)."""
    return _load_db().get("history", [])


def clear_history() -> None:
    db = _load_db()
    db["history"] = []
    _save_db(db)


def clear_all_data() -> None:
    """Reset settings to defaults and drop all history."""
    _save_db(_empty_db())
