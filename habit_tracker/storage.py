"""
JSON file layer for the habit tracker.

The whole state (profile plus habit list) lives in one small JSON file so
data survives restarts.
"""

from __future__ import annotations

import json
import os
from typing import Any, Dict, Optional

DATA_PATH_DEFAULT = os.path.join("data", "habits-data.json")


class StorageError(Exception):
    """Raised when the state file cannot be read, parsed or written."""


def _ensure_parent_dir(path: str) -> None:
    parent = os.path.dirname(path)
    if parent:
        os.makedirs(parent, exist_ok=True)


def empty_state() -> Dict[str, Any]:
    return {"userProfile": {}, "habits": []}


def load_state(path: str = DATA_PATH_DEFAULT) -> Optional[Dict[str, Any]]:
    """
    Read the state file. Returns None when the file does not exist yet.
    """
    if not os.path.exists(path):
        return None
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = f.read()
    except OSError as e:
        raise StorageError(f"could not read {path}: {e}") from e

    if not raw.strip():
        return empty_state()
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise StorageError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise StorageError(f"{path} must hold a JSON object, found {type(data).__name__}")
    return data


def save_state(state: Dict[str, Any], path: str = DATA_PATH_DEFAULT) -> None:
    try:
        _ensure_parent_dir(path)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(state, f, ensure_ascii=False, indent=2)
            f.flush()
    except (OSError, TypeError, ValueError) as e:
        raise StorageError(f"could not write {path}: {e}") from e
