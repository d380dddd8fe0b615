# solboard/services/feeds.py
"""
Static JSON feeds the site polls: the token list and the promotion list.
Read on every call so edits to the files show up without a restart.
Schemas belong to the display layer and are not validated here.
"""

from __future__ import annotations

import json
from typing import Any, Dict, List

from solboard.config import settings


def load_feed(path: str, key: str | None = None) -> List[Dict[str, Any]]:
    """Load a JSON list, or the list under `key` when the file wraps it in an object."""
    try:
        with open(path, "r") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        print(f"[feeds] failed loading {path}: {e}")
        return []

    if isinstance(data, dict) and key and isinstance(data.get(key), list):
        data = data[key]
    if not isinstance(data, list):
        print(f"[feeds] {path} is not a list, ignoring")
        return []
    return [item for item in data if isinstance(item, dict)]


def load_token_list() -> List[Dict[str, Any]]:
    return load_feed(settings.TOKENLIST_FILE, key="tokens")


def load_promotions() -> List[Dict[str, Any]]:
    return load_feed(settings.PROMOTION_FILE, key="promotions")
