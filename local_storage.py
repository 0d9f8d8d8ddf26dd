"""
Project: Cafe POS
Date: October 2026

Description:
File-backed key/value store used by the client the way a browser uses
local storage: string values under string keys, written through on
every change.
"""

import json
import logging
import os
from typing import Dict, Optional

log = logging.getLogger(__name__)


class LocalStorage:
    """Persists a flat str -> str mapping to a JSON file."""

    def __init__(self, path: str) -> None:
        self.path = path
        self._items: Dict[str, str] = self._load()

    def _load(self) -> Dict[str, str]:
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            log.error("Could not read local storage file %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            log.error("Local storage file %s does not hold an object, ignoring it", self.path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _save(self) -> None:
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump(self._items, f, ensure_ascii=False)

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value
        self._save()

    def remove_item(self, key: str) -> None:
        if self._items.pop(key, None) is not None:
            self._save()

    def clear(self) -> None:
        self._items = {}
        if os.path.exists(self.path):
            os.remove(self.path)
