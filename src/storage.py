"""Key/value stores holding the routing table and probe settings."""

import copy
import os
from typing import Dict, Optional

import orjson

from interfaces import IKeyValueStore
from json_utils import json_dumps, json_loads


class StoreError(Exception):
    pass


class MemoryStore(IKeyValueStore):
    def __init__(self, data: Optional[Dict[str, object]] = None):
        self._data: Dict[str, object] = dict(data or {})

    def get(self, key: str, default=None):
        if key not in self._data:
            return default
        return copy.deepcopy(self._data[key])

    def set(self, key: str, value) -> None:
        self._data[key] = copy.deepcopy(value)


class JsonFileStore(MemoryStore):
    """Store persisted as a single JSON object, rewritten on every ``set``."""

    def __init__(self, path: str):
        super().__init__()
        self.path = path
        self.load()

    def load(self) -> None:
        if not os.path.exists(self.path):
            self._data = {}
            return
        try:
            with open(self.path, "rb") as f:
                raw = f.read()
            data = json_loads(raw) if raw.strip() else {}
        except (OSError, orjson.JSONDecodeError) as e:
            raise StoreError(f"Cannot read store {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreError(f"Store {self.path} does not contain a JSON object")
        self._data = data

    def set(self, key: str, value) -> None:
        super().set(key, value)
        self.flush()

    def flush(self) -> None:
        directory = os.path.dirname(os.path.abspath(self.path))
        tmp_path = self.path + ".tmp"
        try:
            os.makedirs(directory, exist_ok=True)
            with open(tmp_path, "w", encoding="utf-8") as f:
                f.write(json_dumps(self._data, pretty=True))
            os.replace(tmp_path, self.path)
        except OSError as e:
            raise StoreError(f"Cannot write store {self.path}: {e}") from e
