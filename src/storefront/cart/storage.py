"""Local key-value storage for the persisted cart.

The cart is stored as one JSON document under the ``cart`` key. Storage
adapters only move strings; decoding and recovery from bad data happen in
``CartStore``.
"""

import json
import os
from abc import ABC, abstractmethod
from pathlib import Path

CART_KEY = "cart"


class CartStorage(ABC):
    """Abstract string key-value slot."""

    @abstractmethod
    def read(self, key: str) -> str | None:
        """Return the stored value, or None when nothing is stored."""
        ...

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Replace the stored value."""
        ...


class MemoryStorage(CartStorage):
    """In-process storage, useful for tests and short-lived sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.values: dict[str, str] = dict(initial or {})
        self.writes: int = 0

    def read(self, key: str) -> str | None:
        return self.values.get(key)

    def write(self, key: str, value: str) -> None:
        self.values[key] = value
        self.writes += 1


class FileStorage(CartStorage):
    """Keeps every key in a single JSON file, rewritten atomically on each write."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def _load(self) -> dict:
        if not self.path.exists():
            return {}
        with self.path.open(encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, dict) else {}

    def read(self, key: str) -> str | None:
        return self._load().get(key)

    def write(self, key: str, value: str) -> None:
        try:
            data = self._load()
        except (OSError, ValueError):
            data = {}
        data[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump(data, f)
        os.replace(tmp_path, self.path)
