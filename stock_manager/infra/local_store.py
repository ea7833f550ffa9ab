"""Local durable key-value storage.

A file-backed equivalent of browser local storage: string values under
string keys, persisted as one JSON document. Structured values are stored
JSON-encoded, so the file holds exactly what the web client kept in
``localStorage``.
"""

import json
import os
import tempfile
from pathlib import Path
from typing import Any

from stock_manager.config import settings
from stock_manager.infra.logging import get_logger

logger = get_logger(__name__)


class StorageKeys:
    """Keys of the persisted local state."""

    PRODUCTS = "sms_products"
    CATEGORIES = "sms_categories"
    DB_URL = "sms_db_url"
    DB_KEY = "sms_db_key"


class LocalStore:
    """File-backed key-value store with JSON helpers."""

    def __init__(self, path: Path | str | None = None) -> None:
        """Initialize local store.

        Args:
            path: JSON file location. Defaults to settings.local_storage_path.
        """
        self.path = Path(path or settings.local_storage_path)

    def _read_all(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning("Local storage file is corrupt, ignoring it", path=str(self.path), error=str(e))
            return {}
        if not isinstance(data, dict):
            logger.warning("Local storage file has unexpected shape, ignoring it", path=str(self.path))
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".sms-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f, ensure_ascii=False, indent=2)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def get_item(self, key: str) -> str | None:
        """Get the raw string stored under a key, or None."""
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        """Store a raw string under a key."""
        data = self._read_all()
        data[key] = value
        self._write_all(data)

    def remove_item(self, key: str) -> None:
        """Delete a key. Missing keys are ignored."""
        data = self._read_all()
        if key in data:
            del data[key]
            self._write_all(data)

    def has_item(self, key: str) -> bool:
        return key in self._read_all()

    def get_json(self, key: str, default: Any = None) -> Any:
        """Decode the JSON value stored under a key.

        Returns ``default`` when the key is absent or its value is not valid JSON.
        """
        raw = self.get_item(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Corrupt local value, using default", key=key, error=str(e))
            return default

    def set_json(self, key: str, value: Any) -> None:
        """JSON-encode and store a value."""
        self.set_item(key, json.dumps(value, ensure_ascii=False))

    def is_readable(self) -> bool:
        """Check that the backing file can be read (or does not exist yet)."""
        if not self.path.exists():
            return True
        return os.access(self.path, os.R_OK)
