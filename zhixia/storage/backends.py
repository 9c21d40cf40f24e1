"""Key-value persistence backends for the project store."""
import json
import os
from pathlib import Path
from typing import Dict, Optional, Protocol

from ..utils.logging import get_logger


class StorageBackend(Protocol):
    """Synchronous key-value medium holding serialized strings."""

    def load(self, key: str) -> Optional[str]:
        ...

    def save(self, key: str, value: str) -> None:
        ...


class MemoryBackend:
    """Dict-backed backend for tests and embedding."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def save(self, key: str, value: str) -> None:
        self.data[key] = value


class JsonFileBackend:
    """
    Backend storing every key in a single JSON object on disk.

    The file maps keys to their string values. It is rewritten whole on
    each save; a missing or unreadable file behaves as an empty store.
    """

    def __init__(self, path: Path):
        """
        Initialize the backend.

        Args:
            path: Location of the JSON file (created on first save)
        """
        self.path = Path(path)
        self.logger = get_logger("storage")

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            # ValueError covers JSONDecodeError and UnicodeDecodeError
            self.logger.warning(f"Ignoring unreadable storage file {self.path}: {e}")
            return {}

        if not isinstance(data, dict):
            self.logger.warning(f"Ignoring storage file {self.path}: expected an object, got {type(data).__name__}")
            return {}

        return data

    def load(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        if value is not None and not isinstance(value, str):
            self.logger.warning(f"Ignoring non-string value stored under '{key}'")
            return None
        return value

    def save(self, key: str, value: str) -> None:
        data = self._read_all()
        data[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_name(self.path.name + '.tmp')
        with open(tmp_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)
        os.replace(tmp_path, self.path)
