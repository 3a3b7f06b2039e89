"""
Pet state persistence system.
Key-value storage for small JSON records such as the needs snapshot.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Union
import copy
import json
import shutil
from pathlib import Path

class PersistenceError(Exception):
    """Raised when a record cannot be read or written."""

class KeyValueStore(ABC):
    """A store mapping string keys to JSON-serializable dicts."""

    @abstractmethod
    def load(self, key: str) -> Optional[Dict[str, Any]]:
        """
        Return the record stored under key, or None when absent.

        Raises:
            PersistenceError: if the record exists but cannot be read
        """

    @abstractmethod
    def save(self, key: str, record: Dict[str, Any]) -> None:
        """
        Store record under key, replacing any previous value.

        Raises:
            PersistenceError: if the record cannot be written
        """

class MemoryStore(KeyValueStore):
    """In-process store, used headless and in tests."""

    def __init__(self, initial: Optional[Dict[str, Dict[str, Any]]] = None):
        self.records: Dict[str, Dict[str, Any]] = copy.deepcopy(initial) if initial else {}

    def load(self, key: str) -> Optional[Dict[str, Any]]:
        record = self.records.get(key)
        return copy.deepcopy(record) if record is not None else None

    def save(self, key: str, record: Dict[str, Any]) -> None:
        self.records[key] = copy.deepcopy(record)

class JsonFileStore(KeyValueStore):
    """
    Stores each key as <state_dir>/<key>.json.
    The previous version is kept as <key>.json.bak and used when the main
    file is unreadable.
    """

    def __init__(self, state_dir: Union[str, Path] = 'data/state'):
        self.state_dir = Path(state_dir)
        self.state_dir.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.state_dir / f"{key}.json"

    def _backup_path(self, key: str) -> Path:
        return self.state_dir / f"{key}.json.bak"

    def load(self, key: str) -> Optional[Dict[str, Any]]:
        """
        Load most recent valid record.
        Falls back to the backup if the main file is corrupted.
        """
        main_file = self._path(key)
        backup_file = self._backup_path(key)
        if not main_file.exists() and not backup_file.exists():
            return None

        errors = []
        for path in (main_file, backup_file):
            if not path.exists():
                continue
            try:
                return self._read(path)
            except (OSError, ValueError) as e:
                errors.append(f"{path.name}: {e}")

        raise PersistenceError(f"Could not read '{key}': {'; '.join(errors)}")

    def save(self, key: str, record: Dict[str, Any]) -> None:
        main_file = self._path(key)
        tmp_file = main_file.with_suffix('.json.tmp')
        try:
            with open(tmp_file, 'w', encoding='utf-8') as f:
                json.dump(record, f, indent=2, ensure_ascii=False)
            if self._is_readable(main_file):
                shutil.copyfile(main_file, self._backup_path(key))
            tmp_file.replace(main_file)
        except (OSError, TypeError, ValueError) as e:
            raise PersistenceError(f"Could not write '{key}': {e}") from e

    def _is_readable(self, path: Path) -> bool:
        # a corrupt main file must not replace the last good backup
        if not path.exists():
            return False
        try:
            self._read(path)
        except (OSError, ValueError):
            return False
        return True

    def _read(self, path: Path) -> Dict[str, Any]:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"expected an object, got {type(data).__name__}")
        return data
