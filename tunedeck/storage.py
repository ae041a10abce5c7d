"""
Key-Value Store - JSON file persistence for dashboard state.

Every widget keeps its data under its own key in one JSON object.
Writes go to a temp file first and are moved into place, so a crash
mid-write never leaves a truncated store behind.
"""
import json
import os
import logging
import threading
from pathlib import Path
from typing import Any, Optional

logger = logging.getLogger(__name__)


class KeyValueStore:
    """Small JSON-backed key-value store."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self._lock = threading.Lock()
        self._recover_temp_file()

    @property
    def temp_path(self) -> Path:
        return self.path.with_suffix(self.path.suffix + '.tmp')

    def _recover_temp_file(self):
        """Promote a leftover temp file from an interrupted write."""
        temp = self.temp_path
        if not temp.exists():
            return
        try:
            json.loads(temp.read_text(encoding='utf-8'))
            os.replace(temp, self.path)
            logger.info(f'Recovered store from {temp}')
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning(f'Discarding corrupt temp file {temp}')
            temp.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f'Cannot recover temp file {temp}: {e}', exc_info=True)

    def _read_all(self) -> Optional[dict]:
        """Whole store as a dict. None if the file exists but can't be read."""
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding='utf-8'))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning(f'Invalid JSON in store {self.path}: {e}')
            return {}
        except OSError as e:
            logger.error(f'Cannot read store {self.path}: {e}', exc_info=True)
            return None
        if not isinstance(data, dict):
            logger.warning(f'Store {self.path} is not a JSON object, ignoring')
            return {}
        return data

    def get(self, key: str, default: Any = None) -> Any:
        """Read one key. Missing or unreadable data returns default."""
        with self._lock:
            return (self._read_all() or {}).get(key, default)

    def set(self, key: str, value: Any) -> bool:
        """Overwrite one key. Returns False if the write failed."""
        with self._lock:
            data = self._read_all()
            if data is None:
                logger.error(f'Not writing {key!r}, existing store could not be read')
                return False
            data[key] = value
            temp = self.temp_path
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                temp.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding='utf-8')
                os.replace(temp, self.path)
                return True
            except (OSError, TypeError, ValueError) as e:
                logger.error(f'Cannot write store {self.path}: {e}', exc_info=True)
                return False
