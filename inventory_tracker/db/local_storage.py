import logging
import json
import os
import time
from typing import Dict, Optional

from ..exceptions import PersistenceError
from ..utils.config import DATA_DIRECTORY, STORE_FILE

logger = logging.getLogger(__name__)

class LocalStorage:
    """
    Synchronous key-value store backed by a single JSON file.

    Values are strings, the way a browser's local storage holds them; callers
    serialize their own data before storing it.
    """

    def __init__(self, directory: Optional[str] = None, filename: Optional[str] = None,
                 max_attempts: int = 3, retry_delay: float = 0.5):
        """Initialize the store, creating the directory if needed."""
        self.directory = directory or DATA_DIRECTORY
        self.path = os.path.join(self.directory, filename or STORE_FILE)
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        try:
            os.makedirs(self.directory, exist_ok=True)
            logger.info(f"Local storage initialized at {self.path}")
        except OSError as e:
            logger.error(f"Failed to initialize local storage: {str(e)}")
            raise PersistenceError(f"Cannot create storage directory {self.directory}", e)

    def _read_entries(self) -> Dict[str, str]:
        """Read every stored entry from the JSON file."""
        try:
            with open(self.path, 'r') as f:
                entries = json.load(f)
        except FileNotFoundError:
            return {}
        except json.JSONDecodeError:
            logger.error(f"Error decoding JSON from {self.path}, treating store as empty")
            return {}
        except OSError as e:
            raise PersistenceError(f"Cannot read {self.path}", e)

        if not isinstance(entries, dict):
            logger.error(f"Unexpected content in {self.path}, treating store as empty")
            return {}
        return entries

    def _write_entries(self, entries: Dict[str, str]) -> None:
        """Write all entries to the JSON file with retry logic."""
        last_error = None
        for attempt in range(self.max_attempts):
            try:
                with open(self.path, 'w') as f:
                    json.dump(entries, f, indent=2)
                return
            except OSError as e:
                last_error = e
                logger.error(f"Error writing to {self.path} (attempt {attempt+1}/{self.max_attempts}): {str(e)}")
                if attempt < self.max_attempts - 1:
                    time.sleep(self.retry_delay)
        raise PersistenceError(f"Failed to write {self.path} after {self.max_attempts} attempts", last_error)

    def get_item(self, key: str) -> Optional[str]:
        """
        Get the value stored under a key.

        Args:
            key: Storage key.

        Returns:
            The stored string, or None if the key is absent.
        """
        value = self._read_entries().get(key)
        if value is not None and not isinstance(value, str):
            # Hand-edited files may hold raw JSON instead of a string
            value = json.dumps(value)
        return value

    def set_item(self, key: str, value: str) -> None:
        """
        Store a value under a key, replacing any previous value.

        Raises:
            PersistenceError: if the file cannot be written.
        """
        entries = self._read_entries()
        entries[key] = value
        self._write_entries(entries)
        logger.debug(f"Stored {len(value)} characters under '{key}'")
