"""Key-value persistence for the serialized budget state.

The store only ever sees opaque strings. ``encode_budget_data`` and
``decode_budget_data`` convert between :class:`BudgetData` and that blob.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, Optional, Protocol

from . import config
from .logging_setup import get_logger
from .models import BudgetData

logger = get_logger(__name__)


class KeyValueStore(Protocol):
    """Anything that can hold string blobs under string keys."""

    def load(self, key: str) -> Optional[str]:
        ...

    def save(self, key: str, blob: str) -> None:
        ...


class MemoryStore:
    """In-process store; nothing survives the session."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._blobs: Dict[str, str] = dict(initial or {})

    def load(self, key: str) -> Optional[str]:
        return self._blobs.get(key)

    def save(self, key: str, blob: str) -> None:
        self._blobs[key] = blob


class JsonFileStore:
    """All keys live in one JSON object on disk.

    Every ``save`` rewrites the whole file, so concurrent writers resolve as
    last-writer-wins.
    """

    def __init__(self, path: Optional[Path] = None):
        """Initialize the file store.

        Args:
            path: Optional custom file location. Defaults to ``STATE_FILE``
                  from config.
        """
        self.path = Path(path) if path is not None else config.STATE_FILE

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open('r', encoding='utf-8') as handle:
                data = json.load(handle)
        except (json.JSONDecodeError, OSError, UnicodeDecodeError) as exc:
            logger.warning("Ignoring unreadable state file %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring state file %s: top level is not an object", self.path)
            return {}
        return data

    def load(self, key: str) -> Optional[str]:
        value = self._read_all().get(key)
        return value if isinstance(value, str) else None

    def save(self, key: str, blob: str) -> None:
        """Write ``blob`` under ``key``, keeping other keys intact.

        Raises:
            OSError: If the file cannot be written
        """
        payload = self._read_all()
        payload[key] = blob
        self.path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with self.path.open('w', encoding='utf-8') as handle:
                json.dump(payload, handle, indent=2, sort_keys=True)
        except OSError as e:
            raise OSError(f"Failed to save budget state to {self.path}: {e}") from e


def encode_budget_data(data: BudgetData) -> str:
    return json.dumps(data.to_dict())


def decode_budget_data(blob: str) -> BudgetData:
    """Parse a stored blob.

    Raises:
        ValueError: If the blob is not JSON or does not have the BudgetData shape.
    """
    try:
        payload = json.loads(blob)
    except (TypeError, json.JSONDecodeError) as exc:
        raise ValueError(f"budget blob is not valid JSON: {exc}") from exc
    return BudgetData.from_dict(payload)
