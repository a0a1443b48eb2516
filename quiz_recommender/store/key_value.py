"""
Key-value store adapters for persisted quiz state.

The engine only ever *reads* from the store: one lookup per registered
quiz for its completion key, and one for its result key when the two
differ.  Writing quiz state is the quiz UI's job.

Implementations
---------------
InMemoryStore   dict-backed; used by tests and by hosts that already hold
                the client state in memory.
JsonFileStore   a JSON object on disk (``{"<key>": <record>, ...}``), e.g. a
                browser ``localStorage`` export.  The file is re-read on
                every lookup so recommendations always reflect the latest
                export.

Keys may carry an optional namespace prefix (the web client stores keys as
``shikshanam_<key>``); ``prefix`` is prepended on lookup.  A stored value
that is itself a JSON string (the ``localStorage`` serialisation) is
decoded transparently.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Protocol, runtime_checkable

logger = logging.getLogger(__name__)


@runtime_checkable
class KeyValueStore(Protocol):
    """Anything that can return the record stored under a key, or ``None``."""

    def read(self, key: str) -> Optional[Any]:
        ...


def _decode(value: Any) -> Optional[Any]:
    """Decode a ``localStorage``-style JSON string; pass other values through."""
    if not isinstance(value, str):
        return value
    try:
        return json.loads(value)
    except json.JSONDecodeError:
        logger.debug("Stored value is a plain string, not JSON; returning as-is.")
        return value


class InMemoryStore:
    """Dict-backed store.  ``set()`` and ``remove()`` exist for host and test setup."""

    def __init__(
        self,
        records: Optional[Mapping[str, Any]] = None,
        prefix: str = "",
    ) -> None:
        self._records: dict[str, Any] = dict(records or {})
        self.prefix = prefix

    def read(self, key: str) -> Optional[Any]:
        return _decode(self._records.get(self.prefix + key))

    def set(self, key: str, value: Any) -> None:
        self._records[self.prefix + key] = value

    def remove(self, key: str) -> None:
        self._records.pop(self.prefix + key, None)

    def __len__(self) -> int:
        return len(self._records)


class JsonFileStore:
    """Store backed by a JSON object file.

    A missing file behaves like an empty store (nobody has taken a quiz
    yet).  So does a file that cannot be decoded or whose top level is not
    a JSON object, for example an export truncated mid-write; that case is
    logged at WARNING so the host can spot it.
    """

    def __init__(self, path: Path | str, prefix: str = "") -> None:
        self.path = Path(path)
        self.prefix = prefix

    def _load(self) -> dict[str, Any]:
        if not self.path.exists():
            logger.debug("Store file %s does not exist; treating as empty.", self.path)
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
            logger.warning("Failed to load store file %s (%s); treating as empty.", self.path, exc)
            return {}
        if not isinstance(data, dict):
            logger.warning(
                "Store file %s must contain a JSON object, got %s; treating as empty.",
                self.path, type(data).__name__,
            )
            return {}
        return data

    def read(self, key: str) -> Optional[Any]:
        return _decode(self._load().get(self.prefix + key))
