"""Key-value store persisted to a local JSON file."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from diet_planner.domain.errors import PersistenceReadError
from diet_planner.services.persistence import KeyValueStore

_logger = logging.getLogger(__name__)


@dataclass
class JsonFileKeyValueStore(KeyValueStore):
    """Holds serialized values in memory and rewrites the file on each change."""

    path: Path
    _entries: dict[str, str] = field(default_factory=dict)

    @classmethod
    def create(cls, path: str | Path) -> "JsonFileKeyValueStore":
        """Load the store from disk, starting empty if the file is unusable."""
        resolved = Path(path)
        return cls(path=resolved, _entries=_load_entries(resolved))

    def get(self, key: str) -> object | None:
        """Decode the value stored under a key."""
        raw = self._entries.get(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise PersistenceReadError(f"Stored value for {key} is not JSON") from exc

    def set(self, key: str, value: object) -> None:
        """Serialize a value and write the whole file."""
        self._entries[key] = json.dumps(value, ensure_ascii=False)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        tmp_path.write_text(
            json.dumps(self._entries, ensure_ascii=False, indent=2), encoding="utf-8"
        )
        tmp_path.replace(self.path)


def _load_entries(path: Path) -> dict[str, str]:
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        _logger.exception("Failed to read state file", extra={"path": str(path)})
        return {}
    if not isinstance(data, dict):
        _logger.warning("State file is not an object", extra={"path": str(path)})
        return {}
    return {str(key): value for key, value in data.items() if isinstance(value, str)}
