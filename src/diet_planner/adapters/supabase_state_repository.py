"""Supabase-backed key-value store for app state."""

import json
import logging
from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from diet_planner.domain.errors import PersistenceReadError
from diet_planner.services.persistence import KeyValueStore

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseKeyValueStore(KeyValueStore):
    """Supabase implementation storing serialized values in app_state."""

    client: Client
    table_name: str = "app_state"

    def get(self, key: str) -> object | None:
        """Return the decoded value for a key."""
        try:
            response = (
                self.client.table(self.table_name)
                .select("value")
                .eq("key", key)
                .limit(1)
                .execute()
            )
        except Exception as exc:
            _logger.exception("Supabase read failed", extra={"key": key})
            raise PersistenceReadError(f"Could not read {key}") from exc
        if not response.data:
            return None
        raw = response.data[0].get("value")
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except (TypeError, json.JSONDecodeError) as exc:
            raise PersistenceReadError(f"Stored value for {key} is not JSON") from exc

    def set(self, key: str, value: object) -> None:
        """Insert or replace the value for a key."""
        self.client.table(self.table_name).upsert(
            {
                "key": key,
                "value": json.dumps(value, ensure_ascii=False),
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).execute()
