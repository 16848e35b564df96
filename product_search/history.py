import json
from typing import List, Optional, Protocol

from product_search.config import HISTORY_KEY, HISTORY_LIMIT, HISTORY_PATH
from product_search.logging_utils import get_logger
from product_search.storage import JsonFileStorage, KeyValueStorage

logger = get_logger("history")


class HistoryStore(Protocol):
    def record(self, query: str) -> None: ...

    def recent(self) -> List[str]: ...

    def clear(self) -> None: ...


class SearchHistory:
    """
    Most-recent-first list of past queries kept under a single storage key.

    The list is read from storage on every call. Storage failures are logged
    and never raised: reads degrade to an empty history, writes are dropped.
    """

    def __init__(self, storage: KeyValueStorage, key: str = HISTORY_KEY, limit: int = HISTORY_LIMIT):
        self.storage = storage
        self.key = key
        self.limit = limit

    def recent(self) -> List[str]:
        try:
            raw = self.storage.get_item(self.key)
        except Exception as e:
            # Injected storage may raise anything; history just reads as empty
            logger.warning(f"Failed to read search history: {e}")
            return []
        if not raw:
            return []

        try:
            searches = json.loads(raw)
        except ValueError:
            logger.warning("Stored search history is corrupted, ignoring it")
            return []
        if not isinstance(searches, list):
            return []
        return [s for s in searches if isinstance(s, str)][: self.limit]

    def record(self, query: Optional[str]) -> None:
        if not query or not query.strip():
            return

        entry = query.strip()
        updated = [entry] + [s for s in self.recent() if s != entry]
        try:
            self.storage.set_item(self.key, json.dumps(updated[: self.limit]))
        except Exception as e:
            logger.error(f"Failed to track search: {e}")

    def clear(self) -> None:
        try:
            self.storage.remove_item(self.key)
        except Exception as e:
            logger.error(f"Failed to clear search history: {e}")


def default_history() -> SearchHistory:
    """History persisted in the local storage file."""
    return SearchHistory(JsonFileStorage(HISTORY_PATH))
