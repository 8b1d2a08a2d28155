"""In-memory StatusRepository adapter (Infrastructure)."""

from __future__ import annotations

import threading

from src.domain.exceptions import NotFoundError
from src.domain.ports.status_repository import StatusRepository


class InMemoryStatusRepository(StatusRepository):
    def __init__(self, entity_type: str = "Entity", statuses: dict[str, str] | None = None) -> None:
        self._entity_type = entity_type
        self._data: dict[str, str] = dict(statuses or {})
        self._lock = threading.Lock()

    def get_status(self, entity_id: str) -> str:
        with self._lock:
            if entity_id not in self._data:
                raise NotFoundError(self._entity_type, entity_id)
            return self._data[entity_id]

    def save_status(self, entity_id: str, status: str) -> None:
        with self._lock:
            self._data[entity_id] = status
