"""
Per-visitor controller state.

Holds the record caches used to refill edit forms without a second
backend round trip, and the "which record is being edited" state for the
education and publication forms.
"""

import threading
import uuid
from collections import OrderedDict
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Union

RecordId = Union[int, str]

MAX_VISITORS = 1000


def normalize_id(record_id: Any) -> Optional[RecordId]:
    """
    Normalize a record id so "3" (from a URL) and 3 (from JSON) match.

    Returns None for missing or blank ids.
    """
    if record_id is None or isinstance(record_id, bool):
        return None
    if isinstance(record_id, int):
        return record_id
    text = str(record_id).strip()
    if not text:
        return None
    try:
        return int(text)
    except ValueError:
        return text


class RecordStore:
    """Map of id -> last fetched record; rebuilt on every list reload."""

    def __init__(self):
        self._records: Dict[RecordId, Dict[str, Any]] = {}

    def replace(self, records: Iterable[Dict[str, Any]]) -> None:
        self._records.clear()
        for record in records or []:
            record_id = normalize_id(record.get("id"))
            if record_id is not None:
                self._records[record_id] = record

    def get(self, record_id: Any) -> Optional[Dict[str, Any]]:
        key = normalize_id(record_id)
        if key is None:
            return None
        return self._records.get(key)

    def clear(self) -> None:
        self._records.clear()

    def __contains__(self, record_id: Any) -> bool:
        return self.get(record_id) is not None

    def __len__(self) -> int:
        return len(self._records)


class EditingState:
    """Tracks whether a form edits an existing record or creates a new one."""

    def __init__(self):
        self.editing_id: Optional[RecordId] = None

    @property
    def is_creating(self) -> bool:
        return self.editing_id is None

    def begin(self, record_id: Any) -> None:
        self.editing_id = normalize_id(record_id)

    def reset(self) -> None:
        self.editing_id = None

    def is_editing(self, record_id: Any) -> bool:
        key = normalize_id(record_id)
        return key is not None and key == self.editing_id


@dataclass
class ControllerState:
    """Everything the dashboard remembers for one visitor between requests."""
    education_store: RecordStore = field(default_factory=RecordStore)
    publication_store: RecordStore = field(default_factory=RecordStore)
    education_editing: EditingState = field(default_factory=EditingState)
    publication_editing: EditingState = field(default_factory=EditingState)


class StateRegistry:
    """
    Process-local map of visitor key -> ControllerState.

    The visitor key lives in the signed Flask session; the state itself
    stays server side. Least recently used visitors are evicted beyond
    max_visitors.
    """

    def __init__(self, max_visitors: int = MAX_VISITORS):
        self.max_visitors = max_visitors
        self._states: "OrderedDict[str, ControllerState]" = OrderedDict()
        self._lock = threading.Lock()

    @staticmethod
    def new_key() -> str:
        return uuid.uuid4().hex

    def get(self, key: str) -> ControllerState:
        """Return the state for key, creating it on first use."""
        with self._lock:
            state = self._states.get(key)
            if state is None:
                state = ControllerState()
                self._states[key] = state
                while len(self._states) > self.max_visitors:
                    self._states.popitem(last=False)
            else:
                self._states.move_to_end(key)
            return state

    def discard(self, key: str) -> None:
        with self._lock:
            self._states.pop(key, None)

    def __len__(self) -> int:
        return len(self._states)
