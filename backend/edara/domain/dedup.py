# backend/edara/domain/dedup.py
from __future__ import annotations

from typing import Iterable, Optional


class DedupFilter:
    """
    At-most-once gate for alert keys (related_id) within one scan.

    The persisted key snapshot is taken once at scan start; keys accepted during
    the pass are remembered so the same key cannot be proposed twice in one batch.
    Concurrent scans are not coordinated: two passes that start from the same
    snapshot can both accept a key.
    """

    def __init__(self, existing_keys: Iterable[Optional[str]]) -> None:
        self._seen: set[str] = {k for k in existing_keys if k}

    def is_new(self, key: str) -> bool:
        if not key or key in self._seen:
            return False
        self._seen.add(key)
        return True

    def __contains__(self, key: object) -> bool:
        return key in self._seen
