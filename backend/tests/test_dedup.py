# backend/tests/test_dedup.py
from __future__ import annotations

from edara.domain.dedup import DedupFilter


def test_dedup_seeds_from_existing_and_remembers_accepted():
    f = DedupFilter(["overdue-1", None, ""])
    assert "overdue-1" in f
    assert not f.is_new("overdue-1")
    assert f.is_new("reminder-1")
    assert not f.is_new("reminder-1")
    assert not f.is_new("")
