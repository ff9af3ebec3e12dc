"""
Tests for per-visitor state (dashboard/stores.py).
"""

from dashboard.stores import EditingState, RecordStore, StateRegistry, normalize_id


class TestNormalizeId:
    def test_numeric_string(self):
        assert normalize_id("3") == 3

    def test_int(self):
        assert normalize_id(3) == 3

    def test_non_numeric_string(self):
        assert normalize_id("abc-1") == "abc-1"

    def test_blank(self):
        assert normalize_id("") is None
        assert normalize_id(None) is None


class TestRecordStore:
    def test_replace_rebuilds(self):
        store = RecordStore()
        store.replace([{"id": 1, "title": "A"}, {"id": 2, "title": "B"}])
        store.replace([{"id": 3, "title": "C"}])

        assert len(store) == 1
        assert store.get(1) is None
        assert store.get("3") == {"id": 3, "title": "C"}

    def test_records_without_id_skipped(self):
        store = RecordStore()
        store.replace([{"title": "orphan"}])
        assert len(store) == 0

    def test_contains(self):
        store = RecordStore()
        store.replace([{"id": 5}])
        assert "5" in store
        assert 6 not in store


class TestEditingState:
    def test_starts_creating(self):
        assert EditingState().is_creating

    def test_begin_and_reset(self):
        editing = EditingState()
        editing.begin("4")
        assert editing.editing_id == 4
        assert editing.is_editing(4)
        assert editing.is_editing("4")

        editing.reset()
        assert editing.is_creating
        assert not editing.is_editing(4)


class TestStateRegistry:
    def test_same_key_same_state(self):
        registry = StateRegistry()
        assert registry.get("a") is registry.get("a")
        assert registry.get("a") is not registry.get("b")

    def test_evicts_least_recently_used(self):
        registry = StateRegistry(max_visitors=2)
        first = registry.get("a")
        second = registry.get("b")
        registry.get("a")
        registry.get("c")

        assert len(registry) == 2
        assert registry.get("a") is first
        # "b" was evicted, so it comes back fresh
        assert registry.get("b") is not second

    def test_discard(self):
        registry = StateRegistry()
        registry.get("a")
        registry.discard("a")
        assert len(registry) == 0
