"""
Unit tests for the result store
"""
import threading

import pytest
from sqlalchemy import Text

from models.results import StudentResult as StudentResultModel
from services.result_store import ResultNotFoundError


class TestResultStore:
    """create / list / delete / clear_all"""

    def test_ids_start_at_zero_and_increase(self, store, make_record):
        ids = [store.create(make_record(roll=f"R{i}")) for i in range(3)]
        assert ids == [0, 1, 2]

    def test_list_returns_records_in_id_order(self, store, make_record):
        for i in range(4):
            store.create(make_record(name=f"S{i}"))
        records = store.list()
        assert [r.id for r in records] == [0, 1, 2, 3]
        assert [r.student_name for r in records] == ["S0", "S1", "S2", "S3"]

    def test_stored_fields_round_trip(self, store, make_record):
        record = make_record(marks=(34, 90, 90, 90, 90), timestamp=1712345678901)
        result_id = store.create(record)
        stored = store.list()[0]
        assert stored.id == result_id
        assert stored.total == 394
        assert stored.average == 78.8
        assert stored.grade == "Fail"
        assert stored.timestamp == 1712345678901

    def test_store_trusts_caller_derived_fields(self, store, make_record):
        record = make_record().model_copy(update={"grade": "A", "total": 1})
        store.create(record)
        assert store.list()[0].grade == "A"
        assert store.list()[0].total == 1

    def test_deleted_ids_are_not_reused(self, store, make_record):
        first = store.create(make_record())
        second = store.create(make_record())
        store.delete(second)
        third = store.create(make_record())
        assert third == 2
        assert [r.id for r in store.list()] == [first, third]

    def test_delete_unknown_id_fails_without_changes(self, store, make_record):
        store.create(make_record(name="Keep"))
        with pytest.raises(ResultNotFoundError) as exc_info:
            store.delete(42)
        assert exc_info.value.result_id == 42
        assert [r.student_name for r in store.list()] == ["Keep"]

    def test_delete_twice_fails(self, store, make_record):
        result_id = store.create(make_record())
        store.delete(result_id)
        with pytest.raises(ResultNotFoundError):
            store.delete(result_id)

    def test_delete_out_of_range_id_is_not_found(self, store, make_record):
        store.create(make_record())
        with pytest.raises(ResultNotFoundError):
            store.delete(2**70)
        assert len(store.list()) == 1

    def test_text_columns_are_unbounded(self, store, make_record):
        assert isinstance(StudentResultModel.__table__.c.student_name.type, Text)
        assert isinstance(StudentResultModel.__table__.c.roll_number.type, Text)

        name, roll = "N" * 5000, "R" * 500
        store.create(make_record(name=name, roll=roll))
        stored = store.list()[0]
        assert (stored.student_name, stored.roll_number) == (name, roll)

    def test_clear_all_resets_counter(self, store, make_record):
        for _ in range(3):
            store.create(make_record())
        assert store.clear_all() == 3
        assert store.list() == []
        assert store.count() == 0
        assert store.create(make_record()) == 0

    def test_clear_all_on_empty_store(self, store, make_record):
        assert store.clear_all() == 0
        assert store.create(make_record()) == 0

    def test_list_is_a_snapshot(self, store, make_record):
        store.create(make_record())
        snapshot = store.list()
        store.create(make_record())
        assert len(snapshot) == 1

    def test_concurrent_creates_get_unique_ids(self, store, make_record):
        ids = []
        lock = threading.Lock()

        def worker():
            for _ in range(10):
                result_id = store.create(make_record())
                with lock:
                    ids.append(result_id)

        threads = [threading.Thread(target=worker) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(ids) == list(range(50))
        assert [r.id for r in store.list()] == list(range(50))
