"""Tests for the JSON-file-backed stores."""

import json
import threading

import pytest

from wms.domain.exceptions import InsufficientStock, OrderAlreadyFulfilled, UnknownOrder
from wms.domain.model.order import OrderStatus
from wms.domain.model.shelf import FulfillmentLine
from wms.infrastructure.persistence.json_book_catalog import JsonBookCatalog
from wms.infrastructure.persistence.json_file import JsonFile, StorageError
from wms.infrastructure.persistence.json_order_store import JsonOrderStore
from wms.infrastructure.persistence.json_shelf_ledger import JsonShelfLedger
from wms.infrastructure.persistence.record_locks import RecordLocks
from tests.fakes import make_book


class TestJsonShelfLedger:

    def test_creates_file_on_first_use(self, tmp_path):
        path = tmp_path / "nested" / "shelves.json"
        JsonShelfLedger(path)
        assert json.loads(path.read_text()) == []

    def test_place_and_locate(self, tmp_path):
        ledger = JsonShelfLedger(tmp_path / "shelves.json")
        ledger.place("b1", "S1", 5)
        ledger.place("b1", "S1", 2)
        ledger.place("b1", "S2", 1)
        ledger.place("b2", "S1", 9)
        located = {r.shelf_id: r.count for r in ledger.locate("b1")}
        assert located == {"S1": 7, "S2": 1}

    def test_locate_unknown_is_empty(self, tmp_path):
        assert JsonShelfLedger(tmp_path / "shelves.json").locate("b1") == []

    def test_state_survives_reopen(self, tmp_path):
        path = tmp_path / "shelves.json"
        JsonShelfLedger(path).place("b1", "S1", 4)
        assert [r.count for r in JsonShelfLedger(path).locate("b1")] == [4]

    def test_try_decrement_applies_batch(self, tmp_path):
        ledger = JsonShelfLedger(tmp_path / "shelves.json")
        ledger.place("b1", "S1", 5)
        ledger.place("b2", "S1", 5)
        ledger.try_decrement([FulfillmentLine("b1", "S1", 2), FulfillmentLine("b2", "S1", 5)])
        assert [r.count for r in ledger.locate("b1")] == [3]
        assert [r.count for r in ledger.locate("b2")] == [0]

    def test_try_decrement_is_all_or_nothing(self, tmp_path):
        path = tmp_path / "shelves.json"
        ledger = JsonShelfLedger(path)
        ledger.place("b1", "S1", 5)
        ledger.place("b2", "S1", 1)
        before = path.read_text()

        with pytest.raises(InsufficientStock, match="book b2 on shelf S1"):
            ledger.try_decrement([FulfillmentLine("b1", "S1", 2), FulfillmentLine("b2", "S1", 2)])

        assert path.read_text() == before

    def test_try_decrement_missing_record(self, tmp_path):
        ledger = JsonShelfLedger(tmp_path / "shelves.json")
        with pytest.raises(InsufficientStock) as exc_info:
            ledger.try_decrement([FulfillmentLine("b1", "S1", 1)])
        assert exc_info.value.available == 0

    def test_concurrent_placements_not_lost(self, tmp_path):
        ledger = JsonShelfLedger(tmp_path / "shelves.json")

        def place(shelf: str) -> None:
            for _ in range(10):
                ledger.place("b1", shelf, 1)

        threads = [threading.Thread(target=place, args=(f"S{i % 3}",)) for i in range(6)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sum(r.count for r in ledger.locate("b1")) == 60

    def test_corrupt_file_raises_storage_error(self, tmp_path):
        path = tmp_path / "shelves.json"
        path.write_text("{not json")
        with pytest.raises(StorageError, match="Cannot read"):
            JsonShelfLedger(path).locate("b1")


class TestJsonOrderStore:

    def test_create_and_get(self, tmp_path):
        store = JsonOrderStore(tmp_path / "orders.json")
        order_id = store.create(["b1", "b2", "b1"])
        order = store.get(order_id)
        assert dict(order.requested_counts) == {"b1": 2, "b2": 1}
        assert order.status == OrderStatus.PENDING

    def test_get_missing(self, tmp_path):
        assert JsonOrderStore(tmp_path / "orders.json").get("order_1_abcdefghi") is None

    def test_list_is_lazy_and_complete(self, tmp_path):
        store = JsonOrderStore(tmp_path / "orders.json")
        ids = {store.create(["b1"]) for _ in range(3)}
        listing = store.list()
        assert not isinstance(listing, list)
        assert {o.id for o in listing} == ids

    def test_persisted_layout(self, tmp_path):
        path = tmp_path / "orders.json"
        order_id = JsonOrderStore(path).create(["b1"])
        (raw,) = json.loads(path.read_text())
        assert raw["order_id"] == order_id
        assert raw["requested_counts"] == {"b1": 1}
        assert raw["status"] == "pending"
        assert "created_at" in raw

    def test_mark_fulfilled(self, tmp_path):
        path = tmp_path / "orders.json"
        order_id = JsonOrderStore(path).create(["b1"])
        JsonOrderStore(path).mark_fulfilled(order_id)
        assert JsonOrderStore(path).get(order_id).status == OrderStatus.FULFILLED

    def test_mark_fulfilled_twice_rejected(self, tmp_path):
        store = JsonOrderStore(tmp_path / "orders.json")
        order_id = store.create(["b1"])
        store.mark_fulfilled(order_id)
        with pytest.raises(OrderAlreadyFulfilled):
            store.mark_fulfilled(order_id)

    def test_mark_fulfilled_missing_rejected(self, tmp_path):
        store = JsonOrderStore(tmp_path / "orders.json")
        with pytest.raises(UnknownOrder):
            store.mark_fulfilled("order_1_abcdefghi")


class TestJsonBookCatalog:

    def test_save_and_get(self, tmp_path):
        catalog = JsonBookCatalog(tmp_path / "books.json")
        catalog.save(make_book("1", "Giant's Bread", price="21.86"))
        book = JsonBookCatalog(tmp_path / "books.json").get_by_id("1")
        assert book.name == "Giant's Bread"
        assert str(book.price) == "$21.86"

    def test_exists(self, tmp_path):
        catalog = JsonBookCatalog(tmp_path / "books.json")
        catalog.save(make_book("1"))
        assert catalog.exists("1")
        assert not catalog.exists("2")

    def test_list_all(self, tmp_path):
        catalog = JsonBookCatalog(tmp_path / "books.json")
        catalog.save(make_book("1"))
        catalog.save(make_book("2"))
        assert sorted(b.id for b in catalog.list_all()) == ["1", "2"]


class TestRecordLocks:

    def test_reentrant(self):
        locks = RecordLocks()
        with locks.hold(["a", "b"]):
            with locks.hold(["b"]):
                pass

    def test_blocks_other_threads_on_same_key(self):
        locks = RecordLocks()
        entered = threading.Event()

        def contender() -> None:
            with locks.hold(["a"]):
                entered.set()

        with locks.hold(["a", "z"]):
            t = threading.Thread(target=contender)
            t.start()
            assert not entered.wait(0.1)
        t.join(timeout=2)
        assert entered.is_set()

    def test_locks_dropped_when_released(self):
        locks = RecordLocks()
        with locks.hold(["a", "b"]):
            with locks.hold(["b", "c"]):
                assert len(locks) == 3
            assert len(locks) == 2
        assert len(locks) == 0

    def test_waiting_holder_keeps_lock_alive(self):
        locks = RecordLocks()
        entered = threading.Event()

        def contender() -> None:
            with locks.hold(["a"]):
                entered.set()

        with locks.hold(["a"]):
            t = threading.Thread(target=contender)
            t.start()
            assert not entered.wait(0.1)
            assert len(locks) == 1
        t.join(timeout=2)
        assert entered.is_set()
        assert len(locks) == 0


class TestJsonFileLock:

    def test_excludes_other_instances_on_same_file(self, tmp_path):
        path = tmp_path / "shelves.json"
        mine, theirs = JsonFile(path), JsonFile(path)
        entered = threading.Event()

        def contender() -> None:
            with theirs.locked():
                entered.set()

        with mine.locked():
            t = threading.Thread(target=contender)
            t.start()
            assert not entered.wait(0.1)
        t.join(timeout=2)
        assert entered.is_set()

    def test_reentrant_in_one_thread(self, tmp_path):
        data = JsonFile(tmp_path / "orders.json")
        with data.locked():
            with data.locked():
                data.persist([{"order_id": "x"}])
        assert data.load() == [{"order_id": "x"}]

    def test_separate_ledgers_see_each_others_writes(self, tmp_path):
        path = tmp_path / "shelves.json"
        first, second = JsonShelfLedger(path), JsonShelfLedger(path)
        first.place("b1", "S1", 3)
        second.place("b1", "S1", 4)
        second.try_decrement([FulfillmentLine("b1", "S1", 2)])
        assert [r.count for r in first.locate("b1")] == [5]
