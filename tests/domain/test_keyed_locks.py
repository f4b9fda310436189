"""Tests for keyed locking of concurrent stock writes."""

import threading

from fut75.domain.model.product import Product
from fut75.domain.model.value_objects import Money
from fut75.domain.service.keyed_locks import KeyedLocks
from fut75.domain.service.stock_ledger import StockLedger
from tests.fakes import FakeProductRepository


class TestKeyedLocks:

    def test_locks_are_reentrant(self):
        locks = KeyedLocks()
        with locks.hold(["1", "order:abc"]):
            with locks.hold(["1"]):
                pass

    def test_duplicate_keys_are_held_once(self):
        locks = KeyedLocks()
        with locks.hold(["1", "1", "2"]):
            pass

    def test_other_threads_wait_for_the_key(self):
        locks = KeyedLocks()
        entered = threading.Event()

        def worker():
            with locks.hold(["1"]):
                entered.set()

        with locks.hold(["1"]):
            thread = threading.Thread(target=worker)
            thread.start()
            assert not entered.wait(timeout=0.1)
        thread.join(timeout=2)
        assert entered.is_set()


class TestConcurrentDecrements:

    def test_no_lost_updates(self):
        product = Product(
            id="1", name="Brasil Home", category="Seleções", price=Money.of("149.90"),
            sizes=["M"], stock_by_size={"M": 200}, stock=200,
        )
        repo = FakeProductRepository([product])
        ledger = StockLedger(repo)

        threads = [
            threading.Thread(target=lambda: [ledger.decrement("1", "M", 1) for _ in range(10)])
            for _ in range(10)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert repo.get_by_id("1").quantity_for("M") == 100
        assert repo.get_by_id("1").stock == 100
