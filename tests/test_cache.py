import random
import threading
import unittest

from blueprintpy import NONE, BoundedCache, Runtime, Some, TestLogger


run = Runtime.default.run


def make_cache(capacity: int = 5, log: TestLogger | None = None) -> BoundedCache:
    return run(BoundedCache.make(log or TestLogger(), capacity))


class TestBoundedCache(unittest.TestCase):
    def test_get_set(self):
        cache = make_cache()
        self.assertIs(run(cache.get("a")), NONE)
        run(cache.set("a", 1))
        self.assertEqual(run(cache.get("a")), Some(1))

    def test_operations_are_lazy(self):
        cache = make_cache()
        pending = cache.set("a", 1)
        self.assertIs(run(cache.get("a")), NONE)
        run(pending)
        self.assertEqual(run(cache.get("a")), Some(1))

    def test_capacity_bound(self):
        cache = make_cache(3)
        for k in ["k1", "k2", "k3", "k4"]:
            run(cache.set(k, k.upper()))
        self.assertIs(run(cache.get("k1")), NONE)
        for k in ["k2", "k3", "k4"]:
            self.assertEqual(run(cache.get(k)), Some(k.upper()))

    def test_eviction_is_fifo_and_reads_do_not_refresh(self):
        cache = make_cache(5)
        for i in range(1, 6):
            run(cache.set(f"k{i}", i))
        # reading k1 must not save it from eviction
        self.assertEqual(run(cache.get("k1")), Some(1))
        run(cache.set("k6", 6))
        self.assertIs(run(cache.get("k1")), NONE)
        for i in range(2, 7):
            self.assertEqual(run(cache.get(f"k{i}")), Some(i))
        mapping, order = run(cache.snapshot())
        self.assertEqual(order, ("k2", "k3", "k4", "k5", "k6"))
        self.assertEqual(len(mapping), 5)

    def test_overwrite_does_not_evict_or_reorder(self):
        cache = make_cache(2)
        run(cache.set("a", 1))
        run(cache.set("b", 2))
        run(cache.set("a", 10))
        mapping, order = run(cache.snapshot())
        self.assertEqual(mapping, {"a": 10, "b": 2})
        self.assertEqual(order, ("a", "b"))
        run(cache.set("c", 3))
        self.assertIs(run(cache.get("a")), NONE)

    def test_unset_is_idempotent(self):
        cache = make_cache()
        run(cache.set("a", 1))
        run(cache.set("b", 2))
        run(cache.unset("a"))
        once = run(cache.snapshot())
        run(cache.unset("a"))
        self.assertEqual(run(cache.snapshot()), once)
        self.assertEqual(once, ({"b": 2}, ("b",)))
        run(cache.unset("missing"))

    def test_unset_frees_capacity(self):
        cache = make_cache(2)
        run(cache.set("a", 1)); run(cache.set("b", 2))
        run(cache.unset("a"))
        run(cache.set("c", 3))
        self.assertEqual(run(cache.get("b")), Some(2))
        self.assertEqual(run(cache.get("c")), Some(3))

    def test_none_values_are_hits(self):
        cache = make_cache()
        run(cache.set("a", None))
        self.assertEqual(run(cache.get("a")), Some(None))

    def test_logging(self):
        log = TestLogger()
        cache = make_cache(1, log)
        run(cache.get(1))
        run(cache.set(1, "x"))
        run(cache.get(1))
        run(cache.set(2, "y"))
        run(cache.unset(2))
        self.assertEqual(run(log.messages()), [
            ("debug", "Getting key #1"),
            ("info", "miss!"),
            ("debug", "Setting key #1"),
            ("debug", "Getting key #1"),
            ("info", "hit!"),
            ("debug", "Setting key #2"),
            ("debug", "Removing key #1"),
            ("debug", "Unsetting key #2"),
        ])

    def test_rejects_non_positive_capacity(self):
        with self.assertRaises(ValueError):
            make_cache(0)

    def test_concurrent_callers_keep_invariants(self):
        capacity = 5
        cache = make_cache(capacity)
        errors = []

        def worker(seed: int) -> None:
            rng = random.Random(seed)
            for _ in range(300):
                key = rng.randrange(1, 11)
                op = rng.random()
                if op < 0.5:
                    run(cache.set(key, f"Tag #{key}"))
                elif op < 0.8:
                    found = run(cache.get(key))
                    if found.is_some() and found.value != f"Tag #{key}":
                        errors.append(("bad value", key, found))
                else:
                    run(cache.unset(key))
                mapping, order = run(cache.snapshot())
                if len(mapping) > capacity or len(order) != len(set(order)) or set(order) != set(mapping):
                    errors.append(("inconsistent", mapping, order))

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(6)]
        for t in threads: t.start()
        for t in threads: t.join()
        self.assertEqual(errors, [])
