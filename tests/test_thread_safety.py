"""
Thread Safety Tests

Tests for concurrent use of one container. get() and set() are
serialized, so a singleton is constructed exactly once no matter how
many threads miss the cache together.
"""

import sys
import os
import unittest
import threading
import time
import concurrent.futures
from typing import List

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from wirebox import Container
from wirebox.resolution_context import _resolution_context

from fixtures import Database


class SlowService:
    """Singleton whose constructor is slow enough to overlap threads"""

    instances = 0

    def __init__(self, db: Database):
        time.sleep(0.01)
        SlowService.instances += 1
        self.db = db
        self.thread_id = threading.current_thread().ident


class TestConcurrentResolution(unittest.TestCase):

    def setUp(self):
        SlowService.instances = 0

    def test_singleton_constructed_once(self):
        """Many threads resolving the same singleton get one instance."""
        container = Container()
        barrier = threading.Barrier(10)
        results: List[SlowService] = []
        errors: List[Exception] = []

        def resolve_in_thread():
            try:
                barrier.wait()
                results.append(container.get(SlowService))
            except Exception as e:
                errors.append(e)

        threads = [threading.Thread(target=resolve_in_thread) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(len(errors), 0, f"Errors occurred: {errors}")
        self.assertEqual(len(results), 10)
        self.assertEqual(SlowService.instances, 1)
        self.assertTrue(all(result is results[0] for result in results))

    def test_transient_records_with_thread_pool(self):
        """Thread pool resolution of transient records yields distinct instances."""
        container = Container({"slow": {"type": SlowService}})

        with concurrent.futures.ThreadPoolExecutor(max_workers=5) as executor:
            futures = [executor.submit(container.get, "slow") for _ in range(10)]
            results = [f.result() for f in futures]

        self.assertEqual(len({id(result) for result in results}), 10)
        self.assertEqual(SlowService.instances, 10)
        self.assertTrue(all(result.db is results[0].db for result in results))

    def test_set_during_resolution_waits(self):
        """set() from another thread cannot interleave with a running get()."""
        container = Container()
        started = threading.Event()
        order: List[str] = []

        def slow_factory():
            started.set()
            time.sleep(0.05)
            order.append("constructed")
            return "v1"

        container.set("value", slow_factory)

        def overwrite():
            started.wait()
            container.set("value", "v2")
            order.append("overwritten")

        writer = threading.Thread(target=overwrite)
        writer.start()
        first = container.get("value")
        writer.join()

        self.assertEqual(first, "v1")
        self.assertEqual(order, ["constructed", "overwritten"])
        self.assertEqual(container.get("value"), "v2")

    def test_resolution_context_is_per_thread(self):
        container = Container()
        seen: List[object] = []

        def factory():
            seen.append(_resolution_context.get())
            return threading.current_thread().ident

        container.set("ident", {"factory": factory})

        threads = [threading.Thread(target=container.get, args=("ident",)) for _ in range(3)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(len(seen), 3)
        self.assertEqual(len({id(ctx) for ctx in seen}), 3)
        self.assertIsNone(_resolution_context.get())


if __name__ == '__main__':
    unittest.main()
