import random
import unittest

from blueprintpy import (
    AnyIORuntime, BoundedCache, FatalError, Random, Runtime, Tag, TagId, TestLogger, fail, succeed,
)
from blueprintpy.result import Failure, Success


class TestAnyIORuntime(unittest.IsolatedAsyncioTestCase):
    async def test_run(self):
        async with AnyIORuntime() as rt:
            self.assertEqual(await rt.run(succeed(7)), 7)
            with self.assertRaises(FatalError):
                await AnyIORuntime(runtime=Runtime(logger=TestLogger())).run(fail("nope"))

    async def test_fork_join_and_await(self):
        async with AnyIORuntime() as rt:
            ok = await rt.fork(succeed(1))
            bad = await rt.fork(fail(ValueError("boom")))
            self.assertEqual(await ok.join(), 1)
            self.assertEqual(await ok.await_(), Success(1))
            res = await bad.await_()
            self.assertIsInstance(res, Failure)
            with self.assertRaises(ValueError):
                await bad.join()

    async def test_fork_requires_context(self):
        with self.assertRaises(RuntimeError):
            await AnyIORuntime().fork(succeed(1))

    async def test_producer_consumer_share_cache(self):
        cache = Runtime.default.run(BoundedCache.make(TestLogger()))
        rnd = Random(random.Random(11))
        producer = rnd.next_int_between(1, 11).map(Tag.from_int).flat_map(lambda tag: cache.set(tag.id, tag.name)).repeat_n(30)
        consumer = rnd.next_int_between(1, 11).map(TagId).flat_map(cache.get).repeat_n(30)

        async with AnyIORuntime() as rt:
            p = await rt.fork(producer)
            c = await rt.fork(consumer)
            await p.join()
            await c.join()

        mapping, order = Runtime.default.run(cache.snapshot())
        self.assertLessEqual(len(mapping), 5)
        self.assertEqual(set(order), set(mapping))
        self.assertEqual(len(order), len(set(order)))
