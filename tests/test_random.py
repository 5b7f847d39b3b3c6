import random
import unittest

from blueprintpy import Context, Random, Runtime, random_float, random_int_between
from blueprintpy.result import Failure


run = Runtime.default.run


class TestRandom(unittest.TestCase):
    def test_next_int_between_stays_in_range(self):
        rnd = Random(random.Random(1))
        draws = run(rnd.next_int_between(1, 11).zip(rnd.next_int_between(1, 11)).repeat_n(50))
        for n in draws:
            self.assertTrue(1 <= n < 11)

    def test_seeded_is_reproducible(self):
        a = Random(random.Random(7)).next_int_between(0, 1000)
        b = Random(random.Random(7)).next_int_between(0, 1000)
        self.assertEqual(run(a), run(b))

    def test_invalid_bounds(self):
        with self.assertRaises(ValueError):
            Random().next_int_between(5, 5)
        with self.assertRaises(ValueError):
            Random().next_int(0)

    def test_accessor_reads_context(self):
        ctx = Context().with_service(Random, Random(random.Random(3)))
        n = Runtime(ctx).run(random_int_between(1, 65))
        self.assertTrue(1 <= n < 65)
        self.assertIsInstance(random_int_between(1, 2).evaluate(Context()), Failure)

    def test_choice_and_float(self):
        rnd = Random(random.Random(5))
        self.assertIn(run(rnd.choice(["a", "b", "c"])), ["a", "b", "c"])
        with self.assertRaises(ValueError):
            rnd.choice([])
        ctx = Context().with_service(Random, rnd)
        x = Runtime(ctx).run(random_float())
        self.assertTrue(0.0 <= x < 1.0)
