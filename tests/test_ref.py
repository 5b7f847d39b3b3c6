import threading
import unittest

from blueprintpy import Ref, Runtime


run = Runtime.default.run


class TestRef(unittest.TestCase):
    def test_ref_get_set_update_modify(self):
        r: Ref[int] = run(Ref.make(1))
        self.assertEqual(run(r.get()), 1)
        run(r.set(2))
        self.assertEqual(run(r.get()), 2)
        self.assertEqual(run(r.update(lambda x: x + 3)), 5)
        self.assertEqual(run(r.get_and_update(lambda x: x * 2)), 5)
        self.assertEqual(run(r.get()), 10)
        out = run(r.modify(lambda x: (x * 10, x - 1)))
        self.assertEqual(out, 100)
        self.assertEqual(run(r.get()), 9)

    def test_ref_operations_are_lazy(self):
        r = Ref(0)
        bump = r.update(lambda x: x + 1)
        self.assertEqual(run(r.get()), 0)
        run(bump); run(bump)
        self.assertEqual(run(r.get()), 2)

    def test_concurrent_updates_are_not_lost(self):
        r = Ref(0)
        bump = r.update(lambda x: x + 1).repeat_n(499)

        threads = [threading.Thread(target=run, args=(bump,)) for _ in range(8)]
        for t in threads: t.start()
        for t in threads: t.join()
        self.assertEqual(run(r.get()), 8 * 500)
