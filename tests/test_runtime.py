import unittest

from blueprintpy.core import FatalError, access, fail, succeed
from blueprintpy.context import Context
from blueprintpy.logger import TestLogger
from blueprintpy.result import Failure
from blueprintpy.runtime import Runtime


class TestRuntime(unittest.TestCase):
    def test_run_success(self):
        self.assertEqual(Runtime.default.run(succeed(42)), 42)

    def test_run_failure_raises_original_exception(self):
        err = ValueError("boom")
        with self.assertRaises(ValueError) as cm:
            Runtime(logger=TestLogger()).run(fail(err))
        self.assertIs(cm.exception, err)

    def test_run_failure_wraps_non_exception(self):
        with self.assertRaises(FatalError) as cm:
            Runtime(logger=TestLogger()).run(fail("nope"))
        self.assertEqual(cm.exception.error, "nope")

    def test_run_logs_unhandled_failure(self):
        log = TestLogger()
        with self.assertRaises(KeyError):
            Runtime(logger=log).run(fail(KeyError("k")))
        msgs = Runtime.default.run(log.messages())
        self.assertEqual(len(msgs), 1)
        self.assertEqual(msgs[0][0], "error")
        self.assertIn("Unhandled failure", msgs[0][1])

    def test_run_with_base_environment(self):
        rt = Runtime(base=Context().with_service(int, 5))
        self.assertEqual(rt.run(access(lambda ctx: ctx.get(int) * 2)), 10)

    def test_run_provided_blueprint(self):
        self.assertEqual(Runtime.default.run(access(lambda n: n + 1).provide(1)), 2)

    def test_evaluate_returns_result(self):
        self.assertEqual(Runtime.default.evaluate(fail("e")), Failure("e"))
