import sys
import unittest
from xmlrpc.client import Binary

from rfremote.core import result
from rfremote.core.keyword import KeywordFailure


class EncodeTest(unittest.TestCase):
    def test_success(self):
        encoded = result.encode(
            result.Success(return_value=89, output="Adding one to 88")
        )
        self.assertEqual(
            encoded, {"status": "PASS", "return": 89, "output": "Adding one to 88"}
        )

    def test_success_defaults(self):
        encoded = result.encode(result.Success())
        self.assertEqual(encoded, {"status": "PASS", "return": "", "output": ""})

    def test_success_without_output_text(self):
        encoded = result.encode(result.Success(return_value=1, output=None))
        self.assertEqual(encoded["output"], "")

    def test_failure_without_traceback(self):
        encoded = result.encode(result.Failure("boom", output="some output"))
        self.assertEqual(
            encoded, {"status": "FAIL", "output": "some output", "error": "boom"}
        )

    def test_failure_with_traceback(self):
        encoded = result.encode(result.Failure("boom", traceback="tb"))
        self.assertEqual(encoded["traceback"], "tb")
        self.assertNotIn("return", encoded)

    def test_failure_without_error(self):
        encoded = result.encode(result.Failure("", output=None))
        self.assertEqual(encoded["error"], result.UNKNOWN_ERROR)
        self.assertEqual(encoded["output"], "")


class ToWireTest(unittest.TestCase):
    def test_values(self):
        self.assertEqual(result.to_wire(None), "")
        self.assertEqual(result.to_wire(True), True)
        self.assertEqual(result.to_wire(7), 7)
        self.assertEqual(result.to_wire(2**31), "2147483648")
        self.assertEqual(result.to_wire(-(2**31) - 1), "-2147483649")
        self.assertEqual(result.to_wire((1, None, "a")), [1, "", "a"])
        self.assertEqual(result.to_wire({1: [None]}), {"1": [""]})
        self.assertIsInstance(result.to_wire(b"\x00\x01"), Binary)
        self.assertEqual(result.to_wire(object).__class__, str)

    def test_self_containing_values(self):
        items = [1]
        items.append(items)
        self.assertEqual(result.to_wire(items), [1, "[1, [...]]"])

        mapping = {}
        mapping["self"] = mapping
        self.assertEqual(result.to_wire(mapping), {"self": "{'self': {...}}"})

        encoded = result.encode(result.Success(return_value=items))
        self.assertEqual(encoded["status"], "PASS")

    def test_shared_values_are_not_repeats(self):
        shared = [1]
        self.assertEqual(result.to_wire([shared, shared]), [[1], [1]])

    def test_text_xml_cannot_carry_is_binary(self):
        wired = result.to_wire(["plain", "colour \x1b[31mred"])
        self.assertEqual(wired[0], "plain")
        self.assertIsInstance(wired[1], Binary)
        self.assertEqual(wired[1].data, b"colour \x1b[31mred")
        self.assertEqual(result.to_wire({"a\x00b": 1}), {"a\ufffdb": 1})

    def test_encode_text_xml_cannot_carry(self):
        encoded = result.encode(
            result.Failure("bad \x01", output="out \x08", traceback="tb \x0b")
        )
        self.assertEqual(encoded["status"], "FAIL")
        for key, data in (
            ("error", b"bad \x01"),
            ("output", b"out \x08"),
            ("traceback", b"tb \x0b"),
        ):
            self.assertIsInstance(encoded[key], Binary)
            self.assertEqual(encoded[key].data, data)

        encoded = result.encode(result.Success(output="tab\tand newline\n"))
        self.assertEqual(encoded["output"], "tab\tand newline\n")


class FailureFromExcInfoTest(unittest.TestCase):
    @staticmethod
    def _capture(exc):
        try:
            raise exc
        except BaseException:
            return sys.exc_info()

    def test_named_exception(self):
        failure = result.Failure.from_exc_info(self._capture(ValueError("bad")))
        self.assertEqual(failure.error, "ValueError: bad")
        self.assertIn("ValueError: bad", failure.traceback)

    def test_assertion_keeps_bare_message(self):
        failure = result.Failure.from_exc_info(self._capture(AssertionError("x != y")))
        self.assertEqual(failure.error, "x != y")

    def test_keyword_failure_keeps_output(self):
        failure = result.Failure.from_exc_info(
            self._capture(KeywordFailure("not equal")), output="compared"
        )
        self.assertEqual(failure.error, "not equal")
        self.assertEqual(failure.output, "compared")

    def test_empty_message_uses_name(self):
        failure = result.Failure.from_exc_info(self._capture(RuntimeError()))
        self.assertEqual(failure.error, "RuntimeError")


if __name__ == "__main__":
    unittest.main()
