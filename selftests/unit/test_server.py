import json
import threading
import unittest
from concurrent.futures import ThreadPoolExecutor
from unittest import mock
from xmlrpc.client import Binary, Fault, ServerProxy

from rfremote.app import cmd
from rfremote.core import faults


class RPCServerTest(unittest.TestCase):
    def setUp(self):
        self.server = cmd.create_server("127.0.0.1", 0, counter_start=100)
        self.thread = threading.Thread(
            target=self.server.serve_forever, kwargs={"poll_interval": 0.05}
        )
        self.thread.daemon = True
        self.thread.start()
        host, port = self.server.server_address
        self.url = f"http://{host}:{port}/RPC2"

    def tearDown(self):
        self.server.shutdown()
        self.thread.join(5)

    def _proxy(self):
        return ServerProxy(self.url, allow_none=True)

    def test_get_keyword_names(self):
        with self._proxy() as proxy:
            names = proxy.get_keyword_names()
        self.assertEqual(
            names,
            [
                "Addone",
                "Strings Should Be Equal",
                "Count Items In Directory",
                "Increment Counter",
            ],
        )

    def test_run_keyword(self):
        with self._proxy() as proxy:
            passed = proxy.run_keyword("Addone", [88])
            failed = proxy.run_keyword("Strings Should Be Equal", ["Fail", "Equal"])
        self.assertEqual(
            passed, {"status": "PASS", "return": 89, "output": "Adding one to 88"}
        )
        self.assertEqual(failed["status"], "FAIL")
        self.assertEqual(failed["error"], "Given strings are not equal.")

    def test_text_xml_cannot_carry_is_sent_as_binary(self):
        with self._proxy() as proxy:
            response = proxy.run_keyword(
                "Strings Should Be Equal", [Binary(b"a\x01b"), "x"]
            )
        self.assertEqual(response["status"], "FAIL")
        self.assertEqual(response["error"], "Given strings are not equal.")
        self.assertIsInstance(response["output"], Binary)
        self.assertEqual(response["output"].data, b"Comparing 'a\x01b' to 'x'.")

    def test_root_path(self):
        host, port = self.server.server_address
        with ServerProxy(f"http://{host}:{port}/") as proxy:
            self.assertEqual(proxy.run_keyword("Addone", [1])["return"], 2)

    def test_faults(self):
        with self._proxy() as proxy:
            with self.assertRaises(Fault) as ctx:
                proxy.run_keyword("Missing Keyword", [])
            self.assertEqual(ctx.exception.faultCode, faults.UNKNOWN_KEYWORD)
            self.assertIn("Missing Keyword", ctx.exception.faultString)

            with self.assertRaises(Fault) as ctx:
                proxy.run_keyword("Addone", ["88"])
            self.assertEqual(ctx.exception.faultCode, faults.INVALID_PARAMS)

            with self.assertRaises(Fault) as ctx:
                proxy.stop_everything()
            self.assertEqual(ctx.exception.faultCode, faults.UNKNOWN_METHOD)

    def test_unexpected_error_is_reported_as_json_fault(self):
        with mock.patch(
            "rfremote.core.rpc.dispatcher.Dispatcher.get_keyword_names",
            side_effect=RuntimeError("broken"),
        ):
            with self.assertLogs("rfremote", level="ERROR"):
                with self._proxy() as proxy:
                    with self.assertRaises(Fault) as ctx:
                        proxy.get_keyword_names()
        self.assertEqual(ctx.exception.faultCode, faults.SERVER_ERROR)
        info = json.loads(ctx.exception.faultString)
        self.assertEqual(info["exc_type"], "RuntimeError")
        self.assertEqual(info["exc_value"], "broken")

    def test_concurrent_counter_calls(self):
        calls = 40

        def call(_):
            with self._proxy() as proxy:
                return proxy.run_keyword("Increment Counter", [])["return"]

        with ThreadPoolExecutor(max_workers=8) as executor:
            values = list(executor.map(call, range(calls)))
        self.assertEqual(sorted(values), list(range(100, 100 + calls)))


if __name__ == "__main__":
    unittest.main()
