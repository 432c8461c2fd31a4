import os
import tempfile
import unittest

from rfremote import keywords
from rfremote.core.keyword import KeywordFailure
from rfremote.core.rpc.dispatcher import Dispatcher
from rfremote.keywords import examples
from rfremote.keywords.counter import Counter


class ExampleKeywordsTest(unittest.TestCase):
    def test_addone(self):
        outcome = examples.addone(88)
        self.assertEqual(outcome.return_value, 89)
        self.assertEqual(outcome.output, "Adding one to 88")

    def test_strings_should_be_equal(self):
        outcome = examples.strings_should_be_equal("Equal", "Equal")
        self.assertEqual(outcome.output, "Comparing 'Equal' to 'Equal'.")
        with self.assertRaises(KeywordFailure) as ctx:
            examples.strings_should_be_equal("Fail", "Equal")
        self.assertEqual(str(ctx.exception), "Given strings are not equal.")
        self.assertEqual(ctx.exception.output, "Comparing 'Fail' to 'Equal'.")

    def test_strings_are_case_sensitive(self):
        self.assertRaises(
            KeywordFailure, examples.strings_should_be_equal, "equal", "Equal"
        )


class CountItemsInDirectoryTest(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.dispatcher = Dispatcher(keywords.build_registry())

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_empty_directory(self):
        response = self.dispatcher.run_keyword(
            "Count Items In Directory", [self.tmpdir.name]
        )
        self.assertEqual(response["status"], "PASS")
        self.assertEqual(response["return"], 0)

    def test_counts_files_and_directories(self):
        for name in ("a.txt", "b.txt", ".hidden"):
            with open(os.path.join(self.tmpdir.name, name), "w") as f:
                f.write(name)
        os.mkdir(os.path.join(self.tmpdir.name, "sub"))

        response = self.dispatcher.run_keyword(
            "Count Items In Directory", [self.tmpdir.name]
        )
        self.assertEqual(response["status"], "PASS")
        self.assertEqual(response["return"], 4)
        self.assertEqual(
            response["output"], f"Directory '{self.tmpdir.name}' contains 4 items."
        )

    def test_missing_directory_fails(self):
        missing = os.path.join(self.tmpdir.name, "missing")
        with self.assertLogs("rfremote", level="ERROR"):
            response = self.dispatcher.run_keyword("Count Items In Directory", [missing])
        self.assertEqual(response["status"], "FAIL")
        self.assertTrue(response["error"].startswith("FileNotFoundError: "))
        self.assertIn("traceback", response)

    def test_file_instead_of_directory_fails(self):
        path = os.path.join(self.tmpdir.name, "file")
        with open(path, "w") as f:
            f.write("x")
        with self.assertLogs("rfremote", level="ERROR"):
            response = self.dispatcher.run_keyword("Count Items In Directory", [path])
        self.assertEqual(response["status"], "FAIL")
        self.assertTrue(response["error"].startswith("NotADirectoryError: "))


class CounterTest(unittest.TestCase):
    def test_successive_values(self):
        counter = Counter(5)
        self.assertEqual(counter.increment_counter().return_value, 5)
        outcome = counter.increment_counter()
        self.assertEqual(outcome.return_value, 6)
        self.assertEqual(outcome.output, "Counter value is 6")
        self.assertEqual(counter.value, 7)

    def test_registries_do_not_share_state(self):
        first = Dispatcher(keywords.build_registry(counter_start=3))
        second = Dispatcher(keywords.build_registry(counter_start=3))
        self.assertEqual(first.run_keyword("Increment Counter", [])["return"], 3)
        self.assertEqual(first.run_keyword("Increment Counter", [])["return"], 4)
        self.assertEqual(second.run_keyword("Increment Counter", [])["return"], 3)


if __name__ == "__main__":
    unittest.main()
