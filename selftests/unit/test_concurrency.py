import unittest
from concurrent.futures import ThreadPoolExecutor

from rfremote import keywords
from rfremote.core.rpc.dispatcher import Dispatcher
from rfremote.keywords.counter import Counter


class ConcurrentCounterTest(unittest.TestCase):
    calls = 500
    workers = 16

    def test_counter_values_are_unique(self):
        counter = Counter(100)
        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            values = list(executor.map(lambda _: counter.next_value(), range(self.calls)))
        self.assertEqual(sorted(values), list(range(100, 100 + self.calls)))
        self.assertEqual(counter.value, 100 + self.calls)

    def test_concurrent_dispatch(self):
        dispatcher = Dispatcher(keywords.build_registry(counter_start=7))

        def call(_):
            return dispatcher.run_keyword("Increment Counter", [])["return"]

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            values = list(executor.map(call, range(self.calls)))
        self.assertEqual(sorted(values), list(range(7, 7 + self.calls)))

    def test_mixed_keywords(self):
        dispatcher = Dispatcher(keywords.build_registry())

        def call(index):
            if index % 2:
                return dispatcher.run_keyword("Addone", [index])["return"] - 1
            return dispatcher.run_keyword(
                "Strings Should Be Equal", [str(index), str(index)]
            )["status"]

        with ThreadPoolExecutor(max_workers=self.workers) as executor:
            values = list(executor.map(call, range(100)))
        for index, value in enumerate(values):
            self.assertEqual(value, index if index % 2 else "PASS")


if __name__ == "__main__":
    unittest.main()
