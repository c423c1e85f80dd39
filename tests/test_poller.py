import io
import tempfile
import unittest
from contextlib import redirect_stderr
from pathlib import Path

from clippal.poller import ClipboardPoller
from clippal.storage import HistoryStore

from fakes import FakeClipboard, FakeClock


class StopPolling(Exception):
    pass


class ClipboardPollerTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.clock = FakeClock()
        self.store = HistoryStore(path=Path(self._tmp.name) / "history.txt", clock=self.clock)
        self.clipboard = FakeClipboard()
        self.poller = ClipboardPoller(self.store, self.clipboard, sleep=lambda _: None)

    def values(self):
        return [e.value for e in self.store.list_history()]

    def test_new_value_is_promoted_and_remembered(self):
        self.clipboard.text = "copied text\n\n"
        entry = self.poller.tick()
        self.assertEqual(entry.value, "copied text")
        self.assertEqual(self.poller.last_seen, "copied text")
        self.assertEqual(self.values(), ["copied text"])

    def test_unchanged_clipboard_does_not_write(self):
        self.clipboard.text = "same"
        self.poller.tick()
        self.clock.advance(60)
        self.assertIsNone(self.poller.tick())
        self.assertEqual(self.store.top().count, 1)
        self.assertNotEqual(self.store.top().last_used, self.clock.now)

    def test_empty_or_whitespace_clipboard_is_ignored(self):
        for text in ["", "   \n\t"]:
            self.clipboard.text = text
            self.assertIsNone(self.poller.tick())
        self.assertEqual(self.values(), [])
        self.assertIsNone(self.poller.last_seen)

    def test_value_already_on_top_is_not_repromoted(self):
        self.store.promote("picked")
        self.clipboard.text = "picked"
        self.assertIsNone(self.poller.tick())
        self.assertEqual(self.store.top().count, 1)

    def test_switching_back_to_an_older_value_promotes_it(self):
        for text in ["one", "two", "one"]:
            self.clipboard.text = text
            self.clock.advance()
            self.poller.tick()
        self.assertEqual(self.values(), ["one", "two"])
        self.assertEqual(self.store.top().count, 2)

    def test_run_forever_skips_clipboard_failures(self):
        ticks = []

        def fake_sleep(interval):
            ticks.append(interval)
            if len(ticks) == 1:
                self.clipboard.fail = False
                self.clipboard.text = "after failure"
            else:
                raise StopPolling()

        self.clipboard.fail = True
        poller = ClipboardPoller(self.store, self.clipboard, interval=0.8, sleep=fake_sleep)
        stderr = io.StringIO()
        with redirect_stderr(stderr), self.assertRaises(StopPolling):
            poller.run_forever()

        self.assertEqual(ticks, [0.8, 0.8])
        self.assertIn("Warning: clipboard unavailable", stderr.getvalue())
        self.assertEqual(self.values(), ["after failure"])
