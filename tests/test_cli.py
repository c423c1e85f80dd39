import io
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path
from unittest import mock

from clippal.__main__ import build_parser, main
from clippal.cli import show_history_cli, track_cli
from clippal.storage import HistoryStore

from fakes import FakeClipboard


class CliTests(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.path = Path(self._tmp.name) / "history.txt"

    def run_main(self, *argv):
        stdout, stderr = io.StringIO(), io.StringIO()
        code = 0
        with redirect_stdout(stdout), redirect_stderr(stderr):
            try:
                main(["--history-file", str(self.path), *argv])
            except SystemExit as e:
                code = e.code
        return code, stdout.getvalue(), stderr.getvalue()

    def test_history_path_flag(self):
        code, out, _ = self.run_main("--history-path")
        self.assertEqual(code, 0)
        self.assertEqual(out.strip(), str(self.path))

    def test_history_prints_entries_newest_first(self):
        store = HistoryStore(path=self.path)
        store.promote("older")
        store.promote("newer\nwith more")

        code, out, _ = self.run_main("history")
        self.assertEqual(code, 0)
        lines = out.splitlines()
        self.assertEqual(lines[0], "Clipboard History...")
        self.assertTrue(lines[1].startswith("[0] newer with more  (count: 1, last: "))
        self.assertTrue(lines[2].startswith("[1] older  (count: 1, last: "))

    def test_history_on_empty_store(self):
        args = build_parser().parse_args(["--history-file", str(self.path), "history"])
        stdout = io.StringIO()
        with redirect_stdout(stdout):
            show_history_cli(args)
        self.assertIn("No clipboard history yet.", stdout.getvalue())

    def test_select_quits_cleanly(self):
        HistoryStore(path=self.path).promote("alpha")
        clipboard = FakeClipboard()
        with mock.patch("clippal.cli.SystemClipboard", return_value=clipboard), \
                mock.patch("builtins.input", side_effect=["q"]):
            code, out, _ = self.run_main("select")
        self.assertEqual(code, 0)
        self.assertIn("Goodbye!", out)
        self.assertEqual(clipboard.writes, [])

    def test_default_command_tracks_until_interrupted(self):
        clipboard = FakeClipboard("from clipboard")
        with mock.patch("clippal.cli.SystemClipboard", return_value=clipboard), \
                mock.patch("clippal.poller.time.sleep", side_effect=KeyboardInterrupt):
            code, out, _ = self.run_main()
        self.assertEqual(code, 0)
        self.assertIn("Tracking clipboard...", out)
        self.assertIn("Stopped tracking.", out)
        self.assertEqual(HistoryStore(path=self.path).top().value, "from clipboard")

    def test_write_failures_exit_with_error(self):
        args = build_parser().parse_args(["--history-file", str(self.path), "track"])
        self.assertIs(args.func, track_cli)
        with mock.patch("clippal.cli.SystemClipboard", return_value=FakeClipboard("x")), \
                mock.patch.object(HistoryStore, "promote", side_effect=PermissionError("denied")):
            code, _, err = self.run_main("track")
        self.assertEqual(code, 1)
        self.assertIn("Error: denied", err)

    def test_clipboard_failure_in_tui_copy_exits_with_error(self):
        HistoryStore(path=self.path).promote("alpha")
        clipboard = FakeClipboard()
        clipboard.fail = True
        selected = HistoryStore(path=self.path).top()
        with mock.patch("clippal.cli.SystemClipboard", return_value=clipboard), \
                mock.patch("clippal.tui.ClipPalApp.run", return_value=selected):
            code, _, err = self.run_main("tui")
        self.assertEqual(code, 1)
        self.assertIn("Error: clipboard unavailable", err)
