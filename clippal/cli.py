import argparse

from .clipboard import SystemClipboard
from .config import HISTORY_FILE
from .picker import Picker, copy_and_promote
from .poller import ClipboardPoller
from .storage import HistoryStore
from .utils import format_ts, preview_lines


def _store(args: argparse.Namespace) -> HistoryStore:
    return HistoryStore(path=getattr(args, 'history_file', None) or HISTORY_FILE)

# --- Command Functions ---

def show_history_cli(args: argparse.Namespace):
    """Handles the 'history' CLI command."""
    entries = _store(args).list_history()

    print("Clipboard History...")
    if not entries:
        print("No clipboard history yet.")
        return

    for idx, entry in enumerate(entries):
        title, snippet = preview_lines(entry.value)
        if snippet:
            title += " " + snippet
        print(f"[{idx}] {title}  (count: {entry.count}, last: {format_ts(entry.last_used)})")


def select_cli(args: argparse.Namespace):
    """Handles the 'select' CLI command."""
    Picker(_store(args), SystemClipboard()).run()


def tui_cli(args: argparse.Namespace):
    """Handles the 'tui' CLI command."""
    # textual is only imported when the full-screen picker is requested
    from .tui import ClipPalApp

    store = _store(args)
    entries = store.list_history()
    if not entries:
        print("No clipboard history found!")
        return

    selected = ClipPalApp(entries).run()
    if selected is not None:
        copy_and_promote(selected.value, store, SystemClipboard())
        print("Copied entry to clipboard, now promoted to top!")


def track_cli(args: argparse.Namespace):
    """Handles the 'track' CLI command (the default)."""
    poller = ClipboardPoller(_store(args), SystemClipboard())
    print("Tracking clipboard...")
    try:
        poller.run_forever()
    except KeyboardInterrupt:
        print("\nStopped tracking.")


# --- Argument Parser Setup ---

def setup_cli_parsers(parser: argparse.ArgumentParser):
    """Configures subparsers for CLI commands."""
    subparsers = parser.add_subparsers(dest='command', help='Sub-command help')
    subparsers.required = False # Make subcommands optional (so running without args starts tracking)

    parser_history = subparsers.add_parser('history', help='Print the clipboard history')
    parser_history.set_defaults(func=show_history_cli)

    parser_select = subparsers.add_parser('select', help='Search and recopy an entry interactively')
    parser_select.set_defaults(func=select_cli)

    parser_tui = subparsers.add_parser('tui', help='Full-screen search and recopy')
    parser_tui.set_defaults(func=tui_cli)

    parser_track = subparsers.add_parser('track', help='Track the clipboard in the foreground (default)')
    parser_track.set_defaults(func=track_cli)
