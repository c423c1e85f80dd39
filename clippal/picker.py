import re
from typing import Callable, List, Optional

from rich.console import Console
from rich.markup import escape

from .clipboard import Clipboard, ClipboardError
from .config import MAX_DISPLAY
from .models import Entry
from .storage import HistoryStore
from .utils import format_ts, fuzzy_filter, highlight, preview_lines

SEPARATOR = "─" * 60

# Plain decimal index; "+1", "1_0" and non-ASCII digits are not indices
INDEX_PATTERN = re.compile(r"-?[0-9]+")


def copy_and_promote(value: str, store: HistoryStore, clipboard: Clipboard) -> Entry:
    """Puts `value` on the clipboard, then moves it to the top of the history."""
    if not value:
        raise ValueError("Cannot copy an empty value.")
    clipboard.write(value)
    return store.promote(value)


class Picker:
    """
    Turn-based picker over a snapshot of the history.

    Commands: a number copies that entry, `/term` searches, `q` quits.
    """

    def __init__(
        self,
        store: HistoryStore,
        clipboard: Clipboard,
        console: Optional[Console] = None,
        input_func: Optional[Callable[[], str]] = None,
        max_display: int = MAX_DISPLAY,
    ):
        self.store = store
        self.clipboard = clipboard
        self.console = console or Console(highlight=False)
        self._input = input_func or input
        self.max_display = max_display

    def run(self) -> Optional[Entry]:
        """
        Runs the loop until the user quits or copies an entry.

        Returns:
            The promoted entry, or None if nothing was copied.
        """
        entries = self.store.list_history()
        if not entries:
            self.console.print("[red]❗ No clipboard history found![/red]")
            return None

        items: List[Entry] = entries
        term: Optional[str] = None

        while True:
            self._render(items, term)
            try:
                command = self._input().strip()
            except EOFError:
                command = "q"

            if command in ("q", "Q"):
                self.console.print("[yellow]Goodbye![/yellow]")
                return None

            if command.startswith("/"):
                term = command[1:].lower()
                items = fuzzy_filter(entries, term)
                if not items:
                    self.console.print(f"[red]No entries matching {escape(repr(term))}[/red]")
                continue

            if not INDEX_PATTERN.fullmatch(command):
                self.console.print(f"[red]Unrecognized input: {escape(repr(command))}[/red]")
                continue

            index = int(command)
            if not 0 <= index < len(items):
                self.console.print(f"[red]Invalid number: {escape(command)}[/red]")
                continue

            value = items[index].value
            if not value:
                self.console.print("[red]Cannot copy (empty or invalid).[/red]")
                continue
            try:
                promoted = copy_and_promote(value, self.store, self.clipboard)
            except ClipboardError as e:
                self.console.print(f"[red]Error: {escape(str(e))}[/red]")
                continue

            self.console.print(f"[green]Copied entry #{index} to clipboard, now promoted to top![/green]")
            return promoted

    def _render(self, items: List[Entry], term: Optional[str]) -> None:
        shown = items[:self.max_display]
        self.console.print()
        self.console.print(
            f"[yellow]─ Clipboard History Picker ─ (showing {len(shown)} of {len(items)})[/yellow]\n"
        )

        for idx, entry in enumerate(shown):
            title, snippet = preview_lines(entry.value)
            info = f"[dim]\\[Count: {entry.count} Last: {format_ts(entry.last_used)}][/dim]"
            self.console.print(f"[green]\\[{idx}][/green] [bold]{highlight(title, term)}[/bold] {info}")
            if snippet:
                self.console.print(f"    [cyan]{highlight(snippet, term)}[/cyan]")
            self.console.print(f"[dim]{SEPARATOR}[/dim]")

        if len(items) > self.max_display:
            self.console.print(
                f"[bold magenta](showing first {self.max_display} results; /search to narrow list)[/bold magenta]"
            )

        self.console.print(
            "\n[bold]Type [green]number[/green], [magenta]/search[/magenta], or [red]q[/red] to quit: [/bold]",
            end="",
        )
