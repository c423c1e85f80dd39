from typing import Optional, List

from rich.text import Text
from textual.app import App, ComposeResult, Binding
from textual.containers import Container, VerticalScroll, Horizontal
from textual.widgets import Header, Footer, Input, DataTable, Static

from .models import Entry
from .utils import format_ts, fuzzy_filter, preview_lines


# --- Main App ---
class ClipPalApp(App[Optional[Entry]]):
    """Full-screen history picker. Exits with the chosen entry, or None."""

    TITLE = "ClipPal - Clipboard History"
    SUB_TITLE = "Search and recopy past clipboard entries"

    DEFAULT_CSS = """
    Screen {
        layout: vertical;
    }

    Header { dock: top; height: auto; }
    Footer { dock: bottom; height: auto; }
    Input#filter-input {
        dock: top;
        width: 100%;
    }

    Horizontal#main-pane > Container#table-container {
        width: 3fr;
        border-right: thick $accent;
        padding-right: 1;
        height: 100%;
    }
    Horizontal#main-pane > VerticalScroll#preview-container {
        width: 2fr;
        padding-left: 2;
        height: 100%;
    }

    Static#preview-pane {
        padding: 1 2;
    }

    DataTable {
        width: 100%;
        height: 100%;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "quit_app", "Quit", show=True, priority=True),
        Binding("escape", "quit_app", "Quit", show=True),
        Binding("enter", "select_entry", "Copy", show=False),
        Binding("up", "cursor_up", "Cursor Up", show=False, priority=True),
        Binding("down", "cursor_down", "Cursor Down", show=False, priority=True),
        Binding("pageup", "scroll_preview_up", "Preview Up", show=False, priority=True),
        Binding("pagedown", "scroll_preview_down", "Preview Down", show=False, priority=True),
    ]

    def __init__(self, entries: List[Entry]):
        super().__init__()
        self.entries = entries
        self.visible: List[Entry] = list(entries)
        self._current_filter_query = ""

    def compose(self) -> ComposeResult:
        yield Header()
        yield Input(id="filter-input", placeholder="Search clipboard history...")
        with Horizontal(id="main-pane"):
            with Container(id="table-container"):
                yield DataTable(id="entry-table", cursor_type="row", zebra_stripes=True)
            with VerticalScroll(id="preview-container"):
                yield Static(id="preview-pane", expand=True, markup=False)
        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one(DataTable)
        table.add_column("#", key="index")
        table.add_column("Entry", key="title")
        table.add_column("Count", key="count")
        table.add_column("Last used", key="last_used")
        self._update_table()
        self.query_one("#filter-input", Input).focus()

    # --- Event Handlers ---
    def on_input_changed(self, event: Input.Changed) -> None:
        if event.input.id == "filter-input":
            self._current_filter_query = event.value
            self._update_table()

    def on_input_submitted(self, event: Input.Submitted) -> None:
        if event.input.id == "filter-input":
            self.action_select_entry()

    def on_data_table_row_highlighted(self, event: DataTable.RowHighlighted) -> None:
        self._update_preview_pane(self._entry_at(event.cursor_row))

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        self.action_select_entry()

    # --- Actions ---
    def action_select_entry(self) -> None:
        table = self.query_one(DataTable)
        entry = self._entry_at(table.cursor_row)
        if entry is not None:
            self.exit(result=entry)

    def action_quit_app(self) -> None:
        self.exit(result=None)

    def action_cursor_up(self) -> None:
        table = self.query_one(DataTable)
        if table.row_count > 0:
            table.move_cursor(row=max(0, table.cursor_row - 1))

    def action_cursor_down(self) -> None:
        table = self.query_one(DataTable)
        if table.row_count > 0:
            table.move_cursor(row=min(table.row_count - 1, table.cursor_row + 1))

    def action_scroll_preview_up(self) -> None:
        self.query_one("#preview-container", VerticalScroll).scroll_page_up(animate=False)

    def action_scroll_preview_down(self) -> None:
        self.query_one("#preview-container", VerticalScroll).scroll_page_down(animate=False)

    # --- Helper Methods ---
    def _entry_at(self, row: int) -> Optional[Entry]:
        if 0 <= row < len(self.visible):
            return self.visible[row]
        return None

    def _update_table(self) -> None:
        table = self.query_one(DataTable)
        query = self._current_filter_query.strip()
        if query:
            self.visible = fuzzy_filter(self.entries, query)
        else:
            self.visible = list(self.entries)

        table.clear()
        for idx, entry in enumerate(self.visible):
            title, _ = preview_lines(entry.value)
            table.add_row(str(idx), Text(title), str(entry.count), format_ts(entry.last_used))
        if table.row_count > 0:
            table.move_cursor(row=0)
        self.log.debug(f"Filter {query!r} matched {len(self.visible)} of {len(self.entries)} entries")
        self._update_preview_pane(self._entry_at(0))

    def _update_preview_pane(self, entry: Optional[Entry]) -> None:
        preview_pane = self.query_one("#preview-pane", Static)
        if entry:
            preview_pane.update(Text(entry.value))
        elif self.entries:
            preview_pane.update("No matching entries.")
        else:
            preview_pane.update("No clipboard history found.")
