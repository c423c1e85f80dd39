import os
import sys # Import sys for stderr
import tempfile
import time # Import time for timestamping
import typing
from pathlib import Path
from typing import Callable, List, Optional

# Import config variables
from .config import HISTORY_FILE, HISTORY_MAX_SIZE, RECENT_WINDOW_DAYS
from .codec import decode_entry, encode_entry
from .models import Entry

SECONDS_PER_DAY = 24 * 3600


class HistoryStore:
    """
    Flat-file clipboard history.

    The file holds one encoded entry per line, newest first. Every mutation
    reads the whole file, rewrites it in full and swaps it into place.
    There is no locking between processes: two concurrent writers end up
    with whichever wrote last.
    """

    def __init__(
        self,
        path: typing.Union[str, Path] = HISTORY_FILE,
        max_size: int = HISTORY_MAX_SIZE,
        recent_window_days: int = RECENT_WINDOW_DAYS,
        clock: Callable[[], float] = time.time,
    ):
        if max_size < 1:
            raise ValueError("max_size must be at least 1.")
        self.path = Path(path)
        self.max_size = max_size
        self.recent_window_days = recent_window_days
        self._clock = clock

    # --- Reading ---

    def list_history(self) -> List[Entry]:
        """
        Loads all entries, newest first.

        Lines that fail to decode are skipped. A missing file is an empty
        history; so is one that cannot be read (a warning is printed).
        """
        if not self.path.exists():
            return []
        try:
            # Undecodable bytes only spoil their own line, which then fails to decode
            with open(self.path, 'r', encoding='utf-8', errors='replace') as f:
                lines = f.read().splitlines()
        except OSError as e:
            print(f"Warning: Could not read history file {self.path}: {e}", file=sys.stderr)
            return []

        entries: List[Entry] = []
        for line in lines:
            entry = decode_entry(line)
            if entry is not None:
                entries.append(entry)
        return entries

    def top(self) -> Optional[Entry]:
        """Returns the most recently used entry, if any."""
        entries = self.list_history()
        return entries[0] if entries else None

    # --- Writing ---

    def promote(self, value: str) -> Entry:
        """
        Moves `value` to the front of the history, creating it if needed.

        All existing copies of the value are merged into the new entry: its
        count is one more than the highest previous count and its timestamp
        is never older than any of theirs.

        Args:
            value: Non-empty clipboard text.

        Returns:
            The entry now at index 0.
        """
        if not value:
            raise ValueError("Cannot promote an empty value.")

        entries = self.list_history()
        now = int(self._clock())

        previous = [e for e in entries if e.value == value]
        count = max((e.count for e in previous), default=0) + 1
        last_used = max([now] + [e.last_used for e in previous])

        promoted = Entry(value=value, last_used=last_used, count=count)
        rest = [e for e in entries if e.value != value]
        self._write_entries([promoted] + rest)
        return promoted

    def _trim(self, entries: List[Entry]) -> List[Entry]:
        """
        Keeps at most max_size entries.

        The front entry always survives. The others are ranked by whether
        they were used inside the recent window, then by count, then by
        timestamp; survivors keep their recency order.
        """
        if len(entries) <= self.max_size:
            return entries

        cutoff = int(self._clock()) - self.recent_window_days * SECONDS_PER_DAY
        head, tail = entries[0], entries[1:]
        ranked = sorted(
            range(len(tail)),
            key=lambda i: (tail[i].last_used >= cutoff, tail[i].count, tail[i].last_used),
            reverse=True,
        )
        keep = set(ranked[:self.max_size - 1])
        return [head] + [e for i, e in enumerate(tail) if i in keep]

    def _write_entries(self, entries: List[Entry]) -> None:
        """Trims and atomically replaces the history file. OSError propagates."""
        entries = self._trim(entries)
        body = "".join(encode_entry(e) + "\n" for e in entries)

        # Ensure the application config directory exists
        self.path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            dir=str(self.path.parent), prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as f:
                f.write(body)
            os.replace(tmp_name, self.path)
        except BaseException:
            # Leave the previous file untouched and drop the partial copy
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise


# --- Default store helpers ---

def list_history() -> List[Entry]:
    """Reads the history at the configured location."""
    return HistoryStore().list_history()


def promote(value: str) -> Entry:
    """Promotes a value in the history at the configured location."""
    return HistoryStore().promote(value)
