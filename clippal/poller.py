import sys
import time
from typing import Callable, Optional

from .clipboard import Clipboard, ClipboardError
from .config import CHECK_INTERVAL
from .models import Entry
from .storage import HistoryStore


class ClipboardPoller:
    """
    Samples the clipboard on a fixed interval and promotes new values.

    `last_seen` is the last value this poller promoted. It only changes at
    the end of a tick that wrote to the store.
    """

    def __init__(
        self,
        store: HistoryStore,
        clipboard: Clipboard,
        interval: float = CHECK_INTERVAL,
        sleep: Optional[Callable[[float], None]] = None,
    ):
        self.store = store
        self.clipboard = clipboard
        self.interval = interval
        self._sleep = sleep or time.sleep
        self.last_seen: Optional[str] = None

    def tick(self) -> Optional[Entry]:
        """
        Runs one check. Returns the promoted entry, or None when nothing
        changed. ClipboardError propagates to the caller.
        """
        current = self.clipboard.read().rstrip()
        if not current or current == self.last_seen:
            return None

        top = self.store.top()
        if top is not None and top.value == current:
            return None

        entry = self.store.promote(current)
        self.last_seen = current
        return entry

    def run_forever(self) -> None:
        """Ticks until the process is stopped. Clipboard failures skip the tick."""
        while True:
            try:
                self.tick()
            except ClipboardError as e:
                print(f"Warning: {e}", file=sys.stderr)
            self._sleep(self.interval)
