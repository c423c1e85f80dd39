from abc import ABC, abstractmethod

import pyperclip


class ClipboardError(RuntimeError):
    """Raised when the system clipboard cannot be read or written."""


class Clipboard(ABC):
    """Text clipboard capability used by the poller and the pickers."""

    @abstractmethod
    def read(self) -> str:
        pass

    @abstractmethod
    def write(self, text: str) -> None:
        pass


class SystemClipboard(Clipboard):
    """
    Clipboard backed by pyperclip, which picks pbcopy/pbpaste on macOS,
    xclip/xsel/wl-clipboard on Linux and the native API on Windows.
    """

    def read(self) -> str:
        try:
            text = pyperclip.paste()
        except pyperclip.PyperclipException as e:
            raise ClipboardError(f"Could not read clipboard: {e}") from e
        return text or ""

    def write(self, text: str) -> None:
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            raise ClipboardError(f"Could not write clipboard: {e}") from e
