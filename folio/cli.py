"""Terminal UI for Folio."""

import asyncio
from pathlib import Path

from rich.console import Console

from folio.logging import get_logger

log = get_logger(__name__)

WELCOME_TEXT = (
    "File Management Assistant ready. "
    "Type 'exit' to quit or 'reset' to start a new conversation."
)


class TerminalUI:
    """Line-oriented terminal interface with readline history."""

    def __init__(self, console: Console | None = None, history_file: Path | str | None = None):
        self.console = console or Console(highlight=False)
        self._readline = None
        self._history_file = Path(history_file or "~/.folio/history").expanduser()
        self._setup_readline()

    def _setup_readline(self) -> None:
        """Set up line editing and persistent input history when available."""
        try:
            import readline  # type: ignore
        except ImportError:
            return

        self._readline = readline
        try:
            if self._history_file.exists():
                readline.read_history_file(str(self._history_file))
        except OSError as e:
            log.warning("Could not load input history", path=str(self._history_file), error=str(e))

    def save_history(self) -> None:
        if self._readline is None:
            return
        try:
            self._history_file.parent.mkdir(parents=True, exist_ok=True)
            self._readline.write_history_file(str(self._history_file))
        except OSError as e:
            log.warning("Could not save input history", path=str(self._history_file), error=str(e))

    def print_welcome(self) -> None:
        self.console.print(WELCOME_TEXT, style="bold")

    def print_system(self, text: str) -> None:
        self.console.print(text, style="dim")

    def print_reply(self, text: str) -> None:
        self.console.print(f"AI: {text}", markup=False)

    async def read_line(self, prompt: str = "You: ") -> str | None:
        """Read one line of input; returns None on EOF."""
        try:
            return await asyncio.to_thread(self.console.input, prompt)
        except EOFError:
            return None


_ui: TerminalUI | None = None


def get_ui() -> TerminalUI:
    """Get the global terminal UI instance."""
    global _ui
    if _ui is None:
        _ui = TerminalUI()
    return _ui
