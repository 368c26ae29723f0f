# roach/interactive.py
#
# Line-based interactive mode: read a query, fetch once, page through the
# returned prefix records.

import logging
import threading
from typing import Callable, List, Optional

from roach import config
from roach.client import IRRExplorerClient, IRRExplorerError
from roach.colors import ColorPalette
from roach.models import PrefixRecord
from roach.render import render_prefix
from roach.validation import InputType, detect_input_type

logger = logging.getLogger(__name__)

BANNER = [
    "██████╗  ██████╗  █████╗  ██████╗██   ██╗",
    "██╔══██╗██╔═══██╗██╔══██╗██╔════╝██   ██║",
    "██████╔╝██║   ██║███████║██║     ███████║",
    "██╔══██╗██║   ██║██╔══██║██║     ██╔══██║",
    "██║  ██║╚██████╔╝██║  ██║╚██████╗██║  ██║",
    "╚═╝  ╚═╝ ╚═════╝ ╚═╝  ╚═╝ ╚═════╝╚═╝  ╚═╝",
    "",
    "  Route Origin Authorization Checker",
]

INVALID_INPUT = (
    "Invalid input. Please enter a valid ASN (AS12345), IPv4 (1.1.1.1), "
    "IPv6 (2001:db8::1), or CIDR (1.1.1.0/24)"
)
SLOW_HINT = "⏳ This is taking abnormally long..."
QUIT_WORDS = ("q", "quit", "exit")


class InteractiveSession:
    def __init__(self, client: IRRExplorerClient, palette: Optional[ColorPalette] = None,
                 slow_hint_after: float = config.SLOW_QUERY_HINT,
                 read: Callable[[str], str] = input, write: Callable[[str], None] = print):
        self.client = client
        self.palette = palette or ColorPalette(enabled=False)
        self.slow_hint_after = slow_hint_after
        self.read = read
        self.write = write

    def _ask(self, prompt: str) -> Optional[str]:
        try:
            return self.read(prompt)
        except EOFError:
            return None

    def _slow_warning(self) -> None:
        self.write(self.palette.paint(SLOW_HINT, "yellow"))

    def show_error(self, message: str) -> None:
        border = self.palette.paint("─" * min(len(message) + 4, 80), "red")
        self.write(border)
        self.write(self.palette.paint(f"  {message}", "red"))
        self.write(border)
        self._ask(self.palette.paint("Press Enter to continue", "gray"))

    def submit(self, value: str) -> Optional[List[PrefixRecord]]:
        """Run one query; on failure show the error and return None."""
        if detect_input_type(value) is InputType.INVALID:
            self.show_error(INVALID_INPUT)
            return None

        self.write(self.palette.paint("Fetching route data...", "yellow"))
        # only a display hint, the request keeps its own timeout
        timer = threading.Timer(self.slow_hint_after, self._slow_warning)
        timer.daemon = True
        timer.start()
        try:
            return self.client.lookup(value)
        except IRRExplorerError as e:
            logger.debug(f"Query {value!r} failed: {e}")
            self.show_error(str(e))
            return None
        finally:
            timer.cancel()

    def browse(self, records: List[PrefixRecord]) -> None:
        if not records:
            self.write(self.palette.paint("⚠️ No results found", "yellow"))
            self._ask(self.palette.paint("Press Enter to return", "gray"))
            return

        index = 0
        while True:
            nav = "n/p navigate | q return" if len(records) > 1 else "q return"
            self.write(self.palette.paint(f"Result {index + 1} of {len(records)}", "green")
                       + "  " + self.palette.paint(nav, "gray"))
            self.write(render_prefix(records[index], self.palette))
            answer = self._ask("> ")
            if answer is None:
                return
            answer = answer.strip().lower()
            if answer in ("n", "next") and index < len(records) - 1:
                index += 1
            elif answer in ("p", "prev") and index > 0:
                index -= 1
            elif answer in QUIT_WORDS:
                return

    def run(self) -> int:
        for line in BANNER:
            self.write(self.palette.paint(line, "yellow"))
        self.write(self.palette.paint("Check by ASN, prefix, or IP address (q to quit)", "yellow"))
        self.write(self.palette.paint("powered by IRRexplorer", "gray"))
        while True:
            value = self._ask(self.palette.paint("> ", "yellow"))
            if value is None:
                return 0
            value = value.strip()
            if not value:
                continue
            if value.lower() in QUIT_WORDS:
                return 0
            records = self.submit(value)
            if records is not None:
                self.browse(records)
