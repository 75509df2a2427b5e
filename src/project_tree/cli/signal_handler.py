"""Signal bookkeeping for the project-tree CLI.

SIGPIPE (output piped into ``head`` and the like) and SIGINT (Ctrl+C) are recorded
instead of killing the process immediately, so output stops cleanly and the CLI can
exit with the conventional status code.
"""

import atexit
import os
import signal
import sys
from threading import Event
from types import FrameType
from typing import Any, Dict, List, Optional

# Conventional 128 + signal number exit statuses
EXIT_SIGINT = 130
EXIT_SIGPIPE = 141

# None on platforms without SIGPIPE (Windows)
SIGPIPE: Optional[int] = getattr(signal, "SIGPIPE", None)


class SignalHandler:
    """Records which of SIGPIPE and SIGINT arrived.

    Each signal is recorded once; the handler that was installed before is then put
    back, so a second Ctrl+C interrupts as usual.

    Attributes:
        sigpipe_received (Event): Set once SIGPIPE has been received.
        sigint_received (Event): Set once SIGINT has been received.
    """

    def __init__(self) -> None:
        self.sigpipe_received = Event()
        self.sigint_received = Event()
        self._previous_handlers: Dict[int, Any] = {}

    def watched_signals(self) -> List[int]:
        if SIGPIPE is None:
            return [signal.SIGINT]
        return [SIGPIPE, signal.SIGINT]

    def install(self) -> None:
        for signum in self.watched_signals():
            self._previous_handlers[signum] = signal.signal(signum, self.handle)

    def handle(self, signum: int, frame: Optional[FrameType]) -> None:
        if SIGPIPE is not None and signum == SIGPIPE:
            self.sigpipe_received.set()
        else:
            self.sigint_received.set()
        previous = self._previous_handlers.pop(signum, None)
        signal.signal(signum, previous if previous is not None else signal.SIG_DFL)

    @property
    def interrupted(self) -> bool:
        return self.sigpipe_received.is_set() or self.sigint_received.is_set()

    def exit_code(self) -> Optional[int]:
        """Exit status implied by the received signals; SIGPIPE wins over SIGINT."""
        if self.sigpipe_received.is_set():
            return EXIT_SIGPIPE
        if self.sigint_received.is_set():
            return EXIT_SIGINT
        return None


signal_handler = SignalHandler()


def setup_signal_handling() -> None:
    """Start recording SIGINT and, where the platform has it, SIGPIPE."""
    signal_handler.install()


def discard_stdout_after_interrupt() -> None:
    """Point stdout at the null device at exit if output was interrupted.

    The interpreter flushes stdout while shutting down; after a broken pipe that flush
    would report a second error.
    """
    if signal_handler.interrupted:
        devnull = os.open(os.devnull, os.O_WRONLY)
        os.dup2(devnull, sys.stdout.fileno())


atexit.register(discard_stdout_after_interrupt)
