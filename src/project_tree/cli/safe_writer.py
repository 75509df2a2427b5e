"""Signal-aware output writing for the project-tree CLI."""

import errno
import os
from pathlib import Path
from typing import IO, Optional, Union

from project_tree.cli.signal_handler import signal_handler
from project_tree.types import PathType


class SafeWriter:
    """Writes text to standard output or to the ``--output`` file.

    Standard output is passed as a file descriptor and left open. A path is opened
    (truncating an existing file) and closed by the writer. A closed pipe, or a SIGPIPE
    or SIGINT recorded by the signal handler, surfaces as BrokenPipeError so the caller
    can stop writing.

    Attributes:
        fd (int): The file descriptor written to.
        encoding (str): Text encoding used for writes.
        closed (bool): True once :meth:`close` has run.
    """

    def __init__(self, target: Union[int, PathType], encoding: str = "utf-8") -> None:
        self.encoding = encoding
        self.closed = False
        self._owned: Optional[IO[bytes]] = None

        if isinstance(target, int):
            self.fd = target
        elif isinstance(target, (str, os.PathLike)):
            self._owned = Path(target).open("wb")
            self.fd = self._owned.fileno()
        else:
            raise TypeError(f"Expected a file descriptor or a path, got {type(target).__name__}")

    def write(self, data: str) -> None:
        """Write ``data`` completely, continuing after short writes to a pipe.

        Raises:
            BrokenPipeError: If the reader went away or a signal was received.
            ValueError: If the writer has been closed.
        """
        if self.closed:
            raise ValueError("Cannot write to a closed SafeWriter")
        if signal_handler.interrupted:
            raise BrokenPipeError(errno.EPIPE, "Output interrupted")

        payload = data.encode(self.encoding)
        while payload:
            try:
                written = os.write(self.fd, payload)
            except OSError as e:
                if e.errno == errno.EPIPE:
                    raise BrokenPipeError(errno.EPIPE, "Broken pipe") from e
                raise
            payload = payload[written:]

    def write_line(self, line: str) -> None:
        self.write(line + "\n")

    def close(self) -> None:
        """Close the file opened by the writer; a descriptor passed in stays open."""
        if self.closed:
            return
        self.closed = True
        if self._owned is not None:
            try:
                self._owned.close()
            except BrokenPipeError:
                pass

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
