"""Thread-safe console output for formatted request blocks."""

from __future__ import annotations

import sys
import threading
from typing import TextIO


class ConsoleSink:
    """Write each block in one locked operation so blocks never interleave.

    Parameters
    ----------
    stream:
        Target text stream. Defaults to ``sys.stdout``, looked up at
        write time so redirections made after construction are honoured.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    def __call__(self, block: str) -> None:
        stream = self._stream or sys.stdout
        with self._lock:
            stream.write(block + "\n")
            stream.flush()
