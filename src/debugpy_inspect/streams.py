"""Relay a child's output pipes into the caller's text streams."""

from __future__ import annotations

import codecs
import logging
import threading
from typing import BinaryIO, TextIO

logger = logging.getLogger(__name__)

CHUNK_SIZE = 4096


class BannerFilter:
    """Drop the first line that exactly equals ``banner``.

    Later copies of the same text are real output and pass through.
    """

    def __init__(self, banner: str):
        self.banner = banner
        self.suppressed = False

    def __call__(self, line: str) -> bool:
        if not self.suppressed and line.rstrip("\r\n") == self.banner:
            self.suppressed = True
            logger.debug("Suppressed listener banner: %s", self.banner)
            return False
        return True


def relay_chunks(source: BinaryIO, sink: TextIO) -> None:
    """Copy ``source`` to ``sink`` as data arrives, without buffering lines."""
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    with source:
        for chunk in iter(lambda: source.read1(CHUNK_SIZE), b""):
            text = decoder.decode(chunk)
            if text:
                sink.write(text)
                sink.flush()
        tail = decoder.decode(b"", final=True)
        if tail:
            sink.write(tail)
            sink.flush()


def relay_lines(source: BinaryIO, sink: TextIO, keep=None) -> None:
    """Copy ``source`` to ``sink`` line by line, skipping lines ``keep`` rejects."""
    with source:
        for raw in iter(source.readline, b""):
            line = raw.decode("utf-8", errors="replace")
            if keep is not None and not keep(line):
                continue
            sink.write(line)
            sink.flush()


def start_daemon(target, *args, name: str) -> threading.Thread:
    thread = threading.Thread(target=target, args=args, name=name, daemon=True)
    thread.start()
    return thread
