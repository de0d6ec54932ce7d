"""Chunked driver that pushes a byte stream through a CipherContext.

Output is the concatenation of every update() result followed by the
finalize() result, so the chunk size only affects throughput.
"""
from __future__ import annotations

import logging
import os
from contextlib import ExitStack
from dataclasses import dataclass
from typing import BinaryIO, Union

from .crypto import CipherContext


logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 8 * 1024  # 8KB

Source = Union[str, bytes, "os.PathLike[str]", BinaryIO]


@dataclass
class StreamStats:
    bytes_read: int = 0
    bytes_written: int = 0
    chunks: int = 0


def _open(stack: ExitStack, target: Source, mode: str) -> BinaryIO:
    # Paths are opened (and closed) here; file objects belong to the caller.
    if isinstance(target, (str, bytes, os.PathLike)):
        return stack.enter_context(open(target, mode))
    return target


class StreamProcessor:
    """Reads a source in fixed-size chunks and writes the transformed bytes."""

    def __init__(self, chunk_size: int = DEFAULT_CHUNK_SIZE):
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self.chunk_size = chunk_size

    def execute(self, source: Source, destination: Source, context: CipherContext) -> StreamStats:
        """
        Encrypt or decrypt ``source`` into ``destination`` with ``context``.

        ``source`` and ``destination`` may be paths or open binary file
        objects. Paths are closed on every exit path; file objects are left
        open. OSError from opening, reading or writing propagates unchanged
        and a partially written destination is left as is.
        """
        # a spent context must not get the chance to truncate the destination
        context.require_open()

        stats = StreamStats()
        with ExitStack() as stack:
            inf = _open(stack, source, "rb")
            outf = _open(stack, destination, "wb")

            while True:
                chunk = inf.read(self.chunk_size)
                if not chunk:
                    break
                stats.bytes_read += len(chunk)
                stats.chunks += 1
                out = context.update(chunk)
                if out:
                    outf.write(out)
                    stats.bytes_written += len(out)

            # final touch: padding on encrypt, padding check on decrypt
            tail = context.finalize()
            if tail:
                outf.write(tail)
                stats.bytes_written += len(tail)

        logger.debug(
            "%s pass done: %d bytes in, %d bytes out, %d chunks",
            context.direction.value,
            stats.bytes_read,
            stats.bytes_written,
            stats.chunks,
        )
        return stats
