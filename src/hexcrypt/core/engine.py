"""
Public entry point of hexcrypt.

CryptoEngine bundles one secret, one direction and one CipherContext. It can
process a whole file with execute(), or be driven by hand with update() and
finalize(). Like the context it wraps, an engine is good for exactly one pass.
"""

from __future__ import annotations

import io
import logging
from typing import Dict, Optional

from ..security.crypto import CipherContext, Direction
from ..security.kdf import derive, material_params_to_dict
from ..security.stream import DEFAULT_CHUNK_SIZE, Source, StreamProcessor, StreamStats


logger = logging.getLogger(__name__)


class CryptoEngine:
    """Encrypts or decrypts one file (or byte stream) with a hex secret."""

    ENCRYPT = Direction.ENCRYPT
    DECRYPT = Direction.DECRYPT

    def __init__(self, secret: str, direction: Direction, chunk_size: int = DEFAULT_CHUNK_SIZE):
        material = derive(secret)
        self._params = material_params_to_dict(material)
        self.context = CipherContext(material, direction)
        self.processor = StreamProcessor(chunk_size)

    @classmethod
    def new(cls, secret: str, direction: Direction, chunk_size: int = DEFAULT_CHUNK_SIZE) -> "CryptoEngine":
        return cls(secret, direction, chunk_size=chunk_size)

    @property
    def direction(self) -> Direction:
        return self.context.direction

    def describe(self) -> Dict:
        """Non-secret parameters of this engine, handy for logs."""
        return dict(self._params, direction=self.direction.value, chunk_size=self.processor.chunk_size)

    def execute(self, source: Source, destination: Source) -> StreamStats:
        """Process ``source`` into ``destination`` (paths or binary file objects)."""
        logger.debug("%s %s -> %s", self.direction.value, _label(source), _label(destination))
        return self.processor.execute(source, destination, self.context)

    def update(self, buffer: bytes, offset: int = 0, length: Optional[int] = None) -> bytes:
        return self.context.update(buffer, offset, length)

    def finalize(self) -> bytes:
        return self.context.finalize()


def _label(target: Source) -> str:
    return str(getattr(target, "name", target))


def encrypt_bytes(secret: str, data: bytes) -> bytes:
    """One-shot in-memory encryption."""
    engine = CryptoEngine(secret, Direction.ENCRYPT)
    return engine.update(data) + engine.finalize()


def decrypt_bytes(secret: str, blob: bytes) -> bytes:
    """One-shot in-memory decryption; raises PaddingError on a wrong secret."""
    engine = CryptoEngine(secret, Direction.DECRYPT)
    out = io.BytesIO()
    engine.execute(io.BytesIO(blob), out)
    return out.getvalue()
