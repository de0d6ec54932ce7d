"""Security helpers: secret derivation and streaming AES-CBC primitives for hexcrypt.

This package provides:
- hex secret -> 16-byte key/IV material (no salting, no stretching)
- an AES-128-CBC/PKCS#7 cipher context with update/finalize
- a chunked stream processor that drives files through a context
"""

from .kdf import HASH_LEN, KEY_LEN, DerivedMaterial, derive
from .crypto import BLOCK_SIZE, Direction, CipherState, CipherContext
from .stream import DEFAULT_CHUNK_SIZE, StreamProcessor, StreamStats

__all__ = [
    "HASH_LEN",
    "KEY_LEN",
    "DerivedMaterial",
    "derive",
    "BLOCK_SIZE",
    "Direction",
    "CipherState",
    "CipherContext",
    "DEFAULT_CHUNK_SIZE",
    "StreamProcessor",
    "StreamStats",
]
