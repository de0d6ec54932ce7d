"""hexcrypt: AES-128-CBC file encryption keyed by a pre-shared hex secret."""

from .core.engine import CryptoEngine, encrypt_bytes, decrypt_bytes
from .core.exceptions import (
    HexCryptError,
    InvalidHashLength,
    CipherInitError,
    CipherStateError,
    DecryptionError,
    PaddingError,
)
from .security.crypto import Direction, CipherState, CipherContext
from .security.kdf import DerivedMaterial, derive
from .security.stream import StreamProcessor, StreamStats, DEFAULT_CHUNK_SIZE

__version__ = "0.1.0"

__all__ = [
    "CryptoEngine",
    "encrypt_bytes",
    "decrypt_bytes",
    "HexCryptError",
    "InvalidHashLength",
    "CipherInitError",
    "CipherStateError",
    "DecryptionError",
    "PaddingError",
    "Direction",
    "CipherState",
    "CipherContext",
    "DerivedMaterial",
    "derive",
    "StreamProcessor",
    "StreamStats",
    "DEFAULT_CHUNK_SIZE",
]
