"""AES-128-CBC cipher context with PKCS#7 padding and an explicit lifecycle.

States:
- INITIALIZED: just built, ready for update() or finalize()
- UPDATING: at least one update() call went through
- FINALIZED: terminal; any further call raises CipherStateError

Padding is done by ``cryptography``'s PKCS7 padder/unpadder so partial blocks
are buffered across update() calls and the output never depends on how the
input was split.
"""
from __future__ import annotations

import enum
import logging
from typing import Optional

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..core.exceptions import CipherInitError, CipherStateError, PaddingError
from .kdf import DerivedMaterial


logger = logging.getLogger(__name__)

# AES block size in bytes
BLOCK_SIZE = 16


class Direction(enum.Enum):
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


class CipherState(enum.Enum):
    INITIALIZED = "initialized"
    UPDATING = "updating"
    FINALIZED = "finalized"


class CipherContext:
    """
    One encryption or decryption pass over a byte stream.

    A context is owned by a single operation and is not thread-safe: it keeps
    the partially filled block between update() calls.
    """

    def __init__(self, material: DerivedMaterial, direction: Direction):
        if not isinstance(direction, Direction):
            raise TypeError(f"direction must be a Direction, got {direction!r}")
        self._direction = direction
        self._state = CipherState.INITIALIZED

        try:
            cipher = Cipher(algorithms.AES(material.key), modes.CBC(material.iv))
            pkcs7 = padding.PKCS7(BLOCK_SIZE * 8)
            if direction is Direction.ENCRYPT:
                self._cipher = cipher.encryptor()
                self._padding = pkcs7.padder()
            else:
                self._cipher = cipher.decryptor()
                self._padding = pkcs7.unpadder()
        except (ValueError, TypeError) as exc:
            raise CipherInitError("Could not initialize.") from exc

        logger.debug("cipher context ready (%s)", direction.value)

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def state(self) -> CipherState:
        return self._state

    @property
    def finalized(self) -> bool:
        return self._state is CipherState.FINALIZED

    def require_open(self) -> None:
        """Raise CipherStateError once the context has been finalized."""
        if self._state is CipherState.FINALIZED:
            raise CipherStateError("Cipher context already finalized")

    def update(self, data: bytes, offset: int = 0, length: Optional[int] = None) -> bytes:
        """Process ``length`` bytes of ``data`` starting at ``offset``.

        Returns whatever output is ready; this may be shorter than the input
        or empty while a block is still being filled.
        """
        self.require_open()

        view = memoryview(data)
        if length is None:
            length = len(view) - offset
        if offset < 0 or length < 0 or offset + length > len(view):
            raise ValueError(
                f"offset {offset} and length {length} out of range for {len(view)} bytes"
            )

        self._state = CipherState.UPDATING
        if length == 0:
            return b""

        chunk = view[offset:offset + length]
        if self._direction is Direction.ENCRYPT:
            return self._cipher.update(self._padding.update(chunk))
        return self._padding.update(self._cipher.update(chunk))

    def finalize(self) -> bytes:
        """Flush the buffered block and close the context.

        Encrypting appends PKCS#7 padding (a whole block when the input is
        block-aligned). Decrypting checks and strips it; PaddingError is
        raised when the ciphertext is truncated or the padding is malformed,
        which is what a wrong secret usually looks like.
        """
        self.require_open()
        # terminal whether or not the flush below succeeds
        self._state = CipherState.FINALIZED

        if self._direction is Direction.ENCRYPT:
            tail = self._cipher.update(self._padding.finalize())
            return tail + self._cipher.finalize()

        try:
            plain = self._padding.update(self._cipher.finalize())
            return plain + self._padding.finalize()
        except ValueError as exc:
            logger.debug("decryption rejected: %s", exc)
            raise PaddingError(
                "Invalid padding: wrong secret or corrupted ciphertext"
            ) from exc
