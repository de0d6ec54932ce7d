"""
Exceptions for hexcrypt
All errors raised by the engine derive from HexCryptError, so callers have a
single general error catcher. I/O failures are not wrapped: they surface as
the built-in OSError.
"""


class HexCryptError(Exception):
    # general container for errors
    pass


class InvalidHashLength(HexCryptError, ValueError):
    # raised when the secret is shorter than 32 chars or not hex
    pass


class CipherInitError(HexCryptError):
    # raised when the crypto library refuses to build the cipher (fatal)
    pass


class CipherStateError(HexCryptError, RuntimeError):
    # raised on update()/finalize() after the context was finalized
    pass


class DecryptionError(HexCryptError):
    # raised when decryption cannot complete (wrong secret, corrupt data)
    pass


class PaddingError(DecryptionError):
    # raised when the trailing block does not carry valid PKCS#7 padding
    pass
