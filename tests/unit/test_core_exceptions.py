"""Unit tests for the hexcrypt error hierarchy."""

import pytest

from hexcrypt.core import exceptions as exc


@pytest.mark.parametrize(
    "cls",
    [exc.InvalidHashLength, exc.CipherInitError, exc.CipherStateError, exc.DecryptionError, exc.PaddingError],
)
def test_all_errors_share_a_base(cls):
    assert issubclass(cls, exc.HexCryptError)


def test_padding_error_is_a_decryption_error():
    assert issubclass(exc.PaddingError, exc.DecryptionError)


def test_builtin_bases():
    assert issubclass(exc.InvalidHashLength, ValueError)
    assert issubclass(exc.CipherStateError, RuntimeError)
    # I/O failures are never wrapped
    assert not issubclass(exc.HexCryptError, OSError)
