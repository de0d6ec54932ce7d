import os

import pytest
from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from hexcrypt.core.exceptions import (
    CipherInitError,
    CipherStateError,
    DecryptionError,
    PaddingError,
)
from hexcrypt.security.crypto import BLOCK_SIZE, CipherContext, CipherState, Direction
from hexcrypt.security.kdf import DerivedMaterial, derive


SECRET = "00112233445566778899aabbccddeeff" * 2
OTHER_SECRET = "ffeeddccbbaa99887766554433221100" * 2


def _run(secret, direction, data):
    ctx = CipherContext(derive(secret), direction)
    return ctx.update(data) + ctx.finalize()


def _reference_encrypt(secret, data):
    # plain one-shot AES-CBC/PKCS7 with key == IV
    raw = bytes.fromhex(secret[:32])
    padder = padding.PKCS7(128).padder()
    enc = Cipher(algorithms.AES(raw), modes.CBC(raw)).encryptor()
    return enc.update(padder.update(data) + padder.finalize()) + enc.finalize()


def test_hello_world_is_one_block():
    ct = _run(SECRET, Direction.ENCRYPT, b"Hello, World!")
    assert len(ct) == BLOCK_SIZE
    assert _run(SECRET, Direction.DECRYPT, ct) == b"Hello, World!"


def test_matches_one_shot_aes_cbc():
    data = b"Hello, World!" * 37
    assert _run(SECRET, Direction.ENCRYPT, data) == _reference_encrypt(SECRET, data)


def test_empty_input_gives_one_padding_block():
    ct = _run(SECRET, Direction.ENCRYPT, b"")
    assert len(ct) == BLOCK_SIZE
    assert _run(SECRET, Direction.DECRYPT, ct) == b""


def test_block_aligned_input_gets_full_padding_block():
    ct = _run(SECRET, Direction.ENCRYPT, b"A" * 32)
    assert len(ct) == 48


@pytest.mark.parametrize("size", [1, 15, 16, 17, 1000, 4096])
def test_roundtrip(size):
    data = os.urandom(size)
    ct = _run(SECRET, Direction.ENCRYPT, data)
    assert len(ct) % BLOCK_SIZE == 0
    assert _run(SECRET, Direction.DECRYPT, ct) == data


def test_update_buffers_partial_blocks():
    ctx = CipherContext(derive(SECRET), Direction.ENCRYPT)
    assert ctx.update(b"short") == b""
    assert len(ctx.update(b"x" * 20)) == BLOCK_SIZE
    assert len(ctx.finalize()) == BLOCK_SIZE


def test_update_with_empty_buffer_returns_empty():
    ctx = CipherContext(derive(SECRET), Direction.ENCRYPT)
    assert ctx.update(b"") == b""


def test_update_respects_offset_and_length():
    data = b"Hello, World!"
    ctx = CipherContext(derive(SECRET), Direction.ENCRYPT)
    out = ctx.update(b"xxx" + data + b"yyy", 3, len(data)) + ctx.finalize()
    assert out == _reference_encrypt(SECRET, data)


@pytest.mark.parametrize("offset,length", [(-1, 2), (0, 10), (4, 2), (2, -1)])
def test_update_rejects_bad_range(offset, length):
    ctx = CipherContext(derive(SECRET), Direction.ENCRYPT)
    with pytest.raises(ValueError):
        ctx.update(b"abcd", offset, length)


def test_state_transitions():
    ctx = CipherContext(derive(SECRET), Direction.ENCRYPT)
    assert ctx.state is CipherState.INITIALIZED
    ctx.update(b"data")
    assert ctx.state is CipherState.UPDATING
    ctx.update(b"more")
    assert ctx.state is CipherState.UPDATING
    ctx.finalize()
    assert ctx.state is CipherState.FINALIZED
    assert ctx.finalized


def test_update_after_finalize_raises():
    ctx = CipherContext(derive(SECRET), Direction.ENCRYPT)
    ctx.finalize()
    with pytest.raises(CipherStateError):
        ctx.update(b"late")


def test_double_finalize_raises():
    ctx = CipherContext(derive(SECRET), Direction.DECRYPT)
    ctx.update(_run(SECRET, Direction.ENCRYPT, b"abc"))
    ctx.finalize()
    with pytest.raises(CipherStateError):
        ctx.finalize()


def test_failed_finalize_is_terminal():
    ctx = CipherContext(derive(SECRET), Direction.DECRYPT)
    ctx.update(b"\x00" * 15)
    with pytest.raises(PaddingError):
        ctx.finalize()
    assert ctx.state is CipherState.FINALIZED
    with pytest.raises(CipherStateError):
        ctx.update(b"\x00")


def test_truncated_ciphertext_raises_padding_error():
    ct = _run(SECRET, Direction.ENCRYPT, b"Hello, World!" * 4)
    with pytest.raises(PaddingError):
        _run(SECRET, Direction.DECRYPT, ct[:-3])


def test_empty_ciphertext_raises_padding_error():
    with pytest.raises(PaddingError):
        _run(SECRET, Direction.DECRYPT, b"")


def test_padding_error_is_decryption_error():
    ct = _run(SECRET, Direction.ENCRYPT, b"payload")
    with pytest.raises(DecryptionError):
        _run(SECRET, Direction.DECRYPT, ct[:8])


def test_wrong_secret_is_detected_by_padding():
    """A wrong secret yields garbage padding in all but ~1/256 of cases."""
    ct = _run(SECRET, Direction.ENCRYPT, b"Hello, World!")
    failures = 0
    for i in range(16):
        wrong = f"{i:02x}" + OTHER_SECRET[2:]
        try:
            _run(wrong, Direction.DECRYPT, ct)
        except PaddingError:
            failures += 1
    assert failures >= 12


def test_decrypt_with_other_secret_raises_padding_error():
    ct = _run(SECRET, Direction.ENCRYPT, b"Hello, World!")
    with pytest.raises(PaddingError):
        _run(OTHER_SECRET, Direction.DECRYPT, ct)


def test_require_open_after_finalize():
    ctx = CipherContext(derive(SECRET), Direction.ENCRYPT)
    ctx.require_open()
    ctx.finalize()
    with pytest.raises(CipherStateError):
        ctx.require_open()


def test_bad_material_raises_cipher_init_error():
    with pytest.raises(CipherInitError):
        CipherContext(DerivedMaterial(b"\x00" * 5), Direction.ENCRYPT)


def test_direction_must_be_enum():
    with pytest.raises(TypeError):
        CipherContext(derive(SECRET), True)


def test_direction_is_exposed():
    assert CipherContext(derive(SECRET), Direction.DECRYPT).direction is Direction.DECRYPT
