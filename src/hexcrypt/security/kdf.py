"""Turn a caller-supplied hex secret into AES key and IV bytes.

The secret is used directly: its first HASH_LEN characters are hex-decoded
into KEY_LEN bytes and that single value is used as both the AES-128 key and
the CBC IV. This keeps files produced by earlier versions decryptable, but a
key-dependent fixed IV is weak. New formats should derive an independent IV
and use an AEAD mode instead.
"""

import binascii
from dataclasses import dataclass
from typing import Dict

from ..core.exceptions import InvalidHashLength


# Number of significant secret characters; anything after is ignored.
HASH_LEN = 32
KEY_LEN = HASH_LEN // 2


@dataclass(frozen=True)
class DerivedMaterial:
    """Key material derived from a secret. ``key`` and ``iv`` are the same bytes."""

    material: bytes

    @property
    def key(self) -> bytes:
        return self.material

    @property
    def iv(self) -> bytes:
        return self.material

    def __repr__(self) -> str:
        # never leak key bytes into logs or tracebacks
        return f"DerivedMaterial(<{len(self.material)} bytes>)"


def derive(secret: str) -> DerivedMaterial:
    """
    Derive key/IV material from ``secret``.

    Raises InvalidHashLength if the secret has fewer than HASH_LEN characters
    or its first HASH_LEN characters are not hexadecimal.
    """
    if len(secret) < HASH_LEN:
        raise InvalidHashLength(
            f"Hash length must be at least {HASH_LEN} characters, got {len(secret)}"
        )

    head = secret[:HASH_LEN]
    try:
        raw = binascii.unhexlify(head)
    except ValueError as exc:
        raise InvalidHashLength(
            f"First {HASH_LEN} characters of the hash must be hexadecimal"
        ) from exc

    return DerivedMaterial(raw)


def material_params_to_dict(material: DerivedMaterial) -> Dict:
    return {
        "algo": "aes-128-cbc",
        "padding": "pkcs7",
        "key_len": len(material.key),
        "iv_from_key": material.iv == material.key,
    }
