"""Registry of the hash functions usable for OAEP, MGF1 and signatures.

Each entry maps a hash name to `(constructor, digest OID, output length, input cap)`, where the input cap is the
maximum message length in octets the hash accepts. The cap bounds the OAEP label.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import hashlib
from typing import Callable

from pyasn1.type import univ
from pyasn1_modules import rfc8017

from rsaoaep.errors import UnsupportedHash

HASH_TLL = {
    "sha1": (hashlib.sha1, rfc8017.id_sha1, 20, 2**61 - 1),
    "sha256": (hashlib.sha256, rfc8017.id_sha256, 32, 2**61 - 1),
    "sha384": (hashlib.sha384, rfc8017.id_sha384, 48, 2**125 - 1),
    "sha512": (hashlib.sha512, rfc8017.id_sha512, 64, 2**125 - 1),
}

HASH_OID = {oid: name for name, (_, oid, _, _) in HASH_TLL.items()}

DEFAULT_HASH = "sha256"


def get_hash(hashf: str) -> tuple[Callable, univ.ObjectIdentifier, int, int]:
    """Looks up a hash function by name.

    Args:
        hashf: Hash function name (Implemented for sha1, sha256, sha384, sha512)

    Returns:
        The tuple of (constructor, digest OID, output length, input cap).

    Raises:
        UnsupportedHash: If the name is not registered.
    """
    try:
        return HASH_TLL[hashf]
    except KeyError:
        raise UnsupportedHash(f"Unsupported hash function: {hashf}") from None
