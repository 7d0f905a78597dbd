"""EMSA-PKCS1-v1_5 encoding for RSASSA-PKCS1-v1_5 signatures (RFC 8017 section 9.2).

The message digest is wrapped in a DER encoded DigestInfo, which names the hash function, and padded with 0xFF
octets to the full key size.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from pyasn1 import error
from pyasn1.codec.der import decoder
from pyasn1.codec.der import encoder
from pyasn1.type import univ
from pyasn1_modules import rfc8017

from rsaoaep.errors import MessageTooLong
from rsaoaep.hashes import DEFAULT_HASH
from rsaoaep.hashes import get_hash
from rsaoaep.hashes import HASH_OID


def digest_info(message: bytes, hashf: str = DEFAULT_HASH) -> bytes:
    """Hashes the message and DER encodes the digest together with its algorithm identifier."""
    hasher, ident, _, _ = get_hash(hashf)
    algid = rfc8017.DigestAlgorithm()
    algid["algorithm"] = ident
    algid["parameters"] = univ.Null("")
    payload = rfc8017.DigestInfo()
    payload["digestAlgorithm"] = algid
    payload["digest"] = hasher(message).digest()
    return encoder.encode(payload)


def digest_info_hash(encoded: bytes) -> str | None:
    """Finds which registered hash function a DER encoded DigestInfo was made with.

    Args:
        encoded: The DER encoded DigestInfo.

    Returns:
        The hash function name, or None if the structure is malformed or the hash unknown.
    """
    try:
        payload, rest = decoder.decode(encoded, asn1Spec=rfc8017.DigestInfo())
        if rest:
            return None
        return HASH_OID[payload["digestAlgorithm"]["algorithm"]]
    except (error.PyAsn1Error, KeyError, TypeError):
        return None


def emsa_pkcs1_v15_encode(message: bytes, k: int, hashf: str = DEFAULT_HASH) -> bytes:
    """Encodes the message as `0x00 || 0x01 || PS || 0x00 || DigestInfo` of exactly `k` octets.

    Args:
        message: The message to be signed.
        k: Octet length of the RSA modulus.
        hashf: Hash function (Implemented for sha1, sha256, sha384, sha512)

    Returns:
        The encoded message.

    Raises:
        MessageTooLong: If the DigestInfo does not fit the key with at least 8 padding octets.
    """
    encoded = digest_info(message, hashf)
    if k < len(encoded) + 11:
        raise MessageTooLong("Hash function too large for current key.")
    ps = b"\xFF" * (k - len(encoded) - 3)
    return b"\x00\x01" + ps + b"\x00" + encoded
