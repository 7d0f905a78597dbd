"""EME-OAEP encoding and decoding, as specified in RFC 8017 section 7.1.

Provides the padding half of RSAES-OAEP. Both directions work on the `k`-octet encoded message and never touch
the key itself, apart from its octet length. Also describes the scheme as a DER encoded AlgorithmIdentifier, for
callers that need to announce which hash their ciphertext uses.

Typical usage example:

    em = eme_oaep_encode(256, b"Hi there!", b"context")
    m = eme_oaep_decode(256, em, b"context")
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import hmac
import logging
from secrets import token_bytes

from pyasn1 import error
from pyasn1.codec.der import decoder
from pyasn1.codec.der import encoder
from pyasn1_modules import rfc4055
from pyasn1_modules import rfc8017

from rsaoaep.codec import xorbytes
from rsaoaep.errors import DecodingError
from rsaoaep.errors import LabelTooLong
from rsaoaep.errors import MessageTooLong
from rsaoaep.errors import RandomnessUnavailable
from rsaoaep.errors import UnsupportedHash
from rsaoaep.hashes import DEFAULT_HASH
from rsaoaep.hashes import get_hash
from rsaoaep.hashes import HASH_OID
from rsaoaep.mgf import mgf1

_log = logging.getLogger(__name__)

OAEP_IDENTIFIERS = {
    "sha256": rfc4055.rSAES_OAEP_SHA256_Identifier,
    "sha384": rfc4055.rSAES_OAEP_SHA384_Identifier,
    "sha512": rfc4055.rSAES_OAEP_SHA512_Identifier,
}


def max_message_length(k: int, hashf: str = DEFAULT_HASH) -> int:
    """The largest message, in octets, that fits a `k`-octet block. Negative if none fits."""
    return k - 2 * (get_hash(hashf)[2] + 1)


def _random_seed(hlen: int) -> bytes:
    """Draws a fresh OAEP seed from the operating system's CSPRNG.

    Raises:
        RandomnessUnavailable: If the random source fails or returns a short read.
    """
    try:
        seed = token_bytes(hlen)
    except (OSError, NotImplementedError) as exc:
        raise RandomnessUnavailable("Could not obtain random seed") from exc
    if len(seed) != hlen:
        raise RandomnessUnavailable("Random source returned a short seed")
    return seed


def eme_oaep_encode(k: int, message: bytes, label: bytes = b"", hashf: str = DEFAULT_HASH) -> bytes:
    """Encodes the message into a `k`-octet EME-OAEP block.

    Args:
        k: Octet length of the RSA modulus the block is meant for.
        message: Message to be encoded
        label: Optional label for the message
        hashf: Hash function (Implemented for sha1, sha256, sha384, sha512)

    Returns:
        The encoded message `0x00 || maskedSeed || maskedDB` of exactly `k` octets.

    Raises:
        LabelTooLong: If label too long for the hash function.
        MessageTooLong: If message too long for the key size and hash function.
        RandomnessUnavailable: If no seed could be drawn.
    """
    fun, _, hlen, hcap = get_hash(hashf)
    if len(label) > hcap:
        raise LabelTooLong("Label too long for the specified hash function")
    if len(message) > max_message_length(k, hashf):
        raise MessageTooLong("Message too long for the specified hash function")
    _log.debug("Encoding %d octets into a %d-octet OAEP block using %s", len(message), k, hashf)
    lh = fun(label).digest()
    pad = b"\x00" * (k - len(message) - 2 * (hlen + 1))
    db = lh + pad + b"\x01" + message
    seed = _random_seed(hlen)
    mdb = xorbytes(db, mgf1(seed, k - hlen - 1, hashf))
    mseed = xorbytes(seed, mgf1(mdb, hlen, hashf))
    em = b"\x00" + mseed + mdb
    assert len(em) == k, "encoded message length diverged from k"
    return em


def eme_oaep_decode(k: int, em: bytes, label: bytes = b"", hashf: str = DEFAULT_HASH) -> bytes:
    """Recovers the message from a `k`-octet EME-OAEP block.

    All checks run to completion before the verdict, and every failure raises the same error, so that callers
    cannot tell which part of the block was malformed.

    Args:
        k: Octet length of the RSA modulus the block came from.
        em: The encoded message.
        label: Optional label the message was encoded with.
        hashf: Hash function (Implemented for sha1, sha256, sha384, sha512)

    Returns:
        The decoded message.

    Raises:
        DecodingError: If the block is not a valid encoding under this label and hash.
    """
    fun, _, hlen, hcap = get_hash(hashf)
    if len(label) > hcap or len(em) != k or k < 2 * (hlen + 1):
        _log.debug("OAEP decoding failed")
        raise DecodingError()
    lh = fun(label).digest()
    mseed = em[1:hlen + 1]
    mdb = em[hlen + 1:]
    seed = xorbytes(mseed, mgf1(mdb, hlen, hashf))
    db = xorbytes(mdb, mgf1(seed, k - hlen - 1, hashf))
    invalid = int(em[0] != 0) | int(not hmac.compare_digest(db[:hlen], lh))
    mrkr = 0
    looking = 1
    for pos in range(hlen, len(db)):
        is_one = int(db[pos] == 0x01)
        is_zero = int(db[pos] == 0x00)
        mrkr |= pos * (looking & is_one)
        invalid |= looking & (1 - is_zero) & (1 - is_one)
        looking &= is_zero
    invalid |= looking
    if invalid:
        _log.debug("OAEP decoding failed")
        raise DecodingError()
    return db[mrkr + 1:]


def oaep_identifier(hashf: str = DEFAULT_HASH) -> bytes:
    """DER encodes the RSAES-OAEP AlgorithmIdentifier for the hash, with MGF1 over the same hash.

    The label is never part of the identifier.

    Args:
        hashf: Hash function (Implemented for sha256, sha384, sha512)

    Returns:
        The DER encoded AlgorithmIdentifier.

    Raises:
        UnsupportedHash: If no standard identifier exists for the hash.
    """
    if hashf not in OAEP_IDENTIFIERS:
        raise UnsupportedHash(f"No RSAES-OAEP identifier for {hashf}")
    return encoder.encode(OAEP_IDENTIFIERS[hashf])


def parse_oaep_identifier(der: bytes) -> str:
    """Reads the hash function name out of a DER encoded RSAES-OAEP AlgorithmIdentifier.

    Args:
        der: The DER encoded AlgorithmIdentifier.

    Returns:
        The registered name of the hash function.

    Raises:
        UnsupportedHash: If the identifier is malformed, not RSAES-OAEP, or names an unknown hash.
    """
    try:
        ident, rest = decoder.decode(der, asn1Spec=rfc8017.AlgorithmIdentifier())
        if rest or ident["algorithm"] != rfc8017.id_RSAES_OAEP:
            raise UnsupportedHash("Not an RSAES-OAEP identifier")
        params, _ = decoder.decode(ident["parameters"], asn1Spec=rfc8017.RSAES_OAEP_params())
        hashf = HASH_OID[params["hashFunc"]["algorithm"]]
    except (error.PyAsn1Error, KeyError, TypeError) as exc:
        raise UnsupportedHash("Malformed or unsupported RSAES-OAEP identifier") from exc
    if hashf not in OAEP_IDENTIFIERS:
        raise UnsupportedHash(f"No RSAES-OAEP identifier for {hashf}")
    return hashf
