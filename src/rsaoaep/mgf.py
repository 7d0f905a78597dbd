"""The PKCS#1 v2.2 Mask Generation Function 1 (RFC 8017 appendix B.2.1)."""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from math import ceil

from rsaoaep.codec import i2osp
from rsaoaep.errors import MaskTooLong
from rsaoaep.hashes import DEFAULT_HASH
from rsaoaep.hashes import get_hash


def mgf1(mgfseed: bytes, masklen: int, hashf: str = DEFAULT_HASH) -> bytes:
    """Generates a mask of arbitrary length from a seed.

    Chains `Hash(mgfseed || I2OSP(counter, 4))` for counter 0 to `ceil(masklen / hlen) - 1` and truncates to
    `masklen` octets.

    Args:
        mgfseed: Seed for mask generation
        masklen: Intended length of mask
        hashf: Hash function (Implemented for sha1, sha256, sha384, sha512)

    Returns:
        The mask in form of bytes of length masklen.

    Raises:
        MaskTooLong: If mask too long for the combination of values.
        ValueError: If masklen is negative.
    """
    fun, _, hlen, _ = get_hash(hashf)
    if masklen < 0:
        raise ValueError("Mask length must be non-negative")
    if masklen > 2**32 * hlen:
        raise MaskTooLong("Mask too long for the specified hash function")
    t = b"".join(fun(mgfseed + i2osp(cnt, 4)).digest() for cnt in range(ceil(masklen / hlen)))
    return t[:masklen]
