"""Octet string and integer conversion primitives from PKCS#1 v2.2 section 4.

The byte order is always big-endian, as mandated by the standard, regardless of the host machine.

Typical usage example:

    x = os2ip(b"\\x01\\x00")
    assert i2osp(x, 4) == b"\\x00\\x00\\x01\\x00"
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsaoaep.errors import IntegerTooLarge


def os2ip(msg: bytes) -> int:
    """Converts an octet string to a nonnegative integer (OS2IP).

    Args:
        msg: The bytes (AKA Octet String) to convert.

    Returns:
        The representative integer.
    """
    return int.from_bytes(msg, byteorder="big", signed=False)


def i2osp(msg: int, fixedlen: int) -> bytes:
    """Converts a nonnegative integer to an octet string of a fixed length (I2OSP).

    Args:
        msg: The integer to unmarshal.
        fixedlen: The target length of the byte string.

    Returns:
        The representative bytes, zero-padded on the left. (AKA Octet String)

    Raises:
        IntegerTooLarge: If the integer is negative or needs more than `fixedlen` octets.
    """
    if msg < 0 or msg.bit_length() > 8 * fixedlen:
        raise IntegerTooLarge(f"Integer too large for {fixedlen} octets")
    return msg.to_bytes(fixedlen, byteorder="big", signed=False)


def xorbytes(a: bytes, b: bytes) -> bytes:
    """XOR bitwise for bytes.

    Requires two byte strings of equal length.

    Args:
        a: byte string
        b: byte string

    Returns:
        xor byte string
    """
    return bytes(x ^ y for x, y in zip(a, b, strict=True))
