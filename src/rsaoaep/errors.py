"""Exceptions raised across the package.

Every error derives from `RSAError` as well as from the builtin exception matching its nature, so callers may catch
either `ValueError`/`RuntimeError` or the specific class.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class RSAError(Exception):
    """Base class for all rsaoaep errors."""


class MessageTooLong(RSAError, ValueError):
    """The message does not fit into a block of the key's size for the chosen hash function."""


class LabelTooLong(RSAError, ValueError):
    """The label exceeds the input limit of the chosen hash function."""


class IntegerTooLarge(RSAError, ValueError):
    """The integer cannot be represented in the requested number of octets."""


class MaskTooLong(RSAError, ValueError):
    """The requested MGF1 mask is longer than 2^32 hash blocks."""


class MessageRepresentativeOutOfRange(RSAError, ValueError):
    """The integer representative handed to an RSA primitive is not in [0, n-1]."""


class UnsupportedHash(RSAError, ValueError):
    """The hash function is not registered, or an identifier names no registered hash."""


class DecodingError(RSAError, RuntimeError):
    """Decryption failed.

    Deliberately carries the same message whatever the cause, as distinguishable failures form a padding oracle.
    """

    def __init__(self) -> None:
        super().__init__("Decryption error.")


class RandomnessUnavailable(RSAError, RuntimeError):
    """The operating system's random source could not supply the requested bytes."""
