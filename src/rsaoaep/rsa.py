"""Provides core RSA functionalities: the RSA primitives, RSAES-OAEP encryption and RSASSA-PKCS1-v1_5 signatures.

Keys are immutable value objects handed explicitly to every operation. The module never generates keys; the
modulus and exponents must be supplied by the caller and are assumed to satisfy the RSA key relation. Ciphertexts
and signatures are raw big-endian octet strings of exactly the key's octet length.

Typical usage example:

    pub = RSAPubKey(n, e)
    pk = RSAPrivKey(n, d, pub_exp=e)
    c = pub.encrypt(b"Hi there!", b"context")
    r = pk.decrypt(c, b"context")
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import hmac
import logging
import math
import secrets
import warnings

from rsaoaep import emsa
from rsaoaep import oaep
from rsaoaep.codec import i2osp
from rsaoaep.codec import os2ip
from rsaoaep.errors import DecodingError
from rsaoaep.errors import MessageRepresentativeOutOfRange
from rsaoaep.errors import MessageTooLong
from rsaoaep.errors import RandomnessUnavailable
from rsaoaep.hashes import DEFAULT_HASH

_log = logging.getLogger(__name__)

MIN_SECURE_BITS = 2048


class RSAKey:
    """The overall RSA key class implementation.

    Acts mostly as a template for the "core" components of a RSA Key that are strictly mandatory in both a public
    and a private key. Instances are immutable and compare by value.

    Attributes:
        mod: The modulus of the keypair.
        expo: The exponent of the key, whether private or public.
        bsize: The octet length of the modulus, `k`.
    """
    __slots__ = ("_mod", "_expo")
    _WARN_STACKLEVEL = 2

    def __init__(self, mod: int, expo: int) -> None:
        self._set_numbers(mod, expo)
        if mod.bit_length() < MIN_SECURE_BITS:
            warnings.warn(f"A {mod.bit_length()}-bit modulus is unsecure! Please use with care.",
                          RuntimeWarning,
                          stacklevel=self._WARN_STACKLEVEL)

    def _set_numbers(self, mod: int, expo: int) -> None:
        if mod < 2 or expo < 1:
            raise ValueError("Modulus and exponent must be positive integers")
        self._mod = mod
        self._expo = expo

    @classmethod
    def _derived(cls, mod: int, expo: int) -> "RSAKey":
        """Builds a key from numbers already vetted by another key, without repeating its size warning."""
        key = cls.__new__(cls)
        key._set_numbers(mod, expo)
        return key

    @property
    def mod(self) -> int:
        return self._mod

    @property
    def expo(self) -> int:
        return self._expo

    @property
    def bsize(self) -> int:
        return (self._mod.bit_length() + 7) // 8

    def _numbers(self) -> tuple:
        return (self._mod, self._expo)

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._numbers() == other._numbers()

    def __hash__(self) -> int:
        return hash((type(self).__name__,) + self._numbers())

    def c_rsa(self, message: int) -> int:
        """Performs core RSA operation. (Encrypt/Decrypt/Sign/Verify).

        Baseline RSA Primitive, a single modular exponentiation.

        Args:
            message: The int-marshalled message representative.

        Returns:
            The message representative raised to the key's exponent modulo the modulus.

        Raises:
            MessageRepresentativeOutOfRange: If the message is out of range for the current key.
        """
        if not 0 <= message < self._mod:
            raise MessageRepresentativeOutOfRange("Message representative must be in range [0, mod-1]")
        return pow(message, self._expo, self._mod)


class RSAPubKey(RSAKey):
    """A rather straightforward subclass of RSAKey, for Public Keys.

    The init is not overwritten as a Public Key consists solely of a modulus and exponent.
    But provides the general functions expected of a public key.
    """
    __slots__ = ()

    def __repr__(self) -> str:
        return f"RSAPubKey(mod={self._mod:#x}, expo={self._expo})"

    def encrypt(self, message: bytes, label: bytes = b"", hashf: str = DEFAULT_HASH) -> bytes:
        """Encrypts the message according to the RSAES-OAEP algorithm.

        Args:
            message: Message to be encrypted
            label: Optional label for the message. Used to authenticate the message during decryption.
            hashf: Hash function (Implemented for sha1, sha256, sha384, sha512)

        Returns:
            The ciphertext, exactly `bsize` octets.

        Raises:
            MessageTooLong: If message too long for the key size and hash function.
            LabelTooLong: If label too long for the hash function.
            RandomnessUnavailable: If no OAEP seed could be drawn.
        """
        em = oaep.eme_oaep_encode(self.bsize, message, label, hashf)
        return i2osp(rsaep(self, os2ip(em)), self.bsize)

    def verify(self, message: bytes, signature: bytes) -> bool:
        """Verify an RSASSA-PKCS1-v1_5 signature of the message.

        The hash function is read from the DigestInfo inside the signature, after which the full expected encoding
        is rebuilt and compared, so no part of the padding goes unchecked.

        Args:
            message: The message to verify the signature against.
            signature: The signature, exactly `bsize` octets.

        Returns:
            True if the signature matches the message, False otherwise.
        """
        if len(signature) != self.bsize:
            return False
        try:
            em = i2osp(rsavp1(self, os2ip(signature)), self.bsize)
        except MessageRepresentativeOutOfRange:
            return False
        if em[0:2] != b"\x00\x01":
            return False
        sep = em.find(b"\x00", 2)
        if sep < 0:
            return False
        hashf = emsa.digest_info_hash(em[sep + 1:])
        if hashf is None:
            return False
        try:
            expected = emsa.emsa_pkcs1_v15_encode(message, self.bsize, hashf)
        except MessageTooLong:
            return False
        return hmac.compare_digest(em, expected)


class RSAPrivKey(RSAKey):
    """RSA Private Key class implementation.

    Only the modulus and private exponent are mandatory. The public exponent enables `pub` and base blinding of
    the private operation; the primes enable CRT acceleration, with any missing CRT component derived from them.

    Attributes:
        mod: The modulus of the keypair.
        expo: The private exponent of the key.
        pub: The public key of the key, if the public exponent is known.
        p: Private Prime 1.
        q: Private Prime 2.
    """
    __slots__ = ("_pub", "_p", "_q", "_exp1", "_exp2", "_coeff", "_blinding")
    _WARN_STACKLEVEL = 3

    def __init__(self,
                 mod: int,
                 expo: int,
                 pub_exp: int | None = None,
                 p: int | None = None,
                 q: int | None = None,
                 exp1: int | None = None,
                 exp2: int | None = None,
                 coeff: int | None = None,
                 blinding: bool = True) -> None:
        """Initialize the RSA Private Key.

        Args:
            mod: The modulus of the keypair.
            expo: The private exponent of the key.
            pub_exp: The public exponent of the key.
            p: The private prime 1.
            q: The private prime 2.
            exp1: CRT Component dmp1.
            exp2: CRT Component dmq1.
            coeff: CRT Component iqmp.
            blinding: Whether to blind the private operation. Only effective when `pub_exp` is known.

        Raises:
            ValueError: If only one prime is given, the primes do not multiply to the modulus, or a supplied CRT
                component does not match the one derived from the primes.
        """
        super().__init__(mod, expo)
        self._pub: RSAPubKey | None = None
        if pub_exp is not None:
            self._pub = RSAPubKey._derived(mod, pub_exp)
        self._p: int | None = None
        self._q: int | None = None
        self._exp1: int | None = None
        self._exp2: int | None = None
        self._coeff: int | None = None
        if (p is None) != (q is None):
            raise ValueError("Both primes are required for CRT")
        if p is not None and q is not None:
            if p * q != mod:
                raise ValueError("Primes do not match the modulus")
            self._p = p
            self._q = q
            self._exp1 = expo % (p - 1)
            self._exp2 = expo % (q - 1)
            self._coeff = pow(q, -1, p)
            for given, derived in ((exp1, self._exp1), (exp2, self._exp2), (coeff, self._coeff)):
                if given is not None and given != derived:
                    raise ValueError("CRT components do not match the private exponent and primes")
        self._blinding = blinding
        _log.debug("Loaded %d-bit private key (crt=%s, blinding=%s)", mod.bit_length(), self._p is not None,
                   self.blinded)

    def __repr__(self) -> str:
        return f"RSAPrivKey(<{self._mod.bit_length()}-bit private key>)"

    def _numbers(self) -> tuple:
        pub_exp = self._pub.expo if self._pub is not None else None
        return (self._mod, self._expo, pub_exp, self._p, self._q, self._exp1, self._exp2, self._coeff)

    @property
    def pub(self) -> RSAPubKey | None:
        return self._pub

    @property
    def p(self) -> int | None:
        return self._p

    @property
    def q(self) -> int | None:
        return self._q

    @property
    def exp1(self) -> int | None:
        return self._exp1

    @property
    def exp2(self) -> int | None:
        return self._exp2

    @property
    def coeff(self) -> int | None:
        return self._coeff

    @property
    def blinded(self) -> bool:
        return self._blinding and self._pub is not None

    def _exponentiate(self, message: int) -> int:
        if self._p is None or self._q is None:
            return pow(message, self._expo, self._mod)
        m_1 = pow(message, self._exp1, self._p)
        m_2 = pow(message, self._exp2, self._q)
        h = ((m_1 - m_2) * self._coeff) % self._p
        return m_2 + self._q * h

    def _blinding_factor(self) -> int:
        try:
            while True:
                r = secrets.randbelow(self._mod - 1) + 1
                if math.gcd(r, self._mod) == 1:
                    return r
        except (OSError, NotImplementedError) as exc:
            raise RandomnessUnavailable("Could not obtain blinding factor") from exc

    def c_rsa(self, message: int) -> int:
        """Performs core RSA operation accelerated with CRT. (Decrypt/Sign)

        The underlying RSA primitive to decrypt/sign the message. When blinded, the representative is multiplied by
        `r^e` for a fresh random `r` before exponentiation and by `r^-1` afterward, so the exponentiation never runs
        on attacker-chosen input.

        Args:
            message: The int-marshalled message representative.

        Returns:
            The message representative raised to the private exponent modulo the modulus.

        Raises:
            MessageRepresentativeOutOfRange: If the message is out of range for the current key.
        """
        if not 0 <= message < self._mod:
            raise MessageRepresentativeOutOfRange("Message representative must be in range [0, mod-1]")
        if not self.blinded:
            return self._exponentiate(message)
        r = self._blinding_factor()
        blinded = (message * pow(r, self._pub.expo, self._mod)) % self._mod
        return (self._exponentiate(blinded) * pow(r, -1, self._mod)) % self._mod

    def decrypt(self, ciphertext: bytes, label: bytes = b"", hashf: str = DEFAULT_HASH) -> bytes:
        """Decrypts the message according to the RSAES-OAEP algorithm.

        Args:
            ciphertext: Message to be decrypted, exactly `bsize` octets.
            label: Optional label the message was encrypted with.
            hashf: Hash function (Implemented for sha1, sha256, sha384, sha512)

        Returns:
            Decrypted message

        Raises:
            DecodingError: If decryption fails, for whatever reason.
        """
        if len(ciphertext) != self.bsize:
            raise DecodingError()
        try:
            em = i2osp(rsadp(self, os2ip(ciphertext)), self.bsize)
        except ValueError:
            raise DecodingError() from None
        return oaep.eme_oaep_decode(self.bsize, em, label, hashf)

    def sign(self, message: bytes, hashf: str = DEFAULT_HASH) -> bytes:
        """Signs the message according to RSASSA-PKCS1-v1_5.

        Args:
            message: The message to sign.
            hashf: Hash function (Implemented for sha1, sha256, sha384, sha512)

        Returns:
            The signature, exactly `bsize` octets.

        Raises:
            MessageTooLong: If the hash function's DigestInfo does not fit the key.
        """
        em = emsa.emsa_pkcs1_v15_encode(message, self.bsize, hashf)
        return i2osp(rsasp1(self, os2ip(em)), self.bsize)


def rsaep(pubkey: RSAPubKey, message: int) -> int:
    """RSAEP: `m^e mod n`."""
    return pubkey.c_rsa(message)


def rsadp(privkey: RSAPrivKey, ciphertext: int) -> int:
    """RSADP: `c^d mod n`."""
    return privkey.c_rsa(ciphertext)


def rsasp1(privkey: RSAPrivKey, message: int) -> int:
    """RSASP1: `m^d mod n`, applied to an encoded digest rather than a ciphertext."""
    return privkey.c_rsa(message)


def rsavp1(pubkey: RSAPubKey, signature: int) -> int:
    """RSAVP1: `s^e mod n`."""
    return pubkey.c_rsa(signature)


def rsaes_oaep_encrypt(pubkey: RSAPubKey, message: bytes, label: bytes = b"", hashf: str = DEFAULT_HASH) -> bytes:
    """RSAES-OAEP-ENCRYPT, see `RSAPubKey.encrypt`."""
    return pubkey.encrypt(message, label, hashf)


def rsaes_oaep_decrypt(privkey: RSAPrivKey,
                       ciphertext: bytes,
                       label: bytes = b"",
                       hashf: str = DEFAULT_HASH) -> bytes:
    """RSAES-OAEP-DECRYPT, see `RSAPrivKey.decrypt`."""
    return privkey.decrypt(ciphertext, label, hashf)
