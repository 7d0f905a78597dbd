"""RSA primitives with OAEP padding, in an Academic Sense.

Provides RSAES-OAEP Encryption and Decryption on caller-supplied keys, together with the RSA primitives (RSAEP,
RSADP, RSASP1, RSAVP1), the MGF1 mask generation function and the octet string/integer codec they rest on.
RSASSA-PKCS1-v1_5 Signing and Verification is included as well. Key generation and key serialization are not.

Typical usage example:

    pub = RSAPubKey(n, e)
    pk = RSAPrivKey(n, d, pub_exp=e)
    c = pub.encrypt(b"Hi there!")
    r = pk.decrypt(c)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging

from rsaoaep.codec import i2osp
from rsaoaep.codec import os2ip
from rsaoaep.errors import DecodingError
from rsaoaep.errors import IntegerTooLarge
from rsaoaep.errors import LabelTooLong
from rsaoaep.errors import MaskTooLong
from rsaoaep.errors import MessageRepresentativeOutOfRange
from rsaoaep.errors import MessageTooLong
from rsaoaep.errors import RandomnessUnavailable
from rsaoaep.errors import RSAError
from rsaoaep.errors import UnsupportedHash
from rsaoaep.hashes import DEFAULT_HASH
from rsaoaep.mgf import mgf1
from rsaoaep.oaep import eme_oaep_decode
from rsaoaep.oaep import eme_oaep_encode
from rsaoaep.oaep import oaep_identifier
from rsaoaep.oaep import parse_oaep_identifier
from rsaoaep.rsa import rsadp
from rsaoaep.rsa import rsaep
from rsaoaep.rsa import rsaes_oaep_decrypt
from rsaoaep.rsa import rsaes_oaep_encrypt
from rsaoaep.rsa import RSAPrivKey
from rsaoaep.rsa import RSAPubKey
from rsaoaep.rsa import rsasp1
from rsaoaep.rsa import rsavp1

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"
__all__ = [
    "RSAPrivKey",
    "RSAPubKey",
    "rsaep",
    "rsadp",
    "rsasp1",
    "rsavp1",
    "rsaes_oaep_encrypt",
    "rsaes_oaep_decrypt",
    "eme_oaep_encode",
    "eme_oaep_decode",
    "oaep_identifier",
    "parse_oaep_identifier",
    "mgf1",
    "i2osp",
    "os2ip",
    "DEFAULT_HASH",
    "RSAError",
    "MessageTooLong",
    "LabelTooLong",
    "IntegerTooLarge",
    "MaskTooLong",
    "MessageRepresentativeOutOfRange",
    "UnsupportedHash",
    "DecodingError",
    "RandomnessUnavailable",
]
