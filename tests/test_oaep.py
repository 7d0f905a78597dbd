# pylint: disable=missing-module-docstring,redefined-outer-name
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from pyasn1.codec.der import encoder
from pyasn1.type import univ
from pyasn1_modules import rfc8017
import pytest

from rsaoaep import codec
from rsaoaep import errors
from rsaoaep import hashes
from rsaoaep import oaep
from rsaoaep.mgf import mgf1

standard_payload = b"The quick brown fox jumps over the lazy dog1234567890!@#$%^&*()-_=+[{}];:\\|<>,./?~`'\""
BLOCK_SIZES = [128, 129, 256, 384, 512]


@pytest.fixture(scope="module", params=hashes.HASH_TLL.keys())
def hashf(request) -> str:
    return request.param


@pytest.fixture(scope="module", params=BLOCK_SIZES)
def k(request) -> int:
    return request.param


def capload(hashf: str, k: int) -> bytes:
    """Returns a capped payload in bytes."""
    max_len = oaep.max_message_length(k, hashf)
    if max_len < 0:
        pytest.skip(f"Block size {k} is too small for {hashf}.")
    return standard_payload[:max_len]


def mask_block(db: bytes, seed: bytes, hashf: str, first: bytes = b"\x00") -> bytes:
    """Masks a handcrafted data block the way the encoder does."""
    hlen = hashes.HASH_TLL[hashf][2]
    mdb = codec.xorbytes(db, mgf1(seed, len(db), hashf))
    mseed = codec.xorbytes(seed, mgf1(mdb, hlen, hashf))
    return first + mseed + mdb


def unmask_block(em: bytes, hashf: str) -> tuple[bytes, bytes]:
    """Returns (seed, DB) of an encoded block."""
    hlen = hashes.HASH_TLL[hashf][2]
    mseed, mdb = em[1:hlen + 1], em[hlen + 1:]
    seed = codec.xorbytes(mseed, mgf1(mdb, hlen, hashf))
    return seed, codec.xorbytes(mdb, mgf1(seed, len(mdb), hashf))


def test_encode_layout(k, hashf):
    payload = capload(hashf, k)
    em = oaep.eme_oaep_encode(k, payload, b"label", hashf)
    assert len(em) == k
    assert em[0] == 0


def test_encode_data_block(mocker, hashf):
    fun, _, hlen, _ = hashes.HASH_TLL[hashf]
    k = 256
    seed = bytes(range(hlen))
    mocker.patch("rsaoaep.oaep.token_bytes", return_value=seed)
    em = oaep.eme_oaep_encode(k, b"Hi there!", b"context", hashf)
    oaep.token_bytes.assert_called_once_with(hlen)
    rseed, db = unmask_block(em, hashf)
    assert rseed == seed
    assert len(db) == k - hlen - 1
    ps_len = k - len(b"Hi there!") - 2 * hlen - 2
    assert db == fun(b"context").digest() + b"\x00" * ps_len + b"\x01" + b"Hi there!"


def test_encode_decode(k, hashf):
    payload = capload(hashf, k)
    em = oaep.eme_oaep_encode(k, payload, hashf=hashf)
    assert oaep.eme_oaep_decode(k, em, hashf=hashf) == payload


@pytest.mark.parametrize("payload", [b"", b"\x00", b"\x01", b"\x00\x01\x00", b"\x01" * 20, b"\xff" * 10])
def test_encode_decode_tricky_payloads(payload):
    em = oaep.eme_oaep_encode(256, payload, b"L")
    assert oaep.eme_oaep_decode(256, em, b"L") == payload


def test_encode_is_randomized(hashf):
    first = oaep.eme_oaep_encode(256, b"same", b"", hashf)
    second = oaep.eme_oaep_encode(256, b"same", b"", hashf)
    assert first != second
    assert oaep.eme_oaep_decode(256, first, b"", hashf) == oaep.eme_oaep_decode(256, second, b"", hashf) == b"same"


def test_encode_length_boundary(k, hashf):
    capacity = oaep.max_message_length(k, hashf)
    if capacity < 0:
        pytest.skip(f"Block size {k} is too small for {hashf}.")
    em = oaep.eme_oaep_encode(k, b"A" * capacity, hashf=hashf)
    assert oaep.eme_oaep_decode(k, em, hashf=hashf) == b"A" * capacity
    with pytest.raises(errors.MessageTooLong, match="Message too long for the specified hash function"):
        oaep.eme_oaep_encode(k, b"A" * (capacity + 1), hashf=hashf)


def test_encode_block_too_small(hashf):
    hlen = hashes.HASH_TLL[hashf][2]
    k = 2 * hlen + 1
    with pytest.raises(errors.MessageTooLong):
        oaep.eme_oaep_encode(k, b"", hashf=hashf)
    with pytest.raises(errors.DecodingError):
        oaep.eme_oaep_decode(k, b"\x00" * k, hashf=hashf)


def test_encode_minimal_block(hashf):
    hlen = hashes.HASH_TLL[hashf][2]
    k = 2 * hlen + 2
    em = oaep.eme_oaep_encode(k, b"", hashf=hashf)
    assert oaep.eme_oaep_decode(k, em, hashf=hashf) == b""


def test_label_binding(hashf):
    em = oaep.eme_oaep_encode(256, b"payload", b"CORRECT_LABEL", hashf)
    with pytest.raises(errors.DecodingError, match="Decryption error."):
        oaep.eme_oaep_decode(256, em, b"INCORRECT_LABEL", hashf)
    with pytest.raises(errors.DecodingError, match="Decryption error."):
        oaep.eme_oaep_decode(256, em, b"", hashf)
    assert oaep.eme_oaep_decode(256, em, b"CORRECT_LABEL", hashf) == b"payload"


def test_hash_binding():
    em = oaep.eme_oaep_encode(256, b"payload", hashf="sha256")
    with pytest.raises(errors.DecodingError):
        oaep.eme_oaep_decode(256, em, hashf="sha384")


def test_tamper_detection():
    k = 128
    em = oaep.eme_oaep_encode(k, b"Tamper with me.")
    for bit in range(8 * k):
        tampered = bytearray(em)
        tampered[bit // 8] ^= 0x80 >> (bit % 8)
        with pytest.raises(errors.DecodingError):
            oaep.eme_oaep_decode(k, bytes(tampered))


def test_decode_fails_uniformly(hashf):
    fun, _, hlen, _ = hashes.HASH_TLL[hashf]
    k = 256
    seed = b"\x42" * hlen
    lh = fun(b"").digest()
    dblen = k - hlen - 1
    cases = [
        # Leading octet not zero.
        mask_block(lh + b"\x00\x01" + b"\x00" * (dblen - hlen - 2), seed, hashf, first=b"\x01"),
        # Garbage in the padding string before the separator.
        mask_block(lh + b"\x00\xAB\x01" + b"\x00" * (dblen - hlen - 3), seed, hashf),
        # No separator at all.
        mask_block(lh + b"\x00" * (dblen - hlen), seed, hashf),
        # Wrong label hash.
        mask_block(fun(b"other").digest() + b"\x00\x01" + b"\x00" * (dblen - hlen - 2), seed, hashf),
    ]
    messages = set()
    for em in cases:
        with pytest.raises(errors.DecodingError) as exc:
            oaep.eme_oaep_decode(k, em, hashf=hashf)
        messages.add(str(exc.value))
    assert messages == {"Decryption error."}


def test_decode_handcrafted_valid(hashf):
    fun, _, hlen, _ = hashes.HASH_TLL[hashf]
    k = 256
    message = b"\x00\x01\x02"
    db = fun(b"").digest() + b"\x00" * (k - hlen - 1 - hlen - 1 - len(message)) + b"\x01" + message
    em = mask_block(db, b"\x13" * hlen, hashf)
    assert oaep.eme_oaep_decode(k, em, hashf=hashf) == message


@pytest.mark.parametrize("length", [0, 255, 257])
def test_decode_wrong_length(length):
    with pytest.raises(errors.DecodingError):
        oaep.eme_oaep_decode(256, b"\x00" * length)


def test_label_cap(mocker, hashf):
    e1, e2, hlen, _ = hashes.HASH_TLL[hashf]
    mocker.patch("rsaoaep.hashes.HASH_TLL", {hashf: (e1, e2, hlen, 8)})
    with pytest.raises(errors.LabelTooLong, match="Label too long for the specified hash function"):
        oaep.eme_oaep_encode(256, b"", b"A" * 9, hashf)
    em = oaep.eme_oaep_encode(256, b"", b"A" * 8, hashf)
    with pytest.raises(errors.DecodingError):
        oaep.eme_oaep_decode(256, em, b"A" * 9, hashf)


def test_randomness_failure(mocker):
    mocker.patch("rsaoaep.oaep.token_bytes", side_effect=OSError("no entropy"))
    with pytest.raises(errors.RandomnessUnavailable, match="Could not obtain random seed"):
        oaep.eme_oaep_encode(256, b"payload")


def test_randomness_short_read(mocker):
    mocker.patch("rsaoaep.oaep.token_bytes", return_value=b"\x00" * 4)
    with pytest.raises(errors.RandomnessUnavailable, match="short seed"):
        oaep.eme_oaep_encode(256, b"payload")


def test_unknown_hash():
    with pytest.raises(errors.UnsupportedHash):
        oaep.eme_oaep_encode(256, b"", hashf="md5")


@pytest.mark.parametrize("name", ["sha256", "sha384", "sha512"])
def test_oaep_identifier(name):
    der = oaep.oaep_identifier(name)
    assert der[0] == 0x30
    assert oaep.parse_oaep_identifier(der) == name


def test_oaep_identifier_differs_per_hash():
    assert len({oaep.oaep_identifier(name) for name in oaep.OAEP_IDENTIFIERS}) == len(oaep.OAEP_IDENTIFIERS)


def test_oaep_identifier_unsupported():
    with pytest.raises(errors.UnsupportedHash):
        oaep.oaep_identifier("sha1")


def test_parse_oaep_identifier_rejects_other_algorithms():
    ident = rfc8017.AlgorithmIdentifier()
    ident["algorithm"] = rfc8017.rsaEncryption
    ident["parameters"] = univ.Null("")
    with pytest.raises(errors.UnsupportedHash, match="Not an RSAES-OAEP identifier"):
        oaep.parse_oaep_identifier(encoder.encode(ident))


@pytest.mark.parametrize("garbage", [b"", b"\x30\x00", b"\x04\x03abc", b"not der at all"])
def test_parse_oaep_identifier_rejects_garbage(garbage):
    with pytest.raises(errors.UnsupportedHash):
        oaep.parse_oaep_identifier(garbage)


def test_parse_oaep_identifier_rejects_trailing_data():
    with pytest.raises(errors.UnsupportedHash):
        oaep.parse_oaep_identifier(oaep.oaep_identifier() + b"\x00")
