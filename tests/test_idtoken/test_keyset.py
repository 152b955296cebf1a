"""Tests for decoding a JWKS document into public keys."""

import json

import pytest
from jwt.utils import base64url_encode

from conftest import jwk_for, jwks_document
from idgate.idtoken.errors import EmptyKeySet, ErrorKind, KeySetError, MalformedDocument, MalformedKeyEntry
from idgate.idtoken.keyset import PublicKey, decode_key_set


def test_decode_key_set_identifiers_match_document(private_key, other_private_key):
    doc = jwks_document(jwk_for(private_key, "k1"), jwk_for(other_private_key, "k2"))
    keys = decode_key_set(doc)
    assert set(keys) == {"k1", "k2"}


def test_decode_key_set_numbers(private_key):
    keys = decode_key_set(jwks_document(jwk_for(private_key, "k1")))
    numbers = private_key.public_key().public_numbers()
    assert keys["k1"].modulus == numbers.n
    assert keys["k1"].exponent == 65537
    assert keys["k1"].rsa_key.public_numbers() == numbers


def test_decode_key_set_accepts_str_and_ignores_unknown_fields(private_key):
    jwk = jwk_for(private_key, "k1")
    jwk["x5t"] = "ignored"
    doc = json.dumps({"keys": [jwk], "extra": 1})
    assert list(decode_key_set(doc)) == ["k1"]


def test_decode_key_set_is_read_only(private_key):
    keys = decode_key_set(jwks_document(jwk_for(private_key, "k1")))
    with pytest.raises(TypeError):
        keys["k2"] = keys["k1"]  # type: ignore[index]


@pytest.mark.parametrize("missing", ["kid", "n", "e"])
def test_decode_key_set_rejects_incomplete_entry(private_key, missing):
    jwk = jwk_for(private_key, "k1")
    jwk[missing] = ""
    with pytest.raises(MalformedKeyEntry) as exc:
        decode_key_set(jwks_document(jwk))
    assert exc.value.kind is ErrorKind.MALFORMED_KEY_ENTRY


def test_decode_key_set_rejects_absent_field(private_key):
    jwk = jwk_for(private_key, "k1")
    del jwk["e"]
    with pytest.raises(MalformedKeyEntry):
        decode_key_set(jwks_document(jwk))


def test_decode_key_set_rejects_null_entry():
    with pytest.raises(MalformedKeyEntry, match="null") as exc:
        decode_key_set('{"keys": [null]}')
    assert exc.value.kind is ErrorKind.MALFORMED_KEY_ENTRY


def test_decode_key_set_null_among_valid_entries(private_key):
    with pytest.raises(MalformedKeyEntry, match="null"):
        decode_key_set(json.dumps({"keys": [jwk_for(private_key, "k1"), None]}))


def test_decode_key_set_one_bad_entry_rejects_whole_set(private_key, other_private_key):
    bad = jwk_for(other_private_key, "k2")
    bad["n"] = ""
    with pytest.raises(MalformedKeyEntry):
        decode_key_set(jwks_document(jwk_for(private_key, "k1"), bad))


@pytest.mark.parametrize("value", ["AQ=B", "AQ+B", "A"])
def test_decode_key_set_rejects_bad_base64(private_key, value):
    jwk = jwk_for(private_key, "k1")
    jwk["e"] = value
    with pytest.raises(MalformedKeyEntry):
        decode_key_set(jwks_document(jwk))


def test_decode_key_set_rejects_invalid_exponent(private_key):
    jwk = jwk_for(private_key, "k1")
    jwk["e"] = "Ag"  # 2: even exponents are not valid RSA keys
    with pytest.raises(MalformedKeyEntry):
        decode_key_set(jwks_document(jwk))


@pytest.mark.parametrize("doc", ['{"keys": []}', '{"keys": null}', "{}"])
def test_decode_key_set_rejects_empty(doc):
    with pytest.raises(EmptyKeySet) as exc:
        decode_key_set(doc)
    assert exc.value.kind is ErrorKind.EMPTY_KEY_SET


@pytest.mark.parametrize(
    "doc",
    [
        "null",
        "not json",
        "[]",
        '{"keys": "abc"}',
        '{"keys": [5]}',
        '{"keys": [{"kid": 5}]}',
        '{"keys": [{"kid": "k1", "n": "AQAB", "e": 3}]}',
    ],
)
def test_decode_key_set_rejects_malformed_document(doc):
    with pytest.raises(MalformedDocument) as exc:
        decode_key_set(doc)
    assert exc.value.kind is ErrorKind.MALFORMED_DOCUMENT
    assert isinstance(exc.value, KeySetError)


def test_public_key_rejects_oversized_exponent(private_key):
    n = private_key.public_key().public_numbers().n
    with pytest.raises(MalformedKeyEntry, match="machine word"):
        PublicKey.from_numbers(n, 1 << 63)
    with pytest.raises(MalformedKeyEntry, match="machine word"):
        PublicKey.from_numbers(n, (1 << 64) + 1)


def test_public_key_accepts_largest_word_exponent(private_key):
    n = private_key.public_key().public_numbers().n
    exponent = (1 << 63) - 1  # odd, so a valid RSA exponent
    assert PublicKey.from_numbers(n, exponent).exponent == exponent


def test_decode_key_set_rejects_word_overflow_exponent(private_key):
    jwk = jwk_for(private_key, "k1")
    jwk["e"] = base64url_encode((1 << 63).to_bytes(8, "big")).decode()
    with pytest.raises(MalformedKeyEntry):
        decode_key_set(jwks_document(jwk))


def test_public_key_equality_ignores_key_object(private_key):
    n = private_key.public_key().public_numbers().n
    assert PublicKey.from_numbers(n, 65537) == PublicKey.from_numbers(n, 65537)
