"""RS256 (RSASSA-PKCS1-v1_5 with SHA-256) signature check."""

from __future__ import annotations

from jwt.algorithms import RSAAlgorithm

from .encoding import b64url_decode
from .errors import MalformedSignature, SignatureInvalid
from .keyset import PublicKey

_RS256 = RSAAlgorithm(RSAAlgorithm.SHA256)


def verify_signature(signing_input: str, encoded_signature: str, key: PublicKey) -> None:
    """
    Check ``encoded_signature`` over ``signing_input`` with ``key``.

    ``signing_input`` must be the original ``header.claims`` wire segments,
    not a re-encoding of the decoded token. No claim checks happen here.
    """
    try:
        signature = b64url_decode(encoded_signature)
    except ValueError as e:
        raise MalformedSignature("unable to base64url decode signature") from e

    if not _RS256.verify(signing_input.encode("ascii"), key.rsa_key, signature):
        raise SignatureInvalid("signature verification failed")
