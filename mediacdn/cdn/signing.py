"""RSA signing for CloudFront signed URLs."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

from botocore.signers import CloudFrontSigner
from cryptography.hazmat.primitives import hashes, serialization
from cryptography.hazmat.primitives.asymmetric import padding
from cryptography.hazmat.primitives.asymmetric.rsa import RSAPrivateKey

from mediacdn.exceptions import SigningError

PEM_MARKER = "-----BEGIN"


def load_private_key(private_key: str) -> RSAPrivateKey:
    """Load an RSA private key given as PEM text or as a path to a PEM file."""
    if PEM_MARKER in private_key:
        data = private_key.encode("utf-8")
    else:
        path = Path(private_key).expanduser()
        try:
            data = path.read_bytes()
        except OSError as exc:
            raise SigningError(f"Unable to read private key: {exc}", {"path": str(path)}) from exc
    try:
        key = serialization.load_pem_private_key(data, password=None)
    except (ValueError, TypeError) as exc:
        raise SigningError(f"Invalid private key: {exc}") from exc
    if not isinstance(key, RSAPrivateKey):
        raise SigningError("CloudFront key pairs must be RSA keys")
    return key


def rsa_signer(private_key: str) -> Callable[[bytes], bytes]:
    key = load_private_key(private_key)

    def _sign(message: bytes) -> bytes:
        # CloudFront only accepts SHA1 with PKCS1 v1.5
        return key.sign(message, padding.PKCS1v15(), hashes.SHA1())

    return _sign


def build_signer(key_pair_id: str, private_key: str) -> CloudFrontSigner:
    return CloudFrontSigner(key_pair_id, rsa_signer(private_key))


__all__ = ["build_signer", "load_private_key", "rsa_signer"]
