"""
Ed25519 primitives using the cryptography library.

Secret keys are kept in the 64-byte expanded form (seed followed by the
public key) so that persisted containers can tell an expanded key from a
bare seed by length alone.
"""

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives.asymmetric import ed25519

from .types import Keypair, SEED_LENGTH


def ed25519_pair_from_seed(seed: bytes) -> Keypair:
    """Create an Ed25519 keypair from a 32-byte seed."""
    if len(seed) != SEED_LENGTH:
        raise ValueError(f"Expected a {SEED_LENGTH}-byte seed, found {len(seed)} bytes")

    private_key = ed25519.Ed25519PrivateKey.from_private_bytes(bytes(seed))
    public_key = private_key.public_key().public_bytes_raw()

    return Keypair(public_key=public_key, secret_key=bytes(seed) + public_key)


def ed25519_sign(message: bytes, keypair: Keypair) -> bytes:
    private_key = ed25519.Ed25519PrivateKey.from_private_bytes(keypair.secret_key[:SEED_LENGTH])
    return private_key.sign(message)


def ed25519_verify(message: bytes, signature: bytes, public_key: bytes) -> bool:
    """
    Check an Ed25519 signature.

    Returns False for a well-formed but invalid signature; malformed keys
    raise ValueError from the backend.
    """
    key = ed25519.Ed25519PublicKey.from_public_bytes(bytes(public_key))
    try:
        key.verify(bytes(signature), message)
        return True
    except InvalidSignature:
        return False
