"""
Sr25519 (Schnorrkel over Ristretto) primitives.

Backed by py-sr25519-bindings. The bindings are an optional install; when
they are missing every sr25519 operation raises BackendUnavailableError.
"""

import structlog

from ..errors import BackendUnavailableError
from .types import Keypair, SEED_LENGTH

logger = structlog.get_logger()

SR25519_AVAILABLE = False
try:
    import sr25519
    SR25519_AVAILABLE = True
except ImportError:
    logger.warning("sr25519_not_available",
                   message="Install py-sr25519-bindings for sr25519 support")


def _require_backend() -> None:
    if not SR25519_AVAILABLE:
        raise BackendUnavailableError(
            "sr25519 requires py-sr25519-bindings. Install with: pip install py-sr25519-bindings"
        )


def sr25519_pair_from_seed(seed: bytes) -> Keypair:
    """Expand a 32-byte mini-secret into an sr25519 keypair."""
    _require_backend()
    if len(seed) != SEED_LENGTH:
        raise ValueError(f"Expected a {SEED_LENGTH}-byte seed, found {len(seed)} bytes")

    public_key, secret_key = sr25519.pair_from_seed(bytes(seed))
    return Keypair(public_key=bytes(public_key), secret_key=bytes(secret_key))


def sr25519_sign(message: bytes, keypair: Keypair) -> bytes:
    _require_backend()
    return bytes(sr25519.sign((keypair.public_key, keypair.secret_key), message))


def sr25519_verify(message: bytes, signature: bytes, public_key: bytes) -> bool:
    _require_backend()
    return bool(sr25519.verify(bytes(signature), message, bytes(public_key)))


def sr25519_derive_hard(keypair: Keypair, chain_code: bytes) -> Keypair:
    _require_backend()
    _, public_key, secret_key = sr25519.hard_derive_keypair(
        (bytes(chain_code), keypair.public_key, keypair.secret_key), b""
    )
    return Keypair(public_key=bytes(public_key), secret_key=bytes(secret_key))


def sr25519_derive_soft(keypair: Keypair, chain_code: bytes) -> Keypair:
    _require_backend()
    _, public_key, secret_key = sr25519.derive_keypair(
        (bytes(chain_code), keypair.public_key, keypair.secret_key), b""
    )
    return Keypair(public_key=bytes(public_key), secret_key=bytes(secret_key))


def sr25519_derive_public(public_key: bytes, chain_code: bytes) -> bytes:
    """Soft-derive a child public key without any secret material."""
    _require_backend()
    _, derived = sr25519.derive_pubkey((bytes(chain_code), bytes(public_key)), b"")
    return bytes(derived)


def _vrf_unavailable() -> BackendUnavailableError:
    return BackendUnavailableError(
        "py-sr25519-bindings does not expose the schnorrkel VRF, so sr25519 VRF "
        "signing and verification are not available"
    )


def sr25519_vrf_sign(message: bytes, keypair: Keypair, context: bytes = b"", extra: bytes = b"") -> bytes:
    """
    Native VRF signing.

    The bindings only wrap sign/verify and derivation, so this always
    raises rather than substituting a non-native construction.
    """
    raise _vrf_unavailable()


def sr25519_vrf_verify(
    message: bytes,
    vrf_result: bytes,
    public_key: bytes,
    context: bytes = b"",
    extra: bytes = b"",
) -> bool:
    raise _vrf_unavailable()
