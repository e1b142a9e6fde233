"""
ML-DSA-87 (Dilithium, NIST FIPS 204) post-quantum primitives.

Signing and verification run through liboqs. liboqs cannot expand a
caller-supplied seed, so deterministic key generation (needed for seeds and
for HDKD) uses dilithium-py, which implements the same FIPS 204 key format.
Both libraries are optional installs.
"""

import structlog

from ..errors import BackendUnavailableError
from .types import Keypair, SEED_LENGTH

logger = structlog.get_logger()

ALGORITHM_NAME = "ML-DSA-87"

# Try to import liboqs for ML-DSA signing
LIBOQS_AVAILABLE = False
try:
    import oqs
    LIBOQS_AVAILABLE = True
    logger.info("liboqs_available", version=oqs.oqs_version())
except (ImportError, RuntimeError, OSError):
    logger.warning("liboqs_not_available", message="ML-DSA signing is disabled")

DILITHIUM_AVAILABLE = False
try:
    from dilithium_py.ml_dsa import ML_DSA_87
    DILITHIUM_AVAILABLE = True
except ImportError:
    logger.warning("dilithium_py_not_available", message="ML-DSA key generation is disabled")

MLDSA_AVAILABLE = LIBOQS_AVAILABLE and DILITHIUM_AVAILABLE


def _require_liboqs() -> None:
    if not LIBOQS_AVAILABLE:
        raise BackendUnavailableError(
            "ML-DSA requires liboqs. Install with: pip install liboqs-python"
        )


def mldsa_pair_from_seed(seed: bytes) -> Keypair:
    """Deterministically derive an ML-DSA-87 keypair from a 32-byte seed."""
    if not DILITHIUM_AVAILABLE:
        raise BackendUnavailableError(
            "ML-DSA key generation requires dilithium-py. Install with: pip install dilithium-py"
        )
    if len(seed) != SEED_LENGTH:
        raise ValueError(f"Expected a {SEED_LENGTH}-byte seed, found {len(seed)} bytes")

    public_key, secret_key = ML_DSA_87.key_derive(bytes(seed))
    return Keypair(public_key=bytes(public_key), secret_key=bytes(secret_key))


def mldsa_sign(message: bytes, keypair: Keypair) -> bytes:
    _require_liboqs()
    with oqs.Signature(ALGORITHM_NAME, secret_key=bytes(keypair.secret_key)) as signer:
        return bytes(signer.sign(message))


def mldsa_verify(message: bytes, signature: bytes, public_key: bytes) -> bool:
    _require_liboqs()
    with oqs.Signature(ALGORITHM_NAME) as verifier:
        return bool(verifier.verify(message, bytes(signature), bytes(public_key)))
