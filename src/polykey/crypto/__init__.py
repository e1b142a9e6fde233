"""
Cryptographic Primitives for polykey

Supports:
- Ed25519 - classical signatures (cryptography)
- Sr25519 - Schnorrkel/Ristretto signatures (py-sr25519-bindings)
- ECDSA / Ethereum - secp256k1 recoverable signatures (coincurve)
- ML-DSA-87 (Dilithium) - post-quantum signatures (liboqs, dilithium-py)
"""

from .types import CRYPTO_NONE, Keypair, KeypairType
from .registry import TYPE_ADDRESS, TYPE_FROM_SEED, TYPE_PREFIX, TYPE_SIGNATURE, address_raw
from .verify import VerifyResult, signature_verify
from .vrf import vrf_hash, vrf_sign, vrf_verify
from .sr25519 import SR25519_AVAILABLE
from .mldsa import LIBOQS_AVAILABLE, MLDSA_AVAILABLE

__all__ = [
    "CRYPTO_NONE",
    "Keypair",
    "KeypairType",
    "TYPE_ADDRESS",
    "TYPE_FROM_SEED",
    "TYPE_PREFIX",
    "TYPE_SIGNATURE",
    "address_raw",
    "VerifyResult",
    "signature_verify",
    "vrf_hash",
    "vrf_sign",
    "vrf_verify",
    "SR25519_AVAILABLE",
    "LIBOQS_AVAILABLE",
    "MLDSA_AVAILABLE",
]
