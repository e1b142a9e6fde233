"""
polykey - multi-scheme account keys

Keypairs for ed25519, sr25519, secp256k1 (ecdsa and Ethereum flavours) and
ML-DSA-87, with hierarchical derivation, signing, VRFs and signature
verification that detects the signing algorithm on its own.
"""

from .crypto import KeypairType, VerifyResult, signature_verify
from .core import Keyring, Pair
from .errors import (
    AddressError,
    BackendUnavailableError,
    DecryptionError,
    DerivationError,
    InvalidContainerError,
    KeyringError,
    LockedPairError,
    SignatureFormatError,
)

__version__ = "1.0.0"

__all__ = [
    "KeypairType",
    "VerifyResult",
    "signature_verify",
    "Keyring",
    "Pair",
    "AddressError",
    "BackendUnavailableError",
    "DecryptionError",
    "DerivationError",
    "InvalidContainerError",
    "KeyringError",
    "LockedPairError",
    "SignatureFormatError",
]
