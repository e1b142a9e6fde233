"""
Key type identifiers and shared constants.
"""

from dataclasses import dataclass
from enum import Enum


class KeypairType(Enum):
    """Supported signature algorithm families."""
    ED25519 = "ed25519"
    SR25519 = "sr25519"
    ECDSA = "ecdsa"  # secp256k1, blake2 hashed
    ETHEREUM = "ethereum"  # secp256k1, keccak hashed
    MLDSA = "mldsa"  # ML-DSA-87 (FIPS 204)

    @classmethod
    def parse(cls, value) -> "KeypairType":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"Unknown keypair type: {value}") from None


# ML-DSA-87 sizes
MLDSA_PUBLIC_LENGTH = 2592
MLDSA_SECRET_LENGTH = 4896
MLDSA_SIGNATURE_LENGTH = 4627

SEED_LENGTH = 32
SR25519_SIGNATURE_LENGTH = 64
ED25519_SIGNATURE_LENGTH = 64
SECP256K1_SIGNATURE_LENGTH = 65

# The result of a check that found no matching family
CRYPTO_NONE = "none"


@dataclass(frozen=True)
class Keypair:
    """Raw key material as produced by the primitive backends."""
    public_key: bytes
    secret_key: bytes

    def __repr__(self) -> str:
        # Never render secret material
        return f"Keypair(public_key={self.public_key.hex()[:16]}..., secret_key=<{len(self.secret_key)} bytes>)"
