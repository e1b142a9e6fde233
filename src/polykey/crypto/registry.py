"""
Algorithm Registry

Per-type dispatch tables. Every table covers every KeypairType; this is
checked once at import so a new type cannot be added half way. The tables
are read-only mappings and are never mutated after import.

Derivation steps live with the HDKD engine in polykey.derive.
"""

from types import MappingProxyType

from .ed25519 import ed25519_pair_from_seed, ed25519_sign
from .hashing import blake2_256, keccak_256
from .mldsa import mldsa_pair_from_seed, mldsa_sign
from .secp256k1 import (
    HASH_BLAKE2,
    HASH_KECCAK,
    secp256k1_expand,
    secp256k1_pair_from_seed,
    secp256k1_sign,
)
from .sr25519 import sr25519_pair_from_seed, sr25519_sign
from .types import KeypairType


def _ecdsa_address(public_key: bytes) -> bytes:
    return blake2_256(public_key) if len(public_key) > 32 else public_key


def _ethereum_address(public_key: bytes) -> bytes:
    if len(public_key) == 20:
        return public_key
    return keccak_256(secp256k1_expand(public_key))[-20:]


TYPE_FROM_SEED = MappingProxyType({
    KeypairType.ECDSA: secp256k1_pair_from_seed,
    KeypairType.ED25519: ed25519_pair_from_seed,
    KeypairType.ETHEREUM: secp256k1_pair_from_seed,
    KeypairType.MLDSA: mldsa_pair_from_seed,
    KeypairType.SR25519: sr25519_pair_from_seed,
})

TYPE_SIGNATURE = MappingProxyType({
    KeypairType.ECDSA: lambda m, p: secp256k1_sign(m, p, HASH_BLAKE2),
    KeypairType.ED25519: ed25519_sign,
    KeypairType.ETHEREUM: lambda m, p: secp256k1_sign(m, p, HASH_KECCAK),
    KeypairType.MLDSA: mldsa_sign,
    KeypairType.SR25519: sr25519_sign,
})

TYPE_ADDRESS = MappingProxyType({
    KeypairType.ECDSA: _ecdsa_address,
    KeypairType.ED25519: lambda p: p,
    KeypairType.ETHEREUM: _ethereum_address,
    KeypairType.MLDSA: blake2_256,
    KeypairType.SR25519: lambda p: p,
})

# One-byte discriminator for self-describing signatures
TYPE_PREFIX = MappingProxyType({
    KeypairType.ECDSA: b"\x02",
    KeypairType.ED25519: b"\x00",
    KeypairType.ETHEREUM: b"\x02",
    KeypairType.MLDSA: b"\x03",
    KeypairType.SR25519: b"\x01",
})

for _name, _table in (
    ("TYPE_FROM_SEED", TYPE_FROM_SEED),
    ("TYPE_SIGNATURE", TYPE_SIGNATURE),
    ("TYPE_ADDRESS", TYPE_ADDRESS),
    ("TYPE_PREFIX", TYPE_PREFIX),
):
    if set(_table) != set(KeypairType):
        raise RuntimeError(f"{_name} does not cover every KeypairType")
del _name, _table


def address_raw(key_type: KeypairType, public_key: bytes) -> bytes:
    """Apply the per-type address transform to a public key."""
    return TYPE_ADDRESS[key_type](bytes(public_key))
