"""
HDKD Derivation Engine

Hierarchical deterministic key derivation. Each key type has a step
function that takes a keypair and one junction and returns the child
keypair; a path is a left fold of junctions through that step.

- ed25519: hard only, seed' = blake2b-256(compact("Ed25519HDKD") || seed || cc)
- ecdsa: hard only, seed' = blake2b-256(compact("Secp256k1HDKD") || secret || cc)
- sr25519: hard and soft via the schnorrkel derivation
- mldsa: hard only, seed' = HKDF-SHA256(secret, salt=cc, info="MLDSAHDKD")
- ethereum: no derivation
"""

from types import MappingProxyType
from typing import Iterable

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.hkdf import HKDF

from ..crypto.ed25519 import ed25519_pair_from_seed
from ..crypto.hashing import blake2_256
from ..crypto.mldsa import mldsa_pair_from_seed
from ..crypto.secp256k1 import secp256k1_pair_from_seed
from ..crypto.sr25519 import (
    sr25519_derive_hard,
    sr25519_derive_public,
    sr25519_derive_soft,
)
from ..crypto.types import Keypair, KeypairType, SEED_LENGTH
from ..errors import DerivationError
from ..util import compact_add_length
from .junction import DeriveJunction

ED25519_HDKD = compact_add_length(b"Ed25519HDKD")
SECP256K1_HDKD = compact_add_length(b"Secp256k1HDKD")
MLDSA_HDKD_INFO = b"MLDSAHDKD"


def _require_hard(junction: DeriveJunction) -> None:
    if not junction.is_hard:
        raise DerivationError("A soft key was found in the path (and is unsupported)")


def ed25519_derive_hard(seed: bytes, chain_code: bytes) -> bytes:
    return blake2_256(ED25519_HDKD + seed + chain_code)


def secp256k1_derive_hard(seed: bytes, chain_code: bytes) -> bytes:
    return blake2_256(SECP256K1_HDKD + seed + chain_code)


def mldsa_derive_hard(secret_key: bytes, chain_code: bytes) -> bytes:
    hkdf = HKDF(
        algorithm=hashes.SHA256(),
        length=SEED_LENGTH,
        salt=chain_code,
        info=MLDSA_HDKD_INFO,
    )
    return hkdf.derive(secret_key)


def key_hdkd_ed25519(keypair: Keypair, junction: DeriveJunction) -> Keypair:
    _require_hard(junction)
    return ed25519_pair_from_seed(
        ed25519_derive_hard(keypair.secret_key[:SEED_LENGTH], junction.chain_code)
    )


def key_hdkd_ecdsa(keypair: Keypair, junction: DeriveJunction) -> Keypair:
    _require_hard(junction)
    return secp256k1_pair_from_seed(
        secp256k1_derive_hard(keypair.secret_key[:SEED_LENGTH], junction.chain_code)
    )


def key_hdkd_sr25519(keypair: Keypair, junction: DeriveJunction) -> Keypair:
    if junction.is_soft:
        return sr25519_derive_soft(keypair, junction.chain_code)
    return sr25519_derive_hard(keypair, junction.chain_code)


def key_hdkd_mldsa(keypair: Keypair, junction: DeriveJunction) -> Keypair:
    _require_hard(junction)
    return mldsa_pair_from_seed(mldsa_derive_hard(keypair.secret_key, junction.chain_code))


TYPE_HDKD = MappingProxyType({
    KeypairType.ECDSA: key_hdkd_ecdsa,
    KeypairType.ED25519: key_hdkd_ed25519,
    KeypairType.ETHEREUM: None,
    KeypairType.MLDSA: key_hdkd_mldsa,
    KeypairType.SR25519: key_hdkd_sr25519,
})

if set(TYPE_HDKD) != set(KeypairType):
    raise RuntimeError("TYPE_HDKD does not cover every KeypairType")


def key_from_path(keypair: Keypair, path: Iterable[DeriveJunction], key_type: KeypairType) -> Keypair:
    """
    Fold a keypair through every junction of a path.

    An empty path returns the keypair unchanged. Every step needs the
    secret key, so callers must check for a locked pair first.
    """
    step = TYPE_HDKD[key_type]
    if step is None:
        raise DerivationError(f"Derivation is not supported for {key_type.value} keypairs")

    result = keypair
    for junction in path:
        result = step(result, junction)
    return result


def public_from_path(public_key: bytes, path: Iterable[DeriveJunction], key_type: KeypairType) -> bytes:
    """
    Soft-derive a public key without the secret.

    Only sr25519 supports this, and only for soft junctions.
    """
    if key_type != KeypairType.SR25519:
        raise DerivationError(f"Public derivation is not supported for {key_type.value} keypairs")

    result = bytes(public_key)
    for junction in path:
        if junction.is_hard:
            raise DerivationError("A hard key was found in the path, which needs the secret key")
        result = sr25519_derive_public(result, junction.chain_code)
    return result
