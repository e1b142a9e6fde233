"""
VRF Extension

sr25519 delegates to its native VRF, which the installed bindings do not
expose, so it raises BackendUnavailableError. Every other family gets a
synthesized one: an ordinary signature over the message (the proof)
preceded by blake2b-256(context || extra || proof), which serves as the VRF output.
"""

import hmac

from .hashing import blake2_256
from .mldsa import mldsa_verify
from .registry import TYPE_ADDRESS, TYPE_PREFIX, TYPE_SIGNATURE
from .sr25519 import sr25519_vrf_sign, sr25519_vrf_verify
from .types import Keypair, KeypairType
from .verify import signature_verify

VRF_HASH_LENGTH = 32


def vrf_hash(proof: bytes, context: bytes = b"", extra: bytes = b"") -> bytes:
    return blake2_256(context + extra + proof)


def vrf_sign(
    key_type: KeypairType,
    message: bytes,
    keypair: Keypair,
    context: bytes = b"",
    extra: bytes = b"",
) -> bytes:
    if key_type == KeypairType.SR25519:
        return sr25519_vrf_sign(message, keypair, context, extra)

    proof = TYPE_SIGNATURE[key_type](message, keypair)
    return vrf_hash(proof, context, extra) + proof


def vrf_verify(
    key_type: KeypairType,
    message: bytes,
    vrf_result: bytes,
    signer_public: bytes,
    context: bytes = b"",
    extra: bytes = b"",
) -> bool:
    """
    Check a VRF result produced by vrf_sign.

    For synthesized VRFs both the embedded signature and the output hash
    must match.
    """
    if key_type == KeypairType.SR25519:
        return sr25519_vrf_verify(message, vrf_result, signer_public, context, extra)

    if len(vrf_result) <= VRF_HASH_LENGTH:
        return False

    output, proof = vrf_result[:VRF_HASH_LENGTH], vrf_result[VRF_HASH_LENGTH:]

    if key_type == KeypairType.MLDSA:
        # ML-DSA addresses are hashes, so check against the raw key
        try:
            is_valid = mldsa_verify(message, proof, signer_public)
        except ValueError:
            is_valid = False
    else:
        is_valid = signature_verify(
            message,
            TYPE_PREFIX[key_type] + proof,
            TYPE_ADDRESS[key_type](signer_public),
        ).is_valid

    return is_valid and hmac.compare_digest(output, vrf_hash(proof, context, extra))
