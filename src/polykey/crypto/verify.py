"""
Signature Verification Engine

Verifies a signature without being told which algorithm produced it.

Signatures come in two shapes:
- bare: the raw algorithm output (64 bytes for ed25519/sr25519, 65 for
  secp256k1, 4627 for ML-DSA-87)
- prefixed: one discriminator byte (0 ed25519, 1 sr25519, 2 secp256k1,
  3 ML-DSA) followed by the raw output

Bare signatures are tried against every family in a fixed order and the
first family whose own check passes wins. If nothing validates, the check
is repeated once with the message's <Bytes> wrapping toggled, since signing
front-ends disagree on whether the wrapped or the raw form was signed.
"""

from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple, Union

import structlog

from ..address.ss58 import decode_address
from ..errors import SignatureFormatError
from ..util import BytesLike, is_wrapped, to_bytes, unwrap_bytes, wrap_bytes
from .ed25519 import ed25519_verify
from .mldsa import mldsa_verify
from .secp256k1 import HASH_BLAKE2, HASH_KECCAK, secp256k1_verify
from .sr25519 import sr25519_verify
from .types import (
    CRYPTO_NONE,
    ED25519_SIGNATURE_LENGTH,
    KeypairType,
    MLDSA_SIGNATURE_LENGTH,
    SECP256K1_SIGNATURE_LENGTH,
)

logger = structlog.get_logger()

Verifier = Tuple[KeypairType, Callable[[bytes, bytes, bytes], bool]]

VERIFIERS_ECDSA: Tuple[Verifier, ...] = (
    (KeypairType.ECDSA, lambda m, s, p: secp256k1_verify(m, s, p, HASH_BLAKE2)),
    (KeypairType.ETHEREUM, lambda m, s, p: secp256k1_verify(m, s, p, HASH_KECCAK)),
)

VERIFIERS: Tuple[Verifier, ...] = (
    (KeypairType.ED25519, ed25519_verify),
    (KeypairType.MLDSA, mldsa_verify),
    (KeypairType.SR25519, sr25519_verify),
)

# Families named by each discriminator byte
PREFIXED_VERIFIERS = {
    0: ((KeypairType.ED25519, ed25519_verify),),
    1: ((KeypairType.SR25519, sr25519_verify),),
    2: VERIFIERS_ECDSA,
    3: ((KeypairType.MLDSA, mldsa_verify),),
}

VALID_SIGNATURE_LENGTHS = (
    ED25519_SIGNATURE_LENGTH,
    SECP256K1_SIGNATURE_LENGTH,
    SECP256K1_SIGNATURE_LENGTH + 1,
    MLDSA_SIGNATURE_LENGTH,
    MLDSA_SIGNATURE_LENGTH + 1,
)


@dataclass(frozen=True)
class VerifyResult:
    """Outcome of a signature check."""
    crypto: str  # KeypairType value, or "none"
    is_valid: bool
    is_wrapped: bool
    public_key: bytes


def _verify_detect(
    message: bytes,
    signature: bytes,
    public_key: bytes,
    verifiers: Sequence[Verifier],
) -> Optional[KeypairType]:
    for crypto, verify in verifiers:
        try:
            if verify(message, signature, public_key):
                return crypto
        except Exception as e:
            # A family that rejects the input shape is simply not a match
            logger.debug("verifier_rejected_input", crypto=crypto.value, error=str(e))
    return None


def is_prefixed_signature(signature: bytes) -> bool:
    if not signature:
        return False
    return (
        (signature[0] in (0, 1, 2) and len(signature) in (SECP256K1_SIGNATURE_LENGTH, SECP256K1_SIGNATURE_LENGTH + 1))
        or (signature[0] == 3 and len(signature) == MLDSA_SIGNATURE_LENGTH + 1)
    )


def _verify_prefixed(message: bytes, signature: bytes, public_key: bytes) -> Optional[KeypairType]:
    if len(signature) == SECP256K1_SIGNATURE_LENGTH + 1:
        # Only a secp256k1 body is 65 bytes long
        return _verify_detect(message, signature[1:], public_key, VERIFIERS_ECDSA)

    crypto = _verify_detect(message, signature[1:], public_key, PREFIXED_VERIFIERS[signature[0]])

    if crypto is None and len(signature) == SECP256K1_SIGNATURE_LENGTH:
        # A bare secp256k1 signature may start with 0, 1 or 2 as well
        crypto = _verify_detect(message, signature, public_key, VERIFIERS_ECDSA)

    return crypto


def _verify_bare(message: bytes, signature: bytes, public_key: bytes) -> Optional[KeypairType]:
    return _verify_detect(message, signature, public_key, VERIFIERS + VERIFIERS_ECDSA)


def _get_verify_fn(signature: bytes) -> Callable[[bytes, bytes, bytes], Optional[KeypairType]]:
    if is_prefixed_signature(signature):
        return _verify_prefixed

    if len(signature) in (SECP256K1_SIGNATURE_LENGTH + 1, MLDSA_SIGNATURE_LENGTH + 1):
        # Only prefixed signatures have these lengths
        raise SignatureFormatError(
            f"Unknown crypto type, expected signature prefix [0..3], found {signature[0]}"
        )

    return _verify_bare


def signature_verify(
    message: BytesLike,
    signature: BytesLike,
    address_or_public_key: Union[str, bytes],
) -> VerifyResult:
    """
    Verify a signature against an address or public key.

    Raises SignatureFormatError when the signature shape is not one any
    family can produce. An ordinary verification failure is returned as
    VerifyResult(crypto="none", is_valid=False).
    """
    signature = to_bytes(signature)

    if len(signature) not in VALID_SIGNATURE_LENGTHS:
        raise SignatureFormatError(
            f"Invalid signature length, expected [64..66], {MLDSA_SIGNATURE_LENGTH}, "
            f"or {MLDSA_SIGNATURE_LENGTH + 1} bytes, found {len(signature)}"
        )

    public_key = decode_address(address_or_public_key)
    message = to_bytes(message)
    verify_fn = _get_verify_fn(signature)

    wrapped = is_wrapped(message, True)
    wrapped_bytes = is_wrapped(message, False)

    crypto = verify_fn(message, signature, public_key)

    # Ethereum-prefixed messages are never re-wrapped
    if crypto is None and not (wrapped and not wrapped_bytes):
        toggled = unwrap_bytes(message) if wrapped_bytes else wrap_bytes(message)
        crypto = verify_fn(toggled, signature, public_key)

    return VerifyResult(
        crypto=crypto.value if crypto is not None else CRYPTO_NONE,
        is_valid=crypto is not None,
        is_wrapped=wrapped,
        public_key=public_key,
    )
