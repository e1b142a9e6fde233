"""
PKCS8-style key container.

Body: HEADER | secret key | DIVIDER | public key

Secret key sizes by container generation:
- 32 bytes: seed-only containers
- 64 bytes: expanded ed25519/sr25519 secrets
- 4896 bytes: expanded ML-DSA-87 secrets
"""

from typing import Optional, Sequence

from ..crypto.types import Keypair, MLDSA_SECRET_LENGTH, SEED_LENGTH
from ..errors import DecryptionError, InvalidContainerError, KeyringError
from .encryption import ENCODING, json_decrypt_data, json_encrypt_data

PKCS8_DIVIDER = bytes([161, 35, 3, 33, 0])
PKCS8_HEADER = bytes([48, 83, 2, 1, 1, 48, 5, 6, 3, 43, 101, 112, 4, 34, 4, 32])
SEED_OFFSET = len(PKCS8_HEADER)

# Tried largest first so a divider-like run inside a long key is never hit
SECRET_LENGTHS = (MLDSA_SECRET_LENGTH, 64, SEED_LENGTH)


def encode_pair(keypair: Keypair, passphrase: Optional[str] = None) -> bytes:
    if not keypair.secret_key:
        raise KeyringError("Expected a valid secretKey to be passed to encode")

    encoded = PKCS8_HEADER + bytes(keypair.secret_key) + PKCS8_DIVIDER + bytes(keypair.public_key)
    return json_encrypt_data(encoded, passphrase)


def decode_pair(
    passphrase: Optional[str] = None,
    encrypted: Optional[bytes] = None,
    enc_types: Optional[Sequence[str]] = None,
) -> Keypair:
    """
    Decrypt and split a container into its key material.

    Raises DecryptionError when the passphrase is wrong and
    InvalidContainerError when the body is not a key container.
    """
    decrypted = json_decrypt_data(encrypted, passphrase, ENCODING if enc_types is None else enc_types)

    if decrypted[:SEED_OFFSET] != PKCS8_HEADER:
        raise InvalidContainerError("Invalid Pkcs8 header found in body")

    for secret_length in SECRET_LENGTHS:
        div_offset = SEED_OFFSET + secret_length
        if decrypted[div_offset:div_offset + len(PKCS8_DIVIDER)] == PKCS8_DIVIDER:
            public_key = decrypted[div_offset + len(PKCS8_DIVIDER):]
            return Keypair(
                public_key=bytes(public_key),
                secret_key=bytes(decrypted[SEED_OFFSET:div_offset]),
            )

    raise DecryptionError("Unable to decode using the supplied passphrase")
