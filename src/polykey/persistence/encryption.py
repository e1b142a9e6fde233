"""
Passphrase encryption for persisted key containers.

Current layout:  salt(32) | N(u32 le) | p(u32 le) | r(u32 le) | nonce(24) | box
Legacy layout:   nonce(24) | box, keyed by the passphrase bytes themselves

The box is xsalsa20-poly1305 (NaCl secretbox) keyed by the first 32 bytes of
the scrypt output.
"""

import os
import struct
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from cryptography.hazmat.primitives.kdf.scrypt import Scrypt
from nacl.exceptions import CryptoError
from nacl.secret import SecretBox

from ..errors import DecryptionError, InvalidContainerError

ENCODING = ("scrypt", "xsalsa20-poly1305")
ENCODING_NONE = ("none",)
ENCODING_VERSION = "3"

NONCE_LENGTH = SecretBox.NONCE_SIZE
KEY_LENGTH = SecretBox.KEY_SIZE
SALT_LENGTH = 32
SCRYPT_LENGTH = SALT_LENGTH + 3 * 4


@dataclass(frozen=True)
class ScryptParams:
    N: int = 1 << 15
    p: int = 1
    r: int = 8


DEFAULT_PARAMS = ScryptParams()

# Only parameter sets produced by known wallet generations are accepted
ALLOWED_PARAMS = (
    ScryptParams(N=1 << 13, p=10, r=8),
    ScryptParams(N=1 << 14, p=5, r=8),
    ScryptParams(N=1 << 15, p=3, r=8),
    ScryptParams(N=1 << 15, p=1, r=8),
    ScryptParams(N=1 << 16, p=2, r=8),
    ScryptParams(N=1 << 17, p=1, r=8),
)


def scrypt_encode(passphrase: bytes, salt: Optional[bytes] = None, params: ScryptParams = DEFAULT_PARAMS) -> Tuple[bytes, bytes]:
    """Return (password, salt) for a passphrase."""
    salt = salt if salt is not None else os.urandom(SALT_LENGTH)
    kdf = Scrypt(salt=salt, length=64, n=params.N, r=params.r, p=params.p)
    return kdf.derive(passphrase), salt


def scrypt_to_bytes(salt: bytes, params: ScryptParams) -> bytes:
    return salt + struct.pack("<III", params.N, params.p, params.r)


def scrypt_from_bytes(data: bytes) -> Tuple[bytes, ScryptParams]:
    if len(data) < SCRYPT_LENGTH:
        raise InvalidContainerError("Encrypted container is too short for scrypt parameters")

    salt = data[:SALT_LENGTH]
    n, p, r = struct.unpack("<III", data[SALT_LENGTH:SCRYPT_LENGTH])
    params = ScryptParams(N=n, p=p, r=r)

    if params not in ALLOWED_PARAMS:
        raise InvalidContainerError("Invalid injected scrypt params found")

    return salt, params


def _box_key(password: bytes) -> bytes:
    return password[:KEY_LENGTH].ljust(KEY_LENGTH, b"\x00")


def json_encrypt_data(data: bytes, passphrase: Optional[str] = None, params: ScryptParams = DEFAULT_PARAMS) -> bytes:
    if not passphrase:
        return data

    password, salt = scrypt_encode(passphrase.encode("utf-8"), params=params)
    nonce = os.urandom(NONCE_LENGTH)
    encrypted = SecretBox(_box_key(password)).encrypt(data, nonce)

    return scrypt_to_bytes(salt, params) + nonce + encrypted.ciphertext


def json_decrypt_data(
    encrypted: Optional[bytes],
    passphrase: Optional[str] = None,
    enc_types: Sequence[str] = ENCODING,
) -> bytes:
    """
    Open an encrypted container body.

    Without a passphrase the data is returned as is, unless the encoding
    says it is boxed.
    """
    if not encrypted:
        raise DecryptionError("No encrypted data available to decode")
    if "xsalsa20-poly1305" in enc_types and not passphrase:
        raise DecryptionError("Password required to decode encrypted data")

    if not passphrase:
        return bytes(encrypted)

    password = passphrase.encode("utf-8")
    body = bytes(encrypted)

    if "scrypt" in enc_types:
        salt, params = scrypt_from_bytes(body)
        password, _ = scrypt_encode(password, salt, params)
        body = body[SCRYPT_LENGTH:]

    if len(body) < NONCE_LENGTH:
        raise DecryptionError("Encrypted container is too short")

    try:
        return SecretBox(_box_key(password)).decrypt(body[NONCE_LENGTH:], body[:NONCE_LENGTH])
    except CryptoError as e:
        raise DecryptionError("Unable to decode using the supplied passphrase") from e
