"""
SS58 address codec.

An SS58 address is base58(prefix || key || checksum) where the checksum is
the leading bytes of blake2b-512("SS58PRE" || prefix || key): two bytes for
32/33-byte keys, one byte otherwise. Prefixes below 64 take one byte, larger
ones (up to 16383) take two.
"""

from typing import Tuple, Union

import base58

from ..crypto.hashing import blake2_512
from ..errors import AddressError
from ..util import is_hex, to_bytes

SS58_PREFIX = b"SS58PRE"
DEFAULT_SS58_FORMAT = 42

ALLOWED_DECODED_LENGTHS = (1, 2, 4, 8, 32, 33)
ALLOWED_ENCODED_LENGTHS = (3, 4, 6, 10, 35, 36, 37, 38)
RESERVED_FORMATS = (46, 47)


def sshash(data: bytes) -> bytes:
    return blake2_512(SS58_PREFIX + data)


def _encode_format(ss58_format: int) -> bytes:
    if ss58_format < 64:
        return bytes([ss58_format])
    return bytes([
        ((ss58_format & 0b0000_0000_1111_1100) >> 2) | 0b0100_0000,
        (ss58_format >> 8) | ((ss58_format & 0b0000_0000_0000_0011) << 6),
    ])


def check_address_checksum(decoded: bytes) -> Tuple[bool, int, int, int]:
    """
    Inspect a base58-decoded address.

    Returns (is_valid, key_end, format_length, ss58_format).
    """
    ss58_length = 2 if decoded[0] & 0b0100_0000 else 1
    if ss58_length == 1:
        ss58_decoded = decoded[0]
    else:
        ss58_decoded = (
            ((decoded[0] & 0b0011_1111) << 2)
            | (decoded[1] >> 6)
            | ((decoded[1] & 0b0011_1111) << 8)
        )

    is_public_key = len(decoded) in (34 + ss58_length, 35 + ss58_length)
    length = len(decoded) - (2 if is_public_key else 1)
    checksum = sshash(decoded[:length])

    if is_public_key:
        matches = decoded[-2] == checksum[0] and decoded[-1] == checksum[1]
    else:
        matches = decoded[-1] == checksum[0]

    is_valid = (decoded[0] & 0b1000_0000) == 0 and decoded[0] not in RESERVED_FORMATS and matches
    return is_valid, length, ss58_length, ss58_decoded


def decode_address(
    encoded: Union[str, bytes],
    ignore_checksum: bool = False,
    ss58_format: int = -1,
) -> bytes:
    """
    Resolve an address or public key to raw key bytes.

    Raw bytes and 0x-prefixed hex pass through unchanged.
    """
    if not encoded:
        raise AddressError("Invalid empty address passed")

    if isinstance(encoded, (bytes, bytearray, memoryview)) or is_hex(encoded):
        return to_bytes(encoded)

    try:
        decoded = base58.b58decode(encoded)
    except ValueError as e:
        raise AddressError(f"Decoding {encoded}: {e}") from e

    if len(decoded) not in ALLOWED_ENCODED_LENGTHS:
        raise AddressError(f"Decoding {encoded}: Invalid decoded address length")

    is_valid, end, ss58_length, ss58_decoded = check_address_checksum(decoded)

    if not is_valid and not ignore_checksum:
        raise AddressError(f"Decoding {encoded}: Invalid decoded address checksum")
    if ss58_format != -1 and ss58_format != ss58_decoded:
        raise AddressError(f"Decoding {encoded}: Expected ss58Format {ss58_format}, received {ss58_decoded}")

    return decoded[ss58_length:end]


def encode_address(key: Union[str, bytes], ss58_format: int = DEFAULT_SS58_FORMAT) -> str:
    """Encode raw key bytes (or re-encode an address) with the given prefix."""
    raw = decode_address(key)

    if ss58_format < 0 or ss58_format > 16383 or ss58_format in RESERVED_FORMATS:
        raise AddressError("Out of range ss58Format specified")
    if len(raw) not in ALLOWED_DECODED_LENGTHS:
        raise AddressError(
            f"Expected a valid key to convert, with length {', '.join(map(str, ALLOWED_DECODED_LENGTHS))}"
        )

    payload = _encode_format(ss58_format) + raw
    checksum_length = 2 if len(raw) in (32, 33) else 1

    return base58.b58encode(payload + sshash(payload)[:checksum_length]).decode("ascii")


def check_address(address: str, ss58_format: int) -> Tuple[bool, str]:
    """Validate an address against an expected prefix without raising."""
    try:
        decoded = base58.b58decode(address)
    except ValueError as e:
        return False, str(e)

    if len(decoded) not in ALLOWED_ENCODED_LENGTHS:
        return False, "Invalid decoded address length"

    is_valid, _, _, ss58_decoded = check_address_checksum(decoded)
    if ss58_decoded != ss58_format:
        return False, f"Prefix mismatch, expected {ss58_format}, found {ss58_decoded}"
    if not is_valid:
        return False, "Invalid decoded address checksum"

    return True, ""
