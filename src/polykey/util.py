"""
Byte helpers shared across polykey: input coercion, SCALE compact length
prefixes and the <Bytes> message envelope used by signing front-ends.
"""

import re
from typing import Union

BytesLike = Union[bytes, bytearray, memoryview, str]

U8A_WRAP_ETHEREUM = b"\x19Ethereum Signed Message:\n"
U8A_WRAP_PREFIX = b"<Bytes>"
U8A_WRAP_POSTFIX = b"</Bytes>"

_HEX_RE = re.compile(r"^0x([0-9a-fA-F]{2})*$")


def is_hex(value) -> bool:
    return isinstance(value, str) and bool(_HEX_RE.match(value))


def to_bytes(value: BytesLike) -> bytes:
    """
    Coerce input to bytes.

    0x-prefixed hex strings are decoded, other strings are UTF-8 encoded.
    """
    if value is None:
        return b""
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        if is_hex(value):
            return bytes.fromhex(value[2:])
        return value.encode("utf-8")
    raise TypeError(f"Cannot convert {type(value).__name__} to bytes")


def compact_add_length(data: bytes) -> bytes:
    """Prefix data with its SCALE compact-encoded length."""
    length = len(data)
    if length < 1 << 6:
        prefix = bytes([length << 2])
    elif length < 1 << 14:
        prefix = ((length << 2) | 0b01).to_bytes(2, "little")
    elif length < 1 << 30:
        prefix = ((length << 2) | 0b10).to_bytes(4, "little")
    else:
        size = (length.bit_length() + 7) // 8
        prefix = bytes([((size - 4) << 2) | 0b11]) + length.to_bytes(size, "little")
    return prefix + data


def is_wrapped(data: bytes, with_ethereum: bool) -> bool:
    if (
        len(data) >= len(U8A_WRAP_PREFIX) + len(U8A_WRAP_POSTFIX)
        and data.startswith(U8A_WRAP_PREFIX)
        and data.endswith(U8A_WRAP_POSTFIX)
    ):
        return True
    return with_ethereum and data.startswith(U8A_WRAP_ETHEREUM)


def unwrap_bytes(data: bytes) -> bytes:
    if is_wrapped(data, False):
        return data[len(U8A_WRAP_PREFIX):len(data) - len(U8A_WRAP_POSTFIX)]
    return data


def wrap_bytes(data: bytes) -> bytes:
    if is_wrapped(data, True):
        return data
    return U8A_WRAP_PREFIX + data + U8A_WRAP_POSTFIX
