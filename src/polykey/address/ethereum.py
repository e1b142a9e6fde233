"""
Ethereum-style 20-byte addresses with EIP-55 mixed-case checksums.
"""

import re
from typing import Union

from ..crypto.hashing import keccak_256
from ..crypto.secp256k1 import secp256k1_expand
from ..errors import AddressError
from ..util import to_bytes

_ADDRESS_RE = re.compile(r"^0x[0-9a-fA-F]{40}$")


def _raw_address(key: bytes) -> bytes:
    if len(key) == 20:
        return key
    if len(key) == 32:
        # already a keccak hash of the expanded key
        return key[-20:]
    return keccak_256(secp256k1_expand(key))[-20:]


def ethereum_encode(address_or_public: Union[str, bytes]) -> str:
    if not address_or_public:
        return "0x"

    key = to_bytes(address_or_public)
    if len(key) not in (20, 32, 33, 65):
        raise AddressError(f"Invalid address or publicKey provided, received {len(key)} bytes input")

    address = _raw_address(key).hex()
    digest = keccak_256(address.encode("ascii")).hex()

    return "0x" + "".join(
        c.upper() if int(digest[i], 16) > 7 else c
        for i, c in enumerate(address)
    )


def is_ethereum_checksum(address: str) -> bool:
    body = address[2:] if address.startswith("0x") else address
    digest = keccak_256(body.lower().encode("ascii")).hex()

    for i, c in enumerate(body):
        expected = c.upper() if int(digest[i], 16) > 7 else c.lower()
        if c != expected:
            return False
    return True


def is_ethereum_address(address: str) -> bool:
    if not isinstance(address, str) or not _ADDRESS_RE.match(address):
        return False
    body = address[2:]
    if body == body.lower() or body == body.upper():
        return True
    return is_ethereum_checksum(address)
