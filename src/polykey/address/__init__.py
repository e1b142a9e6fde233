"""
Address codecs: SS58 for substrate-style accounts, EIP-55 hex for
Ethereum-style accounts, and the static network registry.
"""

from .ss58 import (
    DEFAULT_SS58_FORMAT,
    check_address,
    decode_address,
    encode_address,
)
from .ethereum import ethereum_encode, is_ethereum_address
from .networks import NETWORKS, Network, get_network

__all__ = [
    "DEFAULT_SS58_FORMAT",
    "check_address",
    "decode_address",
    "encode_address",
    "ethereum_encode",
    "is_ethereum_address",
    "NETWORKS",
    "Network",
    "get_network",
]
