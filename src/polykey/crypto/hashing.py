"""
Hash primitives: blake2b for addresses and VRF outputs, keccak-256 for
Ethereum-style addresses.
"""

import hashlib

from Crypto.Hash import keccak


def blake2_256(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=32).digest()


def blake2_512(data: bytes) -> bytes:
    return hashlib.blake2b(data, digest_size=64).digest()


def keccak_256(data: bytes) -> bytes:
    h = keccak.new(digest_bits=256)
    h.update(data)
    return h.digest()
