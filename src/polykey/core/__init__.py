"""
polykey - Core Module

The account keypair entity and the in-memory keyring that manages pairs.
"""

from .pair import Pair
from .keyring import Keyring

__all__ = [
    "Pair",
    "Keyring",
]
