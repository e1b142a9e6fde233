"""
Hierarchical deterministic key derivation (HDKD).
"""

from .junction import DeriveJunction
from .path import SuriParts, key_extract_path, key_extract_suri
from .hdkd import TYPE_HDKD, key_from_path, public_from_path

__all__ = [
    "DeriveJunction",
    "SuriParts",
    "key_extract_path",
    "key_extract_suri",
    "TYPE_HDKD",
    "key_from_path",
    "public_from_path",
]
