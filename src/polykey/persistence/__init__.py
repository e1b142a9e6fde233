"""
Persistence Layer

Encrypted key containers and JSON account records.
"""

from .encryption import ENCODING, ENCODING_NONE, ENCODING_VERSION, json_decrypt_data, json_encrypt_data
from .pkcs8 import decode_pair, encode_pair
from .records import decode_encoded, json_encrypt_format, pair_to_json

__all__ = [
    "ENCODING",
    "ENCODING_NONE",
    "ENCODING_VERSION",
    "json_decrypt_data",
    "json_encrypt_data",
    "decode_pair",
    "encode_pair",
    "decode_encoded",
    "json_encrypt_format",
    "pair_to_json",
]
