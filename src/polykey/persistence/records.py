"""
JSON account records.

{
    "address": ...,
    "encoded": base64(container),
    "encoding": {"content": ["pkcs8", <type>], "type": [...], "version": "3"},
    "meta": {...}
}
"""

import base64
from typing import Any, Dict, List, Optional

from ..crypto.types import KeypairType
from .encryption import ENCODING, ENCODING_NONE, ENCODING_VERSION


def json_encrypt_format(encoded: bytes, content: List[str], is_encrypted: bool) -> Dict[str, Any]:
    return {
        "encoded": base64.b64encode(encoded).decode("utf-8"),
        "encoding": {
            "content": list(content),
            "type": list(ENCODING if is_encrypted else ENCODING_NONE),
            "version": ENCODING_VERSION,
        },
    }


def pair_to_json(
    key_type: KeypairType,
    address: str,
    meta: Optional[Dict[str, Any]],
    encoded: bytes,
    is_encrypted: bool,
) -> Dict[str, Any]:
    record = json_encrypt_format(encoded, ["pkcs8", key_type.value], is_encrypted)
    record["address"] = address
    record["meta"] = dict(meta or {})
    return record


def decode_encoded(value: str) -> bytes:
    """Decode the `encoded` field, which older records store as hex."""
    if value.startswith("0x"):
        return bytes.fromhex(value[2:])
    return base64.b64decode(value)
