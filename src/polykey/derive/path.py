"""
Derivation path and secret URI parsing.

Paths look like "//hard/soft//0x1234/42": "//" starts a hard junction and
"/" a soft one. A secret URI is a seed or phrase followed by an optional
path and an optional "///password".
"""

import re
import unicodedata
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..errors import DerivationError
from .junction import DeriveJunction

_RE_JUNCTION = re.compile(r"/(/?)([^/]+)")
_RE_SURI = re.compile(
    r"^((0x[a-fA-F0-9]+|[^\W_]+(?: [^\W_]+)*))((//?[^/]+)*)(///(.*))?$"
)


@dataclass(frozen=True)
class SuriParts:
    phrase: str
    derive_path: str
    path: Tuple[DeriveJunction, ...]
    password: Optional[str] = None


def key_extract_path(derive_path: str) -> Tuple[List[str], List[DeriveJunction]]:
    """
    Split a derivation path into its junctions.

    The matched parts must re-assemble to exactly the input, so stray
    characters are rejected rather than skipped.
    """
    parts = [m.group(0) for m in _RE_JUNCTION.finditer(derive_path)]
    constructed = "".join(parts)

    if constructed != derive_path:
        raise DerivationError(f'Re-constructed path "{constructed}" does not match input')

    return parts, [DeriveJunction.from_str(p[1:]) for p in parts]


def key_extract_suri(suri: str) -> SuriParts:
    normalized = unicodedata.normalize("NFC", suri).strip()
    match = _RE_SURI.match(normalized)

    if match is None:
        raise DerivationError("Unable to match provided value to a secret URI")

    phrase, derive_path, password = match.group(1), match.group(3) or "", match.group(6)
    _, path = key_extract_path(derive_path)

    return SuriParts(phrase=phrase, derive_path=derive_path, path=tuple(path), password=password)
