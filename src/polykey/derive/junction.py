"""
Derivation junctions.

A junction is one step of a derivation path: a 32-byte chain code plus a
hard/soft flag. Hard junctions need the parent secret, soft junctions can
also be applied to a bare public key where the key type allows it.
"""

import re
from typing import Union

from ..crypto.hashing import blake2_256
from ..util import compact_add_length, is_hex

JUNCTION_ID_LEN = 32

_RE_NUMBER = re.compile(r"^\d+$")


class DeriveJunction:
    """One step of a derivation path."""

    def __init__(self, chain_code: bytes = b"", is_hard: bool = False):
        self._chain_code = bytes(JUNCTION_ID_LEN)
        self._is_hard = is_hard
        if chain_code:
            self._set_code(chain_code)

    @classmethod
    def from_str(cls, value: str) -> "DeriveJunction":
        """
        Build a junction from a path element.

        A leading "/" marks a hard junction; "//Alice" in a path arrives here
        as "/Alice".
        """
        if value.startswith("/"):
            code, is_hard = value[1:], True
        else:
            code, is_hard = value, False

        junction = cls()
        junction.soft(int(code, 10) if _RE_NUMBER.match(code) else code)
        return junction.harden() if is_hard else junction

    @property
    def chain_code(self) -> bytes:
        return self._chain_code

    @property
    def is_hard(self) -> bool:
        return self._is_hard

    @property
    def is_soft(self) -> bool:
        return not self._is_hard

    def soft(self, value: Union[int, str, bytes]) -> "DeriveJunction":
        if isinstance(value, int):
            return self.soft(value.to_bytes(8, "little"))
        if isinstance(value, str):
            if is_hex(value):
                return self.soft(bytes.fromhex(value[2:]))
            return self.soft(compact_add_length(value.encode("utf-8")))

        self._set_code(bytes(value))
        self._is_hard = False
        return self

    def soften(self) -> "DeriveJunction":
        self._is_hard = False
        return self

    def hard(self, value: Union[int, str, bytes]) -> "DeriveJunction":
        return self.soft(value).harden()

    def harden(self) -> "DeriveJunction":
        self._is_hard = True
        return self

    def _set_code(self, value: bytes) -> None:
        if len(value) > JUNCTION_ID_LEN:
            value = blake2_256(value)
        self._chain_code = value.ljust(JUNCTION_ID_LEN, b"\x00")

    def __eq__(self, other) -> bool:
        if not isinstance(other, DeriveJunction):
            return NotImplemented
        return self._chain_code == other._chain_code and self._is_hard == other._is_hard

    def __hash__(self) -> int:
        return hash((self._chain_code, self._is_hard))

    def __repr__(self) -> str:
        kind = "hard" if self._is_hard else "soft"
        return f"DeriveJunction({kind}, 0x{self._chain_code.hex()})"
