"""
Keyring management for polykey

Keeps a set of pairs in memory, keyed by their raw address, and creates
pairs from seeds, secret URIs and JSON records.
"""

from typing import Any, Dict, List, Optional, Sequence, Union

import structlog

from ..address.ss58 import decode_address, encode_address
from ..config import KeyringConfig
from ..crypto.types import KeypairType, SEED_LENGTH
from ..derive.path import key_extract_suri
from ..errors import InvalidContainerError, KeyringError
from ..persistence.records import decode_encoded
from ..util import is_hex
from .pair import Meta, Pair

logger = structlog.get_logger()

MNEMONIC_WORD_COUNTS = (12, 15, 18, 21, 24)


class Keyring:
    """
    In-memory collection of account pairs.

    Features:
    - Pairs of any supported key type, defaulting to the keyring's type
    - Secret URI parsing with hard/soft derivation paths
    - JSON import/export of encrypted accounts
    """

    def __init__(
        self,
        key_type: Optional[Union[KeypairType, str]] = None,
        ss58_format: Optional[int] = None,
        config: Optional[KeyringConfig] = None,
    ):
        config = config or KeyringConfig.from_env()

        self._type = KeypairType.parse(key_type) if key_type else config.key_type
        self._ss58_format = ss58_format if ss58_format is not None else config.ss58_format
        self._pairs: Dict[bytes, Pair] = {}

    @property
    def type(self) -> KeypairType:
        return self._type

    @property
    def ss58_format(self) -> int:
        return self._ss58_format

    @property
    def pairs(self) -> List[Pair]:
        return self.get_pairs()

    @property
    def public_keys(self) -> List[bytes]:
        return self.get_public_keys()

    def set_ss58_format(self, ss58_format: int) -> None:
        self._ss58_format = ss58_format
        for pair in self._pairs.values():
            pair.set_ss58_format(ss58_format)

    def encode_address(self, key: Union[str, bytes], ss58_format: Optional[int] = None) -> str:
        return encode_address(key, self._ss58_format if ss58_format is None else ss58_format)

    def decode_address(self, address: Union[str, bytes], ignore_checksum: bool = False) -> bytes:
        return decode_address(address, ignore_checksum)

    # -- creation -----------------------------------------------------------

    def create_from_seed(
        self,
        seed: bytes,
        meta: Optional[Meta] = None,
        key_type: Optional[Union[KeypairType, str]] = None,
    ) -> Pair:
        key_type = KeypairType.parse(key_type) if key_type else self._type
        return Pair.from_seed(key_type, seed, meta, ss58_format=self._ss58_format)

    def create_from_uri(
        self,
        suri: str,
        meta: Optional[Meta] = None,
        key_type: Optional[Union[KeypairType, str]] = None,
    ) -> Pair:
        """
        Create a pair from a secret URI: "<seed>[//hard][/soft]".

        The seed is either 32 bytes of 0x-prefixed hex or a raw string of at
        most 32 characters, padded with spaces. Mnemonic phrases are not
        supported.
        """
        key_type = KeypairType.parse(key_type) if key_type else self._type
        parts = key_extract_suri(suri)

        if parts.password is not None:
            raise KeyringError("A secret URI password is only valid with a mnemonic phrase")

        if is_hex(parts.phrase):
            seed = bytes.fromhex(parts.phrase[2:])
            if len(seed) != SEED_LENGTH:
                raise KeyringError(f"Expected a {SEED_LENGTH}-byte hex seed, found {len(seed)} bytes")
        elif len(parts.phrase.split(" ")) in MNEMONIC_WORD_COUNTS:
            raise KeyringError("Mnemonic phrases are not supported, pass a hex seed instead")
        else:
            raw = parts.phrase.encode("utf-8")
            if len(raw) > SEED_LENGTH:
                raise KeyringError(
                    "specified phrase is not a valid mnemonic and is invalid as a raw seed at > 32 bytes"
                )
            seed = raw.ljust(SEED_LENGTH, b" ")

        pair = Pair.from_seed(key_type, seed, ss58_format=self._ss58_format)
        if not parts.path:
            pair.set_meta(meta or {})
            return pair

        derived = pair.derive(parts.derive_path, meta)
        pair.lock()
        return derived

    def create_from_json(self, record: Dict[str, Any], ignore_checksum: bool = False) -> Pair:
        """Create a locked pair from an exported JSON record."""
        encoding = record.get("encoding") or {}
        version = encoding.get("version")
        content = encoding.get("content")
        enc_type = encoding.get("type", [])

        if version == "3" and (not isinstance(content, list) or content[0] != "pkcs8"):
            raise InvalidContainerError(f"Unable to decode non-pkcs8 type, {content} found")

        crypto_type = self._type if version == "0" or not isinstance(content, list) else content[1]
        try:
            key_type = KeypairType.parse(crypto_type)
        except ValueError as e:
            raise InvalidContainerError(f"Unknown crypto type {crypto_type}") from e

        enc_types: Sequence[str] = enc_type if isinstance(enc_type, list) else [enc_type]

        address = record["address"]
        if is_hex(address):
            public_key = bytes.fromhex(address[2:])
        else:
            public_key = self.decode_address(address, ignore_checksum)

        return Pair(
            key_type,
            public_key,
            None,
            record.get("meta"),
            decode_encoded(record["encoded"]),
            enc_types,
            ss58_format=self._ss58_format,
        )

    # -- storage ------------------------------------------------------------

    def add_pair(self, pair: Pair) -> Pair:
        pair.set_ss58_format(self._ss58_format)
        self._pairs[pair.address_raw] = pair

        logger.info("keyring_pair_added", type=pair.type.value, address=pair.address)
        return pair

    def add_from_seed(self, seed: bytes, meta: Optional[Meta] = None, key_type=None) -> Pair:
        return self.add_pair(self.create_from_seed(seed, meta, key_type))

    def add_from_uri(self, suri: str, meta: Optional[Meta] = None, key_type=None) -> Pair:
        return self.add_pair(self.create_from_uri(suri, meta, key_type))

    def add_from_json(self, record: Dict[str, Any], ignore_checksum: bool = False) -> Pair:
        return self.add_pair(self.create_from_json(record, ignore_checksum))

    def _lookup_key(self, address: Union[str, bytes]) -> bytes:
        key = self.decode_address(address)
        if key in self._pairs:
            return key

        # a raw public key rather than an address
        for raw, pair in self._pairs.items():
            if pair.public_key == key:
                return raw

        raise KeyError(f"Unable to retrieve keypair '{address}'")

    def get_pair(self, address: Union[str, bytes]) -> Pair:
        return self._pairs[self._lookup_key(address)]

    def get_pairs(self) -> List[Pair]:
        return list(self._pairs.values())

    def get_public_keys(self) -> List[bytes]:
        return [pair.public_key for pair in self._pairs.values()]

    def remove_pair(self, address: Union[str, bytes]) -> None:
        pair = self._pairs.pop(self._lookup_key(address))
        logger.info("keyring_pair_removed", type=pair.type.value, address=pair.address)

    def to_json(self, address: Union[str, bytes], passphrase: Optional[str] = None) -> Dict[str, Any]:
        return self.get_pair(address).to_json(passphrase)
