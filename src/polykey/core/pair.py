"""
Keypair Entity

A Pair holds the key material of one account together with its metadata
and the last encoded container. Every key-type specific step (signing,
addressing, derivation) is routed through the dispatch tables in
polykey.crypto.registry and polykey.derive.hdkd.

A pair is either Locked (no secret key in memory) or Unlocked. Locking
overwrites the secret buffer; unlocking decodes the cached container with
a passphrase and either fully succeeds or leaves the pair untouched.
"""

from typing import Any, Dict, Optional, Sequence, Union

import structlog

from ..address.ethereum import ethereum_encode
from ..address.ss58 import DEFAULT_SS58_FORMAT, decode_address, encode_address
from ..crypto.mldsa import mldsa_verify
from ..crypto.registry import TYPE_ADDRESS, TYPE_FROM_SEED, TYPE_PREFIX, TYPE_SIGNATURE
from ..crypto.secp256k1 import secp256k1_compress
from ..crypto.types import (
    Keypair,
    KeypairType,
    MLDSA_PUBLIC_LENGTH,
    MLDSA_SECRET_LENGTH,
    SEED_LENGTH,
)
from ..crypto.verify import signature_verify
from ..crypto.vrf import vrf_sign as _vrf_sign, vrf_verify as _vrf_verify
from ..derive.hdkd import key_from_path
from ..derive.path import key_extract_path
from ..errors import DerivationError, InvalidContainerError, LockedPairError
from ..persistence.encryption import ENCODING, ENCODING_NONE
from ..persistence.pkcs8 import decode_pair, encode_pair
from ..persistence.records import pair_to_json
from ..util import BytesLike, to_bytes

logger = structlog.get_logger()

Meta = Dict[str, Any]


class Pair:
    """
    An account keypair of a fixed key type.

    The key type never changes; deriving returns a new Pair.
    """

    def __init__(
        self,
        key_type: Union[KeypairType, str],
        public_key: bytes,
        secret_key: Optional[bytes] = None,
        meta: Optional[Meta] = None,
        encoded: Optional[bytes] = None,
        enc_types: Optional[Sequence[str]] = None,
        ss58_format: int = DEFAULT_SS58_FORMAT,
    ):
        self._type = KeypairType.parse(key_type)
        self._public_key = bytes(public_key)
        self._secret_key = bytearray(secret_key or b"")
        self._meta: Meta = dict(meta or {})
        self._encoded = bytes(encoded) if encoded else None
        self._enc_types = tuple(enc_types) if enc_types is not None else None
        self._ss58_format = ss58_format

    @classmethod
    def from_seed(
        cls,
        key_type: Union[KeypairType, str],
        seed: bytes,
        meta: Optional[Meta] = None,
        ss58_format: int = DEFAULT_SS58_FORMAT,
    ) -> "Pair":
        key_type = KeypairType.parse(key_type)
        keypair = TYPE_FROM_SEED[key_type](bytes(seed))
        return cls(key_type, keypair.public_key, keypair.secret_key, meta, ss58_format=ss58_format)

    # -- state --------------------------------------------------------------

    @property
    def type(self) -> KeypairType:
        return self._type

    @property
    def public_key(self) -> bytes:
        return self._public_key

    @property
    def meta(self) -> Meta:
        return dict(self._meta)

    @property
    def is_locked(self) -> bool:
        return len(self._secret_key) == 0 or not any(self._secret_key)

    @property
    def ss58_format(self) -> int:
        return self._ss58_format

    @property
    def encoded(self) -> Optional[bytes]:
        return self._encoded

    @property
    def address_raw(self) -> bytes:
        return TYPE_ADDRESS[self._type](self._public_key)

    @property
    def address(self) -> str:
        raw = self.address_raw
        if self._type == KeypairType.ETHEREUM:
            return ethereum_encode(raw)
        return encode_address(raw, self._ss58_format)

    def _keypair(self) -> Keypair:
        return Keypair(public_key=self._public_key, secret_key=bytes(self._secret_key))

    def _require_unlocked(self, action: str) -> None:
        if self.is_locked:
            raise LockedPairError(f"Cannot {action} with a locked key pair")

    # -- signing ------------------------------------------------------------

    def sign(self, message: BytesLike, with_type: bool = False) -> bytes:
        """
        Sign a message.

        With `with_type` the signature is prefixed by the one-byte key type
        discriminator so that it can be verified without knowing the type.
        """
        self._require_unlocked("sign")

        signature = TYPE_SIGNATURE[self._type](to_bytes(message), self._keypair())
        return (TYPE_PREFIX[self._type] if with_type else b"") + signature

    def verify(self, message: BytesLike, signature: BytesLike, signer_public: Union[str, bytes]) -> bool:
        if self._type == KeypairType.MLDSA:
            # ML-DSA signatures are stored without a discriminator and its
            # addresses are hashes, so check directly against the raw key
            try:
                return mldsa_verify(to_bytes(message), to_bytes(signature), to_bytes(signer_public))
            except ValueError:
                return False

        signer = TYPE_ADDRESS[self._type](decode_address(signer_public))
        return signature_verify(message, signature, signer).is_valid

    def vrf_sign(self, message: BytesLike, context: BytesLike = b"", extra: BytesLike = b"") -> bytes:
        self._require_unlocked("sign")
        return _vrf_sign(self._type, to_bytes(message), self._keypair(), to_bytes(context), to_bytes(extra))

    def vrf_verify(
        self,
        message: BytesLike,
        vrf_result: BytesLike,
        signer_public: Union[str, bytes],
        context: BytesLike = b"",
        extra: BytesLike = b"",
    ) -> bool:
        return _vrf_verify(
            self._type,
            to_bytes(message),
            to_bytes(vrf_result),
            decode_address(signer_public),
            to_bytes(context),
            to_bytes(extra),
        )

    # -- derivation ---------------------------------------------------------

    def derive(self, path: str, meta: Optional[Meta] = None) -> "Pair":
        """
        Derive a child pair along a path such as "//hard/soft".

        The child starts from this pair's metadata, overridden by `meta`.
        """
        if self._type == KeypairType.ETHEREUM:
            raise DerivationError("Unable to derive on this keypair")
        if self.is_locked:
            raise LockedPairError("Cannot derive on a locked keypair")

        _, junctions = key_extract_path(path)
        derived = key_from_path(self._keypair(), junctions, self._type)

        logger.debug("pair_derived", type=self._type.value, depth=len(junctions))

        return Pair(
            self._type,
            derived.public_key,
            derived.secret_key,
            {**self._meta, **(meta or {})},
            ss58_format=self._ss58_format,
        )

    # -- lifecycle ----------------------------------------------------------

    def lock(self) -> None:
        """Overwrite and drop the secret key. Safe to call repeatedly."""
        self._secret_key[:] = bytes(len(self._secret_key))
        self._secret_key.clear()

        logger.debug("pair_locked", type=self._type.value)

    def set_meta(self, additional: Meta) -> None:
        self._meta = {**self._meta, **additional}

    def set_ss58_format(self, ss58_format: int) -> None:
        self._ss58_format = ss58_format

    def decode_pkcs8(self, passphrase: Optional[str] = None, encoded: Optional[bytes] = None) -> None:
        """
        Load secret material from a container (the cached one by default).

        Nothing on the pair changes unless decoding succeeds.
        """
        decoded = decode_pair(passphrase, encoded or self._encoded, self._enc_types)
        secret, public = decoded.secret_key, decoded.public_key

        if self._type == KeypairType.MLDSA:
            if len(secret) == MLDSA_SECRET_LENGTH and len(public) == MLDSA_PUBLIC_LENGTH:
                keypair = decoded
            elif len(secret) == SEED_LENGTH:
                keypair = TYPE_FROM_SEED[self._type](secret)
            else:
                raise InvalidContainerError(
                    f"Invalid MLDSA key sizes: secret={len(secret)}, public={len(public)}"
                )
        elif len(secret) == 64:
            keypair = decoded
        else:
            try:
                keypair = TYPE_FROM_SEED[self._type](secret)
            except ValueError as e:
                raise InvalidContainerError(str(e)) from e

        old_secret = self._secret_key
        self._public_key = keypair.public_key
        self._secret_key = bytearray(keypair.secret_key)
        old_secret[:] = bytes(len(old_secret))

    def unlock(self, passphrase: Optional[str] = None) -> None:
        self.decode_pkcs8(passphrase)

    def encode_pkcs8(self, passphrase: Optional[str] = None) -> bytes:
        """Re-encode the secret at the latest container version."""
        if self.is_locked:
            if not self._encoded:
                raise LockedPairError("Cannot encode a locked key pair without a container")
            self.decode_pkcs8(passphrase, self._encoded)

        self._encoded = encode_pair(self._keypair(), passphrase)
        self._enc_types = ENCODING if passphrase else ENCODING_NONE

        return self._encoded

    def to_json(self, passphrase: Optional[str] = None) -> Dict[str, Any]:
        if self._type in (KeypairType.ECDSA, KeypairType.ETHEREUM):
            # the public key cannot be recovered from these addresses
            if len(self._public_key) == 20:
                address = "0x" + self._public_key.hex()
            else:
                address = "0x" + secp256k1_compress(self._public_key).hex()
        elif self._type == KeypairType.MLDSA:
            address = "0x" + self._public_key.hex()
        else:
            address = self.address

        return pair_to_json(self._type, address, self._meta, self.encode_pkcs8(passphrase), bool(passphrase))

    def __repr__(self) -> str:
        state = "locked" if self.is_locked else "unlocked"
        return f"Pair(type={self._type.value}, address={self.address}, {state})"
