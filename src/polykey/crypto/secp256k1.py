"""
secp256k1 primitives backed by libsecp256k1 (coincurve).

Signatures are 65-byte recoverable signatures (r, s, recovery id). The
message is hashed before signing: blake2b-256 for the generic ecdsa type,
keccak-256 for the Ethereum-flavoured type.
"""

from coincurve import PrivateKey, PublicKey

from .hashing import blake2_256, keccak_256
from .types import Keypair, SEED_LENGTH, SECP256K1_SIGNATURE_LENGTH

HASH_BLAKE2 = "blake2"
HASH_KECCAK = "keccak"

_HASHERS = {
    HASH_BLAKE2: blake2_256,
    HASH_KECCAK: keccak_256,
}


def secp256k1_hash(hash_type: str, data: bytes) -> bytes:
    try:
        return _HASHERS[hash_type](data)
    except KeyError:
        raise ValueError(f"Unknown secp256k1 hash type: {hash_type}") from None


def secp256k1_pair_from_seed(seed: bytes) -> Keypair:
    """Create a keypair whose secret key is the seed itself."""
    if len(seed) != SEED_LENGTH:
        raise ValueError(f"Expected a {SEED_LENGTH}-byte seed, found {len(seed)} bytes")

    private_key = PrivateKey(bytes(seed))
    return Keypair(
        public_key=private_key.public_key.format(compressed=True),
        secret_key=bytes(seed),
    )


def secp256k1_compress(public_key: bytes) -> bytes:
    """Return the 33-byte compressed form of a public key."""
    if len(public_key) == 33:
        return bytes(public_key)
    if len(public_key) == 64:
        public_key = b"\x04" + bytes(public_key)
    if len(public_key) != 65:
        raise ValueError(f"Invalid secp256k1 public key length {len(public_key)}")
    return PublicKey(bytes(public_key)).format(compressed=True)


def secp256k1_expand(public_key: bytes) -> bytes:
    """Return the 64-byte uncompressed form (no 0x04 marker) of a public key."""
    if len(public_key) == 64:
        return bytes(public_key)
    if len(public_key) not in (33, 65):
        raise ValueError(f"Invalid secp256k1 public key length {len(public_key)}")
    return PublicKey(bytes(public_key)).format(compressed=False)[1:]


def secp256k1_sign(message: bytes, keypair: Keypair, hash_type: str = HASH_BLAKE2) -> bytes:
    digest = secp256k1_hash(hash_type, message)
    return PrivateKey(keypair.secret_key).sign_recoverable(digest, hasher=None)


def secp256k1_recover(message: bytes, signature: bytes, hash_type: str = HASH_BLAKE2) -> PublicKey:
    if len(signature) != SECP256K1_SIGNATURE_LENGTH:
        raise ValueError(
            f"Expected signature with {SECP256K1_SIGNATURE_LENGTH} bytes, {len(signature)} found instead"
        )

    recovery = signature[64]
    if recovery >= 27:
        # Ethereum-style v
        recovery -= 27
    if recovery > 3:
        raise ValueError(f"Invalid recovery id {signature[64]}")

    digest = secp256k1_hash(hash_type, message)
    return PublicKey.from_signature_and_message(
        bytes(signature[:64]) + bytes([recovery]), digest, hasher=None
    )


def secp256k1_verify(
    message: bytes,
    signature: bytes,
    address: bytes,
    hash_type: str = HASH_BLAKE2,
) -> bool:
    """
    Verify by recovering the signer and comparing it with `address`.

    `address` may be the compressed public key or the hashed form that the
    key type uses as its raw address: blake2b-256 of the compressed key for
    ecdsa, the trailing 20 bytes of keccak-256 of the expanded key for
    Ethereum.
    """
    recovered = secp256k1_recover(message, signature, hash_type)
    compressed = recovered.format(compressed=True)
    address = bytes(address)

    if compressed == address:
        return True

    if hash_type == HASH_KECCAK:
        signer = keccak_256(recovered.format(compressed=False)[1:])
        return len(address) >= 20 and signer[-20:] == address[-20:]

    return blake2_256(compressed) == address
