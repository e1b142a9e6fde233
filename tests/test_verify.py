"""
Tests for Signature Verification

Tests algorithm detection, prefixed signatures, the <Bytes> wrapping retry
and the VRF extension.
"""

import pytest
from polykey.crypto.types import Keypair, KeypairType
from polykey.crypto.verify import is_prefixed_signature, signature_verify
from polykey.crypto import MLDSA_AVAILABLE, SR25519_AVAILABLE, vrf_hash
from polykey.crypto.vrf import vrf_sign, vrf_verify
from polykey.errors import BackendUnavailableError, SignatureFormatError
from polykey.util import wrap_bytes


class TestSignatureVerify:
    """Test signature_verify."""

    def test_ed25519_detected(self, ed25519_pair):
        """A 64-byte ed25519 signature is detected without a type hint."""
        signature = ed25519_pair.sign("test")
        result = signature_verify("test", signature, ed25519_pair.address)

        assert len(signature) == 64
        assert result.is_valid is True
        assert result.crypto == "ed25519"
        assert result.is_wrapped is False
        assert result.public_key == ed25519_pair.public_key

    def test_public_key_as_signer(self, ed25519_pair):
        """A raw public key works in place of an address."""
        signature = ed25519_pair.sign(b"test")
        result = signature_verify(b"test", signature, ed25519_pair.public_key)

        assert result.is_valid is True

    def test_hex_inputs(self, ed25519_pair):
        """0x hex strings are accepted for every argument."""
        signature = ed25519_pair.sign(b"\x01\x02")
        result = signature_verify("0x0102", "0x" + signature.hex(), "0x" + ed25519_pair.public_key.hex())

        assert result.crypto == "ed25519"

    def test_prefixed_ed25519(self, ed25519_pair):
        """with_type prepends discriminator 0."""
        signature = ed25519_pair.sign("test", with_type=True)

        assert len(signature) == 65
        assert signature[0] == 0
        assert signature_verify("test", signature, ed25519_pair.address).crypto == "ed25519"

    def test_ecdsa_detected(self, ecdsa_pair):
        """A 65-byte blake2 secp256k1 signature is detected as ecdsa."""
        signature = ecdsa_pair.sign("test")
        result = signature_verify("test", signature, ecdsa_pair.address)

        assert len(signature) == 65
        assert result.crypto == "ecdsa"

    def test_ecdsa_against_public_key(self, ecdsa_pair):
        """ecdsa verifies against the compressed public key."""
        signature = ecdsa_pair.sign("test")
        assert signature_verify("test", signature, ecdsa_pair.public_key).crypto == "ecdsa"

    def test_prefixed_ecdsa(self, ecdsa_pair):
        """with_type prepends discriminator 2."""
        signature = ecdsa_pair.sign("test", with_type=True)

        assert len(signature) == 66
        assert signature[0] == 2
        assert signature_verify("test", signature, ecdsa_pair.address).crypto == "ecdsa"

    def test_ethereum_detected(self, ethereum_pair):
        """A keccak secp256k1 signature is detected as ethereum."""
        signature = ethereum_pair.sign("test")
        result = signature_verify("test", signature, ethereum_pair.address)

        assert result.crypto == "ethereum"

    def test_prefixed_ethereum(self, ethereum_pair):
        """Prefixed ethereum signatures fall through ecdsa to ethereum."""
        signature = ethereum_pair.sign("test", with_type=True)
        assert signature_verify("test", signature, ethereum_pair.address).crypto == "ethereum"

    def test_wrong_message(self, ed25519_pair):
        """A signature over a different message is rejected."""
        signature = ed25519_pair.sign("test")
        result = signature_verify("other", signature, ed25519_pair.address)

        assert result.is_valid is False
        assert result.crypto == "none"

    def test_wrong_signer(self, ed25519_pair, ecdsa_pair):
        """A signature checked against another account is rejected."""
        signature = ed25519_pair.sign("test")
        assert signature_verify("test", signature, ecdsa_pair.address).is_valid is False

    def test_prefixed_no_cross_family_match(self, ed25519_pair, ecdsa_pair):
        """A prefixed ed25519 signature never validates as secp256k1."""
        signature = ed25519_pair.sign("test", with_type=True)
        result = signature_verify("test", signature, ecdsa_pair.public_key)

        assert result.is_valid is False

    def test_wrong_prefix_byte(self, ed25519_pair):
        """An ed25519 signature tagged as sr25519 is not accepted."""
        signature = b"\x01" + ed25519_pair.sign("test")
        assert signature_verify("test", signature, ed25519_pair.address).is_valid is False

    @pytest.mark.parametrize("length", [0, 63, 67, 100, 4626, 4629])
    def test_invalid_length(self, ed25519_pair, length):
        """Lengths outside the allowed set raise SignatureFormatError."""
        with pytest.raises(SignatureFormatError):
            signature_verify("test", bytes(length), ed25519_pair.address)

    def test_unknown_prefix_on_prefixed_length(self, ecdsa_pair):
        """66 bytes can only be a prefixed signature."""
        signature = b"\x07" + ecdsa_pair.sign("test")

        with pytest.raises(SignatureFormatError):
            signature_verify("test", signature, ecdsa_pair.address)

    @pytest.mark.parametrize("prefix", [b"\x00", b"\x01", b"\x02"])
    def test_66_bytes_always_secp256k1(self, ecdsa_pair, prefix):
        """A 66-byte signature is checked as secp256k1 whatever its first byte."""
        signature = prefix + ecdsa_pair.sign("test")
        result = signature_verify("test", signature, ecdsa_pair.address)

        assert result.is_valid is True
        assert result.crypto == "ecdsa"

    def test_66_bytes_ethereum_under_ed25519_byte(self, ethereum_pair):
        """Ethereum is still tried after ecdsa for a 66-byte signature."""
        signature = b"\x00" + ethereum_pair.sign("test")
        assert signature_verify("test", signature, ethereum_pair.address).crypto == "ethereum"

    def test_unknown_prefix_on_mldsa_length(self, ed25519_pair):
        """4628 bytes must start with discriminator 3."""
        with pytest.raises(ValueError):
            signature_verify("test", b"\x00" + bytes(4627), ed25519_pair.address)

    def test_is_prefixed_signature(self):
        """Only known discriminators at prefixed lengths count."""
        assert is_prefixed_signature(b"\x00" + bytes(64))
        assert is_prefixed_signature(b"\x02" + bytes(65))
        assert is_prefixed_signature(b"\x03" + bytes(4627))
        assert not is_prefixed_signature(b"\x05" + bytes(64))
        assert not is_prefixed_signature(bytes(64))
        assert not is_prefixed_signature(b"")


class TestMessageLengths:
    """Test sign/verify over empty, one-byte and long messages."""

    MESSAGES = [b"", b"\x01", b"x" * 2048]

    @pytest.mark.parametrize("message", MESSAGES)
    @pytest.mark.parametrize("fixture", ["ed25519_pair", "ecdsa_pair", "ethereum_pair"])
    def test_pair_and_detected_verify(self, request, fixture, message):
        """Pair.verify and signature_verify both accept the pair's own signature."""
        pair = request.getfixturevalue(fixture)
        signature = pair.sign(message)

        assert pair.verify(message, signature, pair.address) is True
        result = signature_verify(message, signature, pair.address)
        assert result.is_valid is True
        assert result.crypto == pair.type.value

    @pytest.mark.parametrize("message", MESSAGES)
    @pytest.mark.parametrize("fixture", ["ed25519_pair", "ecdsa_pair", "ethereum_pair"])
    def test_prefixed(self, request, fixture, message):
        """Prefixed signatures verify for every message size."""
        pair = request.getfixturevalue(fixture)
        signature = pair.sign(message, with_type=True)

        assert signature_verify(message, signature, pair.address).crypto == pair.type.value

    @pytest.mark.skipif(not SR25519_AVAILABLE, reason="py-sr25519-bindings not installed")
    @pytest.mark.parametrize("message", MESSAGES)
    def test_sr25519(self, seed, message):
        """sr25519 signatures verify for every message size."""
        from polykey.core.pair import Pair

        pair = Pair.from_seed(KeypairType.SR25519, seed)
        signature = pair.sign(message)

        assert pair.verify(message, signature, pair.address) is True
        assert signature_verify(message, signature, pair.address).crypto == "sr25519"

    @pytest.mark.skipif(not MLDSA_AVAILABLE, reason="liboqs-python / dilithium-py not installed")
    @pytest.mark.parametrize("message", MESSAGES)
    def test_mldsa(self, seed, message):
        """ML-DSA signatures verify against the raw public key for every message size."""
        from polykey.core.pair import Pair

        pair = Pair.from_seed(KeypairType.MLDSA, seed)
        signature = pair.sign(message)

        assert pair.verify(message, signature, pair.public_key) is True
        assert signature_verify(message, signature, pair.public_key).crypto == "mldsa"


class TestWrapping:
    """Test the <Bytes> wrapping retry."""

    def test_signed_wrapped_verified_raw(self, ed25519_pair):
        """A wrapped-signed message verifies in raw form."""
        signature = ed25519_pair.sign(wrap_bytes(b"hello"))
        result = signature_verify(b"hello", signature, ed25519_pair.address)

        assert result.is_valid is True
        assert result.is_wrapped is False

    def test_signed_raw_verified_wrapped(self, ed25519_pair):
        """A raw-signed message verifies in wrapped form."""
        signature = ed25519_pair.sign(b"hello")
        result = signature_verify(wrap_bytes(b"hello"), signature, ed25519_pair.address)

        assert result.is_valid is True
        assert result.is_wrapped is True

    def test_ecdsa_wrapping(self, ecdsa_pair):
        """The wrapping retry applies to secp256k1 as well."""
        signature = ecdsa_pair.sign(wrap_bytes(b"hello"))
        assert signature_verify(b"hello", signature, ecdsa_pair.address).crypto == "ecdsa"

    def test_ethereum_prefixed_message_not_retried(self, ed25519_pair):
        """Ethereum-prefixed messages are not re-wrapped."""
        message = b"\x19Ethereum Signed Message:\n5hello"
        signature = ed25519_pair.sign(b"<Bytes>" + message + b"</Bytes>")
        result = signature_verify(message, signature, ed25519_pair.address)

        assert result.is_valid is False
        assert result.is_wrapped is True


class TestVrf:
    """Test the VRF extension."""

    @pytest.mark.parametrize("fixture", ["ed25519_pair", "ecdsa_pair", "ethereum_pair"])
    def test_sign_and_verify(self, request, fixture):
        """Synthesized VRF results verify for each non-sr25519 family."""
        pair = request.getfixturevalue(fixture)
        result = pair.vrf_sign("message", context="ctx", extra="extra")

        assert pair.vrf_verify("message", result, pair.public_key, context="ctx", extra="extra") is True

    def test_output_is_hash_of_proof(self, ed25519_pair):
        """The output is blake2-256 over context, extra and proof."""
        result = ed25519_pair.vrf_sign(b"message", b"ctx")
        output, proof = result[:32], result[32:]

        assert len(proof) == 64
        assert output == vrf_hash(proof, b"ctx")

    def test_deterministic(self, ed25519_pair):
        """ed25519 VRF results repeat for the same input."""
        assert ed25519_pair.vrf_sign(b"m") == ed25519_pair.vrf_sign(b"m")

    def test_wrong_context(self, ed25519_pair):
        """A different context fails verification."""
        result = ed25519_pair.vrf_sign(b"message", b"ctx")
        assert ed25519_pair.vrf_verify(b"message", result, ed25519_pair.public_key, b"other") is False

    def test_tampered_output(self, ed25519_pair):
        """Altering the output bytes fails verification."""
        result = bytearray(ed25519_pair.vrf_sign(b"message"))
        result[0] ^= 0xFF

        assert ed25519_pair.vrf_verify(b"message", bytes(result), ed25519_pair.public_key) is False

    def test_wrong_message(self, ecdsa_pair):
        """A different message fails verification."""
        result = ecdsa_pair.vrf_sign(b"message")
        assert ecdsa_pair.vrf_verify(b"other", result, ecdsa_pair.public_key) is False

    def test_short_result(self, ed25519_pair):
        """Results no longer than the output hash are rejected."""
        assert ed25519_pair.vrf_verify(b"message", bytes(32), ed25519_pair.public_key) is False

    def test_locked_pair_cannot_sign(self, ed25519_pair):
        """VRF signing needs an unlocked pair."""
        from polykey.errors import LockedPairError

        ed25519_pair.lock()
        with pytest.raises(LockedPairError):
            ed25519_pair.vrf_sign(b"message")

    def test_sr25519_vrf_unavailable(self):
        """sr25519 VRF raises instead of returning a substitute result."""
        keypair = Keypair(public_key=b"\x01" * 32, secret_key=b"\x02" * 64)

        with pytest.raises(BackendUnavailableError):
            vrf_sign(KeypairType.SR25519, b"message", keypair)
        with pytest.raises(BackendUnavailableError):
            vrf_verify(KeypairType.SR25519, b"message", bytes(96), keypair.public_key)

    def test_sr25519_pair_vrf_unavailable(self):
        """Pair.vrf_sign on an unlocked sr25519 pair raises BackendUnavailableError."""
        from polykey.core.pair import Pair

        pair = Pair(KeypairType.SR25519, b"\x01" * 32, b"\x02" * 64)

        with pytest.raises(BackendUnavailableError):
            pair.vrf_sign(b"message")


@pytest.mark.skipif(not SR25519_AVAILABLE, reason="py-sr25519-bindings not installed")
class TestSr25519Verify:
    """Test sr25519 detection."""

    def test_detected(self, seed):
        """A bare sr25519 signature is detected."""
        from polykey.core.pair import Pair

        pair = Pair.from_seed(KeypairType.SR25519, seed)
        assert signature_verify("test", pair.sign("test"), pair.address).crypto == "sr25519"

    def test_prefixed(self, seed):
        """with_type prepends discriminator 1."""
        from polykey.core.pair import Pair

        pair = Pair.from_seed(KeypairType.SR25519, seed)
        signature = pair.sign("test", with_type=True)

        assert signature[0] == 1
        assert signature_verify("test", signature, pair.address).crypto == "sr25519"

    def test_signed_raw_verified_wrapped(self, seed):
        """The wrapping retry applies to sr25519."""
        from polykey.core.pair import Pair

        pair = Pair.from_seed(KeypairType.SR25519, seed)
        result = signature_verify(wrap_bytes(b"hello"), pair.sign(b"hello"), pair.address)

        assert result.crypto == "sr25519"
        assert result.is_valid is True
        assert result.is_wrapped is True

    def test_signed_wrapped_verified_raw(self, seed):
        """A wrapped-signed sr25519 message verifies in raw form."""
        from polykey.core.pair import Pair

        pair = Pair.from_seed(KeypairType.SR25519, seed)
        result = signature_verify(b"hello", pair.sign(wrap_bytes(b"hello")), pair.address)

        assert result.crypto == "sr25519"
        assert result.is_wrapped is False


@pytest.mark.skipif(not MLDSA_AVAILABLE, reason="liboqs-python / dilithium-py not installed")
class TestMLDSAVerify:
    """Test ML-DSA detection."""

    def test_detected(self, seed):
        """A bare ML-DSA signature is detected against the raw key."""
        from polykey.core.pair import Pair

        pair = Pair.from_seed(KeypairType.MLDSA, seed)
        result = signature_verify("test", pair.sign("test"), pair.public_key)

        assert result.crypto == "mldsa"

    def test_prefixed(self, seed):
        """with_type prepends discriminator 3."""
        from polykey.core.pair import Pair

        pair = Pair.from_seed(KeypairType.MLDSA, seed)
        signature = pair.sign("test", with_type=True)

        assert len(signature) == 4628
        assert signature_verify("test", signature, pair.public_key).crypto == "mldsa"

    def test_pair_verify(self, seed):
        """Pair.verify checks ML-DSA directly against the raw key."""
        from polykey.core.pair import Pair

        pair = Pair.from_seed(KeypairType.MLDSA, seed)
        assert pair.verify("test", pair.sign("test"), pair.public_key) is True

    def test_vrf(self, seed):
        """ML-DSA gets a synthesized VRF."""
        from polykey.core.pair import Pair

        pair = Pair.from_seed(KeypairType.MLDSA, seed)
        result = pair.vrf_sign(b"message")

        assert pair.vrf_verify(b"message", result, pair.public_key) is True
