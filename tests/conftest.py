"""
Pytest Configuration and Fixtures
"""

import os
import sys
import pytest

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(os.path.dirname(__file__)), 'src'))

# Set test environment
os.environ["POLYKEY_KEY_TYPE"] = "ed25519"
os.environ["POLYKEY_SS58_FORMAT"] = "42"
os.environ.pop("POLYKEY_NETWORK", None)


@pytest.fixture
def seed():
    """Fixed 32-byte seed."""
    return bytes([1] * 32)


@pytest.fixture
def raw_seed():
    """A 32-character raw seed string."""
    return b"12345678901234567890123456789012"


@pytest.fixture
def ed25519_pair(seed):
    """Unlocked ed25519 pair."""
    from polykey.core.pair import Pair
    return Pair.from_seed("ed25519", seed, {"name": "test"})


@pytest.fixture
def ecdsa_pair(seed):
    """Unlocked ecdsa pair."""
    from polykey.core.pair import Pair
    return Pair.from_seed("ecdsa", seed)


@pytest.fixture
def ethereum_pair(seed):
    """Unlocked Ethereum pair."""
    from polykey.core.pair import Pair
    return Pair.from_seed("ethereum", seed)


@pytest.fixture
def keyring():
    """Empty ed25519 keyring on the generic substrate prefix."""
    from polykey.core.keyring import Keyring
    return Keyring(key_type="ed25519", ss58_format=42)
