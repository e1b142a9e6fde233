"""
Static network registry.

Only the address prefix is consumed by the keyring; the remaining fields are
descriptive.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Optional, Tuple


@dataclass(frozen=True)
class Network:
    prefix: int
    network: str
    display_name: str
    symbols: Tuple[str, ...] = ()
    decimals: Tuple[int, ...] = ()
    standard_account: str = "*25519"
    website: Optional[str] = None


_NETWORKS = (
    Network(0, "polkadot", "Polkadot Relay Chain", ("DOT",), (10,), website="https://polkadot.network"),
    Network(2, "kusama", "Kusama Relay Chain", ("KSM",), (12,), website="https://kusama.network"),
    Network(5, "astar", "Astar Network", ("ASTR",), (18,), website="https://astar.network"),
    Network(42, "substrate", "Substrate", (), (), website="https://substrate.io"),
    Network(1284, "moonbeam", "Moonbeam", ("GLMR",), (18,), "secp256k1", "https://moonbeam.network"),
    Network(1285, "moonriver", "Moonriver", ("MOVR",), (18,), "secp256k1", "https://moonbeam.network"),
)

NETWORKS = MappingProxyType({n.network: n for n in _NETWORKS})
NETWORKS_BY_PREFIX = MappingProxyType({n.prefix: n for n in _NETWORKS})


def get_network(name: str) -> Network:
    try:
        return NETWORKS[name.lower()]
    except KeyError:
        raise KeyError(f"Unknown network: {name}") from None
