"""
Keyring configuration.

Defaults come from the environment:
  POLYKEY_KEY_TYPE     default key type for new pairs (sr25519)
  POLYKEY_SS58_FORMAT  address prefix (42, generic substrate)
  POLYKEY_NETWORK      network name; overrides POLYKEY_SS58_FORMAT
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .address.networks import get_network
from .address.ss58 import DEFAULT_SS58_FORMAT
from .crypto.types import KeypairType

DEFAULT_KEY_TYPE = KeypairType.SR25519


@dataclass(frozen=True)
class KeyringConfig:
    key_type: KeypairType = DEFAULT_KEY_TYPE
    ss58_format: int = DEFAULT_SS58_FORMAT

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "KeyringConfig":
        env = os.environ if environ is None else environ

        key_type = KeypairType.parse(env.get("POLYKEY_KEY_TYPE", DEFAULT_KEY_TYPE.value))

        network = env.get("POLYKEY_NETWORK")
        if network:
            ss58_format = get_network(network).prefix
        else:
            ss58_format = int(env.get("POLYKEY_SS58_FORMAT", DEFAULT_SS58_FORMAT))

        return cls(key_type=key_type, ss58_format=ss58_format)
