"""
polykey CLI

Commands:
  inspect   - Show the public key and address of a secret URI
  sign      - Sign a message with a secret URI
  verify    - Verify a signature against an address or public key
"""

import argparse
import sys

from .config import KeyringConfig
from .core.keyring import Keyring
from .crypto.verify import signature_verify
from .errors import KeyringError


def _keyring(args) -> Keyring:
    config = KeyringConfig.from_env()
    ss58_format = config.ss58_format
    if args.network:
        from .address.networks import get_network
        ss58_format = get_network(args.network).prefix
    return Keyring(key_type=args.type or config.key_type, ss58_format=ss58_format)


def cmd_inspect(args):
    """Show the public key and address of a secret URI."""
    try:
        pair = _keyring(args).create_from_uri(args.suri)
    except (KeyringError, KeyError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Key type: {pair.type.value}")
    print(f"  Public key: 0x{pair.public_key.hex()}")
    print(f"  Address: {pair.address}")
    print(f"  SS58 format: {pair.ss58_format}")


def cmd_sign(args):
    """Sign a message with a secret URI."""
    try:
        pair = _keyring(args).create_from_uri(args.suri)
        signature = pair.sign(args.message, with_type=args.with_type)
    except (KeyringError, KeyError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"0x{signature.hex()}")


def cmd_verify(args):
    """Verify a signature."""
    try:
        result = signature_verify(args.message, args.signature, args.address)
    except (KeyringError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    if result.is_valid:
        print("Signature Valid")
        print(f"  Crypto: {result.crypto}")
        print(f"  Wrapped: {'Yes' if result.is_wrapped else 'No'}")
    else:
        print("Signature Invalid")
        sys.exit(1)


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="polykey - multi-scheme account keys",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # inspect
    inspect_parser = subparsers.add_parser("inspect", help="Inspect a secret URI")
    inspect_parser.add_argument("suri", help="Seed (0x hex or raw string) with optional derivation path")
    inspect_parser.add_argument("--type", help="Key type (ed25519, sr25519, ecdsa, ethereum, mldsa)")
    inspect_parser.add_argument("--network", help="Network name used for the address prefix")

    # sign
    sign_parser = subparsers.add_parser("sign", help="Sign a message")
    sign_parser.add_argument("suri", help="Seed (0x hex or raw string) with optional derivation path")
    sign_parser.add_argument("message", help="Message (0x hex or text)")
    sign_parser.add_argument("--type", help="Key type")
    sign_parser.add_argument("--network", help="Network name")
    sign_parser.add_argument("--with-type", action="store_true", help="Prefix the key type discriminator")

    # verify
    verify_parser = subparsers.add_parser("verify", help="Verify a signature")
    verify_parser.add_argument("message", help="Message (0x hex or text)")
    verify_parser.add_argument("signature", help="Signature as 0x hex")
    verify_parser.add_argument("address", help="Address or 0x public key")

    args = parser.parse_args(argv)

    if args.command == "inspect":
        cmd_inspect(args)
    elif args.command == "sign":
        cmd_sign(args)
    elif args.command == "verify":
        cmd_verify(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
