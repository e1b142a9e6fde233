"""
Error taxonomy for polykey.

Usage errors (locked pair, unsupported derivation, malformed container) and
format errors (signature shape, address encoding) are raised. A signature
that simply does not verify is never an error, it is a negative
VerifyResult.
"""


class KeyringError(Exception):
    """Base class for all polykey errors."""
    pass


class LockedPairError(KeyringError):
    """Raised when secret material is needed but the pair is locked."""
    pass


class DerivationError(KeyringError):
    """Raised for unsupported derivations and malformed derivation paths."""
    pass


class InvalidContainerError(KeyringError):
    """Raised when a decoded container holds key material of unknown shape."""
    pass


class DecryptionError(KeyringError):
    """Raised when an encrypted container cannot be opened."""
    pass


class SignatureFormatError(KeyringError, ValueError):
    """Raised when a signature has a length or discriminator outside the known table."""
    pass


class AddressError(KeyringError, ValueError):
    """Raised when an address cannot be decoded or encoded."""
    pass


class BackendUnavailableError(KeyringError, RuntimeError):
    """Raised when the primitive library for a key type is not installed."""
    pass
