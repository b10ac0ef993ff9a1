"""SealBox: passphrase-based authenticated encryption of JSON values."""

from .core.exceptions import (
    SealBoxError,
    ConfigurationError,
    ValidationError,
    SerializationError,
    AuthenticationError,
)
from .security.codec import Codec, make_codec

__all__ = [
    "SealBoxError",
    "ConfigurationError",
    "ValidationError",
    "SerializationError",
    "AuthenticationError",
    "Codec",
    "make_codec",
]
