"""
Exceptions for SealBox
Everything derives from SealBoxError so callers have a general error catcher
"""


class SealBoxError(Exception):
    # general container for errors
    pass


class ConfigurationError(SealBoxError):
    # raised when a codec cannot be built from the given options
    pass


class ValidationError(SealBoxError):
    # raised when a call argument (AAD, envelope type) is malformed
    pass


class SerializationError(SealBoxError):
    # raised when a value has no JSON representation (or a payload is not JSON)
    pass


class AuthenticationError(SealBoxError):
    # raised on any tag mismatch; never says which field was wrong
    pass
