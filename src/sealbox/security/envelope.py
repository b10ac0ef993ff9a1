"""Binary envelope layout and transport encoding.

Layout (raw bytes, fixed offsets):
- [0, 64):   salt
- [64, 76):  GCM nonce
- [76, 92):  GCM authentication tag
- [92, end): ciphertext (same length as the plaintext)

The raw envelope is base64-encoded for transport. Opening accepts either the
base64 text or the raw bytes, so no external metadata is needed to decrypt.
"""
import base64
import binascii
from typing import NamedTuple

from sealbox.core.exceptions import AuthenticationError, ValidationError
from .kdf import SALT_LENGTH, NONCE_LENGTH


TAG_LENGTH = 16

SALT_OFFSET = 0
NONCE_OFFSET = SALT_OFFSET + SALT_LENGTH
TAG_OFFSET = NONCE_OFFSET + NONCE_LENGTH
CIPHERTEXT_OFFSET = TAG_OFFSET + TAG_LENGTH
HEADER_LENGTH = CIPHERTEXT_OFFSET

AUTH_FAILED = "unable to authenticate data"


class Envelope(NamedTuple):
    salt: bytes
    nonce: bytes
    tag: bytes
    ciphertext: bytes


def pack(salt: bytes, nonce: bytes, tag: bytes, ciphertext: bytes) -> bytes:
    if len(salt) != SALT_LENGTH:
        raise ValueError(f"salt must be {SALT_LENGTH} bytes")
    if len(nonce) != NONCE_LENGTH:
        raise ValueError(f"nonce must be {NONCE_LENGTH} bytes")
    if len(tag) != TAG_LENGTH:
        raise ValueError(f"tag must be {TAG_LENGTH} bytes")
    return b"".join((salt, nonce, tag, ciphertext))


def unpack(raw: bytes) -> Envelope:
    """Split a raw envelope by its fixed offsets.

    A blob too short to hold the header is reported as an authentication
    failure, same as any other corruption.
    """
    if len(raw) < HEADER_LENGTH:
        raise AuthenticationError(AUTH_FAILED)
    return Envelope(
        salt=raw[SALT_OFFSET:NONCE_OFFSET],
        nonce=raw[NONCE_OFFSET:TAG_OFFSET],
        tag=raw[TAG_OFFSET:CIPHERTEXT_OFFSET],
        ciphertext=raw[CIPHERTEXT_OFFSET:],
    )


def encode(raw: bytes) -> str:
    return base64.b64encode(raw).decode("ascii")


def normalize(envelope: str | bytes | bytearray | memoryview) -> bytes:
    """Return canonical raw bytes for either base64 text or raw envelope bytes."""
    if isinstance(envelope, str):
        try:
            return base64.b64decode(envelope.encode("ascii"), validate=True)
        except (UnicodeEncodeError, binascii.Error) as e:
            raise AuthenticationError(AUTH_FAILED) from e
    if isinstance(envelope, (bytes, bytearray, memoryview)):
        return bytes(envelope)
    raise ValidationError("envelope must be a string or bytes")
