"""Security helpers: KDF, envelope layout and AEAD codec for SealBox.

This package provides:
- PBKDF2-HMAC-SHA512 key derivation with a fresh 64-byte salt per message
- AES-256-GCM sealing into a fixed ``salt || nonce || tag || ciphertext`` layout
- a passphrase-bound codec with blocking and asyncio entry points
"""

from .kdf import generate_salt, generate_nonce, derive_key, derive_key_async
from .aead import seal, open_envelope
from .codec import Codec, make_codec

__all__ = [
    "generate_salt",
    "generate_nonce",
    "derive_key",
    "derive_key_async",
    "seal",
    "open_envelope",
    "Codec",
    "make_codec",
]
