"""
Passphrase-bound envelope codec.

A :class:`Codec` closes over one passphrase and turns JSON values into
self-describing encrypted envelopes and back. Every parameter (cipher, KDF,
iterations, field lengths) is a module constant and cannot be overridden
through the options passed to :func:`make_codec`.

Each call generates its own salt and nonce, so calls share no state and the
codec can be used from many threads or tasks at once. Key derivation is the
only slow step; the ``async`` methods run it in a worker thread while the
``*_sync`` methods run it on the caller's thread. Both produce the same
envelope for the same inputs.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Optional

from sealbox.core.exceptions import ConfigurationError, ValidationError
from . import envelope, serializer
from .aead import open_envelope, seal
from .kdf import (
    NONCE_LENGTH,
    derive_key,
    derive_key_async,
    generate_nonce,
    generate_salt,
    kdf_params_to_dict,
)

logger = logging.getLogger(__name__)

ALLOWED_OPTIONS = frozenset({"passphrase"})


def _validate_aad(aad: Any) -> Optional[bytes]:
    if aad is None:
        return None
    if not isinstance(aad, str):
        raise ValidationError("AAD must be a string")
    if aad == "":
        raise ValidationError("AAD cannot be an empty string")
    try:
        return aad.encode("utf-8")
    except UnicodeEncodeError as e:
        raise ValidationError("AAD must be valid unicode text") from e


class Codec:
    """
    Seal and open envelopes with a fixed passphrase.

    Build instances with :func:`make_codec`. The passphrase is kept private
    and never appears in ``repr()``.
    """

    __slots__ = ("_passphrase",)

    def __init__(self, passphrase: bytes):
        object.__setattr__(self, "_passphrase", passphrase)

    def __setattr__(self, name, value):
        raise AttributeError("Codec instances are immutable")

    def __repr__(self) -> str:
        return "Codec(cipher='aes-256-gcm', kdf='pbkdf2-sha512')"

    # ------------------------------------------------------------------
    # Seal
    # ------------------------------------------------------------------

    def _prepare_seal(
        self, value: Any, aad: Any
    ) -> tuple[bytes, bytes, bytes, Optional[bytes]]:
        # no entropy is drawn before the value has serialized
        aad_bytes = _validate_aad(aad)
        plaintext = serializer.dumps(value)
        salt = generate_salt()
        nonce = generate_nonce()
        return plaintext, salt, nonce, aad_bytes

    def _finish_seal(
        self,
        plaintext: bytes,
        key: bytes,
        nonce: bytes,
        salt: bytes,
        aad_bytes: Optional[bytes],
    ) -> str:
        raw = seal(plaintext, key, nonce, salt, aad_bytes)
        logger.debug("sealed %d-byte envelope (aad=%s)", len(raw), aad_bytes is not None)
        return envelope.encode(raw)

    def encrypt_sync(self, value: Any, aad: Optional[str] = None) -> str:
        """Encrypt ``value`` and return a base64 envelope, deriving the key on this thread."""
        plaintext, salt, nonce, aad_bytes = self._prepare_seal(value, aad)
        key = derive_key(self._passphrase, salt)
        return self._finish_seal(plaintext, key, nonce, salt, aad_bytes)

    async def encrypt(self, value: Any, aad: Optional[str] = None) -> str:
        """Encrypt ``value`` and return a base64 envelope, deriving the key off the event loop."""
        plaintext, salt, nonce, aad_bytes = self._prepare_seal(value, aad)
        key = await derive_key_async(self._passphrase, salt)
        return self._finish_seal(plaintext, key, nonce, salt, aad_bytes)

    # ------------------------------------------------------------------
    # Open
    # ------------------------------------------------------------------

    def _prepare_open(self, blob: Any, aad: Any) -> tuple[bytes, bytes, Optional[bytes]]:
        aad_bytes = _validate_aad(aad)
        raw = envelope.normalize(blob)
        salt = envelope.unpack(raw).salt
        return raw, salt, aad_bytes

    def _finish_open(self, raw: bytes, key: bytes, aad_bytes: Optional[bytes]) -> Any:
        plaintext = open_envelope(raw, key, aad_bytes)
        logger.debug("opened %d-byte envelope (aad=%s)", len(raw), aad_bytes is not None)
        return serializer.loads(plaintext)

    def decrypt_sync(self, blob: str | bytes, aad: Optional[str] = None) -> Any:
        """Authenticate and decrypt an envelope given as base64 text or raw bytes."""
        raw, salt, aad_bytes = self._prepare_open(blob, aad)
        key = derive_key(self._passphrase, salt)
        return self._finish_open(raw, key, aad_bytes)

    async def decrypt(self, blob: str | bytes, aad: Optional[str] = None) -> Any:
        """Async form of :meth:`decrypt_sync`."""
        raw, salt, aad_bytes = self._prepare_open(blob, aad)
        key = await derive_key_async(self._passphrase, salt)
        return self._finish_open(raw, key, aad_bytes)

    # ------------------------------------------------------------------
    # Diagnostics
    # ------------------------------------------------------------------

    @staticmethod
    def parameters() -> dict:
        return {
            "cipher": "aes-256-gcm",
            "kdf": kdf_params_to_dict(),
            "nonce_len": NONCE_LENGTH,
            "tag_len": envelope.TAG_LENGTH,
            "encoding": "base64",
        }


def make_codec(options: Mapping[str, Any]) -> Codec:
    """
    Build a :class:`Codec` from ``{"passphrase": ...}``.

    The passphrase may be ``str`` (UTF-8 encoded) or bytes. Raises
    :class:`ConfigurationError` when it is missing or empty, or when any
    other option is supplied.
    """
    if not isinstance(options, Mapping):
        raise ConfigurationError("options must be a mapping")

    unknown = set(options) - ALLOWED_OPTIONS
    if unknown:
        raise ConfigurationError(f"unsupported options: {', '.join(sorted(map(str, unknown)))}")

    passphrase = options.get("passphrase")
    if passphrase is None:
        raise ConfigurationError("passphrase is required")
    if isinstance(passphrase, str):
        try:
            passphrase = passphrase.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ConfigurationError("passphrase must be valid unicode text") from e
    elif isinstance(passphrase, (bytes, bytearray)):
        passphrase = bytes(passphrase)
    else:
        raise ConfigurationError("passphrase must be a string or bytes")
    if not passphrase:
        raise ConfigurationError("passphrase cannot be empty")

    return Codec(passphrase)
