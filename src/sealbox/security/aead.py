"""AES-256-GCM seal/open over the fixed envelope layout."""
from typing import Optional

from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from sealbox.core.exceptions import AuthenticationError
from .envelope import AUTH_FAILED, TAG_LENGTH, pack, unpack


def seal(
    plaintext: bytes,
    key: bytes,
    nonce: bytes,
    salt: bytes,
    aad: Optional[bytes] = None,
) -> bytes:
    """
    Encrypt ``plaintext`` in one shot and return the raw envelope
    ``salt || nonce || tag || ciphertext``.

    :class:`AESGCM` appends the tag to the ciphertext; here it sits in front.
    """
    aead = AESGCM(key)
    ct_and_tag = aead.encrypt(nonce, plaintext, aad)
    ciphertext, tag = ct_and_tag[:-TAG_LENGTH], ct_and_tag[-TAG_LENGTH:]
    return pack(salt, nonce, tag, ciphertext)


def open_envelope(raw: bytes, key: bytes, aad: Optional[bytes] = None) -> bytes:
    """
    Verify and decrypt a raw envelope whose salt was already used to derive ``key``.

    The tag is checked before any plaintext is released; a mismatch on any
    field (or on the AAD) raises :class:`AuthenticationError`.
    """
    env = unpack(raw)
    aead = AESGCM(key)
    try:
        return aead.decrypt(env.nonce, env.ciphertext + env.tag, aad)
    except InvalidTag as e:
        raise AuthenticationError(AUTH_FAILED) from e
