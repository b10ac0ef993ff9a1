"""PBKDF2-HMAC-SHA512 key derivation with fixed, non-tunable parameters."""

import asyncio
import os
from typing import Dict

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC


SALT_LENGTH = 64
NONCE_LENGTH = 12
KEY_LENGTH = 32
ITERATIONS = 10000


def generate_salt() -> bytes:
    """Return a cryptographically secure random salt."""
    return os.urandom(SALT_LENGTH)


def generate_nonce() -> bytes:
    """Return a fresh 96-bit GCM nonce."""
    return os.urandom(NONCE_LENGTH)


def derive_key(passphrase: bytes | str, salt: bytes) -> bytes:
    """
    Derive a 32-byte key from a passphrase and salt using PBKDF2-HMAC-SHA512.
    Runs on the caller's thread; use :func:`derive_key_async` from event loops.
    """
    if isinstance(passphrase, str):
        passphrase = passphrase.encode("utf-8")

    kdf = PBKDF2HMAC(
        algorithm=hashes.SHA512(),
        length=KEY_LENGTH,
        salt=salt,
        iterations=ITERATIONS,
    )
    return kdf.derive(bytes(passphrase))


async def derive_key_async(passphrase: bytes | str, salt: bytes) -> bytes:
    """Run :func:`derive_key` in a worker thread and await the result."""
    return await asyncio.to_thread(derive_key, passphrase, salt)


def kdf_params_to_dict() -> Dict:
    return {
        "algo": "pbkdf2-sha512",
        "iterations": ITERATIONS,
        "key_len": KEY_LENGTH,
        "salt_len": SALT_LENGTH,
    }
