"""
Unit tests for AES-256-GCM seal/open.
"""

import pytest
from cryptography.hazmat.primitives.ciphers.aead import AESGCM
from sealbox.core.exceptions import AuthenticationError
from sealbox.security.aead import open_envelope, seal
from sealbox.security.envelope import unpack


# ==============================================================================
# Fixtures
# ==============================================================================

@pytest.fixture
def key():
    return b"k" * 32


@pytest.fixture
def salt():
    return b"s" * 64


@pytest.fixture
def nonce():
    return b"n" * 12


# ==============================================================================
# Tests: Seal
# ==============================================================================

def test_seal_layout_and_length(key, salt, nonce):
    """Ciphertext is as long as the plaintext; header is 92 bytes."""
    raw = seal(b"hello world", key, nonce, salt)
    assert len(raw) == 92 + len(b"hello world")

    env = unpack(raw)
    assert env.salt == salt
    assert env.nonce == nonce
    assert len(env.tag) == 16


def test_seal_matches_library_output(key, salt, nonce):
    """Tag is moved in front of the ciphertext, nothing else changes."""
    expected = AESGCM(key).encrypt(nonce, b"data", b"ctx")
    raw = seal(b"data", key, nonce, salt, b"ctx")
    env = unpack(raw)
    assert env.ciphertext + env.tag == expected


def test_seal_is_deterministic_for_fixed_inputs(key, salt, nonce):
    assert seal(b"abc", key, nonce, salt) == seal(b"abc", key, nonce, salt)


# ==============================================================================
# Tests: Open
# ==============================================================================

def test_open_roundtrip(key, salt, nonce):
    raw = seal(b"secret", key, nonce, salt)
    assert open_envelope(raw, key) == b"secret"


def test_open_roundtrip_with_aad(key, salt, nonce):
    raw = seal(b"secret", key, nonce, salt, b"ctx1")
    assert open_envelope(raw, key, b"ctx1") == b"secret"


def test_open_empty_plaintext(key, salt, nonce):
    raw = seal(b"", key, nonce, salt)
    assert len(raw) == 92
    assert open_envelope(raw, key) == b""


def test_open_wrong_aad(key, salt, nonce):
    raw = seal(b"secret", key, nonce, salt, b"ctx1")
    with pytest.raises(AuthenticationError, match="unable to authenticate data"):
        open_envelope(raw, key, b"ctx2")


def test_open_missing_aad(key, salt, nonce):
    raw = seal(b"secret", key, nonce, salt, b"ctx1")
    with pytest.raises(AuthenticationError):
        open_envelope(raw, key)


def test_open_wrong_key(key, salt, nonce):
    raw = seal(b"secret", key, nonce, salt)
    with pytest.raises(AuthenticationError):
        open_envelope(raw, b"x" * 32)


@pytest.mark.parametrize("index", [64, 70, 75, 76, 85, 91, 92, 97])
def test_open_detects_flipped_byte(key, salt, nonce, index):
    """Flips in nonce, tag or ciphertext all fail the same way."""
    raw = bytearray(seal(b"some secret", key, nonce, salt))
    raw[index] ^= 0x01
    with pytest.raises(AuthenticationError, match="unable to authenticate data"):
        open_envelope(bytes(raw), key)


def test_open_truncated(key, salt, nonce):
    raw = seal(b"secret", key, nonce, salt)
    with pytest.raises(AuthenticationError):
        open_envelope(raw[:-1], key)
    with pytest.raises(AuthenticationError):
        open_envelope(raw[:50], key)


def test_open_chains_invalid_tag(key, salt, nonce):
    from cryptography.exceptions import InvalidTag

    raw = seal(b"secret", key, nonce, salt, b"a")
    with pytest.raises(AuthenticationError) as exc_info:
        open_envelope(raw, key, b"b")
    assert isinstance(exc_info.value.__cause__, InvalidTag)
