"""Thin wrappers over the block cipher and MAC primitives.

AES-128-CBC and PKCS7 come from ``cryptography``; HMAC-SHA256 and the
constant-time comparison come from the standard library.
"""

import hashlib
import hmac

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from fernet_codec.constants import BLOCK_BYTES

_BLOCK_BITS = BLOCK_BYTES * 8


def pad(data: bytes) -> bytes:
    """Apply PKCS7 padding to a whole number of blocks.

    Empty input still yields one full block of padding.
    """
    padder = padding.PKCS7(_BLOCK_BITS).padder()
    return padder.update(data) + padder.finalize()


def unpad(data: bytes) -> bytes:
    """Strip PKCS7 padding.

    Raises:
        ValueError: If the pad length is 0, exceeds a block, or the pad
            bytes are inconsistent.
    """
    if not data or not 1 <= data[-1] <= BLOCK_BYTES:
        raise ValueError("Invalid padding bytes.")
    unpadder = padding.PKCS7(_BLOCK_BITS).unpadder()
    return unpadder.update(data) + unpadder.finalize()


def aes_cbc_encrypt(key: bytes, iv: bytes, plaintext: bytes) -> bytes:
    """Pad and encrypt *plaintext* with AES in CBC mode."""
    encryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).encryptor()
    return encryptor.update(pad(plaintext)) + encryptor.finalize()


def aes_cbc_decrypt(key: bytes, iv: bytes, cipher_text: bytes) -> bytes:
    """Decrypt *cipher_text* with AES in CBC mode, leaving the padding in place.

    Raises:
        ValueError: If the cipher text is not block aligned or the key/IV
            are rejected by the cipher.
    """
    decryptor = Cipher(algorithms.AES(key), modes.CBC(iv)).decryptor()
    return decryptor.update(cipher_text) + decryptor.finalize()


def hmac_sha256(key: bytes, message: bytes) -> bytes:
    """Return the 32-byte HMAC-SHA256 tag of *message*."""
    return hmac.new(key, message, hashlib.sha256).digest()


def constant_time_equals(a: bytes, b: bytes) -> bool:
    """Compare two byte strings without leaking the first differing index."""
    return hmac.compare_digest(a, b)
