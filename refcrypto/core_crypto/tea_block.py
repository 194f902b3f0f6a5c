"""
Block TEA (XXTEA) Cipher

Corrected Block TEA by David Wheeler & Roger Needham (1998), operating on
whole messages as a vector of 32-bit words under a 128-bit key.

Components:
- encode / decode: the XXTEA rounds on lists of 32-bit words
- bytes <-> little-endian word conversion
- encrypt / decrypt: password-based text interface with base64 output

Security Note:
    XXTEA has published related-key and chosen-plaintext attacks, and the
    password is used directly as the key. For learning purposes only.
"""

import base64
import logging
from typing import List, Sequence


logger = logging.getLogger(__name__)

DELTA = 0x9E3779B9
MASK_32 = 0xFFFFFFFF
KEY_SIZE = 16  # bytes (4 words)


def _mx(z: int, y: int, total: int, p: int, e: int, k: Sequence[int]) -> int:
    return (
        ((((z >> 5) ^ (y << 2)) + ((y >> 3) ^ (z << 4)))
         ^ ((total ^ y) + (k[(p & 3) ^ e] ^ z)))
        & MASK_32
    )


def encode(v: Sequence[int], k: Sequence[int]) -> List[int]:
    """
    XXTEA: encode a vector of unsigned 32-bit integers with a 128-bit key.

    The algorithm needs at least two words, so shorter vectors are
    extended with zero words first.

    Args:
        v: Data vector
        k: Key as 4 words

    Returns:
        Encoded vector (a new list)
    """
    v = list(v)
    if len(v) < 2:
        v.extend([0] * (2 - len(v)))
    n = len(v)

    # 6 + 52/n cycles gives between 6 and 32 mixes of each word
    q = 6 + 52 // n
    z = v[n - 1]
    total = 0

    for _ in range(q):
        total = (total + DELTA) & MASK_32
        e = (total >> 2) & 3
        for p in range(n):
            y = v[(p + 1) % n]
            v[p] = (v[p] + _mx(z, y, total, p, e, k)) & MASK_32
            z = v[p]

    return v


def decode(v: Sequence[int], k: Sequence[int]) -> List[int]:
    """
    XXTEA: decode a vector of unsigned 32-bit integers with a 128-bit key.

    Raises:
        ValueError: If v has fewer than two words
    """
    v = list(v)
    n = len(v)
    if n < 2:
        raise ValueError(f"XXTEA needs at least 2 words, got {n}")

    q = 6 + 52 // n
    y = v[0]
    total = (q * DELTA) & MASK_32

    for _ in range(q):
        e = (total >> 2) & 3
        for p in range(n - 1, -1, -1):
            z = v[p - 1] if p > 0 else v[n - 1]
            v[p] = (v[p] - _mx(z, y, total, p, e, k)) & MASK_32
            y = v[p]
        total = (total - DELTA) & MASK_32

    return v


def bytes_to_longs(data: bytes) -> List[int]:
    """Convert bytes to little-endian 32-bit words, zero-filling the last word."""
    padded = data.ljust(-(-len(data) // 4) * 4, b'\x00')
    return [int.from_bytes(padded[i:i + 4], byteorder='little') for i in range(0, len(padded), 4)]


def longs_to_bytes(longs: Sequence[int]) -> bytes:
    """Convert 32-bit words back to bytes (little-endian)."""
    return b''.join(word.to_bytes(4, byteorder='little') for word in longs)


def password_to_key(password: str) -> List[int]:
    """Use the first 16 UTF-8 bytes of the password (zero padded) as the key."""
    key_bytes = str(password).encode('utf-8')[:KEY_SIZE].ljust(KEY_SIZE, b'\x00')
    return bytes_to_longs(key_bytes)


def encrypt(plaintext: str, password: str) -> str:
    """
    Encrypt text using Corrected Block TEA (XXTEA).

    Args:
        plaintext: Text to be encrypted (any Unicode)
        password: Password, first 16 UTF-8 bytes used as key

    Returns:
        Ciphertext as base64 text ('' for empty plaintext)
    """
    plaintext = str(plaintext)
    if not plaintext:
        return ''

    v = bytes_to_longs(plaintext.encode('utf-8'))
    ciphertext = longs_to_bytes(encode(v, password_to_key(password)))

    logger.debug("XXTEA: encrypted %d words", len(v))
    return base64.b64encode(ciphertext).decode('ascii')


def decrypt(ciphertext: str, password: str) -> str:
    """
    Decrypt text produced by encrypt().

    Trailing NUL bytes left over from word alignment are stripped.

    Raises:
        ValueError: If the ciphertext is not base64, is not a whole number
            of words (at least two), or does not decrypt to valid UTF-8
    """
    ciphertext = str(ciphertext)
    if not ciphertext:
        return ''

    raw = base64.b64decode(ciphertext, validate=True)
    if len(raw) % 4 != 0 or len(raw) < 8:
        raise ValueError(f"Ciphertext must be a whole number of words (>= 2), got {len(raw)} bytes")

    v = decode(bytes_to_longs(raw), password_to_key(password))
    plaintext = longs_to_bytes(v).rstrip(b'\x00')

    logger.debug("XXTEA: decrypted %d words", len(v))
    return plaintext.decode('utf-8')
