"""
AES Counter Mode (CTR)

Counter-mode wrapper around the AES block cipher, following NIST SP 800-38A
§6.5, plus a password-based text interface.

    Oⱼ = CIPHₖ(Tⱼ)        for j = 1 … n
    Cⱼ = Pⱼ ⊕ Oⱼ          for j = 1 … n-1
    C*ₙ = P*ₙ ⊕ MSBᵤ(Oₙ)  final (possibly partial) block

Text format:
    base64( nonce (8) | ciphertext )

The counter block is the 8-byte nonce followed by an 8-byte big-endian
block counter starting at zero.

Security Note:
    The key is derived by AES-encrypting the password with itself, not with
    a proper KDF, and the nonce is only partly random. This is a reference
    implementation for learning purposes only.
"""

import base64
import logging
import secrets
import time
from typing import Optional

from .aes import BLOCK_SIZE, cipher, key_expansion


logger = logging.getLogger(__name__)

NONCE_SIZE = 8
KEY_SIZES = (128, 192, 256)


def _increment_counter(counter_block: bytearray) -> None:
    """Increment the big-endian counter held in the second half of the block."""
    for i in range(BLOCK_SIZE - 1, NONCE_SIZE - 1, -1):
        counter_block[i] = (counter_block[i] + 1) & 0xff
        if counter_block[i] != 0:
            break


def nist_encryption(data: bytes, key: bytes, counter_block: bytes) -> bytes:
    """
    Encrypt (or decrypt) data with AES in counter mode.

    Args:
        data: Plaintext or ciphertext bytes
        key: 16, 24 or 32-byte AES key
        counter_block: Initial 16-byte counter block (nonce and counter)

    Returns:
        Output bytes, same length as data

    Raises:
        ValueError: If the key or counter block has the wrong length
    """
    if len(counter_block) != BLOCK_SIZE:
        raise ValueError(f"Counter block must be {BLOCK_SIZE} bytes, got {len(counter_block)}")

    schedule = key_expansion(key)
    counter = bytearray(counter_block)
    output = bytearray(len(data))

    for offset in range(0, len(data), BLOCK_SIZE):
        keystream = cipher(counter, schedule)
        chunk = data[offset:offset + BLOCK_SIZE]
        for i, byte in enumerate(chunk):
            output[offset + i] = byte ^ keystream[i]
        _increment_counter(counter)

    return bytes(output)


# CTR decryption is the same keystream XOR
nist_decryption = nist_encryption


def _check_key_size(n_bits: int) -> None:
    if n_bits not in KEY_SIZES:
        raise ValueError("Key size is not 128 / 192 / 256")


def derive_key(password: str, n_bits: int) -> bytes:
    """
    Derive an AES key from a password.

    The first n_bits/8 UTF-8 bytes of the password (zero padded) are used as
    both key and plaintext for one AES block; the 16-byte result is extended
    to n_bits/8 bytes by repeating its leading bytes.
    """
    _check_key_size(n_bits)
    n_bytes = n_bits // 8
    pw_bytes = str(password).encode('utf-8')[:n_bytes].ljust(n_bytes, b'\x00')
    key = cipher(pw_bytes[:BLOCK_SIZE], key_expansion(pw_bytes))
    return key + key[:n_bytes - BLOCK_SIZE]


def generate_nonce() -> bytes:
    """
    Build an 8-byte nonce: milliseconds (2), random (2), seconds (4).

    All fields are little-endian; together they give sub-millisecond
    uniqueness until the seconds field wraps in 2106.
    """
    timestamp = int(time.time() * 1000)
    nonce_ms = timestamp % 1000
    nonce_sec = (timestamp // 1000) & 0xFFFFFFFF
    nonce_rnd = secrets.randbelow(0xFFFF)
    return (
        nonce_ms.to_bytes(2, byteorder='little')
        + nonce_rnd.to_bytes(2, byteorder='little')
        + nonce_sec.to_bytes(4, byteorder='little')
    )


def encrypt(plaintext: str, password: str, n_bits: int, nonce: Optional[bytes] = None) -> str:
    """
    Encrypt text with AES in counter mode.

    Args:
        plaintext: Text to be encrypted (any Unicode)
        password: Password used to derive the key
        n_bits: Key size; 128, 192 or 256
        nonce: Optional 8-byte nonce (generated when omitted)

    Returns:
        Base64 text of nonce followed by ciphertext

    Raises:
        ValueError: If n_bits or nonce is invalid

    Example:
        >>> ct = encrypt('big secret', 'pāşšŵōřđ', 256)
        >>> decrypt(ct, 'pāşšŵōřđ', 256)
        'big secret'
    """
    _check_key_size(n_bits)
    if nonce is None:
        nonce = generate_nonce()
    elif len(nonce) != NONCE_SIZE:
        raise ValueError(f"Nonce must be {NONCE_SIZE} bytes, got {len(nonce)}")

    key = derive_key(password, n_bits)
    data = str(plaintext).encode('utf-8')
    ciphertext = nist_encryption(data, key, nonce + bytes(BLOCK_SIZE - NONCE_SIZE))

    logger.debug("AES-%d-CTR: encrypted %d bytes", n_bits, len(data))
    return base64.b64encode(nonce + ciphertext).decode('ascii')


def decrypt(ciphertext: str, password: str, n_bits: int) -> str:
    """
    Decrypt text produced by encrypt().

    Args:
        ciphertext: Base64 text (nonce followed by ciphertext)
        password: Password used to derive the key
        n_bits: Key size; 128, 192 or 256

    Returns:
        Decrypted text

    Raises:
        ValueError: If n_bits is invalid, the input is not base64, is too
            short to hold a nonce, or does not decrypt to valid UTF-8
    """
    _check_key_size(n_bits)
    raw = base64.b64decode(ciphertext, validate=True)
    if len(raw) < NONCE_SIZE:
        raise ValueError(f"Ciphertext too short: expected at least {NONCE_SIZE} bytes")

    key = derive_key(password, n_bits)
    counter_block = raw[:NONCE_SIZE] + bytes(BLOCK_SIZE - NONCE_SIZE)
    plaintext = nist_decryption(raw[NONCE_SIZE:], key, counter_block)

    logger.debug("AES-%d-CTR: decrypted %d bytes", n_bits, len(plaintext))
    return plaintext.decode('utf-8')
