"""
SHA-1 Hash Implementation (From Scratch)

Implements the SHA-1 hash function as defined in FIPS 180-4 §6.1.

SHA-1 is broken for collision resistance and is included as a reference
implementation only.
"""

import logging
from typing import List, Union

from .formats import OptionsLike, encode_message, format_digest, resolve_options


logger = logging.getLogger(__name__)

BLOCK_SIZE = 64
WORD_SIZE = 4

# Initial hash value [§5.3.1]
H_INITIAL = [0x67452301, 0xefcdab89, 0x98badcfe, 0x10325476, 0xc3d2e1f0]

# Constants [§4.2.1], one per 20-round stage
K = [0x5a827999, 0x6ed9eba1, 0x8f1bbcdc, 0xca62c1d6]

MASK_32 = 0xFFFFFFFF


def _left_rotate(value: int, amount: int) -> int:
    return ((value << amount) | (value >> (32 - amount))) & MASK_32


def _f(stage: int, x: int, y: int, z: int) -> int:
    """Logical function for the given 20-round stage [§4.1.1]."""
    if stage == 0:
        return (x & y) ^ (~x & z & MASK_32)     # Ch()
    if stage == 2:
        return (x & y) ^ (x & z) ^ (y & z)      # Maj()
    return x ^ y ^ z                            # Parity()


def _pad_message(data: bytes) -> bytes:
    """Append 0x80, zeros and the 64-bit big-endian bit length."""
    bit_length = len(data) * 8
    padding_length = (55 - len(data)) % BLOCK_SIZE
    return data + b'\x80' + b'\x00' * padding_length + bit_length.to_bytes(8, byteorder='big')


def _compress(state: List[int], chunk: bytes) -> List[int]:
    w = [int.from_bytes(chunk[i:i + WORD_SIZE], byteorder='big') for i in range(0, BLOCK_SIZE, WORD_SIZE)]
    for t in range(16, 80):
        w.append(_left_rotate(w[t - 3] ^ w[t - 8] ^ w[t - 14] ^ w[t - 16], 1))

    a, b, c, d, e = state
    for t in range(80):
        stage = t // 20
        temp = (_left_rotate(a, 5) + _f(stage, b, c, d) + e + K[stage] + w[t]) & MASK_32
        e = d
        d = c
        c = _left_rotate(b, 30)
        b = a
        a = temp

    return [(s + v) & MASK_32 for s, v in zip(state, (a, b, c, d, e))]


def sha1(data: bytes) -> bytes:
    """
    Compute the SHA-1 hash of the input data.

    Returns:
        160-bit (20-byte) digest as bytes
    """
    padded = _pad_message(data)

    state = H_INITIAL.copy()
    for i in range(0, len(padded), BLOCK_SIZE):
        state = _compress(state, padded[i:i + BLOCK_SIZE])

    logger.debug("SHA-1: %d message bytes, %d blocks", len(data), len(padded) // BLOCK_SIZE)
    return b''.join(word.to_bytes(WORD_SIZE, byteorder='big') for word in state)


def sha1_hex(data: bytes) -> str:
    """Compute SHA-1 hash and return as 40-character hexadecimal string."""
    return sha1(data).hex()


def hash(message: Union[str, bytes], options: OptionsLike = None) -> str:
    """
    Generate the SHA-1 hash of a message.

    Args:
        message: Text (UTF-8 encoded), hex text, or bytes
        options: msgFormat 'string' / 'hex-bytes'; outFormat 'hex' / 'hex-b' / 'hex-w'

    Returns:
        Hash as hex string

    Example:
        >>> hash('abc', {'outFormat': 'hex-w'})
        'a9993e36 4706816a ba3e2571 7850c26c 9cd0d89d'
    """
    opts = resolve_options(options)
    return format_digest(sha1(encode_message(message, opts.msg_format)), opts.out_format, WORD_SIZE)
