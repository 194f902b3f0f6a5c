"""
SHA-512 Hash Implementation (From Scratch)

Implements the SHA-512 hash function as defined in FIPS 180-4 §6.4.

SHA-512 is the 64-bit sibling of SHA-256: same structure, but 1024-bit
blocks, 80 rounds, a 128-bit length field and different rotation amounts.
Words are native Python ints masked to 64 bits.
"""

import logging
from typing import List, Union

from .formats import OptionsLike, encode_message, format_digest, resolve_options


logger = logging.getLogger(__name__)

BLOCK_SIZE = 128  # bytes (1024 bits)
WORD_SIZE = 8     # bytes (64 bits)

# Initial hash value [§5.3.5]
H_INITIAL = [
    0x6a09e667f3bcc908, 0xbb67ae8584caa73b, 0x3c6ef372fe94f82b, 0xa54ff53a5f1d36f1,
    0x510e527fade682d1, 0x9b05688c2b3e6c1f, 0x1f83d9abfb41bd6b, 0x5be0cd19137e2179,
]

# Constants [§4.2.3]: first 64 bits of fractional parts of cube roots of first 80 primes
K = [
    0x428a2f98d728ae22, 0x7137449123ef65cd, 0xb5c0fbcfec4d3b2f, 0xe9b5dba58189dbbc,
    0x3956c25bf348b538, 0x59f111f1b605d019, 0x923f82a4af194f9b, 0xab1c5ed5da6d8118,
    0xd807aa98a3030242, 0x12835b0145706fbe, 0x243185be4ee4b28c, 0x550c7dc3d5ffb4e2,
    0x72be5d74f27b896f, 0x80deb1fe3b1696b1, 0x9bdc06a725c71235, 0xc19bf174cf692694,
    0xe49b69c19ef14ad2, 0xefbe4786384f25e3, 0x0fc19dc68b8cd5b5, 0x240ca1cc77ac9c65,
    0x2de92c6f592b0275, 0x4a7484aa6ea6e483, 0x5cb0a9dcbd41fbd4, 0x76f988da831153b5,
    0x983e5152ee66dfab, 0xa831c66d2db43210, 0xb00327c898fb213f, 0xbf597fc7beef0ee4,
    0xc6e00bf33da88fc2, 0xd5a79147930aa725, 0x06ca6351e003826f, 0x142929670a0e6e70,
    0x27b70a8546d22ffc, 0x2e1b21385c26c926, 0x4d2c6dfc5ac42aed, 0x53380d139d95b3df,
    0x650a73548baf63de, 0x766a0abb3c77b2a8, 0x81c2c92e47edaee6, 0x92722c851482353b,
    0xa2bfe8a14cf10364, 0xa81a664bbc423001, 0xc24b8b70d0f89791, 0xc76c51a30654be30,
    0xd192e819d6ef5218, 0xd69906245565a910, 0xf40e35855771202a, 0x106aa07032bbd1b8,
    0x19a4c116b8d2d0c8, 0x1e376c085141ab53, 0x2748774cdf8eeb99, 0x34b0bcb5e19b48a8,
    0x391c0cb3c5c95a63, 0x4ed8aa4ae3418acb, 0x5b9cca4f7763e373, 0x682e6ff3d6b2b8a3,
    0x748f82ee5defb2fc, 0x78a5636f43172f60, 0x84c87814a1f0ab72, 0x8cc702081a6439ec,
    0x90befffa23631e28, 0xa4506cebde82bde9, 0xbef9a3f7b2c67915, 0xc67178f2e372532b,
    0xca273eceea26619c, 0xd186b8c721c0c207, 0xeada7dd6cde0eb1e, 0xf57d4f7fee6ed178,
    0x06f067aa72176fba, 0x0a637dc5a2c898a6, 0x113f9804bef90dae, 0x1b710b35131c471b,
    0x28db77f523047d84, 0x32caab7b40c72493, 0x3c9ebe0a15c9bebc, 0x431d67c49c100d4c,
    0x4cc5d4becb3e42b6, 0x597f299cfc657e2a, 0x5fcb6fab3ad6faec, 0x6c44198c4a475817,
]

MASK_64 = 0xFFFFFFFFFFFFFFFF


def _rotr(x: int, n: int) -> int:
    """Rotate right a 64-bit word [§3.2.4]."""
    return ((x >> n) | (x << (64 - n))) & MASK_64


# Logical functions [§4.1.3]
def _big_sigma0(x: int) -> int:
    return _rotr(x, 28) ^ _rotr(x, 34) ^ _rotr(x, 39)


def _big_sigma1(x: int) -> int:
    return _rotr(x, 14) ^ _rotr(x, 18) ^ _rotr(x, 41)


def _sigma0(x: int) -> int:
    return _rotr(x, 1) ^ _rotr(x, 8) ^ (x >> 7)


def _sigma1(x: int) -> int:
    return _rotr(x, 19) ^ _rotr(x, 61) ^ (x >> 6)


def _ch(x: int, y: int, z: int) -> int:
    return (x & y) ^ (~x & z & MASK_64)


def _maj(x: int, y: int, z: int) -> int:
    return (x & y) ^ (x & z) ^ (y & z)


def _pad_message(data: bytes) -> bytes:
    """
    Pad the message [§5.1.2].

    Appends 0x80, zeros until length ≡ 112 (mod 128), then the message
    length in bits as a 128-bit big-endian integer.
    """
    bit_length = len(data) * 8
    padding_length = (111 - len(data)) % BLOCK_SIZE
    return data + b'\x80' + b'\x00' * padding_length + bit_length.to_bytes(16, byteorder='big')


def _compress(state: List[int], chunk: bytes) -> List[int]:
    """Process one 1024-bit block [§6.4.2]."""
    w = [int.from_bytes(chunk[i:i + WORD_SIZE], byteorder='big') for i in range(0, BLOCK_SIZE, WORD_SIZE)]
    for t in range(16, 80):
        w.append((_sigma1(w[t - 2]) + w[t - 7] + _sigma0(w[t - 15]) + w[t - 16]) & MASK_64)

    a, b, c, d, e, f, g, h = state
    for t in range(80):
        t1 = (h + _big_sigma1(e) + _ch(e, f, g) + K[t] + w[t]) & MASK_64
        t2 = (_big_sigma0(a) + _maj(a, b, c)) & MASK_64
        h = g
        g = f
        f = e
        e = (d + t1) & MASK_64
        d = c
        c = b
        b = a
        a = (t1 + t2) & MASK_64

    return [(s + v) & MASK_64 for s, v in zip(state, (a, b, c, d, e, f, g, h))]


def sha512(data: bytes) -> bytes:
    """
    Compute the SHA-512 hash of the input data.

    Returns:
        512-bit (64-byte) digest as bytes
    """
    padded = _pad_message(data)

    state = H_INITIAL.copy()
    for i in range(0, len(padded), BLOCK_SIZE):
        state = _compress(state, padded[i:i + BLOCK_SIZE])

    logger.debug("SHA-512: %d message bytes, %d blocks", len(data), len(padded) // BLOCK_SIZE)
    return b''.join(word.to_bytes(WORD_SIZE, byteorder='big') for word in state)


def sha512_hex(data: bytes) -> str:
    """Compute SHA-512 hash and return as 128-character hexadecimal string."""
    return sha512(data).hex()


def hash(message: Union[str, bytes], options: OptionsLike = None) -> str:
    """
    Generate the SHA-512 hash of a message.

    Args:
        message: Text (UTF-8 encoded), hex text, or bytes
        options: msgFormat 'string' / 'hex-bytes'; outFormat 'hex' / 'hex-b' / 'hex-w'

    Returns:
        Hash as hex string; 'hex-w' groups it into 64-bit words
    """
    opts = resolve_options(options)
    return format_digest(sha512(encode_message(message, opts.msg_format)), opts.out_format, WORD_SIZE)
