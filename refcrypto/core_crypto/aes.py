"""
AES (Rijndael) Block Cipher

Implements the AES forward cipher and key expansion as defined in FIPS 197
for 128, 192 and 256-bit keys.

Components:
- S-box (Rijndael substitution box)
- RotWord / SubWord / Rcon for the key schedule
- Key expansion algorithm for Nk = 4, 6 or 8 key words
- Cipher: SubBytes, ShiftRows, MixColumns, AddRoundKey

Only the forward cipher is implemented; counter mode (see aes_ctr) never
needs the inverse cipher.
"""

import logging
from typing import List, Sequence


logger = logging.getLogger(__name__)

BLOCK_SIZE = 16  # bytes (Nb = 4 words)
NB = 4

# Rijndael S-box (Substitution box)
S_BOX = [
    0x63, 0x7c, 0x77, 0x7b, 0xf2, 0x6b, 0x6f, 0xc5, 0x30, 0x01, 0x67, 0x2b, 0xfe, 0xd7, 0xab, 0x76,
    0xca, 0x82, 0xc9, 0x7d, 0xfa, 0x59, 0x47, 0xf0, 0xad, 0xd4, 0xa2, 0xaf, 0x9c, 0xa4, 0x72, 0xc0,
    0xb7, 0xfd, 0x93, 0x26, 0x36, 0x3f, 0xf7, 0xcc, 0x34, 0xa5, 0xe5, 0xf1, 0x71, 0xd8, 0x31, 0x15,
    0x04, 0xc7, 0x23, 0xc3, 0x18, 0x96, 0x05, 0x9a, 0x07, 0x12, 0x80, 0xe2, 0xeb, 0x27, 0xb2, 0x75,
    0x09, 0x83, 0x2c, 0x1a, 0x1b, 0x6e, 0x5a, 0xa0, 0x52, 0x3b, 0xd6, 0xb3, 0x29, 0xe3, 0x2f, 0x84,
    0x53, 0xd1, 0x00, 0xed, 0x20, 0xfc, 0xb1, 0x5b, 0x6a, 0xcb, 0xbe, 0x39, 0x4a, 0x4c, 0x58, 0xcf,
    0xd0, 0xef, 0xaa, 0xfb, 0x43, 0x4d, 0x33, 0x85, 0x45, 0xf9, 0x02, 0x7f, 0x50, 0x3c, 0x9f, 0xa8,
    0x51, 0xa3, 0x40, 0x8f, 0x92, 0x9d, 0x38, 0xf5, 0xbc, 0xb6, 0xda, 0x21, 0x10, 0xff, 0xf3, 0xd2,
    0xcd, 0x0c, 0x13, 0xec, 0x5f, 0x97, 0x44, 0x17, 0xc4, 0xa7, 0x7e, 0x3d, 0x64, 0x5d, 0x19, 0x73,
    0x60, 0x81, 0x4f, 0xdc, 0x22, 0x2a, 0x90, 0x88, 0x46, 0xee, 0xb8, 0x14, 0xde, 0x5e, 0x0b, 0xdb,
    0xe0, 0x32, 0x3a, 0x0a, 0x49, 0x06, 0x24, 0x5c, 0xc2, 0xd3, 0xac, 0x62, 0x91, 0x95, 0xe4, 0x79,
    0xe7, 0xc8, 0x37, 0x6d, 0x8d, 0xd5, 0x4e, 0xa9, 0x6c, 0x56, 0xf4, 0xea, 0x65, 0x7a, 0xae, 0x08,
    0xba, 0x78, 0x25, 0x2e, 0x1c, 0xa6, 0xb4, 0xc6, 0xe8, 0xdd, 0x74, 0x1f, 0x4b, 0xbd, 0x8b, 0x8a,
    0x70, 0x3e, 0xb5, 0x66, 0x48, 0x03, 0xf6, 0x0e, 0x61, 0x35, 0x57, 0xb9, 0x86, 0xc1, 0x1d, 0x9e,
    0xe1, 0xf8, 0x98, 0x11, 0x69, 0xd9, 0x8e, 0x94, 0x9b, 0x1e, 0x87, 0xe9, 0xce, 0x55, 0x28, 0xdf,
    0x8c, 0xa1, 0x89, 0x0d, 0xbf, 0xe6, 0x42, 0x68, 0x41, 0x99, 0x2d, 0x0f, 0xb0, 0x54, 0xbb, 0x16,
]

# Round constants (Rcon) for key expansion
# Rcon[i] = [rc[i], 0, 0, 0] where rc[i] = 2^(i-1) in GF(2^8)
# AES-128 needs up to Rcon[10]; AES-256 only up to Rcon[7]
RCON = [
    0x00,  # Not used (index 0)
    0x01, 0x02, 0x04, 0x08, 0x10, 0x20, 0x40, 0x80, 0x1b, 0x36,
]

# Key length in bytes -> number of rounds Nr
ROUNDS_BY_KEY_SIZE = {16: 10, 24: 12, 32: 14}


# ============================================================================
# Key schedule
# ============================================================================

def sub_word(word: List[int]) -> List[int]:
    """Apply S-box substitution to each byte in a 4-byte word."""
    return [S_BOX[b] for b in word]


def rot_word(word: List[int]) -> List[int]:
    """
    Rotate a 4-byte word left by one byte.
    [a, b, c, d] -> [b, c, d, a]
    """
    return word[1:] + word[:1]


def xor_words(word1: List[int], word2: List[int]) -> List[int]:
    """XOR two 4-byte words together."""
    return [a ^ b for a, b in zip(word1, word2)]


def key_expansion(key: Sequence[int]) -> List[List[int]]:
    """
    Perform AES key expansion (Rijndael key schedule).

    Expands a 16/24/32-byte key into Nb × (Nr + 1) words: 44, 52 or 60
    words for AES-128/192/256.

    Args:
        key: Cipher key as bytes or list of ints

    Returns:
        Key schedule as a list of 4-byte words

    Raises:
        ValueError: If key is not 16, 24 or 32 bytes

    Example:
        >>> w = key_expansion(bytes(range(16)))
        >>> len(w)
        44
    """
    if len(key) not in ROUNDS_BY_KEY_SIZE:
        raise ValueError(f"AES key must be 16, 24 or 32 bytes, got {len(key)} bytes")

    nk = len(key) // 4
    nr = ROUNDS_BY_KEY_SIZE[len(key)]
    total_words = NB * (nr + 1)

    w = [list(key[4 * i:4 * i + 4]) for i in range(nk)]

    for i in range(nk, total_words):
        temp = w[i - 1].copy()

        if i % nk == 0:
            # Every Nk words: RotWord + SubWord + Rcon (first byte only)
            temp = sub_word(rot_word(temp))
            temp[0] ^= RCON[i // nk]
        elif nk > 6 and i % nk == 4:
            # AES-256 specific: extra SubWord at position 4
            temp = sub_word(temp)

        w.append(xor_words(w[i - nk], temp))

    return w


class KeySchedule:
    """
    Class-based interface for AES key expansion.

    Example:
        >>> schedule = KeySchedule(bytes(range(32)))
        >>> schedule.num_rounds
        14
        >>> schedule.get_round_key(14).hex()
        '24fc79ccbf0979e9371ac23c6d68de36'
    """

    def __init__(self, key: bytes):
        self._key = bytes(key)
        self._words = key_expansion(self._key)
        self._round_keys = [
            bytes(b for word in self._words[i:i + NB] for b in word)
            for i in range(0, len(self._words), NB)
        ]

    @property
    def key(self) -> bytes:
        """Original cipher key."""
        return self._key

    @property
    def words(self) -> List[List[int]]:
        """Key schedule as 4-byte words, as consumed by cipher()."""
        return [word.copy() for word in self._words]

    @property
    def round_keys(self) -> List[bytes]:
        """List of Nr + 1 round keys (16 bytes each)."""
        return self._round_keys.copy()

    @property
    def num_rounds(self) -> int:
        """Number of AES rounds (10, 12 or 14)."""
        return ROUNDS_BY_KEY_SIZE[len(self._key)]

    def get_round_key(self, round_num: int) -> bytes:
        """Get the 16-byte round key for round 0..Nr."""
        if round_num < 0 or round_num > self.num_rounds:
            raise ValueError(f"Round number must be 0-{self.num_rounds}, got {round_num}")
        return self._round_keys[round_num]

    def encrypt_block(self, block: bytes) -> bytes:
        """Encrypt one 16-byte block with this schedule."""
        return cipher(block, self._words)

    def __repr__(self) -> str:
        return f"KeySchedule(key={self._key[:8].hex()}..., rounds={self.num_rounds})"


# ============================================================================
# Cipher
# ============================================================================

def _xtime(b: int) -> int:
    """Multiply by x (i.e. {02}) in GF(2^8)."""
    b <<= 1
    return (b ^ 0x1b) & 0xff if b & 0x100 else b


def _sub_bytes(state: List[List[int]]) -> None:
    for r in range(4):
        state[r] = [S_BOX[b] for b in state[r]]


def _shift_rows(state: List[List[int]]) -> None:
    # row r is shifted left by r bytes
    for r in range(1, 4):
        state[r] = state[r][r:] + state[r][:r]


def _mix_columns(state: List[List[int]]) -> None:
    for c in range(NB):
        a = [state[r][c] for r in range(4)]
        b = [_xtime(x) for x in a]
        # b[i] is a[i]·{02}; a[i]·{03} is b[i] ^ a[i]
        state[0][c] = b[0] ^ b[1] ^ a[1] ^ a[2] ^ a[3]
        state[1][c] = a[0] ^ b[1] ^ b[2] ^ a[2] ^ a[3]
        state[2][c] = a[0] ^ a[1] ^ b[2] ^ b[3] ^ a[3]
        state[3][c] = b[0] ^ a[0] ^ a[1] ^ a[2] ^ b[3]


def _add_round_key(state: List[List[int]], w: List[List[int]], round_num: int) -> None:
    for r in range(4):
        for c in range(NB):
            state[r][c] ^= w[round_num * NB + c][r]


def cipher(block: Sequence[int], w: List[List[int]]) -> bytes:
    """
    Encrypt a single 16-byte block with a key schedule [FIPS 197 §5.1].

    Args:
        block: 16-byte input block
        w: Key schedule from key_expansion()

    Returns:
        16-byte output block

    Raises:
        ValueError: If block is not 16 bytes
    """
    if len(block) != BLOCK_SIZE:
        raise ValueError(f"AES block must be {BLOCK_SIZE} bytes, got {len(block)} bytes")

    nr = len(w) // NB - 1

    # state[r][c] = input[r + 4c]
    state = [[block[r + 4 * c] for c in range(NB)] for r in range(4)]

    _add_round_key(state, w, 0)
    for round_num in range(1, nr):
        _sub_bytes(state)
        _shift_rows(state)
        _mix_columns(state)
        _add_round_key(state, w, round_num)

    _sub_bytes(state)
    _shift_rows(state)
    _add_round_key(state, w, nr)

    return bytes(state[r][c] for c in range(NB) for r in range(4))


# Self-test when run directly
if __name__ == "__main__":
    # FIPS 197 Appendix C.1 - C.3
    plaintext = bytes.fromhex("00112233445566778899aabbccddeeff")
    test_cases = [
        (bytes(range(16)), "69c4e0d86a7b0430d8cdb78070b4c55a"),
        (bytes(range(24)), "dda97ca4864cdfe06eaf70a0ec0d7191"),
        (bytes(range(32)), "8ea2b7ca516745bfeafc49904b496089"),
    ]

    print("AES Implementation Test")
    print("=" * 60)

    all_passed = True
    for key, expected in test_cases:
        result = cipher(plaintext, key_expansion(key)).hex()
        passed = result == expected
        all_passed = all_passed and passed
        print(f"  [{'PASS' if passed else 'FAIL'}] AES-{len(key) * 8}: {result}")

    print("\n" + "=" * 60)
    print(f"Overall: {'All tests passed!' if all_passed else 'Some tests failed!'}")
