"""
SHA-3 / Keccak Hash Implementation (From Scratch)

Implements the SHA-3 hash family as defined in FIPS 202, together with the
original Keccak submission padding. One sponge construction over the
Keccak-f[1600] permutation serves all four digest sizes.

Components:
- Lane arithmetic: 64-bit rotate / complement on Python ints
- Keccak-f[1600]: 24 rounds of the step mappings θ, ρ, π, χ, ι
- Padding: multi-rate pad10*1 with domain separation bits
- Sponge: absorb r-bit blocks, squeeze the first c/2 bits
- Output: 224 / 256 / 384 / 512-bit digest as hex string

The state is a flat list of 25 lanes indexed 5*y + x, which is also the
order lanes are absorbed and squeezed in.
"""

import logging
from typing import List, Union

from .formats import (
    HashOptions, OptionsLike, Padding, encode_message, format_digest,
    resolve_options,
)


logger = logging.getLogger(__name__)

# Keccak-f[1600]: b = 25 × 2ˡ with ℓ = 6
STATE_BITS = 1600
LANE_BITS = 64
LANE_BYTES = LANE_BITS // 8
NUM_LANES = 25

# nᵣ = 12 + 2ℓ
NUM_ROUNDS = 24

MASK_64 = 0xFFFFFFFFFFFFFFFF

# Round constants for the ι step: output of the LFSR
# rc[t] = (xᵗ mod x⁸ + x⁶ + x⁵ + x⁴ + 1) mod x in GF(2)[x]
ROUND_CONSTANTS = [
    0x0000000000000001, 0x0000000000008082, 0x800000000000808A,
    0x8000000080008000, 0x000000000000808B, 0x0000000080000001,
    0x8000000080008081, 0x8000000000008009, 0x000000000000008A,
    0x0000000000000088, 0x0000000080008009, 0x000000008000000A,
    0x000000008000808B, 0x800000000000008B, 0x8000000000008089,
    0x8000000000008003, 0x8000000000008002, 0x8000000000000080,
    0x000000000000800A, 0x800000008000000A, 0x8000000080008081,
    0x8000000000008080, 0x0000000080000001, 0x8000000080008008,
]

# ρ rotation offsets indexed 5*y + x: (t+1)(t+2)/2 mod 64 along the
# trajectory (x, y) <- (y, 2x + 3y) starting from (1, 0)
RHO_OFFSETS = [
    0,  1,  62, 28, 27,
    36, 44, 6,  55, 20,
    3,  10, 43, 25, 39,
    41, 45, 15, 21, 8,
    18, 2,  61, 56, 14,
]

# (bitrate r, capacity c) for each digest size in bits
SHA3_PARAMETERS = {
    224: (1152, 448),
    256: (1088, 512),
    384: (832, 768),
    512: (576, 1024),
}

# First / last padding bytes per domain; SINGLE is used when only one byte fits
_PAD_FIRST = {Padding.SHA3: 0x06, Padding.KECCAK: 0x01}
_PAD_SINGLE = {Padding.SHA3: 0x86, Padding.KECCAK: 0x81}
_PAD_LAST = 0x80


# ============================================================================
# Lane arithmetic
# ============================================================================

def rotl64(value: int, amount: int) -> int:
    """Rotate a 64-bit lane left by amount (0..64; 0 and 64 are identity)."""
    return ((value << amount) | (value >> (LANE_BITS - amount))) & MASK_64


def not64(value: int) -> int:
    """Bitwise complement of a 64-bit lane."""
    return ~value & MASK_64


def new_state() -> List[int]:
    """Create an all-zero Keccak state."""
    return [0] * NUM_LANES


# ============================================================================
# Keccak-f[1600] permutation
# ============================================================================

def keccak_f_1600(state: List[int]) -> List[int]:
    """
    Apply the Keccak-f[1600] permutation to a state in place.

    Args:
        state: 25 lanes indexed 5*y + x

    Returns:
        The same list, permuted
    """
    for round_index in range(NUM_ROUNDS):
        # θ: XOR each lane with the parities of two neighbouring columns
        c = [
            state[x] ^ state[x + 5] ^ state[x + 10] ^ state[x + 15] ^ state[x + 20]
            for x in range(5)
        ]
        for x in range(5):
            d = c[(x + 4) % 5] ^ rotl64(c[(x + 1) % 5], 1)
            for y in range(0, NUM_LANES, 5):
                state[y + x] ^= d

        # ρ and π together: walk the 24 non-origin lanes, moving each
        # (rotated) lane one step along the trajectory
        x, y = 1, 0
        current = state[x + 5 * y]
        for _ in range(NUM_LANES - 1):
            offset = RHO_OFFSETS[x + 5 * y]
            x, y = y, (2 * x + 3 * y) % 5
            target = x + 5 * y
            current, state[target] = state[target], rotl64(current, offset)

        # χ: row-wise non-linear step, reading only the unmodified row
        for y in range(0, NUM_LANES, 5):
            row = state[y:y + 5]
            for x in range(5):
                state[y + x] = row[x] ^ (not64(row[(x + 1) % 5]) & row[(x + 2) % 5])

        # ι
        state[0] ^= ROUND_CONSTANTS[round_index]

    return state


# ============================================================================
# Sponge construction
# ============================================================================

def _check_bitrate(r: int) -> None:
    if r <= 0 or r >= STATE_BITS or r % LANE_BITS != 0:
        raise ValueError(
            f"Bitrate must be a positive multiple of {LANE_BITS} below "
            f"{STATE_BITS}, got {r}"
        )


def pad(message: bytes, r: int, padding: Union[Padding, str] = Padding.SHA3) -> bytes:
    """
    Pad a message with pad10*1 and the domain separation bits.

    For SHA-3 the domain suffix is 01, hence M || 0110*1; the original
    Keccak submission has no suffix, hence M || 10*1. When a single byte
    remains in the block, the first and last padding bits share it.

    Args:
        message: Message bytes
        r: Bitrate in bits
        padding: Padding.SHA3 or Padding.KECCAK

    Returns:
        Padded message whose length is a multiple of r/8 bytes
    """
    _check_bitrate(r)
    domain = Padding(padding)
    block_size = r // 8

    q = block_size - len(message) % block_size
    if q == 1:
        return message + bytes([_PAD_SINGLE[domain]])
    return message + bytes([_PAD_FIRST[domain]]) + b'\x00' * (q - 2) + bytes([_PAD_LAST])


def _absorb_block(state: List[int], block: bytes) -> None:
    """XOR one r-bit block into the state as little-endian lanes."""
    for j in range(len(block) // LANE_BYTES):
        lane = int.from_bytes(block[j * LANE_BYTES:(j + 1) * LANE_BYTES], byteorder='little')
        state[j] ^= lane


def _squeeze(state: List[int], length: int) -> bytes:
    """Serialise the state lanes (little-endian) and truncate to length bytes."""
    output = b''.join(lane.to_bytes(LANE_BYTES, byteorder='little') for lane in state)
    return output[:length]


def sponge(r: int, c: int, data: bytes, padding: Union[Padding, str] = Padding.SHA3) -> bytes:
    """
    Compute a Keccak[r, c] digest of c/2 bits.

    Args:
        r: Bitrate in bits
        c: Capacity in bits (r + c must be 1600)
        data: Message bytes
        padding: Padding.SHA3 or Padding.KECCAK

    Returns:
        Digest of c/2 bits as bytes
    """
    _check_bitrate(r)
    if r + c != STATE_BITS:
        raise ValueError(f"Bitrate + capacity must be {STATE_BITS}, got {r} + {c}")
    digest_bits = c // 2
    if digest_bits > r:
        raise ValueError(f"Digest of {digest_bits} bits does not fit in one {r}-bit squeeze")

    padded = pad(data, r, padding)
    block_size = r // 8

    state = new_state()
    for i in range(0, len(padded), block_size):
        _absorb_block(state, padded[i:i + block_size])
        keccak_f_1600(state)

    logger.debug(
        "Keccak[r=%d, c=%d]: %d message bytes, %d blocks",
        r, c, len(data), len(padded) // block_size
    )
    return _squeeze(state, digest_bits // 8)


# ============================================================================
# Digest API
# ============================================================================

def keccak1600(r: int, c: int, message: Union[str, bytes], options: OptionsLike = None) -> str:
    """
    Hash a message with Keccak[r, c] and render it per options.

    Args:
        r: Bitrate in bits
        c: Capacity in bits (digest length × 2)
        message: Text (UTF-8 encoded), hex text, or bytes
        options: HashOptions or mapping with padding / msgFormat / outFormat

    Returns:
        Digest as lowercase hex string
    """
    opts = resolve_options(options)
    data = encode_message(message, opts.msg_format)
    digest = sponge(r, c, data, opts.padding)
    return format_digest(digest, opts.out_format, LANE_BYTES)


def hash224(message: Union[str, bytes], options: OptionsLike = None) -> str:
    """
    Generate the 224-bit SHA-3 / Keccak hash of a message.

    Example:
        >>> hash224('abc')
        'e642824c3f8cf24ad09234ee7d3c766fc9a3a5168d0c94ad73b46fdf'
    """
    return keccak1600(*SHA3_PARAMETERS[224], message, options)


def hash256(message: Union[str, bytes], options: OptionsLike = None) -> str:
    """Generate the 256-bit SHA-3 / Keccak hash of a message."""
    return keccak1600(*SHA3_PARAMETERS[256], message, options)


def hash384(message: Union[str, bytes], options: OptionsLike = None) -> str:
    """Generate the 384-bit SHA-3 / Keccak hash of a message."""
    return keccak1600(*SHA3_PARAMETERS[384], message, options)


def hash512(message: Union[str, bytes], options: OptionsLike = None) -> str:
    """Generate the 512-bit SHA-3 / Keccak hash of a message."""
    return keccak1600(*SHA3_PARAMETERS[512], message, options)


def sha3_224(data: bytes) -> bytes:
    """SHA3-224 digest of raw bytes."""
    return sponge(*SHA3_PARAMETERS[224], data)


def sha3_256(data: bytes) -> bytes:
    """SHA3-256 digest of raw bytes."""
    return sponge(*SHA3_PARAMETERS[256], data)


def sha3_384(data: bytes) -> bytes:
    """SHA3-384 digest of raw bytes."""
    return sponge(*SHA3_PARAMETERS[384], data)


def sha3_512(data: bytes) -> bytes:
    """SHA3-512 digest of raw bytes."""
    return sponge(*SHA3_PARAMETERS[512], data)


def keccak_256(data: bytes) -> bytes:
    """
    Keccak-256 digest of raw bytes, with the original submission padding.

    This is the variant used by Ethereum and differs from SHA3-256 only
    in the domain separation bits.
    """
    return sponge(*SHA3_PARAMETERS[256], data, Padding.KECCAK)


# Self-test when run directly
if __name__ == "__main__":
    test_cases = [
        (hash224, '', "6b4e03423667dbb73b6e15454f0eb1abd4597f9a1b078e3f5b5a6bc7"),
        (hash256, '', "a7ffc6f8bf1ed76651c14756a061d662f580ff4de43b49fa82d80a4b80f8434a"),
        (hash256, 'abc', "3a985da74fe225b2045c172d6bd390bd855f086e3e9d525b46bfe24511431532"),
        (hash512, 'abc', "b751850b1a57168a5693cd924b6b096e08f621827444f70d884f5d0240d2712e"
                         "10e116e9192af3c91a7ec57647e3934057340b4cf408d5a56592f8274eec53f0"),
    ]

    print("SHA-3 Implementation Test")
    print("=" * 60)

    all_passed = True
    for fn, message, expected in test_cases:
        result = fn(message)
        passed = result == expected
        all_passed = all_passed and passed
        print(f"\n{fn.__name__}({message!r})")
        print(f"Expected: {expected}")
        print(f"Got:      {result}")
        print(f"Status:   {'PASS' if passed else 'FAIL'}")

    print("\n" + "=" * 60)
    print(f"Overall: {'All tests passed!' if all_passed else 'Some tests failed!'}")
