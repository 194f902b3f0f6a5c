"""
Message and Digest Formats

Shared input/output handling for the hash functions in this package.

Components:
- HashOptions: padding domain, message format and output format
- Message decoding: UTF-8 text or pre-encoded hex bytes (for NIST vectors)
- Digest rendering: contiguous hex, byte-grouped or word-grouped

Unrecognised option values fall back to the defaults (with a warning),
while malformed hex-bytes input is rejected with MessageFormatError.
"""

import logging
import string
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Union


logger = logging.getLogger(__name__)

HEX_DIGITS = frozenset(string.hexdigits)


class MessageFormatError(ValueError):
    """Raised when a hex-bytes message cannot be decoded."""


class Padding(Enum):
    """Sponge domain separation."""
    SHA3 = "sha-3"
    KECCAK = "keccak"


class MessageFormat(Enum):
    """How the message argument is turned into bytes."""
    STRING = "string"
    HEX_BYTES = "hex-bytes"


class OutputFormat(Enum):
    """How the digest is rendered as text."""
    HEX = "hex"
    HEX_BYTES = "hex-b"
    HEX_WORDS = "hex-w"


# Mapping keys accepted by HashOptions.from_mapping
_OPTION_KEYS = {
    'padding': 'padding',
    'msgFormat': 'msg_format',
    'msg_format': 'msg_format',
    'outFormat': 'out_format',
    'out_format': 'out_format',
}


def _coerce(enum_cls, value, default):
    """Convert a raw option value to enum_cls, falling back to default."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        logger.warning(
            "Unrecognised %s %r, using %r",
            enum_cls.__name__, value, default.value
        )
        return default


@dataclass(frozen=True)
class HashOptions:
    """
    Options recognised by the hash functions.

    Attributes:
        padding: "sha-3" (default) or "keccak"; only meaningful for SHA-3
        msg_format: "string" (default) or "hex-bytes"
        out_format: "hex" (default), "hex-b" or "hex-w"
    """
    padding: Padding = Padding.SHA3
    msg_format: MessageFormat = MessageFormat.STRING
    out_format: OutputFormat = OutputFormat.HEX

    def __post_init__(self):
        # frozen dataclass: assign through object.__setattr__
        object.__setattr__(self, 'padding', _coerce(Padding, self.padding, Padding.SHA3))
        object.__setattr__(
            self, 'msg_format',
            _coerce(MessageFormat, self.msg_format, MessageFormat.STRING)
        )
        object.__setattr__(
            self, 'out_format',
            _coerce(OutputFormat, self.out_format, OutputFormat.HEX)
        )

    @classmethod
    def from_mapping(cls, options: Mapping[str, Any]) -> 'HashOptions':
        """
        Build options from a plain mapping.

        Accepts both the camelCase keys (msgFormat, outFormat) and their
        snake_case equivalents. Unknown keys are ignored with a warning.
        """
        kwargs = {}
        for key, value in options.items():
            field_name = _OPTION_KEYS.get(key)
            if field_name is None:
                logger.warning("Ignoring unknown hash option %r", key)
                continue
            kwargs[field_name] = value
        return cls(**kwargs)


OptionsLike = Union[None, HashOptions, Mapping[str, Any]]


def resolve_options(options: OptionsLike) -> HashOptions:
    """Normalise None / HashOptions / mapping into a HashOptions."""
    if options is None:
        return HashOptions()
    if isinstance(options, HashOptions):
        return options
    return HashOptions.from_mapping(options)


def hex_bytes_to_bytes(hex_str: str) -> bytes:
    """
    Decode a string of hex pairs ('616263' -> b'abc').

    Whitespace between groups is allowed.

    Raises:
        MessageFormatError: On odd length or non-hex characters
    """
    compact = ''.join(hex_str.split())
    for position, char in enumerate(compact):
        if char not in HEX_DIGITS:
            raise MessageFormatError(
                f"Invalid hex character {char!r} at position {position}"
            )
    if len(compact) % 2 != 0:
        raise MessageFormatError(
            f"Hex message must have an even number of digits, got {len(compact)}"
        )
    return bytes.fromhex(compact)


def encode_message(message: Union[str, bytes], msg_format: MessageFormat) -> bytes:
    """
    Turn the caller's message into the byte string to be hashed.

    Args:
        message: Text, hex text, or raw bytes
        msg_format: STRING (UTF-8 encode) or HEX_BYTES

    Returns:
        Message bytes
    """
    if msg_format is MessageFormat.HEX_BYTES:
        if isinstance(message, (bytes, bytearray)):
            message = message.decode('ascii')
        return hex_bytes_to_bytes(message)

    if isinstance(message, (bytes, bytearray)):
        return bytes(message)
    return str(message).encode('utf-8')


def group_hex(hex_str: str, width: int) -> str:
    """Split hex_str into space-separated groups of width characters."""
    return ' '.join(hex_str[i:i + width] for i in range(0, len(hex_str), width))


def format_digest(digest: bytes, out_format: OutputFormat, word_size: int) -> str:
    """
    Render a digest as lowercase hex.

    Args:
        digest: Raw digest bytes
        out_format: HEX, HEX_BYTES (2-char groups) or HEX_WORDS
        word_size: Word size in bytes used for HEX_WORDS grouping
    """
    hex_str = digest.hex()
    if out_format is OutputFormat.HEX_BYTES:
        return group_hex(hex_str, 2)
    if out_format is OutputFormat.HEX_WORDS:
        return group_hex(hex_str, word_size * 2)
    return hex_str
