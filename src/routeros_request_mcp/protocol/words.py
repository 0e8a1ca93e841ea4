"""Word encoder for the RouterOS API wire format.

A request is a sequence of words terminated by an empty word. Each word is
a length prefix followed by the payload bytes::

    +------------------+------------------------+
    | Length prefix    | Payload                |
    | 1-5 bytes        | ``length`` bytes       |
    +------------------+------------------------+

The prefix width depends on the payload length:

- ``< 0x80``: 1 byte, the length itself
- ``< 0x4000``: 2 bytes, ``length | 0x8000``
- ``< 0x200000``: 3 bytes, ``length | 0xC00000``
- ``< 0x10000000``: 4 bytes, ``length | 0xE0000000``
- otherwise: ``0xF0`` followed by the length as 4 bytes

All multi-byte prefixes are big-endian.
"""

from __future__ import annotations

DEFAULT_ENCODING = "utf-8"
MAX_WORD_LENGTH = 0xFFFFFFFF
TERMINATOR = b"\x00"


def encode_length(length: int) -> bytes:
    """Encode a payload length as a word prefix.

    Args:
        length: Number of payload bytes in the word.

    Returns:
        The 1-5 byte prefix.

    Raises:
        ValueError: If the length is negative or exceeds ``MAX_WORD_LENGTH``.
    """
    if length < 0:
        raise ValueError(f"Word length must not be negative, got {length}")
    if length < 0x80:
        return bytes([length])
    if length < 0x4000:
        return (length | 0x8000).to_bytes(2, "big")
    if length < 0x200000:
        return (length | 0xC00000).to_bytes(3, "big")
    if length < 0x10000000:
        return (length | 0xE0000000).to_bytes(4, "big")
    if length <= MAX_WORD_LENGTH:
        return b"\xF0" + length.to_bytes(4, "big")
    raise ValueError(
        f"Word length must be at most {MAX_WORD_LENGTH:#x}, got {length:#x}"
    )


def encode_word(word: str, encoding: str = DEFAULT_ENCODING) -> bytes:
    """Encode a single word, prefix included.

    The empty word encodes to :data:`TERMINATOR`.
    """
    payload = word.encode(encoding)
    return encode_length(len(payload)) + payload
