# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Table-driven CRC32 (PNG / zlib polynomial).

The lookup table is built once when the module is imported and is an
immutable tuple afterwards, so concurrent callers never race on it.

Copyright 2025 DNAi inc.
"""

from typing import Optional, Tuple

CRC32_POLYNOMIAL = 0xEDB88320
_MASK = 0xFFFFFFFF


def _build_table() -> Tuple[int, ...]:
    table = []
    for n in range(256):
        c = n
        for _ in range(8):
            if c & 1:
                c = CRC32_POLYNOMIAL ^ (c >> 1)
            else:
                c >>= 1
        table.append(c)
    return tuple(table)


CRC32_TABLE: Tuple[int, ...] = _build_table()


def crc32(data: bytes, offset: int = 0, length: Optional[int] = None, seed: int = 0) -> int:
    """
    Calculate the CRC32 of data[offset:offset + length].

    The seed is a previous CRC32 result, which allows a checksum to be
    continued: crc32(b, seed=crc32(a)) == crc32(a + b).

    Args:
        data: Bytes to checksum
        offset: First byte to include
        length: Number of bytes to include (default: to the end of data)
        seed: CRC32 of the preceding bytes, 0 for a fresh checksum

    Returns:
        Unsigned 32-bit checksum
    """
    if length is None:
        length = len(data) - offset
    end = offset + length
    if offset < 0 or length < 0 or end > len(data):
        raise ValueError(f"CRC32 range {offset}:{end} outside of {len(data)} bytes")

    c = (seed ^ _MASK) & _MASK
    table = CRC32_TABLE
    for byte in data[offset:end]:
        c = table[(c ^ byte) & 0xFF] ^ (c >> 8)
    return c ^ _MASK


# CRC of the iTXt tag, used as the seed when checksumming iTXt payloads
ITXT_CRC = crc32(b'iTXt')
