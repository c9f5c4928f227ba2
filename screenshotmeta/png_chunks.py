# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
PNG chunk scanning and iTXt chunk encoding

Basic chunk layout (PNG 1.2, section 5.3):
    Length (4 bytes, big-endian) | Type (4 bytes) | Data (Length bytes) | CRC (4 bytes)

iTXt data layout:
    Keyword (Latin-1) | NUL | Compression flag | Compression method |
    Language tag | NUL | Translated keyword | NUL | Text (UTF-8)

This is not a general PNG editor. Only IHDR and iTXt are understood, and
text is read back under the assumption that the chunk was written by
PNGChunk.text_chunk (empty language tag and translated keyword).

Copyright 2025 DNAi inc.
"""

import struct
from pathlib import Path
from typing import NamedTuple, Optional, Union

from screenshotmeta.crc32 import ITXT_CRC, crc32

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'

CHUNK_IHDR = b'IHDR'
CHUNK_ITXT = b'iTXt'
CHUNK_IEND = b'IEND'

# Screenshots keep IHDR and a freshly written iTXt right after the signature,
# so a fixed prefix read is enough to find them.
DEFAULT_READ_WINDOW = 128 * 1024

# Keyword NUL + compression flag + compression method + two empty NUL-terminated fields
_ITXT_HEADER_OVERHEAD = 5


class ChunkLocation(NamedTuple):
    """Offset of a chunk's length field and the chunk's payload length."""
    offset: int
    length: int

    @property
    def end(self) -> int:
        """Offset just past the chunk's CRC."""
        return self.offset + self.length + 12


def _as_tag(chunk_type: Union[str, bytes]) -> bytes:
    tag = chunk_type.encode('ascii') if isinstance(chunk_type, str) else bytes(chunk_type)
    if len(tag) != 4:
        raise ValueError(f"PNG chunk type must be 4 bytes, got {tag!r}")
    return tag


def find_chunk(png_data: bytes, chunk_type: Union[str, bytes]) -> Optional[ChunkLocation]:
    """
    Find the first chunk of the given type.

    Scanning stops at IEND, so trailing bytes after the image are never
    interpreted. A chunk whose declared length runs past the end of
    png_data means the data is corrupt (or truncated by a read window),
    and the chunk is reported as not found.

    Args:
        png_data: Whole PNG file, or a prefix of one
        chunk_type: Chunk type such as b'iTXt' or 'IHDR'

    Returns:
        ChunkLocation, or None if the chunk is not present
    """
    tag = _as_tag(chunk_type)
    index = len(PNG_SIGNATURE)
    data_length = len(png_data)

    while index + 8 <= data_length:
        length, name = struct.unpack('>I4s', png_data[index:index + 8])

        if index + length + 12 > data_length:
            return None

        if name == tag:
            return ChunkLocation(index, length)

        # Nothing of interest follows IEND
        if name == CHUNK_IEND:
            return None

        index += length + 12

    return None


def find_end_of_chunk(png_data: bytes, chunk_type: Union[str, bytes]) -> int:
    """
    Offset just past the CRC of the first chunk of the given type, or -1.
    """
    location = find_chunk(png_data, chunk_type)
    if location is None:
        return -1
    return location.end


def read_chunk(png_data: bytes, chunk_type: Union[str, bytes]) -> Optional['PNGChunk']:
    """
    Find a chunk and return it decoded, or None if it is not present.
    """
    location = find_chunk(png_data, chunk_type)
    if location is None:
        return None
    start = location.offset + 8
    return PNGChunk.decode_payload(chunk_type, png_data[start:start + location.length])


def read_chunk_from_file(
    file_path: Union[str, Path],
    chunk_type: Union[str, bytes],
    read_window: int = DEFAULT_READ_WINDOW
) -> Optional['PNGChunk']:
    """
    Read a chunk from the first read_window bytes of a file.

    Chunks that end beyond the window are invisible and reported as
    not found.
    """
    with open(file_path, 'rb') as f:
        window = f.read(read_window)
    return read_chunk(window, chunk_type)


class PNGChunk:
    """
    One PNG chunk: its type tag and payload.

    Instances live only for the duration of one scan or build.
    """

    def __init__(self, chunk_type: Union[str, bytes], data: bytes = b''):
        self.chunk_type = _as_tag(chunk_type)
        self.data = bytes(data)

    @classmethod
    def decode_payload(cls, chunk_type: Union[str, bytes], data: bytes) -> 'PNGChunk':
        return cls(chunk_type, data)

    @classmethod
    def text_chunk(cls, keyword: str, text: str) -> 'PNGChunk':
        """
        Build an uncompressed iTXt chunk.

        Args:
            keyword: Chunk keyword, must be Latin-1 encodable
            text: Text to store, encoded as UTF-8

        Returns:
            iTXt PNGChunk
        """
        data = bytearray()
        data.extend(keyword.encode('latin-1'))
        data.append(0)  # keyword terminator
        data.append(0)  # compression flag
        data.append(0)  # compression method
        data.append(0)  # empty language tag
        data.append(0)  # empty translated keyword
        data.extend(text.encode('utf-8'))
        return cls(CHUNK_ITXT, bytes(data))

    @property
    def length(self) -> int:
        return len(self.data)

    @property
    def crc(self) -> int:
        if self.chunk_type == CHUNK_ITXT:
            return crc32(self.data, seed=ITXT_CRC)
        return crc32(self.chunk_type + self.data)

    def serialize(self) -> bytes:
        """
        Serialize the chunk: length, type, data, CRC of type + data.
        """
        chunk = bytearray()
        chunk.extend(struct.pack('>I', self.length))
        chunk.extend(self.chunk_type)
        chunk.extend(self.data)
        chunk.extend(struct.pack('>I', self.crc))
        return bytes(chunk)

    def get_text(self, keyword: str) -> str:
        """
        Text of an iTXt chunk written by text_chunk with the same keyword.

        Invalid UTF-8 sequences are replaced with U+FFFD.
        """
        offset = len(keyword.encode('latin-1')) + _ITXT_HEADER_OVERHEAD
        return self.data[offset:].decode('utf-8', errors='replace')

    def get_resolution(self) -> str:
        """
        "{width}x{height}" from an IHDR chunk.
        """
        if len(self.data) < 8:
            raise ValueError(f"IHDR payload too short: {len(self.data)} bytes")
        width, height = struct.unpack('>II', self.data[:8])
        return f"{width}x{height}"

    def __repr__(self) -> str:
        return f"PNGChunk({self.chunk_type!r}, {self.length} bytes)"
