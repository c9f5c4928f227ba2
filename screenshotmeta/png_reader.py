# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
PNG description and resolution reader

Reads the iTXt description written by PNGWriter and the IHDR resolution.
Functions return None when the file is not a PNG or the chunk is absent;
OSError from the filesystem propagates to the caller.

Copyright 2025 DNAi inc.
"""

from pathlib import Path
from typing import Optional, Union

from screenshotmeta.png_chunks import (
    CHUNK_IHDR,
    CHUNK_ITXT,
    DEFAULT_READ_WINDOW,
    PNG_SIGNATURE,
    read_chunk,
    read_chunk_from_file,
)

# Signature (8) + IHDR length/type (8) + IHDR data (13) + CRC (4)
MIN_PNG_SIZE = 33


def is_png_file(file_path: Union[str, Path], min_file_size: int = MIN_PNG_SIZE) -> bool:
    """
    Check whether a file is a PNG by its first 8 bytes.

    Args:
        file_path: Path to the file
        min_file_size: Files smaller than this are rejected without reading

    Returns:
        True if the file exists, is large enough and starts with the PNG signature
    """
    path = Path(file_path)
    if not path.is_file():
        return False
    if path.stat().st_size < min_file_size:
        return False
    with open(path, 'rb') as f:
        signature = f.read(len(PNG_SIGNATURE))
    return signature == PNG_SIGNATURE


def read_png_description(file_path: Union[str, Path], keyword: str = "Description") -> Optional[str]:
    """
    Read the description text, loading the whole file into memory.
    """
    if not is_png_file(file_path):
        return None

    png_data = Path(file_path).read_bytes()
    chunk = read_chunk(png_data, CHUNK_ITXT)
    if chunk is None:
        return None
    return chunk.get_text(keyword)


def read_png_description_stream(
    file_path: Union[str, Path],
    keyword: str = "Description",
    read_window: int = DEFAULT_READ_WINDOW
) -> Optional[str]:
    """
    Read the description text from the first read_window bytes of the file.

    This is what search uses: only a bounded prefix of each file is read.
    """
    if not is_png_file(file_path):
        return None

    chunk = read_chunk_from_file(file_path, CHUNK_ITXT, read_window)
    if chunk is None:
        return None
    return chunk.get_text(keyword)


def read_png_resolution(file_path: Union[str, Path]) -> Optional[str]:
    """
    Read "{width}x{height}" from the IHDR chunk.
    """
    if not is_png_file(file_path):
        return None

    png_data = Path(file_path).read_bytes()
    chunk = read_chunk(png_data, CHUNK_IHDR)
    if chunk is None:
        return None
    return chunk.get_resolution()
