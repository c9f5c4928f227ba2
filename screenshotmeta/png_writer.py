# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
PNG description writer

This module writes a screenshot description into a PNG file as an
uncompressed iTXt chunk placed directly after IHDR.

A screenshot is expected to be processed once. If the file already holds
an iTXt chunk the write is skipped; existing chunks are never replaced or
merged.

Copyright 2025 DNAi inc.
"""

from pathlib import Path
from typing import Union

from screenshotmeta.png_chunks import (
    CHUNK_IHDR,
    CHUNK_ITXT,
    PNGChunk,
    find_chunk,
    find_end_of_chunk,
)
from screenshotmeta.png_reader import MIN_PNG_SIZE, is_png_file


class PNGWriter:
    """
    Writes description text to PNG files.
    """

    def __init__(self, keyword: str = "Description", min_file_size: int = MIN_PNG_SIZE):
        """
        Initialize PNG writer.

        Args:
            keyword: iTXt keyword to store the description under
            min_file_size: Smallest file accepted as a PNG
        """
        # Fail early on keywords the chunk cannot carry
        keyword.encode('latin-1')
        self.keyword = keyword
        self.min_file_size = min_file_size

    def build_png(self, original_data: bytes, text: str) -> bytes:
        """
        Return original_data with a description chunk inserted after IHDR.

        Returns the input unchanged if IHDR is missing or an iTXt chunk
        already exists.
        """
        insert_at = find_end_of_chunk(original_data, CHUNK_IHDR)
        if insert_at == -1:
            return original_data

        # Already has a text chunk, most likely logged twice
        if find_chunk(original_data, CHUNK_ITXT) is not None:
            return original_data

        chunk = PNGChunk.text_chunk(self.keyword, text)

        png_data = bytearray(original_data)
        png_data[insert_at:insert_at] = chunk.serialize()
        return bytes(png_data)

    def write_description(self, file_path: Union[str, Path], text: str) -> bool:
        """
        Write text into the PNG file in place.

        Args:
            file_path: PNG file to modify
            text: Description text

        Returns:
            True if the file was rewritten, False if it is not a PNG, has no
            IHDR chunk, or already holds an iTXt chunk
        """
        if not is_png_file(file_path, self.min_file_size):
            return False

        path = Path(file_path)
        original_data = path.read_bytes()
        new_data = self.build_png(original_data, text)
        if new_data is original_data:
            return False

        with open(path, 'wb') as f:
            f.write(new_data)
        return True


def write_png_description(file_path: Union[str, Path], text: str, keyword: str = "Description") -> bool:
    """
    Write a description into a PNG file. See PNGWriter.write_description.
    """
    return PNGWriter(keyword).write_description(file_path, text)
