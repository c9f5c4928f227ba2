# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Configuration for screenshot metadata operations.

Copyright 2025 DNAi inc.
"""

from typing import Any, Dict

from screenshotmeta.png_chunks import DEFAULT_READ_WINDOW


class ScreenshotConfig:
    """
    Settings shared by the reader, writer and search.

    Attributes:
        description_keyword: iTXt keyword the description is stored under
        read_window: Bytes read from the start of a file when looking for
            the description chunk
        min_file_size: Smallest file accepted as a PNG (signature plus a
            complete IHDR chunk is 33 bytes)
        file_pattern: Glob used by directory search
        require_png_extension: Only decode files whose name ends in .png
    """

    def __init__(
        self,
        description_keyword: str = "Description",
        read_window: int = DEFAULT_READ_WINDOW,
        min_file_size: int = 33,
        file_pattern: str = "*.png",
        require_png_extension: bool = True
    ):
        if read_window <= 8:
            raise ValueError(f"read_window must be larger than the PNG signature, got {read_window}")
        self.description_keyword = description_keyword
        self.read_window = read_window
        self.min_file_size = min_file_size
        self.file_pattern = file_pattern
        self.require_png_extension = require_png_extension

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> 'ScreenshotConfig':
        """
        Build a config from a dictionary of field values.

        Raises:
            ValueError: If the dictionary contains an unknown key
        """
        known = cls().to_dict()
        unknown = sorted(set(values) - set(known))
        if unknown:
            raise ValueError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'description_keyword': self.description_keyword,
            'read_window': self.read_window,
            'min_file_size': self.min_file_size,
            'file_pattern': self.file_pattern,
            'require_png_extension': self.require_png_extension,
        }

    def __repr__(self) -> str:
        fields = ', '.join(f"{k}={v!r}" for k, v in self.to_dict().items())
        return f"ScreenshotConfig({fields})"
