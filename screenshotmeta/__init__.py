# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
screenshotmeta - VR screenshot metadata for PNG files

Reads and writes the iTXt description chunk that VR screenshot tools embed
in PNG files, and decodes the LFS family of description formats (lfs,
cvr, screenshotmanager) as well as the JSON document form.

All chunk handling is done by reading the PNG byte structure directly.

Copyright 2025 DNAi inc.
"""

__version__ = "0.1.0"
__author__ = "DNAi inc."

from screenshotmeta.config import ScreenshotConfig
from screenshotmeta.crc32 import crc32
from screenshotmeta.decoder import (
    DecodeResult,
    MetadataFormat,
    ResultKind,
    classify_text,
    decode_text,
    get_screenshot_metadata,
)
from screenshotmeta.exceptions import (
    IoReadError,
    MalformedLfsPayloadError,
    MalformedStructuredPayloadError,
    MetadataReadError,
    NotAContainerFileError,
    ScreenshotMetaError,
    UnknownMetadataFormatError,
)
from screenshotmeta.json_parser import JSONParser, metadata_from_dict
from screenshotmeta.lfs_parser import LFSParser, parse_lfs
from screenshotmeta.metadata import (
    ScreenshotAuthor,
    ScreenshotMetadata,
    ScreenshotPlayer,
    ScreenshotPosition,
    ScreenshotWorld,
)
from screenshotmeta.png_chunks import PNGChunk, find_chunk
from screenshotmeta.png_reader import (
    is_png_file,
    read_png_description,
    read_png_description_stream,
    read_png_resolution,
)
from screenshotmeta.png_writer import PNGWriter, write_png_description
from screenshotmeta.search import MetadataCache, ScreenshotSearchType, find_screenshots

__all__ = [
    "ScreenshotConfig",
    "crc32",
    "DecodeResult",
    "MetadataFormat",
    "ResultKind",
    "classify_text",
    "decode_text",
    "get_screenshot_metadata",
    "ScreenshotMetaError",
    "MetadataReadError",
    "NotAContainerFileError",
    "IoReadError",
    "UnknownMetadataFormatError",
    "MalformedLfsPayloadError",
    "MalformedStructuredPayloadError",
    "JSONParser",
    "metadata_from_dict",
    "LFSParser",
    "parse_lfs",
    "ScreenshotAuthor",
    "ScreenshotMetadata",
    "ScreenshotPlayer",
    "ScreenshotPosition",
    "ScreenshotWorld",
    "PNGChunk",
    "find_chunk",
    "is_png_file",
    "read_png_description",
    "read_png_description_stream",
    "read_png_resolution",
    "PNGWriter",
    "write_png_description",
    "MetadataCache",
    "ScreenshotSearchType",
    "find_screenshots",
]
