# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Screenshot metadata decoder

Classifies description text, dispatches it to the matching parser, and
wraps the outcome of reading a file in a DecodeResult. Expected outcomes
such as "no metadata" or "unknown format" are values, not exceptions.

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from screenshotmeta.config import ScreenshotConfig
from screenshotmeta.exceptions import (
    IoReadError,
    MalformedLfsPayloadError,
    MalformedStructuredPayloadError,
    NotAContainerFileError,
    ScreenshotMetaError,
    UnknownMetadataFormatError,
)
from screenshotmeta.json_parser import JSONParser
from screenshotmeta.lfs_parser import LFSParser, is_lfs_text
from screenshotmeta.metadata import ScreenshotMetadata
from screenshotmeta.png_chunks import CHUNK_ITXT, read_chunk_from_file
from screenshotmeta.png_reader import is_png_file


class MetadataFormat(Enum):
    """Wire format of a description string."""
    LFS = "lfs"
    JSON = "json"
    UNKNOWN = "unknown"


class ResultKind(Enum):
    """Outcome of decoding one file."""
    OK = "ok"
    NOT_FOUND = "not_found"  # PNG without a description
    NOT_A_CONTAINER = "not_a_container"
    IO_FAILURE = "io_failure"
    UNKNOWN_FORMAT = "unknown_format"
    MALFORMED_LFS = "malformed_lfs"
    MALFORMED_STRUCTURED = "malformed_structured"


_ERROR_KINDS = (
    (NotAContainerFileError, ResultKind.NOT_A_CONTAINER),
    (IoReadError, ResultKind.IO_FAILURE),
    (UnknownMetadataFormatError, ResultKind.UNKNOWN_FORMAT),
    (MalformedLfsPayloadError, ResultKind.MALFORMED_LFS),
    (MalformedStructuredPayloadError, ResultKind.MALFORMED_STRUCTURED),
)


@dataclass
class DecodeResult:
    """Result of get_screenshot_metadata for one file."""
    kind: ResultKind
    path: Path
    metadata: Optional[ScreenshotMetadata] = None
    error: Optional[ScreenshotMetaError] = None

    @property
    def ok(self) -> bool:
        return self.kind is ResultKind.OK

    @property
    def is_error(self) -> bool:
        return self.kind not in (ResultKind.OK, ResultKind.NOT_FOUND)

    @classmethod
    def from_error(cls, path: Path, error: ScreenshotMetaError) -> 'DecodeResult':
        for error_type, kind in _ERROR_KINDS:
            if isinstance(error, error_type):
                return cls(kind, path, error=error)
        raise TypeError(f"No result kind for {type(error).__name__}")


def classify_text(text: str) -> MetadataFormat:
    """Classify description text by its prefix."""
    if is_lfs_text(text):
        return MetadataFormat.LFS
    if text.startswith('{'):
        return MetadataFormat.JSON
    return MetadataFormat.UNKNOWN


def decode_text(text: str, source_file: Optional[Union[str, Path]] = None) -> ScreenshotMetadata:
    """
    Decode description text into a ScreenshotMetadata record.

    Raises:
        UnknownMetadataFormatError: Text is neither LFS nor JSON
        MalformedLfsPayloadError: LFS text is malformed
        MalformedStructuredPayloadError: JSON text is malformed
    """
    metadata_format = classify_text(text)
    if metadata_format is MetadataFormat.LFS:
        metadata = LFSParser(text).parse()
    elif metadata_format is MetadataFormat.JSON:
        metadata = JSONParser(text).parse()
    else:
        raise UnknownMetadataFormatError(f"Unknown non-JSON metadata: {text[:64]!r}")

    if source_file is not None:
        metadata.source_file = Path(source_file)
    return metadata


def read_description_text(file_path: Union[str, Path], config: Optional[ScreenshotConfig] = None) -> Optional[str]:
    """
    Read the raw description text from the bounded read window.

    Returns:
        Description text, or None if the PNG has no description chunk

    Raises:
        NotAContainerFileError: File is missing or not a PNG
        IoReadError: Reading the file failed
    """
    config = config or ScreenshotConfig()
    path = Path(file_path)

    if config.require_png_extension and path.suffix != '.png':
        raise NotAContainerFileError(f"Not a .png file: {path}")

    try:
        if not is_png_file(path, config.min_file_size):
            raise NotAContainerFileError(f"Not a PNG file: {path}")
        chunk = read_chunk_from_file(path, CHUNK_ITXT, config.read_window)
    except OSError as e:
        raise IoReadError(f"Failed to read PNG description from {path}: {e}") from e

    if chunk is None:
        return None
    return chunk.get_text(config.description_keyword)


def get_screenshot_metadata(file_path: Union[str, Path], config: Optional[ScreenshotConfig] = None) -> DecodeResult:
    """
    Read and decode the metadata of one screenshot.

    Never raises for per-file problems; the outcome is in DecodeResult.kind.

    Args:
        file_path: Screenshot path
        config: Reader settings

    Returns:
        DecodeResult
    """
    path = Path(file_path)
    try:
        text = read_description_text(path, config)
        if not text:
            return DecodeResult(ResultKind.NOT_FOUND, path)
        metadata = decode_text(text, path)
    except ScreenshotMetaError as e:
        return DecodeResult.from_error(path, e)
    return DecodeResult(ResultKind.OK, path, metadata=metadata)
