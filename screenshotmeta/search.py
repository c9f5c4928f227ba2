# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Screenshot search

Recursively decodes screenshots under a directory and filters them by
user or world.

Copyright 2025 DNAi inc.
"""

import logging
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional, Union

from screenshotmeta.config import ScreenshotConfig
from screenshotmeta.decoder import DecodeResult, ResultKind, get_screenshot_metadata
from screenshotmeta.metadata import ScreenshotMetadata

logger = logging.getLogger(__name__)


class ScreenshotSearchType(Enum):
    """What a search query is matched against."""
    USERNAME = "username"
    USER_ID = "userid"
    WORLD_NAME = "worldname"
    WORLD_ID = "worldid"


class MetadataCache:
    """
    Decoded metadata keyed by resolved file path.

    Entries never expire: screenshots are not expected to change after
    capture. A caller that rewrites a file must call invalidate() for it.
    Only successful decodes are stored, so files that failed or had no
    metadata are retried on the next lookup.
    """

    def __init__(self, config: Optional[ScreenshotConfig] = None):
        self.config = config or ScreenshotConfig()
        self._entries: Dict[str, ScreenshotMetadata] = {}

    @staticmethod
    def _key(file_path: Union[str, Path]) -> str:
        return str(Path(file_path).resolve())

    def get(self, file_path: Union[str, Path]) -> DecodeResult:
        """Return the cached record for a file, decoding it on a miss."""
        key = self._key(file_path)
        cached = self._entries.get(key)
        if cached is not None:
            return DecodeResult(ResultKind.OK, Path(file_path), metadata=cached)

        result = get_screenshot_metadata(file_path, self.config)
        if result.ok:
            self._entries[key] = result.metadata
        return result

    def invalidate(self, file_path: Union[str, Path]) -> bool:
        """Drop one entry. Returns True if it was cached."""
        return self._entries.pop(self._key(file_path), None) is not None

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, file_path: Union[str, Path]) -> bool:
        return self._key(file_path) in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def matches_query(metadata: ScreenshotMetadata, query: str, search_type: ScreenshotSearchType) -> bool:
    """
    Apply a search filter to one record.
    """
    if search_type is ScreenshotSearchType.USERNAME:
        return metadata.contains_player_name(query, partial=True, ignore_case=True)
    if search_type is ScreenshotSearchType.USER_ID:
        return metadata.contains_player_id(query)
    if metadata.world is None:
        return False
    if search_type is ScreenshotSearchType.WORLD_NAME:
        return query.casefold() in metadata.world.name.casefold()
    if search_type is ScreenshotSearchType.WORLD_ID:
        return metadata.world.id == query
    raise ValueError(f"Unsupported search type: {search_type}")


def find_screenshots(
    query: str,
    directory: Union[str, Path],
    search_type: ScreenshotSearchType,
    cache: Optional[MetadataCache] = None,
    config: Optional[ScreenshotConfig] = None
) -> List[ScreenshotMetadata]:
    """
    Find screenshots under directory whose metadata matches query.

    Files that fail to decode are logged and skipped. Files that are not
    PNGs or carry no metadata are skipped silently.

    Args:
        query: Name or id to look for
        directory: Root directory, searched recursively
        search_type: Field the query is matched against
        cache: Optional cache reused across searches
        config: Reader settings, used when no cache is given

    Returns:
        Matching records in file path order
    """
    if cache is None:
        cache = MetadataCache(config)

    files = sorted(Path(directory).rglob(cache.config.file_pattern))
    matches = []

    for file_path in files:
        if not file_path.is_file():
            continue

        result = cache.get(file_path)
        if result.kind in (ResultKind.NOT_FOUND, ResultKind.NOT_A_CONTAINER):
            continue
        if not result.ok:
            logger.error("Failed to get metadata for file '%s' during search (%s): %s",
                         file_path, result.kind.value, result.error)
            continue

        if matches_query(result.metadata, query, search_type):
            matches.append(result.metadata)

    logger.debug("Found %d/%d screenshots matching query '%s' of type '%s'",
                 len(matches), len(files), query, search_type.value)
    return matches
