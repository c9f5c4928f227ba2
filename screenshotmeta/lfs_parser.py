# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Parser for LFS screenshot descriptions.

LFS is a pipe-delimited format written by several VR screenshot tools.
Three dialects share the same framing:

    lfs|2|author:usr_...,Name|world:wrld_...,35372,World Name|pos:-60.49,-0.0029,5.80|rq:2|players:usr_...,-0.85,-0.17,-0.58,Name;...
    lfs|cvr|1|author:047b30bd-...,Name|world:2e73b387-...,i+efec2000...,World Name|pos:...|players:5301af21-...,3.77,0.01,-3.81,Name;...
    screenshotmanager|0|author:usr_...,Name|wrld_...,47213,World Name

The cvr dialect has no stable ids: ids are left empty and the raw id is
appended to the display name instead. Version 1 LFS stores the world as
a bare name. Field offsets matter; a shifted index yields plausible but
wrong data, so any missing field is reported as malformed.

Copyright 2025 DNAi inc.
"""

import re
from typing import List, Optional

from screenshotmeta.exceptions import MalformedLfsPayloadError
from screenshotmeta.metadata import (
    VERSION_RANGE,
    ScreenshotAuthor,
    ScreenshotMetadata,
    ScreenshotPlayer,
    ScreenshotPosition,
    ScreenshotWorld,
)

LFS_APPLICATION = "lfs"
CVR_APPLICATION = "cvr"
SCREENSHOTMANAGER_APPLICATION = "screenshotmanager"

LFS_PREFIXES = (LFS_APPLICATION, SCREENSHOTMANAGER_APPLICATION)

_VERSION_PATTERN = re.compile(r"-?[0-9]+")


def _parse_version(token: str) -> int:
    # ASCII digits only; int() would also take "2_0", " 2 " and non-ASCII digits
    if not _VERSION_PATTERN.fullmatch(token):
        raise MalformedLfsPayloadError(f"Invalid LFS version: {token!r}")
    # Bounded before int() so a long digit run cannot hit the conversion limit
    if len(token.lstrip('-')) > 10 or int(token) not in VERSION_RANGE:
        raise MalformedLfsPayloadError(f"LFS version out of range: {token!r}")
    return int(token)


def _strip_key(token: str, key: str) -> str:
    prefix = key + ':'
    if token.startswith(prefix):
        return token[len(prefix):]
    return token


class LFSParser:
    """
    Parser for LFS, cvr and screenshotmanager description strings.
    """

    def __init__(self, text: str):
        """
        Initialize LFS parser.

        Args:
            text: Description text starting with "lfs" or "screenshotmanager"
        """
        self.text = text

    def parse(self) -> ScreenshotMetadata:
        """
        Parse the description into a ScreenshotMetadata record.

        Raises:
            MalformedLfsPayloadError: If a token or field is missing, the
                version is not an integer, or a key appears twice
        """
        try:
            return self._parse()
        except MalformedLfsPayloadError:
            raise
        except (IndexError, ValueError) as e:
            raise MalformedLfsPayloadError(f"Malformed LFS metadata: {e}") from e

    def _parse(self) -> ScreenshotMetadata:
        tokens = self.text.split('|')

        # cvr writes "lfs|cvr|<version>|..."; drop the leading "lfs"
        if tokens[1] == CVR_APPLICATION:
            tokens = tokens[1:]

        application = tokens[0]
        version = _parse_version(tokens[1])
        metadata = ScreenshotMetadata(application=application, version=version)

        if application == SCREENSHOTMANAGER_APPLICATION:
            self._parse_screenshotmanager(tokens, metadata)
            return metadata

        is_cvr = application == CVR_APPLICATION
        seen = set()

        for token in tokens[2:]:
            # The value ends at the second colon, as other LFS readers decode it
            pieces = token.split(':')
            if len(pieces) < 2:
                raise MalformedLfsPayloadError(f"LFS token without key: {token!r}")
            key, value = pieces[0], pieces[1]

            # Some captures carry an empty "players:" field
            if not value:
                continue

            if key in seen:
                raise MalformedLfsPayloadError(f"Duplicate LFS key: {key!r}")

            parts = value.split(',')

            if key == 'author':
                metadata.author = ScreenshotAuthor(
                    id='' if is_cvr else parts[0],
                    display_name=f"{parts[1]} ({parts[0]})" if is_cvr else parts[1],
                )
            elif key == 'world':
                metadata.world = self._parse_world(value, parts, is_cvr, version)
            elif key == 'pos':
                metadata.position = ScreenshotPosition(x=parts[0], y=parts[1], z=parts[2])
            elif key == 'rq':
                metadata.requested_quality = value
            elif key == 'players':
                metadata.players = self._parse_players(value, is_cvr)
            else:
                continue

            seen.add(key)

        return metadata

    @staticmethod
    def _parse_world(value: str, parts: List[str], is_cvr: bool, version: int) -> ScreenshotWorld:
        if is_cvr:
            return ScreenshotWorld(id='', name=f"{parts[2]} ({parts[0]})", instance_id='')
        if version == 1:
            # v1 stores only the world name, which may itself contain commas
            return ScreenshotWorld(id='', name=value, instance_id='')
        return ScreenshotWorld(id=parts[0], name=parts[2], instance_id=parts[1])

    @staticmethod
    def _parse_players(value: str, is_cvr: bool) -> List[ScreenshotPlayer]:
        players = []
        for entry in value.split(';'):
            fields = entry.split(',')
            players.append(ScreenshotPlayer(
                id='' if is_cvr else fields[0],
                x=fields[1],
                y=fields[2],
                z=fields[3],
                display_name=f"{fields[4]} ({fields[0]})" if is_cvr else fields[4],
            ))
        return players

    @staticmethod
    def _parse_screenshotmanager(tokens: List[str], metadata: ScreenshotMetadata) -> None:
        # Fixed layout: author at index 2, world (id,instanceId,name) at index 3
        author = _strip_key(tokens[2], 'author').split(',')
        metadata.author = ScreenshotAuthor(id=author[0], display_name=author[1])

        world = _strip_key(tokens[3], 'world').split(',')
        metadata.world = ScreenshotWorld(id=world[0], name=world[2], instance_id=world[1])


def is_lfs_text(text: Optional[str]) -> bool:
    """True if text starts with one of the LFS application prefixes."""
    return bool(text) and text.startswith(LFS_PREFIXES)


def parse_lfs(text: str) -> ScreenshotMetadata:
    """Parse an LFS description. See LFSParser.parse."""
    return LFSParser(text).parse()
