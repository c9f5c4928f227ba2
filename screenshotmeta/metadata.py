# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Canonical screenshot metadata record

Every supported wire format decodes into ScreenshotMetadata. Positions are
kept as the decimal text found in the payload. Platforms without stable
identifiers produce empty-string ids rather than None.

Copyright 2025 DNAi inc.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

# Versions are written as signed 32-bit integers
VERSION_RANGE = range(-2 ** 31, 2 ** 31)


@dataclass
class ScreenshotAuthor:
    """User who took the screenshot."""
    id: str
    display_name: str


@dataclass
class ScreenshotWorld:
    """World / instance the screenshot was taken in."""
    id: str
    name: str
    instance_id: str


@dataclass
class ScreenshotPosition:
    """Position as decimal strings."""
    x: str
    y: str
    z: str


@dataclass
class ScreenshotPlayer:
    """A player present in the screenshot, with position relative to the camera."""
    id: str
    x: str
    y: str
    z: str
    display_name: str


@dataclass
class ScreenshotMetadata:
    """Metadata decoded from one screenshot."""
    application: str
    version: int
    author: Optional[ScreenshotAuthor] = None
    world: Optional[ScreenshotWorld] = None
    position: Optional[ScreenshotPosition] = None
    requested_quality: Optional[str] = None
    players: List[ScreenshotPlayer] = field(default_factory=list)
    source_file: Optional[Path] = None

    def contains_player_name(self, query: str, partial: bool = False, ignore_case: bool = False) -> bool:
        """
        Check the author and players for a display name.

        Args:
            query: Name to look for
            partial: Match on substring instead of equality
            ignore_case: Case-insensitive comparison
        """
        if ignore_case:
            query = query.casefold()

        names = [player.display_name for player in self.players]
        if self.author is not None:
            names.append(self.author.display_name)

        for name in names:
            if ignore_case:
                name = name.casefold()
            if (query in name) if partial else (query == name):
                return True
        return False

    def contains_player_id(self, player_id: str) -> bool:
        """Check the author and players for an exact user id."""
        if self.author is not None and self.author.id == player_id:
            return True
        return any(player.id == player_id for player in self.players)

    def to_dict(self) -> Dict[str, Any]:
        """
        JSON document form, the same shape json_parser reads back.
        """
        result: Dict[str, Any] = {
            'application': self.application,
            'version': self.version,
        }
        if self.author is not None:
            result['author'] = {
                'id': self.author.id,
                'displayName': self.author.display_name,
            }
        if self.world is not None:
            result['world'] = {
                'id': self.world.id,
                'name': self.world.name,
                'instanceId': self.world.instance_id,
            }
        if self.position is not None:
            result['pos'] = {
                'x': self.position.x,
                'y': self.position.y,
                'z': self.position.z,
            }
        if self.requested_quality is not None:
            result['rq'] = self.requested_quality
        result['players'] = [
            {
                'id': player.id,
                'x': player.x,
                'y': player.y,
                'z': player.z,
                'displayName': player.display_name,
            }
            for player in self.players
        ]
        if self.source_file is not None:
            result['sourceFile'] = str(self.source_file)
        return result
