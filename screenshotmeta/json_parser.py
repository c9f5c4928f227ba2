# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Parser for JSON screenshot descriptions.

This is the document form written by ScreenshotMetadata.to_dict:

    {"application": "VRCX", "version": 1,
     "author": {"id": "usr_...", "displayName": "..."},
     "world": {"id": "wrld_...", "name": "...", "instanceId": "..."},
     "players": [{"id": "usr_...", "displayName": "...", "x": "0.1", ...}]}
"""

import json
from typing import Any, Dict, List, Optional

from screenshotmeta.exceptions import MalformedStructuredPayloadError
from screenshotmeta.metadata import (
    VERSION_RANGE,
    ScreenshotAuthor,
    ScreenshotMetadata,
    ScreenshotPlayer,
    ScreenshotPosition,
    ScreenshotWorld,
)


def _text(value: Any, field_name: str) -> str:
    if value is None:
        return ''
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise MalformedStructuredPayloadError(f"Field '{field_name}' must be a string")
    return str(value)


def _section(document: Dict[str, Any], key: str) -> Optional[Dict[str, Any]]:
    value = document.get(key)
    if value is None:
        return None
    if not isinstance(value, dict):
        raise MalformedStructuredPayloadError(f"Field '{key}' must be an object")
    return value


def metadata_from_dict(document: Dict[str, Any]) -> ScreenshotMetadata:
    """
    Build a ScreenshotMetadata record from its JSON document form.

    Raises:
        MalformedStructuredPayloadError: If a field has the wrong type
    """
    if not isinstance(document, dict):
        raise MalformedStructuredPayloadError("Metadata document must be a JSON object")

    version = document.get('version', 0)
    if isinstance(version, bool) or not isinstance(version, int):
        raise MalformedStructuredPayloadError("Field 'version' must be an integer")
    if version not in VERSION_RANGE:
        raise MalformedStructuredPayloadError("Field 'version' is out of range")

    metadata = ScreenshotMetadata(
        application=_text(document.get('application'), 'application'),
        version=version,
    )

    author = _section(document, 'author')
    if author is not None:
        metadata.author = ScreenshotAuthor(
            id=_text(author.get('id'), 'author.id'),
            display_name=_text(author.get('displayName'), 'author.displayName'),
        )

    world = _section(document, 'world')
    if world is not None:
        metadata.world = ScreenshotWorld(
            id=_text(world.get('id'), 'world.id'),
            name=_text(world.get('name'), 'world.name'),
            instance_id=_text(world.get('instanceId'), 'world.instanceId'),
        )

    pos = _section(document, 'pos')
    if pos is not None:
        metadata.position = ScreenshotPosition(
            x=_text(pos.get('x'), 'pos.x'),
            y=_text(pos.get('y'), 'pos.y'),
            z=_text(pos.get('z'), 'pos.z'),
        )

    if document.get('rq') is not None:
        metadata.requested_quality = _text(document['rq'], 'rq')

    metadata.players = _players(document.get('players'))
    return metadata


def _players(value: Any) -> List[ScreenshotPlayer]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise MalformedStructuredPayloadError("Field 'players' must be an array")

    players = []
    for index, player in enumerate(value):
        if not isinstance(player, dict):
            raise MalformedStructuredPayloadError(f"Player {index} must be an object")
        players.append(ScreenshotPlayer(
            id=_text(player.get('id'), f'players[{index}].id'),
            x=_text(player.get('x'), f'players[{index}].x'),
            y=_text(player.get('y'), f'players[{index}].y'),
            z=_text(player.get('z'), f'players[{index}].z'),
            display_name=_text(player.get('displayName'), f'players[{index}].displayName'),
        ))
    return players


class JSONParser:
    """
    Parser for JSON screenshot descriptions.
    """

    def __init__(self, text: str):
        self.text = text

    def parse(self) -> ScreenshotMetadata:
        """
        Parse the JSON document.

        Raises:
            MalformedStructuredPayloadError: If the text is not valid JSON or
                does not have the expected shape
        """
        try:
            document = json.loads(self.text)
        except (ValueError, RecursionError) as e:
            # JSONDecodeError is a ValueError; deep nesting raises RecursionError
            raise MalformedStructuredPayloadError(f"Invalid JSON metadata: {e}") from e
        return metadata_from_dict(document)
