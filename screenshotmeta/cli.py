# Copyright 2025 DNAi inc.

# Dual-licensed under the DNAi Free License v1.1 and the
# DNAi Commercial License v1.1.
# See the LICENSE files in the project root for details.

"""
Command-line interface for screenshotmeta

Read, write and search screenshot descriptions.

Copyright 2025 DNAi inc.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import chardet

from screenshotmeta.config import ScreenshotConfig
from screenshotmeta.decoder import get_screenshot_metadata
from screenshotmeta.png_reader import read_png_resolution
from screenshotmeta.png_writer import PNGWriter
from screenshotmeta.search import ScreenshotSearchType, find_screenshots

logger = logging.getLogger(__name__)


def _flatten(value: Any, prefix: str, lines: List[Tuple[str, str]]) -> None:
    if isinstance(value, dict):
        for key, item in value.items():
            _flatten(item, f"{prefix}.{key}" if prefix else key, lines)
    elif isinstance(value, list):
        for index, item in enumerate(value):
            _flatten(item, f"{prefix}[{index}]", lines)
    else:
        lines.append((prefix, str(value)))


def format_output(metadata: Dict[str, Any], format_type: str = "text") -> str:
    """
    Format one metadata document.

    Args:
        metadata: Metadata in its JSON document form
        format_type: Output format ('text', 'json')

    Returns:
        Formatted output string
    """
    if format_type == "json":
        return json.dumps(metadata, indent=2, ensure_ascii=False)

    lines: List[Tuple[str, str]] = []
    _flatten(metadata, "", lines)
    return "\n".join(f"{key}: {value}" for key, value in lines)


def read_text_file(file_path: Path) -> str:
    """
    Read a text file, detecting its encoding with chardet.

    Falls back to UTF-8 when detection is unsure or the detected codec
    cannot decode the data.
    """
    file_data = file_path.read_bytes()
    if not file_data:
        return ""

    detected = chardet.detect(file_data)
    encoding = detected.get('encoding')
    confidence = detected.get('confidence') or 0.0

    if encoding and confidence > 0.5:
        try:
            return file_data.decode(encoding)
        except (UnicodeDecodeError, LookupError):
            logger.debug("Detected encoding %s failed for %s, using UTF-8", encoding, file_path)

    return file_data.decode('utf-8', errors='replace')


def _config_from_args(args: argparse.Namespace) -> ScreenshotConfig:
    overrides = {
        'description_keyword': args.keyword,
        'read_window': args.read_window,
    }
    return ScreenshotConfig.from_dict({k: v for k, v in overrides.items() if v is not None})


def cmd_read(args: argparse.Namespace) -> int:
    config = _config_from_args(args)
    format_type = "json" if args.json else "text"
    status = 0

    for file_path in args.files:
        result = get_screenshot_metadata(file_path, config)
        if result.ok:
            print(format_output(result.metadata.to_dict(), format_type))
        elif result.error is not None:
            print(f"Error: {file_path}: {result.error}", file=sys.stderr)
            status = 1
        else:
            print(f"{file_path}: no metadata", file=sys.stderr)
            status = 1

    return status


def cmd_write(args: argparse.Namespace) -> int:
    config = _config_from_args(args)

    if args.text_file is not None:
        text = read_text_file(args.text_file)
    else:
        text = args.text

    writer = PNGWriter(config.description_keyword, config.min_file_size)
    if writer.write_description(args.file, text):
        print(f"Description written to {args.file}")
        return 0

    print(f"Not written: {args.file} is not a PNG or already has a description", file=sys.stderr)
    return 1


def cmd_resolution(args: argparse.Namespace) -> int:
    status = 0
    for file_path in args.files:
        resolution = read_png_resolution(file_path)
        if resolution is None:
            print(f"Error: {file_path}: not a PNG file", file=sys.stderr)
            status = 1
        else:
            print(f"{file_path}: {resolution}")
    return status


def cmd_search(args: argparse.Namespace) -> int:
    config = _config_from_args(args)
    search_type = ScreenshotSearchType(args.type)
    matches = find_screenshots(args.query, args.directory, search_type, config=config)

    if args.json:
        print(json.dumps([m.to_dict() for m in matches], indent=2, ensure_ascii=False))
    else:
        for metadata in matches:
            print(metadata.source_file)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="screenshotmeta",
        description="Read and write VR screenshot metadata stored in PNG files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Read metadata
  screenshotmeta read VRChat_2023-01-01.png

  # Write a description
  screenshotmeta write VRChat_2023-01-01.png --text "lfs|2|author:usr_...,Name"

  # Find screenshots with a player
  screenshotmeta search ~/Pictures/VRChat Natsumi --type username
        """
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging')
    parser.add_argument('--keyword', type=str, help='iTXt keyword (default: Description)')
    parser.add_argument('--read-window', type=int, help='Bytes read from the start of each file')

    subparsers = parser.add_subparsers(dest='command', required=True)

    read_parser = subparsers.add_parser('read', help='Decode screenshot metadata')
    read_parser.add_argument('files', nargs='+', type=Path, help='PNG file(s)')
    read_parser.add_argument('-j', '--json', action='store_true', help='Output JSON')
    read_parser.set_defaults(func=cmd_read)

    write_parser = subparsers.add_parser('write', help='Write a description into a PNG file')
    write_parser.add_argument('file', type=Path, help='PNG file')
    text_group = write_parser.add_mutually_exclusive_group(required=True)
    text_group.add_argument('--text', type=str, help='Description text')
    text_group.add_argument('--text-file', type=Path, help='Read description text from a file')
    write_parser.set_defaults(func=cmd_write)

    resolution_parser = subparsers.add_parser('resolution', help='Print image resolution')
    resolution_parser.add_argument('files', nargs='+', type=Path, help='PNG file(s)')
    resolution_parser.set_defaults(func=cmd_resolution)

    search_parser = subparsers.add_parser('search', help='Search screenshots in a directory')
    search_parser.add_argument('directory', type=Path, help='Directory to search recursively')
    search_parser.add_argument('query', type=str, help='Name or id to look for')
    search_parser.add_argument('-t', '--type', choices=[t.value for t in ScreenshotSearchType],
                               default=ScreenshotSearchType.USERNAME.value, help='Field to match')
    search_parser.add_argument('-j', '--json', action='store_true', help='Output JSON')
    search_parser.set_defaults(func=cmd_search)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
