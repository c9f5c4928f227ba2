import json

import pytest

from screenshotmeta.config import ScreenshotConfig
from screenshotmeta.decoder import (
    DecodeResult,
    MetadataFormat,
    ResultKind,
    classify_text,
    decode_text,
    get_screenshot_metadata,
)
from screenshotmeta.exceptions import (
    MalformedStructuredPayloadError,
    UnknownMetadataFormatError,
)
from screenshotmeta.json_parser import JSONParser, metadata_from_dict
from screenshotmeta.lfs_parser import parse_lfs
from screenshotmeta.png_writer import write_png_description

from conftest import make_png

SCENARIO_A = "lfs|2|author:usr_AAA,Alice|world:wrld_BBB,5,MyWorld|pos:1.0,2.0,3.0|players:usr_AAA,0.1,0.2,0.3,Alice"

VRCX_JSON = json.dumps({
    "application": "VRCX",
    "version": 1,
    "author": {"id": "usr_AAA", "displayName": "Alice"},
    "world": {"id": "wrld_BBB", "name": "MyWorld", "instanceId": "5~private(usr_AAA)"},
    "players": [
        {"id": "usr_CCC", "displayName": "Carol", "x": 1.5, "y": "0", "z": "-2"},
    ],
})


@pytest.mark.parametrize("text,expected", [
    (SCENARIO_A, MetadataFormat.LFS),
    ("screenshotmanager|0|a,b|c,d,e", MetadataFormat.LFS),
    (VRCX_JSON, MetadataFormat.JSON),
    ("Taken with some other tool", MetadataFormat.UNKNOWN),
    (" {}", MetadataFormat.UNKNOWN),
])
def test_classify_text(text, expected):
    assert classify_text(text) is expected


def test_decode_text_lfs_sets_source_file(tmp_path):
    metadata = decode_text(SCENARIO_A, tmp_path / "a.png")
    assert metadata.application == "lfs"
    assert metadata.source_file == tmp_path / "a.png"


def test_decode_text_json():
    metadata = decode_text(VRCX_JSON)
    assert metadata.application == "VRCX"
    assert metadata.world.instance_id == "5~private(usr_AAA)"
    assert metadata.players[0].x == "1.5"
    assert metadata.players[0].display_name == "Carol"


def test_decode_text_unknown():
    with pytest.raises(UnknownMetadataFormatError):
        decode_text("made with photoshop")


class TestJSONParser:
    def test_round_trip_with_to_dict(self):
        metadata = parse_lfs(SCENARIO_A + "|rq:3")
        document = metadata.to_dict()
        assert metadata_from_dict(document) == metadata
        assert JSONParser(json.dumps(document)).parse() == metadata

    def test_minimal_document(self):
        metadata = JSONParser("{}").parse()
        assert metadata.application == ""
        assert metadata.version == 0
        assert metadata.author is None
        assert metadata.players == []

    @pytest.mark.parametrize("text", [
        "{not json",
        "[]",
        '{"version": "1"}',
        '{"author": "Alice"}',
        '{"players": {"id": "x"}}',
        '{"players": ["x"]}',
        '{"world": {"name": ["a"]}}',
        '{"version": ' + '9' * 5000 + '}',
        '{"version": 2147483648}',
        '{"a": ' + '[' * 20000 + ']' * 20000 + '}',
    ])
    def test_malformed(self, text):
        with pytest.raises(MalformedStructuredPayloadError):
            JSONParser(text).parse()


class TestGetScreenshotMetadata:
    def test_ok(self, png_file):
        write_png_description(png_file, SCENARIO_A)
        result = get_screenshot_metadata(png_file)
        assert result.kind is ResultKind.OK
        assert result.ok
        assert result.metadata.source_file == png_file
        assert result.metadata.author.display_name == "Alice"

    def test_json_in_file(self, write_png):
        path = write_png("json.png", VRCX_JSON)
        result = get_screenshot_metadata(path)
        assert result.ok
        assert result.metadata.application == "VRCX"

    def test_no_description(self, png_file):
        result = get_screenshot_metadata(png_file)
        assert result.kind is ResultKind.NOT_FOUND
        assert result.metadata is None
        assert not result.is_error

    def test_empty_description(self, write_png):
        result = get_screenshot_metadata(write_png("empty.png", ""))
        assert result.kind is ResultKind.NOT_FOUND

    def test_missing_file(self, tmp_path):
        result = get_screenshot_metadata(tmp_path / "missing.png")
        assert result.kind is ResultKind.NOT_A_CONTAINER
        assert result.is_error

    def test_wrong_extension(self, tmp_path):
        path = tmp_path / "shot.PNG"
        path.write_bytes(make_png())
        assert get_screenshot_metadata(path).kind is ResultKind.NOT_A_CONTAINER

        config = ScreenshotConfig(require_png_extension=False)
        assert get_screenshot_metadata(path, config).kind is ResultKind.NOT_FOUND

    def test_not_png_content(self, tmp_path):
        path = tmp_path / "fake.png"
        path.write_bytes(b"GIF89a" + b"\x00" * 64)
        assert get_screenshot_metadata(path).kind is ResultKind.NOT_A_CONTAINER

    def test_unknown_format(self, write_png):
        result = get_screenshot_metadata(write_png("other.png", "Made with VRChat"))
        assert result.kind is ResultKind.UNKNOWN_FORMAT
        assert isinstance(result.error, UnknownMetadataFormatError)

    def test_malformed_lfs(self, write_png):
        result = get_screenshot_metadata(write_png("bad.png", "lfs|2|author:usr_AAA"))
        assert result.kind is ResultKind.MALFORMED_LFS

    def test_malformed_json(self, write_png):
        result = get_screenshot_metadata(write_png("bad.png", "{broken"))
        assert result.kind is ResultKind.MALFORMED_STRUCTURED

    def test_io_failure(self, png_file, monkeypatch):
        def fail(*args, **kwargs):
            raise PermissionError("denied")

        monkeypatch.setattr("screenshotmeta.decoder.read_chunk_from_file", fail)
        result = get_screenshot_metadata(png_file)
        assert result.kind is ResultKind.IO_FAILURE
        assert isinstance(result.error.__cause__, PermissionError)

    def test_description_outside_read_window(self, write_png):
        path = write_png("late.png", SCENARIO_A)
        # The iTXt chunk starts at byte 33 and ends well past byte 64
        assert get_screenshot_metadata(path, ScreenshotConfig(read_window=64)).kind is ResultKind.NOT_FOUND
        assert get_screenshot_metadata(path).ok

    def test_custom_keyword_length(self, png_file):
        # The keyword decides how many bytes are skipped before the text
        from screenshotmeta.png_writer import PNGWriter
        PNGWriter(keyword="Comment").write_description(png_file, SCENARIO_A)
        result = get_screenshot_metadata(png_file, ScreenshotConfig(description_keyword="Comment"))
        assert result.ok


def test_from_error_rejects_unknown_error_type(tmp_path):
    from screenshotmeta.exceptions import ScreenshotMetaError
    with pytest.raises(TypeError):
        DecodeResult.from_error(tmp_path, ScreenshotMetaError("x"))
