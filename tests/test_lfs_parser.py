import pytest

from screenshotmeta.exceptions import MalformedLfsPayloadError
from screenshotmeta.lfs_parser import LFSParser, is_lfs_text, parse_lfs
from screenshotmeta.metadata import (
    ScreenshotAuthor,
    ScreenshotPlayer,
    ScreenshotPosition,
    ScreenshotWorld,
)


def test_lfs_v2():
    metadata = parse_lfs(
        "lfs|2|author:usr_AAA,Alice|world:wrld_BBB,5,MyWorld|pos:1.0,2.0,3.0"
        "|players:usr_AAA,0.1,0.2,0.3,Alice"
    )
    assert metadata.application == "lfs"
    assert metadata.version == 2
    assert metadata.author == ScreenshotAuthor(id="usr_AAA", display_name="Alice")
    assert metadata.world == ScreenshotWorld(id="wrld_BBB", name="MyWorld", instance_id="5")
    assert metadata.position == ScreenshotPosition(x="1.0", y="2.0", z="3.0")
    assert metadata.players == [
        ScreenshotPlayer(id="usr_AAA", x="0.1", y="0.2", z="0.3", display_name="Alice"),
    ]
    assert metadata.requested_quality is None


def test_cvr():
    metadata = parse_lfs(
        "lfs|cvr|1|author:AAA,Bob|world:CCC,i+xyz,RoomName|pos:0,0,0|players:DDD,0,0,0,Carol"
    )
    assert metadata.application == "cvr"
    assert metadata.version == 1
    assert metadata.author == ScreenshotAuthor(id="", display_name="Bob (AAA)")
    assert metadata.world == ScreenshotWorld(id="", name="RoomName (CCC)", instance_id="")
    assert metadata.players == [
        ScreenshotPlayer(id="", x="0", y="0", z="0", display_name="Carol (DDD)"),
    ]


def test_screenshotmanager():
    metadata = parse_lfs("screenshotmanager|0|author:usr_Z,Dana|wrld_Q,99,PugWorld")
    assert metadata.application == "screenshotmanager"
    assert metadata.version == 0
    assert metadata.author == ScreenshotAuthor(id="usr_Z", display_name="Dana")
    assert metadata.world == ScreenshotWorld(id="wrld_Q", name="PugWorld", instance_id="99")
    assert metadata.players == []
    assert metadata.position is None


def test_empty_players_is_skipped():
    metadata = parse_lfs("lfs|2|author:usr_AAA,Alice|world:wrld_BBB,5,MyWorld|pos:1,2,3|players:")
    assert metadata.players == []
    assert metadata.author.display_name == "Alice"


def test_v1_world_is_bare_name():
    metadata = parse_lfs("lfs|1|author:usr_AAA,Alice|world:Pet Park, Test Build|pos:1,2,3")
    assert metadata.world == ScreenshotWorld(id="", name="Pet Park, Test Build", instance_id="")
    assert metadata.author.id == "usr_AAA"


def test_real_capture_with_requested_quality():
    text = (
        "lfs|2|author:usr_8c0a2f22-26d4-4dc9-8396-2ab40e3d07fc,knah"
        "|world:wrld_fb4edc80-6c48-43f2-9bd1-2fa9f1345621,35341,Luminescent Ledge"
        "|pos:8.231676,0.257298,-0.1983307|rq:2"
        "|players:usr_65b9eeeb-7c91-4ad2-8ce4-addb1c161cd6,0.74,0.59,1.57,Jakkuba"
        ";usr_6a50647f-d971-4281-90c3-3fe8caf2ba80,8.07,9.76,0.16,SopwithPup"
        ";usr_8c0a2f22-26d4-4dc9-8396-2ab40e3d07fc,0.26,1.03,-0.28,knah"
    )
    metadata = parse_lfs(text)
    assert metadata.requested_quality == "2"
    assert metadata.world.name == "Luminescent Ledge"
    assert metadata.world.instance_id == "35341"
    assert metadata.position == ScreenshotPosition(x="8.231676", y="0.257298", z="-0.1983307")
    assert [p.display_name for p in metadata.players] == ["Jakkuba", "SopwithPup", "knah"]
    assert metadata.players[1].x == "8.07"


def test_real_cvr_capture():
    text = (
        "lfs|cvr|1|author:047b30bd-089d-887c-8734-b0032df5d176,Hordini"
        "|world:2e73b387-c6d4-45e9-b998-0fd6aa122c1d,i+efec20004ef1cd8b-404003-93833f-1aee112a,"
        "Bono's Basement (Anime) (#816724)"
        "|pos:2.196716,0.01250899,-3.817466"
        "|players:5301af21-eb8d-7b36-3ef4-b623fa51c2c6,3.778407,0.01250887,-3.815876,DDAkebono"
        ";f9e5c36c-41b0-7031-1185-35b4034010c0,4.828233,0.01250893,-3.920135,Natsumi"
    )
    metadata = parse_lfs(text)
    assert metadata.world.name == (
        "Bono's Basement (Anime) (#816724) (2e73b387-c6d4-45e9-b998-0fd6aa122c1d)"
    )
    assert metadata.players[1].display_name == "Natsumi (f9e5c36c-41b0-7031-1185-35b4034010c0)"
    assert all(p.id == "" for p in metadata.players)


def test_value_ends_at_second_colon():
    metadata = parse_lfs("lfs|2|world:wrld_1,7,Club: Night Edition|rq:2:extra")
    assert metadata.world == ScreenshotWorld(id="wrld_1", name="Club", instance_id="7")
    assert metadata.requested_quality == "2"


def test_v1_world_name_ends_at_second_colon():
    metadata = parse_lfs("lfs|1|world:Club: Night Edition")
    assert metadata.world.name == "Club"


def test_negative_version():
    assert parse_lfs("lfs|-1|rq:1").version == -1


def test_unknown_keys_ignored():
    metadata = parse_lfs("lfs|2|author:usr_AAA,Alice|cam:1,2|foo:bar")
    assert metadata.author.id == "usr_AAA"


@pytest.mark.parametrize("text", [
    "lfs",
    "lfs|two|author:usr_AAA,Alice",
    "lfs|2_0|author:usr_AAA,Alice",
    "lfs| 2 |author:usr_AAA,Alice",
    "lfs|\u0662|author:usr_AAA,Alice",
    "lfs||author:usr_AAA,Alice",
    "lfs|2147483648|author:usr_AAA,Alice",
    "lfs|" + "9" * 5000 + "|author:usr_AAA,Alice",
    "screenshotmanager|+0|author:usr_Z,Dana|wrld_Q,99,PugWorld",
    "lfs|2|author:usr_AAA",
    "lfs|2|world:wrld_BBB,5",
    "lfs|2|pos:1,2",
    "lfs|2|players:usr_AAA,0.1,0.2,0.3",
    "lfs|2|players:usr_AAA,0.1,0.2,0.3,Alice;",
    "lfs|2|noseparator",
    "lfs|2|author:usr_A,Alice|author:usr_B,Bob",
    "lfs|cvr",
    "screenshotmanager|0|author:usr_Z,Dana",
    "screenshotmanager|0|author:usr_Z,Dana|wrld_Q,99",
])
def test_malformed(text):
    with pytest.raises(MalformedLfsPayloadError):
        LFSParser(text).parse()


@pytest.mark.parametrize("text,expected", [
    ("lfs|2|", True),
    ("screenshotmanager|0|", True),
    ('{"application": "VRCX"}', False),
    ("", False),
    (None, False),
    ("LFS|2", False),
])
def test_is_lfs_text(text, expected):
    assert is_lfs_text(text) is expected
