import logging

import pytest

from dashfmt.errors import (
    DuplicateTag,
    FieldMissing,
    FieldValueInvalid,
    FloatSyntaxInvalid,
    IntegerSyntaxInvalid,
)
from dashfmt.models.creator import Creator
from dashfmt.models.level import AUTO, Level
from dashfmt.models.profile import Profile
from dashfmt.models.song import NewgroundsSong
from dashfmt.models.user import SearchedUser
from dashfmt.normalize import normalize_record
from dashfmt.processors import LEVEL_DATA, PASSWORD, PERCENT, Password
from dashfmt.schema import to_dict
from dashfmt.thunk import Thunk
from dashfmt.variants import (
    DemonRating,
    Featured,
    FeatureState,
    GameVersion,
    IconType,
    LevelLength,
    LevelRating,
    MainSong,
    ModLevel,
    Rgb,
    Unknown,
)

DUNE_LINK_RAW = "https%3A%2F%2Faudio.ngfiles.com%2F771000%2F771277_Creo---Dune.mp3%3Ff1508708604"

DARK_REALM_DATA = (
    "1:11774780:2:Dark Realm:5:2:6:2073761:8:10:9:30:10:90786:12:0:13:20:14:10974:17:1:43:0:25::18:10:"
    "19:11994:42:0:45:0:3:TXkgYmVzdCBsZXZlbCB5ZXQuIFZpZGVvIG9uIG15IFlvdVR1YmUuIEhhdmUgZnVuIGluIHRoaXMg"
    "ZmFzdC1wYWNlZCBERU1PTiA-OikgdjIgRml4ZWQgc29tZSB0aGluZ3M=:15:3:30:0:31:0:37:3:38:1:39:10:46:1:47:2:"
    "35:444085"
)

CREO_DUNE_DATA = (
    "1~|~771277~|~2~|~Creo - Dune~|~3~|~50531~|~4~|~CreoMusic~|~5~|~8.03~|~6~|~~|~10~|~"
    + DUNE_LINK_RAW
    + "~|~7~|~UCsCWA3Y3JppL6feQiMRgm6Q~|~8~|~1"
)

# the same song, fields in ascending tag order
CREO_DUNE_DATA_ORDERED = (
    "1~|~771277~|~2~|~Creo - Dune~|~3~|~50531~|~4~|~CreoMusic~|~5~|~8.03~|~6~|~~|~"
    "7~|~UCsCWA3Y3JppL6feQiMRgm6Q~|~8~|~1~|~10~|~" + DUNE_LINK_RAW
)

CREO_DUNE_DATA_TOO_MANY_FIELDS = (
    "1~|~771277~|~54~|~should be ignored~|~2~|~Creo - Dune~|~3~|~50531~|~4~|~CreoMusic~|~5~|~8.03~|~"
    "6~|~~|~7~|~UCsCWA3Y3JppL6feQiMRgm6Q~|~8~|~1~|~10~|~" + DUNE_LINK_RAW + "~|~9~|~should be ignored"
)

PROFILE_STARDUST1971_DATA = (
    "1:stardust1971:2:2073761:13:149:17:498:10:9:11:10:3:13723:46:2312:4:484:8:19:18:0:19:0:50:0:20:"
    "stardust19710:21:95:22:48:23:33:24:18:25:11:26:10:28:1:43:2:48:13:30:0:16:8451:31:0:44:"
    "stadust1971:45::49:0:38:0:39:579:40:0:29:1"
)

PROFILE_STARDUST1971_NORMALIZED = (
    "1:stardust1971:2:2073761:3:13723:4:484:8:19:10:9:11:10:13:149:16:8451:17:498:18:0:19:0:"
    "20:stardust19710:21:95:22:48:23:33:24:18:25:11:26:10:28:1:29:1:30:0:31:0:43:2:"
    "44:stadust1971:45::46:2312:48:13:49:0:50:0"
)

SEARCHED_USER_DATA = "1:Stardust1971:2:2073761:13:149:17:498:6::9:2:10:9:11:10:14:6:15:2:16:8451:3:13723:8:19:4:484"

CREATOR_REGISTERED_DATA = "4170784:Serponge:119741"
CREATOR_REGISTERED_DATA_TOO_MANY_FIELDS = "4170784:Serponge:119741:34:fda:32:asd:3"
CREATOR_UNREGISTERED_DATA = "4170784:Serponge:0"


def creo_dune():
    return NewgroundsSong(
        song_id=771277,
        name="Creo - Dune",
        index_3=50531,
        artist="CreoMusic",
        filesize=8.03,
        index_6=None,
        index_7="UCsCWA3Y3JppL6feQiMRgm6Q",
        index_8="1",
        link=Thunk.processed(PERCENT, "https://audio.ngfiles.com/771000/771277_Creo---Dune.mp3?f1508708604"),
    )


def stardust1971():
    return Profile(
        name="stardust1971",
        user_id=2073761,
        stars=13723,
        demons=484,
        creator_points=19,
        primary_color=Rgb(255, 0, 0),
        secondary_color=Rgb(255, 125, 0),
        secret_coins=149,
        account_id=8451,
        user_coins=498,
        index_18="0",
        index_19="0",
        youtube_url="stardust19710",
        cube_index=95,
        ship_index=48,
        ball_index=33,
        ufo_index=18,
        wave_index=11,
        robot_index=10,
        has_glow=True,
        index_29="1",
        global_rank=0,
        index_31="0",
        spider_index=2,
        twitter_url="stadust1971",
        twitch_url=None,
        diamonds=2312,
        death_effect_index=13,
        mod_level=ModLevel.NONE,
        index_50="0",
    )


def test_serialize_song():
    assert creo_dune().to_robtop_string() == CREO_DUNE_DATA_ORDERED


def test_deserialize_song():
    song = NewgroundsSong.from_robtop_str(CREO_DUNE_DATA)
    assert not song.link.is_processed
    song.link.process()
    assert song == creo_dune()


def test_song_with_unprocessed_link_differs_from_processed():
    assert NewgroundsSong.from_robtop_str(CREO_DUNE_DATA) != creo_dune()


def test_deserialize_too_many_fields():
    song = NewgroundsSong.from_robtop_str(CREO_DUNE_DATA_TOO_MANY_FIELDS)
    song.link.process()
    assert song == creo_dune()
    assert normalize_record(NewgroundsSong, CREO_DUNE_DATA_TOO_MANY_FIELDS) == CREO_DUNE_DATA_ORDERED


def test_unknown_tags_are_logged(caplog):
    caplog.set_level(logging.DEBUG, logger="dashfmt.schema")
    NewgroundsSong.from_robtop_str(CREO_DUNE_DATA_TOO_MANY_FIELDS)
    assert "discarding unknown tag 54" in caplog.text
    assert "discarding unknown tag 9" in caplog.text


def test_serialize_registered_creator():
    creator = Creator(user_id=4170784, name="Serponge", account_id=119741)
    assert creator.to_robtop_string() == CREATOR_REGISTERED_DATA


def test_serialize_unregistered_creator():
    creator = Creator(user_id=4170784, name="Serponge", account_id=None)
    assert creator.to_robtop_string() == CREATOR_UNREGISTERED_DATA


def test_deserialize_registered_creator():
    assert Creator.from_robtop_str(CREATOR_REGISTERED_DATA) == Creator(4170784, "Serponge", 119741)


def test_deserialize_unregistered_creator():
    assert Creator.from_robtop_str(CREATOR_UNREGISTERED_DATA) == Creator(4170784, "Serponge", None)


def test_creator_extra_positions_are_ignored():
    creator = Creator.from_robtop_str(CREATOR_REGISTERED_DATA_TOO_MANY_FIELDS)
    assert creator == Creator(4170784, "Serponge", 119741)
    assert creator.to_robtop_string() == CREATOR_REGISTERED_DATA


def test_deserialize_profile():
    profile = Profile.from_robtop_str(PROFILE_STARDUST1971_DATA)
    assert profile == stardust1971()
    assert profile.mod_level is ModLevel.NONE
    assert profile.primary_color.as_tuple() == (255, 0, 0)
    assert profile.secondary_color.as_tuple() == (255, 125, 0)


def test_profile_roundtrip():
    data = stardust1971().to_robtop_string()
    assert data == PROFILE_STARDUST1971_NORMALIZED
    assert Profile.from_robtop_str(data) == stardust1971()


def test_profile_unknown_variants_survive_roundtrip():
    data = PROFILE_STARDUST1971_DATA.replace(":10:9:", ":10:200:").replace(":49:0:", ":49:7:")
    profile = Profile.from_robtop_str(data)
    assert profile.primary_color == Unknown("Color", 200)
    assert profile.mod_level == Unknown("ModLevel", 7)
    out = profile.to_robtop_string()
    assert ":10:200:" in out
    assert ":49:7:" in out
    assert Profile.from_robtop_str(out) == profile


@pytest.mark.parametrize("policy, expected", [("last", ModLevel.ELDER), ("first", ModLevel.NONE)])
def test_profile_duplicate_tags(policy, expected):
    profile = Profile.from_robtop_str(PROFILE_STARDUST1971_DATA + ":49:2", duplicates=policy)
    assert profile.mod_level is expected


def test_profile_duplicate_tags_rejected():
    with pytest.raises(DuplicateTag):
        Profile.from_robtop_str(PROFILE_STARDUST1971_DATA + ":49:2", duplicates="error")


def test_profile_missing_field():
    with pytest.raises(FieldMissing) as excinfo:
        Profile.from_robtop_str(PROFILE_STARDUST1971_DATA.replace("1:stardust1971:", ""))
    assert excinfo.value.name == "name"
    assert excinfo.value.tag == 1


def test_bad_integer_field():
    with pytest.raises(FieldValueInvalid) as excinfo:
        Creator.from_robtop_str("41x0784:Serponge:0")
    assert excinfo.value.name == "user_id"
    assert isinstance(excinfo.value.__cause__, IntegerSyntaxInvalid)


def test_overflowing_float_field():
    with pytest.raises(FieldValueInvalid) as excinfo:
        normalize_record(NewgroundsSong, CREO_DUNE_DATA.replace("5~|~8.03", "5~|~1e999"))
    assert excinfo.value.name == "filesize"
    assert isinstance(excinfo.value.__cause__, FloatSyntaxInvalid)


def test_required_field_cannot_be_written_as_none():
    with pytest.raises(FieldMissing):
        Creator(user_id=None, name="Serponge", account_id=None).to_robtop_string()


def test_searched_user():
    user = SearchedUser.from_robtop_str(SEARCHED_USER_DATA)
    assert user.icon_type is IconType.SPIDER
    assert user.has_glow is True
    assert user.index_6 is None
    assert user.primary_color == Rgb(255, 0, 0)
    assert user.to_robtop_string() == (
        "1:Stardust1971:2:2073761:3:13723:4:484:6::8:19:9:2:10:9:11:10:13:149:14:6:15:2:16:8451:17:498"
    )


def test_deserialize_partial_level():
    level = Level.from_robtop_str(DARK_REALM_DATA)
    assert level.level_id == 11774780
    assert level.name == "Dark Realm"
    assert level.length is LevelLength.LONG
    assert level.is_demon is True
    assert level.is_auto is False
    assert level.rating is LevelRating.HARD
    assert level.demon_rating is DemonRating.HARD
    assert level.difficulty is DemonRating.HARD
    assert level.main_song == MainSong("Stereo Madness", "ForeverBound")
    assert level.gd_version == GameVersion(2, 0)
    assert level.featured == Featured(11994)
    assert level.copy_of is None
    assert level.object_amount is None
    assert level.custom_song == 444085
    assert level.stars_requested == 10
    assert level.index_40 is None
    assert not level.is_download
    assert not level.description.is_processed
    assert level.description.process().startswith("My best level yet.")


def test_level_difficulty():
    easy_demon = Level.from_robtop_str(DARK_REALM_DATA.replace(":43:0:", ":43:3:"))
    assert easy_demon.difficulty is DemonRating.EASY

    normal = Level.from_robtop_str(
        DARK_REALM_DATA.replace(":9:30:", ":9:20:").replace(":17:1:", ":17:0:")
    )
    assert normal.difficulty is LevelRating.NORMAL

    auto = Level.from_robtop_str(DARK_REALM_DATA.replace(":25::", ":25:1:"))
    assert auto.difficulty == AUTO


def test_level_feature_states():
    not_featured = Level.from_robtop_str(DARK_REALM_DATA.replace(":19:11994:", ":19:0:"))
    assert not_featured.featured is FeatureState.NOT_FEATURED
    unfeatured = Level.from_robtop_str(DARK_REALM_DATA.replace(":19:11994:", ":19:-1:"))
    assert unfeatured.featured is FeatureState.UNFEATURED


@pytest.mark.parametrize(
    "field, before, after, expected",
    [
        ("rating", ":9:30:", ":9:35:", Unknown("LevelRating", 35)),
        ("demon_rating", ":43:0:", ":43:9:", Unknown("DemonRating", 9)),
        ("featured", ":19:11994:", ":19:-7:", Unknown("Featured", -7)),
        ("gd_version", ":13:20:", ":13:10:", Unknown("GameVersion", 10)),
        ("main_song", ":12:0:", ":12:99:", Unknown("MainSong", 99)),
    ],
)
def test_level_unknown_codes_survive_roundtrip(field, before, after, expected):
    level = Level.from_robtop_str(DARK_REALM_DATA.replace(before, after))
    assert getattr(level, field) == expected
    out = level.to_robtop_string()
    assert after in out
    assert Level.from_robtop_str(out) == level


def test_partial_level_keeps_description_raw_when_unprocessed():
    level = Level.from_robtop_str(DARK_REALM_DATA)
    out = level.to_robtop_string()
    assert ":3:TXkgYmVzdCBsZXZlbCB5ZXQu" in out
    assert ":4:" not in out
    assert ":27:" not in out


def test_download_level():
    level_string = "kS38,1_40_2_125_3_255;1,1,2,15,3,15;"
    data = (
        DARK_REALM_DATA
        + ":4:" + LEVEL_DATA.encode(level_string)
        + ":27:" + PASSWORD.encode(Password.copy(3101))
        + ":28:5 years:29:5 years"
    )
    level = Level.from_robtop_str(data)
    assert level.is_download
    assert level.time_since_upload == "5 years"
    assert level.password.process() == Password.copy(3101)
    assert level.level_data.process() == level_string

    again = Level.from_robtop_str(level.to_robtop_string())
    again.password.process()
    again.level_data.process()
    assert again == level


@pytest.mark.parametrize(
    "kind, data",
    [
        (Profile, PROFILE_STARDUST1971_DATA),
        (NewgroundsSong, CREO_DUNE_DATA),
        (NewgroundsSong, CREO_DUNE_DATA_TOO_MANY_FIELDS),
        (Creator, CREATOR_REGISTERED_DATA_TOO_MANY_FIELDS),
        (Creator, CREATOR_UNREGISTERED_DATA),
        (SearchedUser, SEARCHED_USER_DATA),
        (Level, DARK_REALM_DATA),
    ],
)
def test_write_read_fixed_point(kind, data):
    once = normalize_record(kind, data)
    twice = normalize_record(kind, once)
    assert twice == once
    assert kind.from_robtop_str(once).to_robtop_string() == once


def test_processed_thunks_reach_the_same_fixed_point():
    level = Level.from_robtop_str(DARK_REALM_DATA)
    raw = level.to_robtop_string()
    level.description.process()
    assert level.to_robtop_string() == raw


def test_to_dict_decodes_thunks():
    song = NewgroundsSong.from_robtop_str(CREO_DUNE_DATA)
    data = to_dict(song)
    assert data["link"] == "https://audio.ngfiles.com/771000/771277_Creo---Dune.mp3?f1508708604"
    assert not song.link.is_processed

    profile = to_dict(Profile.from_robtop_str(PROFILE_STARDUST1971_DATA))
    assert profile["mod_level"] == "none"
    assert profile["primary_color"] == [255, 0, 0]
    assert profile["twitch_url"] is None
