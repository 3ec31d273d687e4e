"""Levels, from search results (partial) or downloads (with level data).

Search results carry the level metadata only. Download responses add the
compressed level data (4), the copy password (27), upload/update ages
(28, 29) and index 36; those are left out when writing a level that has
none of them.

The description, level data and password are thunks: decoding them costs
base64 work (and decompression for the level data), which bulk search
consumers usually do not need.

Ratings, feature status, game version and main song are coded fields
that keep codes they do not know as Unknown. The difficulty property
combines the auto and demon flags with the two ratings.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..processors import BASE64, LEVEL_DATA, PASSWORD, Password
from ..schema import BOOL, INT, TEXT, Coded, Field, HasRobtopFormat, Schema, Thunked
from ..thunk import Thunk
from ..variants import (
    FEATURED,
    GAME_VERSIONS,
    MAIN_SONGS,
    DemonRating,
    FeatureState,
    Featured,
    GameVersion,
    LevelLength,
    LevelRating,
    MainSong,
    Unknown,
)

# difficulty of a level flagged as auto
AUTO = "auto"


@dataclass
class Level(HasRobtopFormat):
    level_id: int
    name: str
    description: Optional[Thunk[str]]
    version: int
    creator: int
    difficulty_denominator: int
    rating: Union[LevelRating, Unknown]
    downloads: int
    main_song: Union[MainSong, Unknown]
    gd_version: Union[GameVersion, Unknown]
    likes: int
    length: Union[LevelLength, Unknown]
    is_demon: bool
    stars: int
    featured: Union[FeatureState, Featured, Unknown]
    is_auto: bool
    copy_of: Optional[int]
    index_31: Optional[str]
    custom_song: Optional[int]
    coin_amount: int
    coins_verified: bool
    stars_requested: Optional[int]
    index_40: Optional[str]
    is_epic: bool
    demon_rating: Union[DemonRating, Unknown]
    object_amount: Optional[int]
    index_46: Optional[str]
    index_47: Optional[str]
    level_data: Optional[Thunk[str]] = None
    password: Optional[Thunk[Password]] = None
    time_since_upload: Optional[str] = None
    time_since_update: Optional[str] = None
    index_36: Optional[str] = None

    __robtop_schema__ = Schema((
        Field("level_id", 1, INT),
        Field("name", 2, TEXT),
        Field("description", 3, Thunked(BASE64), optional=True),
        Field("level_data", 4, Thunked(LEVEL_DATA), optional=True, skip_if_none=True),
        Field("version", 5, INT),
        Field("creator", 6, INT),
        Field("difficulty_denominator", 8, INT),
        Field("rating", 9, Coded(LevelRating)),
        Field("downloads", 10, INT),
        Field("main_song", 12, Coded(MAIN_SONGS)),
        Field("gd_version", 13, Coded(GAME_VERSIONS)),
        Field("likes", 14, INT),
        Field("length", 15, Coded(LevelLength)),
        Field("is_demon", 17, BOOL),
        Field("stars", 18, INT),
        Field("featured", 19, Coded(FEATURED)),
        Field("is_auto", 25, BOOL),
        Field("password", 27, Thunked(PASSWORD), optional=True, skip_if_none=True),
        Field("time_since_upload", 28, TEXT, optional=True, skip_if_none=True),
        Field("time_since_update", 29, TEXT, optional=True, skip_if_none=True),
        Field("copy_of", 30, INT, optional=True, none_value="0"),
        Field("index_31", 31, TEXT, optional=True),
        Field("custom_song", 35, INT, optional=True, none_value="0"),
        Field("index_36", 36, TEXT, optional=True, skip_if_none=True),
        Field("coin_amount", 37, INT),
        Field("coins_verified", 38, BOOL),
        Field("stars_requested", 39, INT, optional=True, none_value="0"),
        Field("index_40", 40, TEXT, optional=True, skip_if_none=True),
        Field("is_epic", 42, BOOL),
        Field("demon_rating", 43, Coded(DemonRating)),
        Field("object_amount", 45, INT, optional=True, none_value="0"),
        Field("index_46", 46, TEXT, optional=True),
        Field("index_47", 47, TEXT, optional=True),
    ))

    @property
    def difficulty(self) -> Union[LevelRating, DemonRating, Unknown, str]:
        """Difficulty as the game shows it: AUTO, the demon rating of a demon, or the star rating."""
        if self.is_auto:
            return AUTO
        if self.is_demon:
            return self.demon_rating
        return self.rating

    @property
    def is_download(self) -> bool:
        """True if this level came from a download response."""
        return self.level_data is not None
