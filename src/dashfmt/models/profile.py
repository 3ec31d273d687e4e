"""User profiles, as returned by the profile endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..schema import BOOL, INT, TEXT, Coded, Field, HasRobtopFormat, Schema
from ..variants import COLORS, ModLevel, Rgb, Unknown


@dataclass
class Profile(HasRobtopFormat):
    name: str
    user_id: int
    stars: int
    demons: int
    creator_points: int
    primary_color: Union[Rgb, Unknown]
    secondary_color: Union[Rgb, Unknown]
    secret_coins: int
    account_id: int
    user_coins: int
    index_18: str
    index_19: str
    youtube_url: Optional[str]
    cube_index: int
    ship_index: int
    ball_index: int
    ufo_index: int
    wave_index: int
    robot_index: int
    has_glow: bool
    index_29: str
    global_rank: Optional[int]
    index_31: str
    spider_index: int
    twitter_url: Optional[str]
    twitch_url: Optional[str]
    diamonds: int
    death_effect_index: int
    mod_level: Union[ModLevel, Unknown]
    index_50: str

    __robtop_schema__ = Schema((
        Field("name", 1, TEXT),
        Field("user_id", 2, INT),
        Field("stars", 3, INT),
        Field("demons", 4, INT),
        Field("creator_points", 8, INT),
        Field("primary_color", 10, Coded(COLORS)),
        Field("secondary_color", 11, Coded(COLORS)),
        Field("secret_coins", 13, INT),
        Field("account_id", 16, INT),
        Field("user_coins", 17, INT),
        Field("index_18", 18, TEXT),
        Field("index_19", 19, TEXT),
        Field("youtube_url", 20, TEXT, optional=True),
        Field("cube_index", 21, INT),
        Field("ship_index", 22, INT),
        Field("ball_index", 23, INT),
        Field("ufo_index", 24, INT),
        Field("wave_index", 25, INT),
        Field("robot_index", 26, INT),
        Field("has_glow", 28, BOOL),
        Field("index_29", 29, TEXT),
        # empty when the user is unranked, "0" is a valid rank
        Field("global_rank", 30, INT, optional=True),
        Field("index_31", 31, TEXT),
        Field("spider_index", 43, INT),
        Field("twitter_url", 44, TEXT, optional=True),
        Field("twitch_url", 45, TEXT, optional=True),
        Field("diamonds", 46, INT),
        Field("death_effect_index", 48, INT),
        Field("mod_level", 49, Coded(ModLevel)),
        Field("index_50", 50, TEXT),
    ))
