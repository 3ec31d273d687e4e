"""Users as they appear in user search results."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from ..schema import INT, TEXT, Boolean, Coded, Field, HasRobtopFormat, Schema
from ..variants import COLORS, IconType, Rgb, Unknown


@dataclass
class SearchedUser(HasRobtopFormat):
    name: str
    user_id: int
    stars: int
    demons: int
    index_6: Optional[str]
    creator_points: int
    icon_index: int
    primary_color: Union[Rgb, Unknown]
    secondary_color: Union[Rgb, Unknown]
    secret_coins: int
    icon_type: Union[IconType, Unknown]
    has_glow: bool
    account_id: int
    user_coins: int

    __robtop_schema__ = Schema((
        Field("name", 1, TEXT),
        Field("user_id", 2, INT),
        Field("stars", 3, INT),
        Field("demons", 4, INT),
        Field("index_6", 6, TEXT, optional=True),
        Field("creator_points", 8, INT),
        Field("icon_index", 9, INT),
        Field("primary_color", 10, Coded(COLORS)),
        Field("secondary_color", 11, Coded(COLORS)),
        Field("secret_coins", 13, INT),
        Field("icon_type", 14, Coded(IconType)),
        # search results flag glow with "2" rather than "1"
        Field("has_glow", 15, Boolean(true_text="2")),
        Field("account_id", 16, INT),
        Field("user_coins", 17, INT),
    ))
