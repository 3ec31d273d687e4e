"""Newgrounds songs. These use the ~|~ separator."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..processors import PERCENT
from ..records import TILDE_PIPE
from ..schema import FLOAT, INT, TEXT, Field, HasRobtopFormat, Schema, Thunked
from ..thunk import Thunk


@dataclass
class NewgroundsSong(HasRobtopFormat):
    song_id: int
    name: str
    index_3: int
    artist: str
    filesize: float
    index_6: Optional[str]
    index_7: Optional[str]
    index_8: str
    # percent-encoded download link
    link: Thunk[str]

    __robtop_schema__ = Schema((
        Field("song_id", 1, INT),
        Field("name", 2, TEXT),
        Field("index_3", 3, INT),
        Field("artist", 4, TEXT),
        Field("filesize", 5, FLOAT),
        Field("index_6", 6, TEXT, optional=True),
        Field("index_7", 7, TEXT, optional=True),
        Field("index_8", 8, TEXT),
        Field("link", 10, Thunked(PERCENT)),
    ), fmt=TILDE_PIPE)
