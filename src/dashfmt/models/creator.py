"""Level creators, as listed alongside level search results.

Creators are positional records: user id, name, account id. An account id
of 0 means the creator never registered an account.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..records import POSITIONAL
from ..schema import INT, TEXT, Field, HasRobtopFormat, Schema


@dataclass
class Creator(HasRobtopFormat):
    user_id: int
    name: str
    account_id: Optional[int]

    __robtop_schema__ = Schema((
        Field("user_id", 0, INT),
        Field("name", 1, TEXT),
        Field("account_id", 2, INT, optional=True, none_value="0"),
    ), fmt=POSITIONAL)
