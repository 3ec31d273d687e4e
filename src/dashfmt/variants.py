"""Integer-coded value sets that the remote service can extend at any time.

Every domain maps small integers to known variants and keeps any integer it
does not recognize as Unknown(domain, code). Decoding never fails, and
to_code(from_code(i)) == i for every integer, known or not.

Shapes:
- CodedEnum: an Enum whose member values are the codes (ModLevel, IconType,
  LevelLength, LevelRating, DemonRating).
- Palette: a table of codes to data-carrying variants (COLORS maps palette
  indices to Rgb triples, MAIN_SONGS maps song ids to MainSong).
- Rule-based domain objects with the same from_code/to_code pair, for
  domains that decode whole ranges of codes (FEATURED, GAME_VERSIONS).

Usage:
    ModLevel.from_code(2)       -> ModLevel.ELDER
    ModLevel.from_code(9)       -> Unknown("ModLevel", 9)
    COLORS.from_code(9)         -> Rgb(255, 0, 0)
    COLORS.to_code(Rgb(255, 0, 0)) -> 9
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Hashable, Iterable, Tuple, Union


@dataclass(frozen=True)
class Unknown:
    """A code this package does not know yet, kept verbatim."""
    domain: str
    code: int


class CodedEnum(Enum):
    """Enum base for integer coded domains with an Unknown fallback."""

    @classmethod
    def from_code(cls, code: int) -> Union["CodedEnum", Unknown]:
        try:
            return cls(code)
        except ValueError:
            return Unknown(cls.__name__, code)

    @classmethod
    def to_code(cls, variant: Union["CodedEnum", Unknown]) -> int:
        if isinstance(variant, cls):
            return variant.value
        if isinstance(variant, Unknown) and variant.domain == cls.__name__:
            return variant.code
        raise ValueError(f"{variant!r} is not a {cls.__name__} variant")


class ModLevel(CodedEnum):
    NONE = 0
    NORMAL = 1
    ELDER = 2


class IconType(CodedEnum):
    CUBE = 0
    SHIP = 1
    BALL = 2
    UFO = 3
    WAVE = 4
    ROBOT = 5
    SPIDER = 6


class LevelLength(CodedEnum):
    TINY = 0
    SHORT = 1
    MEDIUM = 2
    LONG = 3
    EXTRA_LONG = 4


class LevelRating(CodedEnum):
    """Star rating of a level that is not a demon, coded as its difficulty numerator."""
    NOT_AVAILABLE = 0
    EASY = 10
    NORMAL = 20
    HARD = 30
    HARDER = 40
    INSANE = 50


class DemonRating(CodedEnum):
    # codes are not in difficulty order
    HARD = 0
    EASY = 3
    MEDIUM = 4
    INSANE = 5
    EXTREME = 6


@dataclass(frozen=True)
class Rgb:
    red: int
    green: int
    blue: int

    def as_tuple(self) -> Tuple[int, int, int]:
        return (self.red, self.green, self.blue)


class Palette:
    """Code table for variants that carry data.

    If two codes map to the same variant, to_code returns the one declared
    first.
    """

    def __init__(self, name: str, entries: Iterable[Tuple[int, Hashable]]) -> None:
        self.name = name
        self._by_code: Dict[int, Any] = {}
        self._by_variant: Dict[Any, int] = {}
        for code, variant in entries:
            if code in self._by_code:
                raise ValueError(f"{name}: code {code} declared twice")
            self._by_code[code] = variant
            self._by_variant.setdefault(variant, code)

    def __len__(self) -> int:
        return len(self._by_code)

    def __contains__(self, code: object) -> bool:
        return code in self._by_code

    def from_code(self, code: int) -> Any:
        variant = self._by_code.get(code)
        if variant is None:
            return Unknown(self.name, code)
        return variant

    def to_code(self, variant: Any) -> int:
        if isinstance(variant, Unknown):
            if variant.domain == self.name:
                return variant.code
        elif variant in self._by_variant:
            return self._by_variant[variant]
        raise ValueError(f"{variant!r} is not a {self.name} variant")


# Icon colors, listed in the order of the in-game selection menu.
COLORS = Palette("Color", [
    (0, Rgb(125, 255, 0)),
    (1, Rgb(0, 255, 0)),
    (2, Rgb(0, 255, 125)),
    (3, Rgb(0, 255, 255)),
    (16, Rgb(0, 200, 255)),
    (4, Rgb(0, 125, 255)),
    (5, Rgb(0, 0, 255)),
    (6, Rgb(125, 0, 255)),
    (13, Rgb(185, 0, 255)),
    (7, Rgb(255, 0, 255)),
    (8, Rgb(255, 0, 125)),
    (9, Rgb(255, 0, 0)),
    (29, Rgb(255, 75, 0)),
    (10, Rgb(255, 125, 0)),
    (14, Rgb(255, 185, 0)),
    (11, Rgb(255, 255, 0)),
    (12, Rgb(255, 255, 255)),
    (17, Rgb(175, 175, 175)),
    (18, Rgb(80, 80, 80)),
    (15, Rgb(0, 0, 0)),
    (27, Rgb(125, 125, 0)),
    (32, Rgb(100, 150, 0)),
    (28, Rgb(75, 175, 0)),
    (38, Rgb(0, 150, 0)),
    (20, Rgb(0, 175, 75)),
    (33, Rgb(0, 150, 100)),
    (21, Rgb(0, 125, 125)),
    (34, Rgb(0, 100, 150)),
    (22, Rgb(0, 75, 175)),
    (39, Rgb(0, 0, 150)),
    (23, Rgb(75, 0, 175)),
    (35, Rgb(100, 0, 150)),
    (24, Rgb(125, 0, 125)),
    (36, Rgb(150, 0, 100)),
    (25, Rgb(175, 0, 75)),
    (37, Rgb(150, 0, 0)),
    (30, Rgb(150, 50, 0)),
    (26, Rgb(175, 75, 0)),
    (31, Rgb(150, 100, 0)),
    (19, Rgb(255, 255, 125)),
    (40, Rgb(125, 255, 175)),
    (41, Rgb(125, 125, 255)),
])


@dataclass(frozen=True)
class MainSong:
    name: str
    artist: str


# Songs of the official levels, by main song id.
MAIN_SONGS = Palette("MainSong", [
    (0, MainSong("Stereo Madness", "ForeverBound")),
    (1, MainSong("Back On Track", "DJVI")),
    (2, MainSong("Polargeist", "Step")),
    (3, MainSong("Dry Out", "DJVI")),
    (4, MainSong("Base After Base", "DJVI")),
    (5, MainSong("Cant Let Go", "DJVI")),
    (6, MainSong("Jumper", "Waterflame")),
    (7, MainSong("Time Machine", "Waterflame")),
    (8, MainSong("Cycles", "DJVI")),
    (9, MainSong("xStep", "DJVI")),
    (10, MainSong("Clutterfunk", "Waterflame")),
    (11, MainSong("Theory of Everything", "DJ-Nate")),
    (12, MainSong("Electroman Adventures", "Waterflame")),
    (13, MainSong("Clubstep", "DJ-Nate")),
    (14, MainSong("Electrodynamix", "DJ-Nate")),
    (15, MainSong("Hexagon Force", "Waterflame")),
    (16, MainSong("Blast Processing", "Waterflame")),
    (17, MainSong("Theory of Everything 2", "DJ-Nate")),
    (18, MainSong("Geometrical Dominator", "Waterflame")),
    (19, MainSong("Deadlocked", "F-777")),
    (20, MainSong("Fingerdash", "MDK")),
])


class FeatureState(CodedEnum):
    UNFEATURED = -1
    NOT_FEATURED = 0


@dataclass(frozen=True)
class Featured:
    """A featured level. Higher scores are listed first."""
    score: int


class FeaturedDomain:
    """Feature status of a level: a FeatureState, or Featured(n) for any n > 0."""

    name = "Featured"

    def from_code(self, code: int) -> Union[FeatureState, Featured, Unknown]:
        if code > 0:
            return Featured(code)
        try:
            return FeatureState(code)
        except ValueError:
            return Unknown(self.name, code)

    def to_code(self, variant: Union[FeatureState, Featured, Unknown]) -> int:
        if isinstance(variant, Featured) and variant.score > 0:
            return variant.score
        if isinstance(variant, FeatureState):
            return variant.value
        if isinstance(variant, Unknown) and variant.domain == self.name:
            return variant.code
        raise ValueError(f"{variant!r} is not a {self.name} variant")


@dataclass(frozen=True)
class GameVersion:
    major: int
    minor: int


class GameVersionDomain:
    """Game version a level was last updated in.

    Codes 1 to 7 are versions 1.0 to 1.6. From 18 upward the code is
    major * 10 + minor, so 18 is 1.8 and 21 is 2.1. Everything else,
    code 10 included, stays Unknown.
    """

    name = "GameVersion"

    def from_code(self, code: int) -> Union[GameVersion, Unknown]:
        if 1 <= code <= 7:
            return GameVersion(1, code - 1)
        if code >= 18:
            major, minor = divmod(code, 10)
            return GameVersion(major, minor)
        return Unknown(self.name, code)

    def to_code(self, variant: Union[GameVersion, Unknown]) -> int:
        if isinstance(variant, GameVersion):
            if variant.major == 1 and 0 <= variant.minor <= 6:
                return variant.minor + 1
            code = variant.major * 10 + variant.minor
            if 0 <= variant.minor <= 9 and code >= 18:
                return code
        elif isinstance(variant, Unknown) and variant.domain == self.name:
            return variant.code
        raise ValueError(f"{variant!r} is not a {self.name} variant")


FEATURED = FeaturedDomain()
GAME_VERSIONS = GameVersionDomain()
