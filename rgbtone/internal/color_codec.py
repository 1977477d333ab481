import re
from dataclasses import dataclass
from enum import Enum


HEX6_PATTERN = re.compile(r"[0-9a-f]{6}", re.IGNORECASE)
HEX3_OR_6_PATTERN = re.compile(r"[0-9a-f]{3}|[0-9a-f]{6}", re.IGNORECASE)
RGB_FIELD_PATTERN = re.compile(r"[0-9]+")
WHITESPACE_PATTERN = re.compile(r"\s+")


class InvalidFormat(ValueError):
    """Input did not match the expected HEX or RGB shape."""


class Contrast(str, Enum):
    LIGHT = "light"
    DARK = "dark"


@dataclass(frozen=True)
class RGB:
    r: int
    g: int
    b: int

    def __iter__(self):
        return iter((self.r, self.g, self.b))


@dataclass(frozen=True)
class Color:
    hex: str
    rgb: RGB | None
    valid: bool = True

    def __post_init__(self):
        # a valid color is always derived from one canonical 6 digit hex
        if not self.valid:
            return
        if not HEX6_PATTERN.fullmatch(self.hex or ""):
            raise InvalidFormat(f"'{self.hex}' is not a canonical 6 digit HEX color")
        if self.rgb != hex_to_rgb(self.hex):
            raise InvalidFormat(f"{self.rgb} does not match #{self.hex}")

    @property
    def key(self) -> str:
        return self.hex.lower()

    def __str__(self):
        return f"Color(#{self.hex}, valid:{self.valid})"


def expand_shorthand(hex_str: str) -> str:
    if len(hex_str) == 3:
        return "".join(c * 2 for c in hex_str)
    return hex_str


def _strip_hex_input(text: str) -> str:
    return WHITESPACE_PATTERN.sub("", text or "").lstrip("#")


def hex_to_rgb(hex_str: str) -> RGB:
    h = expand_shorthand(hex_str)
    return RGB(*(int(h[i:i + 2], 16) for i in (0, 2, 4)))


def parse_hex(text: str, allow_shorthand: bool = True) -> Color:
    """
    Parse a HEX color string (``#`` and whitespace ignored).

    Six hex digits are always accepted, three only with ``allow_shorthand``.
    Shorthand is expanded before the RGB triple is derived. The returned hex
    keeps the case it was entered in.
    """
    hex_str = _strip_hex_input(text)
    pattern = HEX3_OR_6_PATTERN if allow_shorthand else HEX6_PATTERN
    if not pattern.fullmatch(hex_str):
        raise InvalidFormat(f"'{text}' is not a valid HEX color")

    hex_str = expand_shorthand(hex_str)
    return Color(hex=hex_str, rgb=hex_to_rgb(hex_str))


def _parse_rgb_field(field: str) -> int:
    if not RGB_FIELD_PATTERN.fullmatch(field):
        raise InvalidFormat(f"'{field}' is not a decimal integer")
    value = int(field, 10)
    if not 0 <= value <= 255:
        raise InvalidFormat(f"{value} is out of the 0-255 range")
    return value


def parse_rgb(text: str) -> Color:
    """
    Parse ``"r, g, b"``. Exactly three comma separated fields, each a decimal
    integer in 0..255 with nothing else in it.
    """
    fields = WHITESPACE_PATTERN.sub("", text or "").split(",")
    if len(fields) != 3:
        raise InvalidFormat(f"'{text}' does not have exactly 3 RGB fields")

    rgb = RGB(*(_parse_rgb_field(f) for f in fields))
    return Color(hex=to_hex(rgb), rgb=rgb)


def to_hex(rgb: RGB, allow_shorthand: bool = False) -> str:
    parts = []
    for component in rgb:
        if not 0 <= component <= 255:
            raise ValueError(f"RGB component {component} is out of the 0-255 range")
        parts.append(format(component, "02x"))

    # collapses only when every component is a doubled digit
    if allow_shorthand and all(p[0] == p[1] for p in parts):
        return "".join(p[0] for p in parts)
    return "".join(parts)


def compute_contrast(hex_str: str) -> Contrast:
    value = int(expand_shorthand(hex_str), 16)
    return Contrast.DARK if value > 0xFFFFFF / 2 else Contrast.LIGHT


def display_hex(color: Color, shorthand: bool = True) -> str:
    if color.rgb is None:
        return ""
    return "#" + to_hex(color.rgb, shorthand)


def display_rgb(rgb: RGB | None) -> str:
    if rgb is None:
        return ""
    return ", ".join(str(c) for c in rgb)


def read_hex_input(text: str, shorthand: bool = True) -> Color:
    try:
        return parse_hex(text, shorthand)
    except InvalidFormat:
        return Color(hex=_strip_hex_input(text), rgb=None, valid=False)


def read_rgb_input(text: str) -> Color:
    try:
        return parse_rgb(text)
    except InvalidFormat:
        return Color(hex="", rgb=None, valid=False)
