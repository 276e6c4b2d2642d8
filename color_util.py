import math
import re
from typing import NamedTuple, Optional

SHORTHAND_HEX_RE = re.compile(r"^#?([a-f\d])([a-f\d])([a-f\d])$", re.I)
HEX_RE = re.compile(r"^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$", re.I)
RGB_RE = re.compile(r"^rgb\((\d+),\s*(\d+),\s*(\d+)\)$")


class RGB(NamedTuple):
    r: int
    g: int
    b: int


class HSL(NamedTuple):
    """Hue in degrees, saturation and lightness in [0, 1]."""
    h: float
    s: float
    l: float


def parse_hex(text: str) -> Optional[RGB]:
    """Parse '#rgb' or '#rrggbb' (the '#' is optional)."""
    text = SHORTHAND_HEX_RE.sub(lambda m: "".join(c * 2 for c in m.groups()), text)
    match = HEX_RE.match(text)
    if not match:
        return None
    return RGB(*(int(part, 16) for part in match.groups()))


def parse_rgb(text: str) -> Optional[RGB]:
    """Parse the functional 'rgb(r, g, b)' notation. Ranges are not checked."""
    match = RGB_RE.match(text)
    if not match:
        return None
    return RGB(*(int(part) for part in match.groups()))


def parse_color(text: str) -> Optional[RGB]:
    if not text:
        return None
    if text.startswith("#"):
        return parse_hex(text)
    if text.startswith("rgb"):
        return parse_rgb(text)
    return None


def format_rgb(color: RGB) -> str:
    return f"rgb({color.r}, {color.g}, {color.b})"


def format_hex(color: RGB) -> str:
    """Format as '#rrggbb', the only form an <input type="color"> accepts."""
    return "#" + "".join(f"{min(max(c, 0), 255):02x}" for c in color)


def rgb_to_hsl(color: RGB) -> HSL:
    r, g, b = (channel / 255 for channel in color)
    hi = max(r, g, b)
    lo = min(r, g, b)
    l = (hi + lo) / 2

    if hi == lo:
        return HSL(0.0, 0.0, l)

    d = hi - lo
    # the two branches keep precision near black and white
    s = d / (2 - hi - lo) if l > 0.5 else d / (hi + lo)
    if hi == r:
        h = (g - b) / d + (6 if g < b else 0)
    elif hi == g:
        h = (b - r) / d + 2
    else:
        h = (r - g) / d + 4
    return HSL(h / 6 * 360, s, l)


def hue_to_channel(p: float, q: float, t: float) -> float:
    if t < 0:
        t += 1
    if t > 1:
        t -= 1
    if t < 1 / 6:
        return p + (q - p) * 6 * t
    if t < 1 / 2:
        return q
    if t < 2 / 3:
        return p + (q - p) * (2 / 3 - t) * 6
    return p


def _to_byte(value: float) -> int:
    # half-up, so 127.5 and 0.5 behave like they do in a browser
    return int(math.floor(value * 255 + 0.5))


def hsl_to_rgb(color: HSL) -> RGB:
    h = color.h / 360
    s, l = color.s, color.l
    if s == 0:
        r = g = b = l
    else:
        q = l * (1 + s) if l < 0.5 else l + s - l * s
        p = 2 * l - q
        r = hue_to_channel(p, q, h + 1 / 3)
        g = hue_to_channel(p, q, h)
        b = hue_to_channel(p, q, h - 1 / 3)
    return RGB(_to_byte(r), _to_byte(g), _to_byte(b))


def hue_angle(source: RGB, target: RGB) -> float:
    """Forward rotation in degrees that moves the hue of `source` onto `target`."""
    angle = rgb_to_hsl(target).h - rgb_to_hsl(source).h
    if angle < 0:
        angle += 360
    return angle


def rotate_hue(source: RGB, angle: float) -> RGB:
    """Rotate the hue of `source` by `angle` degrees, keeping saturation and lightness."""
    h, s, l = rgb_to_hsl(source)
    return hsl_to_rgb(HSL((h + angle) % 360, s, l))


def recolor(source_text: str, target_text: str) -> Optional[str]:
    """Shift `source_text` into the hue family of `target_text`.

    Both arguments may be hex or 'rgb(...)' strings. Returns the new color as
    'rgb(r, g, b)', or None when either color can't be parsed, in which case
    the caller keeps the original value.
    """
    source = parse_color(source_text)
    target = parse_color(target_text)
    if source is None or target is None:
        return None
    return format_rgb(rotate_hue(source, hue_angle(source, target)))
