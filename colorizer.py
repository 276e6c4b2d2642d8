"""Hue-preserving recolorization of SVG element trees."""
import logging
from typing import Optional

from typing_extensions import Literal

from color_util import recolor
from svg_doc import get_style_property, is_graphical, local_name, set_style_property

logger = logging.getLogger(__name__)

ChannelKind = Literal["style", "attribute"]

PAINT_CHANNELS: list[tuple[ChannelKind, str]] = [
    ("style", "fill"),
    ("style", "stroke"),
    ("attribute", "fill"),
    ("attribute", "stroke"),
    ("attribute", "stop-color"),
]


class NotPaintableError(ValueError):
    """Raised when colorization is started on a node that can't be painted."""


def read_channel(elem, kind: ChannelKind, name: str) -> Optional[str]:
    if kind == "style":
        return get_style_property(elem, name)
    return elem.get(name)


def write_channel(elem, kind: ChannelKind, name: str, value: str):
    if kind == "style":
        set_style_property(elem, name, value)
    else:
        elem.set(name, value)


def paint_channels(elem) -> list[tuple[tuple[ChannelKind, str], str]]:
    """Return the paint channels present on `elem` with their raw color text."""
    found = []
    for kind, name in PAINT_CHANNELS:
        value = read_channel(elem, kind, name)
        if not value:
            continue
        # an explicit "no paint" must stay invisible
        if (kind, name) == ("style", "fill") and value == "none":
            continue
        found.append(((kind, name), value))
    return found


def calc_new_color(current_color: Optional[str], target_color: str) -> Optional[str]:
    if not current_color or not (current_color.startswith("#") or current_color.startswith("rgb")):
        return None
    return recolor(current_color, target_color)


def colorize_node(elem, target_color: str) -> int:
    changed = 0
    for (kind, name), value in paint_channels(elem):
        new_color = calc_new_color(value, target_color)
        if new_color:
            write_channel(elem, kind, name, new_color)
            changed += 1
    return changed


def traverse_and_colorize(elem, target_color: str) -> int:
    changed = colorize_node(elem, target_color)
    for child in elem:
        if not isinstance(child.tag, str):
            continue
        changed += traverse_and_colorize(child, target_color)
    return changed


def colorize_svg(svg_elem, target_color: str) -> int:
    """Recolor every paint channel under `svg_elem` toward `target_color`.

    The tree is modified in place. Returns how many channels were rewritten.
    """
    if not is_graphical(svg_elem):
        raise NotPaintableError(
            f"Can't colorize <{local_name(getattr(svg_elem, 'tag', None)) or type(svg_elem).__name__}>, "
            "it is not a graphical element")
    changed = traverse_and_colorize(svg_elem, target_color)
    logger.debug("Colorized %d paint channels toward %s", changed, target_color)
    return changed
