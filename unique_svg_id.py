"""Rename ids inside an SVG so several copies of it can live in one page."""
import logging
import re
import uuid

from svg_doc import XLINK_NS

logger = logging.getLogger(__name__)

URL_ATTRIBUTES = ["fill", "stroke", "href", "style"]
HASH_ATTRIBUTES = [f"{{{XLINK_NS}}}href", "xlink:href"]


def generate_guid() -> str:
    return str(uuid.uuid4())


def _children(elem):
    return [child for child in elem if isinstance(child.tag, str)]


def traverse_and_replace_ids(elem, id_map: dict[str, str]):
    original_id = elem.get("id")
    if original_id:
        new_id = f"{original_id}-{generate_guid()}"
        id_map[original_id] = new_id
        elem.set("id", new_id)

    for child in _children(elem):
        traverse_and_replace_ids(child, id_map)


def _replace_first(value: str, id_map: dict[str, str], pattern: str, replacement: str) -> str:
    for original_id, new_id in id_map.items():
        regex = re.compile(pattern.format(re.escape(original_id)))
        if regex.search(value):
            return regex.sub(lambda _: replacement.format(new_id), value)
    return value


def update_id_references(elem, id_map: dict[str, str]):
    for attr in URL_ATTRIBUTES:
        value = elem.get(attr)
        if value:
            new_value = _replace_first(value, id_map, r"url\(#{}\)", "url(#{})")
            if new_value != value:
                elem.set(attr, new_value)

    for attr in HASH_ATTRIBUTES:
        value = elem.get(attr)
        if value:
            # the id must end where the reference ends, so '#a' doesn't hit '#ab'
            new_value = _replace_first(value, id_map, r"#{}(?![\w.:-])", "#{}")
            if new_value != value:
                elem.set(attr, new_value)

    for child in _children(elem):
        update_id_references(child, id_map)


def make_svg_ids_unique(svg_elem) -> dict[str, str]:
    """Give every id under `svg_elem` a fresh suffix and rewrite references to it.

    Returns the mapping of original id to new id.
    """
    id_map: dict[str, str] = {}
    traverse_and_replace_ids(svg_elem, id_map)
    update_id_references(svg_elem, id_map)
    logger.debug("Renamed %d ids", len(id_map))
    return id_map
