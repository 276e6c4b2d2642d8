import os
from typing import Optional
from xml.etree import ElementTree as ET

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"
ET.register_namespace("", SVG_NS)
ET.register_namespace("xlink", XLINK_NS)

# Elements that render something (SVGGraphicsElement in the DOM). Containers
# such as <defs> or <linearGradient> are not drawable on their own.
GRAPHICS_TAGS = {
    "svg", "g", "a", "switch", "use", "image", "foreignObject",
    "path", "rect", "circle", "ellipse", "line", "polyline", "polygon",
    "text", "tspan", "textPath",
}


def local_name(tag) -> str:
    """Strip the '{namespace}' part of an ElementTree tag."""
    if not isinstance(tag, str):
        # comments and processing instructions
        return ""
    return tag.rsplit("}", 1)[-1]


def is_graphical(elem) -> bool:
    """Capability check: can this node be painted and does it expose attributes?"""
    if not hasattr(elem, "get") or not hasattr(elem, "set"):
        return False
    return local_name(getattr(elem, "tag", None)) in GRAPHICS_TAGS


def parse_style(style_str: Optional[str]) -> list[tuple[str, str]]:
    """Split an inline style into ordered (property, value) pairs."""
    if not style_str:
        return []
    declarations = [s.strip() for s in style_str.split(";") if s.strip()]
    pairs = []
    for decl in declarations:
        if ":" in decl:
            prop, val = map(str.strip, decl.split(":", 1))
            pairs.append((prop, val))
    return pairs


def serialize_style(pairs: list[tuple[str, str]]) -> str:
    return "; ".join(f"{prop}: {val}" for prop, val in pairs)


def get_style_property(elem, prop: str) -> Optional[str]:
    for name, val in parse_style(elem.get("style")):
        if name.lower() == prop:
            return val
    return None


def set_style_property(elem, prop: str, value: str):
    """Set one inline style property, keeping the others and their order."""
    pairs = parse_style(elem.get("style"))
    for i, (name, _) in enumerate(pairs):
        if name.lower() == prop:
            pairs[i] = (name, value)
            break
    else:
        pairs.append((prop, value))
    elem.set("style", serialize_style(pairs))


def parse_svg(source: str) -> ET.Element:
    """Parse SVG markup into an element tree. Raises ET.ParseError on bad markup."""
    return ET.fromstring(source.strip())


def create_svg_element(size: Optional[int] = None, elem_id: Optional[str] = None) -> ET.Element:
    svg = ET.Element(f"{{{SVG_NS}}}svg")
    if elem_id:
        svg.set("id", elem_id)
    if size is not None:
        svg.set("width", str(size))
        svg.set("height", str(size))
    return svg


def to_markup(elem: ET.Element) -> str:
    return ET.tostring(elem, encoding="unicode", method="xml")


def find_svg_files(root_dir):
    svg_files = []
    for root, _, files in os.walk(root_dir):
        for file in files:
            if file.lower().endswith(".svg"):
                svg_files.append(os.path.join(root, file))
    return sorted(svg_files)
