"""Icon gallery: pick the SVG files of a listing, load them and render each one
next to a recolored copy of itself."""
import asyncio
import copy
import logging
import threading
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional
from xml.etree import ElementTree as ET

import httpx
from markupsafe import escape

from colorizer import colorize_svg
from config import Settings
from http_util import FetchOk, async_client, fetch_data, github_contents_url
from svg_doc import create_svg_element, find_svg_files, parse_svg, to_markup
from unique_svg_id import make_svg_ids_unique

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IconEntry:
    """One row of a GitHub contents listing."""
    name: str
    type: str
    download_url: str


@dataclass(frozen=True)
class IconSource:
    name: str
    source: str


@dataclass(frozen=True)
class Icon:
    name: str
    original: str
    copy: str


def select_svg_entries(listing) -> list[IconEntry]:
    if not isinstance(listing, list):
        logger.warning("Expected a list of files, got %s", type(listing).__name__)
        return []
    entries = []
    for item in listing:
        try:
            entry = IconEntry(item["name"], item["type"], item["download_url"])
        except (KeyError, TypeError):
            logger.warning("Skipping malformed listing entry: %r", item)
            continue
        if entry.type == "file" and entry.name.endswith(".svg") and entry.download_url:
            entries.append(entry)
    return entries


def _limit(items: list, max_items: int) -> list:
    return items[:max_items] if max_items > 0 else items


async def load_remote_icons(settings: Settings, client: Optional[httpx.AsyncClient] = None) -> list[IconSource]:
    """Fetch the listing, then every SVG in it. Icons that fail to download are left out."""
    if client is None:
        async with async_client(settings.timeout) as client:
            return await load_remote_icons(settings, client)

    url = github_contents_url(settings.repo_owner, settings.repo_name, settings.folder_path)
    listing = await fetch_data(client, url)
    if not isinstance(listing, FetchOk):
        return []

    entries = _limit(select_svg_entries(listing.content), settings.max_icons)
    results = await asyncio.gather(*(fetch_data(client, e.download_url, "text") for e in entries))

    sources = []
    for entry, result in zip(entries, results):
        if isinstance(result, FetchOk):
            sources.append(IconSource(entry.name, result.content))
        else:
            logger.warning("Skipping %s", entry.name)
    logger.debug("Fetched %d of %d icons", len(sources), len(entries))
    return sources


def load_local_icons(directory, max_icons: int = 0) -> list[IconSource]:
    sources = []
    for path in _limit(find_svg_files(directory), max_icons):
        with open(path, "r", encoding="utf-8") as f:
            sources.append(IconSource(Path(path).name, f.read()))
    return sources


def load_icon_sources(settings: Settings) -> list[IconSource]:
    if settings.icons_dir is not None:
        return load_local_icons(settings.icons_dir, settings.max_icons)
    return asyncio.run(load_remote_icons(settings))


class IconCache:
    """Keeps the downloaded SVG sources so a color change doesn't refetch them."""

    def __init__(self, loader: Callable[[], list[IconSource]]):
        self._loader = loader
        self._lock = threading.Lock()
        self._sources: Optional[list[IconSource]] = None

    def get(self) -> list[IconSource]:
        with self._lock:
            if self._sources is None:
                sources = self._loader()
                if not sources:
                    # don't remember an outage
                    return sources
                self._sources = sources
            return self._sources


def build_icon(name: str, source: str, target_color: str, size: int) -> Icon:
    """Render `source` twice: as-is, and recolored toward `target_color`.

    Each copy gets its own ids so both can be inlined in the same page.
    Raises ET.ParseError when `source` isn't well-formed.
    """
    doc = parse_svg(source)

    copied = create_svg_element(size)
    copied.append(copy.deepcopy(doc))
    make_svg_ids_unique(copied)
    copied.set("id", f"{name}_copy")

    original = create_svg_element(size)
    original.append(doc)
    make_svg_ids_unique(original)
    original.set("id", f"{name}_original")

    colorize_svg(copied, target_color)

    return Icon(name, to_markup(original), to_markup(copied))


def build_icons(sources: list[IconSource], target_color: str, size: int) -> list[Icon]:
    icons = []
    for src in sources:
        try:
            icons.append(build_icon(src.name, src.source, target_color, size))
        except ET.ParseError as e:
            logger.warning("Skipping %s, not a valid SVG: %s", src.name, e)
    return icons


def render_icons(icons: list[Icon]) -> str:
    items = []
    for icon in icons:
        items.append(
            '<li class="flex items-center gap-4">'
            f"{icon.original}{icon.copy}"
            f'<span class="text-white">{escape(icon.name)}</span>'
            "</li>")
    return "\n".join(items)
