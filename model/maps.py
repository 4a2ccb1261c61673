"""In-game map images."""
from __future__ import annotations

import logging
import os
from typing import NamedTuple
from urllib.parse import urljoin

import config
from commands.errors import NotFound
from utils.localization import Message

logger = logging.getLogger('discord')

MAP_NOT_FOUND = Message("commands.HandleCommand.Map.notFound", "I don't have a map by that name!")

# Accepted spellings for each map
_MAP_NAMES = {
    "the skeld": "the_skeld",
    "the_skeld": "the_skeld",
    "skeld": "the_skeld",
    "mira": "mira_hq",
    "mira_hq": "mira_hq",
    "mira hq": "mira_hq",
    "mirahq": "mira_hq",
    "polus": "polus",
    "airship": "airship",
    "ship": "airship",
    "air": "airship",
}


class MapImage(NamedTuple):
    simple: str
    detailed: str


class MapItem(NamedTuple):
    name: str
    image: MapImage

    def __str__(self):
        return self.name


def normalize_map_name(name: str) -> str:
    """Map any accepted spelling to the canonical map id.

    Raises:
        NotFound: If the name isn't a known map
    """
    canonical = _MAP_NAMES.get(name.strip().lower())
    if canonical is None:
        raise NotFound(MAP_NOT_FOUND)
    return canonical


def base_map_url(language: str) -> str:
    """Base URL for map images in a language, honouring the BASE_MAP_URL override."""
    base = os.environ.get(config.BASE_MAP_URL_ENV) or config.DEFAULT_BASE_MAP_URL
    if not base.endswith("/"):
        base += "/"
    return f"{base}{language}/"


def _join(base: str, filename: str) -> str:
    try:
        return urljoin(base, filename)
    except ValueError as e:
        logger.error(f"Failed to build map URL from {base!r} and {filename!r}: {e}")
        return base + filename


def new_map_item(name: str, language: str = config.DEFAULT_LANGUAGE) -> MapItem:
    """Resolve a map name to its simple and detailed image URLs.

    Raises:
        NotFound: If the name isn't a known map
    """
    canonical = normalize_map_name(name)
    base = base_map_url(language)
    image = MapImage(
        simple=_join(base, canonical + ".png"),
        detailed=_join(base, canonical + "_detailed.png"),
    )
    return MapItem(canonical, image)
