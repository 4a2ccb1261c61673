"""
Localization of bot messages.

Every user-visible string is declared as a ``Message`` carrying a stable id and
the English default text. Translations are looked up by id in per-language
catalogs; a missing catalog or id falls back to the default text.

Templates use ``str.format`` placeholders, e.g. ``"Type `{command_prefix} help`"``.
"""
from __future__ import annotations

import json
import logging
import os
from typing import NamedTuple, Optional

import config

logger = logging.getLogger('discord')

_CATALOG_PREFIX = 'active.'
_CATALOG_SUFFIX = '.json'


class Message(NamedTuple):
    """A localizable message: catalog id plus the default (English) template."""
    id: str
    other: str


class Localizer:
    """Resolves messages against language catalogs."""

    def __init__(self, catalogs: Optional[dict[str, dict[str, str]]] = None,
                 directory: Optional[str] = None,
                 default_language: str = config.DEFAULT_LANGUAGE):
        self._catalogs: dict[str, dict[str, str]] = dict(catalogs or {})
        self._directory = directory
        self.default_language = default_language

    @property
    def languages(self) -> tuple[str, ...]:
        """All languages that can be selected, the default one included."""
        return tuple(sorted({self.default_language, *self._catalogs}))

    def has_language(self, language: str) -> bool:
        return self.find_language(language) is not None

    def find_language(self, language: str) -> Optional[str]:
        """The loaded language matching ``language`` regardless of case, spelled as its catalog is."""
        return {known.lower(): known for known in self.languages}.get(language.lower())

    def localize(self, message: Message, language: Optional[str] = None, **params) -> str:
        template = self._catalogs.get(language or self.default_language, {}).get(message.id, message.other)
        if not params:
            return template
        try:
            return template.format(**params)
        except (KeyError, IndexError, ValueError) as e:
            logger.warning(f"Bad template for {message.id} ({language}): {e}")
            return message.other.format(**params)

    def reload(self) -> Localizer:
        """Re-read the catalog directory, replacing any previously loaded catalogs."""
        if not self._directory or not os.path.isdir(self._directory):
            return self

        catalogs = {}
        for filename in sorted(os.listdir(self._directory)):
            if not (filename.startswith(_CATALOG_PREFIX) and filename.endswith(_CATALOG_SUFFIX)):
                continue
            language = filename[len(_CATALOG_PREFIX):-len(_CATALOG_SUFFIX)]
            try:
                with open(os.path.join(self._directory, filename), 'r', encoding='utf-8') as f:
                    catalogs[language] = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.error(f"Failed to load language catalog {filename}: {e}")
        self._catalogs = catalogs
        logger.info(f"Loaded language catalogs: {', '.join(sorted(catalogs)) or 'none'}")
        return self

    @classmethod
    def load(cls, directory: str = config.LOCALES_DIRECTORY) -> Localizer:
        return cls(directory=directory).reload()
