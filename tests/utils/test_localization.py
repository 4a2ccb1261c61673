"""
Tests for message localization.
"""

import json
import logging

from utils.localization import Localizer, Message

GREETING = Message("greeting", "Hello {name}!")
PLAIN = Message("plain", "No {placeholders} here")


class TestLocalizer:

    def setup_method(self):
        self.localizer = Localizer({"ru": {"greeting": "Привет {name}!"}})

    def test_default_text(self):
        assert self.localizer.localize(GREETING, name="Soup") == "Hello Soup!"

    def test_translation(self):
        assert self.localizer.localize(GREETING, "ru", name="Soup") == "Привет Soup!"

    def test_missing_translation_falls_back(self):
        assert self.localizer.localize(PLAIN, "ru") == "No {placeholders} here"

    def test_unknown_language_falls_back(self):
        assert self.localizer.localize(GREETING, "xx", name="Soup") == "Hello Soup!"

    def test_broken_translation_falls_back(self, caplog):
        localizer = Localizer({"ru": {"greeting": "Привет {username}!"}})

        with caplog.at_level(logging.WARNING, logger='discord'):
            assert localizer.localize(GREETING, "ru", name="Soup") == "Hello Soup!"
        assert "Bad template for greeting" in caplog.text

    def test_languages(self):
        assert self.localizer.languages == ("en", "ru")
        assert self.localizer.has_language("en")
        assert not self.localizer.has_language("de")

    def test_load_and_reload(self, tmp_path):
        (tmp_path / "active.de.json").write_text(json.dumps({"greeting": "Hallo {name}!"}), encoding="utf-8")
        (tmp_path / "notes.txt").write_text("ignored")

        localizer = Localizer.load(str(tmp_path))
        assert localizer.languages == ("de", "en")
        assert localizer.localize(GREETING, "de", name="Soup") == "Hallo Soup!"

        (tmp_path / "active.fr.json").write_text(json.dumps({"greeting": "Salut {name}!"}), encoding="utf-8")
        localizer.reload()
        assert localizer.has_language("fr")

    def test_unreadable_catalog_is_skipped(self, tmp_path, caplog):
        (tmp_path / "active.de.json").write_text("{not json", encoding="utf-8")

        with caplog.at_level(logging.ERROR, logger='discord'):
            localizer = Localizer.load(str(tmp_path))

        assert not localizer.has_language("de")
        assert "Failed to load language catalog active.de.json" in caplog.text

    def test_find_language_keeps_catalog_spelling(self, tmp_path):
        (tmp_path / "active.pt-BR.json").write_text(json.dumps({}), encoding="utf-8")

        localizer = Localizer.load(str(tmp_path))

        assert localizer.find_language("PT-br") == "pt-BR"
        assert localizer.find_language("EN") == "en"
        assert localizer.find_language("de") is None
