from __future__ import annotations

import json
import os
from dataclasses import dataclass
from typing import Any


@dataclass
class _BaseSettings:
    _filename: str
    _settings: dict[int, dict[str, Any]]

    def __init__(self, filename, settings):
        self._filename = filename
        self._settings = settings

    # ==============================
    # Generic settings methods
    # ==============================
    def update_settings(self, guild_id: int, dict_to_merge: dict):
        self._settings[guild_id] = self._settings.get(guild_id, {})
        self._settings[guild_id].update(dict_to_merge)

    def get_all_settings(self, guild_id: int) -> dict[str, Any]:
        return dict(self._settings.get(guild_id, {}))

    def clear_all_settings(self, guild_id: int):
        self._settings.pop(guild_id, None)

    # ==============================
    # Serialization/Deserialization
    # ==============================
    def save(self):
        tmp_filename = self._filename + '.tmp'
        with open(tmp_filename, 'w') as f:
            json.dump(self._settings, f, indent=2)
        os.replace(tmp_filename, self._filename)

    @classmethod
    def load(cls, filename) -> _BaseSettings:
        try:
            with open(filename, 'r') as f:
                settings_data = json.load(f)
        except FileNotFoundError:
            settings_data = {}
        # Convert keys from string to int
        normalized_data = {int(k): v for k, v in settings_data.items()}
        return cls(filename, normalized_data)
