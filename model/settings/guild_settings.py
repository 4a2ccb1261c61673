from __future__ import annotations

import copy
from dataclasses import dataclass, field, fields, asdict

import config
from commands.command_enums import GamePhase
from ._base_settings import _BaseSettings

MAP_VERSIONS = ("simple", "detailed")
ROOM_CODE_DISPLAY_MODES = ("always", "spoiler", "never")
VOICE_ACTIONS = ("mute", "deaf")
PLAYER_STATUSES = ("alive", "dead")


def default_delays() -> dict[str, dict[str, int]]:
    """Seconds to wait before applying voice rules when moving from one phase to another."""
    lobby, tasks, discussion = (phase.value for phase in GamePhase)
    return {
        lobby: {lobby: 0, tasks: 5, discussion: 0},
        tasks: {lobby: 1, tasks: 0, discussion: 0},
        discussion: {lobby: 6, tasks: 7, discussion: 0},
    }


def default_voice_rules() -> dict[str, dict[str, dict[str, bool]]]:
    """Whether alive/dead players are muted or deafened in each phase."""
    lobby, tasks, discussion = (phase.value for phase in GamePhase)
    return {
        "mute": {
            lobby: {"alive": False, "dead": False},
            tasks: {"alive": True, "dead": False},
            discussion: {"alive": False, "dead": True},
        },
        "deaf": {
            lobby: {"alive": False, "dead": False},
            tasks: {"alive": True, "dead": False},
            discussion: {"alive": False, "dead": False},
        },
    }


@dataclass
class GuildSettings:
    """Bot settings of one guild."""
    command_prefix: str = config.DEFAULT_PREFIX
    language: str = config.DEFAULT_LANGUAGE
    admin_user_ids: list[int] = field(default_factory=list)
    operator_roles: list[int] = field(default_factory=list)
    unmute_dead_during_tasks: bool = False
    delays: dict[str, dict[str, int]] = field(default_factory=default_delays)
    voice_rules: dict[str, dict[str, dict[str, bool]]] = field(default_factory=default_voice_rules)
    map_version: str = "simple"
    match_summary: int = -1
    match_summary_channel: int | None = None
    auto_refresh: bool = False
    leaderboard_mention: bool = True
    leaderboard_size: int = 3
    leaderboard_min: int = 3
    mute_spectators: bool = False
    display_room_code: str = "spoiler"

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> GuildSettings:
        """Build settings from stored values; unknown keys are ignored, missing ones defaulted."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: copy.deepcopy(v) for k, v in data.items() if k in known})


@dataclass
class GuildSettingsStore:
    _settings: _BaseSettings
    """Class to store and manage the settings of every guild."""

    def __init__(self, settings=None):
        self._settings = settings if settings is not None else _BaseSettings(config.GUILD_SETTINGS_FILENAME, {})

    def get(self, guild_id: int) -> GuildSettings:
        """Get a snapshot of a guild's settings. Changes only persist through ``set``."""
        return GuildSettings.from_dict(self._settings.get_all_settings(guild_id))

    def set(self, guild_id: int, settings: GuildSettings) -> GuildSettingsStore:
        """Store every value of ``settings`` for a guild."""
        self._settings.update_settings(guild_id, settings.to_dict())
        return self

    def reset(self, guild_id: int) -> GuildSettingsStore:
        """Forget a guild's settings so it falls back to the defaults."""
        self._settings.clear_all_settings(guild_id)
        return self

    # ==============================
    # Serialization/Deserialization
    # ==============================

    def save(self) -> GuildSettingsStore:
        """Save settings to a JSON file."""
        self._settings.save()
        return self

    @classmethod
    def load(cls, filename: str = config.GUILD_SETTINGS_FILENAME) -> GuildSettingsStore:
        """Load settings from a JSON file and return a new GuildSettingsStore object."""
        return cls(_BaseSettings.load(filename))
