"""Interfaces of the services the command layer depends on, with process-local implementations."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

import discord

from model.locks import LockCoordinator, InMemoryLockCoordinator
from model.session import GameSessionState, SessionStore, InMemorySessionStore
from model.settings import GuildSettingsStore
from utils.localization import Localizer

logger = logging.getLogger('discord')


class PremiumTier(IntEnum):
    FREE = 0
    BRONZE = 1
    SILVER = 2
    GOLD = 3
    PLATINUM = 4
    SELF_HOST = 5


def is_premium_active(tier: PremiumTier, days_remaining: int) -> bool:
    if tier == PremiumTier.FREE:
        return False
    if tier == PremiumTier.SELF_HOST:
        return True
    return days_remaining > 0


# ==============================
# Voice
# ==============================

class VoiceController:
    """Applies mute/deafen state to the players of a session."""

    async def apply_to_all(self, state: GameSessionState, mute: bool, deaf: bool) -> None:
        raise NotImplementedError


class LoggingVoiceController(VoiceController):
    """Voice controller for deployments without voice actuation: records what it was asked to do."""

    async def apply_to_all(self, state: GameSessionState, mute: bool, deaf: bool) -> None:
        logger.info(
            f"Setting mute={mute} deaf={deaf} for {len(state.linked_players)} linked player(s) "
            f"in guild {state.guild_id}")


# ==============================
# Statistics
# ==============================

class StatsStore:
    """Read access to recorded games plus the premium status of guilds.

    Implementations raise ExternalServiceError when the backing store fails.
    """

    def get_guild_premium_status(self, guild_id: int) -> tuple[PremiumTier, int]:
        raise NotImplementedError

    def is_premium(self, guild_id: int) -> bool:
        return is_premium_active(*self.get_guild_premium_status(guild_id))

    def guild_stats(self, guild_id: int) -> dict[str, str]:
        raise NotImplementedError

    def user_stats(self, user_id: int, guild_id: int) -> dict[str, str]:
        raise NotImplementedError

    def game_stats(self, guild_id: int, connect_code: str, match_id: str) -> Optional[dict[str, str]]:
        raise NotImplementedError

    def delete_all_games_for_server(self, guild_id: int) -> None:
        raise NotImplementedError

    def delete_all_games_for_user(self, user_id: int) -> None:
        raise NotImplementedError


@dataclass
class RecordedGame:
    guild_id: int
    connect_code: str
    match_id: str
    winner: str
    user_ids: tuple[int, ...] = ()


class InMemoryStatsStore(StatsStore):
    def __init__(self, premium: Optional[dict[int, tuple[PremiumTier, int]]] = None):
        self.premium = premium or {}
        self.games: list[RecordedGame] = []

    def get_guild_premium_status(self, guild_id: int) -> tuple[PremiumTier, int]:
        return self.premium.get(guild_id, (PremiumTier.FREE, 0))

    def record(self, game: RecordedGame) -> None:
        self.games.append(game)

    def guild_stats(self, guild_id: int) -> dict[str, str]:
        games = [g for g in self.games if g.guild_id == guild_id]
        return {"Games Played": str(len(games))}

    def user_stats(self, user_id: int, guild_id: int) -> dict[str, str]:
        games = [g for g in self.games if g.guild_id == guild_id and user_id in g.user_ids]
        return {"Games Played": str(len(games))}

    def game_stats(self, guild_id: int, connect_code: str, match_id: str) -> Optional[dict[str, str]]:
        for game in self.games:
            if game.guild_id == guild_id and game.connect_code == connect_code and game.match_id == match_id:
                return {"Winner": game.winner, "Players": str(len(game.user_ids))}
        return None

    def delete_all_games_for_server(self, guild_id: int) -> None:
        self.games = [g for g in self.games if g.guild_id != guild_id]

    def delete_all_games_for_user(self, user_id: int) -> None:
        self.games = [g for g in self.games if user_id not in g.user_ids]


# ==============================
# Usernames and privacy
# ==============================

class UsernameCache:
    """In-game names previously seen for each user, used for automatic linking."""

    def __init__(self):
        self._names: dict[tuple[int, int], set[str]] = {}

    def add(self, guild_id: int, user_id: int, name: str) -> None:
        self._names.setdefault((guild_id, user_id), set()).add(name)

    def get_names(self, guild_id: int, user_id: int) -> set[str]:
        return set(self._names.get((guild_id, user_id), set()))

    def get_names_any_guild(self, user_id: int) -> set[str]:
        return {name for (_, uid), names in self._names.items() if uid == user_id for name in names}

    def delete_links_by_user_id(self, guild_id: int, user_id: int) -> None:
        self._names.pop((guild_id, user_id), None)

    def delete_all_for_user(self, user_id: int) -> None:
        for key in [key for key in self._names if key[1] == user_id]:
            del self._names[key]


class PrivacyStore:
    """Which users opted out of data collection."""

    def __init__(self):
        self._opted_out: set[int] = set()

    def is_opted_out(self, user_id: int) -> bool:
        return user_id in self._opted_out

    def set_opt_in(self, user_id: int, opt_in: bool) -> None:
        if opt_in:
            self._opted_out.discard(user_id)
        else:
            self._opted_out.add(user_id)


# ==============================
# Bundle
# ==============================

@dataclass
class BotServices:
    """Everything a dispatch can reach besides its own context."""
    guild_settings: GuildSettingsStore
    localizer: Localizer = field(default_factory=Localizer)
    sessions: SessionStore = field(default_factory=InMemorySessionStore)
    locks: LockCoordinator = field(default_factory=InMemoryLockCoordinator)
    stats: StatsStore = field(default_factory=InMemoryStatsStore)
    voice: VoiceController = field(default_factory=LoggingVoiceController)
    usernames: UsernameCache = field(default_factory=UsernameCache)
    privacy: PrivacyStore = field(default_factory=PrivacyStore)
    client: Optional[discord.Client] = None

    @property
    def guild_count(self) -> int:
        return len(self.client.guilds) if self.client is not None else 0
