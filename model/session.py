"""Per-channel game session state and its storage."""
from __future__ import annotations

import copy
import logging
import os
import secrets
import string
from dataclasses import dataclass, field, asdict
from typing import NamedTuple, Optional

import dill

from commands.command_enums import GamePhase

logger = logging.getLogger('discord')

# In-game player colors, used to tell a color from a player name when linking
PLAYER_COLORS = (
    "red", "blue", "green", "pink", "orange", "yellow", "black", "white", "purple",
    "brown", "cyan", "lime", "maroon", "rose", "banana", "gray", "tan", "coral",
)

_CONNECT_CODE_ALPHABET = string.ascii_uppercase + string.digits
_CONNECT_CODE_LENGTH = 8


class GameSessionKey(NamedTuple):
    """Identifies the shared game session of one text channel in one guild."""
    guild_id: int
    channel_id: int


@dataclass
class PlayerLink:
    """Binding of a Discord user to an in-game player."""
    user_id: int
    color: Optional[str] = None
    in_game_name: Optional[str] = None


@dataclass
class GameSessionState:
    guild_id: int
    channel_id: int
    connect_code: str = ""
    running: bool = False
    phase: str = GamePhase.LOBBY.value
    room_code: str = ""
    voice_channel_id: Optional[int] = None
    status_channel_id: Optional[int] = None
    linked_players: dict[int, PlayerLink] = field(default_factory=dict)

    @property
    def key(self) -> GameSessionKey:
        return GameSessionKey(self.guild_id, self.channel_id)

    @property
    def is_active(self) -> bool:
        return bool(self.connect_code)

    def start(self, voice_channel_id: Optional[int] = None,
              status_channel_id: Optional[int] = None) -> GameSessionState:
        """Begin a new game in this channel, discarding links from any previous game."""
        self.connect_code = "".join(secrets.choice(_CONNECT_CODE_ALPHABET) for _ in range(_CONNECT_CODE_LENGTH))
        self.running = True
        self.phase = GamePhase.LOBBY.value
        self.room_code = ""
        self.voice_channel_id = voice_channel_id
        self.status_channel_id = status_channel_id
        self.linked_players = {}
        return self

    def end(self) -> GameSessionState:
        """Clear everything but the session's identity."""
        fresh = GameSessionState(self.guild_id, self.channel_id)
        self.__dict__.update(fresh.__dict__)
        return self

    def link_player(self, user_id: int, color_or_name: str) -> PlayerLink:
        """Link a user to an in-game color, or to an in-game name when it isn't a color."""
        value = color_or_name.strip()
        if value.lower() in PLAYER_COLORS:
            link = PlayerLink(user_id, color=value.lower())
        else:
            link = PlayerLink(user_id, in_game_name=value)
        self.linked_players[user_id] = link
        return link

    def clear_player_data(self, user_id: int) -> bool:
        return self.linked_players.pop(user_id, None) is not None

    def to_dict(self) -> dict:
        data = asdict(self)
        # JSON object keys must be strings
        data['linked_players'] = {str(user_id): link for user_id, link in data['linked_players'].items()}
        return data


class SessionStore:
    """Storage for game sessions, keyed by GameSessionKey.

    ``get`` returns a detached copy; changes only take effect through ``put``.
    """

    def get(self, key: GameSessionKey) -> GameSessionState:
        raise NotImplementedError

    def put(self, state: GameSessionState) -> None:
        raise NotImplementedError

    def active_count(self) -> int:
        raise NotImplementedError


class InMemorySessionStore(SessionStore):
    """Process-local session storage with optional dill backups."""

    def __init__(self, sessions: Optional[dict[GameSessionKey, GameSessionState]] = None):
        self._sessions: dict[GameSessionKey, GameSessionState] = sessions or {}

    def get(self, key: GameSessionKey) -> GameSessionState:
        state = self._sessions.get(key)
        if state is None:
            return GameSessionState(key.guild_id, key.channel_id)
        return copy.deepcopy(state)

    def put(self, state: GameSessionState) -> None:
        if state.is_active:
            self._sessions[state.key] = copy.deepcopy(state)
        else:
            self._sessions.pop(state.key, None)

    def active_count(self) -> int:
        return sum(1 for state in self._sessions.values() if state.is_active)

    # ==============================
    # Backups
    # ==============================

    def backup(self, filename: str) -> None:
        """Write all active sessions to ``filename``."""
        with open(filename, "wb") as file:
            dill.dump(list(self._sessions.values()), file)

    @classmethod
    def load(cls, filename: str) -> InMemorySessionStore:
        """Restore sessions from a backup, or start empty when there is none."""
        if not os.path.isfile(filename):
            return cls()

        with open(filename, "rb") as file:
            states = dill.load(file)
        logger.info(f"Restored {len(states)} game session(s) from {filename}")
        return cls({state.key: state for state in states})
