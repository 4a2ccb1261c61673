"""
Model components for the auto-mute bot.

This module provides game sessions, session locks, guild settings, map assets and
the interfaces of the external services the bot talks to.
"""

from .locks import LockCoordinator, InMemoryLockCoordinator, SessionLock
from .maps import MapItem, MapImage, new_map_item
from .session import GameSessionKey, GameSessionState, PlayerLink, SessionStore, InMemorySessionStore
from .settings import GuildSettings, GuildSettingsStore

__all__ = [
    # Sessions
    'GameSessionKey',
    'GameSessionState',
    'PlayerLink',
    'SessionStore',
    'InMemorySessionStore',

    # Locks
    'LockCoordinator',
    'InMemoryLockCoordinator',
    'SessionLock',

    # Maps
    'MapItem',
    'MapImage',
    'new_map_item',

    # Settings
    'GuildSettings',
    'GuildSettingsStore',
]
