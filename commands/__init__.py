"""
Command system for the auto-mute bot.

This module provides the command and setting registries, the permission gate and
the error taxonomy shared by every command module.
"""

from .command_enums import CommandCategory, SettingCategory, PermissionTier, Visibility, GamePhase
from .errors import (
    CommandError, NotFound, PermissionDenied, LockUnavailable, ValidationError,
    ExternalServiceError, ConfigurationConflict
)
from .permissions import authorize, ensure_authorized, caller_permissions
from .registry import Registry, RegistryBuilder, CommandInfo, SettingInfo, build_registry, command_builder

__all__ = [
    'CommandCategory',
    'SettingCategory',
    'PermissionTier',
    'Visibility',
    'GamePhase',
    'CommandError',
    'NotFound',
    'PermissionDenied',
    'LockUnavailable',
    'ValidationError',
    'ExternalServiceError',
    'ConfigurationConflict',
    'authorize',
    'ensure_authorized',
    'caller_permissions',
    'Registry',
    'RegistryBuilder',
    'CommandInfo',
    'SettingInfo',
    'build_registry',
    'command_builder',
]
