"""
Utility functions for the auto-mute bot.

This module provides localization, mention parsing and message sending helpers.
"""

from .localization import Message, Localizer
from .mention_utils import extract_user_id, extract_role_id, extract_channel_id
from .message_utils import safe_send

__all__ = [
    # Localization
    'Message',
    'Localizer',

    # Mentions
    'extract_user_id',
    'extract_role_id',
    'extract_channel_id',

    # Message utilities
    'safe_send',
]
