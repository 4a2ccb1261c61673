"""
Command testing helpers for the auto-mute bot.

This module provides helper functions that run a message through the same path
as the on_message event, without touching the session backup file.
"""

from unittest.mock import patch

from bot_impl import handle_message
from tests.fixtures.discord_mocks import MockMessage


async def run_command(dispatcher, content, author, channel, guild, bot_user_id=999):
    """
    Send a message through the bot and return what it replied.

    Args:
        dispatcher: The dispatcher built for the test
        content: Full message content, prefix included (e.g. '.au help')
        author: The member sending the message
        channel: The channel the message is sent in
        guild: The guild of the channel

    Returns:
        The messages the bot sent in response
    """
    message = MockMessage(
        content=content,
        channel=channel,
        author=author,
        guild=guild
    )

    with patch('bot_impl.backup'):
        return await handle_message(message, dispatcher, bot_user_id)
