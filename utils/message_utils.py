"""
Utility functions for sending bot responses to Discord.
"""

from typing import Optional, List, Union

import discord

import bot_client
import config


def _split_text(text: str, max_length: int = config.MAX_MESSAGE_LENGTH) -> List[str]:
    """
    Split text into chunks of maximum length.

    Args:
        text: The text to split
        max_length: Maximum length of each chunk

    Returns:
        List of text chunks
    """
    return [text[i:i+max_length] for i in range(0, len(text), max_length)]


async def safe_send(
    channel: Union[discord.abc.Messageable, discord.Member, discord.User],
    content: Optional[str] = None,
    **kwargs
) -> Optional[discord.Message]:
    """
    Safely send a message to a channel, handling errors and long messages.

    Args:
        channel: The channel or user to send to
        content: The content of the message
        **kwargs: Additional message parameters

    Returns:
        The sent message or None if failed
    """
    try:
        # Handle empty content
        if not content and not any(k in kwargs for k in ['embed', 'embeds', 'file', 'files']):
            content = "\u200b"  # Zero-width space

        # Split long messages
        if content and len(content) > config.MAX_MESSAGE_LENGTH:
            chunks = _split_text(content)
            first_message = None
            for i, chunk in enumerate(chunks):
                if i == 0:
                    # Apply kwargs only to the first message
                    message = await channel.send(chunk, **kwargs)
                    first_message = message
                else:
                    await channel.send(chunk)
            return first_message

        # Regular send
        return await channel.send(content, **kwargs)
    except discord.HTTPException as e:
        bot_client.logger.error(f"Failed to send message: {e}")
        return None


async def send_outbound(
    channel: discord.abc.Messageable,
    outbound: list
) -> list[discord.Message]:
    """
    Send formatted outbound messages to a channel, in order.

    Args:
        channel: The channel to send to
        outbound: OutboundMessage units produced by the response formatter

    Returns:
        The messages that were actually sent
    """
    sent = []
    for unit in outbound:
        kwargs = {'embed': unit.embed} if unit.embed is not None else {}
        message = await safe_send(channel, unit.content, **kwargs)
        if message is not None:
            sent.append(message)
    return sent
