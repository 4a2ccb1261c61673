"""
Tests specifically focused on the on_message function in bot_impl.py.

These tests send mock messages through the same path Discord events take, from the
prefix check to the messages the bot sends back.
"""

from unittest.mock import patch, AsyncMock

import pytest

import global_vars
from bot_impl import on_message, handle_message, backup
from model.session import GameSessionKey, InMemorySessionStore
from tests.fixtures.bot_fixtures import services, registries, dispatcher
from tests.fixtures.command_testing import run_command
from tests.fixtures.discord_mocks import MockMember, MockMessage, mock_discord_setup


@pytest.mark.asyncio
async def test_on_message_bot_message(mock_discord_setup, dispatcher):
    """Test that bot ignores its own messages."""
    global_vars.dispatcher = dispatcher
    channel = mock_discord_setup['channels']['among_us']
    bot_message = MockMessage(
        content=".au help",
        channel=channel,
        author=MockMember(999, "Bot", "AutoMuteUs", bot=True),
        guild=mock_discord_setup['guild']
    )

    with patch('bot_impl.handle_message', AsyncMock()) as mock_handle:
        with patch('bot_impl.client', mock_discord_setup['client']):
            await on_message(bot_message)

    mock_handle.assert_not_called()


@pytest.mark.asyncio
async def test_on_message_before_ready(mock_discord_setup):
    """Test that messages are ignored until the dispatcher exists."""
    message = MockMessage(
        content=".au help",
        channel=mock_discord_setup['channels']['among_us'],
        author=mock_discord_setup['members']['crewmate'],
        guild=mock_discord_setup['guild']
    )

    with patch('bot_impl.handle_message', AsyncMock()) as mock_handle:
        with patch('bot_impl.client', mock_discord_setup['client']):
            await on_message(message)

    mock_handle.assert_not_called()


@pytest.mark.asyncio
async def test_on_message_dispatches(mock_discord_setup, dispatcher):
    """Test that a prefixed message reaches the dispatcher and gets a reply."""
    global_vars.dispatcher = dispatcher
    channel = mock_discord_setup['channels']['among_us']
    message = MockMessage(
        content=".au help",
        channel=channel,
        author=mock_discord_setup['members']['crewmate'],
        guild=mock_discord_setup['guild']
    )

    with patch('bot_impl.backup'), patch('bot_impl.client', mock_discord_setup['client']):
        await on_message(message)

    assert len(channel.messages) == 1
    assert channel.messages[0].embed.title == "AutoMuteUs Bot Commands:"


@pytest.mark.asyncio
async def test_plain_chat_is_ignored(mock_discord_setup, dispatcher):
    channel = mock_discord_setup['channels']['among_us']

    sent = await run_command(dispatcher, "gg everyone", mock_discord_setup['members']['crewmate'],
                             channel, mock_discord_setup['guild'])

    assert sent == []
    assert channel.messages == []


@pytest.mark.asyncio
async def test_direct_messages_are_ignored(mock_discord_setup, dispatcher):
    channel = mock_discord_setup['channels']['among_us']
    message = MockMessage(content=".au help", channel=channel, author=mock_discord_setup['members']['crewmate'])

    assert await handle_message(message, dispatcher) == []


@pytest.mark.asyncio
async def test_mention_prefix(mock_discord_setup, dispatcher):
    channel = mock_discord_setup['channels']['among_us']

    sent = await run_command(dispatcher, "<@999> info", mock_discord_setup['members']['crewmate'],
                             channel, mock_discord_setup['guild'])

    assert sent[0].embed.title == "Bot Info"


@pytest.mark.asyncio
async def test_guild_prefix_is_used(mock_discord_setup, dispatcher):
    guild = mock_discord_setup['guild']
    channel = mock_discord_setup['channels']['among_us']
    owner = mock_discord_setup['members']['owner']

    await run_command(dispatcher, ".au settings prefix !", owner, channel, guild)
    ignored = await run_command(dispatcher, ".au info", owner, channel, guild)
    answered = await run_command(dispatcher, "!info", owner, channel, guild)

    assert ignored == []
    assert answered[0].embed.title == "Bot Info"


@pytest.mark.asyncio
async def test_permissions_come_from_the_member(mock_discord_setup, dispatcher):
    guild = mock_discord_setup['guild']
    channel = mock_discord_setup['channels']['among_us']
    owner = mock_discord_setup['members']['owner']
    operator = mock_discord_setup['members']['operator']
    crewmate = mock_discord_setup['members']['crewmate']

    await run_command(dispatcher, ".au settings operatorRoles <@&100>", owner, channel, guild)
    denied = await run_command(dispatcher, ".au new", crewmate, channel, guild)
    started = await run_command(dispatcher, ".au new", operator, channel, guild)

    assert denied[0].content == "User does not have the required permissions to execute this command!"
    assert started[0].embed.title == "Lobby is open!"
    state = dispatcher.services.sessions.get(GameSessionKey(guild.id, channel.id))
    assert state.voice_channel_id == mock_discord_setup['channels']['voice'].id


@pytest.mark.asyncio
async def test_locked_commands_back_up_sessions(mock_discord_setup, dispatcher):
    guild = mock_discord_setup['guild']
    channel = mock_discord_setup['channels']['among_us']
    message = MockMessage(content=".au new", channel=channel, author=mock_discord_setup['members']['owner'],
                          guild=guild)

    with patch('bot_impl.backup') as mock_backup:
        await handle_message(message, dispatcher)
        mock_backup.assert_called_once_with(dispatcher.services)

        mock_backup.reset_mock()
        message.content = ".au info"
        await handle_message(message, dispatcher)
        mock_backup.assert_not_called()


@pytest.mark.asyncio
async def test_unexpected_error_is_reported(mock_discord_setup, dispatcher):
    guild = mock_discord_setup['guild']
    channel = mock_discord_setup['channels']['among_us']

    with patch.object(dispatcher, 'handle', AsyncMock(side_effect=RuntimeError("boom"))), \
            patch('bot_impl.logger') as mock_logger:
        sent = await run_command(dispatcher, ".au info", mock_discord_setup['members']['owner'], channel, guild)

    assert sent == []
    assert channel.messages[0].content == "Something went wrong while handling that command. Please try again!"
    mock_logger.exception.assert_called_once()


@pytest.mark.asyncio
async def test_nothing_is_sent_for_empty_responses(mock_discord_setup, dispatcher):
    channel = mock_discord_setup['channels']['among_us']

    sent = await run_command(dispatcher, ".au unmuteall", mock_discord_setup['members']['owner'],
                             channel, mock_discord_setup['guild'])

    assert sent == []
    assert channel.messages == []


def test_backup_writes_sessions(tmp_path, services):
    filename = str(tmp_path / "sessions.pckl")
    state = services.sessions.get(GameSessionKey(1000, 201)).start()
    services.sessions.put(state)

    backup(services, filename)

    assert InMemorySessionStore.load(filename).active_count() == 1
