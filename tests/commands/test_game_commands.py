"""
Tests for the commands that manage the game session of a channel.
"""

from unittest.mock import AsyncMock

import pytest

from commands.responses import CardResponse, TextResponse, EMPTY_RESPONSE
from model.session import GameSessionKey
from tests.fixtures.bot_fixtures import (
    services, registries, dispatcher, make_context, GUILD_ID, CHANNEL_ID
)
from tests.fixtures.discord_mocks import MockMember, MockMessage, MockVoiceChannel

KEY = GameSessionKey(GUILD_ID, CHANNEL_ID)
USER = "<@123456789012345678>"
USER_ID = 123456789012345678


@pytest.fixture
def voice(services):
    services.voice = AsyncMock()
    return services.voice


async def _run(dispatcher, services, *args, **kwargs):
    return await dispatcher.handle(make_context(services, list(args), **kwargs))


class TestNewAndEnd:

    @pytest.mark.asyncio
    async def test_new(self, dispatcher, services):
        author = MockMember(3, "Operator", voice_channel=MockVoiceChannel(300, "Among Us VC"))

        response = await _run(dispatcher, services, "new", message=MockMessage(content=".au new", author=author))

        assert isinstance(response.payload, CardResponse)
        assert response.payload.embed.title == "Lobby is open!"
        state = services.sessions.get(KEY)
        assert state.is_active
        assert state.voice_channel_id == 300
        assert state.status_channel_id == CHANNEL_ID

    @pytest.mark.asyncio
    async def test_new_replaces_running_game(self, dispatcher, services, voice):
        await _run(dispatcher, services, "new")
        first_code = services.sessions.get(KEY).connect_code

        await _run(dispatcher, services, "start")

        assert services.sessions.get(KEY).connect_code != first_code
        voice.apply_to_all.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_end(self, dispatcher, services, voice):
        await _run(dispatcher, services, "new")

        response = await _run(dispatcher, services, "end")

        assert response.payload == TextResponse("Game ended! Everyone has been unmuted.")
        assert not services.sessions.get(KEY).is_active
        voice.apply_to_all.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_end_without_game(self, dispatcher, services):
        response = await _run(dispatcher, services, "stop")

        assert response.payload == TextResponse(
            "There's no game running in this channel! Start one with `.au new`")


class TestPauseAndRefresh:

    @pytest.mark.asyncio
    async def test_pause_toggles(self, dispatcher, services, voice):
        await _run(dispatcher, services, "new")

        paused = await _run(dispatcher, services, "pause")
        assert not services.sessions.get(KEY).running
        assert paused.payload.embed.description.startswith("**Bot is Paused!**")
        voice.apply_to_all.assert_awaited_once()

        await _run(dispatcher, services, "unpause")
        assert services.sessions.get(KEY).running

    @pytest.mark.asyncio
    async def test_refresh(self, dispatcher, services):
        await _run(dispatcher, services, "new")

        response = await _run(dispatcher, services, "r")

        assert isinstance(response.payload, CardResponse)
        assert not services.locks.is_locked(KEY)

    @pytest.mark.asyncio
    async def test_room_code_display(self, dispatcher, services):
        await _run(dispatcher, services, "new")
        state = services.sessions.get(KEY)
        state.room_code = "ABCDEF"
        services.sessions.put(state)

        response = await _run(dispatcher, services, "refresh")

        assert response.payload.embed.fields[0].value == "||ABCDEF||"


class TestLinking:

    @pytest.mark.asyncio
    async def test_link_color(self, dispatcher, services):
        await _run(dispatcher, services, "new")

        response = await _run(dispatcher, services, "link", USER, "Red")

        assert response.payload == TextResponse(f"Linked {USER} to red")
        assert services.sessions.get(KEY).linked_players[USER_ID].color == "red"

    @pytest.mark.asyncio
    async def test_link_name_is_cached(self, dispatcher, services):
        await _run(dispatcher, services, "new")

        await _run(dispatcher, services, "l", USER, "Big", "Soup")

        assert services.sessions.get(KEY).linked_players[USER_ID].in_game_name == "Big Soup"
        assert services.usernames.get_names(GUILD_ID, USER_ID) == {"Big Soup"}

    @pytest.mark.asyncio
    async def test_link_missing_arguments_shows_help(self, dispatcher, services):
        response = await _run(dispatcher, services, "link", USER)

        assert response.payload.embed.title == "🔗 link"

    @pytest.mark.asyncio
    async def test_link_unknown_user(self, dispatcher, services):
        await _run(dispatcher, services, "new")

        response = await _run(dispatcher, services, "link", "Soup", "red")

        assert response.payload == TextResponse("I couldn't find a user by that name or ID!")

    @pytest.mark.asyncio
    async def test_link_without_game(self, dispatcher, services):
        response = await _run(dispatcher, services, "link", USER, "red")

        assert response.payload.text.startswith("There's no game running")

    @pytest.mark.asyncio
    async def test_unlink(self, dispatcher, services):
        await _run(dispatcher, services, "new")
        await _run(dispatcher, services, "link", USER, "red")

        response = await _run(dispatcher, services, "unlink", USER)

        assert response.payload == TextResponse(f"Unlinked {USER}")
        assert services.sessions.get(KEY).linked_players == {}

        response = await _run(dispatcher, services, "u", USER)
        assert response.payload == TextResponse(f"{USER} isn't linked to anyone")


class TestUnmuteAndForce:

    @pytest.mark.asyncio
    async def test_unmuteall(self, dispatcher, services, voice):
        response = await _run(dispatcher, services, "unmuteall")

        assert response == EMPTY_RESPONSE
        voice.apply_to_all.assert_awaited_once()
        _, mute, deaf = voice.apply_to_all.await_args.args
        assert (mute, deaf) == (False, False)

    @pytest.mark.asyncio
    async def test_force_is_a_no_op(self, dispatcher, services):
        await _run(dispatcher, services, "new")
        before = services.sessions.get(KEY)

        response = await _run(dispatcher, services, "f", "tasks")

        assert response == EMPTY_RESPONSE
        assert services.sessions.get(KEY) == before
