"""
Tests for map, privacy, worker bot, info and ascii commands.
"""

import pytest

from commands.responses import CardResponse, TextResponse
from tests.fixtures.bot_fixtures import (
    services, registries, dispatcher, make_context, GUILD_ID, PREMIUM_GUILD_ID
)

MAPS = "https://github.com/automuteus/automuteus/blob/master/assets/maps/en/"


async def _run(dispatcher, services, *args, **kwargs):
    return await dispatcher.handle(make_context(services, list(args), **kwargs))


class TestMap:

    @pytest.fixture(autouse=True)
    def no_map_url_override(self, monkeypatch):
        monkeypatch.delenv("BASE_MAP_URL", raising=False)

    @pytest.mark.asyncio
    async def test_default_version(self, dispatcher, services):
        response = await _run(dispatcher, services, "map", "skeld")

        assert response.payload == TextResponse(MAPS + "the_skeld.png")

    @pytest.mark.asyncio
    async def test_multi_word_name_with_version(self, dispatcher, services):
        response = await _run(dispatcher, services, "map", "the", "skeld", "detailed")

        assert response.payload == TextResponse(MAPS + "the_skeld_detailed.png")

    @pytest.mark.asyncio
    async def test_guild_default_version(self, dispatcher, services):
        settings = services.guild_settings.get(GUILD_ID)
        settings.map_version = "detailed"
        services.guild_settings.set(GUILD_ID, settings)

        response = await _run(dispatcher, services, "map", "mira", "hq")

        assert response.payload == TextResponse(MAPS + "mira_hq_detailed.png")

    @pytest.mark.asyncio
    async def test_unknown_map(self, dispatcher, services):
        response = await _run(dispatcher, services, "map", "moon")

        assert response.payload == TextResponse("I don't have a map by that name!")

    @pytest.mark.asyncio
    async def test_no_arguments_shows_help(self, dispatcher, services):
        response = await _run(dispatcher, services, "map")

        assert response.payload.embed.title == "🗺 map"


class TestPrivacy:

    @pytest.mark.asyncio
    async def test_showme(self, dispatcher, services):
        services.usernames.add(GUILD_ID, 3, "Soup")

        response = await _run(dispatcher, services, "privacy", "showme", author_id=3)

        assert response.payload.text == (
            "Cached in-game names: Soup\nYou are opted **in** to data collection.")

    @pytest.mark.asyncio
    async def test_optout_deletes_cached_names(self, dispatcher, services):
        services.usernames.add(GUILD_ID, 3, "Soup")

        await _run(dispatcher, services, "gdpr", "optout", author_id=3)

        assert services.privacy.is_opted_out(3)
        assert services.usernames.get_names_any_guild(3) == set()

        await _run(dispatcher, services, "priv", "optin", author_id=3)
        assert not services.privacy.is_opted_out(3)

    @pytest.mark.asyncio
    async def test_unknown_argument_shows_help(self, dispatcher, services):
        response = await _run(dispatcher, services, "privacy", "sell")

        assert isinstance(response.payload, CardResponse)


class TestInfoCards:

    @pytest.mark.asyncio
    async def test_info(self, dispatcher, services):
        await _run(dispatcher, services, "new")

        response = await _run(dispatcher, services, "info")

        fields = {field.name: field.value for field in response.payload.embed.fields}
        assert fields["Version"] == "1.0.0"
        assert fields["Active Games"] == "1"
        assert fields["Language"] == "en"

    @pytest.mark.asyncio
    async def test_workerbot_free(self, dispatcher, services):
        response = await _run(dispatcher, services, "w")

        assert response.payload.embed.description.endswith("Worker bots require AutoMuteUs Premium.")

    @pytest.mark.asyncio
    async def test_workerbot_premium(self, dispatcher, services):
        response = await _run(dispatcher, services, "invite", guild_id=PREMIUM_GUILD_ID)

        assert response.payload.embed.description.endswith("worker bots are available.")


class TestAscii:

    @pytest.mark.asyncio
    async def test_crewmate(self, dispatcher, services):
        response = await _run(dispatcher, services, "ascii")

        assert response.payload.text.startswith("```")

    @pytest.mark.asyncio
    async def test_ejection(self, dispatcher, services):
        response = await _run(dispatcher, services, "asc", "<@123456789012345678>", "t", "2")

        assert "<@123456789012345678> was An Impostor." in response.payload.text
        assert "2 Impostors remain" in response.payload.text

    @pytest.mark.asyncio
    async def test_ejection_not_impostor(self, dispatcher, services):
        response = await _run(dispatcher, services, "ascii", "<@123456789012345678>", "false", "many")

        assert "was not An Impostor." in response.payload.text
        assert "1 Impostor remains" in response.payload.text

    @pytest.mark.asyncio
    async def test_unknown_user(self, dispatcher, services):
        response = await _run(dispatcher, services, "ascii", "Soup")

        assert response.payload == TextResponse("I couldn't find a user by that name or ID!")
