"""
Tests for message utility functions used to send bot responses
"""

from unittest.mock import AsyncMock, patch, Mock

import discord
import pytest

from commands.responses import OutboundMessage
from utils import message_utils
from utils.message_utils import _split_text, send_outbound


class TestSplitText:
    """Test the split_text function."""

    def test_text_under_max_length(self):
        """Test text under max length returns single item list."""
        text = "Short text"
        result = _split_text(text, max_length=20)
        assert len(result) == 1
        assert result[0] == text

    def test_text_exactly_max_length(self):
        """Test text exactly max length returns single item list."""
        text = "1234567890"
        result = _split_text(text, max_length=10)
        assert result == [text]

    def test_text_over_max_length(self):
        """Test text over max length is split correctly."""
        text = "1234567890ABCDEFGHIJ"
        result = _split_text(text, max_length=10)
        assert result == ["1234567890", "ABCDEFGHIJ"]


class TestSafeSend:
    """Test the safe_send function."""

    @pytest.fixture(autouse=True)
    def setup_test(self):
        self.channel = AsyncMock(spec=discord.TextChannel)

    @patch('bot_client.logger')
    @pytest.mark.asyncio
    async def test_send_normal_message(self, mock_logger):
        """Test sending a normal message."""
        self.channel.send.return_value = AsyncMock(spec=discord.Message)

        result = await message_utils.safe_send(self.channel, "Test message")

        self.channel.send.assert_called_once_with("Test message")
        assert result is not None
        mock_logger.error.assert_not_called()

    @patch('bot_client.logger')
    @pytest.mark.asyncio
    async def test_send_empty_message(self, mock_logger):
        """Test sending an empty message adds zero-width space."""
        self.channel.send.return_value = AsyncMock(spec=discord.Message)

        await message_utils.safe_send(self.channel)

        self.channel.send.assert_called_once_with("\u200b")
        mock_logger.error.assert_not_called()

    @pytest.mark.asyncio
    async def test_send_embed_without_content(self):
        """Test an embed is sent as is, without placeholder content."""
        embed = discord.Embed(title="Card")

        await message_utils.safe_send(self.channel, None, embed=embed)

        self.channel.send.assert_called_once_with(None, embed=embed)

    @patch('bot_client.logger')
    @pytest.mark.asyncio
    async def test_send_long_message(self, mock_logger):
        """Test sending a message over 2000 characters."""
        first_message = AsyncMock(spec=discord.Message)
        self.channel.send.side_effect = [first_message, AsyncMock()]

        result = await message_utils.safe_send(self.channel, "x" * 3000)

        assert self.channel.send.call_count == 2
        assert self.channel.send.call_args_list[0].args[0] == "x" * 2000
        assert self.channel.send.call_args_list[1].args[0] == "x" * 1000
        assert result == first_message
        mock_logger.error.assert_not_called()

    @patch('bot_client.logger')
    @pytest.mark.asyncio
    async def test_handle_http_exception(self, mock_logger):
        """Test handling HTTP exceptions."""
        self.channel.send.side_effect = discord.HTTPException(response=Mock(), message="Error")

        result = await message_utils.safe_send(self.channel, "Test message")

        assert result is None
        mock_logger.error.assert_called_once()


class TestSendOutbound:
    """Test the send_outbound function."""

    @pytest.mark.asyncio
    async def test_sends_units_in_order(self):
        channel = AsyncMock(spec=discord.TextChannel)
        embed = discord.Embed(title="Card")

        sent = await send_outbound(channel, [OutboundMessage(content="first"), OutboundMessage(embed=embed)])

        assert len(sent) == 2
        assert channel.send.call_args_list[0].args == ("first",)
        assert channel.send.call_args_list[1].kwargs == {'embed': embed}

    @patch('bot_client.logger')
    @pytest.mark.asyncio
    async def test_failed_units_are_skipped(self, mock_logger):
        channel = AsyncMock(spec=discord.TextChannel)
        channel.send.side_effect = [discord.HTTPException(response=Mock(), message="Error"), AsyncMock()]

        sent = await send_outbound(channel, [OutboundMessage(content="a"), OutboundMessage(content="b")])

        assert len(sent) == 1
        mock_logger.error.assert_called_once()

    @pytest.mark.asyncio
    async def test_nothing_to_send(self):
        channel = AsyncMock(spec=discord.TextChannel)

        assert await send_outbound(channel, []) == []
        channel.send.assert_not_called()
