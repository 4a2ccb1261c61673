from __future__ import annotations

from typing import Optional

import discord

import config
import global_vars
from bot_client import client, logger
from commands.dispatcher import Dispatcher, DispatchContext, tokenize
from commands.loader import build_registries
from commands.permissions import caller_permissions
from commands.responses import format_payload
from model.services import BotServices
from model.session import InMemorySessionStore
from model.settings import GuildSettingsStore
from utils.localization import Localizer, Message
from utils.message_utils import safe_send, send_outbound

UNEXPECTED_ERROR = Message(
    "message_handlers.handleMessageCreate.unexpectedError",
    "Something went wrong while handling that command. Please try again!")


def load_services(discord_client: Optional[discord.Client] = None) -> BotServices:
    # Restores settings, language catalogs and sessions from disk
    return BotServices(
        guild_settings=GuildSettingsStore.load(config.GUILD_SETTINGS_FILENAME),
        localizer=Localizer.load(config.LOCALES_DIRECTORY),
        sessions=InMemorySessionStore.load(config.SESSION_BACKUP_FILENAME),
        client=discord_client,
    )


def create_dispatcher(services: BotServices) -> Dispatcher:
    """Build the command and setting registries and the dispatcher that uses them."""
    commands, settings = build_registries()
    commands.log_registered(logger)
    settings.log_registered(logger)
    return Dispatcher(commands, settings, services)


def backup(services: BotServices, filename: str = config.SESSION_BACKUP_FILENAME):
    # Backs up the game sessions
    if not isinstance(services.sessions, InMemorySessionStore):
        return
    try:
        services.sessions.backup(filename)
    except OSError as e:
        logger.error(f"Failed to back up game sessions to {filename}: {e}")


async def update_presence(discord_client: discord.Client):
    # Updates Discord Presence
    await discord_client.change_presence(
        status=discord.Status.online,
        activity=discord.Game(name=f"{config.DEFAULT_PREFIX} help"),
    )


async def handle_message(message: discord.Message, dispatcher: Dispatcher,
                         bot_user_id: Optional[int] = None) -> list[discord.Message]:
    """Dispatch a guild message addressed to the bot and send the reply.

    Returns:
        The messages that were sent in response
    """
    guild = message.guild
    if guild is None:
        return []

    services = dispatcher.services
    settings = services.guild_settings.get(guild.id)
    args = tokenize(message.content, settings.command_prefix, bot_user_id)
    if args is None:
        return []

    is_admin, is_permissioned = caller_permissions(message.author, guild, settings)
    ctx = DispatchContext(
        author_id=message.author.id,
        guild_id=guild.id,
        channel_id=message.channel.id,
        args=args,
        settings=settings,
        services=services,
        is_admin=is_admin,
        is_permissioned=is_permissioned,
        message=message,
    )

    try:
        response = await dispatcher.handle(ctx)
    except Exception:
        logger.exception(f"Unhandled error dispatching {ctx.args[:1]} in guild {guild.id}")
        await safe_send(message.channel, services.localizer.localize(UNEXPECTED_ERROR, settings.language))
        return []

    if ctx.entry is not None and ctx.entry.requires_lock:
        backup(services)

    if response.destination is None:
        return []
    if response.destination == message.channel.id:
        channel = message.channel
    else:
        channel = guild.get_channel(response.destination)
    if channel is None:
        logger.warning(f"Reply destination {response.destination} not found in guild {guild.id}")
        return []

    return await send_outbound(channel, format_payload(response.payload))


### Event Handling
@client.event
async def on_ready():
    # On startup; reconnects keep the existing services and registries
    if global_vars.dispatcher is None:
        global_vars.services = load_services(client)
        global_vars.dispatcher = create_dispatcher(global_vars.services)

    await update_presence(client)
    logger.info(f"Logged in as {client.user.name} ({client.user.id}), serving {len(client.guilds)} guild(s)")
    print("Logged in as")
    print(client.user.name)
    print(client.user.id)
    print("------")


@client.event
async def on_message(message):
    # Handles messages

    # Don't respond to self or other bots
    if message.author == client.user or message.author.bot:
        return

    if global_vars.dispatcher is None:
        logger.info("Ignoring message received before the bot was ready")
        return

    await handle_message(message, global_vars.dispatcher, client.user.id)
