"""Commands that start, stop and manage the game session of a channel."""
import logging

import discord

from commands.command_enums import CommandCategory, PermissionTier
from commands.dispatcher import DispatchContext, COULDNT_FIND_USER
from commands.help_commands import command_help
from commands.registry import command_builder
from commands.responses import Response, EMPTY_RESPONSE, build_card
from model.session import GameSessionState
from utils.localization import Message
from utils.mention_utils import extract_user_id

logger = logging.getLogger('discord')

STATE_TITLE = Message("responses.gameStateResponse.Title", "Lobby is open!")
STATE_PAUSED = Message("responses.gameStateResponse.Paused", "**Bot is Paused!** Unpause with `{command_prefix} pause`!")
STATE_RUNNING = Message("responses.gameStateResponse.Running", "Bot is running. Type `{command_prefix} link` to link players.")
FIELD_ROOM_CODE = Message("responses.gameStateResponse.RoomCode", "🔒 ROOM CODE")
FIELD_PHASE = Message("responses.gameStateResponse.Phase", "Phase")
FIELD_PLAYERS = Message("responses.gameStateResponse.Players", "Linked Players")
NO_PLAYERS = Message("responses.gameStateResponse.NoPlayers", "Nobody is linked yet")
NO_GAME = Message("commands.HandleCommand.noGame", "There's no game running in this channel! Start one with `{command_prefix} new`")
LINKED = Message("commands.linkPlayer.Success", "Linked <@{user_id}> to {player}")
UNLINKED = Message("commands.unlinkPlayer.Success", "Unlinked <@{user_id}>")
NOT_LINKED = Message("commands.unlinkPlayer.NotLinked", "<@{user_id}> isn't linked to anyone")
GAME_ENDED = Message("commands.End.Success", "Game ended! Everyone has been unmuted.")


def _room_code(state: GameSessionState, mode: str) -> str:
    if not state.room_code:
        return "—"
    if mode == "always":
        return state.room_code
    if mode == "spoiler":
        return f"||{state.room_code}||"
    return "🔒"


def game_state_card(state: GameSessionState, ctx: DispatchContext) -> discord.Embed:
    """Status card of a game session."""
    prefix = ctx.settings.command_prefix
    players = [
        f"<@{link.user_id}> → {link.color or link.in_game_name}"
        for link in state.linked_players.values()
    ]
    status = STATE_RUNNING if state.running else STATE_PAUSED
    return build_card(
        title=ctx.localize(STATE_TITLE),
        description=ctx.localize(status, command_prefix=prefix),
        fields=[
            (ctx.localize(FIELD_ROOM_CODE), _room_code(state, ctx.settings.display_room_code), True),
            (ctx.localize(FIELD_PHASE), state.phase.upper(), True),
            (ctx.localize(FIELD_PLAYERS), "\n".join(players) or ctx.localize(NO_PLAYERS), False),
        ],
        footer=state.connect_code or None,
    )


def _voice_channel_id(ctx: DispatchContext):
    author = getattr(ctx.message, 'author', None)
    voice = getattr(author, 'voice', None)
    channel = getattr(voice, 'channel', None)
    return getattr(channel, 'id', None)


@command_builder.command(
    name="new",
    category=CommandCategory.NEW,
    example="new",
    short_help=Message("commands.AllCommands.New.shortDesc", "Start a new game"),
    description=Message("commands.AllCommands.New.desc", "Start a new game"),
    arguments=Message("commands.AllCommands.New.args", "None"),
    aliases=["start", "n"],
    emoji="🕹",
    tier=PermissionTier.OPERATOR,
    requires_lock=True,
)
async def new_command(ctx: DispatchContext) -> Response:
    """Start a new game in this channel, replacing any previous one."""
    if ctx.session.is_active:
        logger.info(f"Replacing game {ctx.session.connect_code} in {ctx.key}")
        await ctx.services.voice.apply_to_all(ctx.session, False, False)
    ctx.session.start(voice_channel_id=_voice_channel_id(ctx), status_channel_id=ctx.channel_id)
    logger.info(f"New game {ctx.session.connect_code} in {ctx.key}")
    return ctx.reply_card(game_state_card(ctx.session, ctx))


@command_builder.command(
    name="end",
    category=CommandCategory.END,
    example="end",
    short_help=Message("commands.AllCommands.End.shortDesc", "End the game"),
    description=Message("commands.AllCommands.End.desc", "End the current game"),
    arguments=Message("commands.AllCommands.End.args", "None"),
    aliases=["stop", "e"],
    emoji="🛑",
    tier=PermissionTier.OPERATOR,
    requires_lock=True,
)
async def end_command(ctx: DispatchContext) -> Response:
    """End the game and unmute everyone."""
    logger.info("User typed end to end the current game")
    if not ctx.session.is_active:
        return ctx.reply_text(NO_GAME, command_prefix=ctx.settings.command_prefix)

    await ctx.services.voice.apply_to_all(ctx.session, False, False)
    ctx.session.end()
    return ctx.reply_text(GAME_ENDED)


@command_builder.command(
    name="pause",
    category=CommandCategory.PAUSE,
    example="pause",
    short_help=Message("commands.AllCommands.Pause.shortDesc", "Pause the bot"),
    description=Message(
        "commands.AllCommands.Pause.desc",
        "Pause the bot so it doesn't automute/deafen. Will unmute/undeafen all players!"),
    arguments=Message("commands.AllCommands.Pause.args", "None"),
    aliases=["unpause", "p"],
    emoji="⏸",
    tier=PermissionTier.OPERATOR,
    requires_lock=True,
)
async def pause_command(ctx: DispatchContext) -> Response:
    """Toggle automatic muting; pausing unmutes everyone."""
    if not ctx.session.is_active:
        return ctx.reply_text(NO_GAME, command_prefix=ctx.settings.command_prefix)

    ctx.session.running = not ctx.session.running
    if not ctx.session.running:
        await ctx.services.voice.apply_to_all(ctx.session, False, False)
    return ctx.reply_card(game_state_card(ctx.session, ctx))


@command_builder.command(
    name="refresh",
    category=CommandCategory.REFRESH,
    example="refresh",
    short_help=Message("commands.AllCommands.Refresh.shortDesc", "Refresh the bot status"),
    description=Message(
        "commands.AllCommands.Refresh.desc",
        "Recreate the bot status message if it ends up too far in the chat"),
    arguments=Message("commands.AllCommands.Refresh.args", "None"),
    aliases=["reload", "ref", "rel", "r"],
    emoji="♻",
    tier=PermissionTier.OPERATOR,
)
async def refresh_command(ctx: DispatchContext) -> Response:
    """Post the status card again."""
    state = ctx.services.sessions.get(ctx.key)
    if not state.is_active:
        return ctx.reply_text(NO_GAME, command_prefix=ctx.settings.command_prefix)
    return ctx.reply_card(game_state_card(state, ctx))


@command_builder.command(
    name="link",
    category=CommandCategory.LINK,
    example="link @Soup red",
    short_help=Message("commands.AllCommands.Link.shortDesc", "Link a Discord User"),
    description=Message(
        "commands.AllCommands.Link.desc",
        "Manually link a Discord User to their in-game color or name"),
    arguments=Message("commands.AllCommands.Link.args", "<discord User> <in-game color or name>"),
    aliases=["l"],
    emoji="🔗",
    tier=PermissionTier.OPERATOR,
    requires_lock=True,
)
async def link_command(ctx: DispatchContext) -> Response:
    if len(ctx.arguments) < 2:
        return command_help(ctx)
    if not ctx.session.is_active:
        return ctx.reply_text(NO_GAME, command_prefix=ctx.settings.command_prefix)

    try:
        user_id = extract_user_id(ctx.arguments[0])
    except ValueError as e:
        logger.info(str(e))
        return ctx.reply_text(COULDNT_FIND_USER)

    link = ctx.session.link_player(user_id, " ".join(ctx.arguments[1:]))
    if link.in_game_name:
        ctx.services.usernames.add(ctx.guild_id, user_id, link.in_game_name)
    return ctx.reply_text(LINKED, user_id=user_id, player=link.color or link.in_game_name)


@command_builder.command(
    name="unlink",
    category=CommandCategory.UNLINK,
    example="unlink @Soup",
    short_help=Message("commands.AllCommands.Unlink.shortDesc", "Unlink a Discord User"),
    description=Message(
        "commands.AllCommands.Unlink.desc",
        "Manually unlink a Discord User from their in-game player"),
    arguments=Message("commands.AllCommands.Unlink.args", "<discord User>"),
    aliases=["un", "ul", "u"],
    emoji="🚷",
    tier=PermissionTier.OPERATOR,
    requires_lock=True,
)
async def unlink_command(ctx: DispatchContext) -> Response:
    if not ctx.arguments:
        return command_help(ctx)

    try:
        user_id = extract_user_id(ctx.arguments[0])
    except ValueError as e:
        logger.info(str(e))
        return ctx.reply_text(COULDNT_FIND_USER)

    logger.info(f"Removing player {user_id}")
    if not ctx.session.clear_player_data(user_id):
        return ctx.reply_text(NOT_LINKED, user_id=user_id)
    return ctx.reply_text(UNLINKED, user_id=user_id)


@command_builder.command(
    name="unmuteall",
    category=CommandCategory.UNMUTE_ALL,
    example="unmuteall",
    short_help=Message("commands.AllCommands.UnmuteAll.shortDesc", "Force the bot to unmute all"),
    description=Message("commands.AllCommands.UnmuteAll.desc", "Force the bot to unmute all linked players"),
    arguments=Message("commands.AllCommands.UnmuteAll.args", "None"),
    aliases=["unmute", "ua"],
    emoji="🔊",
    tier=PermissionTier.OPERATOR,
)
async def unmute_all_command(ctx: DispatchContext) -> Response:
    state = ctx.services.sessions.get(ctx.key)
    await ctx.services.voice.apply_to_all(state, False, False)
    return EMPTY_RESPONSE


@command_builder.command(
    name="force",
    category=CommandCategory.FORCE,
    example="force task",
    short_help=Message("commands.AllCommands.Force.shortDesc", "Force the bot to transition"),
    description=Message(
        "commands.AllCommands.Force.desc",
        "Force the bot to transition to another game stage, if it doesn't transition properly"),
    arguments=Message(
        "commands.AllCommands.Force.args",
        "<phase name> (task, discuss, or lobby / t,d, or l)"),
    aliases=["f"],
    emoji="📢",
    secret=True,
    tier=PermissionTier.OPERATOR,
)
async def force_command(ctx: DispatchContext) -> Response:
    # Phase transitions come from the game capture; forcing them is disabled.
    return EMPTY_RESPONSE
