"""Troubleshooting commands: cached usernames and session state export."""
import json

from commands.command_enums import CommandCategory, PermissionTier
from commands.dispatcher import DispatchContext, COULDNT_FIND_USER
from commands.help_commands import command_help
from commands.registry import command_builder
from commands.responses import Response, ChunkedBlockResponse, EMPTY_RESPONSE
from utils.localization import Message
from utils.mention_utils import extract_user_id

CLEAR_ARGS = ("clear", "c")

EMPTY_CACHED_NAMES = Message(
    "commands.HandleCommand.Cache.emptyCachedNames",
    "I don't have any cached player names stored for that user!")
CACHED_NAMES = Message("commands.HandleCommand.Cache.cachedNames", "Cached in-game names:")
CACHE_CLEARED = Message(
    "commands.HandleCommand.Cache.Success", "Successfully deleted all cached names for that user!")


@command_builder.command(
    name="cache",
    category=CommandCategory.CACHE,
    example="cache @Soup",
    short_help=Message("commands.AllCommands.Cache.shortDesc", "View cached usernames"),
    description=Message("commands.AllCommands.Cache.desc", "View a player's cached in-game names, and/or clear them"),
    arguments=Message("commands.AllCommands.Cache.args", "<player> (optionally, \"clear\")"),
    aliases=["c"],
    emoji="📖",
    tier=PermissionTier.OPERATOR,
)
async def cache_command(ctx: DispatchContext) -> Response:
    """Show a user's cached in-game names, or clear them."""
    if not ctx.arguments:
        return command_help(ctx)

    try:
        user_id = extract_user_id(ctx.arguments[0])
    except ValueError:
        return ctx.reply_text(COULDNT_FIND_USER)

    usernames = ctx.services.usernames
    if len(ctx.arguments) == 1:
        cached = usernames.get_names(ctx.guild_id, user_id)
        if not cached:
            return ctx.reply_text(EMPTY_CACHED_NAMES)
        names = "".join(f"{name}\n" for name in sorted(cached))
        return ctx.reply_text(f"{ctx.localize(CACHED_NAMES)}\n```\n{names}```")

    if ctx.arguments[1].lower() in CLEAR_ARGS:
        usernames.delete_links_by_user_id(ctx.guild_id, user_id)
        return ctx.reply_text(CACHE_CLEARED)
    return EMPTY_RESPONSE


@command_builder.command(
    name="debugstate",
    category=CommandCategory.DEBUG_STATE,
    example="debugstate",
    short_help=Message("commands.AllCommands.DebugState.shortDesc", "View the full state of the Discord Guild Data"),
    description=Message("commands.AllCommands.DebugState.desc", "View the full state of the Discord Guild Data"),
    arguments=Message("commands.AllCommands.DebugState.args", "None"),
    aliases=["debug", "ds", "state"],
    secret=True,
    tier=PermissionTier.OPERATOR,
)
async def debug_state_command(ctx: DispatchContext) -> Response:
    """Dump the channel's session state as JSON, split into code blocks."""
    state = ctx.services.sessions.get(ctx.key)
    content = json.dumps(state.to_dict(), indent=2).encode("utf-8")
    return ctx.reply(ChunkedBlockResponse(content, label="JSON"))
