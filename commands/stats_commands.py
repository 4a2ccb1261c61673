"""Player, guild and match statistics, including the two-step stats reset."""
import logging
import re

from commands.command_enums import CommandCategory
from commands.dispatcher import DispatchContext, has_confirmation
from commands.help_commands import command_help
from commands.registry import command_builder
from commands.responses import Response, build_card
from utils.localization import Message
from utils.mention_utils import extract_user_id

logger = logging.getLogger('discord')

GUILD_ARGS = ("g", "guild", "server")
RESET_TOKEN = "reset"
MATCH_ID_PATTERN = re.compile(r"^[A-Z0-9]{8}:[0-9]+$")

RESET_NO_PERMS = Message(
    "message_handlers.handleResetGuild.noPerms", "Only Admins are capable of resetting server stats")
GUILD_RESET_CONFIRM = Message(
    "commands.StatsCommand.Reset.NoConfirm",
    "Please type `{command_prefix} stats guild reset confirm` if you are 100% certain that you wish to "
    "**completely reset** your guild's stats!")
GUILD_RESET_DONE = Message("commands.StatsCommand.Reset.Success", "Successfully reset your guild's stats!")
USER_RESET_CONFIRM = Message(
    "commands.StatsCommand.ResetUser.NoConfirm",
    "Please type `{command_prefix} stats `{user}` reset confirm` if you are 100% certain that you wish to "
    "**completely reset** that user's stats!")
USER_RESET_DONE = Message("commands.StatsCommand.ResetUser.Success", "Successfully reset {user}'s stats!")
UNRECOGNIZED = Message(
    "commands.StatsCommand.Unrecognized",
    "I didn't recognize that user, you mistyped 'guild', or didn't provide a valid Match ID")
GAME_NOT_FOUND = Message("commands.StatsCommand.GameNotFound", "I couldn't find a game with that Match ID")

GUILD_STATS_TITLE = Message("responses.GuildStatsEmbed.Title", "Guild Stats")
USER_STATS_TITLE = Message("responses.UserStatsEmbed.Title", "User Stats")
GAME_STATS_TITLE = Message("responses.GameStatsEmbed.Title", "Game {match_id}")
PREMIUM_FOOTER = Message("responses.StatsEmbed.PremiumFooter", "Get AutoMuteUs Premium for detailed stats!")
NO_STATS = Message("responses.StatsEmbed.NoStats", "No games recorded yet")


def _stats_card(ctx: DispatchContext, title: str, stats: dict) -> Response:
    fields = [(name, value, True) for name, value in stats.items()]
    description = "" if fields else ctx.localize(NO_STATS)
    footer = None if ctx.is_premium else ctx.localize(PREMIUM_FOOTER)
    return ctx.reply_card(build_card(title=title, description=description, fields=fields, footer=footer))


def _reset(ctx: DispatchContext, confirm_prompt: Message, done: Message, delete, **params) -> Response:
    """Two-step reset: prompt unless the trailing token is ``confirm``, then delete exactly once."""
    if not ctx.is_admin:
        return ctx.reply_text(RESET_NO_PERMS)

    # arguments: <target> reset [confirm]
    if not has_confirmation(ctx.arguments, 2):
        return ctx.reply_text(confirm_prompt, command_prefix=ctx.settings.command_prefix, **params)

    delete()
    logger.info(f"Stats reset in guild {ctx.guild_id} by {ctx.author_id}")
    return ctx.reply_text(done, **params)


@command_builder.command(
    name="stats",
    category=CommandCategory.STATS,
    example="stats @Soup",
    short_help=Message("commands.AllCommands.Stats.shortDesc", "View Player and Guild stats"),
    description=Message("commands.AllCommands.Stats.desc", "View Player and Guild stats"),
    arguments=Message("commands.AllCommands.Stats.args", "<@discord user> or \"guild\""),
    aliases=["stat", "st"],
    emoji="📊",
)
async def stats_command(ctx: DispatchContext) -> Response:
    """View user, guild or match stats, or reset user and guild stats."""
    if not ctx.arguments:
        return command_help(ctx)

    stats = ctx.services.stats
    target = ctx.arguments[0]
    wants_reset = len(ctx.arguments) > 1 and ctx.arguments[1] == RESET_TOKEN

    try:
        user_id = extract_user_id(target)
    except ValueError:
        user_id = None

    if user_id is not None:
        if wants_reset:
            return _reset(ctx, USER_RESET_CONFIRM, USER_RESET_DONE,
                          lambda: stats.delete_all_games_for_user(user_id), user=target)
        return _stats_card(ctx, ctx.localize(USER_STATS_TITLE), stats.user_stats(user_id, ctx.guild_id))

    arg = target.replace('"', "")
    if arg.lower() in GUILD_ARGS:
        if wants_reset:
            return _reset(ctx, GUILD_RESET_CONFIRM, GUILD_RESET_DONE,
                          lambda: stats.delete_all_games_for_server(ctx.guild_id))
        return _stats_card(ctx, ctx.localize(GUILD_STATS_TITLE), stats.guild_stats(ctx.guild_id))

    match_id = arg.upper()
    if not MATCH_ID_PATTERN.match(match_id):
        return ctx.reply_text(UNRECOGNIZED)

    connect_code, game_id = match_id.split(":")
    game = stats.game_stats(ctx.guild_id, connect_code, game_id)
    if game is None:
        return ctx.reply_text(GAME_NOT_FOUND)
    return _stats_card(ctx, ctx.localize(GAME_STATS_TITLE, match_id=match_id), game)
