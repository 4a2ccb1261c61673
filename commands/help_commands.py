"""Help command and the cards that describe commands."""
import discord

from commands.command_enums import CommandCategory
from commands.dispatcher import DispatchContext
from commands.registry import command_builder, CommandInfo
from commands.responses import Response, build_card
from utils.localization import Message

HELP_TITLE = Message("responses.helpResponse.Title", "AutoMuteUs Bot Commands:")
HELP_DESCRIPTION = Message(
    "responses.helpResponse.SubTitle",
    "Having issues or have suggestions? Join our discord at <https://discord.gg/ZkqZSWF>!\n"
    "Type `{command_prefix} help <command>` to see more details about a command!")
HELP_NOT_FOUND = Message(
    "commands.HandleCommand.Help.notFound",
    "I didn't recognize that command! View `help` for all available commands!")
FIELD_EXAMPLE = Message("commands.ConstructEmbedForCommand.Fields.Example", "Example")
FIELD_ARGUMENTS = Message("commands.ConstructEmbedForCommand.Fields.Arguments", "Arguments")
FIELD_ALIASES = Message("commands.ConstructEmbedForCommand.Fields.Aliases", "Aliases")
NO_ALIASES = Message("commands.ConstructEmbedForCommand.Fields.NoAliases", "None")


def command_card(entry: CommandInfo, ctx: DispatchContext) -> discord.Embed:
    """Card with the full description, example, arguments and aliases of one command."""
    prefix = ctx.settings.command_prefix
    aliases = ", ".join(entry.aliases) if entry.aliases else ctx.localize(NO_ALIASES)
    return build_card(
        title=f"{entry.emoji} {entry.name}".strip(),
        description=ctx.localize(entry.description, command_prefix=prefix),
        fields=[
            (ctx.localize(FIELD_EXAMPLE), f"`{prefix} {entry.example}`", False),
            (ctx.localize(FIELD_ARGUMENTS), f"`{ctx.localize(entry.arguments)}`", False),
            (ctx.localize(FIELD_ALIASES), aliases, False),
        ],
    )


def command_help(ctx: DispatchContext) -> Response:
    """Reply with the card of the command being dispatched, used when arguments are missing."""
    return ctx.reply_card(command_card(ctx.entry, ctx))


def help_listing_card(ctx: DispatchContext) -> discord.Embed:
    """Card listing every non-secret command the caller is allowed to use."""
    prefix = ctx.settings.command_prefix
    fields = [
        (f"{entry.emoji} {entry.name}".strip(), ctx.localize(entry.short_help), True)
        for entry in ctx.commands.listable(ctx.is_admin, ctx.is_permissioned)
    ]
    return build_card(
        title=ctx.localize(HELP_TITLE),
        description=ctx.localize(HELP_DESCRIPTION, command_prefix=prefix),
        fields=fields,
    )


@command_builder.command(
    name="help",
    category=CommandCategory.HELP,
    example="help track",
    short_help=Message("commands.AllCommands.Help.shortDesc", "Display help"),
    description=Message("commands.AllCommands.Help.desc", "Display bot help message, or see info about a Command"),
    arguments=Message("commands.AllCommands.Help.args", "None, or optional Command to see info for"),
    aliases=["h"],
    emoji="❓",
)
async def help_command(ctx: DispatchContext) -> Response:
    """List available commands, or describe one of them."""
    if not ctx.arguments:
        return ctx.reply_card(help_listing_card(ctx))

    entry = ctx.commands.resolve(ctx.arguments[0])
    if entry is None:
        return ctx.reply_text(HELP_NOT_FOUND)
    return ctx.reply_card(command_card(entry, ctx))
