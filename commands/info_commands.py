"""Informational commands: maps, bot info, privacy, worker bots and ASCII art."""
import logging

import config
from commands.command_enums import CommandCategory
from commands.dispatcher import DispatchContext, COULDNT_FIND_USER, split_trailing_qualifier
from commands.help_commands import command_help
from commands.registry import command_builder
from commands.responses import Response, TextResponse, build_card
from model.maps import new_map_item
from model.settings.guild_settings import MAP_VERSIONS
from utils.localization import Message
from utils.mention_utils import extract_user_id

logger = logging.getLogger('discord')

PRIVACY_ARGS = ("showme", "optin", "optout")

INFO_TITLE = Message("responses.infoResponse.Title", "Bot Info")
INFO_VERSION = Message("responses.infoResponse.Version", "Version")
INFO_GUILDS = Message("responses.infoResponse.Guilds", "Total Guilds")
INFO_GAMES = Message("responses.infoResponse.ActiveGames", "Active Games")
INFO_LANGUAGE = Message("responses.infoResponse.Language", "Language")

PRIVACY_CACHED = Message("responses.privacyResponse.Cached", "Cached in-game names: {names}")
PRIVACY_NO_CACHE = Message("responses.privacyResponse.NoCache", "I don't have any cached in-game names for you.")
PRIVACY_OPTED_OUT = Message("responses.privacyResponse.OptedOut", "You are opted **out** of data collection.")
PRIVACY_OPTED_IN = Message("responses.privacyResponse.OptedIn", "You are opted **in** to data collection.")
PRIVACY_OPTOUT_DONE = Message(
    "responses.privacyResponse.OptOutSuccess",
    "You have been opted out of data collection, and your cached names were deleted.")
PRIVACY_OPTIN_DONE = Message("responses.privacyResponse.OptInSuccess", "You have been opted back in to data collection.")

WORKER_TITLE = Message("responses.workerResponse.Title", "Worker Bots")
WORKER_DESCRIPTION = Message(
    "responses.workerResponse.Desc",
    "Worker bots take over muting and deafening when many players change state at once, "
    "so large lobbies stay in sync. Premium guilds can invite dedicated worker bots.")
WORKER_PREMIUM = Message("responses.workerResponse.Premium", "This guild has Premium; worker bots are available.")
WORKER_FREE = Message("responses.workerResponse.Free", "Worker bots require AutoMuteUs Premium.")

ASCII_CREWMATE = """```
          ⠀⠀⠀⣠⣤⣤⣤⣤⣤⣄⡀⠀⠀⠀
          ⠀⢰⡿⠋⠁⠀⠀⠈⠉⠙⠻⣷⠄⠀
          ⢀⣿⠇⠀⢀⣴⣶⡾⠿⠿⠿⢿⣿⣦⡀
          ⣸⣿⠀⠀⢸⣿⣿⣤⣄⣀⣀⣀⣾⣿⠃
          ⣿⣿⠀⠀⠘⢿⣿⣿⣿⣿⣿⣿⡿⠋⠀
          ⣿⣿⠀⠀⠀⠀⠀⠀⠀⠀⠀⢸⣿⠀⠀
          ⢸⣿⠀⠀⠀⣰⣶⣶⣶⡄⠀⣸⣿⠀⠀
          ⠈⢿⣦⣤⣴⡟⠀⠀⢸⣷⣤⣿⠏⠀⠀
```"""

_STARFIELD = [
    ". 　　　。　　　　•　 　ﾟ　　。 　　.",
    "　　　.　　　 　　.　　　　　。　　 。　. 　",
    ".　　 。　　　　　 ඞ 。 . 　　 • 　　　　•",
    "　　ﾟ　　 {line} 。　.",
    "　　'　　　 {remaining} 　 　　。",
    "　　ﾟ　　　.　　　. ,　　　　.　 .",
]


def ascii_starfield(name: str, impostor: bool, remaining: int) -> str:
    """The "X was (not) An Impostor" ejection scene."""
    line = f"{name} was An Impostor." if impostor else f"{name} was not An Impostor."
    remaining_text = f"{remaining} Impostor remains" if remaining == 1 else f"{remaining} Impostors remain"
    return "\n".join(_STARFIELD).format(line=line, remaining=remaining_text)


@command_builder.command(
    name="map",
    category=CommandCategory.MAP,
    example="map skeld",
    short_help=Message("commands.AllCommands.Map.shortDesc", "Display an in-game map"),
    description=Message(
        "commands.AllCommands.Map.desc",
        "Display an image of an in-game map in the text channel. Two supported versions: simple or detailed"),
    arguments=Message(
        "commands.AllCommands.Map.args",
        "<map_name> (skeld, mira_hq, polus, airship) <version> (optional, simple or detailed)"),
    emoji="🗺",
)
async def map_command(ctx: DispatchContext) -> Response:
    """Show a map image, in the requested version or the guild's default one."""
    if not ctx.arguments:
        return command_help(ctx)

    map_name, version = split_trailing_qualifier(ctx.arguments, MAP_VERSIONS, ctx.settings.map_version)
    # raises NotFound for unknown maps
    map_item = new_map_item(map_name, ctx.settings.language)
    if version == "detailed":
        return ctx.reply(TextResponse(map_item.image.detailed))
    return ctx.reply(TextResponse(map_item.image.simple))


@command_builder.command(
    name="privacy",
    category=CommandCategory.PRIVACY,
    example="privacy showme",
    short_help=Message("commands.AllCommands.Privacy.shortDesc", "View AutoMuteUs privacy information"),
    description=Message(
        "commands.AllCommands.Privacy.desc",
        "AutoMuteUs privacy and data collection details.\n"
        "More details [here](https://github.com/denverquane/automuteus/blob/master/PRIVACY.md)"),
    arguments=Message("commands.AllCommands.Privacy.args", "showme, optin, or optout"),
    aliases=["private", "priv", "gdpr"],
    emoji="🔍",
)
async def privacy_command(ctx: DispatchContext) -> Response:
    arg = ctx.arguments[0].lower() if ctx.arguments else ""
    if arg not in PRIVACY_ARGS:
        return command_help(ctx)

    privacy = ctx.services.privacy
    usernames = ctx.services.usernames
    if arg == "showme":
        names = usernames.get_names_any_guild(ctx.author_id)
        cached = (ctx.localize(PRIVACY_CACHED, names=", ".join(sorted(names)))
                  if names else ctx.localize(PRIVACY_NO_CACHE))
        opted = PRIVACY_OPTED_OUT if privacy.is_opted_out(ctx.author_id) else PRIVACY_OPTED_IN
        return ctx.reply_text(f"{cached}\n{ctx.localize(opted)}")

    if arg == "optout":
        privacy.set_opt_in(ctx.author_id, False)
        usernames.delete_all_for_user(ctx.author_id)
        return ctx.reply_text(PRIVACY_OPTOUT_DONE)

    privacy.set_opt_in(ctx.author_id, True)
    return ctx.reply_text(PRIVACY_OPTIN_DONE)


@command_builder.command(
    name="workerbot",
    category=CommandCategory.WORKER_BOT,
    example="workerbot",
    short_help=Message("commands.AllCommands.WorkerBOT.shortDesc", "Invite WORKER BOTs"),
    description=Message("commands.AllCommands.WorkerBOT.desc", "Invite WORKER BOTs to speed up bot work"),
    arguments=Message("commands.AllCommands.WorkerBOT.args", "None"),
    aliases=["add", "invite", "worker", "w"],
    emoji="🤖",
)
async def worker_bot_command(ctx: DispatchContext) -> Response:
    status = WORKER_PREMIUM if ctx.is_premium else WORKER_FREE
    return ctx.reply_card(build_card(
        title=ctx.localize(WORKER_TITLE),
        description=f"{ctx.localize(WORKER_DESCRIPTION)}\n\n{ctx.localize(status)}",
    ))


@command_builder.command(
    name="info",
    category=CommandCategory.INFO,
    example="info",
    short_help=Message("commands.AllCommands.Info.shortDesc", "View Bot info"),
    description=Message(
        "commands.AllCommands.Info.desc",
        "View info about the bot, like total guild number, active games, etc"),
    arguments=Message("commands.AllCommands.Info.args", "None"),
    aliases=["inf", "in", "i"],
    emoji="📰",
)
async def info_command(ctx: DispatchContext) -> Response:
    services = ctx.services
    return ctx.reply_card(build_card(
        title=ctx.localize(INFO_TITLE),
        fields=[
            (ctx.localize(INFO_VERSION), config.BOT_VERSION, True),
            (ctx.localize(INFO_GUILDS), str(services.guild_count), True),
            (ctx.localize(INFO_GAMES), str(services.sessions.active_count()), True),
            (ctx.localize(INFO_LANGUAGE), ctx.settings.language, True),
        ],
    ))


@command_builder.command(
    name="ascii",
    category=CommandCategory.ASCII,
    example="ascii @Soup t 10",
    short_help=Message("commands.AllCommands.Ascii.shortDesc", "Print an ASCII crewmate"),
    description=Message("commands.AllCommands.Ascii.desc", "Print an ASCII crewmate"),
    arguments=Message(
        "commands.AllCommands.Ascii.args",
        "<@discord user> <is imposter> (true|false) <x impostor remains> (count)"),
    aliases=["asc"],
    secret=True,
)
async def ascii_command(ctx: DispatchContext) -> Response:
    if not ctx.arguments:
        return ctx.reply_text(ASCII_CREWMATE)

    try:
        extract_user_id(ctx.arguments[0])
    except ValueError:
        return ctx.reply_text(COULDNT_FIND_USER)

    impostor = len(ctx.arguments) > 1 and ctx.arguments[1].lower() in ("true", "t")
    remaining = 1
    if len(ctx.arguments) > 2:
        try:
            remaining = int(ctx.arguments[2])
        except ValueError:
            logger.info(f"Ignoring non-numeric impostor count {ctx.arguments[2]!r}")
    return ctx.reply_text(ascii_starfield(ctx.arguments[0], impostor, remaining))
