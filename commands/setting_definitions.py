"""Guild setting definitions: parsing, validation and display of each setting value."""
from __future__ import annotations

import copy
from typing import Callable, Optional

import config
from commands.command_enums import GamePhase, SettingCategory
from commands.errors import ValidationError
from commands.registry import Registry, SettingInfo, build_registry
from model.settings.guild_settings import (
    MAP_VERSIONS, ROOM_CODE_DISPLAY_MODES, VOICE_ACTIONS, PLAYER_STATUSES
)
from utils.localization import Message
from utils.mention_utils import extract_user_id, extract_role_id, extract_channel_id

PHASES = tuple(phase.value for phase in GamePhase)
BOOLEANS = {"true": True, "false": False}
MAX_DELAY_SECONDS = 10

INVALID_VALUE = Message(
    "settings.invalidValue",
    "Sorry, `{value}` is not a valid value for {setting}. Expected {expected}")
INVALID_RANGE = Message(
    "settings.invalidRange",
    "Sorry, {setting} has to be a number from {low} to {high}")
PREFIX_TOO_LONG = Message(
    "settings.SettingPrefix.tooLong",
    "Sorry, the prefix `{value}` is too long ({length} characters, max {max_length}). Try something shorter.")
UNKNOWN_LANGUAGE = Message(
    "settings.SettingLanguage.notFound",
    "Language `{value}` isn't available. Available languages: {languages}")
MISSING_ARGUMENTS = Message(
    "settings.missingArguments",
    "{setting} needs more arguments: {expected}")

Mutation = tuple[object, Optional[ValidationError]]


# =============================================================================
# Value parsers
# =============================================================================

def _invalid(setting: str, value: str, expected: str) -> Mutation:
    return None, ValidationError(INVALID_VALUE, setting=setting, value=value, expected=expected)


def _boolean(setting: str) -> Callable:
    def mutate(current, args, ctx) -> Mutation:
        value = args[0].lower()
        if value not in BOOLEANS:
            return _invalid(setting, args[0], "true or false")
        return BOOLEANS[value], None
    return mutate


def _choice(setting: str, choices: tuple[str, ...]) -> Callable:
    def mutate(current, args, ctx) -> Mutation:
        value = args[0].lower()
        if value not in choices:
            return _invalid(setting, args[0], ", ".join(choices))
        return value, None
    return mutate


def _int_range(setting: str, low: int, high: int) -> Callable:
    def mutate(current, args, ctx) -> Mutation:
        try:
            value = int(args[0])
        except ValueError:
            value = None
        if value is None or not low <= value <= high:
            return None, ValidationError(INVALID_RANGE, setting=setting, low=low, high=high)
        return value, None
    return mutate


def _mention_list(setting: str, extract: Callable[[str], int], expected: str) -> Callable:
    def mutate(current, args, ctx) -> Mutation:
        ids = []
        for arg in args:
            try:
                ids.append(extract(arg))
            except ValueError:
                return _invalid(setting, arg, expected)
        return list(dict.fromkeys(ids)), None
    return mutate


def _mutate_prefix(current, args, ctx) -> Mutation:
    prefix = args[0]
    if len(prefix) > config.MAX_PREFIX_LENGTH:
        return None, ValidationError(PREFIX_TOO_LONG, value=prefix, length=len(prefix),
                                     max_length=config.MAX_PREFIX_LENGTH)
    return prefix, None


def _mutate_language(current, args, ctx) -> Mutation:
    localizer = ctx.services.localizer
    if args[0].lower() == "reload":
        localizer.reload()
        return current, None
    language = localizer.find_language(args[0])
    if language is None:
        return None, ValidationError(UNKNOWN_LANGUAGE, value=args[0], languages=", ".join(localizer.languages))
    return language, None


def _mutate_channel(current, args, ctx) -> Mutation:
    try:
        return extract_channel_id(args[0]), None
    except ValueError:
        return _invalid("matchSummaryChannel", args[0], "a text channel mention like #general")


def _mutate_delays(current, args, ctx) -> Mutation:
    if len(args) < 3:
        return None, ValidationError(MISSING_ARGUMENTS, setting="delays", expected="<start phase> <end phase> <delay>")
    start, end = args[0].lower(), args[1].lower()
    for phase in (start, end):
        if phase not in PHASES:
            return _invalid("delays", phase, ", ".join(PHASES))
    delay, error = _int_range("delays", 0, MAX_DELAY_SECONDS)(current, args[2:], ctx)
    if error:
        return None, error

    delays = copy.deepcopy(current)
    delays.setdefault(start, {})[end] = delay
    return delays, None


def _mutate_voice_rules(current, args, ctx) -> Mutation:
    if len(args) < 4:
        return None, ValidationError(
            MISSING_ARGUMENTS, setting="voiceRules", expected="<mute/deaf> <game phase> <dead/alive> <true/false>")
    action, phase, status = (arg.lower() for arg in args[:3])
    if action not in VOICE_ACTIONS:
        return _invalid("voiceRules", args[0], ", ".join(VOICE_ACTIONS))
    if phase not in PHASES:
        return _invalid("voiceRules", args[1], ", ".join(PHASES))
    if status not in PLAYER_STATUSES:
        return _invalid("voiceRules", args[2], ", ".join(PLAYER_STATUSES))
    enabled, error = _boolean("voiceRules")(current, args[3:], ctx)
    if error:
        return None, error

    rules = copy.deepcopy(current)
    rules.setdefault(action, {}).setdefault(phase, {})[status] = enabled
    return rules, None


# =============================================================================
# Value renderers
# =============================================================================

def _render_plain(value) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _render_users(value) -> str:
    return " ".join(f"<@{user_id}>" for user_id in value)


def _render_roles(value) -> str:
    return " ".join(f"<@&{role_id}>" for role_id in value)


def _render_channel(value) -> str:
    return f"<#{value}>" if value else ""


def _render_delays(value) -> str:
    return "\n".join(
        f"{start} → {end}: {seconds}s"
        for start, ends in value.items()
        for end, seconds in ends.items()
        if start != end
    )


def _render_voice_rules(value) -> str:
    lines = []
    for action, phases in value.items():
        for phase, statuses in phases.items():
            affected = [status for status, enabled in statuses.items() if enabled]
            if affected:
                lines.append(f"{action} {' & '.join(affected)} during {phase}")
    return "\n".join(lines)


# =============================================================================
# Definitions
# =============================================================================

def _setting(category: SettingCategory, name: str, example: str, short: str, desc: str, args: str,
             aliases: list[str], key: str, premium: bool = False, attribute: str = "",
             mutate: Optional[Callable] = None, render: Callable = _render_plain) -> SettingInfo:
    return SettingInfo(
        name=name,
        category=category,
        short_help=Message(f"settings.AllSettings.{key}.shortDesc", short),
        description=Message(f"settings.AllSettings.{key}.desc", desc),
        arguments=Message(f"settings.AllSettings.{key}.args", args),
        example=example,
        aliases=tuple(aliases),
        premium=premium,
        attribute=attribute,
        mutate=mutate,
        render=render if attribute else None,
    )


ALL_SETTINGS: tuple[SettingInfo, ...] = (
    _setting(SettingCategory.PREFIX, "commandPrefix", "commandPrefix !",
             "Bot Prefix", "Change the prefix that the bot uses to detect commands", "<prefix>",
             ["prefix", "pref", "cp"], "Prefix",
             attribute="command_prefix", mutate=_mutate_prefix),
    _setting(SettingCategory.LANGUAGE, "language", "language ru",
             "Bot Language", "Change the bot messages language", "<language> or reload",
             ["local", "lang", "l"], "Language",
             attribute="language", mutate=_mutate_language),
    _setting(SettingCategory.ADMIN_USER_IDS, "adminUserIDs", "adminUserIDs @Soup @Bob",
             "Bot Admins", "Specify which individual users have admin bot permissions", "<User @ mentions>...",
             ["admins", "admin", "auid", "aui", "a"], "AdminUserIDs",
             attribute="admin_user_ids",
             mutate=_mention_list("adminUserIDs", extract_user_id, "user mentions"), render=_render_users),
    _setting(SettingCategory.ROLE_IDS, "operatorRoles", "operatorRoles @Bot Admins @Bot Mods",
             "Bot Operators", "Specify which roles have permissions to invoke the bot", "<role @ mentions>...",
             ["operators", "operator", "oproles", "roles", "role", "ops", "op"], "RoleIDs",
             attribute="operator_roles",
             mutate=_mention_list("operatorRoles", extract_role_id, "role mentions"), render=_render_roles),
    _setting(SettingCategory.UNMUTE_DEAD, "unmuteDeadDuringTasks", "unmuteDeadDuringTasks false",
             "Bot Unmutes Deaths",
             "Specify if the bot should immediately unmute players when they die. **CAUTION. Leaks information!**",
             "<true/false>",
             ["unmutedead", "unmute", "uddt", "ud"], "UnmuteDead",
             attribute="unmute_dead_during_tasks", mutate=_boolean("unmuteDeadDuringTasks")),
    # "delays" repeats the canonical name; the registry drops it as a conflict
    _setting(SettingCategory.DELAYS, "delays", "delays lobby tasks 5",
             "Delays Between Stages",
             "Specify the delays for automute/deafen between stages of the game, like lobby->tasks",
             "<start phase> <end phase> <delay>",
             ["delays", "d"], "Delays",
             attribute="delays", mutate=_mutate_delays, render=_render_delays),
    _setting(SettingCategory.VOICE_RULES, "voiceRules", "voiceRules mute tasks dead true",
             "Mute/deafen Rules",
             "Specify mute/deafen rules for the game, depending on the stage and the alive/deadness of players. "
             "Example given would mute dead players during the tasks stage",
             "<mute/deaf> <game phase> <dead/alive> <true/false>",
             ["voice", "vr"], "VoiceRules",
             attribute="voice_rules", mutate=_mutate_voice_rules, render=_render_voice_rules),
    _setting(SettingCategory.MAP_VERSION, "mapVersion", "mapVersion detailed",
             "Map version", "Specify the default map version (simple, detailed) used by 'map' command", "<version>",
             ["map"], "MapVersion",
             attribute="map_version", mutate=_choice("mapVersion", MAP_VERSIONS)),
    _setting(SettingCategory.MATCH_SUMMARY, "matchSummary", "matchSummary 5",
             "Match Summary Message",
             "Specify minutes before the match summary message is deleted. 0 for instant deletion, -1 for never delete",
             "<minutes>",
             ["matchsumm", "matchsum", "summary", "match", "summ", "sum"], "MatchSummary",
             premium=True, attribute="match_summary", mutate=_int_range("matchSummary", -1, 60)),
    _setting(SettingCategory.MATCH_SUMMARY_CHANNEL, "matchSummaryChannel", "matchSummaryChannel general",
             "Channel for Match Summaries",
             "Specify the text channel name where Match Summaries should be posted. Use `#general`, for example",
             "<text channel mention>",
             ["matchsummchan", "matchsumchan", "summarychannel", "matchchannel", "summchan", "sumchan"],
             "MatchSummaryChannel",
             premium=True, attribute="match_summary_channel", mutate=_mutate_channel, render=_render_channel),
    _setting(SettingCategory.AUTO_REFRESH, "autoRefresh", "autoRefresh true",
             "Autorefresh Status Message",
             "Specify if the bot should auto-refresh the status message after a match ends", "<true/false>",
             ["refresh", "auto", "ar"], "AutoRefresh",
             premium=True, attribute="auto_refresh", mutate=_boolean("autoRefresh")),
    _setting(SettingCategory.LEADERBOARD_MENTION, "leaderboardMention", "leaderboardMention true",
             "Player Leaderboard Mention Format",
             "If players should be mentioned with @ on the leaderboard.\n**Disable this for large servers!**",
             "<true/false>",
             ["lboardmention", "leadermention", "mention", "ment"], "LeaderboardMention",
             premium=True, attribute="leaderboard_mention", mutate=_boolean("leaderboardMention")),
    _setting(SettingCategory.LEADERBOARD_SIZE, "leaderboardSize", "leaderboardSize 5",
             "Player Leaderboard Size", "Specify the size of the player leaderboard", "<number>",
             ["lboardsize", "boardsize", "leadersize", "size"], "LeaderboardSize",
             premium=True, attribute="leaderboard_size", mutate=_int_range("leaderboardSize", 1, 10)),
    _setting(SettingCategory.LEADERBOARD_MIN, "leaderboardMin", "leaderboardMin 3",
             "Minimum Games for Leaderboard",
             "Minimum amount of games before a player is displayed on the leaderboard", "<number>",
             ["leaderboardmin", "lboardmin", "boardmin", "leadermin", "min"], "LeaderboardMin",
             premium=True, attribute="leaderboard_min", mutate=_int_range("leaderboardMin", 1, 100)),
    _setting(SettingCategory.MUTE_SPECTATORS, "muteSpectators", "muteSpectators true",
             "Mute Spectators like Dead Players",
             "Whether or not the bot should treat spectators like dead players (respecting your voice rules).\n"
             "**Note, this can cause delays or slowdowns when not self-hosting, or using a Premium worker bot!**",
             "<true/false>",
             ["mutespectator", "mutespec", "spectators", "spectator", "spec"], "MuteSpectators",
             premium=True, attribute="mute_spectators", mutate=_boolean("muteSpectators")),
    # "displayRoomCode" repeats the canonical name; the registry drops it as a conflict
    _setting(SettingCategory.DISPLAY_ROOM_CODE, "displayRoomCode", "displayRoomCode spoiler",
             "Visibility for the ROOM CODE",
             "Specify the visibility (always, spoiler, never) for the ROOM CODE in the message",
             "<always/spoiler/never>",
             ["displayRoomCode", "roomcode", "code", "rc"], "DisplayRoomCode",
             premium=True, attribute="display_room_code", mutate=_choice("displayRoomCode", ROOM_CODE_DISPLAY_MODES)),
    _setting(SettingCategory.SHOW, "show", "show",
             "Show All Settings", "Show all the Bot settings for this server", "None",
             ["sh", "s"], "Show"),
    _setting(SettingCategory.RESET, "reset", "reset",
             "Reset Bot Settings", "Reset all bot settings to their default values", "None",
             [], "Reset"),
)


def build_setting_registry() -> Registry[SettingInfo]:
    return build_registry(ALL_SETTINGS, kind="setting")
