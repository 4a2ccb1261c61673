"""Enums for command registration, permissions and help listings."""

from enum import Enum


class CommandCategory(Enum):
    """Kind of operation a command performs."""
    HELP = "help"
    NEW = "new"
    END = "end"
    PAUSE = "pause"
    REFRESH = "refresh"
    LINK = "link"
    UNLINK = "unlink"
    UNMUTE_ALL = "unmuteall"
    FORCE = "force"
    SETTINGS = "settings"
    MAP = "map"
    CACHE = "cache"
    PRIVACY = "privacy"
    INFO = "info"
    DEBUG_STATE = "debugstate"
    ASCII = "ascii"
    STATS = "stats"
    WORKER_BOT = "workerbot"


class SettingCategory(Enum):
    """Kind of guild setting."""
    PREFIX = "commandPrefix"
    LANGUAGE = "language"
    ADMIN_USER_IDS = "adminUserIDs"
    ROLE_IDS = "operatorRoles"
    UNMUTE_DEAD = "unmuteDeadDuringTasks"
    DELAYS = "delays"
    VOICE_RULES = "voiceRules"
    MAP_VERSION = "mapVersion"
    MATCH_SUMMARY = "matchSummary"
    MATCH_SUMMARY_CHANNEL = "matchSummaryChannel"
    AUTO_REFRESH = "autoRefresh"
    LEADERBOARD_MENTION = "leaderboardMention"
    LEADERBOARD_SIZE = "leaderboardSize"
    LEADERBOARD_MIN = "leaderboardMin"
    MUTE_SPECTATORS = "muteSpectators"
    DISPLAY_ROOM_CODE = "displayRoomCode"
    SHOW = "show"
    RESET = "reset"


class PermissionTier(Enum):
    """Permission level required to invoke an entry."""
    NONE = "none"
    OPERATOR = "operator"
    ADMIN = "admin"


class Visibility(Enum):
    """Whether an entry appears in help listings."""
    PUBLIC = "public"
    SECRET = "secret"  # usable, but never listed


class GamePhase(Enum):
    """In-game phases used by delays and voice rules."""
    LOBBY = "lobby"
    TASKS = "tasks"
    DISCUSSION = "discussion"
