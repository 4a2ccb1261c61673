"""
Parsing of Discord mention tokens.
"""
import re

_USER_MENTION = re.compile(r"^<@!?(\d+)>$")
_ROLE_MENTION = re.compile(r"^<@&(\d+)>$")
_CHANNEL_MENTION = re.compile(r"^<#(\d+)>$")
_SNOWFLAKE = re.compile(r"^\d{15,21}$")


def _extract(pattern: re.Pattern, token: str, kind: str) -> int:
    token = token.strip()
    match = pattern.match(token)
    if match:
        return int(match.group(1))
    if _SNOWFLAKE.match(token):
        return int(token)
    raise ValueError(f"{token!r} is not a {kind} mention or ID")


def extract_user_id(token: str) -> int:
    """Get the user ID from ``<@id>``, ``<@!id>`` or a bare ID.

    Raises:
        ValueError: If the token is neither
    """
    return _extract(_USER_MENTION, token, "user")


def extract_role_id(token: str) -> int:
    """Get the role ID from ``<@&id>`` or a bare ID."""
    return _extract(_ROLE_MENTION, token, "role")


def extract_channel_id(token: str) -> int:
    """Get the channel ID from ``<#id>`` or a bare ID."""
    return _extract(_CHANNEL_MENTION, token, "channel")
