"""Error taxonomy for command resolution and dispatch."""
from typing import Optional

from utils.localization import Message


class CommandError(Exception):
    """Base class for errors that are reported back to the invoking channel.

    Args:
        message: Localizable message shown to the user
        params: Template parameters for the message
    """
    default_message = Message("commands.errors.generic", "Something went wrong handling that command.")

    def __init__(self, message: Optional[Message] = None, **params):
        self.message = message or self.default_message
        self.params = params
        super().__init__(self.message.other)


class NotFound(CommandError):
    """A command, alias, setting or map identifier did not resolve."""
    default_message = Message(
        "commands.HandleCommand.notFound",
        "I didn't recognize that command! View `help` for all available commands!")


class PermissionDenied(CommandError):
    """The caller does not meet the entry's permission tier."""
    default_message = Message(
        "message_handlers.handleMessageCreate.noPerms",
        "User does not have the required permissions to execute this command!")


class LockUnavailable(CommandError):
    """Another dispatch currently holds the session lock."""
    default_message = Message("commands.NoLock", "Could not obtain lock")


class ValidationError(CommandError):
    """A setting value or command argument is malformed."""
    default_message = Message("commands.errors.validation", "That value isn't valid here.")


class ExternalServiceError(CommandError):
    """A storage or asset collaborator failed."""
    default_message = Message(
        "commands.errors.external",
        "Encountered the following error: {error}")


class ConfigurationConflict(Exception):
    """Two registry entries claim the same key. Logged at build time, never user facing."""

    def __init__(self, key: str, owner: str, rejected: str):
        self.key = key
        self.owner = owner
        self.rejected = rejected
        super().__init__(f"Conflict in keys: {rejected} => {key} (already owned by {owner})")
