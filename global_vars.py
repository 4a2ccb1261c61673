from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from commands.dispatcher import Dispatcher
    from model.services import BotServices

# The following are global variables that are used throughout the bot from a global context
# They are populated once the client is ready

# Stores, localizer and collaborators shared by every dispatch
services: BotServices | None = None

# Command dispatcher, holding the registries built at startup
dispatcher: Dispatcher | None = None
