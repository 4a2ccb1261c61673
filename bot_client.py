from __future__ import annotations

import logging
import os

import discord

client: discord.Client
logger: logging.Logger

logger = logging.getLogger("discord")
logger.setLevel(logging.INFO)
handler = logging.FileHandler(filename="discord.log", encoding="utf-8", mode="w")
handler.setFormatter(
    logging.Formatter("%(asctime)s:%(levelname)s:%(name)s: %(message)s")
)
logger.addHandler(handler)

_intents = discord.Intents.default()
_intents.message_content = True
_intents.members = True
_intents.voice_states = True

client = discord.Client(intents=_intents)  # discord client


# Read API Token
def get_token() -> str:
    """
    Reads the API token from 'token.txt' or returns a stub in testing environments.
    """
    token_path = os.path.dirname(os.path.realpath(__file__)) + "/token.txt"
    if os.path.isfile(token_path):
        with open(token_path) as tokenfile:
            return tokenfile.readline().strip()
    elif os.environ.get('TESTING'):
        return "dummy_token_for_testing"
    else:
        raise FileNotFoundError("token.txt not found and not in testing mode")
