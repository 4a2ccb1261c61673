"""Response payloads and their conversion into outbound Discord messages."""
from __future__ import annotations

import codecs
import math
from dataclasses import dataclass
from typing import NamedTuple, Optional, Union

import discord

import config

# Embed color used for bot cards
GOLD = 15844367


# =============================================================================
# Payload variants
# =============================================================================

@dataclass(frozen=True)
class NoResponse:
    """Nothing to send."""


@dataclass(frozen=True)
class TextResponse:
    text: str


@dataclass(frozen=True)
class CardResponse:
    embed: discord.Embed


@dataclass(frozen=True)
class ListResponse:
    """Several texts, each sent as its own message."""
    texts: tuple[str, ...]


@dataclass(frozen=True)
class ChunkedBlockResponse:
    """Raw content that may exceed the platform limit; sent as labeled code blocks."""
    content: bytes
    label: str = ""
    max_size: int = config.MAX_DEBUG_MESSAGE_SIZE


Payload = Union[NoResponse, TextResponse, CardResponse, ListResponse, ChunkedBlockResponse]

NO_RESPONSE = NoResponse()


class Response(NamedTuple):
    """Where to send a payload. A ``None`` destination means nothing is sent."""
    destination: Optional[int]
    payload: Payload


EMPTY_RESPONSE = Response(None, NO_RESPONSE)


class OutboundMessage(NamedTuple):
    content: Optional[str] = None
    embed: Optional[discord.Embed] = None


# =============================================================================
# Formatting
# =============================================================================

def chunk_bytes(content: bytes, max_size: int) -> list[bytes]:
    """Split content into consecutive segments of at most ``max_size`` bytes.

    Produces ``ceil(len(content) / max_size)`` segments whose concatenation is ``content``.
    """
    if max_size <= 0:
        raise ValueError("max_size must be positive")
    return [content[i:i + max_size] for i in range(0, len(content), max_size)]


def chunk_count(size: int, max_size: int) -> int:
    return math.ceil(size / max_size)


def wrap_block(text: str, label: str = "") -> str:
    """Wrap one piece of text in a code block so it renders on its own."""
    return f"```{label}\n{text}\n```"


def chunk_block(content: bytes, max_size: int = config.MAX_DEBUG_MESSAGE_SIZE, label: str = "") -> list[str]:
    """Split content into independently renderable code blocks, preserving byte order.

    A UTF-8 character cut by a segment boundary is decoded in the block where it ends, so
    joining the block texts gives back the original text.
    """
    decoder = codecs.getincrementaldecoder('utf-8')(errors='replace')
    segments = chunk_bytes(content, max_size)
    return [wrap_block(decoder.decode(segment, final=i == len(segments) - 1), label)
            for i, segment in enumerate(segments)]


def format_payload(payload: Payload) -> list[OutboundMessage]:
    """Turn a payload into the ordered messages to send."""
    if isinstance(payload, NoResponse):
        return []
    if isinstance(payload, TextResponse):
        return [OutboundMessage(content=payload.text)] if payload.text else []
    if isinstance(payload, CardResponse):
        return [OutboundMessage(embed=payload.embed)]
    if isinstance(payload, ListResponse):
        return [OutboundMessage(content=text) for text in payload.texts if text]
    if isinstance(payload, ChunkedBlockResponse):
        return [OutboundMessage(content=block)
                for block in chunk_block(payload.content, payload.max_size, payload.label)]
    raise TypeError(f"Unknown payload type: {type(payload).__name__}")


def build_card(title: str, description: str = "", fields: Optional[list[tuple[str, str, bool]]] = None,
               color: int = GOLD, footer: Optional[str] = None) -> discord.Embed:
    """Build a card embed from ``(name, value, inline)`` field tuples."""
    embed = discord.Embed(title=title, description=description, color=color)
    for name, value, inline in fields or []:
        embed.add_field(name=name, value=value, inline=inline)
    if footer:
        embed.set_footer(text=footer)
    return embed
