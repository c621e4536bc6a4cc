"""Content-shape handling for heterogeneous transcript records.

`message.content` arrives in three shapes:

- TEXT: a plain string
- BLOCKS: a list of content blocks (`{"type": "text", "text": ...}`,
  `tool_use`, `tool_result`, or bare strings)
- OBJECT: a single dict carrying a `text` field

Everything else is EMPTY. Callers classify once and dispatch to the
extractor for the purpose at hand.
"""

from enum import Enum
from typing import Any, Callable

import orjson

COMMAND_ECHO_PREFIXES = ("<local-command-", "<command-name>")

PREVIEW_LENGTH = 100


class ContentShape(str, Enum):
    TEXT = "text"
    BLOCKS = "blocks"
    OBJECT = "object"
    EMPTY = "empty"


def classify_content(content: Any) -> ContentShape:
    if isinstance(content, str):
        return ContentShape.TEXT if content else ContentShape.EMPTY
    if isinstance(content, list):
        return ContentShape.BLOCKS if content else ContentShape.EMPTY
    if isinstance(content, dict) and isinstance(content.get("text"), str):
        return ContentShape.OBJECT
    return ContentShape.EMPTY


# Preview extraction: only the first text block counts

def _preview_from_blocks(blocks: list) -> str:
    for block in blocks:
        if isinstance(block, dict) and block.get("type") == "text":
            text = block.get("text")
            return text if isinstance(text, str) else ""
    return ""


_PREVIEW_EXTRACTORS: dict[ContentShape, Callable[[Any], str]] = {
    ContentShape.TEXT: lambda c: c,
    ContentShape.BLOCKS: _preview_from_blocks,
    ContentShape.OBJECT: lambda c: c["text"],
    ContentShape.EMPTY: lambda c: "",
}


def preview_text(content: Any) -> str:
    """Text used for a session preview."""
    return _PREVIEW_EXTRACTORS[classify_content(content)](content)


# Search extraction: every block contributes

def _block_text(block: Any) -> str:
    if isinstance(block, str):
        return block
    if isinstance(block, dict):
        text = block.get("text")
        if isinstance(text, str) and text:
            return text
    try:
        return orjson.dumps(block).decode()
    except TypeError:
        return str(block)


def _searchable_from_blocks(blocks: list) -> str:
    return " ".join(_block_text(block) for block in blocks)


_SEARCH_EXTRACTORS: dict[ContentShape, Callable[[Any], str]] = {
    ContentShape.TEXT: lambda c: c,
    ContentShape.BLOCKS: _searchable_from_blocks,
    ContentShape.OBJECT: lambda c: c["text"],
    ContentShape.EMPTY: lambda c: "",
}


def searchable_text(content: Any) -> str:
    """Full text of a message body for substring search.

    Non-text blocks (tool calls, tool results) are included as compact JSON.
    """
    return _SEARCH_EXTRACTORS[classify_content(content)](content)


def is_command_echo(text: str) -> bool:
    """Slash-command echoes and local command output are not real prompts."""
    return text.startswith(COMMAND_ECHO_PREFIXES)


def format_preview(text: str) -> str:
    return text[:PREVIEW_LENGTH].replace("\n", " ")


# Record accessors

def message_content(record: dict) -> Any:
    message = record.get("message")
    if not isinstance(message, dict):
        return None
    return message.get("content")


def is_meta(record: dict) -> bool:
    return record.get("isMeta") is True


def is_conversation_message(record: dict) -> bool:
    """User or assistant record that is not internal meta traffic."""
    return not is_meta(record) and record.get("type") in ("user", "assistant")


def record_usage(record: dict) -> tuple[int, int] | None:
    """(input_tokens, output_tokens) from `message.usage`, or None when absent."""
    message = record.get("message")
    if not isinstance(message, dict):
        return None
    usage = message.get("usage")
    if not isinstance(usage, dict):
        return None
    return _as_int(usage.get("input_tokens")), _as_int(usage.get("output_tokens"))


def record_timestamp(record: dict) -> str | None:
    ts = record.get("timestamp")
    return ts if isinstance(ts, str) and ts else None


def _as_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value)
    return 0
