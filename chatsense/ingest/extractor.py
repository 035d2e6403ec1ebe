"""Message extraction from Telegram chat exports.

Telegram Desktop exports a chat either as result.json (a "messages" array of
records) or as messages.html (one div.message per message). Both are
flattened to one "<sender> (<date>): <text>" line per message, in source order.

Outcomes are returned as ExtractionSuccess / ExtractionFailure values so a
batch can collect per-file results without exception-driven control flow.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import PurePath
from typing import Any

from bs4 import BeautifulSoup

from chatsense.ingest.types import (
    ExtractionFailure,
    ExtractionResult,
    ExtractionSuccess,
    FailureKind,
)
from chatsense.observability.logging import get_logger

logger = get_logger(__name__)

UNKNOWN_SENDER = "Unknown"


def format_line(sender: str, date: str, text: str) -> str:
    return f"{sender} ({date}): {text}"


def _flatten_text(value: Any) -> str:
    """Flatten a Telegram "text" field.

    Plain messages carry a string. Messages with links, mentions or formatting
    carry a list mixing strings and entity objects like
    {"type": "bold", "text": "..."}; fragments are concatenated in order.
    """
    if isinstance(value, list):
        parts = []
        for fragment in value:
            if isinstance(fragment, str):
                parts.append(fragment)
            elif isinstance(fragment, dict):
                parts.append(str(fragment.get("text") or ""))
        return "".join(parts)
    if not value:
        return ""
    return str(value)


def extract_json(raw: str) -> ExtractionResult:
    """Extract message lines from a Telegram JSON export."""
    try:
        data = json.loads(raw)
    except (json.JSONDecodeError, RecursionError) as e:
        # RecursionError: nesting deeper than the decoder can follow
        logger.debug("JSON decode failed: %s", type(e).__name__)
        return ExtractionFailure(FailureKind.PARSE, "Could not parse JSON")

    messages = data.get("messages") if isinstance(data, dict) else None
    if not isinstance(messages, list):
        return ExtractionFailure(FailureKind.FORMAT, "Invalid Telegram JSON export format")

    lines = []
    for record in messages:
        if not isinstance(record, dict):
            logger.debug("Skipping non-object message record: %r", type(record).__name__)
            continue
        sender = str(record.get("from") or UNKNOWN_SENDER)
        date = str(record.get("date") or "")
        lines.append(format_line(sender, date, _flatten_text(record.get("text"))))

    return ExtractionSuccess(tuple(lines))


def _node_text(node: Any) -> str:
    if node is None:
        return ""
    return node.get_text().strip()


def extract_html(raw: str) -> ExtractionResult:
    """Extract message lines from a Telegram HTML export."""
    soup = BeautifulSoup(raw, "html.parser")

    lines = []
    for message in soup.select(".message"):
        sender = _node_text(message.select_one(".from_name")) or UNKNOWN_SENDER
        text = _node_text(message.select_one(".text"))
        date = _node_text(message.select_one(".date"))
        lines.append(format_line(sender, date, text))

    if not lines:
        return ExtractionFailure(FailureKind.EXTRACTION, "No messages found in HTML")

    return ExtractionSuccess(tuple(lines))


_PARSERS: dict[str, Callable[[str], ExtractionResult]] = {
    ".json": extract_json,
    ".html": extract_html,
}


def extract_content(name: str, raw: str) -> ExtractionResult:
    """
    Extract message lines from one export file.

    Args:
        name: File name; its extension selects the parser.
        raw: Decoded file text.

    Returns:
        ExtractionSuccess with the lines, or ExtractionFailure with the reason.
    """
    parser = _PARSERS.get(PurePath(name).suffix.lower())
    if parser is None:
        return ExtractionFailure(FailureKind.UNSUPPORTED, "Unsupported file format")

    result = parser(raw)
    if isinstance(result, ExtractionSuccess):
        logger.debug("Extracted %d message lines from %s", len(result.lines), name)
    else:
        logger.info("Extraction failed for %s: %s", name, result.reason)
    return result
