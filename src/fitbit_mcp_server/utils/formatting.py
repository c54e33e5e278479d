"""
Formatting utilities for Fitbit MCP Server

Every tool call resolves to a result envelope: a list with one text content
block and, on failure, an isError flag. The envelopes are plain dicts so they
can be checked without the MCP runtime.
"""

import json
from typing import Any


def _text_content(text: str) -> dict[str, Any]:
    return {"type": "text", "text": text}


def format_success(payload: Any) -> dict[str, Any]:
    """Wrap a tool payload as pretty-printed JSON text."""
    return {"content": [_text_content(json.dumps(payload, indent=2, ensure_ascii=False))]}


def format_error(error: BaseException | str) -> dict[str, Any]:
    """Wrap a failure as an error envelope with the message prefixed by 'Error: '."""
    return {"content": [_text_content(f"Error: {error}")], "isError": True}
