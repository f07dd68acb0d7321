"""Turn dispatch outcomes into the text shown in the response pane."""

from __future__ import annotations

import json
from http import HTTPStatus

from .dispatch import DispatchResult


def status_text(result: DispatchResult) -> str:
    """Return ``HTTP <code> <reason>`` for the status line."""
    reason = result.reason
    if not reason:
        try:
            reason = HTTPStatus(result.status_code).phrase
        except ValueError:
            reason = ""
    return f"HTTP {result.status_code} {reason}".rstrip()


def format_response(result: DispatchResult, verbose: bool) -> str:
    parts: list[str] = []
    if verbose:
        parts.append("Headers:\n")
        for name, value in result.headers.items():
            parts.append(f"  {name}: {value}\n")
        parts.append("\n")
    if result.json is not None:
        parts.append(json.dumps(result.json, indent=2, ensure_ascii=False))
    elif result.body:
        parts.append(result.body)
    return "".join(parts)


def format_error(message: str) -> str:
    return f"Error: {message}"
