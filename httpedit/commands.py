"""Command-mode language and request execution.

``execute_command`` interprets the text typed after ``:``; ``execute_request``
turns the request buffer into a :class:`ReplCommand`, hands it to the
dispatcher and installs the outcome as a fresh response view.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass, field

from requests.structures import CaseInsensitiveDict

from .dispatch import RequestDispatcher
from .editor import ResponseView
from .errors import DispatchError, RequestParseError
from .response_format import format_error, format_response, status_text
from .state import Pane, ReplSession

logger = logging.getLogger(__name__)

NO_REQUEST_MESSAGE = "No request to execute"
INVALID_REQUEST_MESSAGE = "Invalid request format. Use: METHOD URL"


@dataclass
class ReplCommand:
    method: str
    url: str
    body: str | None = None
    headers: CaseInsensitiveDict = field(default_factory=CaseInsensitiveDict)


def parse_request(lines: Sequence[str], headers: Mapping[str, str] | None = None) -> ReplCommand:
    """Read ``METHOD URL`` from the first line and the body from the rest.

    A single blank line after the request line is skipped. Raises
    :class:`RequestParseError` when the first line is empty or has fewer
    than two tokens.
    """
    if not lines or not lines[0].strip():
        raise RequestParseError(NO_REQUEST_MESSAGE)
    tokens = lines[0].split()
    if len(tokens) < 2:
        raise RequestParseError(INVALID_REQUEST_MESSAGE)
    rest = list(lines[1:])
    if rest and not rest[0].strip():
        rest = rest[1:]
    return ReplCommand(
        method=tokens[0].upper(),
        url=tokens[1],
        body="\n".join(rest) if rest else None,
        headers=CaseInsensitiveDict(headers or {}),
    )


def install_response(session: ReplSession, text: str) -> None:
    session.response = ResponseView.from_text(text)
    session.layout.restore_after_collapse()


def clear_response(session: ReplSession) -> None:
    session.response = None
    session.current_pane = Pane.REQUEST


def execute_request(
    session: ReplSession,
    dispatcher: RequestDispatcher,
    clock: Callable[[], float],
) -> None:
    """Parse the request buffer and dispatch it, recording status and timing."""
    try:
        command = parse_request(session.buffer.text().splitlines(), session.session_headers)
    except RequestParseError as exc:
        session.status_message = str(exc)
        return

    started = clock()
    try:
        result = dispatcher.send(command.method, command.url, command.body, command.headers)
    except DispatchError as exc:
        session.last_request_duration_ms = int((clock() - started) * 1000)
        session.last_response_status = "Error"
        session.status_message = f"Request failed: {exc}"
        install_response(session, format_error(str(exc)))
        return
    session.last_request_duration_ms = int((clock() - started) * 1000)
    session.last_response_status = status_text(result)
    install_response(session, format_response(result, session.verbose))


def execute_command(
    text: str,
    session: ReplSession,
    dispatcher: RequestDispatcher,
    clock: Callable[[], float],
) -> bool:
    """Run one ``:`` command; return ``True`` when the session should end."""
    if text in ("q", "quit"):
        if session.has_response:
            clear_response(session)
            session.layout.collapse_response()
            return False
        return True
    if text in ("q!", "quit!"):
        return True
    if text in ("x", "execute"):
        clear_response(session)
        execute_request(session, dispatcher, clock)
        return False
    if text == "clear":
        clear_response(session)
        session.status_message = "Response cleared"
        return False
    if text == "verbose":
        session.verbose = not session.verbose
        session.status_message = f"Verbose mode {'on' if session.verbose else 'off'}"
        return False
    if text.startswith("head "):
        parts = text.split(" ", 2)
        if len(parts) < 3 or not parts[1]:
            session.status_message = "Usage: head <key> <value>"
            return False
        key, value = parts[1], parts[2]
        session.session_headers[key] = value
        session.status_message = f"Header set: {key} = {value}"
        return False
    if text.startswith("unhead "):
        key = text.split(" ", 1)[1]
        if key in session.session_headers:
            del session.session_headers[key]
            session.status_message = f"Header removed: {key}"
        else:
            session.status_message = f"Header not found: {key}"
        return False
    logger.debug("unknown command %r", text)
    session.status_message = f"Unknown command: {text}"
    return False
