"""Command-mode tests: the ``:`` language and request execution.

A scripted dispatcher stands in for the network, and a scripted clock makes
request timing deterministic.
"""

from __future__ import annotations

import unittest

import requests

from httpedit.dispatch import DispatchResult, RequestsDispatcher
from httpedit.editor import EditorBuffer, ResponseView
from httpedit.errors import DispatchError
from httpedit.input import KeyContext, handle_key
from httpedit.layout import PaneLayout
from httpedit.state import Mode, Pane, ReplSession


class _ScriptedDispatcher:
    def __init__(self, result: DispatchResult | None = None, error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[tuple] = []

    def send(self, method, url, body, headers):
        self.calls.append((method, url, body, dict(headers)))
        if self.error is not None:
            raise self.error
        return self.result


def _context(text: str = "", dispatcher: _ScriptedDispatcher | None = None) -> KeyContext:
    session = ReplSession(
        buffer=EditorBuffer.from_text(text),
        layout=PaneLayout(terminal_width=80, terminal_height=24),
        mode=Mode.NORMAL,
    )
    ticks = iter([10.0, 10.25])
    return KeyContext(
        session=session,
        dispatcher=dispatcher or _ScriptedDispatcher(DispatchResult(200, "OK", body="")),
        clock=lambda: next(ticks),
    )


def _run(ctx: KeyContext, command: str) -> bool:
    handle_key(":", ctx)
    for ch in command:
        handle_key(ch, ctx)
    return handle_key("ENTER", ctx)


class ExecuteCommandTests(unittest.TestCase):
    def test_execute_installs_response_and_status(self) -> None:
        dispatcher = _ScriptedDispatcher(DispatchResult(status_code=200, reason="OK", body="pong"))
        ctx = _context("GET https://api.test/ping", dispatcher)

        self.assertFalse(_run(ctx, "x"))

        session = ctx.session
        self.assertEqual(dispatcher.calls, [("GET", "https://api.test/ping", None, {})])
        self.assertEqual(session.response.lines, ["pong"])
        self.assertEqual(session.last_response_status, "HTTP 200 OK")
        self.assertEqual(session.last_request_duration_ms, 250)
        self.assertIs(session.mode, Mode.NORMAL)

    def test_execute_sends_method_uppercased_with_body_and_session_headers(self) -> None:
        dispatcher = _ScriptedDispatcher(DispatchResult(201, "Created", body="", json={"id": 1}))
        ctx = _context('post /items\n\n{"name": "x"}', dispatcher)
        ctx.session.session_headers["X-Token"] = "abc"

        _run(ctx, "execute")

        self.assertEqual(dispatcher.calls, [("POST", "/items", '{"name": "x"}', {"X-Token": "abc"})])
        self.assertEqual(ctx.session.response.lines, ["{", '  "id": 1', "}"])

    def test_dispatch_failure_shows_error_text(self) -> None:
        ctx = _context("GET http://down.test", _ScriptedDispatcher(error=DispatchError("connection refused")))
        _run(ctx, "x")

        session = ctx.session
        self.assertEqual(session.response.lines, ["Error: connection refused"])
        self.assertEqual(session.last_response_status, "Error")
        self.assertEqual(session.status_message, "Request failed: connection refused")

    def test_non_latin1_session_header_reports_error_and_keeps_running(self) -> None:
        session = requests.Session()
        session.trust_env = False
        self.addCleanup(session.close)
        ctx = _context("GET http://127.0.0.1:9/x", RequestsDispatcher(session=session))

        self.assertFalse(_run(ctx, "head X-Name 日本"))
        self.assertFalse(_run(ctx, "x"))

        self.assertEqual(ctx.session.last_response_status, "Error")
        self.assertTrue(ctx.session.status_message.startswith("Request failed: "))
        self.assertTrue(ctx.session.response.lines[0].startswith("Error: "))
        self.assertIs(ctx.session.mode, Mode.NORMAL)

    def test_malformed_request_reports_without_dispatch(self) -> None:
        dispatcher = _ScriptedDispatcher()
        ctx = _context("", dispatcher)
        _run(ctx, "x")
        self.assertEqual(ctx.session.status_message, "No request to execute")

        ctx.session.buffer = EditorBuffer.from_text("GET")
        _run(ctx, "x")
        self.assertEqual(ctx.session.status_message, "Invalid request format. Use: METHOD URL")
        self.assertEqual(dispatcher.calls, [])
        self.assertIsNone(ctx.session.response)

    def test_new_response_reopens_collapsed_split(self) -> None:
        dispatcher = _ScriptedDispatcher(DispatchResult(200, "OK", body="pong"))
        ctx = _context("GET /ping", dispatcher)
        ctx.session.layout.split_ratio = 1.0
        _run(ctx, "x")
        self.assertEqual(ctx.session.layout.split_ratio, 0.5)


class SessionCommandTests(unittest.TestCase):
    def test_quit_closes_response_before_terminating(self) -> None:
        ctx = _context("GET /a")
        ctx.session.response = ResponseView.from_text("pong")
        ctx.session.current_pane = Pane.RESPONSE

        self.assertFalse(_run(ctx, "q"))
        self.assertIsNone(ctx.session.response)
        self.assertIs(ctx.session.current_pane, Pane.REQUEST)
        self.assertEqual(ctx.session.layout.split_ratio, 1.0)

        self.assertTrue(_run(ctx, "quit"))

    def test_force_quit_terminates_with_response_open(self) -> None:
        ctx = _context()
        ctx.session.response = ResponseView.from_text("pong")
        self.assertTrue(_run(ctx, "q!"))

    def test_clear_and_verbose_report_status(self) -> None:
        ctx = _context()
        ctx.session.response = ResponseView.from_text("pong")
        _run(ctx, "clear")
        self.assertIsNone(ctx.session.response)
        self.assertEqual(ctx.session.status_message, "Response cleared")

        _run(ctx, "verbose")
        self.assertTrue(ctx.session.verbose)
        self.assertEqual(ctx.session.status_message, "Verbose mode on")
        _run(ctx, "verbose")
        self.assertEqual(ctx.session.status_message, "Verbose mode off")

    def test_head_and_unhead_manage_case_insensitive_headers(self) -> None:
        ctx = _context()
        _run(ctx, "head Authorization Bearer abc")
        self.assertEqual(ctx.session.session_headers["authorization"], "Bearer abc")
        self.assertEqual(ctx.session.status_message, "Header set: Authorization = Bearer abc")

        _run(ctx, "unhead authorization")
        self.assertNotIn("Authorization", ctx.session.session_headers)
        self.assertEqual(ctx.session.status_message, "Header removed: authorization")

        _run(ctx, "unhead authorization")
        self.assertEqual(ctx.session.status_message, "Header not found: authorization")

    def test_unknown_command_changes_nothing_else(self) -> None:
        ctx = _context("GET /a")
        _run(ctx, "frobnicate")
        self.assertEqual(ctx.session.status_message, "Unknown command: frobnicate")
        self.assertEqual(ctx.session.buffer.lines, ["GET /a"])
        self.assertIs(ctx.session.mode, Mode.NORMAL)


class CommandLineEditingTests(unittest.TestCase):
    def test_backspace_on_empty_command_leaves_command_mode(self) -> None:
        ctx = _context()
        handle_key(":", ctx)
        handle_key("q", ctx)
        handle_key("BACKSPACE", ctx)
        self.assertIs(ctx.session.mode, Mode.COMMAND)
        self.assertEqual(ctx.session.command_buffer, "")

        handle_key("BACKSPACE", ctx)
        self.assertIs(ctx.session.mode, Mode.NORMAL)

    def test_escape_cancels_without_running(self) -> None:
        ctx = _context()
        handle_key(":", ctx)
        handle_key("q", ctx)
        self.assertFalse(handle_key("ESC", ctx))
        self.assertIs(ctx.session.mode, Mode.NORMAL)
        self.assertEqual(ctx.session.command_buffer, "")


if __name__ == "__main__":
    unittest.main()
