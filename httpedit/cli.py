"""Command-line front door for httpedit.

Parses CLI options, merges them over the stored configuration, optionally
persists them, then launches the interactive editor.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import config
from .dispatch import DEFAULT_HOST, RequestsDispatcher
from .errors import ConfigError
from .logs import DEFAULT_LEVEL, configure_logging
from .runtime import run_repl
from .ui_theme import available_theme_names, resolve_theme

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="httpedit",
        description="Compose and send HTTP requests in a modal terminal editor.",
    )
    parser.add_argument("file", nargs="?", default=None, help="Request file to preload into the editor.")
    parser.add_argument(
        "-p",
        "--profile",
        default=config.DEFAULT_PROFILE,
        help="Config profile to read defaults from (default: %(default)s).",
    )
    parser.add_argument("--host", default=None, help=f"Base URL for relative request paths (default: {DEFAULT_HOST}).")
    parser.add_argument("-u", "--user", default=None, help="Username for basic authentication.")
    parser.add_argument("-w", "--password", default=None, help="Password for basic authentication.")
    parser.add_argument("-i", "--api-key", default=None, help="API key sent as 'Authorization: ApiKey <key>'.")
    parser.add_argument("-r", "--ca-cert", default=None, help="CA certificate PEM file used to verify TLS peers.")
    parser.add_argument("-c", "--content-type", default=None, help="Content-Type for request bodies without one.")
    parser.add_argument("--verbose", action="store_true", help="Show response headers above the body.")
    parser.add_argument("-k", "--insecure", action="store_true", help="Skip TLS certificate verification.")
    parser.add_argument(
        "-H",
        "--header",
        dest="headers",
        action="append",
        default=[],
        metavar="'KEY: VALUE'",
        help="Default header sent with every request (repeatable).",
    )
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colors in the editor.")
    parser.add_argument(
        "--save",
        action="store_true",
        help="Store the connection options and theme in the selected profile.",
    )
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=DEFAULT_LEVEL,
        help="Log file verbosity.",
    )
    return parser


def read_request_file(path: Path) -> str:
    if not path.is_file():
        raise SystemExit(f"Path not found: {path}")
    return path.read_text(encoding="utf-8", errors="replace")


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and launch the editor."""
    args = build_parser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        cli_headers = dict(config.parse_header(item) for item in args.headers)
        if args.save:
            config.save_preferences(
                profile=args.profile,
                host=args.host,
                theme=args.theme,
                insecure=True if args.insecure else None,
                headers=cli_headers,
                user=args.user,
                password=args.password,
                api_key=args.api_key,
                ca_cert=args.ca_cert,
                content_type=args.content_type,
            )
        stored = config.load_profile(args.profile)
    except ConfigError as exc:
        raise SystemExit(str(exc)) from exc

    host = args.host or config.load_host(stored) or DEFAULT_HOST
    headers = config.load_headers(stored)
    headers.update(cli_headers)
    theme = resolve_theme(args.theme or config.load_theme_name(stored), no_color=args.no_color)
    initial_text = read_request_file(Path(args.file)) if args.file is not None else ""

    if not (sys.stdin.isatty() and sys.stdout.isatty()):
        raise SystemExit("httpedit needs an interactive terminal.")

    dispatcher = RequestsDispatcher(
        host,
        insecure=args.insecure or config.load_insecure(stored),
        default_headers=headers,
        user=args.user or config.load_user(stored),
        password=args.password or config.load_password(stored),
        api_key=args.api_key or config.load_api_key(stored),
        ca_cert=args.ca_cert or config.load_ca_cert(stored),
        content_type=args.content_type or config.load_content_type(stored),
    )
    logger.info("profile=%s host=%s headers=%s", args.profile, host, sorted(headers))
    run_repl(
        dispatcher,
        initial_text,
        theme=theme,
        verbose=args.verbose or config.load_verbose(stored),
    )


if __name__ == "__main__":
    main()
