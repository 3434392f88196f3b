"""Command-line interface for claude-notify.

This module provides the entry point a Claude Code hook runs. It wires the
pipeline together: configuration -> input resolution -> fallback dispatch,
and turns the outcome into the process exit code.
"""

import argparse
import json
import platform
import sys
from typing import IO, List, Optional

from claude_notify._version import __version__
from claude_notify.config.settings import NotifyConfig, load_config
from claude_notify.diagnostics import make_diagnostic_log
from claude_notify.display.colors import Colors, disable_colors
from claude_notify.errors import (
    ConfigError,
    DeliveryFailedError,
    ExitCode,
    format_error_for_user,
    get_exit_code,
)
from claude_notify.notify.backends import BACKEND_NAMES
from claude_notify.notify.dispatcher import (
    NotificationDispatcher,
    backend_chain,
    build_backend,
    default_backends,
)
from claude_notify.payload.resolver import resolve_notification


def create_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser.

    Returns:
        Configured ArgumentParser instance.
    """
    parser = argparse.ArgumentParser(
        prog="claude-notify",
        description="Show desktop notifications for Claude Code hook events",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  claude-notify                         Read a hook payload from stdin
  claude-notify -t "Build" -m "Done"    Manual notification
  claude-notify -p '{"hook_event_name":"Stop"}'
  claude-notify --log-path ~/.claude/logs/notify.log
  claude-notify --backend plyer         Use only the plyer backend
  claude-notify --dry-run --json        Show what would be sent
  claude-notify --list-backends         Show the fallback chain

Hook setup:
  Register "claude-notify" as the command for the Notification and Stop
  hooks; the hook runner pipes the event JSON on stdin.
""",
    )

    parser.add_argument(
        "--payload",
        "-p",
        metavar="JSON",
        help="Hook payload JSON. Takes priority over stdin.",
    )
    parser.add_argument(
        "--title",
        "-t",
        metavar="TEXT",
        help="Force the notification title, whatever the payload says.",
    )
    parser.add_argument(
        "--message",
        "-m",
        metavar="TEXT",
        help="Force the notification message, whatever the payload says.",
    )
    parser.add_argument(
        "--log-path",
        "-l",
        metavar="PATH",
        help="Append diagnostic lines to PATH (parent directories are created).",
    )
    parser.add_argument(
        "--backend",
        "-b",
        action="append",
        choices=BACKEND_NAMES,
        metavar="NAME",
        help=f"Backend to try; repeat to set the order. Choices: {', '.join(BACKEND_NAMES)}.",
    )
    parser.add_argument(
        "--list-backends",
        action="store_true",
        help="Print the backend fallback chain for this platform and exit.",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Resolve the notification and print it without showing it.",
    )
    parser.add_argument(
        "--json",
        "-j",
        action="store_true",
        help="With --dry-run, print the resolved notification as JSON.",
    )
    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Suppress progress output.",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument(
        "--version",
        "-V",
        action="store_true",
        help="Show version and system information",
    )

    return parser


def print_version() -> None:
    """Print version and system information."""
    print(
        f"claude-notify {__version__} "
        f"(Python {sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}, "
        f"{platform.system()} {platform.machine()})"
    )


def list_backends(config: NotifyConfig) -> None:
    """Print the fallback chain with an availability mark per backend."""
    print(f"{Colors.BOLD}Backend chain ({platform.system()}):{Colors.RESET}")
    for position, name in enumerate(backend_chain(config), start=1):
        backend = build_backend(name, config)
        if backend.is_available():
            status = f"{Colors.GREEN}available{Colors.RESET}"
        else:
            status = f"{Colors.DIM}unavailable{Colors.RESET}"
        print(f"  {position}. {name:<16} {status}")


def run(argv: Optional[List[str]] = None, stdin: Optional[IO] = None) -> int:
    """Run one invocation and return its exit code.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).
        stdin: Input stream to probe for a piped payload (defaults to sys.stdin).

    Returns:
        0 if a backend delivered the notification, 1 if all failed.
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.no_color:
        disable_colors()

    if args.version:
        print_version()
        return ExitCode.SUCCESS

    config_error = None
    try:
        file_config = load_config()
    except ConfigError as e:
        config_error = e
        # A broken config file must not silence hook notifications
        print(
            f"{Colors.YELLOW}Warning: using default settings.\n"
            f"{format_error_for_user(e, verbose=True)}{Colors.RESET}",
            file=sys.stderr,
        )
        file_config = None
    config = NotifyConfig.from_sources(args, file_config)

    if args.list_backends:
        list_backends(config)
        return ExitCode.SUCCESS

    log = make_diagnostic_log(config.log_path)
    log.log(f"claude-notify {__version__} started")
    if config_error is not None:
        log.log(f"Ignoring config file: {config_error.message} {config_error.details or ''}".rstrip())

    notification = resolve_notification(config, sys.stdin if stdin is None else stdin, log)

    if config.dry_run:
        if args.json:
            print(json.dumps(notification.to_dict(), indent=2))
        else:
            print(f"{Colors.BOLD}{notification.title}{Colors.RESET}")
            print(notification.message)
            print(f"{Colors.DIM}event: {notification.event_label}{Colors.RESET}")
        log.log("Dry run, nothing sent")
        return ExitCode.SUCCESS

    dispatcher = NotificationDispatcher(default_backends(config, log=log), log, quiet=config.quiet)
    if dispatcher.dispatch(notification.title, notification.message):
        return ExitCode.SUCCESS

    error = DeliveryFailedError("All notification methods failed")
    print(f"{Colors.RED}{format_error_for_user(error, verbose=True)}{Colors.RESET}", file=sys.stderr)
    return get_exit_code(error)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the claude-notify console script."""
    sys.exit(run(argv))


__all__ = ["create_parser", "print_version", "list_backends", "run", "main"]
