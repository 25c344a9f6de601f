"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import functools
import http.server
import logging
import sys
from pathlib import Path

from occurrence_desk import __version__
from occurrence_desk.analysis.monthly import MonthKey
from occurrence_desk.config import Settings, get_settings
from occurrence_desk.datasources.api import ApiClient
from occurrence_desk.flows.report import build_report
from occurrence_desk.schemas import Role, Session
from occurrence_desk.views.guards import (
    LOGIN_PATH,
    RouteDecision,
    require_admin,
    require_signed_in,
)
from occurrence_desk.views.statistics import StatisticsView, ViewState
from occurrence_desk.views.users import PAGE_SIZE_OPTIONS, Level, UsersView

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="occurrence-desk",
        description="Occurrence management: monthly statistics, users and reports",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("info", help="Show application info")

    subparsers.add_parser("months", help="List months that have occurrences")

    stats_parser = subparsers.add_parser("stats", help="Show the monthly summary")
    stats_parser.add_argument(
        "--month",
        type=str,
        default=None,
        help="Month as MM/YYYY (default: most recent month)",
    )

    users_parser = subparsers.add_parser("users", help="List users (admin only)")
    users_parser.add_argument("--page", type=int, default=1, help="Page number, 1-based")
    users_parser.add_argument(
        "--page-size",
        type=int,
        default=PAGE_SIZE_OPTIONS[0],
        choices=PAGE_SIZE_OPTIONS,
        help="Rows per page",
    )

    delete_parser = subparsers.add_parser("delete-user", help="Delete a user (admin only)")
    delete_parser.add_argument("user_id", type=str, help="Id of the user to delete")
    delete_parser.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")

    report_parser = subparsers.add_parser("report", help="Build the static statistics report")
    report_parser.add_argument("--month", type=str, default=None, help="Month as MM/YYYY")

    serve_parser = subparsers.add_parser("serve", help="Serve the built report locally")
    serve_parser.add_argument(
        "--port",
        type=int,
        default=None,
        help="Port to serve on (default: api_port from settings)",
    )

    return parser


def build_session(settings: Settings) -> Session:
    """Operator session from settings. A token means signed in."""
    try:
        role: Role | None = Role(settings.role.upper())
    except ValueError:
        logger.warning("Unknown role %r in settings; treating as no role", settings.role)
        role = None
    return Session(
        signed=bool(settings.api_token),
        role=role,
        user_id=settings.user_id,
        token=settings.api_token,
    )


def _denied(decision: RouteDecision) -> int:
    if decision.redirect_to == LOGIN_PATH:
        print("Not signed in: set OCCURRENCE_DESK_API_TOKEN.", file=sys.stderr)
    else:
        print("Permission denied: administrator role required.", file=sys.stderr)
    return 1


def _mount_statistics(settings: Settings) -> StatisticsView | None:
    view = StatisticsView.from_api(
        ApiClient.from_settings(settings), page_size=settings.fetch_page_size, tz=settings.tzinfo
    )
    if view.mount() == ViewState.ERROR:
        print(f"Error: could not load occurrences: {view.error}", file=sys.stderr)
        return None
    return view


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = get_settings()
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"API: {settings.api_base_url}")
    print(f"Debug: {settings.debug}")
    return 0


def cmd_months(_args: argparse.Namespace) -> int:
    """Handle the 'months' command."""
    settings = get_settings()
    decision = require_signed_in(build_session(settings))
    if not decision.allowed:
        return _denied(decision)

    view = _mount_statistics(settings)
    if view is None:
        return 1
    for label in view.month_labels():
        print(label)
    return 0


def cmd_stats(args: argparse.Namespace) -> int:
    """Handle the 'stats' command."""
    settings = get_settings()
    decision = require_signed_in(build_session(settings))
    if not decision.allowed:
        return _denied(decision)

    month = None
    if args.month:
        try:
            month = MonthKey.parse(args.month)
        except ValueError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    view = _mount_statistics(settings)
    if view is None:
        return 1
    if month is not None:
        view.select_month(month)
    if view.selected_month is None:
        print("No occurrences recorded yet.")
        return 0

    print(f"Statistics for {view.selected_month.label}")
    for card in view.visualization():
        print(f"  {card.title}: {card.display}")
    return 0


def cmd_users(args: argparse.Namespace) -> int:
    """Handle the 'users' command."""
    settings = get_settings()
    decision = require_admin(build_session(settings))
    if not decision.allowed:
        return _denied(decision)

    view = UsersView(ApiClient.from_settings(settings), page_size=args.page_size)
    if not view.set_pagination(max(args.page - 1, 0)):
        print("Error: could not load users", file=sys.stderr)
        return 1

    for user in view.users:
        print(f"{user.id}\t{user.name}\t{user.email}\t{user.role}")
    print(f"Page {view.page + 1} of {view.page_count}, {len(view.users)} of {view.total} users")
    return 0


def cmd_delete_user(args: argparse.Namespace) -> int:
    """Handle the 'delete-user' command."""
    settings = get_settings()
    decision = require_admin(build_session(settings))
    if not decision.allowed:
        return _denied(decision)

    if not args.yes:
        answer = input(f"Permanently delete user {args.user_id}? [y/N] ")
        if answer.strip().lower() not in ("y", "yes"):
            print("Aborted.")
            return 1

    view = UsersView(ApiClient.from_settings(settings))
    view.request_delete(args.user_id)
    deleted = view.confirm_delete()
    for note in view.drain_notifications():
        stream = sys.stderr if note.level == Level.ERROR else sys.stdout
        print(note.message, file=stream)
    return 0 if deleted is not None else 1


def cmd_report(args: argparse.Namespace) -> int:
    """Handle the 'report' command: fetch, aggregate and render the site."""
    if args.month:
        try:
            MonthKey.parse(args.month)
        except ValueError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            return 1

    result = build_report(month=args.month)
    if "error" in result:
        print(f"Error: {result['error']}", file=sys.stderr)
        return 1
    print(f"Report written to {result['output']}")
    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    """Handle the 'serve' command: serve the built site locally."""
    settings = get_settings()
    port = args.port if args.port is not None else settings.api_port
    site_dir = Path(settings.site_dir)

    if not site_dir.exists():
        print("No site directory found. Run 'occurrence-desk report' first.", file=sys.stderr)
        return 1

    handler = functools.partial(http.server.SimpleHTTPRequestHandler, directory=str(site_dir))

    with http.server.HTTPServer(("", port), handler) as server:
        print(f"Serving site on http://localhost:{port}/statistics.html (Ctrl+C to stop)")
        try:
            server.serve_forever()
        except KeyboardInterrupt:
            print("\nServer stopped.")

    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if getattr(args, "debug", False) else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "info": cmd_info,
        "months": cmd_months,
        "stats": cmd_stats,
        "users": cmd_users,
        "delete-user": cmd_delete_user,
        "report": cmd_report,
        "serve": cmd_serve,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
