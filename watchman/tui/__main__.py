"""CLI entry point for The Watchman."""

import argparse
import sys

from ..config.settings import settings
from .app_runner import check_environment, list_actions, run_tui


def main():
    parser = argparse.ArgumentParser(
        prog="watchman",
        description="The Watchman - interactive network diagnostics front-end",
    )
    parser.add_argument(
        "--ui",
        choices=["textual", "plain"],
        default=settings.ui.default,
        help="Select TUI runtime",
    )
    parser.add_argument("--list", action="store_true", help="List available actions and exit")
    parser.add_argument(
        "--check",
        action="store_true",
        help="Check that external tools are installed and exit",
    )
    args = parser.parse_args()

    if args.list:
        list_actions()
    elif args.check:
        sys.exit(check_environment())
    else:
        run_tui(ui=args.ui)


if __name__ == "__main__":
    main()
