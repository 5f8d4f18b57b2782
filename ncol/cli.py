"""
Command line entry point for ncol.
"""

from __future__ import annotations
import argparse
import sys
from typing import Mapping, Optional, Sequence

from pubsub import pub

from .arranger import ColumnArranger
from .config import ColumnsConfig
from .connection import NiriConnection
from .errors import NcolError
from .protocol import ColumnDisplay
from .reporter import ConsoleReporter, debug_event_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ncol",
        description="Arrange the windows of the focused niri workspace into balanced columns",
    )
    parser.add_argument(
        "--socket",
        default=None,
        help="Path of the niri IPC socket (default: $NIRI_SOCKET)",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        default=None,
        help="Print the column plan without moving any window",
    )
    parser.add_argument(
        "--tabbed",
        action="store_true",
        help="Show the windows of each column as tabs",
    )
    parser.add_argument(
        "--first-focused",
        action="store_true",
        help="If several workspaces report focus, arrange the first one instead of failing",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        default=None,
        help="Print every internal event (also enabled by NCOL_DEBUG=1)",
    )
    return parser


def run(config: ColumnsConfig, bus=pub) -> int:
    """Arrange the focused workspace according to ``config``."""
    reporter = ConsoleReporter(bus=bus)
    if config.debug:
        bus.subscribe(debug_event_logger, pub.ALL_TOPICS)

    try:
        with NiriConnection().connect(config.socket_path) as connection:
            arranger = ColumnArranger(
                connection,
                bus=bus,
                column_display=config.column_display,
                strict_focus=config.strict_focus,
                dry_run=config.dry_run,
            )
            arranger.arrange()
    finally:
        reporter.unsubscribe()
        if config.debug:
            bus.unsubscribe(debug_event_logger, pub.ALL_TOPICS)

    return 0


def main(
    argv: Optional[Sequence[str]] = None, env: Optional[Mapping[str, str]] = None
) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    try:
        config = ColumnsConfig.from_env(
            env,
            socket_path=args.socket,
            dry_run=args.dry_run,
            debug=args.debug,
            strict_focus=False if args.first_focused else None,
            column_display=ColumnDisplay.TABBED if args.tabbed else None,
        )
        return run(config)
    except NcolError as e:
        print(f"ncol: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
