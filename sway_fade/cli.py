#!/usr/bin/env python3
"""
Sway Fade CLI

Fade windows and workspaces in and out in Sway.

Examples (sway config):

    for_window [app_id=".*"] mark --add fade, opacity 0, exec sway-fade in
    bindsym $mod+Shift+q mark --add quit, exec sway-fade out
    bindsym $mod+1 exec sway-fade ws 1
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import load_settings
from .errors import ConfigLoadError, FadeError
from .models import MAX_STEPS, FadeConfig, FadeIn, FadeOut, Operation, OperationKind, SwitchWorkspace
from .sequencer import FadeSequencer
from .transport import SwayTransport

logger = logging.getLogger(__name__)

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}")
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0: {value}")
    if number > MAX_STEPS:
        raise argparse.ArgumentTypeError(f"must be at most {MAX_STEPS}: {value}")
    return number


def _positive_float(value: str) -> float:
    try:
        number = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}")
    if not number > 0:
        raise argparse.ArgumentTypeError(f"must be greater than 0: {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="sway-fade",
        description="Fade windows and workspaces in and out in sway",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-s", "--steps", type=_positive_int, default=None,
                        help="Number of opacity steps (default: 10)")
    parser.add_argument("-t", "--time", type=_positive_float, default=None,
                        help="Fade duration in seconds (default: 0.1)")
    parser.add_argument("-c", "--config", type=Path, default=None,
                        help="Config file (default: ~/.config/sway-fade/config.toml)")
    parser.add_argument("--socket", default=None,
                        help="Sway IPC socket path (default: $SWAYSOCK)")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Increase log verbosity (-v info, -vv debug)")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")
    subparsers.add_parser(OperationKind.FADE_IN.value, help="Fade a new window in")
    subparsers.add_parser(OperationKind.FADE_OUT.value, help="Quit a window by fading it out")
    ws_parser = subparsers.add_parser(OperationKind.SWITCH_WORKSPACE.value,
                                      help="Switch workspace with crossfade")
    ws_parser.add_argument("name", help="The name of the workspace to switch to")

    return parser


def operation_from_args(args: argparse.Namespace) -> Operation:
    """Map the parsed subcommand to an Operation."""
    if args.command == OperationKind.FADE_IN.value:
        return FadeIn()
    if args.command == OperationKind.FADE_OUT.value:
        return FadeOut()
    return SwitchWorkspace(target_name=args.name)


def configure_logging(verbosity: int) -> None:
    """Configure stderr logging for the given -v count."""
    if verbosity >= 2:
        level = logging.DEBUG
    elif verbosity == 1:
        level = logging.INFO
    else:
        level = logging.WARNING

    logging.basicConfig(level=level, format=LOG_FORMAT, stream=sys.stderr)


async def run_operation(operation: Operation, config: FadeConfig, socket_path: Optional[str] = None) -> None:
    """Connect to Sway and run one operation end-to-end."""
    transport = await SwayTransport(socket_path=socket_path).connect()
    sequencer = FadeSequencer(transport, config)
    await sequencer.run(operation)


def _report(error: FadeError) -> None:
    print(f"❌ Error: {error.message}", file=sys.stderr)
    if error.suggestion:
        print(f"  → {error.suggestion}", file=sys.stderr)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point. Returns the process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help(sys.stderr)
        return 2

    configure_logging(args.verbose)

    try:
        settings = load_settings(args.config)
    except ConfigLoadError as e:
        _report(e)
        return 2

    config = settings.to_fade_config(steps=args.steps, time=args.time)
    operation = operation_from_args(args)
    logger.debug("Running %s with %s", operation, config)

    try:
        asyncio.run(run_operation(operation, config, socket_path=args.socket))
    except KeyboardInterrupt:
        print("\nInterrupted", file=sys.stderr)
        return 130
    except FadeError as e:
        logger.debug("Fade failed: %s", e.to_dict())
        _report(e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
