"""ARC - Arduino Relay Control CLI.

Sets one pin of the relay board High or Low and reports the outcome as
the process exit code.
"""

import argparse
import dataclasses
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from arc.config import ConfigManager, Config, LogLevel
from arc.core import (
    ConfigError,
    DeviceLocator,
    DeviceNotFoundError,
    RelayController,
    ReturnCode,
    WrongArgumentsError,
    is_valid_command,
)
from arc.logging import CommunicationLogger

USAGE = """ARC - Arduino Relay Control

Usage: arc S#

Where (S)tate is (H)igh or (L)ow, and # is pin # 2 to 19
Example "arc L2" will set pin 2 Low, and "arc H2" will set pin 2 high.
Note: pins 0 and 1 are reserved for communication."""


class ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports bad usage as WrongArgumentsError.

    argparse would otherwise exit with status 2, which is the
    INVALID_COMMAND code.
    """

    def error(self, message):
        raise WrongArgumentsError(message)


def build_parser() -> ArgumentParser:
    """Build the command line parser."""
    parser = ArgumentParser(
        prog="arc",
        add_help=False,
        usage="%(prog)s S# [options]",
        description="ARC - Arduino Relay Control",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s H5                                   # Set pin 5 high
  %(prog)s L12 --verbose                        # Set pin 12 low, show progress
  %(prog)s --list-devices                       # Show matching serial ports
  %(prog)s H5 --descriptor "USB-SERIAL CH340"   # Board clone with another description
  %(prog)s H5 --log --log-level DEBUG --log-to-console

Exit codes:
  0 OK, 1 wrong arguments, 2 invalid command, 3 device not found,
  4 communication failure (including a fault reported by the device)
        """
    )

    parser.add_argument(
        '-h', '--help',
        action='store_true',
        help='Show this help and exit with the wrong-arguments code'
    )

    parser.add_argument(
        'command',
        nargs='*',
        help='Relay command: H or L followed by pin number 2-19 (e.g. H5, L12)'
    )

    parser.add_argument(
        '--config',
        type=str,
        metavar='PATH',
        help='Configuration file (default: ./arc.yaml or ~/.arc/config.yaml)'
    )

    parser.add_argument(
        '--descriptor',
        type=str,
        help='Substring of the serial port description identifying the board'
    )

    parser.add_argument(
        '--list-devices',
        action='store_true',
        help='List serial ports matching the descriptor and exit'
    )

    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose output'
    )

    parser.add_argument(
        '--log',
        action='store_true',
        help='Enable communication logging'
    )

    parser.add_argument(
        '--log-file',
        type=str,
        metavar='PATH',
        help='Path to log file (default: ~/.arc/logs/arc_YYYYMMDD_HHMMSS.log)'
    )

    parser.add_argument(
        '--log-level',
        type=str,
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        help='Log level (default: INFO)'
    )

    parser.add_argument(
        '--log-to-console',
        action='store_true',
        help='Output logs to console (stderr); on its own, enables console-only logging'
    )

    return parser


def create_logger(args: argparse.Namespace, config: Config) -> Optional[CommunicationLogger]:
    """Create a CommunicationLogger from CLI flags layered over config.

    Returns:
        Logger, or None when logging is disabled
    """
    log_config = config.logging
    logging_requested = args.log or log_config.enabled
    if not (logging_requested or args.log_to_console):
        return None

    log_file_path = args.log_file or log_config.log_file_path
    # --log-to-console alone logs to stderr only
    enable_file = bool(args.log_file) or (log_config.log_to_file and logging_requested)
    if enable_file and not log_file_path:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file_path = str(Path.home() / ".arc" / "logs" / f"arc_{timestamp}.log")

    log_level = LogLevel[args.log_level] if args.log_level else log_config.level

    return CommunicationLogger(
        log_level=log_level,
        enable_file=enable_file,
        enable_console=args.log_to_console or log_config.log_to_console,
        log_file_path=log_file_path,
        max_file_size_mb=log_config.max_file_size_mb,
        backup_count=log_config.backup_count
    )


def list_devices(locator: DeviceLocator, descriptor: str) -> ReturnCode:
    """Print serial ports matching ``descriptor``."""
    try:
        ports = locator.find_all(descriptor)
    except DeviceNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return ReturnCode.NOT_FOUND

    if not ports:
        print(f"No serial ports matching {descriptor!r}.")
        return ReturnCode.NOT_FOUND

    print(f"Found {len(ports)} port(s) matching {descriptor!r}:")
    for port in ports:
        print(f"  {port.device}")
        print(f"    Description: {port.description}")
        print(f"    Hardware ID: {port.hwid}")
    return ReturnCode.OK


def run(argv: Optional[List[str]] = None) -> ReturnCode:
    """Run the tool and return its outcome without printing the outcome name."""
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        if args.help:
            print(USAGE)
            print()
            print(parser.format_help())
            return ReturnCode.WRONG_ARGS
        if not args.list_devices and len(args.command) != 1:
            raise WrongArgumentsError(f"expected 1 command, got {len(args.command)}")
    except WrongArgumentsError:
        print(USAGE)
        return ReturnCode.WRONG_ARGS

    # Reject malformed commands before touching config files or ports
    if not args.list_devices and not is_valid_command(args.command[0]):
        return ReturnCode.INVALID_COMMAND

    try:
        config = ConfigManager(Path(args.config) if args.config else None).load()
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return ReturnCode.WRONG_ARGS

    device_config = config.device
    if args.descriptor:
        device_config = dataclasses.replace(device_config, descriptor=args.descriptor)

    logger = create_logger(args, config)
    try:
        locator = DeviceLocator(logger=logger)

        if args.list_devices:
            return list_devices(locator, device_config.descriptor)

        controller = RelayController(config=device_config, locator=locator, logger=logger)
        if args.verbose:
            print(f"Sending {args.command[0]} to device matching {device_config.descriptor!r}...")

        outcome = controller.run(args.command[0])

        if args.verbose:
            if outcome.port:
                print(f"Device port: {outcome.port}")
            if outcome.transaction is not None:
                print(f"Transaction: {outcome.transaction}")
            elif outcome.detail:
                print(f"Detail: {outcome.detail}")

        return outcome.code
    finally:
        if logger:
            if args.verbose and logger.log_file_path:
                print(f"Log file: {logger.log_file_path}")
            logger.close()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point: run, print the outcome name, return the exit code."""
    code = run(argv)
    print(code.label)
    return int(code)


if __name__ == '__main__':
    sys.exit(main())
