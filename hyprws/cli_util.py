from __future__ import annotations

import argparse
from typing import NoReturn, Optional


class ExitCalledError(Exception):

    def __init__(self, parser: argparse.ArgumentParser, status: int,
                 message: Optional[str]):
        super().__init__(message)
        self.parser = parser
        self.status = status
        self.message = message


class ArgumentParserNoExit(argparse.ArgumentParser):
    """ArgumentParser that raises ExitCalledError instead of exiting.

    The caller decides how parsing errors are reported, since an unrecognized
    command line is not a failure of this tool.
    """

    def exit(self, status: int = 0, message: Optional[str] = None) -> NoReturn:
        raise ExitCalledError(self, status, message)

    def error(self, message: str) -> NoReturn:
        self.exit(2, message)


def add_common_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        '--dry-run',
        action='store_true',
        default=None,
        help='If true, will not actually do any changes to Hyprland windows.')
    parser.add_argument(
        '--log-level',
        type=str.lower,
        choices=('debug', 'info', 'warning', 'error', 'critical'),
        default=None,
        help='Logging level for stderr and syslog.')
    parser.add_argument('--config',
                        default=None,
                        help='Path of the TOML config file to use.')
    parser.add_argument('--socket',
                        default=None,
                        help='Path of the Hyprland request socket. If not '
                        'provided, it is derived from the environment.')


def get_config_overrides(args: argparse.Namespace) -> dict:
    overrides = {}
    if args.dry_run:
        overrides['dry_run'] = True
    if args.log_level:
        overrides['log_level'] = args.log_level
    if args.socket:
        overrides['socket_path'] = args.socket
    return overrides
