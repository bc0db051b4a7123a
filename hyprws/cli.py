#!/usr/bin/env python3

from __future__ import annotations

import argparse
import pprint
import sys
from typing import List, Optional, Sequence

from hyprws import __version__
from hyprws import cli_util
from hyprws import config as hyprws_config
from hyprws import controller as hyprws_controller
from hyprws import errors
from hyprws import hypr_ipc
from hyprws import hypr_proxy
from hyprws import logger as log_util

init_logger = log_util.init_logger
logger = log_util.logger

USAGE = '''Usage:
  hyprws [OPTION] [WORKSPACE(S)]
Options:
  [ --help, -h ]          Display this help message
  [ --swap, -s ] WS1 WS2  Swap windows on Workspace1 with Workspace2
  [ --dump, -d ] WS1 WS2  Move all windows from one workspace to another
  [ --kill, -k ] WS       Close all windows on one workspace
Global options:
  --dry-run               Log the commands instead of sending them
  --log-level LEVEL       One of debug, info, warning, error, critical
  --config PATH           Use this config file
  --socket PATH           Path of the Hyprland request socket
  --version               Print the version and exit'''

_ACTIONS = {
    '-h': 'help',
    '--help': 'help',
    '-s': 'swap',
    '--swap': 'swap',
    '-d': 'dump',
    '--dump': 'dump',
    '-k': 'kill',
    '--kill': 'kill',
}


def _create_args_parser() -> cli_util.ArgumentParserNoExit:
    parser = cli_util.ArgumentParserNoExit(
        prog='hyprws',
        description='Move, swap and close windows across Hyprland workspaces.',
        add_help=False,
        # Only exact flags are accepted, a prefix of an action flag is an
        # invalid argument.
        allow_abbrev=False)
    cli_util.add_common_args(parser)
    parser.add_argument('--version',
                        action='version',
                        version=f'%(prog)s {__version__}')
    return parser


def _get_action(action_args: List[str]) -> str:
    """Returns the action selected by the first argument left after the global
    options. Anything after the action and its workspaces is ignored."""
    if not action_args:
        raise errors.UnrecognizedArgumentError('No arguments provided')
    action = _ACTIONS.get(action_args[0])
    if action is None:
        raise errors.UnrecognizedArgumentError(
            f'Invalid argument: {action_args[0]}')
    return action


def _get_workspace_arg(action_args: List[str],
                       index: int) -> Optional[str]:
    if index < len(action_args):
        return action_args[index]
    return None


def print_help() -> None:
    print(USAGE)


def print_error(message: str) -> None:
    sys.stderr.write(f'Error: {message}\n')


def _load_config(args: argparse.Namespace) -> hyprws_config.Config:
    config = hyprws_config.get_config_with_defaults(
        args.config, fail_if_missing=args.config is not None)
    config.update(cli_util.get_config_overrides(args))
    return config


def _create_controller(
        config: hyprws_config.Config) -> hyprws_controller.WorkspaceController:
    connection = hypr_ipc.Connection(config['socket_path'] or None,
                                     config['ipc_timeout'])
    return hyprws_controller.WorkspaceController(
        hypr_proxy.HyprProxy(connection, config['dry_run']))


def run_command(action: str, action_args: List[str],
                config: hyprws_config.Config) -> None:
    logger.debug('Using merged config:\n%s', pprint.pformat(config))
    controller = _create_controller(config)
    # Workspaces are taken by position, action_args[0] is the action flag.
    first = _get_workspace_arg(action_args, 1)
    second = _get_workspace_arg(action_args, 2)
    if action == 'swap':
        controller.swap_windows(first, second)
    elif action == 'dump':
        controller.dump_windows(first, second)
    elif action == 'kill':
        controller.kill_workspace(first)


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = _create_args_parser()
    try:
        # The action flags are not known to argparse, so they and their
        # workspaces are left over in order.
        args, action_args = parser.parse_known_args(argv)
        action = _get_action(action_args)
    except cli_util.ExitCalledError as e:
        # Only --version exits successfully, and argparse already printed it.
        if e.status == 0:
            sys.exit(0)
        print_error(e.message or 'Failed parsing arguments')
        print_help()
        return
    except errors.UnrecognizedArgumentError as e:
        print_error(str(e))
        print_help()
        return
    if action == 'help':
        print_help()
        return
    try:
        config = _load_config(args)
        init_logger('hyprws')
        log_util.set_level(config['log_level'])
        run_command(action, action_args, config)
    except errors.HyprwsError as e:
        logger.debug('Command failed', exc_info=True)
        sys.exit(f'Error: {e}')


if __name__ == '__main__':
    main()
