from __future__ import annotations

import dataclasses
from typing import Any, Dict, List

from hyprws import errors, hypr_ipc, logger

logger = logger.logger


@dataclasses.dataclass
class Client:
    address: str
    workspace_id: int
    pinned: bool = False
    title: str = ''
    class_name: str = ''

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> Client:
        try:
            return cls(address=data['address'],
                       workspace_id=int(data['workspace']['id']),
                       pinned=bool(data.get('pinned', False)),
                       title=data.get('title', ''),
                       class_name=data.get('class', ''))
        except (KeyError, TypeError, ValueError) as e:
            raise errors.CompositorQueryError(
                f'Malformed client in Hyprland reply: {data!r}') from e


class HyprProxy:

    def __init__(self,
                 hypr_connection: hypr_ipc.Connection,
                 dry_run: bool = True):
        self.hypr_connection = hypr_connection
        self.dry_run = dry_run

    def get_clients(self) -> List[Client]:
        # Never cached: every caller needs the compositor state at call time.
        try:
            raw_clients = self.hypr_connection.get_clients()
        except errors.CompositorQueryError:
            raise
        except errors.CompositorError as e:
            raise errors.CompositorQueryError(
                f'Failed querying Hyprland clients: {e}') from e
        clients = [Client.from_json(c) for c in raw_clients]
        logger.debug('Got %d clients from Hyprland', len(clients))
        return clients

    def send_hypr_command(self, dispatcher: str, args: str) -> None:
        command = f'{dispatcher} {args}'
        if self.dry_run:
            log_prefix = '[dry-run] would send'
        else:
            log_prefix = 'Sending'
        logger.info("%s hyprland command: '%s'", log_prefix, command)
        if self.dry_run:
            return
        try:
            reply = self.hypr_connection.dispatch(dispatcher, args)
        except errors.CompositorError as e:
            raise errors.CompositorDispatchError(
                f"Failed sending '{command}': {e}") from e
        reply = reply.strip()
        if reply != hypr_ipc.DISPATCH_OK_REPLY:
            raise errors.CompositorDispatchError(
                f"Hyprland rejected '{command}': {reply or 'empty reply'}")

    def close_window(self, address: str) -> None:
        self.send_hypr_command('closewindow', f'address:{address}')

    def move_to_workspace_silent(self, workspace_id: int,
                                 address: str) -> None:
        self.send_hypr_command('movetoworkspacesilent',
                               f'{workspace_id},address:{address}')
