import re
from typing import List, Optional, Tuple

from hyprws import errors, hypr_proxy, logger

Client = hypr_proxy.Client

logger = logger.logger

InvalidWorkspaceIdError = errors.InvalidWorkspaceIdError

# Plain base-10 integers only, int() would also accept whitespace and digit
# separators.
_WORKSPACE_ID_RE = re.compile(r'[+-]?[0-9]+')
# Workspace IDs are 32 bit signed integers in Hyprland.
_MIN_WORKSPACE_ID = -2**31
_MAX_WORKSPACE_ID = 2**31 - 1


def _parse_workspace_id(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    if not _WORKSPACE_ID_RE.fullmatch(value):
        return None
    workspace_id = int(value)
    if not _MIN_WORKSPACE_ID <= workspace_id <= _MAX_WORKSPACE_ID:
        return None
    return workspace_id


def parse_workspace_ids(first: Optional[str],
                        second: Optional[str]) -> Tuple[int, int]:
    first_id = _parse_workspace_id(first)
    second_id = _parse_workspace_id(second)
    if first_id is None or second_id is None:
        raise InvalidWorkspaceIdError('Invalid workspace ID')
    return first_id, second_id


class WorkspaceController:

    def __init__(self, hypr_proxy_: hypr_proxy.HyprProxy):
        self.hypr_proxy = hypr_proxy_

    def filter_clients(self, workspace_id: int) -> List[Client]:
        """Returns the non-pinned clients on the workspace.

        The clients are queried from Hyprland on every call and returned in
        the order Hyprland reported them.
        """
        clients = [
            client for client in self.hypr_proxy.get_clients()
            if client.workspace_id == workspace_id and not client.pinned
        ]
        logger.debug('Workspace %d has %d non-pinned clients: %s',
                     workspace_id, len(clients),
                     [c.address for c in clients])
        return clients

    def _move_clients(self, clients: List[Client], target: int) -> None:
        for client in clients:
            logger.debug('Moving "%s" (%s) to workspace %d', client.title,
                         client.address, target)
            self.hypr_proxy.move_to_workspace_silent(target, client.address)

    def kill_workspace(self, target: Optional[str]) -> None:
        target_id, _ = parse_workspace_ids(target, target)
        for client in self.filter_clients(target_id):
            logger.debug('Closing "%s" (%s)', client.title, client.address)
            self.hypr_proxy.close_window(client.address)

    def dump_windows(self, start: Optional[str], end: Optional[str]) -> None:
        start_id, end_id = parse_workspace_ids(start, end)
        self._move_clients(self.filter_clients(start_id), end_id)

    def swap_windows(self, start: Optional[str], end: Optional[str]) -> None:
        start_id, end_id = parse_workspace_ids(start, end)
        # Both sides are resolved before any move so that the windows moved to
        # the end workspace aren't moved back.
        start_clients = self.filter_clients(start_id)
        end_clients = self.filter_clients(end_id)
        self._move_clients(start_clients, end_id)
        self._move_clients(end_clients, start_id)
