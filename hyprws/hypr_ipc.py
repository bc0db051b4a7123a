from __future__ import annotations

import json
import os
import socket
from typing import Any, List, Optional

from hyprws import errors, logger

logger = logger.logger

_SOCKET_NAME = '.socket.sock'
_RECV_SIZE = 8192
# Hyprland acknowledges a successful dispatch with this exact reply.
DISPATCH_OK_REPLY = 'ok'

CompositorConnectionError = errors.CompositorConnectionError
CompositorQueryError = errors.CompositorQueryError


def get_socket_path(environ=None) -> str:
    """Returns the path of the Hyprland request socket.

    Hyprland >= 0.40 keeps its sockets under $XDG_RUNTIME_DIR/hypr, older
    releases under /tmp/hypr. The first existing one is used, and if neither
    exists the modern path is returned so the connection error names it.
    """
    if environ is None:
        environ = os.environ
    signature = environ.get('HYPRLAND_INSTANCE_SIGNATURE')
    if not signature:
        raise CompositorConnectionError(
            'Hyprland is not running: HYPRLAND_INSTANCE_SIGNATURE is not set')
    candidates = []
    runtime_dir = environ.get('XDG_RUNTIME_DIR')
    if runtime_dir:
        candidates.append(
            os.path.join(runtime_dir, 'hypr', signature, _SOCKET_NAME))
    candidates.append(os.path.join('/tmp', 'hypr', signature, _SOCKET_NAME))
    for path in candidates:
        if os.path.exists(path):
            return path
    return candidates[0]


class Connection:
    """Blocking client for the Hyprland request socket.

    Hyprland closes the request socket after every reply, so each request uses
    a new connection.
    """

    def __init__(self,
                 socket_path: Optional[str] = None,
                 timeout: Optional[float] = None):
        self._socket_path = socket_path
        self.timeout = timeout or None

    @property
    def socket_path(self) -> str:
        # Resolved lazily, constructing a Connection never fails.
        if not self._socket_path:
            self._socket_path = get_socket_path()
        return self._socket_path

    def request(self, command: str) -> str:
        logger.debug('Sending request to %s: %s', self.socket_path, command)
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.settimeout(self.timeout)
            sock.connect(self.socket_path)
            sock.sendall(command.encode('utf-8'))
            chunks = []
            while True:
                chunk = sock.recv(_RECV_SIZE)
                if not chunk:
                    break
                chunks.append(chunk)
        except OSError as e:
            raise CompositorConnectionError(
                f'Failed communicating with Hyprland at {self.socket_path}: '
                f'{e}') from e
        finally:
            sock.close()
        try:
            return b''.join(chunks).decode('utf-8')
        except UnicodeError as e:
            raise CompositorConnectionError(
                f'Failed decoding reply from Hyprland: {e}') from e

    def get_clients(self) -> List[Any]:
        reply = self.request('j/clients')
        try:
            clients = json.loads(reply)
        except json.JSONDecodeError as e:
            raise CompositorQueryError(
                f'Failed parsing clients reply: {reply!r}') from e
        if not isinstance(clients, list):
            raise CompositorQueryError(
                f'Unexpected clients reply: {reply!r}')
        return clients

    def dispatch(self, dispatcher: str, args: str) -> str:
        return self.request(f'dispatch {dispatcher} {args}')
