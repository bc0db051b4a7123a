from __future__ import annotations

import json
import os
import socket
import threading
import unittest.mock

import pytest

from hyprws import errors, hypr_ipc


def _serve_once(path: str, reply: bytes):
    server = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
    server.bind(path)
    server.listen(1)
    received = []

    def run():
        connection, _ = server.accept()
        with connection:
            received.append(connection.recv(4096))
            connection.sendall(reply)
        server.close()

    thread = threading.Thread(target=run, daemon=True)
    thread.start()
    return thread, received


@pytest.fixture(name='socket_path')
def fixture_socket_path(tmp_path):
    return str(tmp_path / 'hypr.sock')


def test_get_socket_path_runtime_dir(tmp_path):
    socket_dir = tmp_path / 'hypr' / 'abc123'
    socket_dir.mkdir(parents=True)
    (socket_dir / '.socket.sock').touch()
    environ = {
        'HYPRLAND_INSTANCE_SIGNATURE': 'abc123',
        'XDG_RUNTIME_DIR': str(tmp_path),
    }
    assert hypr_ipc.get_socket_path(environ) == str(socket_dir /
                                                    '.socket.sock')


def test_get_socket_path_defaults_to_runtime_dir(tmp_path):
    environ = {
        'HYPRLAND_INSTANCE_SIGNATURE': 'no-such-instance',
        'XDG_RUNTIME_DIR': str(tmp_path),
    }
    assert hypr_ipc.get_socket_path(environ) == os.path.join(
        str(tmp_path), 'hypr', 'no-such-instance', '.socket.sock')


def test_get_socket_path_legacy_location():
    environ = {'HYPRLAND_INSTANCE_SIGNATURE': 'no-such-instance'}
    assert hypr_ipc.get_socket_path(environ) == (
        '/tmp/hypr/no-such-instance/.socket.sock')


def test_get_socket_path_without_hyprland():
    with pytest.raises(errors.CompositorConnectionError,
                       match='Hyprland is not running'):
        hypr_ipc.get_socket_path({'XDG_RUNTIME_DIR': '/run/user/1000'})


def test_connection_does_not_resolve_path_eagerly():
    with unittest.mock.patch.dict(os.environ, clear=True):
        connection = hypr_ipc.Connection()
        with pytest.raises(errors.CompositorConnectionError):
            connection.request('j/clients')


def test_request(socket_path):
    thread, received = _serve_once(socket_path, b'ok')
    reply = hypr_ipc.Connection(socket_path, timeout=5).request(
        'dispatch closewindow address:0xa')
    thread.join(5)
    assert reply == 'ok'
    assert received == [b'dispatch closewindow address:0xa']


def test_request_reads_long_reply(socket_path):
    clients = [{
        'address': f'0x{i:x}',
        'workspace': {
            'id': i % 10
        },
        'pinned': False,
        'title': 'x' * 100,
    } for i in range(200)]
    thread, _ = _serve_once(socket_path, json.dumps(clients).encode('utf-8'))
    assert hypr_ipc.Connection(socket_path, timeout=5).get_clients() == clients
    thread.join(5)


def test_request_no_compositor(socket_path):
    with pytest.raises(errors.CompositorConnectionError, match=socket_path):
        hypr_ipc.Connection(socket_path).request('j/clients')


@pytest.mark.parametrize('reply', ['not json', '{"address": "0xa"}', ''])
def test_get_clients_malformed_reply(reply):
    connection = hypr_ipc.Connection('/nonexistent.sock')
    with unittest.mock.patch.object(connection, 'request',
                                    return_value=reply):
        with pytest.raises(errors.CompositorQueryError):
            connection.get_clients()


def test_dispatch():
    connection = hypr_ipc.Connection('/nonexistent.sock')
    with unittest.mock.patch.object(connection, 'request',
                                    return_value='ok') as request:
        assert connection.dispatch('movetoworkspacesilent',
                                   '9,address:0xa') == 'ok'
    request.assert_called_once_with(
        'dispatch movetoworkspacesilent 9,address:0xa')
