import ipaddress
import socket

import pytest

from situation.scan import DEFAULT_TIMEOUT, scan, scan_port


@pytest.fixture
def listener():
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.bind(("127.0.0.1", 0))
    server.listen(16)
    try:
        yield server.getsockname()[1]
    finally:
        server.close()


@pytest.fixture
def closed_port():
    probe = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    probe.bind(("127.0.0.1", 0))
    port = probe.getsockname()[1]
    probe.close()
    return port


def test_scan_port_open(listener):
    assert scan_port("127.0.0.1", listener, 1.0) is True


def test_scan_port_accepts_ip_object(listener):
    assert scan_port(ipaddress.ip_address("127.0.0.1"), listener, 1.0) is True


def test_scan_port_closed(closed_port):
    assert scan_port("127.0.0.1", closed_port, 1.0) is False


def test_scan_returns_only_open_ports(listener, closed_port):
    assert scan("127.0.0.1", [closed_port, listener], 1.0) == [listener]


def test_scan_keeps_order_of_open_ports():
    servers = []
    try:
        for _ in range(3):
            server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
            server.bind(("127.0.0.1", 0))
            server.listen(4)
            servers.append(server)
        ports = [server.getsockname()[1] for server in servers]
        wanted = list(reversed(ports))
        assert scan("127.0.0.1", wanted, 1.0) == wanted
    finally:
        for server in servers:
            server.close()


def test_scan_no_ports():
    assert scan("127.0.0.1", [], DEFAULT_TIMEOUT) == []