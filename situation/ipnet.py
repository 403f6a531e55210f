"""Helpers for IP addresses and networks."""

from __future__ import annotations

import ipaddress
from typing import Iterator, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]
IPNetwork = Union[ipaddress.IPv4Network, ipaddress.IPv6Network]
NetworkLike = Union[
    str,
    ipaddress.IPv4Network,
    ipaddress.IPv6Network,
    ipaddress.IPv4Interface,
    ipaddress.IPv6Interface,
]


def _as_network(network: NetworkLike) -> IPNetwork:
    if isinstance(network, (ipaddress.IPv4Interface, ipaddress.IPv6Interface)):
        return network.network
    return ipaddress.ip_network(str(network), strict=False)


def iterate(network: NetworkLike) -> Iterator[IPAddress]:
    """Yield every address of the network, network and broadcast addresses included.

    Host bits set in the given address are ignored.
    """
    yield from _as_network(network)


def is_reserved(ip: str | IPAddress | None) -> bool:
    """Tell whether an IPv4 address ends with 0 or 255.

    IPv6 addresses (other than IPv4-mapped ones) and None are never reserved.
    """
    if ip is None:
        return False
    address = ipaddress.ip_address(ip) if isinstance(ip, str) else ip
    if isinstance(address, ipaddress.IPv6Address):
        mapped = address.ipv4_mapped
        if mapped is None:
            return False
        address = mapped
    last = address.packed[-1]
    return last in (0, 255)


def enforce_mask(network: NetworkLike) -> IPNetwork:
    """Return the strict network: host bits of the address are cleared."""
    return _as_network(network)