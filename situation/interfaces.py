"""Local network interfaces of the host."""

from __future__ import annotations

import ipaddress
import socket
from dataclasses import dataclass, field
from typing import Iterable, Optional, Union

import psutil

IPInterface = Union[ipaddress.IPv4Interface, ipaddress.IPv6Interface]


@dataclass
class InterfaceInfo:
    """A network interface with its MAC, state and addresses."""

    name: str
    mac: str = ""
    is_up: bool = False
    addresses: list[IPInterface] = field(default_factory=list)

    @property
    def ipv4(self) -> Optional[ipaddress.IPv4Interface]:
        """The first IPv4 address of the interface, if any."""
        return next(
            (a for a in self.addresses if isinstance(a, ipaddress.IPv4Interface)), None
        )

    @property
    def ipv6(self) -> Optional[ipaddress.IPv6Interface]:
        """The first IPv6 address of the interface, if any."""
        return next(
            (a for a in self.addresses if isinstance(a, ipaddress.IPv6Interface)), None
        )


def filter_interfaces(interfaces: Iterable[InterfaceInfo]) -> list[InterfaceInfo]:
    """Keep the interfaces that are up, leaving out veth and qemu ones."""
    return [
        iface
        for iface in interfaces
        if iface.is_up
        and not iface.name.startswith("veth")
        and "qemu" not in iface.name
    ]


def _prefix_length(netmask: str) -> Optional[int]:
    try:
        mask = ipaddress.ip_address(netmask)
    except ValueError:
        return None
    bits = int(mask)
    length = bin(bits).count("1")
    # only contiguous masks are valid
    if bits != ((1 << mask.max_prefixlen) - 1) ^ ((1 << (mask.max_prefixlen - length)) - 1):
        return None
    return length


def _parse_address(address: str, netmask: Optional[str]) -> Optional[IPInterface]:
    if netmask is None:
        return None
    host = address.split("%", 1)[0]
    prefix = _prefix_length(netmask.split("%", 1)[0])
    if prefix is None:
        return None
    try:
        return ipaddress.ip_interface(f"{host}/{prefix}")
    except ValueError:
        return None


def get_interfaces() -> list[InterfaceInfo]:
    """Return the relevant local interfaces (see filter_interfaces)."""
    stats = psutil.net_if_stats()
    link_family = getattr(psutil, "AF_LINK", None)
    interfaces = []
    for name, addrs in psutil.net_if_addrs().items():
        stat = stats.get(name)
        iface = InterfaceInfo(name=name, is_up=bool(stat and stat.isup))
        for addr in addrs:
            if link_family is not None and addr.family == link_family:
                if not iface.mac:
                    iface.mac = addr.address.replace("-", ":").lower()
            elif addr.family in (socket.AF_INET, socket.AF_INET6):
                parsed = _parse_address(addr.address, addr.netmask)
                if parsed is not None:
                    iface.addresses.append(parsed)
        interfaces.append(iface)
    return filter_interfaces(interfaces)