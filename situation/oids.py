"""SNMP object identifiers, values and the parsing of OID suffixes."""

from __future__ import annotations

import abc
import ipaddress
from dataclasses import dataclass
from typing import Iterable, Optional, Sequence, Union

IPAddress = Union[ipaddress.IPv4Address, ipaddress.IPv6Address]

OID_BASE = "1.3.6.1"
OID_MGMT = OID_BASE + ".2"
OID_MIB2 = OID_MGMT + ".1"
OID_SYSTEM = OID_MIB2 + ".1"
OID_INTERFACES = OID_MIB2 + ".2"
OID_IP = OID_MIB2 + ".4"
OID_TCP = OID_MIB2 + ".6"

OID_INTERFACES_NUMBER = OID_INTERFACES + ".1.0"
OID_INTERFACES_IF_TABLE = OID_INTERFACES + ".2.1"
OID_INTERFACES_IF_INDEX = OID_INTERFACES_IF_TABLE + ".1"
OID_INTERFACES_IF_TYPE = OID_INTERFACES_IF_TABLE + ".3"
OID_INTERFACES_IF_PHYS_ADDRESS = OID_INTERFACES_IF_TABLE + ".6"
OID_INTERFACES_IF_NAME = OID_MIB2 + ".31.1.1.1.1"

OID_IP_ADDR_ENTRY = OID_IP + ".20.1"
OID_IP_ADDR_ENTRY_ADDR = OID_IP_ADDR_ENTRY + ".1"
OID_IP_ADDR_ENTRY_IF_INDEX = OID_IP_ADDR_ENTRY + ".2"
OID_IP_ADDR_ENTRY_NET_MASK = OID_IP_ADDR_ENTRY + ".3"

OID_IP_ADDRESS_ENTRY = OID_IP + ".34.1"
OID_IP_ADDRESS_IF_INDEX = OID_IP_ADDRESS_ENTRY + ".3"

OID_IP_ADDRESS_PREFIX_ENTRY = OID_IP + ".32.1"
OID_IP_ADDRESS_PREFIX_ORIGIN = OID_IP_ADDRESS_PREFIX_ENTRY + ".5"

OID_IP_FORWARD_ENTRY = OID_IP + ".24.2.1"
OID_IP_FORWARD_DEST = OID_IP_FORWARD_ENTRY + ".1"
OID_IP_FORWARD_MASK = OID_IP_FORWARD_ENTRY + ".2"
OID_IP_FORWARD_NEXT_HOP = OID_IP_FORWARD_ENTRY + ".4"
OID_IP_FORWARD_IF_INDEX = OID_IP_FORWARD_ENTRY + ".5"
OID_IP_FORWARD_TYPE = OID_IP_FORWARD_ENTRY + ".6"
OID_IP_FORWARD_PROTO = OID_IP_FORWARD_ENTRY + ".7"

OID_INET_CIDR_ROUTE_ENTRY = OID_IP + ".24.7.1"
OID_INET_CIDR_ROUTE_IF_INDEX = OID_INET_CIDR_ROUTE_ENTRY + ".7"
OID_INET_CIDR_ROUTE_TYPE = OID_INET_CIDR_ROUTE_ENTRY + ".8"

# Canonical decimal sub-identifiers that fit in a byte (0..254).
_OID_TO_UINT8 = {str(value): value for value in range(255)}


def oid_byte(text: str) -> int:
    """Return the byte value of a canonical sub-identifier, 0 when unknown."""
    return _OID_TO_UINT8.get(text, 0)


@dataclass
class Pdu:
    """A variable binding returned by an SNMP agent."""

    name: str
    value: object = None
    asn1_type: object = None


class SnmpClient(abc.ABC):
    """The queries an SNMP session must answer."""

    @abc.abstractmethod
    def get(self, oids: Sequence[str]) -> list[Pdu]:
        """Return the variables bound to the given OIDs."""

    @abc.abstractmethod
    def bulk_walk_all(self, oid: str) -> list[Pdu]:
        """Return every variable below the given OID."""


class SnmpCollectionError(Exception):
    """Several errors met while collecting data; may carry a partial result."""

    def __init__(self, errors: Iterable[BaseException | str], partial: object = None):
        self.errors = list(errors)
        self.partial = partial
        super().__init__("\n".join(str(error) for error in self.errors))


def remove_prefix(full_oid: str, prefix_oid: str) -> str:
    """Strip a parent OID (and the following dot) from a full OID."""
    if full_oid.startswith(".") and not prefix_oid.startswith("."):
        prefix_oid = "." + prefix_oid
    if not prefix_oid.endswith("."):
        prefix_oid += "."
    return full_oid.replace(prefix_oid, "")


def split_point(oid: str, count: int) -> tuple[str, str]:
    """Split an OID after its first `count` components.

    When count is not positive or the OID has fewer dots, the whole OID
    comes back as head with an empty tail.
    """
    if count <= 0:
        return oid, ""
    parts = oid.split(".", count)
    if len(parts) <= count:
        return oid, ""
    return ".".join(parts[:count]), parts[count]


def parse_ip_address_in_oid(oid: str) -> tuple[Optional[IPAddress], str]:
    """Decode an InetAddress (type.length.bytes) at the head of an OID.

    Returns the address and the rest of the OID; the address is None for
    unsupported address types, and the OID is then returned untouched.
    """
    kind, key = split_point(oid, 2)
    if kind == "1.4":
        raw, remain = split_point(key, 4)
        try:
            return ipaddress.IPv4Address(raw), remain
        except ValueError:
            return None, remain
    if kind in ("2.16", "4.16"):
        raw, remain = split_point(key, 16)
        buffer = bytearray(16)
        rest = raw
        for position in range(8):
            pair, rest = split_point(rest, 2)
            chunks = pair.split(".")
            if len(chunks) == 2:
                buffer[2 * position] = oid_byte(chunks[0])
                buffer[2 * position + 1] = oid_byte(chunks[1])
        return ipaddress.IPv6Address(bytes(buffer)), remain
    return None, oid


def _cast_error(pdu: Pdu, target: str) -> TypeError:
    return TypeError(
        f"cannot cast {pdu.value!r} into {target} "
        f"(Python type: {type(pdu.value).__name__}, Object type: {pdu.asn1_type})"
    )


def parse_integer(pdu: Pdu) -> int:
    """Return the integer value of a variable."""
    value = pdu.value
    if isinstance(value, bool) or not isinstance(value, int):
        raise _cast_error(pdu, "int")
    return value


def parse_octet_string(pdu: Pdu) -> bytes:
    """Return the octet string value of a variable."""
    if not isinstance(pdu.value, (bytes, bytearray)):
        raise _cast_error(pdu, "bytes")
    return bytes(pdu.value)


def parse_ip_address(pdu: Pdu) -> Optional[ipaddress.IPv4Address]:
    """Return the IPv4 address held as text by a variable.

    IPv4-mapped IPv6 text gives its IPv4 address; other IPv6 gives None.
    """
    value = pdu.value
    if not isinstance(value, str):
        raise _cast_error(pdu, "str")
    try:
        address = ipaddress.ip_address(value)
    except ValueError as exc:
        raise ValueError(f"cannot turn {value!r} into an IP address") from exc
    if isinstance(address, ipaddress.IPv6Address):
        return address.ipv4_mapped
    return address