"""Network interfaces and their addresses read over SNMP."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass, field
from typing import Optional

from situation.oids import (
    OID_INTERFACES_IF_INDEX,
    OID_INTERFACES_IF_NAME,
    OID_INTERFACES_IF_PHYS_ADDRESS,
    OID_INTERFACES_IF_TYPE,
    OID_INTERFACES_NUMBER,
    OID_IP_ADDR_ENTRY_ADDR,
    OID_IP_ADDR_ENTRY_IF_INDEX,
    OID_IP_ADDR_ENTRY_NET_MASK,
    OID_IP_ADDRESS_IF_INDEX,
    OID_IP_ADDRESS_PREFIX_ORIGIN,
    IPAddress,
    SnmpClient,
    SnmpCollectionError,
    parse_integer,
    parse_ip_address,
    parse_ip_address_in_oid,
    parse_octet_string,
    remove_prefix,
    split_point,
)
from situation.routes import Route, iface_routes

NetworkTable = dict[int, list["SnmpNetwork"]]


@dataclass
class SnmpNetwork:
    """An address of an interface with its prefix length and prefix origin."""

    ip: Optional[IPAddress] = None
    prefix_length: Optional[int] = None
    prefix_origin: int = -1

    def contains(self, ip: IPAddress) -> bool:
        """Tell whether the address belongs to this network."""
        if self.ip is None or self.prefix_length is None:
            return False
        try:
            network = ipaddress.ip_network(f"{self.ip}/{self.prefix_length}", strict=False)
        except ValueError:
            return False
        return ip in network

    def __str__(self) -> str:
        return f"{self.ip}/{self.prefix_length}({self.prefix_origin})"


@dataclass
class SnmpInterface:
    """An interface of a remote machine.

    The interface type follows IANA ifType: 6 is ethernet, 24 is loopback.
    """

    index: int = 0
    name: str = ""
    mac: bytes = b""
    if_type: int = 0
    networks: list[SnmpNetwork] = field(default_factory=list)
    routes: list[Route] = field(default_factory=list)

    @property
    def mac_address(self) -> str:
        """The MAC address as colon separated hexadecimal bytes."""
        return ":".join(f"{byte:02x}" for byte in self.mac)

    def gateway(self) -> Optional[IPAddress]:
        """Return the next hop of the first remote IPv4 route, if any."""
        for route in self.routes:
            if not isinstance(route.destination, ipaddress.IPv4Address):
                continue
            if route.is_remote():
                return route.next_hop
        return None

    def first_addresses(self) -> tuple[Optional[SnmpNetwork], Optional[SnmpNetwork]]:
        """Return the first IPv4 and the first IPv6 networks of the interface."""
        first4: Optional[SnmpNetwork] = None
        first6: Optional[SnmpNetwork] = None
        for network in self.networks:
            if isinstance(network.ip, ipaddress.IPv4Address):
                if first4 is None:
                    first4 = network
            elif first6 is None:
                first6 = network
        return first4, first6


def _mask_to_prefix(mask: Optional[ipaddress.IPv4Address]) -> Optional[int]:
    if mask is None:
        return None
    try:
        return ipaddress.IPv4Network(f"0.0.0.0/{mask}").prefixlen
    except ValueError:
        return None


def _result(out, errs: list):
    if errs:
        raise SnmpCollectionError(errs, partial=out)
    return out


def ip_address_prefix(client: SnmpClient) -> NetworkTable:
    """Read ipAddressPrefixTable, then set the addresses from ipAddressTable."""
    errs: list = []
    out: NetworkTable = {}

    oid = OID_IP_ADDRESS_PREFIX_ORIGIN
    for pdu in client.bulk_walk_all(oid):
        try:
            origin = parse_integer(pdu)
        except TypeError as exc:
            errs.append(exc)
            continue
        remain = remove_prefix(pdu.name, oid)
        raw_index, remain = split_point(remain, 1)
        try:
            if_index = int(raw_index)
        except ValueError as exc:
            errs.append(exc)
            continue
        ip, remain = parse_ip_address_in_oid(remain)
        if ip is None:
            errs.append(ValueError(f"cannot parse IP in oid: {remain}"))
            continue
        try:
            prefix_length = int(remain)
        except ValueError as exc:
            errs.append(exc)
            continue
        if not 0 <= prefix_length <= ip.max_prefixlen:
            errs.append(ValueError(f"bad prefix length {prefix_length} for {ip}"))
            continue
        out.setdefault(if_index, []).append(SnmpNetwork(ip, prefix_length, origin))

    oid = OID_IP_ADDRESS_IF_INDEX
    for pdu in client.bulk_walk_all(oid):
        try:
            index = parse_integer(pdu)
        except TypeError as exc:
            errs.append(exc)
            continue
        if index not in out:
            errs.append(LookupError(f"no interface found with index {index}"))
            continue
        ip, _ = parse_ip_address_in_oid(remove_prefix(pdu.name, oid))
        # address types other than IPv4/IPv6 (such as ipv6z) are skipped
        if ip is None:
            continue
        for network in out[index]:
            if network.contains(ip):
                network.ip = ip

    return _result(out, errs)


def ip_addr(client: SnmpClient) -> NetworkTable:
    """Read the legacy ipAddrTable, mapping interface index to networks."""
    errs: list = []
    out: NetworkTable = {}
    mapper: dict[str, SnmpNetwork] = {}

    oid = OID_IP_ADDR_ENTRY_ADDR
    for pdu in client.bulk_walk_all(oid):
        key = remove_prefix(pdu.name, oid)
        try:
            ip = parse_ip_address(pdu)
        except (TypeError, ValueError) as exc:
            errs.append(exc)
            continue
        mapper[key] = SnmpNetwork(ip=ip)

    oid = OID_IP_ADDR_ENTRY_NET_MASK
    for pdu in client.bulk_walk_all(oid):
        key = remove_prefix(pdu.name, oid)
        try:
            mask = parse_ip_address(pdu)
        except (TypeError, ValueError) as exc:
            errs.append(exc)
            continue
        network = mapper.get(key)
        if network is None:
            errs.append(KeyError(f"no address for key {key}"))
            continue
        network.prefix_length = _mask_to_prefix(mask)

    oid = OID_IP_ADDR_ENTRY_IF_INDEX
    for pdu in client.bulk_walk_all(oid):
        key = remove_prefix(pdu.name, oid)
        try:
            if_index = parse_integer(pdu)
        except TypeError as exc:
            errs.append(exc)
            continue
        network = mapper.get(key)
        if network is None:
            errs.append(KeyError(f"no address for key {key}"))
            continue
        out.setdefault(if_index, []).append(network)

    return _result(out, errs)


def iface_networks(client: SnmpClient) -> NetworkTable:
    """Return networks by interface index, trying ipAddrTable then ipAddressPrefixTable."""
    errs: list = []
    for reader, label in ((ip_addr, "ipAddr"), (ip_address_prefix, "ipAddressPrefix")):
        try:
            networks = reader(client)
        except Exception as exc:
            errs.append(exc)
            continue
        if networks:
            return networks
        errs.append(LookupError(f"no IP found through {label} interface"))
    raise SnmpCollectionError(errs)


def interface_count(client: SnmpClient) -> int:
    """Return the number of interfaces announced by the agent."""
    pdus = client.get([OID_INTERFACES_NUMBER])
    if not pdus:
        return 0
    return parse_integer(pdus[0])


def get_interface(client: SnmpClient, index: int) -> SnmpInterface:
    """Read index, name, MAC and type of one interface."""
    pdus = client.get(
        [
            f"{OID_INTERFACES_IF_INDEX}.{index}",
            f"{OID_INTERFACES_IF_NAME}.{index}",
            f"{OID_INTERFACES_IF_PHYS_ADDRESS}.{index}",
            f"{OID_INTERFACES_IF_TYPE}.{index}",
        ]
    )
    if len(pdus) < 4:
        raise ValueError(f"bad number of pdu: {pdus}")

    iface = SnmpInterface()
    try:
        iface.index = parse_integer(pdus[0])
    except TypeError:
        pass
    try:
        iface.name = parse_octet_string(pdus[1]).decode("utf-8", errors="replace")
    except TypeError:
        pass
    try:
        iface.mac = parse_octet_string(pdus[2])
    except TypeError:
        pass
    try:
        iface.if_type = parse_integer(pdus[3])
    except TypeError:
        pass
    return iface


def get_all_interfaces(client: SnmpClient) -> list[SnmpInterface]:
    """Read every interface with its networks and routes.

    Failures on some parts raise SnmpCollectionError carrying the
    interfaces that could be read as its partial result.
    """
    errs: list = []
    count = interface_count(client)

    ifaces: list[SnmpInterface] = []
    for index in range(1, count + 1):
        try:
            ifaces.append(get_interface(client, index))
        except Exception as exc:
            errs.append(exc)

    try:
        networks = iface_networks(client)
    except Exception as exc:
        errs.append(exc)
    else:
        for iface in ifaces:
            if iface.index in networks:
                iface.networks = networks[iface.index]

    try:
        routes = iface_routes(client)
    except Exception as exc:
        errs.append(exc)
    else:
        for iface in ifaces:
            iface.routes.extend(routes.get(iface.index, []))

    return _result(ifaces, errs)