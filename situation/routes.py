"""Routing tables read over SNMP."""

from __future__ import annotations

import ipaddress
from dataclasses import dataclass
from typing import Optional

from situation.oids import (
    OID_INET_CIDR_ROUTE_IF_INDEX,
    OID_INET_CIDR_ROUTE_TYPE,
    OID_IP_FORWARD_DEST,
    OID_IP_FORWARD_IF_INDEX,
    OID_IP_FORWARD_MASK,
    OID_IP_FORWARD_NEXT_HOP,
    OID_IP_FORWARD_PROTO,
    OID_IP_FORWARD_TYPE,
    IPAddress,
    SnmpClient,
    SnmpCollectionError,
    oid_byte,
    parse_integer,
    parse_ip_address,
    parse_ip_address_in_oid,
    remove_prefix,
    split_point,
)

REMOTE_ROUTE = 4


@dataclass
class Route:
    """A route: destination network, next hop, route type and protocol.

    Route types: 1 other, 2 invalid, 3 local, 4 remote.
    """

    destination: Optional[IPAddress] = None
    prefix_length: Optional[int] = None
    next_hop: Optional[IPAddress] = None
    route_type: int = -1
    proto: int = -1

    def is_remote(self) -> bool:
        """Tell whether the next hop is not the final destination."""
        return self.route_type == REMOTE_ROUTE

    def __str__(self) -> str:
        marker = "*" if self.is_remote() else ""
        return f"{marker}{self.destination}/{self.prefix_length} ({self.next_hop})"


RouteTable = dict[int, list[Route]]


def _mask_to_prefix(mask: Optional[ipaddress.IPv4Address]) -> Optional[int]:
    if mask is None:
        return None
    try:
        return ipaddress.IPv4Network(f"0.0.0.0/{mask}").prefixlen
    except ValueError:
        return None


def _finish(
    routes_map: dict[str, Route], keymap: dict[str, int], out: RouteTable, errs: list
) -> RouteTable:
    for key, route in routes_map.items():
        out.setdefault(keymap.get(key, 0), []).append(route)
    if errs:
        raise SnmpCollectionError(errs, partial=out)
    return out


def ip_forward_table(client: SnmpClient) -> RouteTable:
    """Read the legacy ipForwardTable, mapping interface index to routes."""
    errs: list = []
    keymap: dict[str, int] = {}
    routes_map: dict[str, Route] = {}

    def walk(oid: str, handle) -> None:
        try:
            results = client.bulk_walk_all(oid)
        except Exception as exc:
            errs.append(exc)
            return
        for pdu in results:
            key = remove_prefix(pdu.name, oid)
            try:
                handle(key, pdu)
            except (TypeError, ValueError, KeyError) as exc:
                errs.append(exc)

    def route_for(key: str) -> Route:
        try:
            return routes_map[key]
        except KeyError:
            raise KeyError(f"no route destination for key {key}") from None

    def set_index(key, pdu):
        keymap[key] = parse_integer(pdu)

    def set_destination(key, pdu):
        routes_map[key] = Route(destination=parse_ip_address(pdu))

    def set_mask(key, pdu):
        mask = parse_ip_address(pdu)
        route_for(key).prefix_length = _mask_to_prefix(mask)

    def set_next_hop(key, pdu):
        hop = parse_ip_address(pdu)
        route_for(key).next_hop = hop

    def set_type(key, pdu):
        value = parse_integer(pdu)
        route_for(key).route_type = value

    def set_proto(key, pdu):
        value = parse_integer(pdu)
        route_for(key).proto = value

    walk(OID_IP_FORWARD_IF_INDEX, set_index)
    walk(OID_IP_FORWARD_DEST, set_destination)
    walk(OID_IP_FORWARD_MASK, set_mask)
    walk(OID_IP_FORWARD_NEXT_HOP, set_next_hop)
    walk(OID_IP_FORWARD_TYPE, set_type)
    walk(OID_IP_FORWARD_PROTO, set_proto)

    return _finish(routes_map, keymap, {}, errs)


def inet_cidr_table(client: SnmpClient) -> RouteTable:
    """Read the inetCidrRouteTable, mapping interface index to routes.

    The table index holds destination, prefix length, policy and next hop.
    An error while walking the interface indexes is raised as is.
    """
    errs: list = []
    keymap: dict[str, int] = {}
    out: RouteTable = {}
    routes_map: dict[str, Route] = {}

    oid = OID_INET_CIDR_ROUTE_IF_INDEX
    for pdu in client.bulk_walk_all(oid):
        initial_key = remove_prefix(pdu.name, oid)
        try:
            index = parse_integer(pdu)
        except TypeError as exc:
            errs.append(exc)
            continue
        keymap[initial_key] = index
        out.setdefault(index, [])

        ip, key = parse_ip_address_in_oid(initial_key)
        if ip is None:
            errs.append(ValueError(f"cannot parse ip for key: {key}"))
            continue
        route = Route(destination=ip)
        routes_map[initial_key] = route

        bits = 32 if isinstance(ip, ipaddress.IPv4Address) else 128
        prefix_raw, key = split_point(key, 1)
        prefix_length = oid_byte(prefix_raw)
        route.prefix_length = prefix_length if prefix_length <= bits else None

        policy_size_raw, key = split_point(key, 1)
        _, key = split_point(key, oid_byte(policy_size_raw))

        hop, key = parse_ip_address_in_oid(key)
        if hop is None:
            errs.append(ValueError(f"cannot parse ip for key: {key}"))
            continue
        route.next_hop = hop

    oid = OID_INET_CIDR_ROUTE_TYPE
    try:
        results = client.bulk_walk_all(oid)
    except Exception as exc:
        errs.append(exc)
        results = []
    for pdu in results:
        initial_key = remove_prefix(pdu.name, oid)
        try:
            value = parse_integer(pdu)
        except TypeError as exc:
            errs.append(exc)
            continue
        route = routes_map.get(initial_key)
        if route is None:
            errs.append(KeyError(f"no route for key {initial_key}"))
            continue
        route.route_type = value

    return _finish(routes_map, keymap, out, errs)


def iface_routes(client: SnmpClient) -> RouteTable:
    """Return routes by interface index, trying inetCidrTable then ipForwardTable."""
    errs: list = []
    for reader, label in ((inet_cidr_table, "inetCidrTable"), (ip_forward_table, "ipForward")):
        try:
            routes = reader(client)
        except Exception as exc:
            errs.append(exc)
            continue
        if routes:
            return routes
        errs.append(LookupError(f"no route found through {label} interface"))
    raise SnmpCollectionError(errs)