# situation

Building blocks for a discovery agent that maps what runs on a host and
in its neighbourhood: local network interfaces, open TCP ports, socket
states, interfaces and routes exposed by SNMP agents, and a scheduler
that runs collection modules in dependency order.

## Installation

```sh
pip install .
```

To run the test suite:

```sh
pip install ".[test]"
pytest
```

## Modules

- `situation.ipnet`
  - `iterate(network)` yields every address of a network, network and
    broadcast addresses included; host bits of the given address are ignored.
  - `is_reserved(ip)` tells whether an IPv4 address ends with 0 or 255
    (IPv6 addresses and `None` are never reserved).
  - `enforce_mask(network)` returns the network with host bits cleared.
- `situation.files`
  - `file_exists(path)`.
  - `keep_leaves(files)` keeps only the most precise paths of a list,
    in reverse sorted order.
  - `get_lines(file, *callbacks)` reads the lines of a file, applying each
    callback in turn to every line.
- `situation.rand`
  - `rand_bytes(size)`, `rand_uint16(maximum)` (a value in `[0, maximum)`)
    and `random_tcp_port(a, b)` (a port between the two bounds, upper bound
    excluded). `fallback_random_bytes(size)` is used when the system random
    source is unavailable.
- `situation.cmdline`
  - `get_cmd(pid)` returns the command line of a running process; on Linux
    the first item is the resolved path of the executable. It raises
    `ValueError` for a non-positive PID and `ProcessLookupError` when the
    process cannot be found.
  - `split_command_line(buffer)` splits on spaces, honouring double quotes.
- `situation.oids`
  - OID constants, `remove_prefix`, `split_point` and
    `parse_ip_address_in_oid` (decodes an address encoded in an OID suffix).
  - `Pdu`, the abstract `SnmpClient` (`get`, `bulk_walk_all`),
    `SnmpCollectionError` (carries the errors and a `partial` result), and
    the value parsers `parse_integer`, `parse_octet_string`,
    `parse_ip_address`.
- `situation.routes`
  - `Route` and the readers `inet_cidr_table`, `ip_forward_table` and
    `iface_routes` (tries the first, then the second), each returning a
    mapping of interface index to routes.
- `situation.networks`
  - `SnmpNetwork`, `SnmpInterface` (with `gateway()`, `first_addresses()`
    and `mac_address`), and the readers `ip_addr`, `ip_address_prefix`,
    `iface_networks`, `interface_count`, `get_interface` and
    `get_all_interfaces`.
- `situation.scheduler`
  - `Module` (subclass it, set `name` and `dependencies`, implement `run`),
    `Scheduler`, `ModuleRegistry`, `ModuleError` and `SchedulingError`.
- `situation.scan`
  - `scan(ip, ports=TOP_1000, timeout=0.5)` tries TCP connections
    concurrently and returns the open ports; `scan_port` tries one.
    `TOP_1000` holds the 1000 most common TCP ports.
- `situation.netstat`
  - `SocketState`, `flow_filter(state)` and `port_filter(state)`.
- `situation.interfaces`
  - `get_interfaces()` lists local interfaces that are up, leaving out
    `veth*` and `qemu` ones; `filter_interfaces` applies that rule to a list
    of `InterfaceInfo`.
- `situation.hardware`
  - `DriveType`, `StorageController`, and `disk_type` / `controller_type`
    which name them ("ssd", "nvme", ..., "unknown").
- `situation.pingconfig`
  - `use_icmp()` tells whether pings must be privileged: always on Windows,
    elsewhere when none of the user's groups lies in
    `net.ipv4.ping_group_range`. `parse_ping_group_range` and
    `is_allowed_to_ping` are the parts it is built from.
- `situation.rpmdb`
  - `find_db_file()` returns `/var/lib/rpm/rpmdb.sqlite` when it exists,
    or the first `rpmdb.sqlite` found under `/usr/lib`; it raises
    `FileNotFoundError` otherwise.

## Examples

```python
from ipaddress import ip_network

from situation.ipnet import iterate, is_reserved
from situation.scan import scan

hosts = [ip for ip in iterate(ip_network("192.168.1.0/24")) if not is_reserved(ip)]
open_ports = scan(hosts[0], [22, 80, 443], 0.5)
```

Modules plug into the registry and run in dependency order:

```python
from situation.scheduler import Module, ModuleRegistry


class HostModule(Module):
    name = "host"

    def run(self):
        ...


class NetworkModule(Module):
    name = "network"
    dependencies = ("host",)

    def run(self):
        ...


registry = ModuleRegistry()
registry.register(HostModule())
registry.register(NetworkModule())
status = registry.run(disabled=set())   # name -> exception or None
for error in registry.module_errors():
    print(error.module, error.message)
```

`Scheduler.run` raises `SchedulingError` when a dependency is missing or
the dependencies form a cycle; an exception raised by one module is
recorded in the status and does not stop the others.

SNMP readers work with any object implementing `SnmpClient`:

```python
from situation.networks import get_all_interfaces
from situation.oids import SnmpClient

class MyClient(SnmpClient):
    def get(self, oids): ...
    def bulk_walk_all(self, oid): ...

interfaces = get_all_interfaces(MyClient())
```

## What this package does not do

- It has no command to run and no ready-made collection modules: the
  scheduler runs whatever `Module` subclasses you register.
- It does not talk SNMP over the network itself; you supply an
  `SnmpClient` implementation.
- It does not send pings, read disk or GPU details, read the contents of
  the rpm database, or keep an inventory of discovered machines; it only
  provides the helpers listed above.