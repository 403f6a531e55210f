"""Helpers for host and network discovery: addresses, interfaces, SNMP tables, scans and module scheduling."""

__version__ = "0.17.4"