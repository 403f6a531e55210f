"""Socket states and the filters applied to the socket table."""

from __future__ import annotations

import enum
from typing import Optional


class SocketState(enum.Enum):
    """TCP socket states, numbered as in the Linux kernel.

    Member names match the state strings used by psutil.
    """

    ESTABLISHED = 0x01
    SYN_SENT = 0x02
    SYN_RECV = 0x03
    FIN_WAIT1 = 0x04
    FIN_WAIT2 = 0x05
    TIME_WAIT = 0x06
    CLOSE = 0x07
    CLOSE_WAIT = 0x08
    LAST_ACK = 0x09
    LISTEN = 0x0A
    CLOSING = 0x0B

    def __str__(self) -> str:
        return self.name

    @classmethod
    def parse(cls, text: str) -> Optional["SocketState"]:
        """Return the state named by text (case-insensitive), or None."""
        try:
            return cls[text.upper()]
        except KeyError:
            return None


_FLOW_STATES = frozenset(
    {
        SocketState.ESTABLISHED,
        SocketState.FIN_WAIT1,
        SocketState.FIN_WAIT2,
        SocketState.TIME_WAIT,
        SocketState.CLOSE_WAIT,
        SocketState.LAST_ACK,
        SocketState.CLOSING,
    }
)


def flow_filter(state: Optional[SocketState]) -> bool:
    """Tell whether a socket in this state carries a flow between two ends."""
    return state in _FLOW_STATES


def port_filter(state: Optional[SocketState]) -> bool:
    """Tell whether a socket is listening or carries a flow."""
    return state is SocketState.LISTEN or flow_filter(state)