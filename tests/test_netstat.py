import psutil
import pytest

from situation.netstat import SocketState, flow_filter, port_filter

FLOW_STATES = [
    SocketState.ESTABLISHED,
    SocketState.FIN_WAIT1,
    SocketState.FIN_WAIT2,
    SocketState.TIME_WAIT,
    SocketState.CLOSE_WAIT,
    SocketState.LAST_ACK,
    SocketState.CLOSING,
]
OTHER_STATES = [
    SocketState.SYN_SENT,
    SocketState.SYN_RECV,
    SocketState.CLOSE,
    SocketState.LISTEN,
]


@pytest.mark.parametrize("state", FLOW_STATES)
def test_flow_states_pass_both_filters(state):
    assert flow_filter(state) is True
    assert port_filter(state) is True


@pytest.mark.parametrize("state", OTHER_STATES)
def test_other_states_are_not_flows(state):
    assert flow_filter(state) is False


def test_listen_passes_port_filter():
    assert port_filter(SocketState.LISTEN) is True


@pytest.mark.parametrize(
    "state", [SocketState.SYN_SENT, SocketState.SYN_RECV, SocketState.CLOSE, None]
)
def test_port_filter_rejects(state):
    assert port_filter(state) is False


def test_filters_reject_none():
    assert flow_filter(None) is False


def test_parse_psutil_statuses():
    assert SocketState.parse(psutil.CONN_ESTABLISHED) is SocketState.ESTABLISHED
    assert SocketState.parse(psutil.CONN_LISTEN) is SocketState.LISTEN
    assert SocketState.parse(psutil.CONN_TIME_WAIT) is SocketState.TIME_WAIT


def test_parse_unknown():
    assert SocketState.parse(psutil.CONN_NONE) is None


@pytest.mark.parametrize("state", list(SocketState))
def test_str_round_trip(state):
    assert SocketState.parse(str(state)) is state