"""Tests for sqlurl.transport: transport capability flags."""

import pytest

from sqlurl import Transport


@pytest.mark.parametrize("flags,transport,permitted", [
    (Transport.NONE, "tcp", False),
    (Transport.NONE, "", False),
    (Transport.TCP, "tcp", True),
    (Transport.TCP, "TCP", True),
    (Transport.TCP, "udp", False),
    (Transport.UNIX, "unix", True),
    (Transport.UNIX, "tcp", False),
    (Transport.TCP | Transport.UDP | Transport.UNIX, "udp", True),
    (Transport.TCP | Transport.UDP | Transport.UNIX, "http", False),
    (Transport.ANY, "Postgres+Unicode", True),
    (Transport.ANY, "tcp", True),
    (Transport.ANY, "", False),
])
def test_permits(flags, transport, permitted):
    assert flags.permits(transport) is permitted


def test_flag_values():
    assert int(Transport.NONE) == 0
    assert int(Transport.TCP | Transport.UNIX) == 5
    assert Transport.ANY & Transport.ANY
