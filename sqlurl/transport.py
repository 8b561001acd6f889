"""Transport capabilities a scheme may accept (tcp, udp, unix sockets, or anything)."""

import enum


class Transport(enum.IntFlag):
    """Bit set of transports accepted by a scheme.

    ANY accepts every non-empty transport token, which is how ODBC-like
    schemes smuggle a driver name through the `scheme+transport` syntax.
    """

    NONE = 0
    TCP = 1
    UDP = 2
    UNIX = 4
    ANY = 8

    def permits(self, transport: str) -> bool:
        """Return True if `transport` (e.g. "tcp", "unix") is allowed."""
        if not self:
            return False
        if self & Transport.ANY and transport != "":
            return True
        token = transport.lower()
        return (
            (bool(self & Transport.TCP) and token == "tcp")
            or (bool(self & Transport.UDP) and token == "udp")
            or (bool(self & Transport.UNIX) and token == "unix")
        )
