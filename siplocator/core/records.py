from typing import NamedTuple

from siplocator.core.transports import Transport


class PointerRecord(NamedTuple):
    """A NAPTR record reduced to the fields the locator uses."""

    order: int
    preference: int
    service: str
    replacement: str = ""

    @property
    def sort_key(self):
        return (self.order, self.preference)


class ServiceRecord(NamedTuple):
    priority: int
    weight: int
    target: str
    port: int


class Hop(NamedTuple):
    """
    One destination to try: (address, port, transport).
    Unpacks like the plain (ip, port, transport) tuples callers already use.
    """

    address: str
    port: int
    transport: Transport

    def __str__(self):
        host = f"[{self.address}]" if ":" in self.address else self.address
        return f"{host}:{self.port}/{self.transport}"
