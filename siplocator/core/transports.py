import logging
from enum import Enum

import dns.name

from siplocator.core.errors import (
    NotUpgradable,
    UnknownScheme,
    UnknownTransport,
    UnrecognizedNaptrService,
)

logger = logging.getLogger("SIPLocator")


class Transport(str, Enum):
    UDP = "UDP"
    TCP = "TCP"
    TLS = "TLS"
    SCTP = "SCTP"
    TLS_SCTP = "TLS-SCTP"

    def __str__(self):
        return self.value

    def __format__(self, spec):
        return format(self.value, spec)

    @property
    def secure(self):
        return self.value.startswith("TLS")

    @property
    def default_port(self):
        # All secure transports share 5061, everything else 5060
        return 5061 if self.secure else 5060

    @classmethod
    def parse(cls, name):
        """Case-insensitive lookup. Accepts a Transport member or its name."""
        if isinstance(name, cls):
            return name
        if not isinstance(name, str):
            raise UnknownTransport(name)
        try:
            return cls(name.strip().upper())
        except ValueError:
            raise UnknownTransport(name) from None


# NAPTR service field -> transport (RFC 3263 Section 4.1)
NAPTR_SERVICES = {
    "SIP+D2T": Transport.TCP,
    "SIPS+D2T": Transport.TLS,
    "SIP+D2U": Transport.UDP,
    "SIP+D2S": Transport.SCTP,
    "SIPS+D2S": Transport.TLS_SCTP,
}

UPGRADES = {
    Transport.TCP: Transport.TLS,
    Transport.SCTP: Transport.TLS_SCTP,
}

_SIP = dns.name.from_text("_sip", origin=None)
_SIPS = dns.name.from_text("_sips", origin=None)
_TCP = dns.name.from_text("_tcp", origin=None)
_SCTP = dns.name.from_text("_sctp", origin=None)
_UDP = dns.name.from_text("_udp", origin=None)


def is_known_transport(name):
    try:
        Transport.parse(name)
    except UnknownTransport:
        return False
    return True


def default_port(transport):
    return Transport.parse(transport).default_port


def upgrade(transport):
    """
    Returns the secure counterpart of a transport, e.g. TCP -> TLS.
    Raises NotUpgradable for transports without one (UDP, or an already
    secure transport).
    """
    transport = Transport.parse(transport)
    try:
        return UPGRADES[transport]
    except KeyError:
        raise NotUpgradable(transport.value) from None


def default_transport_for_scheme(scheme):
    if not isinstance(scheme, str):
        raise UnknownScheme(scheme)
    lowered = scheme.lower()
    if lowered == "sips":
        return upgrade(Transport.TCP)
    if lowered == "sip":
        return Transport.UDP
    raise UnknownScheme(scheme)


def transport_for_naptr_service(service):
    # Exact match, the service field is case sensitive here
    try:
        return NAPTR_SERVICES[service]
    except (KeyError, TypeError):
        raise UnrecognizedNaptrService(service) from None


def service_identifier(transport, domain):
    """
    Builds the SRV owner name for a transport and domain.

    TLS over TCP is secure (hence _sips) and sent over TCP (hence _tcp), so
    service_identifier("TLS", "example.org.") is "_sips._tcp.example.org.".
    Relative domains are treated as absolute.
    """
    transport = Transport.parse(transport)

    if transport in (Transport.TLS, Transport.TCP):
        proto = _TCP
    elif transport in (Transport.TLS_SCTP, Transport.SCTP):
        proto = _SCTP
    else:
        proto = _UDP

    scheme = _SIPS if transport.secure else _SIP
    suffix = domain if isinstance(domain, dns.name.Name) else dns.name.from_text(domain)

    service_id = scheme.concatenate(proto).concatenate(suffix).to_text()
    logger.debug(f"Service identifier for {transport} at {suffix}: {service_id}")
    return service_id
