import dns.exception


class LocatorError(Exception):
    """Base class for everything the locator reports to its caller."""


class UnknownScheme(LocatorError, ValueError):
    def __init__(self, scheme):
        super().__init__(f"Unknown scheme: {scheme}")
        self.scheme = scheme


class UnknownTransport(LocatorError, ValueError):
    def __init__(self, transport):
        super().__init__(f"Unknown transport: {transport}")
        self.transport = transport


class NotUpgradable(LocatorError, ValueError):
    def __init__(self, transport):
        super().__init__(f"Cannot upgrade {transport}")
        self.transport = transport


class UnrecognizedNaptrService(LocatorError, ValueError):
    def __init__(self, service):
        super().__init__(f"Unrecognized NAPTR service: {service}")
        self.service = service


class InvalidUri(LocatorError, ValueError):
    pass


class ResolutionExhausted(LocatorError, LookupError):
    """Raised only after every fallback has been tried."""


class NoTransportAvailable(ResolutionExhausted):
    pass


class NoHopsResolved(ResolutionExhausted):
    pass


class ResolverError(Exception):
    """
    Raised by a resolution collaborator for a DNS-layer failure
    (timeout, SERVFAIL, no nameservers), as opposed to an empty answer.
    """


# Collaborator failures a resolution step treats as an empty answer
LOOKUP_FAILURES = (ResolverError, dns.exception.DNSException, OSError)
