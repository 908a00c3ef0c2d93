import logging
import random

from siplocator.core.errors import LOOKUP_FAILURES
from siplocator.core.transports import service_identifier


def order_service_records(records, rng):
    """
    Orders SRV records per RFC 2782.

    Priority groups are emitted lowest first. Inside a group each record
    owns the interval [running sum before it, running sum after it) and a
    point is drawn uniformly from [0, total weight); the owner is taken out
    and the draw repeats until the group is empty. Zero-weight records own
    an empty interval, so they only come out once every positive-weight
    record of the group is gone; among themselves they are picked uniformly.

    rng needs a randrange(n) method, e.g. random.Random.
    """
    ordered = []
    for priority in sorted({r.priority for r in records}):
        group = [r for r in records if r.priority == priority]
        while group:
            total = sum(r.weight for r in group)
            if total == 0:
                index = rng.randrange(len(group))
            else:
                point = rng.randrange(total)
                running = 0
                for index, record in enumerate(group):
                    running += record.weight
                    if point < running:
                        break
            ordered.append(group.pop(index))
    return ordered


class SrvAgent:
    def __init__(self, resolver, logger=None, rng=None):
        self.resolver = resolver
        self.logger = logger or logging.getLogger("SIPLocator")
        self.rng = rng or random.Random()

    def resolve(self, transport, domain):
        """Returns [(target, port), ...] in the order they should be tried."""
        try:
            # dnspython rejects some grammar-valid hosts, e.g. labels over 63 octets
            srv_domain = service_identifier(transport, domain)
            self.logger.debug(f"Querying SRV: {srv_domain}")
            records = list(self.resolver.lookup_service_records(srv_domain))
        except LOOKUP_FAILURES as e:
            self.logger.warning(f"SRV lookup failed, treating as empty: {e}")
            return []

        if not records:
            self.logger.debug(f"No SRV records found at {srv_domain}")
            return []

        ordered = order_service_records(records, self.rng)
        for r in ordered:
            self.logger.debug(
                f"SRV {srv_domain}: {r.target}:{r.port} (priority={r.priority}, weight={r.weight})"
            )
        return [(r.target, r.port) for r in ordered]
