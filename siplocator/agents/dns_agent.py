import logging

import dns.exception
import dns.resolver

from siplocator.core.errors import ResolverError
from siplocator.core.records import PointerRecord, ServiceRecord


class DNSResolver:
    """
    Resolution collaborator backed by dnspython.

    Empty answers (NXDOMAIN, NoAnswer) come back as empty lists. Any other
    DNS failure (timeout, SERVFAIL, no nameservers) raises ResolverError and
    it is up to the caller to decide what that means.
    """

    def __init__(self, logger=None, lifetime=None, nameservers=None, resolver=None):
        """
        An injected resolver keeps its own lifetime unless one is given;
        a resolver built here defaults to a 2 second timeout.
        """
        self.logger = logger or logging.getLogger("SIPLocator")
        if resolver is None:
            resolver = dns.resolver.Resolver()
            if nameservers:
                resolver.nameservers = list(nameservers)
            if lifetime is None:
                lifetime = 2.0
        self.resolver = resolver
        if lifetime is not None:
            self.resolver.lifetime = lifetime  # Timeout

    def _query(self, name, rdtype):
        self.logger.debug(f"Querying {rdtype}: {name}")
        try:
            answers = self.resolver.resolve(name, rdtype)
        except (dns.resolver.NoAnswer, dns.resolver.NXDOMAIN):
            self.logger.debug(f"No {rdtype} records found for {name}")
            return []
        except dns.exception.DNSException as e:
            raise ResolverError(f"{rdtype} lookup for {name} failed: {e}") from e
        return list(answers)

    def lookup_pointer_records(self, domain, secure_only):
        """
        NAPTR records for domain that terminate in an SRV lookup ("S" flag)
        and name a SIP service. With secure_only, only SIPS services are kept.
        """
        prefix = "SIPS+" if secure_only else "SIP"
        records = []
        for r in self._query(domain, "NAPTR"):
            flags = r.flags.decode(errors="ignore").upper()
            service = r.service.decode(errors="ignore").upper()
            if "S" not in flags or not service.startswith(prefix):
                continue
            records.append(
                PointerRecord(
                    order=r.order,
                    preference=r.preference,
                    service=service,
                    replacement=r.replacement.to_text(),
                )
            )
        records.sort(key=lambda p: p.sort_key)
        return records

    def lookup_service_records(self, service_identifier):
        records = []
        for r in self._query(service_identifier, "SRV"):
            target = r.target.to_text()
            # RFC 2782: a target of "." means the service is decidedly not available
            if target == ".":
                continue
            records.append(ServiceRecord(r.priority, r.weight, target, r.port))
        return records

    def lookup_address_records(self, hostname):
        addresses = []
        failure = None
        for rdtype in ("A", "AAAA"):
            try:
                addresses.extend(r.to_text() for r in self._query(hostname, rdtype))
            except ResolverError as e:
                failure = e
        if not addresses and failure is not None:
            raise failure
        return addresses
