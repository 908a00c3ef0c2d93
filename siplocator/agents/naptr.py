import logging

from siplocator.core.errors import LOOKUP_FAILURES, UnrecognizedNaptrService
from siplocator.core.transports import transport_for_naptr_service


class NaptrAgent:
    def __init__(self, resolver, logger=None):
        self.resolver = resolver
        self.logger = logger or logging.getLogger("SIPLocator")

    def resolve(self, domain, secure):
        """
        Returns [(PointerRecord, Transport), ...] for domain, ascending by
        (order, preference). Records with equal keys keep the order the
        resolver returned them in. Records whose service does not map to a
        transport are dropped, as are insecure ones when secure is set.
        """
        self.logger.debug(f"Querying NAPTR: {domain} (secure={secure})")
        try:
            records = self.resolver.lookup_pointer_records(domain, secure)
        except LOOKUP_FAILURES as e:
            self.logger.warning(f"NAPTR lookup failed, treating as empty: {e}")
            return []

        results = []
        for record in records:
            try:
                transport = transport_for_naptr_service(record.service)
            except UnrecognizedNaptrService:
                self.logger.debug(f"Ignoring NAPTR service {record.service!r}")
                continue
            if secure and not transport.secure:
                self.logger.debug(f"Ignoring insecure NAPTR service {record.service}")
                continue
            results.append((record, transport))

        # Resolver order is not trusted
        results.sort(key=lambda item: item[0].sort_key)
        if not results:
            self.logger.debug(f"No usable NAPTR records for {domain}")
        return results
