import logging

from siplocator.core.errors import LOOKUP_FAILURES
from siplocator.core.hosts import is_numeric, strip_brackets


class AddressAgent:
    def __init__(self, resolver, logger=None):
        self.resolver = resolver
        self.logger = logger or logging.getLogger("SIPLocator")

    def resolve(self, hostname):
        # Literals need no DNS
        if is_numeric(hostname):
            self.logger.debug(f"{hostname} is an IP literal. Skipping DNS.")
            return [strip_brackets(hostname)]

        self.logger.debug(f"Querying A/AAAA: {hostname}")
        try:
            addresses = list(self.resolver.lookup_address_records(hostname))
        except LOOKUP_FAILURES as e:
            self.logger.warning(f"Address lookup failed, treating as empty: {e}")
            return []

        if not addresses:
            self.logger.debug(f"No address records found for {hostname}")
        return addresses
