import logging
import random
from concurrent.futures import ThreadPoolExecutor

from siplocator.agents.address import AddressAgent
from siplocator.agents.naptr import NaptrAgent
from siplocator.agents.srv import SrvAgent
from siplocator.core.errors import NoHopsResolved, NoTransportAvailable
from siplocator.core.hosts import is_numeric, strip_brackets
from siplocator.core.records import Hop
from siplocator.core.sip_uri import get_target
from siplocator.core.transports import Transport, default_transport_for_scheme


class Locator:
    """
    Turns a SIP or SIPS URI into the ordered list of hops a client should
    try, following RFC 3263 Section 4: NAPTR -> SRV -> A/AAAA.

    resolver provides lookup_pointer_records, lookup_service_records and
    lookup_address_records (see DNSResolver). Any ResolverError,
    dns.exception.DNSException or OSError a lookup raises is treated as an
    empty answer. A Locator keeps no state between calls and can be shared
    across threads.
    """

    def __init__(self, supported_transports, resolver, logger=None, rng=None, max_workers=1):
        if not supported_transports:
            raise ValueError("No transports are supported")
        self.supported_transports = tuple(Transport.parse(t) for t in supported_transports)
        self.resolver = resolver
        self.logger = logger or logging.getLogger("SIPLocator")
        self.max_workers = max(1, int(max_workers))

        self.naptr_agent = NaptrAgent(resolver, self.logger)
        self.srv_agent = SrvAgent(resolver, self.logger, rng or random.Random())
        self.address_agent = AddressAgent(resolver, self.logger)

    def locate(self, uri):
        # Input errors surface before any DNS traffic
        scheme_transport = default_transport_for_scheme(uri.scheme)
        explicit_transport = Transport.parse(uri.transport) if uri.transport else None

        target = get_target(uri)
        self.logger.info(f"Locating {uri} (target: {target})")

        if is_numeric(target):
            transport = explicit_transport or scheme_transport
            port = uri.port if uri.port is not None else transport.default_port
            self.logger.info(f"Target is an IP literal. Skipping DNS: {target}:{port}/{transport}")
            return [Hop(strip_brackets(target), port, transport)]

        if uri.port is not None:
            transport = explicit_transport or scheme_transport
            self.logger.info(f"Explicit port {uri.port}, resolving {target} over {transport}")
            targets = [(target, uri.port, transport)]
        else:
            secure = uri.scheme.lower() == "sips"
            targets = self._name_targets(target, secure, explicit_transport)

        hops = self._expand(targets)
        if not hops:
            raise NoHopsResolved(f"No addresses resolved for {uri}")

        self.logger.info(f"Resolved {uri} to {len(hops)} hops")
        return hops

    def _name_targets(self, domain, secure, explicit_transport):
        """Picks a transport and returns [(host, port, transport), ...] to expand."""
        srv_results = None

        if explicit_transport is not None:
            transport = explicit_transport
            self.logger.info(f"Transport parameter selects {transport}")
        else:
            transport = self._select_from_naptr(domain, secure)
            if transport is None:
                transport, srv_results = self._select_from_srv(domain, secure)

        if srv_results is None:
            srv_results = self.srv_agent.resolve(transport, domain)

        if srv_results:
            return [(host, port, transport) for host, port in srv_results]

        port = transport.default_port
        self.logger.info(f"No SRV records for {transport}. Falling back to {domain}:{port}")
        return [(domain, port, transport)]

    def _select_from_naptr(self, domain, secure):
        for record, transport in self.naptr_agent.resolve(domain, secure):
            if transport in self.supported_transports:
                self.logger.info(
                    f"NAPTR {record.service} (order={record.order}, "
                    f"preference={record.preference}) selects {transport}"
                )
                return transport
            self.logger.debug(f"NAPTR transport {transport} is not supported")
        return None

    def _select_from_srv(self, domain, secure):
        candidates = [t for t in self.supported_transports if t.secure or not secure]
        for transport in candidates:
            results = self.srv_agent.resolve(transport, domain)
            if results:
                self.logger.info(f"SRV records found for {transport}")
                return transport, results
        tried = ", ".join(str(t) for t in candidates) or "none"
        raise NoTransportAvailable(f"No NAPTR or SRV records for {domain} (tried: {tried})")

    def _expand(self, targets):
        # Each hostname is looked up once, output keeps target order then address order
        hosts = list(dict.fromkeys(host for host, _, _ in targets))
        if self.max_workers > 1 and len(hosts) > 1:
            workers = min(self.max_workers, len(hosts))
            with ThreadPoolExecutor(max_workers=workers) as pool:
                resolved = dict(zip(hosts, pool.map(self.address_agent.resolve, hosts)))
        else:
            resolved = {host: self.address_agent.resolve(host) for host in hosts}

        hops = []
        for host, port, transport in targets:
            addresses = resolved[host]
            if not addresses:
                self.logger.debug(f"Skipping {host}: no addresses")
                continue
            hops.extend(Hop(address, port, transport) for address in addresses)
        return hops
