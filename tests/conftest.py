import pytest

from siplocator.core.errors import ResolverError


class FakeResolver:
    """In-memory resolution collaborator. Records every call it receives."""

    def __init__(self):
        self.naptr = {}
        self.srv = {}
        self.addresses = {}
        self.failing = set()
        self.failure = ResolverError
        self.calls = []

    def _check(self, kind, name):
        self.calls.append((kind, name))
        if (kind, name) in self.failing:
            raise self.failure(f"{kind} lookup for {name} timed out")

    def lookup_pointer_records(self, domain, secure_only):
        self._check("NAPTR", domain)
        return list(self.naptr.get(domain, []))

    def lookup_service_records(self, service_identifier):
        self._check("SRV", service_identifier)
        return list(self.srv.get(service_identifier, []))

    def lookup_address_records(self, hostname):
        self._check("A", hostname)
        return list(self.addresses.get(hostname, []))

    def kinds(self):
        return [kind for kind, _ in self.calls]


class ScriptedRandom:
    """randrange() that returns pre-set values, for pinning SRV tie-breaks."""

    def __init__(self, values):
        self.values = list(values)
        self.requests = []

    def randrange(self, n):
        self.requests.append(n)
        value = self.values.pop(0)
        assert 0 <= value < n
        return value


@pytest.fixture
def resolver():
    return FakeResolver()


@pytest.fixture
def scripted_random():
    return ScriptedRandom
