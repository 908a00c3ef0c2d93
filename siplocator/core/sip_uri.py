from dataclasses import dataclass
from typing import Optional

from siplocator.core.errors import InvalidUri


@dataclass(frozen=True)
class SipUri:
    """
    The parts of a SIP URI that matter for server location.
    Any scheme is accepted here; the locator rejects anything but sip/sips.
    """

    scheme: str
    host: str
    port: Optional[int] = None
    transport: Optional[str] = None
    maddr: Optional[str] = None

    @property
    def secure(self):
        return self.scheme.lower() == "sips"

    def __str__(self):
        text = f"{self.scheme}:{self.host}"
        if self.port is not None:
            text += f":{self.port}"
        if self.transport:
            text += f";transport={self.transport}"
        if self.maddr:
            text += f";maddr={self.maddr}"
        return text

    @staticmethod
    def parse(text):
        """
        Parses "scheme:[user@]host[:port][;params][?headers]".
        Only the transport and maddr parameters are kept.
        """
        if not text or ":" not in text:
            raise InvalidUri(f"Not a URI: {text!r}")

        scheme, rest = text.strip().split(":", 1)
        if not scheme:
            raise InvalidUri(f"Missing scheme: {text!r}")

        rest = rest.split("?", 1)[0]
        if "@" in rest:
            rest = rest.rsplit("@", 1)[1]

        hostport, *raw_params = rest.split(";")
        host, port = SipUri._split_hostport(hostport, text)

        params = {}
        for raw in raw_params:
            name, _, value = raw.partition("=")
            params[name.strip().lower()] = value.strip()

        return SipUri(
            scheme=scheme,
            host=host,
            port=port,
            transport=params.get("transport") or None,
            maddr=params.get("maddr") or None,
        )

    @staticmethod
    def _split_hostport(hostport, text):
        if hostport.startswith("["):
            end = hostport.find("]")
            if end < 0:
                raise InvalidUri(f"Unterminated IPv6 reference: {text!r}")
            host, port_part = hostport[: end + 1], hostport[end + 1 :]
            if port_part and not port_part.startswith(":"):
                raise InvalidUri(f"Garbage after host: {text!r}")
            port_part = port_part[1:]
        else:
            host, _, port_part = hostport.partition(":")

        if not host:
            raise InvalidUri(f"Missing host: {text!r}")

        port = None
        if port_part:
            if not port_part.isdigit() or int(port_part) > 65535:
                raise InvalidUri(f"Invalid port {port_part!r} in {text!r}")
            port = int(port_part)
        return host, port


def get_target(uri):
    """
    RFC 3263 Section 4: TARGET is the maddr parameter if present,
    otherwise the host part of the URI.
    """
    return uri.maddr if uri.maddr else uri.host
