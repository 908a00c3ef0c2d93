import re

# RFC 3261 Section 25.1
#
# IPv4address    =  1*3DIGIT "." 1*3DIGIT "." 1*3DIGIT "." 1*3DIGIT
# hex4           =  1*4HEXDIG
# hexseq         =  hex4 *( ":" hex4)
# hexpart        =  hexseq / hexseq "::" [ hexseq ] / "::" [ hexseq ]
# IPv6address    =  hexpart [ ":" IPv4address ]
# IPv6reference  =  "[" IPv6address "]"
_IPV4 = r"\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}"
_HEX4 = r"[0-9A-F]{1,4}"
_HEXSEQ = rf"{_HEX4}(?::{_HEX4})*"
_HEXPART = rf"(?:{_HEXSEQ}|{_HEXSEQ}::(?:{_HEXSEQ})?|::(?:{_HEXSEQ})?)"
_IPV6 = rf"{_HEXPART}(?::{_IPV4})?"

IPV4_ADDRESS = re.compile(_IPV4, re.ASCII)
IPV6_REFERENCE = re.compile(rf"\[{_IPV6}\]", re.ASCII | re.IGNORECASE)


def is_ipv4_literal(host):
    """Grammar match only, 999.1.1.1 counts as a literal."""
    return bool(IPV4_ADDRESS.fullmatch(host))


def is_ipv6_reference(host):
    return bool(IPV6_REFERENCE.fullmatch(host))


def is_numeric(host):
    return is_ipv4_literal(host) or is_ipv6_reference(host)


def strip_brackets(host):
    if host.startswith("[") and host.endswith("]"):
        return host[1:-1]
    return host
