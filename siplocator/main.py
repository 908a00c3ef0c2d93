import argparse
import logging
import sys

from siplocator.agents.dns_agent import DNSResolver
from siplocator.agents.locator import Locator
from siplocator.core.errors import LocatorError
from siplocator.core.sip_uri import SipUri
from siplocator.utils.logger import log_file_path, setup_logger

DEFAULT_TRANSPORTS = "UDP,TCP,TLS"


def print_banner():
    print("=" * 60)
    print("   SIP LOCATOR - RFC 3263 Server Location")
    print("=" * 60)


def get_input(prompt):
    return input(f"{prompt}: ")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="sip-locate",
        description="Resolve a SIP or SIPS URI into the ordered hops to try.",
    )
    parser.add_argument("uri", nargs="?", help="URI to locate, prompted for when omitted")
    parser.add_argument(
        "-t", "--transports", default=DEFAULT_TRANSPORTS,
        help=f"supported transports in order of preference (default: {DEFAULT_TRANSPORTS})",
    )
    parser.add_argument("--lifetime", type=float, default=2.0, help="per-query DNS timeout in seconds")
    parser.add_argument("--nameserver", action="append", dest="nameservers", help="nameserver to query, repeatable")
    parser.add_argument("--workers", type=int, default=1, help="parallel address lookups")
    parser.add_argument("--debug", action="store_true", help="show debug output on the console")
    parser.add_argument("--no-log-file", action="store_true", help="do not write a log file under logs/")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    print_banner()

    uri_text = args.uri or get_input("SIP URI to locate (e.g. sip:alice@example.com)")
    transports = [t.strip() for t in args.transports.split(",") if t.strip()]

    logger = setup_logger(
        console_level=logging.DEBUG if args.debug else logging.INFO,
        log_dir=None if args.no_log_file else "logs",
    )

    try:
        uri = SipUri.parse(uri_text)
        resolver = DNSResolver(logger, lifetime=args.lifetime, nameservers=args.nameservers)
        locator = Locator(transports, resolver, logger=logger, max_workers=args.workers)
        hops = locator.locate(uri)
    except (LocatorError, ValueError) as e:
        logger.debug("Location failed", exc_info=True)
        print(f"❌ {type(e).__name__}: {e}")
        return 1

    print(f"✅ {uri} resolved: {len(hops)} hops found.")
    for i, hop in enumerate(hops, 1):
        print(f"   {i:2d}. Address: {hop.address}, Port: {hop.port}, Transport: {hop.transport}")

    log_file = log_file_path(logger)
    if log_file:
        print(f"\n📄 Full Debug Log saved to: {log_file}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
