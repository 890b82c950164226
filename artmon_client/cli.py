"""
Command-line entry point: art-monitoring-client.

usage: art-monitoring-client [-h] [-a ADDRESS] -p PORT [-r REQUEST_TYPE]

Sends one request to the daemon's monitoring socket and prints the decoded
status report. Exits 0 on success and 1 on any exchange failure.
"""

import argparse
import json
import sys
from typing import List, Optional

from artmon_common import config
from artmon_common.exceptions import ArtMonError
from artmon_common.logging import configure_structlog, get_bound_logger

from .client import connect_and_exchange
from .formatting import format_report
from .protocol import RequestKind

REQUEST_HELP = {
    "calibration": "request a calibration of the algorithm",
    "gnss_start": "start gnss receiver",
    "gnss_stop": "stop gnss receiver",
    "gnss_soft": "soft reset of the gnss receiver",
    "gnss_hard": "hard reset of the gnss receiver",
    "gnss_cold": "cold start of the gnss receiver",
    "read_eeprom": "read disciplining data from EEPROM",
    "save_eeprom": "save minipod's disciplining data in EEPROM",
    "fake_holdover_start": "start fake holdover",
    "fake_holdover_stop": "stop fake holdover",
    "mro_coarse_inc": "increment the oscillator's coarse control",
    "mro_coarse_dec": "decrement the oscillator's coarse control",
}


def build_parser() -> argparse.ArgumentParser:
    epilog = "Accepted request types:\n" + "\n".join(
        f"  {name}: {REQUEST_HELP.get(name, '')}" for name in RequestKind.cli_names()
    )
    parser = argparse.ArgumentParser(
        prog="art-monitoring-client",
        description="Interact with oscillatord through its monitoring socket",
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("-a", "--address", default=None,
                        help="Address of the monitoring socket. Defaults to local address")
    parser.add_argument("-p", "--port", default=None,
                        help="Port of the monitoring socket (or ARTMON_PORT)")
    parser.add_argument("-r", "--request", metavar="REQUEST_TYPE", default=None,
                        choices=RequestKind.cli_names(),
                        help="Send a request to oscillatord (see list below)")
    parser.add_argument("-t", "--timeout", type=float, default=None,
                        help=f"I/O timeout in seconds, 0 blocks (default: {config.socket_timeout})")
    parser.add_argument("--raw", action="store_true",
                        help="Also print the raw JSON reply")
    parser.add_argument("--log-level", default=None,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        type=str.upper,
                        help=f"Logging level (default: {config.log_level})")
    parser.add_argument("--log-format", default=None, choices=["console", "json"],
                        help=f"Log output format (default: {config.log_format})")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_structlog(
        log_level=args.log_level or config.get_log_level(),
        log_format=args.log_format or config.log_format,
        force=True,
    )
    logger = get_bound_logger("cli")

    port = args.port or config.port
    if not port:
        logger.error("Bad port")
        parser.print_help()
        return 1

    host = args.address if args.address is not None else config.host
    request_kind = RequestKind.NONE
    if args.request:
        request_kind = RequestKind.from_name(args.request)
        logger.info(f"Action requested: {request_kind.cli_name}")

    try:
        report = connect_and_exchange(host, port, request_kind, timeout=args.timeout)
    except ArtMonError as e:
        logger.error(e.message, error=e.to_dict())
        logger.error("FAIL")
        return 1

    if args.raw or config.debug:
        logger.info(json.dumps(report.raw))
    for line in format_report(report):
        logger.info(line)
    logger.info("PASSED !")
    return 0


if __name__ == "__main__":
    sys.exit(main())
