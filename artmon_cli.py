#!/usr/bin/env python3
"""
artmon_cli - Command-line wrapper for the ART monitoring client

Lets the client be run straight from a checkout without installing the
console script.
"""

import sys

from artmon_client.cli import main


def run():
    """Entry point for the art-monitoring-client command."""
    sys.exit(main(sys.argv[1:]))


if __name__ == "__main__":
    run()
