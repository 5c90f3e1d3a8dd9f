"""Argument parsing functionality for mcmeta."""

import argparse
from constants import Constants


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="mcmeta",
        description="mcmeta - Minecraft launcher version metadata resolver",
        add_help=True,
    )

    action_group = parser.add_mutually_exclusive_group(required=True)
    action_group.add_argument("-m", "--manifest",
                              dest="MANIFEST",
                              help="Print the version manifest",
                              action="store_true")
    action_group.add_argument("-r", "--latest-release",
                              dest="LATEST_RELEASE",
                              help="Print details of the latest release",
                              action="store_true")
    action_group.add_argument("-s", "--latest-snapshot",
                              dest="LATEST_SNAPSHOT",
                              help="Print details of the latest snapshot",
                              action="store_true")
    action_group.add_argument("-v", "--version",
                              dest="VERSIONS",
                              help="Print details of a version by id (repeatable)",
                              action="append", type=str)
    action_group.add_argument("-a", "--all",
                              dest="ALL",
                              help="Print details of every version (fetched concurrently)",
                              action="store_true")

    parser.add_argument("--v2",
                        dest="V2",
                        help="With --manifest, print the v2 manifest (sha1 and compliance level)",
                        action="store_true")
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to output JSON file (default: stdout)",
                        action="store",
                        type=str)
    parser.add_argument("-t", "--timeout",
                        dest="TIMEOUT",
                        help=f"Per-request timeout in seconds (default: {Constants.REQUEST_TIMEOUT})",
                        action="store",
                        type=float,
                        default=Constants.REQUEST_TIMEOUT)
    parser.add_argument("-w", "--workers",
                        dest="WORKERS",
                        help="Concurrent requests for --all (default: processor count)",
                        action="store",
                        type=int)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])

    return parser.parse_args(argv)
