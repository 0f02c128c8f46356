"""Argument parsing functionality for pearchannel."""

import argparse
from constants import Constants


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="pearchannel",
        description=(
            "pearchannel - Read a PEAR channel into normalized package versions"
        ),
        add_help=True,
    )

    parser.add_argument("URL",
                        help="PEAR channel URL, e.g. pear.php.net",
                        action="store", type=str)
    parser.add_argument("-o", "--output",
                        dest="OUTPUT",
                        help="Path to the JSON export; prints a summary when omitted",
                        action="store",
                        type=str)
    parser.add_argument("-r", "--rest-version",
                        dest="REST_VERSIONS",
                        help="Supported REST dialect, highest priority first (repeatable)",
                        action="append",
                        type=str,
                        choices=Constants.PEAR_REST_PREFERENCE)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
                        default="INFO")

    return parser.parse_args(argv)
