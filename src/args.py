"""Argument parsing functionality for bootloader-locator."""

import argparse


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    parser = argparse.ArgumentParser(
        prog="bootloader-locator",
        description=(
            "Locate the bootloader dependency of a cargo project and print its "
            "manifest path and activated features"
        ),
        add_help=True,
    )

    parser.add_argument("-m", "--manifest-path",
                        dest="MANIFEST_PATH",
                        help="Path to the Cargo.toml of the project (default: nearest Cargo.toml "
                             "at or above the current directory)",
                        action="store",
                        type=str)

    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML or YML)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
                        default='WARNING')
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    return parser.parse_args(argv)
