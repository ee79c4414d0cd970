"""Argument parsing functionality for pacstate."""

import argparse

from config import LOG_LEVELS


def build_parser():
    """Build the argument parser with its sub-commands."""
    parser = argparse.ArgumentParser(
        prog="pacstate",
        description="pacstate - package versions, local database and pending transactions",
        add_help=True,
    )

    parser.add_argument("-r", "--root",
                        dest="ROOT",
                        help="Root directory (default: config file, $PACSTATE_ROOT or .)",
                        action="store",
                        type=str)
    parser.add_argument("-c", "--config",
                        dest="CONFIG",
                        help="Path to configuration file (YAML)",
                        action="store",
                        type=str)
    parser.add_argument("--loglevel",
                        dest="LOG_LEVEL",
                        help="Set the logging level",
                        action="store",
                        type=str.upper,
                        choices=LOG_LEVELS)
    parser.add_argument("--logfile",
                        dest="LOG_FILE",
                        help="Log output file",
                        action="store",
                        type=str)

    sub = parser.add_subparsers(dest="COMMAND", metavar="COMMAND")
    sub.required = True

    compare = sub.add_parser("compare", help="Compare two versions; prints -1, 0 or 1")
    compare.add_argument("VERSION_A", type=str)
    compare.add_argument("VERSION_B", type=str)

    info = sub.add_parser("info", help="Show metadata of a package archive")
    info.add_argument("PATH", type=str)
    info.add_argument("--pkginfo",
                      dest="PKGINFO",
                      help="PATH is a bare .PKGINFO file instead of an archive",
                      action="store_true")
    info.add_argument("--json",
                      dest="JSON",
                      help="Print the record as JSON",
                      action="store_true")

    sub.add_parser("init", help="Create or verify the package database")

    installed = sub.add_parser("installed", help="Exit 0 if NAME VERSION is installed, 3 otherwise")
    installed.add_argument("NAME", type=str)
    installed.add_argument("VERSION", type=str)

    register = sub.add_parser("register", help="Record a package as installed")
    register.add_argument("PATH", type=str)
    register.add_argument("--pkginfo",
                          dest="PKGINFO",
                          help="PATH is a bare .PKGINFO file instead of an archive",
                          action="store_true")

    unregister = sub.add_parser("unregister", help="Drop a package from the local database")
    unregister.add_argument("NAME", type=str)

    exists = sub.add_parser("exists", help="Exit 0 if the artifact for NAME VERSION is available, 3 otherwise")
    exists.add_argument("NAME", type=str)
    exists.add_argument("VERSION", type=str)

    return parser


def parse_args(argv=None):
    """Parses the arguments passed to the program."""
    return build_parser().parse_args(argv)
