"""pacstate - package version comparison and local package database.

    Returns:
        int: Exit code
"""
import json
import logging
import sys

from args import parse_args
from config import load_settings
from constants import ExitCodes
from errors import ConfigError, DatabaseError, PacmanError
from package import PackageRecord
from pacman import Pacman
from versioning import compare_versions, parse_version
from common.logging_utils import configure_logging, extra_context, is_debug_enabled

logger = logging.getLogger(__name__)


def _load_record(path, pkginfo_only):
    record = PackageRecord()
    if pkginfo_only:
        record.read_info_file(path)
    else:
        record.read_package_info(path)
    return record


def _candidate(name, version):
    return PackageRecord(name, parse_version(version))


def cmd_compare(args, _pacman_factory):
    print(compare_versions(args.VERSION_A, args.VERSION_B))
    return ExitCodes.SUCCESS


def cmd_info(args, _pacman_factory):
    record = _load_record(args.PATH, args.PKGINFO)
    if args.JSON:
        print(json.dumps(record.as_dict(), indent=2))
    else:
        sys.stdout.write(record.to_info_text())
    return ExitCodes.SUCCESS


def cmd_init(_args, pacman_factory):
    database = pacman_factory().database(create=True)
    print(database.root)
    return ExitCodes.SUCCESS


def cmd_installed(args, pacman_factory):
    database = pacman_factory().database()
    if database.is_installed(_candidate(args.NAME, args.VERSION)):
        return ExitCodes.SUCCESS
    return ExitCodes.NEGATIVE


def cmd_register(args, pacman_factory):
    record = _load_record(args.PATH, args.PKGINFO)
    pacman_factory().database().register(record)
    return ExitCodes.SUCCESS


def cmd_unregister(args, pacman_factory):
    if pacman_factory().database().unregister(args.NAME):
        return ExitCodes.SUCCESS
    logging.warning("%s is not installed", args.NAME)
    return ExitCodes.NEGATIVE


def cmd_exists(args, pacman_factory):
    if pacman_factory().package_exists(_candidate(args.NAME, args.VERSION)):
        return ExitCodes.SUCCESS
    return ExitCodes.NEGATIVE


COMMANDS = {
    "compare": cmd_compare,
    "info": cmd_info,
    "init": cmd_init,
    "installed": cmd_installed,
    "register": cmd_register,
    "unregister": cmd_unregister,
    "exists": cmd_exists,
}


def _exit_code_for(error):
    if isinstance(error, (ConfigError, DatabaseError)):
        return ExitCodes.CONFIG_ERROR
    return ExitCodes.FILE_ERROR


def run(argv=None):
    """Run one command and return its exit code."""
    args = parse_args(argv)
    try:
        settings = load_settings(args.CONFIG, root=args.ROOT, log_level=args.LOG_LEVEL)
    except ConfigError as e:
        configure_logging()
        logging.error("%s", e)
        return ExitCodes.CONFIG_ERROR.value
    configure_logging(getattr(logging, settings.log_level), args.LOG_FILE)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action=args.COMMAND,
                                root=settings.root, config=settings.config_file),
        )

    def pacman_factory():
        return Pacman.from_settings(settings)

    try:
        code = COMMANDS[args.COMMAND](args, pacman_factory)
    except PacmanError as e:
        logging.error("%s", e)
        code = _exit_code_for(e)
    return code.value


def main():
    """Main function of the program."""
    sys.exit(run())


if __name__ == "__main__":
    main()
