"""pearchannel - read a PEAR channel into normalized package versions.

    Returns:
        int: Exit code
"""
import json
import logging
import sys

from constants import ExitCodes
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from args import parse_args
from registry.pear import (
    ChannelReader,
    DocumentParseError,
    InvalidRepositoryUrlError,
    PearRepository,
    TransportError,
    UnsupportedProtocolError,
)


def export_json(packages, path):
    """Exports the package versions to a JSON file.

    Args:
        packages (list): List of NormalizedPackageVersion instances.
        path (str): File path to export the JSON.
    """
    data = [package.to_dict() for package in packages]
    try:
        with open(path, 'w', encoding='utf-8') as file:
            json.dump(data, file, ensure_ascii=False, indent=4)
            file.write("\n")
        logging.info("JSON file has been successfully exported at: %s", path)
    except OSError as e:
        logging.error("JSON file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


def print_summary(packages):
    """Print one line per package version."""
    for package in packages:
        print(f"{package.name} {package.pretty_version} ({package.version})")


def main(argv=None):
    """Main function of the program."""
    logger = logging.getLogger(__name__)

    args = parse_args(argv)
    configure_logging(args.LOG_LEVEL)

    if is_debug_enabled(logger):
        logger.debug(
            "CLI start",
            extra=extra_context(event="function_entry", component="cli", action="main")
        )

    try:
        repository = PearRepository(args.URL, reader=ChannelReader(preference=args.REST_VERSIONS))
        packages = repository.packages
    except InvalidRepositoryUrlError as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)
    except (UnsupportedProtocolError, DocumentParseError) as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.PROTOCOL_ERROR.value)
    except TransportError as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.CONNECTION_ERROR.value)

    logging.info("Read %d package versions from %s", len(packages), repository.url)
    if args.OUTPUT:
        export_json(packages, args.OUTPUT)
    else:
        print_summary(packages)
    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
