"""mcmeta - command line front end for the launcher version metadata resolver."""

import json
import logging
import sys

from args import parse_args
from constants import ExitCodes
from common.logging_utils import configure_logging, extra_context, is_debug_enabled
from launchermeta import (
    FetchError,
    NotFoundError,
    PoisonedCacheError,
    VersionClient,
)


def run_action(client, args):
    """Run the selected action and return a JSON-ready value."""
    if args.MANIFEST:
        doc = client.manifest_v2() if args.V2 else client.manifest()
        return doc.to_dict()
    if args.LATEST_RELEASE:
        return client.latest_release().to_dict()
    if args.LATEST_SNAPSHOT:
        return client.latest_snapshot().to_dict()
    if args.VERSIONS:
        return [client.version(v).to_dict() for v in args.VERSIONS]
    details = client.all_versions()
    logging.info("Resolved %d versions.", len(details))
    return [d.to_dict() for d in details]


def export_json(data, path):
    """Write ``data`` as JSON to ``path``, or to stdout when path is None."""
    if path is None:
        json.dump(data, sys.stdout, ensure_ascii=False, indent=4)
        sys.stdout.write("\n")
        return
    try:
        with open(path, 'w', encoding='utf-8') as file:
            json.dump(data, file, ensure_ascii=False, indent=4)
        logging.info("JSON file has been successfully exported at: %s", path)
    except OSError as e:
        logging.error("JSON file couldn't be written to disk: %s", e)
        sys.exit(ExitCodes.FILE_ERROR.value)


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

    client = VersionClient(timeout=args.TIMEOUT, max_workers=args.WORKERS)
    try:
        data = run_action(client, args)
    except NotFoundError as e:
        logging.error("%s", e)
        sys.exit(ExitCodes.NOT_FOUND.value)
    except PoisonedCacheError as e:
        logging.error("Version manifest unavailable: %s", e.cause)
        sys.exit(ExitCodes.CONNECTION_ERROR.value)
    except FetchError as e:
        logging.error("Request failed: %s", e)
        sys.exit(ExitCodes.CONNECTION_ERROR.value)

    export_json(data, args.OUTPUT)
    sys.exit(ExitCodes.SUCCESS.value)


if __name__ == "__main__":
    main()
