"""Command line check: print the API key parsed from Authorization values."""

import argparse
import json
import logging
import sys
from pathlib import Path

from apikeyauth.auth import (
    AUTHORIZATION_HEADER,
    MalformedHeaderError,
    NoAuthHeaderError,
    get_api_key,
)
from apikeyauth.config import load_config

log = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_NO_HEADER = 1
EXIT_MALFORMED = 2


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="apikeyauth",
        description="Parse Authorization header values using the ApiKey scheme",
    )
    parser.add_argument(
        "values",
        nargs="*",
        metavar="VALUE",
        help="Authorization header value, repeat for duplicate headers",
    )
    parser.add_argument("--config", type=Path, default=None, help="YAML config file")
    args = parser.parse_args(argv)

    config = load_config(args.config)

    logging.basicConfig(
        level=getattr(logging, config["logging"]["level"].upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    headers = {AUTHORIZATION_HEADER: args.values}
    try:
        key = get_api_key(headers)
    except NoAuthHeaderError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_NO_HEADER
    except MalformedHeaderError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_MALFORMED

    if len(args.values) > 1:
        log.info("Ignoring %d duplicate Authorization values", len(args.values) - 1)
    print(json.dumps(key))
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
