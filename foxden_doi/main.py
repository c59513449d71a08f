"""Main entry point for FOXDEN DOI."""

import argparse
import logging
import sys
from typing import List, Optional

from foxden_doi.__version__ import __version__
from foxden_doi.api.providers import available_providers
from foxden_doi.core.publisher import DOIPublisher
from foxden_doi.errors import FoxdenDOIError
from foxden_doi.utils.config import Config


def setup_logging(verbose: bool = False):
    """Configure logging for the application."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler('foxden-doi.log', encoding='utf-8'),
            logging.StreamHandler()
        ]
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="foxden-doi",
        description="Publish FOXDEN datasets with a DOI provider and record the DOI in the MetaData service"
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--env-file", help="Path to a .env file with FOXDEN_* settings")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    publish = subparsers.add_parser("publish", help="Mint a DOI for a dataset")
    publish.add_argument("--user", required=True)
    publish.add_argument("--provider", required=True, help=f"One of: {', '.join(available_providers())}")
    publish.add_argument("--did", required=True)
    publish.add_argument("--description", default="")

    update = subparsers.add_parser("update", help="Write a minted DOI into the MetaData records of a dataset")
    update.add_argument("--did", required=True)
    update.add_argument("--doi", required=True)
    update.add_argument("--doi-url", required=True)
    update.add_argument("--fail-fast", action="store_true", help="Stop at the first rejected record")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    args = build_parser().parse_args(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    try:
        publisher = DOIPublisher(Config.from_env(args.env_file))
        if args.command == "publish":
            result = publisher.publish_dataset(args.user, args.provider, args.did, args.description)
            print(f"did={args.did} doi={result.doi} doi_url={result.doi_link}")
            return 0

        result = publisher.update_metadata_doi(args.did, args.doi, args.doi_url, fail_fast=args.fail_fast)
        print(f"did={args.did} updated {result.updated} of {result.total} record(s)")
        for failure in result.failures:
            print(f"ERROR: record {failure.index}: {failure.message}", file=sys.stderr)
        return 0 if result.ok else 1
    except FoxdenDOIError as e:
        logger.error(f"{args.command} failed: {e}")
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
