#!/usr/bin/env python3
"""
Command-line interface for URL shortener.

Works directly against the configured store (same URLSHORTENER_* settings
as the server).

Usage:
    python tinyurl_cli.py shorten <url>
    python tinyurl_cli.py info <slug>
    python tinyurl_cli.py resolve <slug>
    python tinyurl_cli.py health
"""

import argparse
import asyncio
import json
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "../..")))

from config import Config
from tinyurl.database import create_repository, PostgresURLRepository
from tinyurl.exceptions import URLShortenerError
from tinyurl.resolver import RedirectResolver
from tinyurl.service import ShortenService
from tinyurl.shortener import CanonicalShortener
from tinyurl.common.logging_config import setup_logging


class URLShortenerCLI:
    """Command-line interface for URL shortener."""

    def __init__(self, config: Config, verbose: bool = False):
        """Initialize CLI."""
        self.config = config
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.repository = create_repository(config, logger=self.logger)
        self.shortener = CanonicalShortener(
            domain=config.domain,
            prefix=config.path_prefix,
            slug_length=config.slug_length,
            logger=self.logger,
        )
        self.service = ShortenService(
            repository=self.repository,
            shortener=self.shortener,
            expiry=config.expiry,
            logger=self.logger,
        )
        self.resolver = RedirectResolver(
            repository=self.repository,
            shortener=self.shortener,
            logger=self.logger,
        )

    async def initialize(self):
        """Connect to the store."""
        if isinstance(self.repository, PostgresURLRepository):
            await self.repository.connect(
                max_retries=self.config.db_connect_max_retries,
                retry_interval_seconds=self.config.db_connect_retry_interval_seconds,
            )

    async def cleanup(self):
        """Cleanup resources."""
        await self.repository.close()

    def _path(self, slug: str) -> str:
        return f"{self.config.path_prefix}{slug}"

    async def shorten(self, url: str):
        """Shorten a URL."""
        record = await self.service.shorten(url)
        print(json.dumps({"success": True, **record.to_dict()}, indent=2))
        return 0

    async def info(self, slug: str):
        """Show the stored record for a slug."""
        record = await self.resolver.describe(self._path(slug))
        print(json.dumps({"success": True, **record.to_dict()}, indent=2))
        return 0

    async def resolve(self, slug: str):
        """Resolve a slug as a redirect would, counting a click."""
        original_url = await self.resolver.resolve(self._path(slug))
        print(json.dumps({"success": True, "original_url": original_url}, indent=2))
        return 0

    async def health(self):
        """Check store health."""
        healthy = await self.repository.health_check()
        print(json.dumps({"success": healthy, "database": "healthy" if healthy else "unhealthy"}, indent=2))
        return 0 if healthy else 1


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="URL Shortener CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Shorten a URL
  %(prog)s shorten https://example.com/long/url

  # Show a record and its click count
  %(prog)s info 3kTMd9

  # Resolve a slug (counts a click)
  %(prog)s resolve 3kTMd9

  # Check health
  %(prog)s health
        """
    )

    parser.add_argument(
        "--database-url",
        help="Database connection URL (default: URLSHORTENER_DATABASE_URL)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    shorten_parser = subparsers.add_parser("shorten", help="Shorten a URL")
    shorten_parser.add_argument("url", help="URL to shorten")

    info_parser = subparsers.add_parser("info", help="Show a short URL record")
    info_parser.add_argument("slug", help="Slug to look up")

    resolve_parser = subparsers.add_parser("resolve", help="Resolve a slug like a redirect")
    resolve_parser.add_argument("slug", help="Slug to resolve")

    subparsers.add_parser("health", help="Check store health")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        return 1

    overrides = {"database_url": args.database_url} if args.database_url else {}
    cli = URLShortenerCLI(Config(**overrides), verbose=args.verbose)

    try:
        await cli.initialize()

        if args.command == "shorten":
            return await cli.shorten(args.url)
        elif args.command == "info":
            return await cli.info(args.slug)
        elif args.command == "resolve":
            return await cli.resolve(args.slug)
        elif args.command == "health":
            return await cli.health()
        else:
            parser.print_help()
            return 1

    except URLShortenerError as e:
        print(json.dumps({
            "success": False,
            "error": type(e).__name__,
            "detail": str(e),
        }, indent=2), file=sys.stderr)
        return 1

    finally:
        await cli.cleanup()


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
