#!/usr/bin/env python3
"""
Command-line interface for the link shortener.

Usage:
    shortlinks shorten <url> [--alias ALIAS] [--owner OWNER]
    shortlinks get <code>
    shortlinks info <code>
    shortlinks list --owner OWNER [--limit N]
    shortlinks delete <code> --owner OWNER
    shortlinks stats
    shortlinks health
    shortlinks init-db
"""

import argparse
import asyncio
import json
import sys
from typing import List, Optional

from config import Config, load_config

from .bootstrap import build_cache, build_service, build_store
from .common.logging_config import setup_logging
from .database.base import LinkStoreBase
from .database.cache import RedisCache
from .errors import ShortLinkError
from .service import ShortLinkService


class ShortLinksCLI:
    """Command-line interface for the link service."""

    def __init__(self, config: Config, verbose: bool = False):
        """Initialize CLI with the same settings the server uses."""
        self.config = config
        # Logs go to stderr so stdout stays valid JSON
        self.logger = setup_logging(level="DEBUG" if verbose else "ERROR", stream=sys.stderr)
        self.store: Optional[LinkStoreBase] = None
        self.cache: Optional[RedisCache] = None
        self.service: Optional[ShortLinkService] = None

    async def initialize(self):
        """Initialize store and service."""
        self.store = build_store(self.config, logger=self.logger)
        self.cache = await build_cache(self.config, logger=self.logger)
        self.service = build_service(self.config, self.store, cache=self.cache, logger=self.logger)

    async def cleanup(self):
        """Cleanup resources."""
        if self.service:
            await self.service.close()

    def _emit(self, payload: dict, error: bool = False) -> int:
        print(json.dumps(payload, indent=2, default=str), file=sys.stderr if error else sys.stdout)
        return 1 if error else 0

    def _fail(self, e: ShortLinkError) -> int:
        return self._emit({"success": False, "error": e.message, "status": e.status_code}, error=True)

    async def shorten(self, url: str, alias: Optional[str] = None, owner: Optional[str] = None) -> int:
        """Shorten a URL."""
        try:
            link = await self.service.create_link(url, alias=alias, owner=owner)
        except ShortLinkError as e:
            return self._fail(e)
        return self._emit({"success": True, **link.to_dict()})

    async def get(self, code: str) -> int:
        """Print the destination for a code without counting a click."""
        try:
            link = await self.service.resolve(code)
        except ShortLinkError as e:
            return self._fail(e)
        return self._emit({"success": True, "code": code, "destination": link.destination})

    async def info(self, code: str) -> int:
        """Print everything known about a code."""
        try:
            link = await self.service.get_link(code)
        except ShortLinkError as e:
            return self._fail(e)
        return self._emit({"success": True, **link.to_dict()})

    async def list_links(self, owner: str, limit: int) -> int:
        """List an owner's links."""
        try:
            links = await self.service.list_links(owner, limit=limit)
        except ShortLinkError as e:
            return self._fail(e)
        return self._emit({
            "success": True,
            "count": len(links),
            "links": [link.to_dict() for link in links],
        })

    async def delete(self, code: str, owner: str) -> int:
        """Delete an owner's link."""
        try:
            await self.service.delete_link(code, owner)
        except ShortLinkError as e:
            return self._fail(e)
        return self._emit({"success": True, "message": f"Deleted {code}"})

    async def stats(self) -> int:
        """Print store statistics."""
        return self._emit({"success": True, **await self.service.get_statistics()})

    async def health(self) -> int:
        """Print health status; exit code 1 when unhealthy."""
        health = await self.service.health_check()
        return self._emit({"success": health["overall"], **health}, error=not health["overall"])

    async def init_db(self) -> int:
        """Create the database schema."""
        await self.store.ensure_schema()
        return self._emit({"success": True, "message": "Schema ready"})


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="shortlinks", description="Link shortener CLI")
    # Unset flags fall back to the environment, exactly as for the server
    parser.add_argument("--database-url", help="PostgreSQL connection URL (overrides DATABASE_URL)")
    parser.add_argument(
        "--backend",
        choices=("postgres", "memory"),
        help="Link store backend (overrides STORE_BACKEND)",
    )
    parser.add_argument("--redis-url", help="Redis connection URL (overrides REDIS_URL)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", required=True)

    shorten = subparsers.add_parser("shorten", help="Create a short link")
    shorten.add_argument("url")
    shorten.add_argument("--alias", help="Custom short code")
    shorten.add_argument("--owner", help="Owner id to record")

    get = subparsers.add_parser("get", help="Show the destination of a code")
    get.add_argument("code")

    info = subparsers.add_parser("info", help="Show details of a code")
    info.add_argument("code")

    list_cmd = subparsers.add_parser("list", help="List an owner's links")
    list_cmd.add_argument("--owner", required=True)
    list_cmd.add_argument("--limit", type=int, default=100)

    delete = subparsers.add_parser("delete", help="Delete an owner's link")
    delete.add_argument("code")
    delete.add_argument("--owner", required=True)

    subparsers.add_parser("stats", help="Show statistics")
    subparsers.add_parser("health", help="Check store and cache health")
    subparsers.add_parser("init-db", help="Create the database schema")

    return parser


def config_from_args(args: argparse.Namespace, base: Optional[Config] = None) -> Config:
    """Environment configuration with any command-line overrides applied."""
    config = base or load_config()
    overrides = {
        "database_url": args.database_url,
        "store_backend": args.backend,
        "redis_url": args.redis_url,
    }
    return config.model_copy(update={k: v for k, v in overrides.items() if v is not None})


async def run(args: argparse.Namespace) -> int:
    cli = ShortLinksCLI(config_from_args(args), verbose=args.verbose)
    await cli.initialize()
    try:
        if args.command == "shorten":
            return await cli.shorten(args.url, alias=args.alias, owner=args.owner)
        if args.command == "get":
            return await cli.get(args.code)
        if args.command == "info":
            return await cli.info(args.code)
        if args.command == "list":
            return await cli.list_links(args.owner, args.limit)
        if args.command == "delete":
            return await cli.delete(args.code, args.owner)
        if args.command == "stats":
            return await cli.stats()
        if args.command == "health":
            return await cli.health()
        return await cli.init_db()
    finally:
        await cli.cleanup()


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
