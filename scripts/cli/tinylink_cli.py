#!/usr/bin/env python3
"""
Command-line interface for tinylink.

Usage:
    python tinylink_cli.py create <url> [--code CODE]
    python tinylink_cli.py stats <code>
    python tinylink_cli.py list
    python tinylink_cli.py delete <code>
    python tinylink_cli.py health

The store is chosen from the same environment as the service
(STORE_BACKEND, DATABASE_URL, REDIS_URL).
"""

import argparse
import asyncio
import json
import sys
import os
from typing import Optional

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '../..')))

from config import load_config
from tinylink.database import create_store
from tinylink.errors import LinkError
from tinylink.registrar import LinkRegistrar
from tinylink.shortcode import ShortCodeGenerator
from tinylink.common.logging_config import setup_logging


def emit(payload: dict, ok: bool = True) -> int:
    print(json.dumps(payload, indent=2), file=sys.stdout if ok else sys.stderr)
    return 0 if ok else 1


class TinyLinkCLI:
    """Command-line interface for link management."""

    def __init__(self, verbose: bool = False):
        self.config = load_config()
        self.logger = setup_logging(level="DEBUG" if verbose else "WARNING")
        self.store = None
        self.registrar = None

    async def initialize(self):
        self.store = create_store(self.config, logger=self.logger)
        self.registrar = LinkRegistrar(
            store=self.store,
            short_code_generator=ShortCodeGenerator(default_length=self.config.short_code_length),
            logger=self.logger,
            max_attempts=self.config.max_generation_attempts,
            code_length=self.config.short_code_length,
        )

    async def cleanup(self):
        if self.store:
            await self.store.close()

    async def create(self, url: str, code: Optional[str] = None) -> int:
        link = await self.registrar.register(url, code)
        return emit({"success": True, "link": link.to_dict()})

    async def stats(self, code: str) -> int:
        link = await self.registrar.get_stats(code)
        return emit({"success": True, "link": link.to_dict()})

    async def list_links(self) -> int:
        links = await self.registrar.list()
        return emit({
            "success": True,
            "count": len(links),
            "links": [link.to_dict() for link in links],
        })

    async def delete(self, code: str) -> int:
        await self.registrar.remove(code)
        return emit({"success": True, "message": f"Deleted {code}"})

    async def health(self) -> int:
        healthy = await self.store.health_check()
        return emit({
            "success": healthy,
            "store": self.config.store_backend,
            "status": "healthy" if healthy else "unhealthy",
        }, ok=healthy)


async def run(args) -> int:
    cli = TinyLinkCLI(verbose=args.verbose)
    await cli.initialize()

    try:
        if args.command == "create":
            return await cli.create(args.url, args.code)
        elif args.command == "stats":
            return await cli.stats(args.code)
        elif args.command == "list":
            return await cli.list_links()
        elif args.command == "delete":
            return await cli.delete(args.code)
        elif args.command == "health":
            return await cli.health()
        return 1
    except LinkError as e:
        return emit({"success": False, "error": e.message, "type": e.error_type}, ok=False)
    finally:
        await cli.cleanup()


def main():
    parser = argparse.ArgumentParser(description="tinylink command-line interface")
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose output")

    subparsers = parser.add_subparsers(dest="command", required=True)

    create_parser = subparsers.add_parser("create", help="Create a short link")
    create_parser.add_argument("url", help="Target URL")
    create_parser.add_argument("--code", help="Custom code (6-8 alphanumeric characters)")

    stats_parser = subparsers.add_parser("stats", help="Show link statistics")
    stats_parser.add_argument("code", help="Short code")

    subparsers.add_parser("list", help="List all links, newest first")

    delete_parser = subparsers.add_parser("delete", help="Delete a link")
    delete_parser.add_argument("code", help="Short code")

    subparsers.add_parser("health", help="Check store health")

    args = parser.parse_args()
    sys.exit(asyncio.run(run(args)))


if __name__ == "__main__":
    main()
