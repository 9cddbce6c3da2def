#!/usr/bin/env python3
"""
Main entry point for the tinylink service.

Usage:
    python app.py

Environment variables:
    STORE_BACKEND - memory, postgres or redis
    DATABASE_URL - PostgreSQL connection URL
    CREATE_TABLES - Set to 'true' to create the links table on startup
    REDIS_URL - Redis connection URL (redis backend)
    PORT - Port to listen on
    WORKERS - Number of uvicorn worker processes (default 1)
    LOG_LEVEL - Logging level
"""

import signal
import sys
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI

from config import load_config
from tinylink.database import PostgresLinkStore, create_store
from tinylink.health import ProcessInfo
from tinylink.registrar import LinkRegistrar
from tinylink.resolver import LinkResolver
from tinylink.shortcode import ShortCodeGenerator
from tinylink.common.logging_config import setup_logging
from web_app import create_app


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the store and core components; close the store on shutdown."""
    config = app.state.config
    logger = app.state.logger

    logger.info(f"Starting tinylink with {config.store_backend} store...")

    store = create_store(config, logger=logger)
    if config.create_tables and isinstance(store, PostgresLinkStore):
        await store.ensure_tables()

    generator = ShortCodeGenerator(default_length=config.short_code_length)

    app.state.store = store
    app.state.resolver = LinkResolver(store=store, logger=logger)
    app.state.registrar = LinkRegistrar(
        store=store,
        short_code_generator=generator,
        logger=logger,
        max_attempts=config.max_generation_attempts,
        code_length=config.short_code_length,
    )

    logger.info("Service started successfully")

    yield

    logger.info("Shutting down tinylink...")
    await store.close()
    logger.info("Service stopped")


def main():
    """Main entry point."""
    config = load_config()

    # Uptime is measured from here
    process_info = ProcessInfo.capture(config.app_version)

    logger = setup_logging(
        level=config.log_level,
        log_file=config.log_file,
        json_format=config.log_json,
    )

    logger.info("tinylink URL shortener")
    logger.info(f"Configuration: {config.model_dump(exclude={'database_url', 'redis_url'})}")

    # Store and core components are attached by the lifespan
    app = create_app(
        store=None,
        resolver=None,
        registrar=None,
        config=config,
        process_info=process_info,
    )

    app.state.logger = logger
    app.router.lifespan_context = lifespan

    uvicorn_config = uvicorn.Config(
        app,
        host=config.host,
        port=config.port,
        workers=config.workers,
        log_level=config.log_level.lower(),
        access_log=True,
    )

    server = uvicorn.Server(uvicorn_config)

    def handle_signal(signum, frame):
        logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        server.should_exit = True

    signal.signal(signal.SIGINT, handle_signal)
    signal.signal(signal.SIGTERM, handle_signal)

    try:
        logger.info(f"Starting server on {config.host}:{config.port}")
        server.run()
    except Exception as e:
        logger.error(f"Server error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
