#!/usr/bin/env python3
"""
run_server.py - CLI entrypoint for the txwatch HTTP server.

Usage:
    python run_server.py
    python run_server.py --rpc-url https://ethereum-rpc.publicnode.com --port 8080
"""

import dataclasses
import sys

import click
import uvicorn

from api.app import build_service, create_app
from config import load_settings
from core.logging import get_logger, set_global_context, setup_logging

logger = get_logger("txwatch.server")


@click.command()
@click.option(
    "--rpc-url",
    default=None,
    help="JSON-RPC node endpoint (overrides config and TXWATCH_RPC_URL)",
)
@click.option(
    "--host",
    default=None,
    help="Bind address",
)
@click.option(
    "--port",
    "-p",
    default=None,
    type=int,
    help="Bind port",
)
@click.option(
    "--log-level",
    "-l",
    default=None,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"]),
    help="Log level",
)
@click.option(
    "--json-logs/--console-logs",
    default=None,
    help="Use JSON log format",
)
def main(
    rpc_url: str | None,
    host: str | None,
    port: int | None,
    log_level: str | None,
    json_logs: bool | None,
) -> None:
    """
    txwatch server.

    Tracks an address's transactions in the latest block of an
    Ethereum-compatible chain.
    """
    overrides = {
        "rpc_url": rpc_url,
        "host": host,
        "port": port,
        "log_level": log_level,
        "json_logs": json_logs,
    }
    settings = dataclasses.replace(
        load_settings(),
        **{k: v for k, v in overrides.items() if v is not None},
    )

    setup_logging(level=settings.log_level, json_output=settings.json_logs)
    set_global_context(service="txwatch", version="0.1.0")

    logger.info(
        "Starting txwatch",
        extra={
            "context": {
                "rpc_url": settings.rpc_url,
                "host": settings.host,
                "port": settings.port,
            }
        },
    )

    app = create_app(build_service(settings))

    try:
        uvicorn.run(app, host=settings.host, port=settings.port, log_config=None)
    except Exception as e:
        logger.error(
            f"Server error: {e}",
            extra={"context": {"error": str(e)}},
            exc_info=True,
        )
        sys.exit(1)


if __name__ == "__main__":
    main()
