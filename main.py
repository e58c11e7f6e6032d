#!/usr/bin/env python3
"""Entry point for the eth-parser HTTP service.

This module loads configuration from the environment, wires the parser
and serves the HTTP API with uvicorn, which handles SIGINT/SIGTERM and
graceful shutdown.
"""

import argparse
import logging
import os
import sys

from dotenv import load_dotenv


# Configure logging before any other imports create loggers
def setup_logging(level: str = "INFO") -> None:
    """Configure logging for the application.

    Args:
        level: Logging level as string (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    log_level: int = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

# Get logger for this module
logger = logging.getLogger(__name__)

import uvicorn

from eth_parser.api import create_app
from eth_parser.config import ParserConfig
from eth_parser.parser import Parser


def main() -> None:
    """Main entry point for the eth-parser service.

    Parses startup arguments, loads configuration from environment,
    and serves the HTTP API until interrupted.

    Raises:
        SystemExit: On configuration errors
    """
    load_dotenv()

    parser: argparse.ArgumentParser = argparse.ArgumentParser(
        description="eth-parser - list ERC-20 transfer transactions of subscribed addresses",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""Environment Variables:
  RPC_URL          - Ethereum JSON-RPC endpoint (default: https://cloudflare-eth.com)
  REQUEST_TIMEOUT  - HTTP timeout per RPC request in seconds (default: 180)
  CALL_TIMEOUT     - Deadline per API operation in seconds (default: none)
  CACHE_CHAIN_ID   - Cache the chain ID after first lookup (default: false)
  ENRICH_WORKERS   - Concurrent transaction lookups (default: 1)
  HOST / PORT      - Listen address (default: 0.0.0.0:8080)
  LOG_LEVEL        - Logging level (can be overridden with --log-level)
        """
    )
    parser.add_argument("--host", help="Override HOST")
    parser.add_argument("--port", type=int, help="Override PORT")
    parser.add_argument(
        "--log-level",
        default=os.environ.get("LOG_LEVEL", "INFO"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Set the logging level (default: INFO)"
    )
    args: argparse.Namespace = parser.parse_args()

    setup_logging(args.log_level)
    logger.info("=== eth-parser Starting ===")

    try:
        if args.host:
            os.environ["HOST"] = args.host
        if args.port:
            os.environ["PORT"] = str(args.port)

        config: ParserConfig = ParserConfig.from_env()
        config.log_config()
    except ValueError as e:
        logger.error(f"Configuration Error: {e}")
        logger.error("Please check your environment variables:")
        logger.error("  - RPC_URL: http(s) JSON-RPC endpoint")
        logger.error("  - REQUEST_TIMEOUT / CALL_TIMEOUT: positive seconds")
        logger.error("  - ENRICH_WORKERS: 1-32")
        logger.error("  - PORT: 1-65535")
        sys.exit(1)

    app = create_app(Parser.from_config(config))

    logger.info(f"listening at {config.server.host}:{config.server.port}")
    uvicorn.run(
        app,
        host=config.server.host,
        port=config.server.port,
        log_level=args.log_level.lower()
    )
    logger.info("eth-parser stopped")


if __name__ == "__main__":
    main()
