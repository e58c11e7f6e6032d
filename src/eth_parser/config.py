#!/usr/bin/env python3
"""Configuration management for eth-parser.

This module provides type-safe configuration dataclasses with validation
for the parser service. Configuration is loaded from environment variables
with sensible defaults where appropriate.
"""

import logging
import os
from dataclasses import dataclass
from urllib.parse import urlparse

# Get logger for this module
logger = logging.getLogger(__name__)

DEFAULT_RPC_URL = "https://cloudflare-eth.com"

_TRUE_VALUES = {"1", "true", "yes", "on"}


@dataclass(frozen=True, slots=True)
class RpcConfig:
    """Configuration for the remote Ethereum node.

    Attributes:
        rpc_url: HTTP(S) JSON-RPC endpoint
        request_timeout: HTTP timeout for a single request in seconds
        call_timeout: Deadline for a whole public operation in seconds (None = unbounded)
        cache_chain_id: Memoize the chain ID after the first successful lookup
    """

    rpc_url: str = DEFAULT_RPC_URL
    request_timeout: float = 180.0
    call_timeout: float | None = None
    cache_chain_id: bool = False

    def __post_init__(self) -> None:
        """Validate RPC configuration."""
        if not self.rpc_url:
            raise ValueError("RPC URL is required (RPC_URL)")

        parsed = urlparse(self.rpc_url)
        if parsed.scheme not in ('http', 'https'):
            raise ValueError(
                f"Invalid RPC URL scheme: {parsed.scheme}. "
                "Expected http or https"
            )

        if self.request_timeout <= 0:
            raise ValueError(f"Request timeout must be positive, got {self.request_timeout}")
        if self.request_timeout > 600:
            raise ValueError(f"Request timeout too long (max 600s), got {self.request_timeout}")

        if self.call_timeout is not None and self.call_timeout <= 0:
            raise ValueError(f"Call timeout must be positive, got {self.call_timeout}")


@dataclass(frozen=True, slots=True)
class EnrichmentConfig:
    """Configuration for per-log transaction lookups."""
    max_workers: int = 1  # concurrent eth_getTransactionByHash calls

    def __post_init__(self) -> None:
        """Validate enrichment configuration."""
        if self.max_workers <= 0:
            raise ValueError(f"Enrichment workers must be positive, got {self.max_workers}")
        if self.max_workers > 32:
            raise ValueError(f"Enrichment workers too high (max 32), got {self.max_workers}")


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Configuration for the HTTP listener."""
    host: str = "0.0.0.0"
    port: int = 8080

    def __post_init__(self) -> None:
        """Validate server configuration."""
        if not self.host:
            raise ValueError("Server host is required (HOST)")
        if not 0 < self.port < 65536:
            raise ValueError(f"Port must be between 1 and 65535, got {self.port}")


@dataclass(frozen=True, slots=True)
class ParserConfig:
    """Main configuration for the parser service.

    Attributes:
        rpc: Configuration for the remote node
        enrichment: Configuration for transaction enrichment
        server: Configuration for the HTTP listener
    """

    rpc: RpcConfig
    enrichment: EnrichmentConfig
    server: ServerConfig

    @classmethod
    def from_env(cls) -> "ParserConfig":
        """Load configuration from environment variables.

        Returns:
            ParserConfig instance with loaded values

        Raises:
            ValueError: If environment variables are invalid
        """
        call_timeout = os.environ.get("CALL_TIMEOUT", "").strip()

        rpc_config = RpcConfig(
            rpc_url=os.environ.get("RPC_URL", DEFAULT_RPC_URL),
            request_timeout=float(os.environ.get("REQUEST_TIMEOUT", "180")),
            call_timeout=float(call_timeout) if call_timeout else None,
            cache_chain_id=os.environ.get("CACHE_CHAIN_ID", "false").strip().lower() in _TRUE_VALUES
        )

        enrichment_config = EnrichmentConfig(
            max_workers=int(os.environ.get("ENRICH_WORKERS", "1"))
        )

        server_config = ServerConfig(
            host=os.environ.get("HOST", "0.0.0.0"),
            port=int(os.environ.get("PORT", "8080"))
        )

        return cls(
            rpc=rpc_config,
            enrichment=enrichment_config,
            server=server_config
        )

    def log_config(self) -> None:
        """Log the configuration in a readable format for debugging."""
        logger.info("=" * 60)
        logger.info("eth-parser Configuration")
        logger.info("=" * 60)

        logger.info("RPC:")
        logger.info(f"  URL: {self.rpc.rpc_url}")
        logger.info(f"  Request Timeout: {self.rpc.request_timeout} seconds")
        if self.rpc.call_timeout is not None:
            logger.info(f"  Call Timeout: {self.rpc.call_timeout} seconds")
        logger.info(f"  Chain ID Cache: {'ON' if self.rpc.cache_chain_id else 'OFF'}")

        logger.info("Enrichment:")
        logger.info(f"  Workers: {self.enrichment.max_workers}")

        logger.info("Server:")
        logger.info(f"  Listen: {self.server.host}:{self.server.port}")

        logger.info("=" * 60)
