#!/usr/bin/env python3
"""Public parser capability.

This module exposes subscribe / get_current_block / get_transactions and
enforces that no transaction data is served for an address without a
subscription.
"""

import asyncio
import logging

from .chain_id import ChainIdResolver
from .config import ParserConfig
from .enricher import TransactionEnricher
from .log_scanner import LogScanner
from .models import Transaction
from .reader import EthereumReader, TransactionsReader
from .registry import AddressRegistry, AddressRepository
from .rpc_client import JsonRpcClient

# Get logger for this module
logger = logging.getLogger(__name__)


class Parser:
    """Subscription-gated access to chain data.

    The registry and the reader are injected, so either can be replaced
    independently. No method reports failure: lookups that fail return 0
    or an empty list.
    """

    def __init__(
        self,
        address_repository: AddressRepository,
        reader: TransactionsReader,
        call_timeout: float | None = None
    ) -> None:
        """Initialize the Parser.

        Args:
            address_repository: Subscription storage
            reader: Chain data reader
            call_timeout: Default per-operation deadline in seconds (None = unbounded)
        """
        self.address_repository = address_repository
        self.reader = reader
        self.call_timeout = call_timeout

    @classmethod
    def from_config(cls, config: ParserConfig) -> "Parser":
        """Wire the in-memory registry and an Ethereum reader from configuration."""
        rpc_client = JsonRpcClient(
            config.rpc.rpc_url,
            request_timeout=config.rpc.request_timeout
        )
        reader = EthereumReader(
            rpc_client,
            chain_id_resolver=ChainIdResolver(rpc_client, cache=config.rpc.cache_chain_id),
            log_scanner=LogScanner(rpc_client),
            enricher=TransactionEnricher(rpc_client, max_workers=config.enrichment.max_workers)
        )
        logger.info(f"Parser wired to {config.rpc.rpc_url}")
        return cls(AddressRegistry(), reader, call_timeout=config.rpc.call_timeout)

    def subscribe(self, address: str) -> bool:
        """Add an address to the observer.

        Args:
            address: Address to observe

        Returns:
            Always True, including for an existing subscription
        """
        if not self.address_repository.is_subscribed(address):
            self.address_repository.add(address)
            logger.info(f"address {address} subscribed")
            return True

        logger.info(f"address {address} already has a subscription")
        return True

    async def get_current_block(self, timeout: float | None = None) -> int:
        """Return the latest block height, or 0 if it could not be read."""
        return await self.reader.get_current_block(self._deadline(timeout))

    async def get_transactions(
        self, address: str, timeout: float | None = None
    ) -> list[Transaction]:
        """List inbound or outbound transfer transactions for an address.

        Args:
            address: Subscribed address
            timeout: Deadline in seconds for the whole lookup

        Returns:
            Transactions, or an empty list when the address is not
            subscribed or the lookup failed
        """
        if not self.address_repository.is_subscribed(address):
            logger.info(f"address {address} has no subscription, return empty list")
            return []

        return await self.reader.get_transactions(address, self._deadline(timeout))

    def _deadline(self, timeout: float | None) -> float | None:
        """Convert a relative timeout into an absolute event-loop deadline."""
        if timeout is None:
            timeout = self.call_timeout
        if timeout is None:
            return None
        return asyncio.get_running_loop().time() + timeout
