#!/usr/bin/env python3
"""Chain reader for the eth-parser service.

This module composes the chain ID resolver, log scanner and transaction
enricher behind the TransactionsReader interface, and owns the memo of the
last observed block height. Every chain failure is absorbed here and turned
into a neutral value (0 or an empty list).
"""

import asyncio
import logging
from typing import Protocol

from .chain_id import ChainIdResolver
from .enricher import TransactionEnricher
from .exceptions import ChainRpcError
from .log_scanner import LogScanner
from .models import Transaction
from .rpc_client import JsonRpcClient
from .utils.hex_codec import hex_to_int

# Get logger for this module
logger = logging.getLogger(__name__)

BLOCK_NUMBER_METHOD = "eth_blockNumber"


class TransactionsReader(Protocol):
    """Read access to chain data for subscribed addresses."""

    async def get_transactions(
        self, address: str, deadline: float | None = None
    ) -> list[Transaction]:
        """Fetch inbound/outbound transfer transactions for an address."""
        ...

    async def get_current_block(self, deadline: float | None = None) -> int:
        """Fetch the latest block height."""
        ...


class EthereumReader:
    """Reads blocks and transfer transactions from an Ethereum node.

    Failures never escape: callers receive 0 or an empty list and cannot
    tell a failed lookup from a genuinely empty answer.
    """

    def __init__(
        self,
        rpc_client: JsonRpcClient,
        chain_id_resolver: ChainIdResolver | None = None,
        log_scanner: LogScanner | None = None,
        enricher: TransactionEnricher | None = None
    ) -> None:
        """Initialize the reader.

        Args:
            rpc_client: JSON-RPC client for the node
            chain_id_resolver: Resolver (defaults to an uncached one)
            log_scanner: Log scanner (defaults to one on rpc_client)
            enricher: Enricher (defaults to a sequential one on rpc_client)
        """
        self.rpc_client = rpc_client
        self.chain_id_resolver = chain_id_resolver or ChainIdResolver(rpc_client)
        self.log_scanner = log_scanner or LogScanner(rpc_client)
        self.enricher = enricher or TransactionEnricher(rpc_client)

        # Last observed block height, written only under _block_lock
        self._block: int = 0
        self._block_lock = asyncio.Lock()

    @property
    def current_block(self) -> int:
        """Last block height returned by get_current_block (0 before any)."""
        return self._block

    async def get_current_block(self, deadline: float | None = None) -> int:
        """Fetch the latest block height and remember it.

        Args:
            deadline: Absolute event-loop deadline

        Returns:
            Block height, or 0 on any failure
        """
        try:
            chain_id = await self.chain_id_resolver.resolve(deadline)
        except ChainRpcError as e:
            logger.error(f"getting chain ID: {e}")
            self.chain_id_resolver.invalidate()
            return 0

        try:
            result = await self.rpc_client.call(
                BLOCK_NUMBER_METHOD, [], chain_id, deadline=deadline
            )
            block_number = hex_to_int(result)
        except ChainRpcError as e:
            logger.error(f"getting block number: {e}")
            return 0

        async with self._block_lock:
            self._block = block_number
            return self._block

    async def get_transactions(
        self, address: str, deadline: float | None = None
    ) -> list[Transaction]:
        """Fetch the transfer transactions of an address.

        Args:
            address: Address to look up
            deadline: Absolute event-loop deadline

        Returns:
            Transactions in log order, or an empty list on failure
        """
        try:
            chain_id = await self.chain_id_resolver.resolve(deadline)
        except ChainRpcError as e:
            logger.error(f"getting chain ID: {e}")
            self.chain_id_resolver.invalidate()
            return []

        logs = await self.log_scanner.scan_transfer_logs(address, chain_id, deadline)
        if not logs:
            return []

        transactions = await self.enricher.enrich(logs, chain_id, deadline)
        logger.info(f"Resolved {len(transactions)} transactions for {address}")
        return transactions
