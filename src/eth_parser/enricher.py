"""
Transaction enrichment: resolve the full transaction behind each log.
"""

import asyncio
import logging

from .exceptions import ChainRpcError, DeadlineExceeded
from .models import LogEntry, Transaction
from .rpc_client import JsonRpcClient

GET_TRANSACTION_METHOD = "eth_getTransactionByHash"


class TransactionEnricher:
    """
    Fetches ``eth_getTransactionByHash`` for every log entry.

    Features:
    - Bounded fan-out (``max_workers`` requests in flight, 1 = sequential)
    - Output order always matches log order
    - A failed lookup skips that entry only
    - Once the deadline passes no new lookups start; finished ones are kept
    """

    def __init__(self, rpc_client: JsonRpcClient, max_workers: int = 1) -> None:
        """
        Initialize the TransactionEnricher.

        Args:
            rpc_client: JSON-RPC client for the node
            max_workers: Maximum concurrent lookups
        """
        if max_workers <= 0:
            raise ValueError(f"max_workers must be positive, got {max_workers}")

        self.rpc_client = rpc_client
        self.max_workers = max_workers
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    async def fetch_transaction(
        self,
        tx_hash: str,
        chain_id: int,
        deadline: float | None = None
    ) -> Transaction:
        """
        Resolve a single transaction by hash.

        :raises ChainRpcError: If the lookup or decoding fails
        """
        result = await self.rpc_client.call(
            GET_TRANSACTION_METHOD, [tx_hash], chain_id, deadline=deadline
        )
        return Transaction.from_rpc(result)

    async def enrich(
        self,
        logs: list[LogEntry],
        chain_id: int,
        deadline: float | None = None
    ) -> list[Transaction]:
        """
        Resolve the transactions referenced by a batch of logs.

        :param logs: Logs in scanner order
        :param chain_id: Chain ID used as the request id
        :param deadline: Absolute event-loop deadline
        :return: Transactions for every log that resolved, in log order
        """
        if not logs:
            return []

        # One slot per log so concurrent completion cannot reorder results
        slots: list[Transaction | None] = [None] * len(logs)
        semaphore = asyncio.Semaphore(self.max_workers)
        expired = False

        async def worker(index: int, entry: LogEntry) -> None:
            nonlocal expired
            async with semaphore:
                if expired:
                    return
                try:
                    slots[index] = await self.fetch_transaction(
                        entry.transaction_hash, chain_id, deadline
                    )
                except DeadlineExceeded:
                    if not expired:
                        self.logger.warning(
                            f"Deadline reached after {index} of {len(logs)} lookups, "
                            "returning partial result"
                        )
                    expired = True
                except ChainRpcError as e:
                    self.logger.error(
                        f"failed to get transaction details for hash {entry.transaction_hash}: {e}"
                    )

        await asyncio.gather(*(worker(i, entry) for i, entry in enumerate(logs)))

        transactions = [tx for tx in slots if tx is not None]
        if len(transactions) != len(logs):
            self.logger.info(f"Enriched {len(transactions)} of {len(logs)} logs")
        return transactions
