"""
Transfer log scanning over ``eth_getLogs``.
"""

import logging
from typing import Any

from .exceptions import ChainRpcError, DecodeError
from .models import LogEntry
from .rpc_client import JsonRpcClient
from .utils.hex_codec import TRANSFER_EVENT_TOPIC, format_address_for_topics

GET_LOGS_METHOD = "eth_getLogs"


class LogScanner:
    """
    Queries ERC-20 Transfer logs that mention an address.

    The whole chain history is scanned (``0x0`` to ``latest``) and any
    emitting contract is accepted. The address topic is passed as a
    two-element alternation in topic position 1, so a node applying
    standard positional matching returns the transfers sent by the address.
    """

    def __init__(self, rpc_client: JsonRpcClient) -> None:
        self.rpc_client = rpc_client
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def build_filter(self, address: str) -> dict[str, Any]:
        """Build the ``eth_getLogs`` filter object for an address."""
        address_topic = format_address_for_topics(address)
        return {
            "fromBlock": "0x0",
            "toBlock": "latest",
            "address": None,
            "topics": [
                TRANSFER_EVENT_TOPIC,
                [address_topic, address_topic],
            ],
        }

    async def scan_transfer_logs(
        self,
        address: str,
        chain_id: int,
        deadline: float | None = None
    ) -> list[LogEntry]:
        """
        Fetch Transfer logs for an address.

        Any transport, protocol or decode failure is logged and yields an
        empty list; a partially decodable result is discarded as a whole.

        :param address: Address to search for, any case, ``0x`` optional
        :param chain_id: Chain ID used as the request id
        :param deadline: Absolute event-loop deadline
        :return: Logs in the order the node returned them
        """
        try:
            result = await self.rpc_client.call(
                GET_LOGS_METHOD,
                [self.build_filter(address)],
                chain_id,
                deadline=deadline
            )
            logs = self._parse_logs(result)
        except ChainRpcError as e:
            self.logger.error(f"failed to get logs for {address}: {e}")
            return []

        self.logger.info(f"Found {len(logs)} transfer logs for {address}")
        return logs

    def _parse_logs(self, result: Any) -> list[LogEntry]:
        """Decode the ``eth_getLogs`` result array."""
        if result is None:
            return []
        if not isinstance(result, list):
            raise DecodeError(f"eth_getLogs result is not a list: {type(result).__name__}")

        return [LogEntry.from_rpc(raw) for raw in result]
