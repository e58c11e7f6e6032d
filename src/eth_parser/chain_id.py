import logging

from .exceptions import DecodeError
from .rpc_client import JsonRpcClient
from .utils.hex_codec import hex_to_int

logger = logging.getLogger(__name__)

CHAIN_ID_METHOD = "eth_chainId"
CHAIN_ID_REQUEST_ID = 1


class ChainIdResolver:
    """Resolves the numeric chain ID used to tag subsequent requests.

    Without caching every call issues ``eth_chainId``. With ``cache=True``
    the first successful answer is kept until ``invalidate()``.
    """

    def __init__(self, rpc_client: JsonRpcClient, cache: bool = False) -> None:
        self.rpc_client = rpc_client
        self.cache = cache
        self._cached: int | None = None

    async def resolve(self, deadline: float | None = None) -> int:
        """
        Return the chain ID of the connected node.

        :param deadline: Absolute event-loop deadline for the lookup
        :return: Chain ID
        :raises ChainRpcError: If the lookup fails
        """
        if self.cache and self._cached is not None:
            return self._cached

        result = await self.rpc_client.call(
            CHAIN_ID_METHOD, [], CHAIN_ID_REQUEST_ID, deadline=deadline
        )
        if not result:
            raise DecodeError("missing response data")

        chain_id = hex_to_int(result)

        if self.cache:
            logger.info(f"Caching chain ID {chain_id}")
            self._cached = chain_id

        return chain_id

    def invalidate(self) -> None:
        """Forget a cached chain ID."""
        self._cached = None
