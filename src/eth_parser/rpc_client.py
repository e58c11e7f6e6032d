import asyncio
import logging
from typing import Any

import httpx

from .exceptions import (
    DeadlineExceeded,
    DecodeError,
    RpcProtocolError,
    TransportError,
)

logger = logging.getLogger(__name__)


class JsonRpcClient:
    """JSON-RPC 2.0 client for an Ethereum node over HTTP.

    Builds request envelopes, posts them and unwraps the response envelope.
    The client never retries; every failure is raised as a ChainRpcError
    subclass and handled by the caller.
    """

    JSONRPC_VERSION: str = "2.0"

    def __init__(
        self,
        rpc_url: str,
        request_timeout: float = 180.0,
        transport: httpx.AsyncBaseTransport | None = None
    ) -> None:
        """Initialize the JSON-RPC client.

        Args:
            rpc_url: HTTP(S) endpoint of the node
            request_timeout: HTTP timeout for a single request in seconds
            transport: Optional httpx transport (tests, proxies, sockets)
        """
        self.rpc_url: str = rpc_url
        self.request_timeout: float = request_timeout
        self.transport: httpx.AsyncBaseTransport | None = transport

    def build_request(self, method: str, params: list[Any], request_id: int) -> dict[str, Any]:
        """Build a JSON-RPC request envelope."""
        return {
            "jsonrpc": self.JSONRPC_VERSION,
            "method": method,
            "params": params,
            "id": request_id,
        }

    async def call(
        self,
        method: str,
        params: list[Any],
        request_id: int,
        deadline: float | None = None
    ) -> Any:
        """Invoke a JSON-RPC method and return its ``result``.

        Args:
            method: RPC method name, e.g. ``eth_blockNumber``
            params: Positional parameters
            request_id: Envelope id
            deadline: Absolute event-loop time after which the call is abandoned

        Returns:
            The decoded ``result`` member, which may be None

        Raises:
            DeadlineExceeded: If the deadline passes before or during the call
            TransportError: On connection, timeout or HTTP status failures
            RpcProtocolError: If the envelope carries an ``error`` member
            DecodeError: If the body is not a JSON-RPC envelope
        """
        payload: dict[str, Any] = self.build_request(method, params, request_id)
        remaining: float | None = remaining_time(deadline)

        logger.debug(f"-> {method} id={request_id} params={params}")

        try:
            if remaining is None:
                response = await self._post(payload)
            else:
                response = await asyncio.wait_for(self._post(payload), timeout=remaining)
        except asyncio.TimeoutError:
            raise DeadlineExceeded(f"deadline exceeded during {method}") from None
        except httpx.HTTPError as e:
            raise TransportError(f"failed sending http request for {method}: {e}") from e

        return self._decode_response(method, response)

    async def _post(self, payload: dict[str, Any]) -> httpx.Response:
        """Post an envelope to the node."""
        async with httpx.AsyncClient(transport=self.transport) as client:
            response: httpx.Response = await client.post(
                self.rpc_url,
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self.request_timeout
            )
            return response

    def _decode_response(self, method: str, response: httpx.Response) -> Any:
        """Unwrap a response envelope.

        Args:
            method: Method name, for error messages
            response: Raw HTTP response

        Returns:
            The ``result`` member
        """
        try:
            envelope: Any = response.json()
        except ValueError as e:
            if response.is_error:
                raise TransportError(
                    f"HTTP {response.status_code} from node for {method}"
                ) from e
            raise DecodeError(f"failed json unmarshal for {method}: {e}") from e

        match envelope:
            case {"error": dict() as error}:
                code = error.get("code")
                raise RpcProtocolError(
                    code if isinstance(code, int) else 0,
                    str(error.get("message", ""))
                )
            case {"error": error} if error is not None:
                raise RpcProtocolError(0, str(error))
            case dict() if response.is_error:
                raise TransportError(f"HTTP {response.status_code} from node for {method}")
            case {"result": result}:
                logger.debug(f"<- {method} id={envelope.get('id')}")
                return result
            case dict():
                raise DecodeError(f"{method} response has neither result nor error")
            case _:
                raise DecodeError(f"{method} response is not a JSON object: {envelope!r}")


def remaining_time(deadline: float | None) -> float | None:
    """
    Seconds left until an event-loop deadline.

    :param deadline: Absolute ``loop.time()`` value, or None for no deadline
    :return: Remaining seconds, or None when unbounded
    :raises DeadlineExceeded: If the deadline has already passed
    """
    if deadline is None:
        return None

    remaining = deadline - asyncio.get_running_loop().time()
    if remaining <= 0:
        raise DeadlineExceeded("deadline exceeded")
    return remaining
