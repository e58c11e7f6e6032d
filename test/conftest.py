"""Shared fixtures: an in-process fake Ethereum node behind httpx.MockTransport."""

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from eth_parser.rpc_client import JsonRpcClient
from eth_parser.utils.hex_codec import TRANSFER_EVENT_TOPIC

Handler = Callable[[dict[str, Any]], httpx.Response]

RPC_URL = "https://node.test"

ADDRESS = "0xAbC0000000000000000000000000000000000DeF"
ADDRESS_TOPIC = "0x000000000000000000000000abc0000000000000000000000000000000000def"


def raw_log(tx_hash: str, block: str = "0x10") -> dict[str, Any]:
    """Build a node log object for a Transfer sent by ADDRESS."""
    return {
        "address": "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48",
        "blockHash": "0x" + "b" * 64,
        "blockNumber": block,
        "data": "0x" + "0" * 63 + "1",
        "logIndex": "0x0",
        "topics": [TRANSFER_EVENT_TOPIC, ADDRESS_TOPIC, "0x" + "0" * 64],
        "transactionHash": tx_hash,
        "transactionIndex": "0x3",
    }


def raw_tx(tx_hash: str, to: str | None = "0xa0b86991c6218b36c1d19d4a2e9eb0ce3606eb48") -> dict[str, Any]:
    """Build a node transaction object."""
    return {
        "blockHash": "0x" + "b" * 64,
        "blockNumber": "0x10",
        "from": "0x1111111111111111111111111111111111111111",
        "gas": "0x5208",
        "gasPrice": "0x3b9aca00",
        "hash": tx_hash,
        "input": "0xa9059cbb",
        "nonce": "0x1",
        "to": to,
        "transactionIndex": "0x0",
        "value": "0x0",
        "v": "0x25",
        "r": "0x" + "1" * 64,
        "s": "0x" + "2" * 64,
    }


def result(value: Any) -> Handler:
    """Answer with a successful envelope."""
    def handler(payload: dict[str, Any]) -> httpx.Response:
        return httpx.Response(200, json={"jsonrpc": "2.0", "id": payload["id"], "result": value})
    return handler


def rpc_error(code: int, message: str) -> Handler:
    """Answer with a JSON-RPC error envelope."""
    def handler(payload: dict[str, Any]) -> httpx.Response:
        return httpx.Response(
            200,
            json={"jsonrpc": "2.0", "id": payload["id"], "error": {"code": code, "message": message}}
        )
    return handler


def connect_error() -> Handler:
    """Fail at the transport level."""
    def handler(payload: dict[str, Any]) -> httpx.Response:
        raise httpx.ConnectError("connection refused")
    return handler


class FakeNode:
    """Dispatches JSON-RPC requests by method and records every payload."""

    def __init__(self) -> None:
        self.handlers: dict[str, list[Handler]] = {}
        self.requests: list[dict[str, Any]] = []

    def on(self, method: str, *handlers: Handler) -> "FakeNode":
        """Register handlers for a method; they are used in order, the last one repeats."""
        self.handlers[method] = list(handlers)
        return self

    def calls(self, method: str) -> list[dict[str, Any]]:
        return [r for r in self.requests if r["method"] == method]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        self.requests.append(payload)

        queue = self.handlers.get(payload["method"])
        if not queue:
            return rpc_error(-32601, "method not found")(payload)

        handler = queue.pop(0) if len(queue) > 1 else queue[0]
        return handler(payload)


@pytest.fixture
def node() -> FakeNode:
    return FakeNode()


@pytest.fixture
def rpc_client(node: FakeNode) -> JsonRpcClient:
    return JsonRpcClient(RPC_URL, request_timeout=5, transport=httpx.MockTransport(node))
