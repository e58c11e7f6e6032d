"""
HTTP surface for the parser.

Exposes POST /subscribe, GET /current-block and
GET /address/{address}/transactions. No authentication, no pagination.
"""

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from web3 import Web3

from . import __version__
from .parser import Parser

logger = logging.getLogger(__name__)


def create_app(parser: Parser) -> FastAPI:
    """Build the FastAPI application around a Parser instance."""
    app = FastAPI(
        title="eth-parser",
        description="Subscribe to Ethereum addresses and list their ERC-20 transfer transactions.",
        version=__version__,
    )
    app.state.parser = parser

    @app.post("/subscribe")
    async def subscribe(request: Request) -> dict[str, Any]:
        """Subscribe an address. Body: ``{"address": "0x..."}``."""
        try:
            body = await request.json()
        except ValueError:
            raise HTTPException(status_code=400, detail="invalid request body") from None

        if not isinstance(body, dict):
            raise HTTPException(status_code=400, detail="invalid request body")

        address = body.get("address")
        logger.info(f"POST /subscribe address: {address}")

        if not isinstance(address, str) or not address:
            raise HTTPException(status_code=400, detail="address field is required")
        if not Web3.is_address(address.lower()):
            raise HTTPException(status_code=400, detail=f"invalid address: {address}")

        if not parser.subscribe(address):
            raise HTTPException(status_code=500, detail="subscription failed")

        return {"address": address, "subscribed": True}

    @app.get("/current-block")
    async def current_block() -> dict[str, int]:
        logger.info("GET /current-block")
        return {"current_block": await parser.get_current_block()}

    @app.get("/address/{address}/transactions")
    async def transactions(address: str) -> list[dict[str, Any]]:
        logger.info(f"GET /address/{address}/transactions")
        return [tx.to_dict() for tx in await parser.get_transactions(address)]

    return app
