#!/usr/bin/env python3
"""Data models for the eth-parser service.

This module provides immutable data classes for the event logs returned by
``eth_getLogs`` and the transactions resolved from them.
"""

from dataclasses import dataclass, field
from typing import Any

from .exceptions import DecodeError


@dataclass(frozen=True, slots=True)
class LogEntry:
    """Represents one log object returned by ``eth_getLogs``.

    Attributes:
        address: Contract that emitted the event
        block_hash: Hash of the block containing the log
        block_number: Block number as returned by the node (hex)
        data: Non-indexed event payload
        topics: Indexed topics, signature first
        transaction_hash: Hash of the transaction that emitted the event
        transaction_index: Position of that transaction in its block (hex)
        log_index: Position of the log in its block (hex)
    """

    address: str
    block_hash: str | None
    block_number: str | None
    data: str
    topics: tuple[str, ...]
    transaction_hash: str
    transaction_index: str | None
    log_index: str | None = None

    def __str__(self) -> str:
        """Human-readable string representation."""
        return (
            f"LogEntry(tx={self.transaction_hash[:10]}..., "
            f"block={self.block_number}, "
            f"contract={self.address[:8]}...)"
        )

    @classmethod
    def from_rpc(cls, raw: Any) -> "LogEntry":
        """Build a LogEntry from a node log object.

        Raises:
            DecodeError: If the object is malformed or has no transaction hash
        """
        if not isinstance(raw, dict):
            raise DecodeError(f"log entry is not an object: {raw!r}")

        tx_hash = raw.get("transactionHash")
        if not isinstance(tx_hash, str) or not tx_hash:
            raise DecodeError("log entry without transactionHash")

        topics = raw.get("topics") or []
        if not isinstance(topics, list):
            raise DecodeError(f"log topics is not a list: {topics!r}")

        return cls(
            address=raw.get("address") or "",
            block_hash=raw.get("blockHash"),
            block_number=raw.get("blockNumber"),
            data=raw.get("data") or "0x",
            topics=tuple(topics),
            transaction_hash=tx_hash,
            transaction_index=raw.get("transactionIndex"),
            log_index=raw.get("logIndex")
        )


@dataclass(frozen=True, slots=True)
class Transaction:
    """Represents a transaction resolved by ``eth_getTransactionByHash``.

    Quantities are kept exactly as the node encodes them (hex strings).
    Signature and payload fields are retrieved but never serialized.

    Attributes:
        hash: Transaction hash
        sender: Sending account (``from`` on the wire)
        to: Recipient, None for contract creation
        gas: Gas limit
        gas_price: Gas price
        value: Transferred native value
        transaction_index: Position within the block, None while pending
    """

    hash: str
    sender: str
    to: str | None
    gas: str
    gas_price: str
    value: str
    transaction_index: str | None = None

    # Internal fields, not exposed by to_dict()
    block_hash: str | None = field(default=None, repr=False)
    block_number: str | None = field(default=None, repr=False)
    input: str = field(default="", repr=False)
    nonce: str = field(default="", repr=False)
    v: str = field(default="", repr=False)
    r: str = field(default="", repr=False)
    s: str = field(default="", repr=False)

    def __str__(self) -> str:
        """Human-readable string representation."""
        to = f"{self.to[:8]}..." if self.to else "<create>"
        return (
            f"Transaction(hash={self.hash[:10]}..., "
            f"from={self.sender[:8]}..., "
            f"to={to}, "
            f"value={self.value})"
        )

    @classmethod
    def from_rpc(cls, raw: Any) -> "Transaction":
        """Build a Transaction from a node transaction object.

        Raises:
            DecodeError: If the result is null, not an object, or lacks
                ``hash``/``from``
        """
        if raw is None:
            raise DecodeError("transaction not found")
        if not isinstance(raw, dict):
            raise DecodeError(f"transaction is not an object: {raw!r}")

        tx_hash = raw.get("hash")
        sender = raw.get("from")
        if not tx_hash or not sender:
            raise DecodeError("transaction without hash or sender")

        return cls(
            hash=tx_hash,
            sender=sender,
            to=raw.get("to"),
            gas=raw.get("gas", ""),
            gas_price=raw.get("gasPrice", ""),
            value=raw.get("value", ""),
            transaction_index=raw.get("transactionIndex"),
            block_hash=raw.get("blockHash"),
            block_number=raw.get("blockNumber"),
            input=raw.get("input", ""),
            nonce=raw.get("nonce", ""),
            v=raw.get("v", ""),
            r=raw.get("r", ""),
            s=raw.get("s", "")
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the public JSON shape."""
        return {
            "transactionIndex": self.transaction_index,
            "hash": self.hash,
            "from": self.sender,
            "to": self.to,
            "gas": self.gas,
            "gasPrice": self.gas_price,
            "value": self.value
        }
