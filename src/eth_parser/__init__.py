"""
eth-parser package.

Tracks subscribed Ethereum addresses and lists their ERC-20 transfer
transactions by querying a node over JSON-RPC.
"""

__version__ = "0.1.0"

from .config import ParserConfig
from .models import LogEntry, Transaction
from .parser import Parser
from .reader import EthereumReader
from .registry import AddressRegistry
from .rpc_client import JsonRpcClient

__all__ = [
    "AddressRegistry",
    "EthereumReader",
    "JsonRpcClient",
    "LogEntry",
    "Parser",
    "ParserConfig",
    "Transaction",
]
