#!/usr/bin/env python3
"""Unit tests for the Parser orchestrator."""

import asyncio
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from eth_parser.config import EnrichmentConfig, ParserConfig, RpcConfig, ServerConfig
from eth_parser.models import Transaction
from eth_parser.parser import Parser
from eth_parser.reader import EthereumReader
from eth_parser.registry import AddressRegistry

ADDRESS = "0x123"


@pytest.fixture
def mock_repository():
    """Create a mock AddressRepository."""
    mock = MagicMock()
    mock.is_subscribed = MagicMock(return_value=False)
    mock.add = MagicMock()
    return mock


@pytest.fixture
def mock_reader():
    """Create a mock TransactionsReader."""
    mock = MagicMock()
    mock.get_current_block = AsyncMock(return_value=12345)
    mock.get_transactions = AsyncMock(return_value=[])
    return mock


def sample_transaction(tx_hash: str = "0xaaa") -> Transaction:
    return Transaction(
        hash=tx_hash,
        sender=ADDRESS,
        to="0x456",
        gas="0x5208",
        gas_price="0x1",
        value="0x0"
    )


class TestSubscribe:
    """Test suite for Parser.subscribe."""

    def test_subscribe(self, mock_repository, mock_reader):
        parser = Parser(mock_repository, mock_reader)

        assert parser.subscribe(ADDRESS) is True
        mock_repository.add.assert_called_once_with(ADDRESS)

    def test_subscribe_already_subscribed(self, mock_repository, mock_reader):
        mock_repository.is_subscribed.return_value = True
        parser = Parser(mock_repository, mock_reader)

        assert parser.subscribe(ADDRESS) is True
        mock_repository.add.assert_not_called()

    def test_subscribe_twice_with_real_registry(self, mock_reader):
        """Test idempotence: both calls succeed and the address stays subscribed."""
        registry = AddressRegistry()
        parser = Parser(registry, mock_reader)

        with patch.object(registry, "add", wraps=registry.add) as spy:
            assert parser.subscribe(ADDRESS) is True
            assert parser.subscribe(ADDRESS) is True

        spy.assert_called_once_with(ADDRESS)
        assert registry.is_subscribed(ADDRESS)


class TestGetCurrentBlock:
    """Test suite for Parser.get_current_block."""

    async def test_delegates_to_reader(self, mock_repository, mock_reader):
        parser = Parser(mock_repository, mock_reader)

        assert await parser.get_current_block() == 12345
        mock_reader.get_current_block.assert_awaited_once_with(None)

    async def test_failure_reads_as_zero(self, mock_repository, mock_reader):
        mock_reader.get_current_block.return_value = 0
        parser = Parser(mock_repository, mock_reader)

        assert await parser.get_current_block() == 0

    async def test_timeout_becomes_deadline(self, mock_repository, mock_reader):
        parser = Parser(mock_repository, mock_reader)
        now = asyncio.get_running_loop().time()

        await parser.get_current_block(timeout=10)

        (deadline,), _ = mock_reader.get_current_block.await_args
        assert now + 9 < deadline <= asyncio.get_running_loop().time() + 10

    async def test_default_call_timeout(self, mock_repository, mock_reader):
        parser = Parser(mock_repository, mock_reader, call_timeout=30)

        await parser.get_current_block()

        (deadline,), _ = mock_reader.get_current_block.await_args
        assert deadline is not None


class TestGetTransactions:
    """Test suite for Parser.get_transactions."""

    async def test_subscribed(self, mock_repository, mock_reader):
        mock_repository.is_subscribed.return_value = True
        mock_reader.get_transactions.return_value = [sample_transaction()]
        parser = Parser(mock_repository, mock_reader)

        txs = await parser.get_transactions(ADDRESS)

        assert [tx.hash for tx in txs] == ["0xaaa"]
        mock_reader.get_transactions.assert_awaited_once_with(ADDRESS, None)

    async def test_not_subscribed(self, mock_repository, mock_reader):
        """Test that an unsubscribed address never reaches the reader."""
        parser = Parser(mock_repository, mock_reader)

        assert await parser.get_transactions(ADDRESS) == []
        mock_reader.get_transactions.assert_not_awaited()


class TestFromConfig:
    """Tests for Parser.from_config wiring."""

    def test_wiring(self):
        config = ParserConfig(
            rpc=RpcConfig(rpc_url="https://test.rpc", request_timeout=10, call_timeout=20, cache_chain_id=True),
            enrichment=EnrichmentConfig(max_workers=4),
            server=ServerConfig()
        )

        parser = Parser.from_config(config)

        assert isinstance(parser.address_repository, AddressRegistry)
        assert isinstance(parser.reader, EthereumReader)
        assert parser.call_timeout == 20
        assert parser.reader.rpc_client.rpc_url == "https://test.rpc"
        assert parser.reader.rpc_client.request_timeout == 10
        assert parser.reader.chain_id_resolver.cache is True
        assert parser.reader.enricher.max_workers == 4
