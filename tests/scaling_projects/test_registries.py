"""
Tests for the chain registry and the token registry.
"""

import pytest

from scaling_projects.chains import ChainConverter
from scaling_projects.exceptions import DuplicateChainError, UnknownChainError
from scaling_projects.models import ChainDescriptor, Token
from scaling_projects.tokens import TokenRegistry


# ============================================================
# CHAIN REGISTRY
# ============================================================

class TestChainConverter:
    """Tests for chain name <-> chain id conversion."""

    def test_round_trip_by_id(self, chains):
        converter = ChainConverter(chains)

        for chain_id in converter.chain_ids():
            assert converter.to_chain_id(converter.to_chain_name(chain_id)) == chain_id

    def test_round_trip_by_name(self, chains):
        converter = ChainConverter(chains)

        for name in converter.names():
            assert converter.to_chain_name(converter.to_chain_id(name)) == name

    def test_lookups(self, chains):
        converter = ChainConverter.build(chains)

        assert converter.to_chain_id("arbitrum") == 42161
        assert converter.to_chain_name(1) == "ethereum"
        assert "ethereum" in converter
        assert "solana" not in converter
        assert len(converter) == 2

    def test_unknown_name(self, chains):
        converter = ChainConverter(chains)

        with pytest.raises(UnknownChainError) as exc_info:
            converter.to_chain_id("solana")

        assert exc_info.value.chain == "solana"
        assert "solana" in str(exc_info.value)

    def test_unknown_id(self, chains):
        converter = ChainConverter(chains)

        with pytest.raises(UnknownChainError) as exc_info:
            converter.to_chain_name(999)

        assert exc_info.value.chain_id == 999
        assert exc_info.value.to_dict()["chain_id"] == 999

    def test_duplicate_name(self):
        with pytest.raises(DuplicateChainError) as exc_info:
            ChainConverter([
                ChainDescriptor(name="ethereum", chain_id=1),
                ChainDescriptor(name="ethereum", chain_id=5),
            ])

        assert exc_info.value.chain == "ethereum"

    def test_duplicate_id(self):
        with pytest.raises(DuplicateChainError) as exc_info:
            ChainConverter([
                ChainDescriptor(name="ethereum", chain_id=1),
                ChainDescriptor(name="mainnet", chain_id=1),
            ])

        assert exc_info.value.chain_id == 1

    def test_descriptors_preserve_order(self, chains):
        converter = ChainConverter(chains)

        assert converter.descriptors() == chains


# ============================================================
# TOKEN REGISTRY
# ============================================================

class TestTokenRegistry:
    """Tests for token lookups."""

    def test_on_chain_keeps_registry_order(self, tokens):
        registry = TokenRegistry(tokens)

        assert [t.symbol for t in registry.on_chain(1)] == ["ETH", "DAI", "USDC"]
        assert [t.symbol for t in registry.on_chain(42161)] == ["ETH", "USDC"]

    def test_on_unknown_chain_is_empty(self, tokens):
        registry = TokenRegistry(tokens)

        assert registry.on_chain(10) == ()

    def test_find(self, tokens):
        registry = TokenRegistry(tokens)

        usdc = registry.find("USDC", 42161)
        assert usdc is not None
        assert usdc.chain_id == 42161
        assert registry.find("DAI", 42161) is None

    def test_len_and_iter(self, tokens):
        registry = TokenRegistry(tokens)

        assert len(registry) == 5
        assert list(registry) == tokens

    def test_tokens_are_immutable(self):
        token = Token(symbol="ETH", chain_id=1)

        with pytest.raises(AttributeError):
            token.symbol = "WETH"
