"""
Shared fixtures: a small chain universe and token list.
"""

import pytest

from scaling_projects.assembler import create_project_context
from scaling_projects.models import ChainDescriptor, Token


@pytest.fixture
def chains():
    return [
        ChainDescriptor(name="ethereum", chain_id=1),
        ChainDescriptor(name="arbitrum", chain_id=42161),
    ]


@pytest.fixture
def tokens():
    return [
        Token(symbol="ETH", chain_id=1),
        Token(symbol="DAI", chain_id=1, address="0x6B175474E89094C44Da98b954EedeAC495271d0F"),
        Token(symbol="USDC", chain_id=1, address="0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"),
        Token(symbol="ETH", chain_id=42161),
        Token(symbol="USDC", chain_id=42161, address="0xaf88d065e77c8cC2239327C5EDb3A432268e5831"),
    ]


@pytest.fixture
def context(chains, tokens):
    return create_project_context(chains=chains, tokens=tokens)
