"""
Token Registry - Read-only view over the global token list.

Tokens are looked up only by (symbol, chain_id). Registry order is
preserved so wildcard escrows resolve deterministically.
"""

import logging
from typing import Iterable, Iterator, Optional

from .models import Token


logger = logging.getLogger(__name__)


class TokenRegistry:
    """Static, queryable token list."""

    def __init__(self, tokens: Iterable[Token]) -> None:
        self._tokens: tuple[Token, ...] = tuple(tokens)

        by_chain: dict[int, list[Token]] = {}
        for token in self._tokens:
            by_chain.setdefault(token.chain_id, []).append(token)
        self._by_chain: dict[int, tuple[Token, ...]] = {
            chain_id: tuple(tokens) for chain_id, tokens in by_chain.items()
        }

        logger.info(
            f"Token registry loaded with {len(self._tokens)} tokens "
            f"on {len(self._by_chain)} chains"
        )

    def on_chain(self, chain_id: int) -> tuple[Token, ...]:
        """All tokens on a chain, in registry order."""
        return self._by_chain.get(chain_id, ())

    def find(self, symbol: str, chain_id: int) -> Optional[Token]:
        """First token with `symbol` on `chain_id`, or None."""
        for token in self.on_chain(chain_id):
            if token.symbol == symbol:
                return token
        return None

    def __iter__(self) -> Iterator[Token]:
        return iter(self._tokens)

    def __len__(self) -> int:
        return len(self._tokens)
