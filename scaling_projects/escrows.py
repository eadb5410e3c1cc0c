"""
Escrow Normalizer - Resolves authored escrow token sets.

A raw escrow names its tokens either with the "*" wildcard (every
token on the escrow's chain, minus exclusions) or with an explicit,
ordered list of symbols. Both forms resolve to Token records from the
token registry.
"""

import logging

from .chains import ChainConverter
from .exceptions import TokenNotFoundError
from .models import ProjectEscrow, RawEscrow, Token
from .tokens import TokenRegistry


logger = logging.getLogger(__name__)


def normalize_escrow_tokens(
    raw: RawEscrow,
    chain_id: int,
    registry: TokenRegistry,
) -> tuple[Token, ...]:
    """
    Resolve the token set of `raw` on `chain_id`.

    Wildcard escrows keep registry order. Explicit lists keep input
    order and ignore `excluded_tokens`.

    Raises:
        TokenNotFoundError: a listed symbol does not exist on the chain
    """
    if raw.is_wildcard:
        excluded = set(raw.excluded_tokens)
        return tuple(t for t in registry.on_chain(chain_id) if t.symbol not in excluded)

    resolved = []
    for symbol in raw.tokens:
        token = registry.find(symbol, chain_id)
        if token is None:
            raise TokenNotFoundError(
                f"Token with symbol {symbol} not found on {raw.chain} @ {raw.address}",
                symbol=symbol,
                chain=raw.chain,
                escrow_address=raw.address,
                context={"chain_id": chain_id},
            )
        resolved.append(token)
    return tuple(resolved)


def to_project_escrow(
    raw: RawEscrow,
    chains: ChainConverter,
    registry: TokenRegistry,
) -> ProjectEscrow:
    """Resolve chain and tokens; every other field passes through."""
    chain_id = chains.to_chain_id(raw.chain)
    tokens = normalize_escrow_tokens(raw, chain_id, registry)

    logger.debug(
        f"Escrow {raw.address} on {raw.chain} resolved to {len(tokens)} tokens"
    )

    return ProjectEscrow(
        address=raw.address,
        since_timestamp=raw.since_timestamp,
        until_timestamp=raw.until_timestamp,
        tokens=tokens,
        chain=raw.chain,
        include_in_total=raw.include_in_total,
        source=raw.source,
        bridge=raw.bridge,
    )
