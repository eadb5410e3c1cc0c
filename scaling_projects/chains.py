"""
Chain Registry - Bidirectional chain name <-> chain id table.

Built once from a static list and read-only afterwards, so a single
instance can be shared by any number of readers.
"""

import logging
from types import MappingProxyType
from typing import Iterable

from .exceptions import DuplicateChainError, UnknownChainError
from .models import ChainDescriptor


logger = logging.getLogger(__name__)


class ChainConverter:
    """
    Converts between chain names and numeric chain ids.

    Usage:
        converter = ChainConverter([
            ChainDescriptor(name="ethereum", chain_id=1),
            ChainDescriptor(name="arbitrum", chain_id=42161),
        ])
        converter.to_chain_id("arbitrum")   # 42161
        converter.to_chain_name(1)          # "ethereum"
    """

    def __init__(self, descriptors: Iterable[ChainDescriptor]) -> None:
        by_name: dict[str, int] = {}
        by_id: dict[int, str] = {}

        for descriptor in descriptors:
            if descriptor.name in by_name:
                raise DuplicateChainError(
                    f"Chain name '{descriptor.name}' registered twice",
                    chain=descriptor.name,
                    chain_id=descriptor.chain_id,
                )
            if descriptor.chain_id in by_id:
                raise DuplicateChainError(
                    f"Chain id {descriptor.chain_id} registered for both "
                    f"'{by_id[descriptor.chain_id]}' and '{descriptor.name}'",
                    chain=descriptor.name,
                    chain_id=descriptor.chain_id,
                )
            by_name[descriptor.name] = descriptor.chain_id
            by_id[descriptor.chain_id] = descriptor.name

        self._by_name = MappingProxyType(by_name)
        self._by_id = MappingProxyType(by_id)

        logger.info(f"Chain registry built with {len(by_name)} chains")

    @classmethod
    def build(cls, descriptors: Iterable[ChainDescriptor]) -> "ChainConverter":
        return cls(descriptors)

    def to_chain_id(self, name: str) -> int:
        """Resolve a chain name. Raises UnknownChainError if absent."""
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownChainError(
                f"Unknown chain name '{name}'",
                chain=name,
                context={"known_chains": sorted(self._by_name)},
            ) from None

    def to_chain_name(self, chain_id: int) -> str:
        """Resolve a chain id. Raises UnknownChainError if absent."""
        try:
            return self._by_id[chain_id]
        except KeyError:
            raise UnknownChainError(
                f"Unknown chain id {chain_id}",
                chain_id=chain_id,
            ) from None

    def names(self) -> list[str]:
        return list(self._by_name)

    def chain_ids(self) -> list[int]:
        return list(self._by_id)

    def descriptors(self) -> list[ChainDescriptor]:
        return [ChainDescriptor(name=n, chain_id=i) for n, i in self._by_name.items()]

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)

    def __repr__(self) -> str:
        return f"ChainConverter(chains={len(self)})"
