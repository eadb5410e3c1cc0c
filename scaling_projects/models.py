"""
Scaling Project Data Models - Descriptors in, canonical projects out.

Raw descriptors are authored by hand, one per project. The assembler
turns them into Layer2Project, BridgeProject or Layer3Project records.
Every model is frozen: built once at startup, never mutated.
"""

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, ClassVar, Mapping, Optional, Union


ALL_TOKENS = "*"


def _compact(data: dict[str, Any]) -> dict[str, Any]:
    """Drop keys whose value is None."""
    return {k: v for k, v in data.items() if v is not None}


def _freeze(value: Any) -> Any:
    """Recursively turn mappings into read-only proxies and lists into tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({k: _freeze(v) for k, v in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(_freeze(v) for v in value)
    return value


def _thaw(value: Any) -> Any:
    """Inverse of `_freeze`, for serialization."""
    if isinstance(value, Mapping):
        return {k: _thaw(v) for k, v in value.items()}
    if isinstance(value, tuple):
        return [_thaw(v) for v in value]
    return value


# ============================================================
# ENUMS
# ============================================================

class ProjectType(Enum):
    """Kind of scaling project."""
    LAYER2 = "layer2"
    BRIDGE = "bridge"
    LAYER3 = "layer3"


class EscrowSource(Enum):
    """Where the escrowed asset is issued."""
    CANONICAL = "canonical"
    EXTERNAL = "external"
    NATIVE = "native"


class TrackedTxUseType(Enum):
    """Downstream job consuming a tracked transaction."""
    LIVENESS = "liveness"
    L2_COSTS = "l2costs"


class TrackedTxSubtype(Enum):
    """Kind of activity a tracked transaction represents."""
    BATCH_SUBMISSIONS = "batchSubmissions"
    STATE_UPDATES = "stateUpdates"
    PROOF_SUBMISSIONS = "proofSubmissions"


class TrackedTxFormula(Enum):
    """Query variant of a tracked transaction."""
    FUNCTION_CALL = "functionCall"
    TRANSFER = "transfer"
    SHARP_SUBMISSION = "sharpSubmission"


class FinalityStatus(Enum):
    """Finality state for projects without a concrete configuration."""
    COMING_SOON = "coming soon"


# ============================================================
# CHAINS & TOKENS
# ============================================================

@dataclass(frozen=True)
class ChainDescriptor:
    """A chain known to the registry."""
    name: str
    chain_id: int

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "chain_id": self.chain_id}


@dataclass(frozen=True)
class Token:
    """
    Entry of the global token list.

    Queried only by (symbol, chain_id); the remaining fields are
    carried for downstream jobs.
    """
    symbol: str
    chain_id: int
    address: Optional[str] = None
    name: Optional[str] = None
    decimals: Optional[int] = None
    category: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "symbol": self.symbol,
            "chain_id": self.chain_id,
            "address": self.address,
            "name": self.name,
            "decimals": self.decimals,
            "category": self.category,
        })


# ============================================================
# ESCROWS
# ============================================================

@dataclass(frozen=True)
class EscrowBridge:
    """External bridge an escrow belongs to."""
    name: str
    slug: Optional[str] = None
    warning: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({"name": self.name, "slug": self.slug, "warning": self.warning})


@dataclass(frozen=True)
class RawEscrow:
    """
    Escrow as authored in a project descriptor.

    `tokens` is either ALL_TOKENS ("*") or an ordered tuple of symbols.
    `excluded_tokens` only applies to the wildcard form.
    """
    address: str
    chain: str
    since_timestamp: int
    tokens: Union[str, tuple[str, ...]]
    until_timestamp: Optional[int] = None
    excluded_tokens: tuple[str, ...] = ()
    include_in_total: Optional[bool] = None
    source: Optional[EscrowSource] = None
    bridge: Optional[EscrowBridge] = None

    def __post_init__(self) -> None:
        if isinstance(self.tokens, str):
            if self.tokens != ALL_TOKENS:
                raise ValueError(
                    f"Escrow {self.address}: tokens must be '{ALL_TOKENS}' or a list of symbols"
                )
        else:
            object.__setattr__(self, "tokens", tuple(self.tokens))
        object.__setattr__(self, "excluded_tokens", tuple(self.excluded_tokens))

    @property
    def is_wildcard(self) -> bool:
        return self.tokens == ALL_TOKENS


@dataclass(frozen=True)
class ProjectEscrow:
    """Escrow with its token set resolved against the token list."""
    address: str
    since_timestamp: int
    tokens: tuple[Token, ...]
    chain: str
    until_timestamp: Optional[int] = None
    include_in_total: Optional[bool] = None
    source: Optional[EscrowSource] = None
    bridge: Optional[EscrowBridge] = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "address": self.address,
            "since_timestamp": self.since_timestamp,
            "until_timestamp": self.until_timestamp,
            "tokens": [t.to_dict() for t in self.tokens],
            "chain": self.chain,
            "include_in_total": self.include_in_total,
            "source": self.source.value if self.source else None,
            "bridge": self.bridge.to_dict() if self.bridge else None,
        })


# ============================================================
# TRACKED TRANSACTIONS - DECLARATIONS
# ============================================================

@dataclass(frozen=True)
class FunctionCallQuery:
    """Calls of `selector` on the contract at `address`."""
    formula: ClassVar[TrackedTxFormula] = TrackedTxFormula.FUNCTION_CALL

    address: str
    selector: str
    since_timestamp: int
    until_timestamp: Optional[int] = None
    function_signature: Optional[str] = None


@dataclass(frozen=True)
class TransferQuery:
    """Native transfers between two addresses."""
    formula: ClassVar[TrackedTxFormula] = TrackedTxFormula.TRANSFER

    from_address: str
    to_address: str
    since_timestamp: int
    until_timestamp: Optional[int] = None


@dataclass(frozen=True)
class SharpSubmissionQuery:
    """SHARP verifier submissions proving one of `program_hashes`."""
    formula: ClassVar[TrackedTxFormula] = TrackedTxFormula.SHARP_SUBMISSION

    program_hashes: tuple[str, ...]
    since_timestamp: int
    until_timestamp: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "program_hashes", tuple(self.program_hashes))


TrackedTxQuery = Union[FunctionCallQuery, TransferQuery, SharpSubmissionQuery]


@dataclass(frozen=True)
class TrackedTxUse:
    type: TrackedTxUseType
    subtype: TrackedTxSubtype


@dataclass(frozen=True)
class TrackedTxDeclaration:
    """
    One query with the purposes it serves.

    `cost_multiplier` is only attached to l2costs entries.
    """
    uses: tuple[TrackedTxUse, ...]
    query: TrackedTxQuery
    cost_multiplier: Optional[float] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "uses", tuple(self.uses))
        if not self.uses:
            raise ValueError("Tracked transaction declaration needs at least one use")
        # 1 and 1.0 must hash to the same entry id
        if self.cost_multiplier is not None:
            object.__setattr__(self, "cost_multiplier", float(self.cost_multiplier))


# ============================================================
# TRACKED TRANSACTIONS - CONFIG ENTRIES
# ============================================================

@dataclass(frozen=True)
class FunctionCallParams:
    formula: ClassVar[TrackedTxFormula] = TrackedTxFormula.FUNCTION_CALL

    address: str
    selector: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "formula": self.formula.value,
            "address": self.address,
            "selector": self.selector,
        }


@dataclass(frozen=True)
class TransferParams:
    formula: ClassVar[TrackedTxFormula] = TrackedTxFormula.TRANSFER

    from_address: str
    to_address: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "formula": self.formula.value,
            "from": self.from_address,
            "to": self.to_address,
        }


@dataclass(frozen=True)
class SharpSubmissionParams:
    formula: ClassVar[TrackedTxFormula] = TrackedTxFormula.SHARP_SUBMISSION

    address: str
    selector: str
    program_hashes: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "formula": self.formula.value,
            "address": self.address,
            "selector": self.selector,
            "program_hashes": list(self.program_hashes),
        }


TrackedTxParams = Union[FunctionCallParams, TransferParams, SharpSubmissionParams]


@dataclass(frozen=True)
class TrackedTxConfigEntry:
    """
    Flat tracked transaction record consumed by liveness and l2costs jobs.

    `id` is derived from every other field, see tracked_txs.create_tracked_tx_id.
    """
    id: str
    project_id: str
    since_timestamp: int
    type: TrackedTxUseType
    subtype: TrackedTxSubtype
    params: TrackedTxParams
    until_timestamp: Optional[int] = None
    cost_multiplier: Optional[float] = None

    def to_dict(self, include_id: bool = True) -> dict[str, Any]:
        data = _compact({
            "id": self.id if include_id else None,
            "project_id": self.project_id,
            "since_timestamp": self.since_timestamp,
            "until_timestamp": self.until_timestamp,
            "type": self.type.value,
            "subtype": self.subtype.value,
            "cost_multiplier": self.cost_multiplier,
        })
        data["params"] = self.params.to_dict()
        return data


# ============================================================
# PASS-THROUGH CONFIGURATION
# ============================================================

@dataclass(frozen=True)
class TransactionApi:
    """How the activity job counts transactions. Opaque to this package."""
    type: str
    default_url: Optional[str] = None
    start_block: Optional[int] = None
    extra: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "extra", _freeze(self.extra))

    def to_dict(self) -> dict[str, Any]:
        data = _compact({
            "type": self.type,
            "default_url": self.default_url,
            "start_block": self.start_block,
        })
        data.update(_thaw(self.extra))
        return data


@dataclass(frozen=True)
class FinalityConfig:
    type: str
    min_timestamp: int
    lag: int = 0
    state_update: str = "disabled"

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type,
            "min_timestamp": self.min_timestamp,
            "lag": self.lag,
            "state_update": self.state_update,
        }


# ============================================================
# PROJECT DESCRIPTORS (INPUT)
# ============================================================

@dataclass(frozen=True)
class Layer2Descriptor:
    project_id: str
    slug: str
    escrows: tuple[RawEscrow, ...] = ()
    associated_tokens: Optional[tuple[str, ...]] = None
    transaction_api: Optional[TransactionApi] = None
    tracked_txs: Optional[tuple[TrackedTxDeclaration, ...]] = None
    liveness: Optional[Mapping[str, Any]] = None
    finality: Optional[Union[FinalityConfig, FinalityStatus]] = None
    is_archived: Optional[bool] = None
    is_upcoming: Optional[bool] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "escrows", tuple(self.escrows))
        if self.associated_tokens is not None:
            object.__setattr__(self, "associated_tokens", tuple(self.associated_tokens))
        if self.tracked_txs is not None:
            object.__setattr__(self, "tracked_txs", tuple(self.tracked_txs))
        object.__setattr__(self, "liveness", _freeze(self.liveness))


@dataclass(frozen=True)
class BridgeDescriptor:
    project_id: str
    slug: str
    escrows: tuple[RawEscrow, ...] = ()
    associated_tokens: Optional[tuple[str, ...]] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "escrows", tuple(self.escrows))
        if self.associated_tokens is not None:
            object.__setattr__(self, "associated_tokens", tuple(self.associated_tokens))


@dataclass(frozen=True)
class Layer3Descriptor:
    project_id: str
    slug: str
    escrows: tuple[RawEscrow, ...] = ()
    associated_tokens: Optional[tuple[str, ...]] = None
    is_upcoming: Optional[bool] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "escrows", tuple(self.escrows))
        if self.associated_tokens is not None:
            object.__setattr__(self, "associated_tokens", tuple(self.associated_tokens))


ProjectDescriptor = Union[Layer2Descriptor, BridgeDescriptor, Layer3Descriptor]


# ============================================================
# PROJECTS (OUTPUT)
# ============================================================

def _associated(tokens: Optional[tuple[str, ...]]) -> Optional[list[str]]:
    return list(tokens) if tokens is not None else None


@dataclass(frozen=True)
class Layer2Project:
    """Canonical record for a layer2 rollup."""
    type: ClassVar[ProjectType] = ProjectType.LAYER2

    project_id: str
    slug: str
    escrows: tuple[ProjectEscrow, ...]
    associated_tokens: Optional[tuple[str, ...]] = None
    transaction_api: Optional[TransactionApi] = None
    tracked_txs_config: Optional[tuple[TrackedTxConfigEntry, ...]] = None
    liveness_config: Optional[Mapping[str, Any]] = None
    finality_config: Optional[FinalityConfig] = None
    is_archived: Optional[bool] = None
    is_upcoming: Optional[bool] = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "type": self.type.value,
            "project_id": self.project_id,
            "slug": self.slug,
            "is_archived": self.is_archived,
            "is_upcoming": self.is_upcoming,
            "escrows": [e.to_dict() for e in self.escrows],
            "associated_tokens": _associated(self.associated_tokens),
            "transaction_api": self.transaction_api.to_dict() if self.transaction_api else None,
            "tracked_txs_config": (
                [t.to_dict() for t in self.tracked_txs_config]
                if self.tracked_txs_config is not None else None
            ),
            "liveness_config": _thaw(self.liveness_config),
            "finality_config": self.finality_config.to_dict() if self.finality_config else None,
        })


@dataclass(frozen=True)
class BridgeProject:
    """Canonical record for a bridge. Carries escrows only."""
    type: ClassVar[ProjectType] = ProjectType.BRIDGE

    project_id: str
    slug: str
    escrows: tuple[ProjectEscrow, ...]
    associated_tokens: Optional[tuple[str, ...]] = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "type": self.type.value,
            "project_id": self.project_id,
            "slug": self.slug,
            "escrows": [e.to_dict() for e in self.escrows],
            "associated_tokens": _associated(self.associated_tokens),
        })


@dataclass(frozen=True)
class Layer3Project:
    """Canonical record for a layer3 rollup."""
    type: ClassVar[ProjectType] = ProjectType.LAYER3

    project_id: str
    slug: str
    escrows: tuple[ProjectEscrow, ...]
    associated_tokens: Optional[tuple[str, ...]] = None
    is_upcoming: Optional[bool] = None

    def to_dict(self) -> dict[str, Any]:
        return _compact({
            "type": self.type.value,
            "project_id": self.project_id,
            "slug": self.slug,
            "is_upcoming": self.is_upcoming,
            "escrows": [e.to_dict() for e in self.escrows],
            "associated_tokens": _associated(self.associated_tokens),
        })


Project = Union[Layer2Project, BridgeProject, Layer3Project]
