"""
Pydantic Schemas for authored descriptor files.

JSON files use the camelCase keys of the authored project configs
(sinceTimestamp, excludedTokens, trackedTxs, ...). A tracked tx cost
multiplier is also accepted under its legacy `_hackCostMultiplier` key,
and escrows may carry a free-text `description`. Each schema
converts itself into the frozen dataclasses of `models`.
"""

import re
from typing import Annotated, Any, Literal, Optional, Union

from pydantic import AfterValidator, AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .models import (
    ALL_TOKENS,
    BridgeDescriptor,
    ChainDescriptor,
    EscrowBridge,
    EscrowSource,
    FinalityConfig,
    FinalityStatus,
    FunctionCallQuery,
    Layer2Descriptor,
    Layer3Descriptor,
    RawEscrow,
    SharpSubmissionQuery,
    Token,
    TrackedTxDeclaration,
    TrackedTxSubtype,
    TrackedTxUse,
    TrackedTxUseType,
    TransactionApi,
    TransferQuery,
)


ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")
SELECTOR_PATTERN = re.compile(r"^0x[0-9a-fA-F]{8}$")


def _check_address(value: str) -> str:
    if not ADDRESS_PATTERN.match(value):
        raise ValueError(f"not an EVM address: {value!r}")
    return value


def _check_selector(value: str) -> str:
    if not SELECTOR_PATTERN.match(value):
        raise ValueError(f"not a 4-byte selector: {value!r}")
    return value.lower()


EvmAddress = Annotated[str, AfterValidator(_check_address)]
Selector = Annotated[str, AfterValidator(_check_selector)]


class _Schema(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )


# =============================================================
# CHAINS & TOKENS
# =============================================================

class ChainSchema(_Schema):
    name: str = Field(min_length=1)
    chain_id: int = Field(ge=0)

    def to_model(self) -> ChainDescriptor:
        return ChainDescriptor(name=self.name, chain_id=self.chain_id)


class TokenSchema(_Schema):
    """Token list entries may carry extra metadata; it is ignored."""
    model_config = ConfigDict(extra="ignore")

    symbol: str = Field(min_length=1)
    chain_id: int = Field(ge=0)
    address: Optional[str] = None
    name: Optional[str] = None
    decimals: Optional[int] = Field(default=None, ge=0)
    category: Optional[str] = None

    def to_model(self) -> Token:
        return Token(
            symbol=self.symbol,
            chain_id=self.chain_id,
            address=self.address,
            name=self.name,
            decimals=self.decimals,
            category=self.category,
        )


# =============================================================
# ESCROWS
# =============================================================

class EscrowBridgeSchema(_Schema):
    name: str
    slug: Optional[str] = None
    warning: Optional[str] = None

    def to_model(self) -> EscrowBridge:
        return EscrowBridge(name=self.name, slug=self.slug, warning=self.warning)


class EscrowSchema(_Schema):
    address: EvmAddress
    chain: str = "ethereum"
    since_timestamp: int = Field(ge=0)
    until_timestamp: Optional[int] = Field(default=None, ge=0)
    tokens: Union[Literal["*"], list[str]]
    excluded_tokens: list[str] = Field(default_factory=list)
    include_in_total: Optional[bool] = None
    source: Optional[EscrowSource] = None
    bridge: Optional[EscrowBridgeSchema] = None
    # documentation only, not carried into the model
    description: Optional[str] = None

    def to_model(self) -> RawEscrow:
        return RawEscrow(
            address=self.address,
            chain=self.chain,
            since_timestamp=self.since_timestamp,
            until_timestamp=self.until_timestamp,
            tokens=ALL_TOKENS if self.tokens == ALL_TOKENS else tuple(self.tokens),
            excluded_tokens=tuple(self.excluded_tokens),
            include_in_total=self.include_in_total,
            source=self.source,
            bridge=self.bridge.to_model() if self.bridge else None,
        )


# =============================================================
# TRACKED TRANSACTIONS
# =============================================================

class FunctionCallQuerySchema(_Schema):
    formula: Literal["functionCall"]
    address: EvmAddress
    selector: Selector
    function_signature: Optional[str] = None
    since_timestamp: int = Field(ge=0)
    until_timestamp: Optional[int] = Field(default=None, ge=0)

    def to_model(self) -> FunctionCallQuery:
        return FunctionCallQuery(
            address=self.address,
            selector=self.selector,
            since_timestamp=self.since_timestamp,
            until_timestamp=self.until_timestamp,
            function_signature=self.function_signature,
        )


class TransferQuerySchema(_Schema):
    formula: Literal["transfer"]
    from_address: EvmAddress = Field(alias="from")
    to_address: EvmAddress = Field(alias="to")
    since_timestamp: int = Field(ge=0)
    until_timestamp: Optional[int] = Field(default=None, ge=0)

    def to_model(self) -> TransferQuery:
        return TransferQuery(
            from_address=self.from_address,
            to_address=self.to_address,
            since_timestamp=self.since_timestamp,
            until_timestamp=self.until_timestamp,
        )


class SharpSubmissionQuerySchema(_Schema):
    formula: Literal["sharpSubmission"]
    program_hashes: list[str] = Field(min_length=1)
    since_timestamp: int = Field(ge=0)
    until_timestamp: Optional[int] = Field(default=None, ge=0)

    def to_model(self) -> SharpSubmissionQuery:
        return SharpSubmissionQuery(
            program_hashes=tuple(self.program_hashes),
            since_timestamp=self.since_timestamp,
            until_timestamp=self.until_timestamp,
        )


TrackedTxQuerySchema = Annotated[
    Union[FunctionCallQuerySchema, TransferQuerySchema, SharpSubmissionQuerySchema],
    Field(discriminator="formula"),
]


class TrackedTxUseSchema(_Schema):
    type: TrackedTxUseType
    subtype: TrackedTxSubtype

    def to_model(self) -> TrackedTxUse:
        return TrackedTxUse(type=self.type, subtype=self.subtype)


class TrackedTxSchema(_Schema):
    uses: list[TrackedTxUseSchema] = Field(min_length=1)
    query: TrackedTxQuerySchema
    cost_multiplier: Optional[float] = Field(
        default=None,
        gt=0,
        validation_alias=AliasChoices("costMultiplier", "_hackCostMultiplier", "cost_multiplier"),
    )

    def to_model(self) -> TrackedTxDeclaration:
        return TrackedTxDeclaration(
            uses=tuple(u.to_model() for u in self.uses),
            query=self.query.to_model(),
            cost_multiplier=self.cost_multiplier,
        )


# =============================================================
# PASS-THROUGH CONFIGURATION
# =============================================================

class TransactionApiSchema(_Schema):
    """Known keys are typed, anything else is carried in `extra`."""
    model_config = ConfigDict(extra="allow")

    type: str
    default_url: Optional[str] = None
    start_block: Optional[int] = None

    def to_model(self) -> TransactionApi:
        return TransactionApi(
            type=self.type,
            default_url=self.default_url,
            start_block=self.start_block,
            extra=dict(self.model_extra or {}),
        )


class FinalityConfigSchema(_Schema):
    type: str
    min_timestamp: int = Field(ge=0)
    lag: int = 0
    state_update: str = "disabled"

    def to_model(self) -> FinalityConfig:
        return FinalityConfig(
            type=self.type,
            min_timestamp=self.min_timestamp,
            lag=self.lag,
            state_update=self.state_update,
        )


# =============================================================
# PROJECTS
# =============================================================

class Layer2Schema(_Schema):
    type: Literal["layer2"]
    id: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    escrows: list[EscrowSchema] = Field(default_factory=list)
    associated_tokens: Optional[list[str]] = None
    transaction_api: Optional[TransactionApiSchema] = None
    tracked_txs: Optional[list[TrackedTxSchema]] = None
    liveness: Optional[dict[str, Any]] = None
    finality: Optional[Union[Literal["coming soon"], FinalityConfigSchema]] = None
    is_archived: Optional[bool] = None
    is_upcoming: Optional[bool] = None

    def to_model(self) -> Layer2Descriptor:
        if self.finality == FinalityStatus.COMING_SOON.value:
            finality = FinalityStatus.COMING_SOON
        elif self.finality is not None:
            finality = self.finality.to_model()
        else:
            finality = None

        return Layer2Descriptor(
            project_id=self.id,
            slug=self.slug,
            escrows=tuple(e.to_model() for e in self.escrows),
            associated_tokens=(
                tuple(self.associated_tokens) if self.associated_tokens is not None else None
            ),
            transaction_api=self.transaction_api.to_model() if self.transaction_api else None,
            tracked_txs=(
                tuple(t.to_model() for t in self.tracked_txs)
                if self.tracked_txs is not None else None
            ),
            liveness=self.liveness,
            finality=finality,
            is_archived=self.is_archived,
            is_upcoming=self.is_upcoming,
        )


class BridgeSchema(_Schema):
    type: Literal["bridge"]
    id: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    escrows: list[EscrowSchema] = Field(default_factory=list)
    associated_tokens: Optional[list[str]] = None

    def to_model(self) -> BridgeDescriptor:
        return BridgeDescriptor(
            project_id=self.id,
            slug=self.slug,
            escrows=tuple(e.to_model() for e in self.escrows),
            associated_tokens=(
                tuple(self.associated_tokens) if self.associated_tokens is not None else None
            ),
        )


class Layer3Schema(_Schema):
    type: Literal["layer3"]
    id: str = Field(min_length=1)
    slug: str = Field(min_length=1)
    escrows: list[EscrowSchema] = Field(default_factory=list)
    associated_tokens: Optional[list[str]] = None
    is_upcoming: Optional[bool] = None

    def to_model(self) -> Layer3Descriptor:
        return Layer3Descriptor(
            project_id=self.id,
            slug=self.slug,
            escrows=tuple(e.to_model() for e in self.escrows),
            associated_tokens=(
                tuple(self.associated_tokens) if self.associated_tokens is not None else None
            ),
            is_upcoming=self.is_upcoming,
        )


ProjectSchema = Annotated[
    Union[Layer2Schema, BridgeSchema, Layer3Schema],
    Field(discriminator="type"),
]


class ChainListSchema(_Schema):
    chains: list[ChainSchema]


class TokenListSchema(_Schema):
    tokens: list[TokenSchema]


class ProjectListSchema(_Schema):
    projects: list[ProjectSchema]
