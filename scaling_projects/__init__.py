"""
Scaling Projects Package - Canonical project records for indexers.

Normalizes hand-authored layer2, bridge and layer3 descriptors into
one canonical Project shape consumed by TVL, liveness, l2costs and
finality jobs.

Features:
- Chain name <-> chain id registry
- Escrow token sets resolved against the global token list
- Content-addressed ids for tracked transaction configs
- Fatal on authoring defects, with optional per-project isolation

Quick Start:
    from scaling_projects import (
        ChainDescriptor,
        Token,
        create_project_context,
        assemble_projects,
    )

    context = create_project_context(
        chains=[ChainDescriptor(name="ethereum", chain_id=1)],
        tokens=[Token(symbol="ETH", chain_id=1)],
    )
    result = assemble_projects(descriptors, context)
    for project in result.projects:
        print(project.project_id, len(project.escrows))

Loading from JSON:
    from scaling_projects import load_context, load_projects

    context = load_context()   # bundled or configured chain/token lists
    result = assemble_projects(load_projects("projects.json"), context)
"""

from scaling_projects.assembler import (
    BatchResult,
    ProjectContext,
    assemble_projects,
    bridge_to_project,
    create_project_context,
    layer2_to_project,
    layer3_to_project,
    to_project,
)
from scaling_projects.chains import ChainConverter
from scaling_projects.config import NormalizerConfig, get_config, set_config
from scaling_projects.escrows import normalize_escrow_tokens, to_project_escrow
from scaling_projects.exceptions import (
    BatchAssemblyError,
    ChainRegistryError,
    DescriptorError,
    DuplicateChainError,
    ProjectAssemblyError,
    ProjectConfigError,
    TokenNotFoundError,
    UnknownChainError,
)
from scaling_projects.loader import (
    load_chains,
    load_context,
    load_projects,
    load_tokens,
)
from scaling_projects.models import (
    ALL_TOKENS,
    BridgeDescriptor,
    BridgeProject,
    ChainDescriptor,
    EscrowBridge,
    EscrowSource,
    FinalityConfig,
    FinalityStatus,
    FunctionCallParams,
    FunctionCallQuery,
    Layer2Descriptor,
    Layer2Project,
    Layer3Descriptor,
    Layer3Project,
    Project,
    ProjectDescriptor,
    ProjectEscrow,
    ProjectType,
    RawEscrow,
    SharpSubmissionParams,
    SharpSubmissionQuery,
    Token,
    TrackedTxConfigEntry,
    TrackedTxDeclaration,
    TrackedTxSubtype,
    TrackedTxUse,
    TrackedTxUseType,
    TransactionApi,
    TransferParams,
    TransferQuery,
)
from scaling_projects.tokens import TokenRegistry
from scaling_projects.tracked_txs import (
    SHARP_SUBMISSION_ADDRESS,
    SHARP_SUBMISSION_SELECTOR,
    build_tracked_txs_config,
    create_tracked_tx_id,
)


__version__ = "1.0.0"

__all__ = [
    # Assembler
    "BatchResult",
    "ProjectContext",
    "assemble_projects",
    "bridge_to_project",
    "create_project_context",
    "layer2_to_project",
    "layer3_to_project",
    "to_project",

    # Registries
    "ChainConverter",
    "TokenRegistry",

    # Escrows
    "normalize_escrow_tokens",
    "to_project_escrow",

    # Tracked transactions
    "SHARP_SUBMISSION_ADDRESS",
    "SHARP_SUBMISSION_SELECTOR",
    "build_tracked_txs_config",
    "create_tracked_tx_id",

    # Config & loading
    "NormalizerConfig",
    "get_config",
    "set_config",
    "load_chains",
    "load_context",
    "load_projects",
    "load_tokens",

    # Exceptions
    "ProjectConfigError",
    "ChainRegistryError",
    "UnknownChainError",
    "DuplicateChainError",
    "TokenNotFoundError",
    "DescriptorError",
    "ProjectAssemblyError",
    "BatchAssemblyError",

    # Models
    "ALL_TOKENS",
    "BridgeDescriptor",
    "BridgeProject",
    "ChainDescriptor",
    "EscrowBridge",
    "EscrowSource",
    "FinalityConfig",
    "FinalityStatus",
    "FunctionCallParams",
    "FunctionCallQuery",
    "Layer2Descriptor",
    "Layer2Project",
    "Layer3Descriptor",
    "Layer3Project",
    "Project",
    "ProjectDescriptor",
    "ProjectEscrow",
    "ProjectType",
    "RawEscrow",
    "SharpSubmissionParams",
    "SharpSubmissionQuery",
    "Token",
    "TrackedTxConfigEntry",
    "TrackedTxDeclaration",
    "TrackedTxSubtype",
    "TrackedTxUse",
    "TrackedTxUseType",
    "TransactionApi",
    "TransferParams",
    "TransferQuery",
]
