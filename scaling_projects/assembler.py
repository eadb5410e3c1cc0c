"""
Project Assembler - Composes descriptors into canonical projects.

Usage:
    context = create_project_context(chains=CHAINS, tokens=TOKENS)

    project = layer2_to_project(arbitrum, context)
    result = assemble_projects([arbitrum, hop, xai], context, fail_fast=False)
    result.raise_for_errors()

The context is the only shared input. It is immutable, so independent
projects can be assembled in any order.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable

from .chains import ChainConverter
from .escrows import to_project_escrow
from .exceptions import BatchAssemblyError, ProjectAssemblyError, ProjectConfigError
from .models import (
    BridgeDescriptor,
    BridgeProject,
    ChainDescriptor,
    FinalityStatus,
    Layer2Descriptor,
    Layer2Project,
    Layer3Descriptor,
    Layer3Project,
    Project,
    ProjectDescriptor,
    ProjectEscrow,
    RawEscrow,
    Token,
)
from .tokens import TokenRegistry
from .tracked_txs import build_tracked_txs_config, summarize_entries


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProjectContext:
    """Static lookups shared by every assembly."""
    chains: ChainConverter
    tokens: TokenRegistry


def create_project_context(
    chains: Iterable[ChainDescriptor],
    tokens: Iterable[Token],
) -> ProjectContext:
    """
    Build the context once at startup.

    Raises:
        DuplicateChainError: two chains share a name or an id
    """
    return ProjectContext(
        chains=ChainConverter(chains),
        tokens=TokenRegistry(tokens),
    )


def _map_escrows(
    escrows: Iterable[RawEscrow],
    context: ProjectContext,
) -> tuple[ProjectEscrow, ...]:
    return tuple(
        to_project_escrow(escrow, context.chains, context.tokens)
        for escrow in escrows
    )


def layer2_to_project(
    layer2: Layer2Descriptor,
    context: ProjectContext,
) -> Layer2Project:
    """
    Assemble a layer2.

    Tracked transactions stay None when none are declared. Finality is
    dropped while it is FinalityStatus.COMING_SOON.
    """
    finality = layer2.finality
    if finality is FinalityStatus.COMING_SOON:
        finality = None

    return Layer2Project(
        project_id=layer2.project_id,
        slug=layer2.slug,
        is_archived=layer2.is_archived,
        is_upcoming=layer2.is_upcoming,
        escrows=_map_escrows(layer2.escrows, context),
        associated_tokens=layer2.associated_tokens,
        transaction_api=layer2.transaction_api,
        tracked_txs_config=build_tracked_txs_config(layer2.project_id, layer2.tracked_txs),
        liveness_config=layer2.liveness,
        finality_config=finality,
    )


def bridge_to_project(
    bridge: BridgeDescriptor,
    context: ProjectContext,
) -> BridgeProject:
    return BridgeProject(
        project_id=bridge.project_id,
        slug=bridge.slug,
        escrows=_map_escrows(bridge.escrows, context),
        associated_tokens=bridge.associated_tokens,
    )


def layer3_to_project(
    layer3: Layer3Descriptor,
    context: ProjectContext,
) -> Layer3Project:
    return Layer3Project(
        project_id=layer3.project_id,
        slug=layer3.slug,
        is_upcoming=layer3.is_upcoming,
        escrows=_map_escrows(layer3.escrows, context),
        associated_tokens=layer3.associated_tokens,
    )


def to_project(descriptor: ProjectDescriptor, context: ProjectContext) -> Project:
    """Dispatch on the descriptor kind."""
    if isinstance(descriptor, Layer2Descriptor):
        return layer2_to_project(descriptor, context)
    if isinstance(descriptor, BridgeDescriptor):
        return bridge_to_project(descriptor, context)
    if isinstance(descriptor, Layer3Descriptor):
        return layer3_to_project(descriptor, context)
    raise TypeError(f"Unsupported project descriptor: {type(descriptor).__name__}")


# ============================================================
# BATCH ASSEMBLY
# ============================================================

@dataclass
class BatchResult:
    """Projects assembled from a batch, plus per-project failures."""
    projects: list[Project] = field(default_factory=list)
    errors: list[ProjectAssemblyError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        if self.errors:
            raise BatchAssemblyError(
                f"{len(self.errors)} project(s) failed to assemble",
                errors=self.errors,
                context={"assembled": len(self.projects)},
            )


def assemble_projects(
    descriptors: Iterable[ProjectDescriptor],
    context: ProjectContext,
    fail_fast: bool = True,
) -> BatchResult:
    """
    Assemble every descriptor of a batch.

    With `fail_fast` the first failure aborts the batch and is raised as
    ProjectAssemblyError. Without it, failing projects are skipped and
    reported in BatchResult.errors.
    """
    result = BatchResult()

    for descriptor in descriptors:
        try:
            result.projects.append(to_project(descriptor, context))
        except ProjectConfigError as e:
            error = ProjectAssemblyError(
                f"Cannot assemble project '{descriptor.project_id}'",
                project_id=descriptor.project_id,
                original_error=e,
            )
            if fail_fast:
                raise error from e
            logger.warning(f"Skipping project: {error}")
            result.errors.append(error)

    tracked = summarize_entries(
        entry
        for project in result.projects
        if isinstance(project, Layer2Project) and project.tracked_txs_config
        for entry in project.tracked_txs_config
    )
    logger.info(
        f"Assembled {len(result.projects)} projects "
        f"({len(result.errors)} failed, {tracked['total']} tracked transactions)"
    )
    return result
