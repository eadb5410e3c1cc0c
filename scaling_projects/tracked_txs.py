"""
Tracked Transaction Config Builder.

Expands each project's tracked transaction declarations into flat
TrackedTxConfigEntry records, one per (declaration, use) pair. Every
entry gets a content-addressed id so liveness and l2costs jobs can key
their stored data by it across restarts.
"""

import hashlib
import json
import logging
from dataclasses import replace
from typing import Any, Iterable, Optional

from .models import (
    FunctionCallParams,
    FunctionCallQuery,
    SharpSubmissionParams,
    SharpSubmissionQuery,
    TrackedTxConfigEntry,
    TrackedTxDeclaration,
    TrackedTxParams,
    TrackedTxQuery,
    TrackedTxUseType,
    TransferParams,
    TransferQuery,
)


logger = logging.getLogger(__name__)


# SHARP GpsStatementVerifier and its verifyProofAndRegister selector
SHARP_SUBMISSION_ADDRESS = "0x47312450B3Ac8b5b8e247a6bB6d523e7605bDb60"
SHARP_SUBMISSION_SELECTOR = "0x9b3b76cc"

TRACKED_TX_ID_LENGTH = 16


def create_tracked_tx_id(entry: TrackedTxConfigEntry) -> str:
    """
    Derive the id of an entry from all of its other fields.

    The entry is serialized to canonical JSON (sorted keys, no
    whitespace) with the `id` field left out, then hashed with SHA-256.
    """
    payload = entry.to_dict(include_id=False)
    serialized = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(serialized.encode("utf-8")).hexdigest()[:TRACKED_TX_ID_LENGTH]


def query_params(query: TrackedTxQuery) -> TrackedTxParams:
    """Map a query variant to the params stored on its entries."""
    if isinstance(query, FunctionCallQuery):
        return FunctionCallParams(address=query.address, selector=query.selector)
    if isinstance(query, TransferQuery):
        return TransferParams(from_address=query.from_address, to_address=query.to_address)
    if isinstance(query, SharpSubmissionQuery):
        return SharpSubmissionParams(
            address=SHARP_SUBMISSION_ADDRESS,
            selector=SHARP_SUBMISSION_SELECTOR,
            program_hashes=query.program_hashes,
        )
    raise TypeError(f"Unsupported tracked transaction query: {type(query).__name__}")


def expand_declaration(
    project_id: str,
    declaration: TrackedTxDeclaration,
) -> list[TrackedTxConfigEntry]:
    """One entry per use of the declaration, in use order."""
    query = declaration.query
    params = query_params(query)

    entries = []
    for use in declaration.uses:
        entry = TrackedTxConfigEntry(
            id="",
            project_id=project_id,
            since_timestamp=query.since_timestamp,
            until_timestamp=query.until_timestamp,
            type=use.type,
            subtype=use.subtype,
            cost_multiplier=(
                declaration.cost_multiplier
                if use.type == TrackedTxUseType.L2_COSTS else None
            ),
            params=params,
        )
        entries.append(replace(entry, id=create_tracked_tx_id(entry)))
    return entries


def build_tracked_txs_config(
    project_id: str,
    declarations: Optional[Iterable[TrackedTxDeclaration]],
) -> Optional[tuple[TrackedTxConfigEntry, ...]]:
    """
    Flatten a project's declarations.

    Returns None when the project declares no tracked transactions at
    all, and a (possibly empty) tuple otherwise.
    """
    if declarations is None:
        return None

    entries: list[TrackedTxConfigEntry] = []
    for declaration in declarations:
        entries.extend(expand_declaration(project_id, declaration))

    logger.debug(f"[{project_id}] Built {len(entries)} tracked transaction entries")
    return tuple(entries)


def summarize_entries(entries: Iterable[TrackedTxConfigEntry]) -> dict[str, Any]:
    """Count entries per use type and subtype, for startup logs."""
    summary: dict[str, Any] = {"total": 0, "by_type": {}, "by_subtype": {}}
    for entry in entries:
        summary["total"] += 1
        by_type = summary["by_type"]
        by_subtype = summary["by_subtype"]
        by_type[entry.type.value] = by_type.get(entry.type.value, 0) + 1
        by_subtype[entry.subtype.value] = by_subtype.get(entry.subtype.value, 0) + 1
    return summary
