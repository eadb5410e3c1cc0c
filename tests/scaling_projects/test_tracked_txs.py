"""
Tests for tracked transaction config expansion and id derivation.
"""

from dataclasses import replace

import pytest

from scaling_projects.models import (
    FunctionCallParams,
    FunctionCallQuery,
    SharpSubmissionParams,
    SharpSubmissionQuery,
    TrackedTxDeclaration,
    TrackedTxSubtype,
    TrackedTxUse,
    TrackedTxUseType,
    TransferParams,
    TransferQuery,
)
from scaling_projects.tracked_txs import (
    SHARP_SUBMISSION_ADDRESS,
    SHARP_SUBMISSION_SELECTOR,
    TRACKED_TX_ID_LENGTH,
    build_tracked_txs_config,
    create_tracked_tx_id,
    query_params,
    summarize_entries,
)


SEQUENCER_INBOX = "0x1c479675ad559DC151F6Ec7ed3FbF8ceE79582B6"
BATCH_POSTER = "0xC1b634853Cb333D3aD8663715b08f41A3Aec47cc"

LIVENESS_BATCHES = TrackedTxUse(
    type=TrackedTxUseType.LIVENESS,
    subtype=TrackedTxSubtype.BATCH_SUBMISSIONS,
)
L2COSTS_BATCHES = TrackedTxUse(
    type=TrackedTxUseType.L2_COSTS,
    subtype=TrackedTxSubtype.BATCH_SUBMISSIONS,
)


def function_call(selector: str = "0x8f111f3c", **overrides) -> TrackedTxDeclaration:
    data = {
        "uses": [LIVENESS_BATCHES, L2COSTS_BATCHES],
        "query": FunctionCallQuery(
            address=SEQUENCER_INBOX,
            selector=selector,
            since_timestamp=1661457944,
        ),
        "cost_multiplier": 0.6,
    }
    data.update(overrides)
    return TrackedTxDeclaration(**data)


class TestExpansion:
    """Fan-out from declarations to flat entries."""

    def test_one_entry_per_use(self):
        entries = build_tracked_txs_config("arbitrum", [function_call()])

        assert len(entries) == 2
        liveness, l2costs = entries
        assert liveness.type is TrackedTxUseType.LIVENESS
        assert l2costs.type is TrackedTxUseType.L2_COSTS
        assert liveness.params == l2costs.params
        assert liveness.since_timestamp == l2costs.since_timestamp == 1661457944
        assert liveness.id != l2costs.id

    def test_cost_multiplier_only_on_l2costs(self):
        liveness, l2costs = build_tracked_txs_config("arbitrum", [function_call()])

        assert liveness.cost_multiplier is None
        assert l2costs.cost_multiplier == 0.6

    def test_l2costs_without_override(self):
        _, l2costs = build_tracked_txs_config(
            "arbitrum", [function_call(cost_multiplier=None)]
        )

        assert l2costs.cost_multiplier is None
        assert "cost_multiplier" not in l2costs.to_dict()

    def test_base_fields(self):
        declaration = function_call(
            query=FunctionCallQuery(
                address=SEQUENCER_INBOX,
                selector="0x8f111f3c",
                since_timestamp=1661457944,
                until_timestamp=1710427823,
            ),
        )

        entry = build_tracked_txs_config("arbitrum", [declaration])[0]

        assert entry.project_id == "arbitrum"
        assert entry.until_timestamp == 1710427823
        assert entry.subtype is TrackedTxSubtype.BATCH_SUBMISSIONS

    def test_declarations_flatten_in_order(self):
        entries = build_tracked_txs_config(
            "arbitrum",
            [function_call("0x8f111f3c"), function_call("0x6f12b0c9")],
        )

        assert [e.params.selector for e in entries] == [
            "0x8f111f3c", "0x8f111f3c", "0x6f12b0c9", "0x6f12b0c9",
        ]

    def test_absent_declarations_stay_none(self):
        assert build_tracked_txs_config("arbitrum", None) is None

    def test_empty_declarations_give_empty_tuple(self):
        assert build_tracked_txs_config("arbitrum", []) == ()

    def test_declaration_requires_uses(self):
        with pytest.raises(ValueError):
            function_call(uses=[])


class TestQueryParams:
    """Variant-specific params."""

    def test_function_call(self):
        params = query_params(function_call().query)

        assert params == FunctionCallParams(address=SEQUENCER_INBOX, selector="0x8f111f3c")
        assert params.to_dict() == {
            "formula": "functionCall",
            "address": SEQUENCER_INBOX,
            "selector": "0x8f111f3c",
        }

    def test_transfer(self):
        query = TransferQuery(
            from_address=BATCH_POSTER,
            to_address=SEQUENCER_INBOX,
            since_timestamp=1700000000,
        )

        params = query_params(query)

        assert params == TransferParams(from_address=BATCH_POSTER, to_address=SEQUENCER_INBOX)
        assert params.to_dict() == {
            "formula": "transfer",
            "from": BATCH_POSTER,
            "to": SEQUENCER_INBOX,
        }

    def test_sharp_submission_uses_fixed_verifier(self):
        query = SharpSubmissionQuery(
            program_hashes=["3485280386001712778192330279103973322645241679001461923469191557000342180556"],
            since_timestamp=1636978914,
        )

        params = query_params(query)

        assert isinstance(params, SharpSubmissionParams)
        assert params.address == SHARP_SUBMISSION_ADDRESS
        assert params.selector == SHARP_SUBMISSION_SELECTOR
        assert params.program_hashes == query.program_hashes
        assert params.to_dict()["formula"] == "sharpSubmission"

    def test_unknown_variant(self):
        with pytest.raises(TypeError):
            query_params(object())


class TestTrackedTxId:
    """Content-addressed ids."""

    def test_identical_declarations_give_identical_ids(self):
        first = build_tracked_txs_config("arbitrum", [function_call()])
        second = build_tracked_txs_config("arbitrum", [function_call()])

        assert [e.id for e in first] == [e.id for e in second]

    def test_selector_changes_id(self):
        original = build_tracked_txs_config("arbitrum", [function_call("0x8f111f3c")])
        changed = build_tracked_txs_config("arbitrum", [function_call("0x6f12b0c9")])

        assert original[0].id != changed[0].id
        assert original[1].id != changed[1].id

    def test_subtype_changes_id(self):
        state_updates = TrackedTxUse(
            type=TrackedTxUseType.LIVENESS,
            subtype=TrackedTxSubtype.STATE_UPDATES,
        )

        batches = build_tracked_txs_config("arbitrum", [function_call(uses=[LIVENESS_BATCHES])])
        updates = build_tracked_txs_config("arbitrum", [function_call(uses=[state_updates])])

        assert batches[0].id != updates[0].id

    def test_project_changes_id(self):
        arbitrum = build_tracked_txs_config("arbitrum", [function_call()])
        nova = build_tracked_txs_config("nova", [function_call()])

        assert arbitrum[0].id != nova[0].id

    @pytest.mark.parametrize("from_address,to_address", [
        (SEQUENCER_INBOX, SEQUENCER_INBOX),
        (BATCH_POSTER, BATCH_POSTER),
    ])
    def test_transfer_addresses_change_id(self, from_address, to_address):
        def transfer(sender, receiver):
            query = TransferQuery(
                from_address=sender,
                to_address=receiver,
                since_timestamp=1661457944,
            )
            return TrackedTxDeclaration(uses=[LIVENESS_BATCHES], query=query)

        original = build_tracked_txs_config("arbitrum", [transfer(BATCH_POSTER, SEQUENCER_INBOX)])
        changed = build_tracked_txs_config("arbitrum", [transfer(from_address, to_address)])

        assert original[0].id != changed[0].id

    def test_program_hashes_change_id(self):
        def sharp(*program_hashes):
            query = SharpSubmissionQuery(program_hashes=program_hashes, since_timestamp=1636978914)
            return TrackedTxDeclaration(uses=[LIVENESS_BATCHES], query=query)

        first = build_tracked_txs_config("starknet", [sharp("0x1234")])
        second = build_tracked_txs_config("starknet", [sharp("0x5678")])
        both = build_tracked_txs_config("starknet", [sharp("0x1234", "0x5678")])

        assert len({first[0].id, second[0].id, both[0].id}) == 3

    def test_use_type_alone_changes_id(self):
        entries = build_tracked_txs_config("arbitrum", [function_call(cost_multiplier=None)])

        liveness, l2costs = entries
        assert liveness.cost_multiplier is None and l2costs.cost_multiplier is None
        assert liveness.params == l2costs.params
        assert liveness.id != l2costs.id

    def test_integer_and_float_multiplier_give_same_id(self):
        as_int = build_tracked_txs_config("arbitrum", [function_call(cost_multiplier=1)])
        as_float = build_tracked_txs_config("arbitrum", [function_call(cost_multiplier=1.0)])

        assert as_int[1].cost_multiplier == 1.0
        assert isinstance(as_int[1].cost_multiplier, float)
        assert as_int[1].id == as_float[1].id

    def test_id_matches_recomputation(self):
        entry = build_tracked_txs_config("arbitrum", [function_call()])[0]

        assert create_tracked_tx_id(entry) == entry.id
        assert create_tracked_tx_id(replace(entry, id="anything")) == entry.id
        assert len(entry.id) == TRACKED_TX_ID_LENGTH

    def test_id_is_not_part_of_hashed_payload(self):
        entry = build_tracked_txs_config("arbitrum", [function_call()])[0]

        assert "id" not in entry.to_dict(include_id=False)
        assert entry.to_dict()["id"] == entry.id


class TestSummary:

    def test_counts_by_type_and_subtype(self):
        entries = build_tracked_txs_config(
            "arbitrum", [function_call(), function_call("0x6f12b0c9")]
        )

        summary = summarize_entries(entries)

        assert summary["total"] == 4
        assert summary["by_type"] == {"liveness": 2, "l2costs": 2}
        assert summary["by_subtype"] == {"batchSubmissions": 4}
