"""Tests for execution-layer block models."""

import pytest
from pydantic import ValidationError

from factories import BUILDER, GWEI, block_json, make_receipt, make_tx_hash, tx_json
from slot_rewards.data.blocks.models import Block, Transaction


class TestTransaction:
    def test_parses_hex_quantities(self) -> None:
        tx = Transaction.model_validate(
            tx_json(make_tx_hash(1), value=3 * GWEI, gas_price=25 * GWEI)
        )

        assert tx.value == 3 * GWEI
        assert tx.gas_price == 25 * GWEI

    def test_sender_from_field_is_lowercased(self) -> None:
        tx = Transaction.model_validate(
            tx_json(make_tx_hash(1), sender="0xABCDEF0000000000000000000000000000000001")
        )

        assert tx.sender == "0xabcdef0000000000000000000000000000000001"

    def test_contract_creation_has_no_recipient(self) -> None:
        tx = Transaction.model_validate(tx_json(make_tx_hash(1), to=None))

        assert tx.to is None

    def test_missing_sender_rejected(self) -> None:
        data = tx_json(make_tx_hash(1))
        del data["from"]

        with pytest.raises(ValidationError):
            Transaction.model_validate(data)


class TestBlock:
    def test_parses_block(self) -> None:
        block = Block.model_validate(
            block_json(
                number=19_992_375,
                miner=BUILDER.upper().replace("0X", "0x"),
                gas_used=12_000_000,
                transactions=[tx_json(make_tx_hash(1)), tx_json(make_tx_hash(2))],
            )
        )

        assert block.number == 19_992_375
        assert block.gas_used == 12_000_000
        assert block.base_fee_per_gas == 10 * GWEI
        assert block.fee_recipient == BUILDER
        assert len(block.transactions) == 2

    def test_pre_london_block_has_no_base_fee(self) -> None:
        block = Block.model_validate(block_json(number=12_000_000, base_fee_per_gas=None))

        assert block.base_fee_per_gas is None

    def test_extra_fields_ignored(self) -> None:
        data = block_json()
        data["withdrawals"] = [{"index": "0x1"}]

        assert Block.model_validate(data).transactions == ()

    def test_invalid_quantity_rejected(self) -> None:
        data = block_json()
        data["gasUsed"] = "not-hex"

        with pytest.raises(ValidationError):
            Block.model_validate(data)


class TestReceipt:
    def test_fee(self) -> None:
        receipt = make_receipt(make_tx_hash(1), gas_used=21_000, effective_gas_price=40 * GWEI)

        assert receipt.fee == 21_000 * 40 * GWEI
