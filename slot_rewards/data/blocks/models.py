"""Pydantic models for execution-layer blocks, transactions and receipts.

The node returns quantities as ``0x``-prefixed hex strings; they are decoded
to ``int`` on validation. Addresses are stored lowercased so they can be
compared directly.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from slot_rewards.helpers.parsers import parse_hex_int, parse_optional_hex_int


class _RpcModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)


class Transaction(_RpcModel):
    """Transaction as included in a full-transaction block."""

    hash: str
    sender: str = Field(..., alias="from", description="Recovered sender address")
    to: str | None = Field(default=None, description="Recipient; None for creation")
    value: int = 0
    gas_price: int | None = Field(default=None, alias="gasPrice")

    @field_validator("value", mode="before")
    @classmethod
    def _parse_value(cls, v: Any) -> int:
        return parse_hex_int(v)

    @field_validator("gas_price", mode="before")
    @classmethod
    def _parse_gas_price(cls, v: Any) -> int | None:
        return parse_optional_hex_int(v)

    @field_validator("sender", "to", mode="before")
    @classmethod
    def _lower_address(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v


class Receipt(_RpcModel):
    """Transaction receipt; only the fields that determine the fee paid."""

    transaction_hash: str = Field(..., alias="transactionHash")
    gas_used: int = Field(..., alias="gasUsed")
    effective_gas_price: int = Field(..., alias="effectiveGasPrice")

    @field_validator("gas_used", "effective_gas_price", mode="before")
    @classmethod
    def _parse_quantity(cls, v: Any) -> int:
        return parse_hex_int(v)

    @property
    def fee(self) -> int:
        """Total fee paid by the transaction in wei."""
        return self.gas_used * self.effective_gas_price


class Block(_RpcModel):
    """Execution-layer block with full transaction objects."""

    number: int
    hash: str
    miner: str = Field(..., description="Coinbase / fee recipient address")
    gas_used: int = Field(..., alias="gasUsed")
    base_fee_per_gas: int | None = Field(
        default=None,
        alias="baseFeePerGas",
        description="Absent before the London fee-market upgrade",
    )
    transactions: tuple[Transaction, ...] = ()

    @field_validator("number", "gas_used", mode="before")
    @classmethod
    def _parse_quantity(cls, v: Any) -> int:
        return parse_hex_int(v)

    @field_validator("base_fee_per_gas", mode="before")
    @classmethod
    def _parse_base_fee(cls, v: Any) -> int | None:
        return parse_optional_hex_int(v)

    @field_validator("miner", mode="before")
    @classmethod
    def _lower_miner(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v

    @property
    def fee_recipient(self) -> str:
        """Lowercased coinbase address."""
        return self.miner


__all__ = ["Block", "Receipt", "Transaction"]
