"""Pydantic models for consensus-layer (beacon node) REST responses."""

from pydantic import BaseModel, ConfigDict, Field


class _BeaconModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)


class ErrorBody(_BeaconModel):
    """Error envelope returned by beacon nodes, e.g. ``{"code": 404, ...}``."""

    code: int
    message: str = ""


class _HeaderMessage(_BeaconModel):
    slot: int


class _SignedHeader(_BeaconModel):
    message: _HeaderMessage


class _HeaderData(_BeaconModel):
    root: str | None = None
    header: _SignedHeader


class HeadHeaderResponse(_BeaconModel):
    """Response of ``/eth/v1/beacon/headers/{block_id}``."""

    data: _HeaderData

    @property
    def slot(self) -> int:
        return self.data.header.message.slot


class _ExecutionPayload(_BeaconModel):
    block_hash: str
    block_number: int | None = None


class _BlockBody(_BeaconModel):
    execution_payload: _ExecutionPayload | None = None


class _BlockMessage(_BeaconModel):
    slot: int
    proposer_index: int | None = None
    body: _BlockBody


class _SignedBlock(_BeaconModel):
    message: _BlockMessage


class BeaconBlockResponse(_BeaconModel):
    """Response of ``/eth/v2/beacon/blocks/{block_id}``."""

    version: str | None = None
    data: _SignedBlock

    @property
    def execution_block_hash(self) -> str | None:
        """Hash of the execution payload, None for pre-merge blocks."""
        payload = self.data.message.body.execution_payload
        return payload.block_hash if payload else None


class _SyncCommitteeData(_BeaconModel):
    validators: list[str]


class SyncCommitteeResponse(_BeaconModel):
    """Response of ``/eth/v1/beacon/states/{state_id}/sync_committees``."""

    data: _SyncCommitteeData


class _ValidatorDetails(_BeaconModel):
    pubkey: str


class ValidatorEntry(_BeaconModel):
    """Single validator from the roster of a beacon state."""

    index: str
    status: str | None = None
    validator: _ValidatorDetails

    @property
    def pubkey(self) -> str:
        return self.validator.pubkey


class ValidatorsResponse(_BeaconModel):
    """Response of ``/eth/v1/beacon/states/{state_id}/validators``."""

    data: list[ValidatorEntry] = Field(default_factory=list)


__all__ = [
    "BeaconBlockResponse",
    "ErrorBody",
    "HeadHeaderResponse",
    "SyncCommitteeResponse",
    "ValidatorEntry",
    "ValidatorsResponse",
]
