"""
prism_neo.space_api.models

Response models for the remote access/billing API.

Responsibilities:
- Parse the camelCase JSON payloads into typed objects.
- Keep only the fields this service reads; anything else is ignored.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Money as the API sends it: whole units in practice, but fractional values are valid JSON numbers.
Amount = int | float


class ApiModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")


class Bind(ApiModel):
    type: str
    bid: str


class SessionInfo(ApiModel):
    created_at: datetime


class ActiveUser(ApiModel):
    binds: list[Bind] = Field(default_factory=list)
    sessions: list[SessionInfo] = Field(default_factory=list)

    def bind_id(self, bind_type: str) -> str | None:
        for bind in self.binds:
            if bind.type == bind_type:
                return bind.bid
        return None


class Session(ApiModel):
    created_at: datetime
    closed_at: datetime | None = None
    # Admin override of the charged amount; takes precedence over any computed cost.
    cost_overwrite: Amount | None = None
    final_cost: Amount | None = None


class BillingSegment(ApiModel):
    rule_id: int
    rule_name: str
    start_time: datetime
    end_time: datetime
    duration_minutes: int = 0
    cost: Amount
    is_capped: bool = False


class BillingInfo(ApiModel):
    start_time: datetime | None = None
    end_time: datetime
    total_cost: Amount
    segments: list[BillingSegment] = Field(default_factory=list)


class DiscountLog(ApiModel):
    asset: str
    saved: Amount


class DiscountInfo(ApiModel):
    original_cost: Amount
    final_cost: Amount
    applied_logs: list[DiscountLog] = Field(default_factory=list)


class Asset(ApiModel):
    id: int | None = None
    type: str | None = None
    name: str
    description: str | None = None
    expire_at: datetime | None = None
    active_at: datetime | None = None
    valid: bool = True


class UserAsset(ApiModel):
    id: int | None = None
    asset_type: str | None = None
    asset: Asset | None = None
    count: int = 0
    add_at: datetime | None = None
    active_at: datetime | None = None
    expire_at: datetime | None = None
    comment: str | None = None

    @property
    def name(self) -> str | None:
        return self.asset.name if self.asset is not None else None


class AssetDetails(ApiModel):
    available: list[UserAsset] = Field(default_factory=list)
    unavailable: list[UserAsset] = Field(default_factory=list)


class Balance(ApiModel):
    available: Amount = 0
    all: Amount = 0
    details: AssetDetails | None = None

    @property
    def available_assets(self) -> list[UserAsset]:
        return self.details.available if self.details is not None else []


class Wallet(ApiModel):
    total: Balance = Field(default_factory=Balance)
    paid: Balance = Field(default_factory=Balance)
    free: Balance = Field(default_factory=Balance)
    tickets: Balance = Field(default_factory=Balance)
    passes: Balance = Field(default_factory=Balance)

    @property
    def locked(self) -> Amount:
        # Granted but not yet active.
        return max(self.total.all - self.total.available, 0)


class BillingPreview(ApiModel):
    session: Session
    billing: BillingInfo
    discount: DiscountInfo | None = None
    wallet: Wallet = Field(default_factory=Wallet)


class LogoutResult(ApiModel):
    session: Session
    billing: dict[str, Any] = Field(default_factory=dict)


class DoorPassword(ApiModel):
    password: str
    id: Any = None


class PowerState(ApiModel):
    state: bool


class MachinePower(ApiModel):
    machine: str
    state: PowerState


class WalletAdjustment(ApiModel):
    original_balance: Amount
    final_balance: Amount


class RedeemedItem(ApiModel):
    name: str
    count: int = 1
    asset_type: str | None = None
    duration_ms: int | None = None


# --- Module Notes -----------------------------------------------------------
# Models are read-only views over API responses: the service never builds them to send
# back, so request bodies stay plain dicts in `space_api.client`.
