import math
from datetime import datetime

from pydantic import Field, field_validator, model_validator

from starlaunch.schemas.common import (
    AMOUNT_MAX_LENGTH,
    URL_MAX_LENGTH,
    WALLET_ADDRESS_MAX_LENGTH,
    CamelModel,
)


def _parse_amount(value: str) -> float | None:
    try:
        number = float(value.strip())
    except (AttributeError, ValueError):
        return None
    return number if math.isfinite(number) else None


class ProjectFields(CamelModel):
    name: str
    symbol: str
    description: str
    logo_url: str | None = None
    total_supply: str
    decimals: int = 7
    airdrop_percent: int
    creator_percent: int
    liquidity_percent: int
    minimum_liquidity: str
    has_vesting: bool = False
    vesting_period_days: int | None = None
    participation_period_days: int
    twitter_url: str | None = None
    telegram_url: str | None = None
    website_url: str | None = None


class ProjectCreate(ProjectFields):
    creator_id: str


class ProjectRecord(ProjectFields):
    id: str
    creator_id: str
    contract_address: str | None = None
    status: str
    created_at: datetime
    ends_at: datetime


class ProjectCreateRequest(ProjectFields):
    name: str = Field(min_length=2, max_length=50)
    symbol: str = Field(min_length=2, max_length=10)
    description: str = Field(min_length=10)
    logo_url: str | None = Field(default=None, max_length=URL_MAX_LENGTH)
    total_supply: str = Field(max_length=AMOUNT_MAX_LENGTH)
    decimals: int = Field(default=7, ge=0)
    airdrop_percent: int = Field(ge=0, le=100)
    creator_percent: int = Field(ge=0, le=100)
    liquidity_percent: int = Field(ge=0, le=100)
    minimum_liquidity: str = Field(max_length=AMOUNT_MAX_LENGTH)
    participation_period_days: int = Field(ge=3, le=15)
    twitter_url: str | None = Field(default=None, max_length=URL_MAX_LENGTH)
    telegram_url: str | None = Field(default=None, max_length=URL_MAX_LENGTH)
    website_url: str | None = Field(default=None, max_length=URL_MAX_LENGTH)
    wallet_address: str = Field(min_length=1, max_length=WALLET_ADDRESS_MAX_LENGTH)
    tx_hash: str | None = None

    @field_validator("symbol")
    @classmethod
    def _upper_symbol(cls, value: str) -> str:
        return value.upper()

    @field_validator("total_supply")
    @classmethod
    def _positive_supply(cls, value: str) -> str:
        number = _parse_amount(value)
        if number is None or number <= 0:
            raise ValueError("Total supply must be a positive number")
        return value

    @field_validator("minimum_liquidity")
    @classmethod
    def _liquidity_floor(cls, value: str) -> str:
        number = _parse_amount(value)
        if number is None or number < 500:
            raise ValueError("Minimum liquidity must be at least 500")
        return value

    @model_validator(mode="after")
    def _check_split_and_vesting(self):
        if self.airdrop_percent + self.creator_percent + self.liquidity_percent != 100:
            raise ValueError("Airdrop, creator, and liquidity percentages must sum to 100%")
        if self.has_vesting and not self.vesting_period_days:
            raise ValueError("Vesting period must be set when vesting is enabled")
        return self

    def to_project_create(self, creator_id: str) -> ProjectCreate:
        data = self.model_dump(exclude={"wallet_address", "tx_hash"})
        return ProjectCreate(**data, creator_id=creator_id)


class ParticipationCreate(CamelModel):
    user_id: str
    project_id: str
    star_points_used: float


class ParticipationRecord(ParticipationCreate):
    id: str
    created_at: datetime


class ParticipateRequest(CamelModel):
    wallet_address: str = Field(min_length=1, max_length=WALLET_ADDRESS_MAX_LENGTH)
    star_points: float = Field(gt=0)
    tx_hash: str | None = None


class ParticipateResponse(CamelModel):
    participation: ParticipationRecord
    burned: float
    to_creator: float
    new_balance: float


class UserParticipation(CamelModel):
    participation: ParticipationRecord
    project: ProjectRecord | None = None
