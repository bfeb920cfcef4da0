from datetime import datetime

from pydantic import Field

from starlaunch.schemas.common import REFERRAL_CODE_MAX_LENGTH, WALLET_ADDRESS_MAX_LENGTH, CamelModel


class UserCreate(CamelModel):
    wallet_address: str
    referral_code: str
    star_points: float = 0
    referred_by: str | None = None


class UserRecord(CamelModel):
    id: str
    wallet_address: str
    star_points: float
    referral_code: str
    referred_by: str | None = None
    created_at: datetime


class ConnectRequest(CamelModel):
    wallet_address: str = Field(min_length=1, max_length=WALLET_ADDRESS_MAX_LENGTH)
    referral_code: str | None = Field(default=None, max_length=REFERRAL_CODE_MAX_LENGTH)
