from pydantic import Field, field_validator

from starlaunch.core.config import get_settings
from starlaunch.schemas.common import WALLET_ADDRESS_MAX_LENGTH, CamelModel
from starlaunch.schemas.user import UserRecord


class MintRequest(CamelModel):
    wallet_address: str = Field(min_length=1, max_length=WALLET_ADDRESS_MAX_LENGTH)
    xlm_amount: float = Field(gt=0)
    tx_hash: str | None = None

    @field_validator("xlm_amount")
    @classmethod
    def _cap_amount(cls, value: float) -> float:
        cap = get_settings().MAX_MINT_XLM
        if value > cap:
            raise ValueError(f"XLM amount cannot exceed {cap:,.0f}")
        return value


class MintTransaction(CamelModel):
    xlm_amount: float
    star_points_minted: float
    referrer_reward: float = 0
    referrer_wallet: str | None = None
    tx_hash: str | None = None
    explorer_url: str | None = None


class MintResponse(CamelModel):
    user: UserRecord
    transaction: MintTransaction
