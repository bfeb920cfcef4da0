import uuid
from datetime import datetime

from sqlalchemy import DateTime, Float, String
from sqlalchemy.orm import Mapped, mapped_column

from starlaunch.db.base import Base
from starlaunch.schemas.common import REFERRAL_CODE_MAX_LENGTH, WALLET_ADDRESS_MAX_LENGTH


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    wallet_address: Mapped[str] = mapped_column(String(WALLET_ADDRESS_MAX_LENGTH), unique=True, nullable=False, index=True)
    star_points: Mapped[float] = mapped_column(Float, nullable=False, default=0)
    referral_code: Mapped[str] = mapped_column(String(REFERRAL_CODE_MAX_LENGTH), unique=True, nullable=False, index=True)
    # Holds the referrer's referral code, not its id.
    referred_by: Mapped[str | None] = mapped_column(String(REFERRAL_CODE_MAX_LENGTH), nullable=True, index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
