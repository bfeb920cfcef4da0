import uuid
from datetime import datetime

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from starlaunch.db.base import Base
from starlaunch.schemas.common import AMOUNT_MAX_LENGTH, URL_MAX_LENGTH


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    creator_id: Mapped[str] = mapped_column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    symbol: Mapped[str] = mapped_column(String(10), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    logo_url: Mapped[str | None] = mapped_column(String(URL_MAX_LENGTH), nullable=True)
    total_supply: Mapped[str] = mapped_column(String(AMOUNT_MAX_LENGTH), nullable=False)
    decimals: Mapped[int] = mapped_column(Integer, nullable=False, default=7)
    airdrop_percent: Mapped[int] = mapped_column(Integer, nullable=False)
    creator_percent: Mapped[int] = mapped_column(Integer, nullable=False)
    liquidity_percent: Mapped[int] = mapped_column(Integer, nullable=False)
    minimum_liquidity: Mapped[str] = mapped_column(String(AMOUNT_MAX_LENGTH), nullable=False)
    has_vesting: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    vesting_period_days: Mapped[int | None] = mapped_column(Integer, nullable=True)
    participation_period_days: Mapped[int] = mapped_column(Integer, nullable=False)
    twitter_url: Mapped[str | None] = mapped_column(String(URL_MAX_LENGTH), nullable=True)
    telegram_url: Mapped[str | None] = mapped_column(String(URL_MAX_LENGTH), nullable=True)
    website_url: Mapped[str | None] = mapped_column(String(URL_MAX_LENGTH), nullable=True)
    contract_address: Mapped[str | None] = mapped_column(String(64), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active", index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)
    ends_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, index=True)
