import logging

from starlaunch.core.exceptions import ConflictError
from starlaunch.schemas.user import UserCreate, UserRecord
from starlaunch.services.referral_service import generate_unique_referral_code, resolve_referrer
from starlaunch.storage.base import Storage

logger = logging.getLogger(__name__)


def connect_wallet(storage: Storage, wallet_address: str, referral_code: str | None = None) -> UserRecord:
    """Return the user owning ``wallet_address``, registering it on first connect."""
    existing = storage.get_user_by_wallet(wallet_address)
    if existing:
        return existing

    new_code = generate_unique_referral_code(storage)
    referrer = resolve_referrer(storage, referral_code)

    try:
        user = storage.create_user(
            UserCreate(
                wallet_address=wallet_address,
                referral_code=new_code,
                star_points=0,
                referred_by=referrer.referral_code if referrer else None,
            )
        )
    except ConflictError:
        # Another request registered the same wallet first.
        existing = storage.get_user_by_wallet(wallet_address)
        if existing:
            return existing
        raise
    logger.info(
        "Registered wallet %s as user %s referral_code=%s referred_by=%s",
        wallet_address,
        user.id,
        user.referral_code,
        user.referred_by,
    )
    return user
