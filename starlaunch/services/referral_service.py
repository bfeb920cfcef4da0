import logging
import secrets
import string

from starlaunch.core.config import get_settings
from starlaunch.core.exceptions import AppException
from starlaunch.schemas.user import UserRecord
from starlaunch.storage.base import Storage

settings = get_settings()
logger = logging.getLogger(__name__)

REFERRAL_CODE_ALPHABET = string.ascii_uppercase + string.digits


def generate_referral_code() -> str:
    suffix = "".join(secrets.choice(REFERRAL_CODE_ALPHABET) for _ in range(settings.REFERRAL_CODE_LENGTH))
    return f"{settings.REFERRAL_CODE_PREFIX}{suffix}"


def generate_unique_referral_code(storage: Storage) -> str:
    attempts = settings.REFERRAL_CODE_MAX_ATTEMPTS
    for attempt in range(1, attempts + 1):
        code = generate_referral_code()
        if storage.get_user_by_referral_code(code) is None:
            return code
        logger.warning("Referral code collision on attempt %d/%d", attempt, attempts)
    raise AppException("Failed to generate unique referral code", status_code=500)


def normalize_referral_code(referral_code: str | None) -> str | None:
    if referral_code is None:
        return None
    cleaned = referral_code.strip().upper()
    return cleaned or None


def resolve_referrer(storage: Storage, referral_code: str | None) -> UserRecord | None:
    """Unknown codes are ignored rather than rejected."""
    code = normalize_referral_code(referral_code)
    if not code:
        return None
    referrer = storage.get_user_by_referral_code(code)
    if not referrer:
        logger.info("Ignoring unknown referral code %s", code)
    return referrer


def calculate_referral_reward(star_points: float) -> float:
    return star_points * settings.REFERRAL_REWARD_PERCENT / 100
