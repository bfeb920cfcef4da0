import logging

from starlaunch.core.config import get_settings
from starlaunch.schemas.points import MintResponse, MintTransaction
from starlaunch.services.referral_service import calculate_referral_reward
from starlaunch.services.stellar_service import get_explorer_url
from starlaunch.services.user_service import UNREGISTERED_WALLET_MESSAGE, get_user_by_wallet_or_raise
from starlaunch.storage.base import Storage

settings = get_settings()
logger = logging.getLogger(__name__)


def xlm_to_star_points(xlm_amount: float) -> float:
    return xlm_amount * settings.POINTS_PER_XLM


def mint_points(storage: Storage, wallet_address: str, xlm_amount: float, tx_hash: str | None = None) -> MintResponse:
    # txHash is recorded but not verified against the network yet.
    user = get_user_by_wallet_or_raise(storage, wallet_address, UNREGISTERED_WALLET_MESSAGE)

    # Resolve everything that can fail before any balance moves.
    explorer_url = get_explorer_url(settings.STELLAR_NETWORK, "tx", tx_hash) if tx_hash else None
    minted = xlm_to_star_points(xlm_amount)
    updated_user = storage.adjust_user_points(user.id, minted)

    referrer_reward = 0.0
    referrer_wallet = None
    if user.referred_by:
        referrer = storage.get_user_by_referral_code(user.referred_by)
        if referrer and (referrer.id != user.id or settings.ALLOW_SELF_REFERRAL):
            referrer_reward = calculate_referral_reward(minted)
            rewarded = storage.adjust_user_points(referrer.id, referrer_reward)
            referrer_wallet = rewarded.wallet_address
            if rewarded.id == updated_user.id:
                updated_user = rewarded
        elif referrer:
            logger.info("Skipping self-referral reward for user %s", user.id)

    logger.info(
        "Minted %s STAR for user %s from %s XLM referrer_reward=%s tx=%s",
        minted,
        user.id,
        xlm_amount,
        referrer_reward,
        tx_hash,
    )
    return MintResponse(
        user=updated_user,
        transaction=MintTransaction(
            xlm_amount=xlm_amount,
            star_points_minted=minted,
            referrer_reward=referrer_reward,
            referrer_wallet=referrer_wallet,
            tx_hash=tx_hash,
            explorer_url=explorer_url,
        ),
    )
