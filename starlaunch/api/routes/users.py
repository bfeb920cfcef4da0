from fastapi import APIRouter, Depends, Query

from starlaunch.api.deps import get_storage
from starlaunch.core.exceptions import ValidationFailed
from starlaunch.services import user_service
from starlaunch.storage.base import Storage

router = APIRouter()


@router.get("/me")
def users_me(
    wallet_address: str | None = Query(None, alias="walletAddress"),
    storage: Storage = Depends(get_storage),
):
    if not wallet_address:
        raise ValidationFailed("walletAddress query parameter is required")
    return user_service.get_user_by_wallet_or_raise(storage, wallet_address)


@router.get("/{user_id}/referrals")
def users_referrals(user_id: str, storage: Storage = Depends(get_storage)):
    return user_service.list_referrals(storage, user_id)


@router.get("/{user_id}/projects")
def users_projects(user_id: str, storage: Storage = Depends(get_storage)):
    return user_service.list_user_projects(storage, user_id)


@router.get("/{user_id}/participations")
def users_participations(user_id: str, storage: Storage = Depends(get_storage)):
    return user_service.list_user_participations(storage, user_id)
