from fastapi import APIRouter, Depends

from starlaunch.api.deps import get_storage
from starlaunch.schemas.user import ConnectRequest
from starlaunch.services import auth_service
from starlaunch.storage.base import Storage

router = APIRouter()


@router.post("/connect")
def connect(payload: ConnectRequest, storage: Storage = Depends(get_storage)):
    return auth_service.connect_wallet(
        storage,
        wallet_address=payload.wallet_address,
        referral_code=payload.referral_code,
    )
