from fastapi import APIRouter, Depends

from starlaunch.api.deps import get_storage
from starlaunch.schemas.points import MintRequest
from starlaunch.services.points_service import mint_points
from starlaunch.storage.base import Storage

router = APIRouter()


@router.post("/mint")
def points_mint(payload: MintRequest, storage: Storage = Depends(get_storage)):
    return mint_points(
        storage,
        wallet_address=payload.wallet_address,
        xlm_amount=payload.xlm_amount,
        tx_hash=payload.tx_hash,
    )
