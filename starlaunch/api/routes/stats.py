from fastapi import APIRouter, Depends

from starlaunch.api.deps import get_storage
from starlaunch.services.stats_service import get_global_stats
from starlaunch.storage.base import Storage

router = APIRouter()


@router.get("/global")
def stats_global(storage: Storage = Depends(get_storage)):
    return get_global_stats(storage)
