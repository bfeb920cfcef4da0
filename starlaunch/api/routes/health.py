from fastapi import APIRouter, Depends

from starlaunch.api.deps import get_storage
from starlaunch.core.config import get_settings
from starlaunch.services.stellar_service import get_network_info
from starlaunch.storage.base import Storage

router = APIRouter()
settings = get_settings()


@router.get("/health")
def health(storage: Storage = Depends(get_storage)):
    return {
        "status": "ok",
        "environment": settings.ENVIRONMENT,
        "storage": storage.name,
    }


@router.get("/network")
def network():
    return get_network_info()
