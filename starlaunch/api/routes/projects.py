from fastapi import APIRouter, Depends

from starlaunch.api.deps import get_storage
from starlaunch.schemas.project import ParticipateRequest, ProjectCreateRequest
from starlaunch.services import project_service
from starlaunch.storage.base import Storage

router = APIRouter()


@router.get("")
def projects_list(storage: Storage = Depends(get_storage)):
    return project_service.list_active_projects(storage)


@router.post("/create")
def projects_create(payload: ProjectCreateRequest, storage: Storage = Depends(get_storage)):
    return project_service.create_project(storage, payload)


@router.get("/{project_id}")
def projects_get(project_id: str, storage: Storage = Depends(get_storage)):
    return project_service.get_project_or_raise(storage, project_id)


@router.post("/{project_id}/participate")
def projects_participate(
    project_id: str,
    payload: ParticipateRequest,
    storage: Storage = Depends(get_storage),
):
    return project_service.participate(
        storage,
        project_id=project_id,
        wallet_address=payload.wallet_address,
        star_points=payload.star_points,
        tx_hash=payload.tx_hash,
    )


@router.get("/{project_id}/participations")
def projects_participations(project_id: str, storage: Storage = Depends(get_storage)):
    return project_service.list_project_participations(storage, project_id)
