import logging
from datetime import datetime

from starlaunch.core.exceptions import NotFoundError, ValidationFailed
from starlaunch.schemas.project import (
    ParticipateResponse,
    ParticipationCreate,
    ParticipationRecord,
    ProjectCreateRequest,
    ProjectRecord,
)
from starlaunch.services.user_service import UNREGISTERED_WALLET_MESSAGE, get_user_by_wallet_or_raise
from starlaunch.storage.base import Storage

logger = logging.getLogger(__name__)


def is_project_open(project: ProjectRecord, now: datetime | None = None) -> bool:
    now = now or datetime.utcnow()
    return project.status == "active" and project.ends_at > now


def create_project(storage: Storage, payload: ProjectCreateRequest) -> ProjectRecord:
    creator = get_user_by_wallet_or_raise(storage, payload.wallet_address, UNREGISTERED_WALLET_MESSAGE)
    project = storage.create_project(payload.to_project_create(creator_id=creator.id))
    logger.info(
        "Created project %s (%s) by user %s ends_at=%s tx=%s",
        project.id,
        project.symbol,
        creator.id,
        project.ends_at.isoformat(),
        payload.tx_hash,
    )
    return project


def list_active_projects(storage: Storage) -> list[ProjectRecord]:
    return sorted(storage.get_active_projects(), key=lambda project: project.created_at, reverse=True)


def get_project_or_raise(storage: Storage, project_id: str) -> ProjectRecord:
    project = storage.get_project(project_id)
    if not project:
        raise NotFoundError("Project not found")
    return project


def list_project_participations(storage: Storage, project_id: str) -> list[ParticipationRecord]:
    get_project_or_raise(storage, project_id)
    return storage.get_participations_by_project(project_id)


def participate(
    storage: Storage,
    project_id: str,
    wallet_address: str,
    star_points: float,
    tx_hash: str | None = None,
) -> ParticipateResponse:
    """Spend points on a project: half is burned, half goes to the creator.

    All checks run before the first balance mutation. The debit and the
    creator credit are separate writes, so a failure between them is not
    rolled back.
    """
    project = get_project_or_raise(storage, project_id)
    if not is_project_open(project, storage.clock()):
        raise ValidationFailed("Project is not active or has ended")

    user = get_user_by_wallet_or_raise(storage, wallet_address, UNREGISTERED_WALLET_MESSAGE)

    creator = storage.get_user(project.creator_id)
    if not creator:
        raise NotFoundError("Project creator not found")

    if user.id == project.creator_id:
        raise ValidationFailed("You cannot participate in your own project")

    if user.star_points < star_points:
        raise ValidationFailed("Insufficient STAR points balance")

    debited = storage.debit_user_points(user.id, star_points)
    if debited is None:
        # Balance moved underneath us between the read and the debit.
        raise ValidationFailed("Insufficient STAR points balance")

    burned = star_points / 2
    to_creator = star_points - burned
    storage.adjust_user_points(creator.id, to_creator)

    participation = storage.create_participation(
        ParticipationCreate(
            user_id=user.id,
            project_id=project.id,
            star_points_used=star_points,
        )
    )
    logger.info(
        "User %s spent %s STAR on project %s burned=%s to_creator=%s tx=%s",
        user.id,
        star_points,
        project.id,
        burned,
        to_creator,
        tx_hash,
    )
    return ParticipateResponse(
        participation=participation,
        burned=burned,
        to_creator=to_creator,
        new_balance=debited.star_points,
    )
