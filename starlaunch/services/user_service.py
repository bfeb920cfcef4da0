from starlaunch.core.exceptions import NotFoundError
from starlaunch.schemas.project import ProjectRecord, UserParticipation
from starlaunch.schemas.user import UserRecord
from starlaunch.storage.base import Storage

UNREGISTERED_WALLET_MESSAGE = "User not found. Please connect your wallet first."


def get_user_or_raise(storage: Storage, user_id: str) -> UserRecord:
    user = storage.get_user(user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def get_user_by_wallet_or_raise(storage: Storage, wallet_address: str, message: str = "User not found") -> UserRecord:
    user = storage.get_user_by_wallet(wallet_address)
    if not user:
        raise NotFoundError(message)
    return user


def list_referrals(storage: Storage, user_id: str) -> list[UserRecord]:
    get_user_or_raise(storage, user_id)
    return storage.get_referrals_by_user(user_id)


def list_user_projects(storage: Storage, user_id: str) -> list[ProjectRecord]:
    get_user_or_raise(storage, user_id)
    return storage.get_projects_by_creator(user_id)


def list_user_participations(storage: Storage, user_id: str) -> list[UserParticipation]:
    get_user_or_raise(storage, user_id)
    return [
        UserParticipation(participation=row, project=storage.get_project(row.project_id))
        for row in storage.get_participations_by_user(user_id)
    ]
