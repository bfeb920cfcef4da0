from abc import ABC, abstractmethod
from datetime import datetime, timedelta
from typing import Callable

from starlaunch.schemas.project import (
    ParticipationCreate,
    ParticipationRecord,
    ProjectCreate,
    ProjectRecord,
)
from starlaunch.schemas.user import UserCreate, UserRecord

Clock = Callable[[], datetime]

DUPLICATE_USER_MESSAGE = "User with this wallet address or referral code already exists"


def compute_ends_at(created_at: datetime, participation_period_days: int) -> datetime:
    return created_at + timedelta(days=participation_period_days)


def placeholder_contract_address(project_id: str) -> str:
    return f"STELLAR_CONTRACT_{project_id[:8].upper()}"


class Storage(ABC):
    """Repository over users, projects and participations.

    Lookups return ``None`` for absent rows instead of raising. Balance
    mutations that name an unknown user raise ``NotFoundError``.
    """

    name = "abstract"

    def __init__(self, clock: Clock | None = None):
        self.clock: Clock = clock or datetime.utcnow

    def init_schema(self) -> None:
        return None

    # Users
    @abstractmethod
    def get_user(self, user_id: str) -> UserRecord | None: ...

    @abstractmethod
    def get_all_users(self) -> list[UserRecord]: ...

    @abstractmethod
    def get_user_by_wallet(self, wallet_address: str) -> UserRecord | None: ...

    @abstractmethod
    def get_user_by_referral_code(self, referral_code: str) -> UserRecord | None: ...

    @abstractmethod
    def create_user(self, data: UserCreate) -> UserRecord: ...

    @abstractmethod
    def update_user_points(self, user_id: str, points: float) -> UserRecord:
        """Overwrite the balance."""

    @abstractmethod
    def adjust_user_points(self, user_id: str, delta: float) -> UserRecord:
        """Atomically add ``delta`` to the balance."""

    @abstractmethod
    def debit_user_points(self, user_id: str, amount: float) -> UserRecord | None:
        """Atomically subtract ``amount`` if the balance covers it, else return ``None``."""

    # Projects
    @abstractmethod
    def get_project(self, project_id: str) -> ProjectRecord | None: ...

    @abstractmethod
    def get_all_projects(self) -> list[ProjectRecord]: ...

    @abstractmethod
    def get_active_projects(self) -> list[ProjectRecord]: ...

    @abstractmethod
    def get_projects_by_creator(self, creator_id: str) -> list[ProjectRecord]: ...

    @abstractmethod
    def create_project(self, data: ProjectCreate) -> ProjectRecord: ...

    # Participations
    @abstractmethod
    def get_participation(self, participation_id: str) -> ParticipationRecord | None: ...

    @abstractmethod
    def get_participations_by_user(self, user_id: str) -> list[ParticipationRecord]: ...

    @abstractmethod
    def get_participations_by_project(self, project_id: str) -> list[ParticipationRecord]: ...

    @abstractmethod
    def create_participation(self, data: ParticipationCreate) -> ParticipationRecord: ...

    # Referrals
    @abstractmethod
    def get_referrals_by_user(self, user_id: str) -> list[UserRecord]: ...
