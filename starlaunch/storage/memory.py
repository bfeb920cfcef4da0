import uuid
from threading import Lock
from typing import Callable

from starlaunch.core.exceptions import ConflictError, NotFoundError
from starlaunch.schemas.project import (
    ParticipationCreate,
    ParticipationRecord,
    ProjectCreate,
    ProjectRecord,
)
from starlaunch.schemas.user import UserCreate, UserRecord
from starlaunch.storage.base import (
    DUPLICATE_USER_MESSAGE,
    Clock,
    Storage,
    compute_ends_at,
    placeholder_contract_address,
)


class MemStorage(Storage):
    """Process-local backend. Every read and write holds ``_lock``; callers get copies."""

    name = "memory"

    def __init__(self, clock: Clock | None = None):
        super().__init__(clock)
        self._users: dict[str, UserRecord] = {}
        self._projects: dict[str, ProjectRecord] = {}
        self._participations: dict[str, ParticipationRecord] = {}
        self._lock = Lock()

    def _fetch(self, table: dict, key: str):
        with self._lock:
            row = table.get(key)
            return row.model_copy() if row else None

    def _select(self, table: dict, predicate: Callable | None = None) -> list:
        with self._lock:
            return [row.model_copy() for row in table.values() if predicate is None or predicate(row)]

    def _first(self, table: dict, predicate: Callable):
        rows = self._select(table, predicate)
        return rows[0] if rows else None

    # Users
    def get_user(self, user_id: str) -> UserRecord | None:
        return self._fetch(self._users, user_id)

    def get_all_users(self) -> list[UserRecord]:
        return self._select(self._users)

    def get_user_by_wallet(self, wallet_address: str) -> UserRecord | None:
        return self._first(self._users, lambda user: user.wallet_address == wallet_address)

    def get_user_by_referral_code(self, referral_code: str) -> UserRecord | None:
        return self._first(self._users, lambda user: user.referral_code == referral_code)

    def create_user(self, data: UserCreate) -> UserRecord:
        user = UserRecord(
            id=str(uuid.uuid4()),
            wallet_address=data.wallet_address,
            star_points=data.star_points or 0,
            referral_code=data.referral_code,
            referred_by=data.referred_by or None,
            created_at=self.clock(),
        )
        with self._lock:
            for existing in self._users.values():
                if existing.wallet_address == user.wallet_address or existing.referral_code == user.referral_code:
                    raise ConflictError(DUPLICATE_USER_MESSAGE)
            self._users[user.id] = user
            return user.model_copy()

    def update_user_points(self, user_id: str, points: float) -> UserRecord:
        with self._lock:
            user = self._require_user(user_id)
            user.star_points = points
            return user.model_copy()

    def adjust_user_points(self, user_id: str, delta: float) -> UserRecord:
        with self._lock:
            user = self._require_user(user_id)
            user.star_points += delta
            return user.model_copy()

    def debit_user_points(self, user_id: str, amount: float) -> UserRecord | None:
        with self._lock:
            user = self._require_user(user_id)
            if user.star_points < amount:
                return None
            user.star_points -= amount
            return user.model_copy()

    def _require_user(self, user_id: str) -> UserRecord:
        # Caller holds _lock.
        user = self._users.get(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

    # Projects
    def get_project(self, project_id: str) -> ProjectRecord | None:
        return self._fetch(self._projects, project_id)

    def get_all_projects(self) -> list[ProjectRecord]:
        return self._select(self._projects)

    def get_active_projects(self) -> list[ProjectRecord]:
        now = self.clock()
        return self._select(self._projects, lambda project: project.status == "active" and project.ends_at > now)

    def get_projects_by_creator(self, creator_id: str) -> list[ProjectRecord]:
        return self._select(self._projects, lambda project: project.creator_id == creator_id)

    def create_project(self, data: ProjectCreate) -> ProjectRecord:
        project_id = str(uuid.uuid4())
        created_at = self.clock()
        fields = data.model_dump()
        fields["decimals"] = data.decimals or 7
        project = ProjectRecord(
            **fields,
            id=project_id,
            contract_address=placeholder_contract_address(project_id),
            status="active",
            created_at=created_at,
            ends_at=compute_ends_at(created_at, data.participation_period_days),
        )
        with self._lock:
            self._projects[project_id] = project
            return project.model_copy()

    # Participations
    def get_participation(self, participation_id: str) -> ParticipationRecord | None:
        return self._fetch(self._participations, participation_id)

    def get_participations_by_user(self, user_id: str) -> list[ParticipationRecord]:
        return self._select(self._participations, lambda row: row.user_id == user_id)

    def get_participations_by_project(self, project_id: str) -> list[ParticipationRecord]:
        return self._select(self._participations, lambda row: row.project_id == project_id)

    def create_participation(self, data: ParticipationCreate) -> ParticipationRecord:
        participation = ParticipationRecord(
            **data.model_dump(),
            id=str(uuid.uuid4()),
            created_at=self.clock(),
        )
        with self._lock:
            self._participations[participation.id] = participation
            return participation.model_copy()

    # Referrals
    def get_referrals_by_user(self, user_id: str) -> list[UserRecord]:
        user = self.get_user(user_id)
        if not user:
            return []
        return self._select(self._users, lambda other: other.referred_by == user.referral_code)
