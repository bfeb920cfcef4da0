import uuid

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from starlaunch.core.exceptions import ConflictError, NotFoundError
from starlaunch.db.base import Base
from starlaunch.db.models import Participation, Project, User
from starlaunch.db.session import build_session_factory
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


class SqlStorage(Storage):
    """Relational backend; every call runs in its own short-lived session."""

    name = "sql"

    def __init__(self, engine: Engine, clock: Clock | None = None):
        super().__init__(clock)
        self.engine = engine
        self._session_factory: sessionmaker = build_session_factory(engine)

    def init_schema(self) -> None:
        Base.metadata.create_all(bind=self.engine)

    def _session(self) -> Session:
        return self._session_factory()

    # Users
    def get_user(self, user_id: str) -> UserRecord | None:
        with self._session() as db:
            row = db.get(User, user_id)
            return UserRecord.model_validate(row) if row else None

    def get_all_users(self) -> list[UserRecord]:
        with self._session() as db:
            return [UserRecord.model_validate(row) for row in db.query(User).all()]

    def get_user_by_wallet(self, wallet_address: str) -> UserRecord | None:
        with self._session() as db:
            row = db.query(User).filter(User.wallet_address == wallet_address).first()
            return UserRecord.model_validate(row) if row else None

    def get_user_by_referral_code(self, referral_code: str) -> UserRecord | None:
        with self._session() as db:
            row = db.query(User).filter(User.referral_code == referral_code).first()
            return UserRecord.model_validate(row) if row else None

    def create_user(self, data: UserCreate) -> UserRecord:
        row = User(
            id=str(uuid.uuid4()),
            wallet_address=data.wallet_address,
            star_points=data.star_points or 0,
            referral_code=data.referral_code,
            referred_by=data.referred_by or None,
            created_at=self.clock(),
        )
        with self._session() as db:
            db.add(row)
            try:
                db.commit()
            except IntegrityError as exc:
                db.rollback()
                raise ConflictError(DUPLICATE_USER_MESSAGE) from exc
            db.refresh(row)
            return UserRecord.model_validate(row)

    def update_user_points(self, user_id: str, points: float) -> UserRecord:
        with self._session() as db:
            row = db.get(User, user_id)
            if not row:
                raise NotFoundError("User not found")
            row.star_points = points
            db.commit()
            db.refresh(row)
            return UserRecord.model_validate(row)

    def adjust_user_points(self, user_id: str, delta: float) -> UserRecord:
        with self._session() as db:
            result = db.execute(
                update(User)
                .where(User.id == user_id)
                .values(star_points=User.star_points + delta)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                db.rollback()
                raise NotFoundError("User not found")
            db.commit()
            return UserRecord.model_validate(db.get(User, user_id, populate_existing=True))

    def debit_user_points(self, user_id: str, amount: float) -> UserRecord | None:
        with self._session() as db:
            result = db.execute(
                update(User)
                .where(User.id == user_id, User.star_points >= amount)
                .values(star_points=User.star_points - amount)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                db.rollback()
                if db.get(User, user_id) is None:
                    raise NotFoundError("User not found")
                return None
            db.commit()
            return UserRecord.model_validate(db.get(User, user_id, populate_existing=True))

    # Projects
    def get_project(self, project_id: str) -> ProjectRecord | None:
        with self._session() as db:
            row = db.get(Project, project_id)
            return ProjectRecord.model_validate(row) if row else None

    def get_all_projects(self) -> list[ProjectRecord]:
        with self._session() as db:
            return [ProjectRecord.model_validate(row) for row in db.query(Project).all()]

    def get_active_projects(self) -> list[ProjectRecord]:
        now = self.clock()
        with self._session() as db:
            rows = db.query(Project).filter(Project.status == "active", Project.ends_at > now).all()
            return [ProjectRecord.model_validate(row) for row in rows]

    def get_projects_by_creator(self, creator_id: str) -> list[ProjectRecord]:
        with self._session() as db:
            rows = db.query(Project).filter(Project.creator_id == creator_id).all()
            return [ProjectRecord.model_validate(row) for row in rows]

    def create_project(self, data: ProjectCreate) -> ProjectRecord:
        project_id = str(uuid.uuid4())
        created_at = self.clock()
        fields = data.model_dump()
        fields["decimals"] = data.decimals or 7
        row = Project(
            **fields,
            id=project_id,
            contract_address=placeholder_contract_address(project_id),
            status="active",
            created_at=created_at,
            ends_at=compute_ends_at(created_at, data.participation_period_days),
        )
        with self._session() as db:
            db.add(row)
            db.commit()
            db.refresh(row)
            return ProjectRecord.model_validate(row)

    # Participations
    def get_participation(self, participation_id: str) -> ParticipationRecord | None:
        with self._session() as db:
            row = db.get(Participation, participation_id)
            return ParticipationRecord.model_validate(row) if row else None

    def get_participations_by_user(self, user_id: str) -> list[ParticipationRecord]:
        with self._session() as db:
            rows = db.query(Participation).filter(Participation.user_id == user_id).all()
            return [ParticipationRecord.model_validate(row) for row in rows]

    def get_participations_by_project(self, project_id: str) -> list[ParticipationRecord]:
        with self._session() as db:
            rows = db.query(Participation).filter(Participation.project_id == project_id).all()
            return [ParticipationRecord.model_validate(row) for row in rows]

    def create_participation(self, data: ParticipationCreate) -> ParticipationRecord:
        row = Participation(
            id=str(uuid.uuid4()),
            user_id=data.user_id,
            project_id=data.project_id,
            star_points_used=data.star_points_used,
            created_at=self.clock(),
        )
        with self._session() as db:
            db.add(row)
            db.commit()
            db.refresh(row)
            return ParticipationRecord.model_validate(row)

    # Referrals
    def get_referrals_by_user(self, user_id: str) -> list[UserRecord]:
        with self._session() as db:
            user = db.get(User, user_id)
            if not user:
                return []
            rows = db.query(User).filter(User.referred_by == user.referral_code).all()
            return [UserRecord.model_validate(row) for row in rows]
