from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


def build_engine(database_url: str) -> Engine:
    if database_url == "sqlite://" or database_url.endswith(":memory:"):
        # In-memory SQLite lives on one connection; share it across threads.
        return create_engine(
            database_url,
            future=True,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    return create_engine(
        database_url,
        pool_pre_ping=True,
        future=True,
        connect_args={"check_same_thread": False}
        if database_url.startswith("sqlite")
        else {},
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, class_=Session, autoflush=False, autocommit=False, expire_on_commit=False)
