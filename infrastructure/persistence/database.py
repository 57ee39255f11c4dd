from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool

Base = declarative_base()


def _is_memory_sqlite(db_url: str) -> bool:
    return db_url in ("sqlite://", "sqlite:///:memory:") or "mode=memory" in db_url


def create_database_engine(db_url: str = "sqlite:///sbom_workbench.db"):
    """Create SQLAlchemy engine and make sure the tables exist"""
    if _is_memory_sqlite(db_url):
        # One shared connection, otherwise every session sees an empty database
        engine = create_engine(
            db_url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool
        )
    elif db_url.startswith("sqlite"):
        engine = create_engine(db_url, echo=False, connect_args={"check_same_thread": False})
    else:
        engine = create_engine(db_url, echo=False)

    # Table definitions must be imported before create_all
    from infrastructure.persistence import models  # noqa: F401

    Base.metadata.create_all(engine)
    return engine


def create_session_factory(engine):
    """Create database session factory"""
    return sessionmaker(bind=engine, expire_on_commit=False)
