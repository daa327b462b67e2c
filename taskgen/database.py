from sqlmodel import Session, SQLModel, create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import NullPool
from fastapi import Request

# Import all models to ensure they are registered with SQLModel metadata
from .models import Task  # noqa: F401

def create_db_engine(database_url: str) -> Engine:
    if database_url.startswith("sqlite"):
        return create_engine(
            database_url,
            echo=False,
            connect_args={"check_same_thread": False},
        )

    # Neon/Postgres: disable pooling for serverless and enable pre-ping
    return create_engine(
        database_url,
        echo=False,
        pool_pre_ping=True,
        poolclass=NullPool,
    )

def create_session_factory(engine: Engine) -> sessionmaker:
    # Rows returned from a commit are serialized after the session closes.
    return sessionmaker(class_=Session, autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)

def get_db(request: Request):
    """Dependency to get database session."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()

def create_tables(engine: Engine):
    """Create all database tables."""
    SQLModel.metadata.create_all(bind=engine)
