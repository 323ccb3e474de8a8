from contextlib import contextmanager
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from assetverse.config.settings import settings

DATABASE_URL = settings.DATABASE_URL


def _connect_args(url: str) -> dict:
    # If you're using PostgreSQL on Render or similar, keep sslmode=require
    if url.startswith("postgresql"):
        return {"sslmode": "require"}
    if url.startswith("sqlite"):
        return {"check_same_thread": False}
    return {}


engine = create_engine(
    DATABASE_URL,
    connect_args=_connect_args(DATABASE_URL)
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

# ✅ This is required to be imported wherever DB session is needed
def get_db():
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def transaction(db: Session):
    """Run a block as one unit of work: commit on success, roll back on any error"""
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
