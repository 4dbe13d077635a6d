from sqlalchemy import create_engine
from sqlalchemy.orm import DeclarativeBase, sessionmaker

from gridtable.config import settings


class Base(DeclarativeBase):
    pass


def get_engine():
    return create_engine(settings.database_url, pool_pre_ping=True)


SessionLocal = sessionmaker(bind=get_engine(), autoflush=False, autocommit=False)


def get_db():
    """Database session dependency for FastAPI.

    Yields a session and ensures it is closed after the request.

    Example:
        @app.get("/tables/{table_key}")
        def show(table_key: str, db: Session = Depends(get_db)):
            ...
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
